import click

from . import roles
from .affinity import BAR_WIDTH


def _styled_jobs(jobs):
    return ", ".join(click.style(job, fg=roles.color(job)) for job in jobs)


def _styled_side(credit, sub_work_count):
    jobs = click.style("(", fg="cyan") + _styled_jobs(credit.jobs) + click.style(")", fg="cyan")
    if credit.episode_count > 0:
        return f"{credit.episode_count}/{sub_work_count} {jobs}"
    return jobs


def styled_bar(affinity_credit):
    left = affinity_credit.root_fill
    right = affinity_credit.candidate_fill
    return "{}{} / {}{}".format(
        click.style("─" * (BAR_WIDTH - left), fg="red", dim=True),
        click.style("▓" * left, fg=roles.color(affinity_credit.root_credit.best_job)),
        click.style("▓" * right, fg=roles.color(affinity_credit.candidate_credit.best_job)),
        click.style("─" * (BAR_WIDTH - right), fg="red", dim=True),
    )


def styled_description(affinity_credit):
    title = click.style(affinity_credit.root_title, bold=True, underline=True)
    root = _styled_side(affinity_credit.root_credit, affinity_credit.root_sub_work_count)
    candidate = _styled_side(
        affinity_credit.candidate_credit, affinity_credit.candidate_sub_work_count
    )
    return f"[{title}] {affinity_credit.name}: {root} → {candidate}"


def render_affinity(affinity):
    work = affinity.work
    lines = [
        f"### {click.style(work.title, bold=True)} ({work.start_year})",
        f"Rating: {work.rating if work.rating is not None else 'unknown'}",
        f"{work.work_type}: {','.join(work.genres)}",
    ]
    for credit in affinity.credits:
        lines.append(f"{styled_bar(credit)} {styled_description(credit)}")
    return "\n".join(lines)


def render_report(affinities):
    """Yield one text block per ranked work."""
    for affinity in affinities:
        yield render_affinity(affinity)
