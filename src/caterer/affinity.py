"""
Scoring of shared creative personnel between root works and a candidate.
"""

from dataclasses import dataclass, field
from typing import List

from .works import PersonCredit, Work

BAR_WIDTH = 10


@dataclass
class AffinityCredit:
    name: str
    root_title: str
    root_credit: PersonCredit
    root_sub_work_count: int
    candidate_credit: PersonCredit
    candidate_sub_work_count: int

    @property
    def root_fill(self) -> int:
        return bar_fill(self.root_credit.episode_count, self.root_sub_work_count)

    @property
    def candidate_fill(self) -> int:
        return bar_fill(
            self.candidate_credit.episode_count, self.candidate_sub_work_count
        )

    @property
    def bar(self) -> str:
        left, right = self.root_fill, self.candidate_fill
        return "{}{} / {}{}".format(
            "─" * (BAR_WIDTH - left),
            "▓" * left,
            "▓" * right,
            "─" * (BAR_WIDTH - right),
        )

    @property
    def description(self) -> str:
        root = describe_side(self.root_credit, self.root_sub_work_count)
        candidate = describe_side(
            self.candidate_credit, self.candidate_sub_work_count
        )
        return f"[{self.root_title}] {self.name}: {root} → {candidate}"


@dataclass
class Affinity:
    work: Work
    score: float = 0.0
    credits: List[AffinityCredit] = field(default_factory=list)

    @property
    def descriptions(self):
        return [(credit.description, credit.bar) for credit in self.credits]


def bar_fill(episode_count: int, sub_work_count: int) -> int:
    """Number of filled bar characters for a person's share of sub-works."""
    episode_count = episode_count or BAR_WIDTH
    sub_work_count = sub_work_count or BAR_WIDTH
    # ceiling division
    return min(BAR_WIDTH, -(-episode_count * BAR_WIDTH // sub_work_count))


def describe_side(credit: PersonCredit, sub_work_count: int) -> str:
    jobs = ", ".join(credit.jobs)
    if credit.episode_count > 0:
        return f"{credit.episode_count}/{sub_work_count} ({jobs})"
    return f"({jobs})"


def score_affinity(root_works, candidate: Work) -> Affinity:
    """Sum root-score times candidate-score over every shared person.

    Each root work contributes on its own, so a person shared with two roots
    counts twice.
    """
    affinity = Affinity(work=candidate)
    for root in root_works:
        for person_id, root_credit in root.credits.items():
            candidate_credit = candidate.credits.get(person_id)
            if candidate_credit is None:
                continue
            affinity.score += root_credit.score * candidate_credit.score
            affinity.credits.append(
                AffinityCredit(
                    name=root_credit.name,
                    root_title=root.title,
                    root_credit=root_credit,
                    root_sub_work_count=root.sub_work_count,
                    candidate_credit=candidate_credit,
                    candidate_sub_work_count=candidate.sub_work_count,
                )
            )

    affinity.credits.sort(
        key=lambda c: (c.name or "", c.root_title or "", c.root_credit.person_id)
    )
    return affinity
