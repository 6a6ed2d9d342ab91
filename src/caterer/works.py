"""
In-memory records of a work and everyone credited on it, built from the
catalog store in a fixed sequence of queries.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from . import roles
from .schema import NULL_SENTINEL


@dataclass
class PersonCredit:
    person_id: int
    name: str
    jobs: List[str] = field(default_factory=list)
    direct: bool = False
    episode_count: int = 0
    stylistic: bool = False
    score: float = 0.0

    def add_jobs(self, *jobs):
        for job in jobs:
            if job is None or job == NULL_SENTINEL or job in self.jobs:
                continue
            self.jobs.append(job)

    @property
    def best_job(self) -> str:
        return roles.best_job(self.jobs)


@dataclass
class Work:
    id: int
    title: str
    work_type: str
    start_year: str
    genres: List[str] = field(default_factory=list)
    rating: Optional[str] = None
    sub_works: List[int] = field(default_factory=list)
    credits: Dict[int, PersonCredit] = field(default_factory=dict)

    @property
    def sub_work_count(self) -> int:
        return len(self.sub_works)

    def stylistic_persons(self):
        return {pid for pid, credit in self.credits.items() if credit.stylistic}

    def ignored_jobs(self):
        return {
            job
            for credit in self.credits.values()
            for job in credit.jobs
            if not roles.is_stylistic(job)
        }

    def finalize(self):
        """Score every credit from its best job and share of sub-works."""
        for credit in self.credits.values():
            credit.score = float(roles.weight(credit.best_job))
            credit.stylistic = credit.score > roles.MINIMUM_WEIGHT

            if self.sub_works and credit.episode_count > 0:
                proportion = min(
                    1.0, 2.0 * credit.episode_count / self.sub_work_count
                )
                credit.score *= proportion


def _split_genres(genres):
    if not genres or genres == NULL_SENTINEL:
        return []
    return [genre for genre in genres.split(",") if genre]


def _jobs_of(category, job):
    return [j for j in (category, job) if j is not None and j != NULL_SENTINEL]


def _hydrate_base(store, work_id):
    work_id, title, start_year, work_type, genres, rating = store.fetch_work(work_id)
    return Work(
        id=work_id,
        title=title,
        work_type=work_type,
        start_year=start_year,
        genres=_split_genres(genres),
        rating=None if rating == NULL_SENTINEL else rating,
    )


def _hydrate_sub_works(store, work):
    work.sub_works = store.fetch_sub_work_ids(work.id)


def _hydrate_direct_credits(store, work):
    for person_id, _, category, job, name in store.fetch_credits(work.id):
        jobs = _jobs_of(category, job)
        if not jobs:
            continue
        credit = work.credits.get(person_id)
        if credit is None:
            credit = work.credits[person_id] = PersonCredit(person_id, name)
        credit.direct = True
        credit.add_jobs(*jobs)


def _hydrate_sub_work_credits(store, work):
    episodes = {}
    pending = {}
    for person_id, sub_work_id, category, job, name in store.fetch_credits_in(
        work.sub_works
    ):
        # Several edges on one episode still count as one episode
        episodes.setdefault(person_id, set()).add(sub_work_id)
        credit = work.credits.get(person_id) or pending.get(person_id)
        if credit is None:
            credit = pending[person_id] = PersonCredit(person_id, name)
        credit.add_jobs(category, job)

    for person_id, sub_work_ids in episodes.items():
        credit = work.credits.get(person_id)
        if credit is None:
            credit = pending[person_id]
            # edges carrying only the null marker never start a credit
            if not credit.jobs:
                continue
            work.credits[person_id] = credit
        credit.episode_count += len(sub_work_ids)


def hydrate(store, work_id) -> Work:
    """Build the full record for `work_id`.

    Raises WorkNotFound if the catalog has no such work.
    """
    work = _hydrate_base(store, work_id)
    _hydrate_sub_works(store, work)
    _hydrate_direct_credits(store, work)
    _hydrate_sub_work_credits(store, work)
    work.finalize()
    return work
