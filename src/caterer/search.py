"""
Two-hop search: from the root works' creative personnel to every other work
those people are credited on, ranked by shared-personnel affinity.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import re
import time
from typing import List

from tqdm import tqdm

from .affinity import Affinity, score_affinity
from .errors import CatererError, MalformedIdentifier, WorkNotFound
from .logger import log
from .schema import WORK_ID_PREFIX
from .works import Work, hydrate

WORK_ID_RE = re.compile(rf"(?:{WORK_ID_PREFIX})?(\d+)")


@dataclass
class SearchResult:
    roots: List[Work]
    affinities: List[Affinity] = field(default_factory=list)
    candidate_count: int = 0
    skipped: List[int] = field(default_factory=list)


def parse_work_id(raw: str) -> int:
    match = WORK_ID_RE.fullmatch(raw.strip())
    if match is None:
        raise MalformedIdentifier(raw)
    return int(match.group(1))


def _elapsed_ms(start):
    return round((time.monotonic() - start) * 1000)


def stylistic_personnel(root_works):
    personnel = set()
    for work in root_works:
        personnel |= work.stylistic_persons()
    return personnel


def find_candidate_ids(store, root_works):
    """Top-level works sharing a stylistic person with any root, minus the roots."""
    personnel = stylistic_personnel(root_works)
    log.info("stylistic_personnel_found", count=len(personnel))

    linked_ids = set(store.fetch_work_ids_for_persons(personnel))
    owners = store.resolve_owners(linked_ids)
    for missing in sorted(linked_ids - owners.keys()):
        log.warning("linked_work_missing", work_id=missing)

    root_ids = {work.id for work in root_works}
    return set(owners.values()) - root_ids


def hydrate_candidates(store, candidate_ids, workers):
    """Hydrate every candidate over a bounded thread pool.

    Returns (works, skipped_ids). Results are ordered by work id, so
    completion order never leaks into the outcome.
    """
    works = []
    skipped = []
    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix="hydrate"
    ) as executor:
        futures = {
            executor.submit(hydrate, store, work_id): work_id
            for work_id in sorted(candidate_ids)
        }
        for future in tqdm(
            as_completed(futures),
            total=len(futures),
            desc="Hydrating candidates",
            mininterval=0,
            miniters=max(1, len(futures) // 100),
        ):
            try:
                works.append(future.result())
            except WorkNotFound as e:
                log.warning("candidate_skipped", work_id=futures[future], error=str(e))
                skipped.append(futures[future])
            except CatererError as e:
                log.error("candidate_failed", work_id=futures[future], error=str(e))
                executor.shutdown(wait=False, cancel_futures=True)
                raise

    works.sort(key=lambda w: w.id)
    skipped.sort()
    return works, skipped


def rank(affinities, limit):
    return sorted(affinities, key=lambda a: (-a.score, a.work.id))[:limit]


def search(store, identifiers, workers=4, limit=100) -> SearchResult:
    """Run the full search for the given root identifiers.

    Any identifier problem or missing root aborts before candidates are
    touched.
    """
    root_ids = [parse_work_id(raw) for raw in identifiers]

    log.info("hydrating_root_works", work_ids=root_ids)
    start = time.monotonic()
    roots = []
    for work_id in root_ids:
        work_start = time.monotonic()
        work = hydrate(store, work_id)
        log.info(
            "root_work_hydrated",
            work_id=work.id,
            title=work.title,
            start_year=work.start_year,
            elapsed_ms=_elapsed_ms(work_start),
        )
        roots.append(work)

    candidate_ids = find_candidate_ids(store, roots)
    log.info(
        "candidate_works_found",
        count=len(candidate_ids),
        elapsed_ms=_elapsed_ms(start),
    )

    start = time.monotonic()
    candidates, skipped = hydrate_candidates(store, candidate_ids, workers)
    log.info(
        "candidate_works_hydrated",
        count=len(candidates),
        skipped=len(skipped),
        elapsed_ms=_elapsed_ms(start),
    )

    ignored = set()
    for work in roots + candidates:
        ignored |= work.ignored_jobs()
    log.info("ignoring_non_stylistic_jobs", jobs=sorted(ignored))

    start = time.monotonic()
    affinities = [score_affinity(roots, candidate) for candidate in candidates]
    ranked = rank(affinities, limit)
    log.info("candidate_works_scored", count=len(affinities), elapsed_ms=_elapsed_ms(start))

    return SearchResult(
        roots=roots,
        affinities=ranked,
        candidate_count=len(candidates),
        skipped=skipped,
    )
