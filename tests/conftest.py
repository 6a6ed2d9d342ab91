# tests/conftest.py
import sqlite3

import pytest

from caterer.loading import (
    BASICS_HEADER,
    EPISODE_HEADER,
    NAMES_HEADER,
    PRINCIPALS_HEADER,
    RATINGS_HEADER,
)
from caterer.schema import INDEXES_SQL, SCHEMA_SQL
from caterer.store import CatalogStore


def write_catalog(path, works=(), persons=(), credits=()):
    """
    works:   (id, title, title_type, start_year, genres, rating, parent_id)
    persons: (id, name)
    credits: (person_id, work_id, category, job)
    """
    conn = sqlite3.connect(path)
    conn.executescript(SCHEMA_SQL)
    with conn:
        # parents first so the foreign key holds
        for work in sorted(works, key=lambda w: w[6] is not None):
            conn.execute(
                "INSERT INTO works (id, title, title_type, start_year, genres, rating, parent_id)"
                " VALUES (?, ?, ?, ?, ?, ?, ?)",
                work,
            )
        conn.executemany("INSERT INTO persons (id, name) VALUES (?, ?)", persons)
        conn.executemany(
            "INSERT INTO credits (person_id, work_id, category, job) VALUES (?, ?, ?, ?)",
            credits,
        )
    conn.executescript(INDEXES_SQL)
    conn.close()
    return path


@pytest.fixture()
def make_store(tmp_path):
    stores = []

    def _make(directory=None, **catalog):
        target = tmp_path
        if directory is not None:
            target = tmp_path / directory
            target.mkdir(exist_ok=True)
        path = write_catalog(str(target / f"catalog{len(stores)}.db"), **catalog)
        store = CatalogStore(path)
        stores.append(store)
        return store

    yield _make
    for store in stores:
        store.close()


def _episodes(parent_id, first_id, count):
    return [
        (first_id + i, f"Episode {i + 1}", "tvEpisode", "2010", "\\N", None, parent_id)
        for i in range(count)
    ]


@pytest.fixture()
def series_store(make_store):
    """A ten-episode series (100) with a mix of direct and episode credits."""
    works = [(100, "The Series", "tvSeries", "2010", "Drama,Mystery", "8.1", None)]
    works += _episodes(100, 101, 10)
    persons = [
        (1, "Dana Director"),
        (2, "Cole Composer"),
        (3, "Wren Writer"),
        (4, "Andy Actor"),
        (5, "Pat Producer"),
        (6, "Hal Hyphenate"),
    ]
    credits = [
        (1, 100, "director", "\\N"),
        (4, 100, "actor", "\\N"),
        (5, 100, "\\N", "executive producer"),
        (6, 101, "director", "\\N"),
        (6, 101, "writer", "created by"),
    ]
    credits += [(2, ep, "composer", "\\N") for ep in range(101, 106)]
    credits += [(3, ep, "writer", "\\N") for ep in (101, 102)]
    return make_store(works=works, persons=persons, credits=credits)


@pytest.fixture()
def search_store(make_store):
    """
    Roots: film 1 (director Xavier) and film 2 (composer Yoko).
    Film 3 shares both, series 20 has Xavier on one of four episodes,
    film 4 shares nobody.
    """
    works = [
        (1, "Root A", "movie", "2001", "Drama", "7.5", None),
        (2, "Root B", "movie", "2003", "Thriller", "6.9", None),
        (3, "Candidate C", "movie", "2005", "Drama,Crime", "7.7", None),
        (4, "Disjoint D", "movie", "2007", "Comedy", None, None),
        (20, "Series E", "tvSeries", "2012", "Drama", "8.0", None),
    ]
    works += _episodes(20, 21, 4)
    persons = [
        (10, "Xavier"),
        (11, "Yoko"),
        (12, "Walter"),
        (13, "Zelda"),
    ]
    credits = [
        (10, 1, "director", "\\N"),
        (11, 2, "composer", "\\N"),
        (12, 1, "actor", "\\N"),
        (10, 3, "director", "\\N"),
        (11, 3, "composer", "\\N"),
        (13, 4, "director", "\\N"),
        (10, 21, "director", "\\N"),
    ]
    return make_store(works=works, persons=persons, credits=credits)


def _write(path, header, rows):
    lines = [header] + ["\t".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def write_dumps(data_dir):
    _write(
        data_dir / "title.basics.tsv",
        BASICS_HEADER,
        [
            ("tt0000001", "tvSeries", "Show", "Show", "0", "2008", "2013", "45", "Crime,Drama"),
            ("tt0000002", "tvEpisode", "Pilot", "Pilot", "0", "2008", "\\N", "58", "Crime"),
            ("tt0000003", "tvEpisode", "Second", "Second", "0", "2008", "\\N", "48", "Crime"),
            ("tt0000004", "movie", "Film", "Film", "0", "2019", "\\N", "122", "Drama"),
        ],
    )
    _write(
        data_dir / "title.episode.tsv",
        EPISODE_HEADER,
        [
            ("tt0000002", "tt0000001", "1", "1"),
            ("tt0000003", "tt0000001", "1", "2"),
            ("tt0000009", "tt0000001", "1", "3"),
        ],
    )
    _write(
        data_dir / "title.ratings.tsv",
        RATINGS_HEADER,
        [("tt0000001", "9.5", "2000000"), ("tt0000009", "1.0", "5")],
    )
    _write(
        data_dir / "name.basics.tsv",
        NAMES_HEADER,
        [
            ("nm0000010", "Vince", "1967", "\\N", "writer,producer", "tt0000001"),
            ("nm0000011", "Dave", "1962", "\\N", "composer", "tt0000001"),
        ],
    )
    _write(
        data_dir / "title.principals.tsv",
        PRINCIPALS_HEADER,
        [
            ("tt0000001", "1", "nm0000010", "writer", "created by", "\\N"),
            ("tt0000002", "2", "nm0000011", "composer", "\\N", "\\N"),
            ("tt0000003", "2", "nm0000011", "composer", "\\N", "\\N"),
            ("tt0000004", "1", "nm0000099", "director", "\\N", "\\N"),
        ],
    )



@pytest.fixture()
def dump_dir(tmp_path):
    """A directory of small catalog dump files: a two-episode series and a film."""
    write_dumps(tmp_path)
    return tmp_path
