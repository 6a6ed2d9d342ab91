"""
Build the catalog database from the tab-separated catalog dump files.
"""

import os
import sqlite3
import time

from tqdm import tqdm

from .errors import CatalogFormatError
from .logger import log
from .schema import INDEXES_SQL, PERSON_ID_PREFIX, SCHEMA_SQL, WORK_ID_PREFIX
from .stats import report_stats

BASICS_HEADER = "tconst\ttitleType\tprimaryTitle\toriginalTitle\tisAdult\tstartYear\tendYear\truntimeMinutes\tgenres"
EPISODE_HEADER = "tconst\tparentTconst\tseasonNumber\tepisodeNumber"
RATINGS_HEADER = "tconst\taverageRating\tnumVotes"
NAMES_HEADER = "nconst\tprimaryName\tbirthYear\tdeathYear\tprimaryProfession\tknownForTitles"
PRINCIPALS_HEADER = "tconst\tordering\tnconst\tcategory\tjob\tcharacters"


def parse_id(cell, prefix):
    return int(cell[len(prefix):] if cell.startswith(prefix) else cell)


def read_rows(path, header):
    """Yield (line number, cells) for every data line after checking the header.

    Lines with the wrong number of cells raise CatalogFormatError.
    """
    columns = header.count("\t") + 1
    with open(path, encoding="utf-8") as f:
        first = f.readline().rstrip("\n")
        if first != header:
            raise CatalogFormatError(path, first)
        for lineno, line in enumerate(f, start=2):
            line = line.rstrip("\n")
            cells = line.split("\t")
            if len(cells) != columns:
                raise CatalogFormatError(path, line, lineno)
            yield lineno, cells


class CatalogLoader:
    """Creates the catalog database from a directory of dump files."""

    def __init__(self, data_dir, db_path):
        self.data_dir = data_dir
        self.db_path = db_path

    def _path(self, filename):
        return os.path.join(self.data_dir, filename)

    def build(self):
        """Build the catalog database, replacing any existing one."""
        log.info("building_catalog", data_dir=self.data_dir, target=self.db_path)

        if os.path.exists(self.db_path):
            os.remove(self.db_path)

        conn = sqlite3.connect(self.db_path)
        try:
            self._create_schema(conn)
            work_ids = self._load_works(conn)
            self._load_episodes(conn, work_ids)
            self._load_ratings(conn, work_ids)
            person_ids = self._load_persons(conn)
            self._load_credits(conn, work_ids, person_ids)
            self._create_indexes(conn)

            log.info("catalog_complete", path=self.db_path)
            report_stats(conn, self.db_path)
        finally:
            conn.close()

    def _create_schema(self, conn):
        log.info("creating_schema")
        conn.executescript(SCHEMA_SQL)
        conn.commit()

    def _load(self, conn, filename, header, query, to_params):
        """Run `query` for every row `to_params` maps to parameters, in one transaction."""
        start = time.monotonic()
        path = self._path(filename)
        log.info("loading_file", path=path)

        count = 0
        with conn:
            for lineno, cells in tqdm(read_rows(path, header), desc=f"Loading {filename}"):
                try:
                    params = to_params(cells)
                except ValueError:
                    raise CatalogFormatError(path, "\t".join(cells), lineno) from None
                if params is None:
                    continue
                conn.execute(query, params)
                count += 1

        log.info(
            "file_loaded",
            path=path,
            rows=count,
            elapsed_s=round(time.monotonic() - start, 2),
        )

    def _load_works(self, conn):
        work_ids = set()

        def to_params(cells):
            work_id = parse_id(cells[0], WORK_ID_PREFIX)
            work_ids.add(work_id)
            # tconst, titleType, primaryTitle, _, _, startYear, _, _, genres
            return (work_id, cells[2], cells[1], cells[5], cells[8])

        self._load(
            conn,
            "title.basics.tsv",
            BASICS_HEADER,
            "INSERT INTO works (id, title, title_type, start_year, genres) VALUES (?, ?, ?, ?, ?)",
            to_params,
        )
        return work_ids

    def _load_episodes(self, conn, work_ids):
        def to_params(cells):
            episode_id = parse_id(cells[0], WORK_ID_PREFIX)
            parent_id = parse_id(cells[1], WORK_ID_PREFIX)
            if episode_id not in work_ids or parent_id not in work_ids:
                return None
            return (parent_id, episode_id)

        self._load(
            conn,
            "title.episode.tsv",
            EPISODE_HEADER,
            "UPDATE works SET parent_id = ? WHERE id = ?",
            to_params,
        )

    def _load_ratings(self, conn, work_ids):
        def to_params(cells):
            work_id = parse_id(cells[0], WORK_ID_PREFIX)
            if work_id not in work_ids:
                return None
            return (cells[1], work_id)

        self._load(
            conn,
            "title.ratings.tsv",
            RATINGS_HEADER,
            "UPDATE works SET rating = ? WHERE id = ?",
            to_params,
        )

    def _load_persons(self, conn):
        person_ids = set()

        def to_params(cells):
            person_id = parse_id(cells[0], PERSON_ID_PREFIX)
            person_ids.add(person_id)
            return (person_id, cells[1], cells[2])

        self._load(
            conn,
            "name.basics.tsv",
            NAMES_HEADER,
            "INSERT INTO persons (id, name, born) VALUES (?, ?, ?)",
            to_params,
        )
        return person_ids

    def _load_credits(self, conn, work_ids, person_ids):
        def to_params(cells):
            work_id = parse_id(cells[0], WORK_ID_PREFIX)
            person_id = parse_id(cells[2], PERSON_ID_PREFIX)
            if work_id not in work_ids or person_id not in person_ids:
                return None
            return (person_id, work_id, cells[3], cells[4])

        self._load(
            conn,
            "title.principals.tsv",
            PRINCIPALS_HEADER,
            "INSERT INTO credits (person_id, work_id, category, job) VALUES (?, ?, ?, ?)",
            to_params,
        )

    def _create_indexes(self, conn):
        log.info("creating_indexes")
        conn.executescript(INDEXES_SQL)
        conn.commit()
