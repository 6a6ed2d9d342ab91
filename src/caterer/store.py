import json
from pathlib import Path
import sqlite3
import threading

from .errors import StoreUnavailable, WorkNotFound
from .logger import log


CREDIT_COLUMNS = """
    credits.person_id, credits.work_id, credits.category, credits.job, persons.name
"""


class CatalogStore:
    """Read-only access to the catalog database.

    Each thread gets its own connection, so one store can be handed to a pool
    of hydration workers.
    """

    def __init__(self, db_path):
        self.db_path = db_path
        self._local = threading.local()
        self._connections = []
        self._lock = threading.Lock()

    def _connect(self):
        try:
            conn = sqlite3.connect(
                Path(self.db_path).resolve().as_uri() + "?mode=ro",
                uri=True,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            raise StoreUnavailable(f"{self.db_path}: {e}") from e
        with self._lock:
            self._connections.append(conn)
        log.debug("store_connection_opened", path=self.db_path)
        return conn

    @property
    def connection(self):
        conn = getattr(self._local, "connection", None)
        if conn is None:
            conn = self._connect()
            self._local.connection = conn
        return conn

    def close(self):
        with self._lock:
            connections, self._connections = self._connections, []
        for conn in connections:
            conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def execute(self, query, params=()):
        try:
            return self.connection.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StoreUnavailable(f"{self.db_path}: {e}") from e

    # ---- Lookups ----
    def fetch_work(self, work_id):
        rows = self.execute(
            """
            SELECT id, title, start_year, title_type, genres, rating
            FROM works WHERE id = ?
            """,
            (work_id,),
        )
        if not rows:
            raise WorkNotFound(work_id)
        return rows[0]

    def fetch_sub_work_ids(self, work_id):
        rows = self.execute(
            "SELECT id FROM works WHERE parent_id = ? ORDER BY id", (work_id,)
        )
        return [row[0] for row in rows]

    def fetch_credits(self, work_id):
        return self.execute(
            f"""
            SELECT {CREDIT_COLUMNS}
            FROM credits
            JOIN persons ON credits.person_id = persons.id
            WHERE credits.work_id = ?
            ORDER BY credits.id
            """,
            (work_id,),
        )

    def fetch_credits_in(self, work_ids):
        """Credits for every work in `work_ids`, in a single query."""
        if not work_ids:
            return []
        return self.execute(
            f"""
            SELECT {CREDIT_COLUMNS}
            FROM credits
            JOIN persons ON credits.person_id = persons.id
            WHERE credits.work_id IN (SELECT value FROM json_each(?))
            ORDER BY credits.id
            """,
            (json.dumps(list(work_ids)),),
        )

    def fetch_work_ids_for_persons(self, person_ids):
        if not person_ids:
            return []
        rows = self.execute(
            """
            SELECT DISTINCT credits.work_id
            FROM credits
            WHERE credits.person_id IN (SELECT value FROM json_each(?))
            """,
            (json.dumps(sorted(person_ids)),),
        )
        return [row[0] for row in rows]

    def resolve_owners(self, work_ids):
        """Map each work id to its top-level work: its parent, or itself."""
        if not work_ids:
            return {}
        rows = self.execute(
            """
            SELECT id, parent_id
            FROM works
            WHERE id IN (SELECT value FROM json_each(?))
            """,
            (json.dumps(sorted(work_ids)),),
        )
        return {
            work_id: work_id if parent_id is None else parent_id
            for work_id, parent_id in rows
        }
