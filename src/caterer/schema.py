"""
Database schema definitions for the catalog database.
"""

SCHEMA_SQL = """
    PRAGMA foreign_keys = ON;

    CREATE TABLE IF NOT EXISTS works (
        id          INTEGER PRIMARY KEY,
        title       TEXT,
        title_type  TEXT,
        start_year  TEXT,
        genres      TEXT,
        rating      TEXT,
        parent_id   INTEGER,
        FOREIGN KEY (parent_id) REFERENCES works(id)
    );

    CREATE TABLE IF NOT EXISTS persons (
        id    INTEGER PRIMARY KEY,
        name  TEXT,
        born  TEXT
    );

    CREATE TABLE IF NOT EXISTS credits (
        id         INTEGER PRIMARY KEY AUTOINCREMENT,
        person_id  INTEGER NOT NULL,
        work_id    INTEGER NOT NULL,
        category   TEXT,
        job        TEXT,
        FOREIGN KEY (person_id) REFERENCES persons(id),
        FOREIGN KEY (work_id) REFERENCES works(id)
    );
"""

INDEXES_SQL = """
    CREATE INDEX IF NOT EXISTS idx_works_parent_id ON works(parent_id);
    CREATE INDEX IF NOT EXISTS idx_credits_work_id ON credits(work_id);
    CREATE INDEX IF NOT EXISTS idx_credits_person_id ON credits(person_id);
"""

# Marker the dump files use for a missing value
NULL_SENTINEL = "\\N"

WORK_ID_PREFIX = "tt"
PERSON_ID_PREFIX = "nm"
