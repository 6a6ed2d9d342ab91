"""
Database statistics and reporting utilities.
"""

import os
from .logger import log


def collect_stats(conn):
    cursor = conn.cursor()

    return {
        "works": cursor.execute("SELECT COUNT(*) FROM works").fetchone()[0],
        "sub_works": cursor.execute(
            "SELECT COUNT(*) FROM works WHERE parent_id IS NOT NULL"
        ).fetchone()[0],
        "persons": cursor.execute("SELECT COUNT(*) FROM persons").fetchone()[0],
        "credits": cursor.execute("SELECT COUNT(*) FROM credits").fetchone()[0],
    }


def report_stats(conn, db_path):
    """Report statistics about the catalog database."""
    stats = collect_stats(conn)

    file_size_bytes = os.path.getsize(db_path)
    file_size_mb = file_size_bytes / (1024 * 1024)

    log.info("database_statistics", size_mb=round(file_size_mb, 2), **stats)
    return stats
