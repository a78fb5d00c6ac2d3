"""Initial schema: persistent key-value store backing the location cache."""

import sqlite3

DDL = [
    """
    CREATE TABLE IF NOT EXISTS location_cache (
        cache_key TEXT PRIMARY KEY,
        value_json TEXT NOT NULL,
        stored_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
