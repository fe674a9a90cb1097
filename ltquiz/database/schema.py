"""
Database schema definition for LtQuiz.
Defines the SQLite tables and their structure.
"""

import sqlite3
from pathlib import Path

# Schema version
SCHEMA_VERSION = 1


def prepare_db_path(db_path):
    """Make sure the directory of an on-disk database exists."""
    if str(db_path) == ":memory:":
        return db_path

    db_path = Path(db_path)
    if not db_path.parent.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def initialize_db(conn):
    """
    Create the required tables on an open connection.

    Args:
        conn (sqlite3.Connection): Connection to migrate
    """
    cursor = conn.cursor()

    # Enable foreign keys
    cursor.execute("PRAGMA foreign_keys = ON")

    # Distractors are stored as a JSON array
    cursor.execute('''
    CREATE TABLE IF NOT EXISTS questions (
        id INTEGER PRIMARY KEY,
        description TEXT NOT NULL,
        answer TEXT NOT NULL,
        distractors TEXT NOT NULL DEFAULT '[]'
    )
    ''')

    cursor.execute('''
    CREATE TABLE IF NOT EXISTS tags (
        id INTEGER PRIMARY KEY,
        text TEXT UNIQUE NOT NULL
    )
    ''')

    cursor.execute('''
    CREATE TABLE IF NOT EXISTS question_tags (
        question_id INTEGER NOT NULL,
        tag_id INTEGER NOT NULL,
        PRIMARY KEY (question_id, tag_id),
        FOREIGN KEY (question_id) REFERENCES questions(id),
        FOREIGN KEY (tag_id) REFERENCES tags(id)
    )
    ''')

    # Create metadata table for schema version tracking
    cursor.execute('''
    CREATE TABLE IF NOT EXISTS metadata (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    ''')

    cursor.execute('''
    INSERT OR REPLACE INTO metadata (key, value)
    VALUES ('schema_version', ?)
    ''', (str(SCHEMA_VERSION),))

    conn.commit()


def get_schema_version(conn):
    """Return the schema version recorded in the database, or None."""
    try:
        row = conn.execute(
            "SELECT value FROM metadata WHERE key = 'schema_version'"
        ).fetchone()
    except sqlite3.OperationalError:
        return None
    return int(row[0]) if row else None
