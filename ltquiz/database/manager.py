"""
Database manager for LtQuiz.
Provides connection management and question/tag operations.
"""

import json
import logging
import sqlite3

from .schema import SCHEMA_VERSION, get_schema_version, initialize_db, prepare_db_path
from ..errors import StorageError
from ..models.question import Question

logger = logging.getLogger(__name__)


def placeholders(n):
    """Build a comma-separated list of ``n`` SQL parameter placeholders."""
    return ",".join("?" for _ in range(n))


class DatabaseManager:
    """
    Manager class for database operations.
    Handles connection, transactions, and question storage.
    """

    def __init__(self, db_path=":memory:"):
        """
        Initialize the database manager.

        Args:
            db_path (str or Path): Database file, or ":memory:" for a throwaway database
        """
        self.db_path = prepare_db_path(db_path)
        self.conn = None

    def connect(self):
        """Connect to the SQLite database, creating the schema if needed."""
        if self.conn is None:
            try:
                self.conn = sqlite3.connect(self.db_path)
                self.conn.row_factory = sqlite3.Row  # Enable row access by column name
                self.migrations()
            except StorageError:
                self.close()
                raise
            except sqlite3.Error as e:
                self.close()
                raise StorageError(f"Cannot open database '{self.db_path}'") from e
            logger.debug("Opened database %s", self.db_path)

        return self.conn

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def migrations(self):
        """Apply the schema, refusing databases written by a newer version."""
        conn = self.connect()
        version = get_schema_version(conn)
        if version is not None and version > SCHEMA_VERSION:
            raise StorageError(
                f"Database '{self.db_path}' has schema version {version}, "
                f"this version of LtQuiz supports up to {SCHEMA_VERSION}"
            )
        initialize_db(conn)

    def add_question(self, question):
        """
        Add a new question and its tags to the database.

        Args:
            question (Question): The question to store

        Returns:
            int: The id of the new question
        """
        conn = self.connect()
        try:
            with conn:
                return self._insert_question(conn.cursor(), question)
        except sqlite3.Error as e:
            raise StorageError("storing question") from e

    def add_questions(self, questions):
        """
        Add several questions in one transaction.

        Either every question is stored or none is.

        Args:
            questions (iterable of Question): Questions to store

        Returns:
            list: Ids of the new questions, in input order
        """
        conn = self.connect()
        try:
            with conn:
                cursor = conn.cursor()
                ids = [self._insert_question(cursor, question) for question in questions]
        except sqlite3.Error as e:
            raise StorageError("storing questions") from e

        logger.info("Stored %d questions", len(ids))
        return ids

    def find_questions(self, has_tags=None, no_tags=None):
        """
        Find questions filtered by tags.

        Args:
            has_tags (list, optional): Keep questions carrying at least one of these tags
            no_tags (list, optional): Drop questions carrying any of these tags

        Returns:
            list: Matching Question objects ordered by id
        """
        has_tags = list(has_tags or [])
        no_tags = list(no_tags or [])

        tagged_with = '''q.id {op} (
            SELECT qt.question_id FROM question_tags AS qt
            INNER JOIN tags AS t ON qt.tag_id = t.id
            WHERE t.text IN ({placeholders}))'''

        query = "SELECT q.id, q.description, q.answer, q.distractors FROM questions AS q"
        where_clauses = []
        params = []

        if has_tags:
            where_clauses.append(tagged_with.format(op="IN", placeholders=placeholders(len(has_tags))))
            params.extend(has_tags)

        if no_tags:
            where_clauses.append(tagged_with.format(op="NOT IN", placeholders=placeholders(len(no_tags))))
            params.extend(no_tags)

        if where_clauses:
            query += " WHERE " + " AND ".join(where_clauses)
        query += " ORDER BY q.id"

        conn = self.connect()
        try:
            rows = conn.execute(query, params).fetchall()
            tags = self._tags_by_question(conn)
        except sqlite3.Error as e:
            raise StorageError("querying questions") from e

        return [question_from_row(row, tags.get(row["id"], [])) for row in rows]

    def _insert_question(self, cursor, question):
        cursor.execute(
            "INSERT INTO questions (description, answer, distractors) VALUES (?, ?, ?)",
            (question.description, question.answer, json.dumps(question.distractors))
        )
        question_id = cursor.lastrowid

        for tag in question.tags:
            cursor.execute("INSERT OR IGNORE INTO tags (text) VALUES (?)", (tag,))
            tag_id = cursor.execute("SELECT id FROM tags WHERE text = ?", (tag,)).fetchone()[0]
            cursor.execute(
                "INSERT OR IGNORE INTO question_tags (question_id, tag_id) VALUES (?, ?)",
                (question_id, tag_id)
            )

        logger.debug("Inserted question %d with tags %s", question_id, question.tags)
        return question_id

    def _tags_by_question(self, conn):
        rows = conn.execute('''
        SELECT qt.question_id, t.text FROM question_tags AS qt
        INNER JOIN tags AS t ON qt.tag_id = t.id
        ORDER BY t.text
        ''').fetchall()

        tags = {}
        for question_id, text in rows:
            tags.setdefault(question_id, []).append(text)
        return tags


def question_from_row(row, tags=None):
    """Build a Question from a ``questions`` row."""
    return Question(
        id=row["id"],
        description=row["description"],
        answer=row["answer"],
        distractors=json.loads(row["distractors"]),
        tags=tags,
    )
