"""Tests for the SQLite storage layer."""

from types import SimpleNamespace

import pytest

from ltquiz.database.manager import DatabaseManager, placeholders
from ltquiz.database.schema import SCHEMA_VERSION, get_schema_version
from ltquiz.errors import StorageError
from ltquiz.models.question import Question


def descriptions(questions):
    return [question.description for question in questions]


class TestPlaceholders:
    """Test SQL placeholder generation."""

    @pytest.mark.parametrize("n, expected", [(0, ""), (1, "?"), (3, "?,?,?"), (5, "?,?,?,?,?")])
    def test_placeholders(self, n, expected):
        assert placeholders(n) == expected


class TestSchema:
    """Test schema creation."""

    def test_schema_version_recorded(self, db):
        assert get_schema_version(db.connect()) == SCHEMA_VERSION

    def test_migrations_are_idempotent(self, db):
        db.add_question(Question("Q", "A"))

        db.migrations()

        assert len(db.find_questions()) == 1

    def test_newer_schema_is_refused(self, temp_dir):
        path = temp_dir / "questions.db"
        manager = DatabaseManager(path)
        manager.connect().execute(
            "UPDATE metadata SET value = ? WHERE key = 'schema_version'", (str(SCHEMA_VERSION + 1),)
        )
        manager.conn.commit()
        manager.close()

        reopened = DatabaseManager(path)
        with pytest.raises(StorageError, match=f"schema version {SCHEMA_VERSION + 1}"):
            reopened.connect()

        assert reopened.conn is None

    def test_file_database_is_created(self, temp_dir):
        path = temp_dir / "nested" / "questions.db"
        manager = DatabaseManager(path)

        manager.add_question(Question("Q", "A"))
        manager.close()

        assert path.exists()
        reopened = DatabaseManager(path)
        assert descriptions(reopened.find_questions()) == ["Q"]
        reopened.close()


class TestAddQuestions:
    """Test storing questions."""

    def test_add_question_returns_id(self, db):
        first = db.add_question(Question("First", "A"))
        second = db.add_question(Question("Second", "B"))

        assert second == first + 1

    def test_round_trip_fields(self, db):
        db.add_question(Question("Q", "A", ["x", "y"], tags=["b", "a"]))

        (stored,) = db.find_questions()

        assert stored.id is not None
        assert stored.distractors == ["x", "y"]
        assert stored.tags == ["a", "b"]

    def test_add_questions_returns_ids_in_order(self, db, sample_questions):
        ids = db.add_questions(sample_questions)

        assert ids == sorted(ids)
        assert [q.id for q in db.find_questions()] == ids

    def test_add_questions_is_atomic(self, db):
        invalid = SimpleNamespace(description=None, answer="A", distractors=[], tags=[])

        with pytest.raises(StorageError):
            db.add_questions([Question("Valid", "A"), invalid])

        assert db.find_questions() == []

    def test_shared_tags_are_stored_once(self, db):
        db.add_questions([Question("Q1", "A", tags=["t"]), Question("Q2", "A", tags=["t"])])

        count = db.connect().execute("SELECT COUNT(*) FROM tags").fetchone()[0]
        assert count == 1


class TestFindQuestions:
    """Test tag filtering."""

    @pytest.fixture(autouse=True)
    def populate(self, db, sample_questions):
        db.add_questions(sample_questions)

    def test_no_filters_returns_everything(self, db):
        assert len(db.find_questions()) == 4
        assert "Untagged question" in descriptions(db.find_questions([], []))

    def test_has_tags(self, db):
        found = db.find_questions(has_tags=["smart-pointers"])

        assert descriptions(found) == ["Is `Rc` thread safe?", "Does `Box<T>` allocate?"]

    def test_has_tags_is_any_of(self, db):
        found = db.find_questions(has_tags=["borrowing", "threads"])

        assert descriptions(found) == ["What does `&mut` mean?", "Is `Rc` thread safe?"]

    def test_no_tags(self, db):
        found = db.find_questions(no_tags=["smart-pointers"])

        assert descriptions(found) == ["What does `&mut` mean?", "Untagged question"]

    def test_has_and_no_tags(self, db):
        found = db.find_questions(has_tags=["smart-pointers"], no_tags=["threads"])

        assert descriptions(found) == ["Does `Box<T>` allocate?"]

    def test_unknown_tag(self, db):
        assert db.find_questions(has_tags=["nope"]) == []
