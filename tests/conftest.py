"""Pytest configuration and fixtures for LtQuiz tests."""

import tempfile
from pathlib import Path

import pytest

from ltquiz.config import Config, Theme
from ltquiz.database.manager import DatabaseManager
from ltquiz.models.question import Question
from ltquiz.state import State


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def db():
    """In-memory database with the schema applied."""
    manager = DatabaseManager(":memory:")
    manager.connect()
    yield manager
    manager.close()


@pytest.fixture
def app_config():
    return Config(theme=Theme("github-dark"), db_path=Path(":memory:"))


@pytest.fixture
def state(app_config, db):
    """Shared state over an empty database."""
    return State(app_config, db)


@pytest.fixture
def world(state):
    """Shared state holding a single untagged question."""
    state.db.add_question(Question("Memory safety in Rust", "Unsafe", ["Safe"]))
    return state


@pytest.fixture
def sample_questions():
    return [
        Question("What does `&mut` mean?", "Exclusive borrow", ["Shared borrow", "Move"],
                 tags=["borrowing"]),
        Question("Is `Rc` thread safe?", "No", ["Yes"], tags=["smart-pointers", "threads"]),
        Question("Does `Box<T>` allocate?", "Yes", ["No"], tags=["smart-pointers"]),
        Question("Untagged question", "Answer", []),
    ]


@pytest.fixture
def questions_toml(temp_dir):
    """Create a sample TOML questions file."""
    path = temp_dir / "questions.toml"
    path.write_text(
        '[[questions]]\n'
        'description = "Memory safety in Rust"\n'
        'answer = "Unsafe"\n'
        'distractors = ["Safe"]\n'
        'tags = ["memory"]\n'
        '\n'
        '[[questions]]\n'
        'description = "Does this compile?"\n'
        'answer = "No"\n'
        'distractors = ["Yes", "Only on nightly"]\n'
        'tags = ["borrowing", "memory"]\n',
        encoding="utf-8",
    )
    return path
