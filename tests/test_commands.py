"""Tests for the question commands."""

import pytest

from ltquiz.commands.base import Routine
from ltquiz.commands.questions import (
    import_from, questions, questions_about, questions_list, tag_filters
)
from ltquiz.commands.settings import config
from ltquiz.config import Config, Theme
from ltquiz.errors import DispatchError, QuizError
from ltquiz.models.question import Question
from ltquiz.state import State


class TestTagFilters:
    def test_defaults(self):
        assert tag_filters({}) == ([], [])

    def test_values(self):
        assert tag_filters({"has_tags": ["a"], "no_tags": ["b"]}) == (["a"], ["b"])


class TestQuestionsList:
    """Test the questions.list command."""

    def test_empty_list(self, state, capsys):
        questions_list(state, [], {})

        assert capsys.readouterr().out == ""

    def test_question_list(self, world, capsys):
        questions_list(world, [], {})

        assert capsys.readouterr().out == (
            "1. Memory safety in Rust\n"
            "Answer:\n"
            "Unsafe\n"
            "Distractors:\n"
            "Safe\n"
        )

    def test_description_is_truncated(self, state, capsys):
        state.db.add_question(Question("x" * 100, "A"))

        questions_list(state, [], {})

        first_line = capsys.readouterr().out.splitlines()[0]
        assert first_line == "1. " + "x" * 60

    def test_tag_filter(self, state, sample_questions, capsys):
        state.db.add_questions(sample_questions)

        questions_list(state, [], {"has_tags": ["borrowing"]})

        out = capsys.readouterr().out
        assert "What does `&mut` mean?" in out
        assert "Rc" not in out


class TestQuestionsAbout:
    """Test the questions.about table."""

    def test_empty_table(self, state, capsys):
        questions_about(state, [], {})

        out = capsys.readouterr().out
        for header in ("ID", "Description", "Answer", "Distractors"):
            assert header in out
        assert out.startswith("+")

    def test_question_table(self, world, capsys):
        questions_about(world, [], {})

        out = capsys.readouterr().out
        row = [line for line in out.splitlines() if "Memory safety in Rust" in line]
        assert len(row) == 1
        assert "Unsafe" in row[0]
        assert "Safe" in row[0]


class TestQuestionsCached:
    """Test the cached questions command."""

    def test_prints_questions(self, world, capsys):
        questions(world, [], {})

        assert capsys.readouterr().out == "1. Memory safety in Rust -> Unsafe\n"

    def test_uses_state_cache(self, world, capsys):
        questions(world, [], {})
        world.db.add_question(Question("Added later", "A"))
        questions(world, [], {})

        out = capsys.readouterr().out
        assert "Added later" not in out


class TestImportFrom:
    """Test importing questions from TOML."""

    def test_import(self, state, questions_toml, capsys):
        import_from(state, [questions_toml], {})

        assert "Imported 2 question(s)" in capsys.readouterr().out
        stored = state.db.find_questions(["borrowing"])
        assert [q.description for q in stored] == ["Does this compile?"]

    def test_import_invalidates_cache(self, state, questions_toml):
        assert state.questions() == []

        import_from(state, [questions_toml], {})

        assert len(state.questions()) == 2

    def test_missing_file(self, state, temp_dir):
        missing = temp_dir / "missing.toml"

        with pytest.raises(QuizError, match="reading") as excinfo:
            import_from(state, [missing], {})

        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_missing_file_through_routine(self, state, temp_dir):
        missing = temp_dir / "missing.toml"

        with pytest.raises(DispatchError) as excinfo:
            Routine("import.from", import_from, state)([missing], {})

        message = excinfo.value.message
        assert message.startswith(f"reading `{missing}`")
        assert "Caused by:" in message

    def test_invalid_file_stores_nothing(self, state, temp_dir):
        path = temp_dir / "bad.toml"
        path.write_text('[[questions]]\ndescription = "Q"\n', encoding="utf-8")

        with pytest.raises(QuizError, match="importing"):
            import_from(state, [path], {})

        assert state.db.find_questions() == []


class TestConfigCommand:
    """Test the config command."""

    def test_default_theme(self, state, capsys):
        config(state, [], {})

        assert capsys.readouterr().out == "[default] Theme: github-dark\n"

    def test_theme_from_file(self, db, capsys):
        state = State(Config(theme=Theme("monokai", kind="file"), db_path=":memory:"), db)

        config(state, [], {})

        assert capsys.readouterr().out == "[file] Theme: monokai\n"
