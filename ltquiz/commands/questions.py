"""
Question commands for LtQuiz.
Handles importing questions and listing them from the command line.
"""

from pathlib import Path

from tabulate import tabulate

from ltquiz.commands.base import take_arg
from ltquiz.errors import QuizError
from ltquiz.grammar import Property, Type
from ltquiz.models.question import parse_questions

# Width of the description shown by questions.list
DESCRIPTION_PREVIEW = 60

TAG_FILTERS = (
    Property("has_tags", "only questions with one of these tags", Type.LIST),
    Property("no_tags", "skip questions with any of these tags", Type.LIST),
)


def tag_filters(props):
    """Read the tag filter properties, defaulting to no filtering."""
    return props.get("has_tags") or [], props.get("no_tags") or []


def import_from(state, args, props):
    """Import questions from a TOML file into the database."""
    path = Path(take_arg(args, 0, "path"))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise QuizError(f"reading `{path}`") from e

    try:
        questions = parse_questions(text)
    except QuizError as e:
        raise QuizError(f"importing `{path}`") from e

    ids = state.db.add_questions(questions)
    state.invalidate()
    print(f"Imported {len(ids)} question(s) from {path}")


def questions_list(state, args, props):
    """Print every matching question with its answer and distractors."""
    has_tags, no_tags = tag_filters(props)

    for question in state.db.find_questions(has_tags, no_tags):
        description = question.description[:DESCRIPTION_PREVIEW]
        distractors = "\n".join(question.distractors)
        print(f"{question.id}. {description}\nAnswer:\n{question.answer}\nDistractors:\n{distractors}")


def questions_about(state, args, props):
    """Print matching questions as a table."""
    has_tags, no_tags = tag_filters(props)

    table_data = []
    for question in state.db.find_questions(has_tags, no_tags):
        table_data.append([
            question.id,
            question.description,
            question.answer,
            "\n".join(question.distractors),
        ])

    headers = ["ID", "Description", "Answer", "Distractors"]
    print(tabulate(table_data, headers=headers, tablefmt="grid"))


def questions(state, args, props):
    # served from the state cache, unlike questions.list
    has_tags, no_tags = tag_filters(props)

    for question in state.questions(has_tags, no_tags):
        print(question)
