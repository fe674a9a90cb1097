"""
Export command for LtQuiz.
Writes questions as a Markdown quiz and renders their Rust code blocks
to images next to it.
"""

import logging
from pathlib import Path

from pygments.formatters.img import FontNotFound

from ltquiz.commands.base import take_arg
from ltquiz.commands.questions import tag_filters
from ltquiz.errors import QuizError
from ltquiz.utils.code_blocks import find_rust_code_blocks
from ltquiz.utils.render import CodeImageRenderer

logger = logging.getLogger(__name__)

QUIZ_TITLE = "# Rust Quiz"


def export(state, args, props):
    """Export matching questions to a Markdown file."""
    path = Path(take_arg(args, 0, "path"))
    has_tags, no_tags = tag_filters(props)

    renderer = CodeImageRenderer(state.config.theme.name)
    questions = state.db.find_questions(has_tags, no_tags)

    try:
        with open(path, "w", encoding="utf-8") as writer:
            writer.write(QUIZ_TITLE)

            for question in questions:
                # render failures surface as QuizError, not OSError
                render_code_blocks(renderer, path, question)
                write_question(writer, question)
    except OSError as e:
        raise QuizError(f"writing `{path}`") from e

    logger.info("Exported %d questions to %s", len(questions), path)


def render_code_blocks(renderer, path, question):
    """Render each Rust block of a question next to the quiz file."""
    for index, code in enumerate(find_rust_code_blocks(question.description)):
        image_path = path.with_name(f"{path.stem}-{question.id}-{index}.png")
        try:
            renderer.render(code, image_path)
        except (OSError, FontNotFound) as e:
            raise QuizError(f"rendering code block {index} of question {question.id}") from e


def write_question(writer, question):
    """
    Write one question section of the quiz.

    Args:
        writer: Text file-like object
        question (Question): Question to write
    """
    distractors = "\n".join(f"* {distractor}" for distractor in question.distractors)

    writer.write(
        f"\n\n## {question.id}\n\n"
        f"{question.description}\n\n"
        f"* {question.answer} :heavy_check_mark:\n"
        f"{distractors}"
    )
