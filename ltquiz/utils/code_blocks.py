"""Markdown code block utilities for LtQuiz."""

import re

# Fenced blocks opened with ```rust (optionally followed by attributes like ,ignore)
RUST_FENCE_PATTERN = re.compile(
    r"^(?P<fence>`{3,})[ \t]*rust\b[^\n]*\n(?P<code>.*?)^(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


def find_rust_code_blocks(text):
    """
    Find the bodies of all fenced Rust code blocks in a Markdown text.

    Args:
        text (str): Markdown source

    Returns:
        list: Code of each block, in order of appearance
    """
    return [match.group("code") for match in RUST_FENCE_PATTERN.finditer(text)]
