"""
Code image rendering for LtQuiz.
Renders highlighted Rust code blocks to PNG images.
"""

import logging
from pathlib import Path

from pygments import highlight
from pygments.formatters import ImageFormatter
from pygments.lexers import RustLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..errors import QuizError

logger = logging.getLogger(__name__)


class CodeImageRenderer:
    """
    Renders code snippets with a fixed highlighting theme.

    The theme is checked up front; the image formatter, which needs a
    monospace font on the system, is only created on first use.
    """

    def __init__(self, theme):
        try:
            self.style = get_style_by_name(theme)
        except ClassNotFound as e:
            raise QuizError(f"Cannot load the theme: {theme}") from e

        self.theme = theme
        self._formatter = None
        self._lexer = RustLexer()

    @property
    def formatter(self):
        if self._formatter is None:
            self._formatter = ImageFormatter(
                style=self.style,
                image_format="png",
                line_numbers=False,
            )
        return self._formatter

    def render(self, code, path):
        """
        Render one code snippet to an image file.

        Args:
            code (str): Source code to render
            path (Path): Destination image file

        Returns:
            Path: The written file
        """
        path = Path(path)
        image = highlight(code, self._lexer, self.formatter)
        path.write_bytes(image)

        logger.debug("Rendered %d bytes of code to %s", len(code), path)
        return path
