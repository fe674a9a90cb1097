"""
Command adapter primitives for LtQuiz.
Turns strongly-typed command functions into uniform routines the
dispatcher can invoke, and derives the phrase a command is invoked by.
"""

import logging
import re

from ltquiz.errors import DispatchError, QuizError
from ltquiz.grammar import CommandDescriptor

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[:.]")


def derive_phrase(identifier):
    """
    Derive the dotted command phrase from a function identifier.

    Any qualifying prefix up to the last ``:`` or ``.`` is discarded and the
    remaining underscores become dots, so ``commands::questions_list`` and
    ``questions_list`` both give ``questions.list``.

    Args:
        identifier (str): Function name, optionally qualified

    Returns:
        str: The command phrase
    """
    name = _SEPARATORS.split(identifier)[-1]
    return ".".join(name.split("_"))


def format_report(exc):
    """
    Format an exception and its cause chain as one diagnostic string.

    Args:
        exc (BaseException): The failure raised by a command

    Returns:
        str: Message followed by an indexed ``Caused by:`` section
    """
    lines = [str(exc) or type(exc).__name__]

    causes = []
    seen = {id(exc)}
    cause = _cause_of(exc)
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        causes.append(str(cause) or type(cause).__name__)
        cause = _cause_of(cause)

    if causes:
        lines.append("")
        lines.append("Caused by:")
        for index, message in enumerate(causes):
            lines.append(f"    {index}: {message}")

    return "\n".join(lines)


def _cause_of(exc):
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


class Routine:
    """
    Uniform callable bound to the shared state.

    Calling a routine runs the wrapped command exactly once. Any failure
    is reported as a DispatchError carrying the formatted cause chain.
    """

    __slots__ = ("phrase", "handler", "state")

    def __init__(self, phrase, handler, state):
        self.phrase = phrase
        self.handler = handler
        self.state = state

    def __call__(self, args, props):
        try:
            self.handler(self.state, list(args), dict(props))
        except Exception as e:
            logger.debug("Command '%s' failed", self.phrase, exc_info=True)
            raise DispatchError(format_report(e)) from e

    def __copy__(self):
        raise TypeError("Routines are owned by a single command table")

    def __deepcopy__(self, memo):
        raise TypeError("Routines are owned by a single command table")

    def __repr__(self):
        return f"Routine({self.phrase!r})"


class Builder:
    """
    Pairs a command function with the descriptor it is registered under.

    The phrase comes from ``name`` when given, otherwise from the
    function's own qualified name. A given name keeps its dotted
    segments; only underscores are turned into dots.
    """

    def __init__(self, handler, name=None, command=None):
        if not callable(handler):
            raise TypeError(f"Command handler must be callable, got {handler!r}")

        self.handler = handler
        if command is None:
            if name is not None:
                phrase = name.replace("_", ".")
            else:
                phrase = derive_phrase(_identifier_of(handler))
            command = CommandDescriptor(phrase=phrase, hint=_summary_of(handler))
        self.command = command

    @property
    def phrase(self):
        return self.command.phrase

    def arg(self, hint, tag):
        """
        Declare a required positional argument.

        Args:
            hint (str): Human readable name of the argument
            tag (Type): Type of the argument

        Returns:
            Builder: A builder with the argument appended
        """
        return Builder(self.handler, command=self.command.with_subject(hint, tag))

    def properties(self, properties):
        """
        Declare optional named properties.

        Args:
            properties (iterable of Property): Properties to add

        Returns:
            Builder: A builder with the properties added
        """
        return Builder(self.handler, command=self.command.with_properties(properties))

    def __repr__(self):
        return f"Builder({self.phrase!r})"


def _summary_of(handler):
    doc = getattr(handler, "__doc__", None) or ""
    lines = doc.strip().splitlines()
    return lines[0].strip() if lines else ""


def take_arg(args, index, name):
    """Fetch a positional argument, failing with its name when absent."""
    try:
        return args[index]
    except IndexError:
        raise QuizError(f"missing argument `{name}`") from None


def _identifier_of(handler):
    # functools.partial and callable instances carry no __qualname__
    for attr in ("__qualname__", "__name__"):
        identifier = getattr(handler, attr, None)
        if identifier:
            return identifier
    return type(handler).__name__


def into_builder(command):
    """Accept either a Builder or a bare command function."""
    if isinstance(command, Builder):
        return command
    return Builder(command)
