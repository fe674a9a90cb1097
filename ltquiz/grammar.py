"""
Command grammar vocabulary for LtQuiz.
Defines the type tags and the value descriptions a command is made of.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType


_TRUE_WORDS = ("true", "yes", "1", "on")
_FALSE_WORDS = ("false", "no", "0", "off")


class Type(Enum):
    """Type tags understood by the dispatcher."""

    STRING = "string"
    PATH = "path"
    BOOL = "bool"
    NUMBER = "number"
    LIST = "list"

    def parse(self, token):
        """
        Convert one textual token into a value of this type.

        Args:
            token (str): Raw token from the command line

        Returns:
            The typed value

        Raises:
            ValueError: If the token cannot be converted
        """
        if self is Type.STRING:
            return token
        if self is Type.PATH:
            return Path(token)
        if self is Type.NUMBER:
            return float(token)
        if self is Type.BOOL:
            word = token.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            raise ValueError(f"'{token}' is not a boolean value")

        # LIST
        return [item.strip() for item in token.split(",") if item.strip()]


@dataclass(frozen=True)
class ValueDescription:
    """One positional argument or property slot of a command."""

    hint: str
    kind: Type
    optional: bool = False


@dataclass(frozen=True)
class Property:
    """An optional named property declared by the integrator."""

    name: str
    hint: str
    tag: Type

    def __post_init__(self):
        if not self.name:
            raise ValueError("Property name cannot be empty")
        if not isinstance(self.tag, Type):
            raise ValueError(f"Unknown type tag: {self.tag!r}")

    def describe(self):
        return ValueDescription(hint=self.hint, kind=self.tag, optional=True)


@dataclass(frozen=True)
class CommandDescriptor:
    """
    Static metadata of one command.

    Descriptors are immutable: declaring an argument or property returns
    a new descriptor and leaves the original untouched.
    """

    phrase: str
    subjects: tuple = ()
    properties: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    hint: str = ""

    def __post_init__(self):
        if not self.phrase:
            raise ValueError("Command phrase cannot be empty")

    def with_subject(self, hint, tag):
        """Return a copy of the descriptor with one more required argument."""
        if not isinstance(tag, Type):
            raise ValueError(f"Unknown type tag: {tag!r}")
        subject = ValueDescription(hint=hint, kind=tag, optional=False)
        return replace(self, subjects=self.subjects + (subject,))

    def with_properties(self, properties):
        """Return a copy of the descriptor with the given properties added."""
        merged = dict(self.properties)
        for prop in properties:
            merged[prop.name] = prop.describe()
        return replace(self, properties=MappingProxyType(merged))
