"""
Command registry for LtQuiz.
Accumulates commands one at a time and finalizes them into the table
the dispatcher works from.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType

from ltquiz.commands.base import Routine, into_builder
from ltquiz.errors import BuilderConsumedError

logger = logging.getLogger(__name__)


def array_push(items, item):
    """
    Grow a fixed-size tuple by exactly one element.

    The existing elements are carried over as the same objects, in order,
    and the new one is placed last. Nothing is copied.

    Args:
        items (tuple): The current elements
        item: The element to append

    Returns:
        tuple: A tuple of length ``len(items) + 1``
    """
    grown = (*items, item)
    if len(grown) != len(items) + 1:
        raise RuntimeError(f"pushing onto {len(items)} elements gave {len(grown)}")
    return grown


@dataclass(frozen=True)
class CommandTable:
    """Finalized commands: descriptors for the grammar, routines by phrase."""

    descriptors: tuple
    index: MappingProxyType

    @property
    def phrases(self):
        return tuple(self.index)

    def __len__(self):
        return len(self.descriptors)


class CommandBuilder:
    """
    Builder holding the shared state and two parallel, exactly-sized
    sequences of command descriptors and their routines.

    Every operation consumes the builder it is called on and returns a
    new one, so a builder of size N can never be observed as anything else.
    """

    def __init__(self, state, commands=(), handlers=(), size=0):
        if not len(commands) == len(handlers) == size:
            raise ValueError(
                f"builder of size {size} holds {len(commands)} commands and {len(handlers)} handlers"
            )
        self.state = state
        self.size = size
        self._commands = commands
        self._handlers = handlers
        self._consumed = False

    @classmethod
    def with_state(cls, state):
        """Create an empty builder around the shared state."""
        return cls(state)

    def __len__(self):
        return self.size

    @property
    def commands(self):
        self._ensure_alive()
        return self._commands

    def command(self, command, *, args=(), properties=()):
        """
        Append one command.

        Args:
            command: A Builder, or a bare function ``(state, args, props)``
            args (iterable of (hint, Type)): Positional arguments to declare
            properties (iterable of Property): Properties to declare

        Returns:
            CommandBuilder: A builder exactly one command larger
        """
        self._ensure_alive()

        builder = into_builder(command)
        for hint, tag in args:
            builder = builder.arg(hint, tag)
        if properties:
            builder = builder.properties(properties)

        routine = Routine(builder.phrase, builder.handler, self.state)
        commands, handlers = self._take()

        logger.debug("Registered command '%s' (%d)", builder.phrase, self.size)
        grown = CommandBuilder(
            self.state,
            commands=array_push(commands, builder.command),
            handlers=array_push(handlers, (builder.phrase, routine)),
            size=self.size + 1,
        )
        if len(grown) != self.size + 1:
            raise RuntimeError(f"builder grew from {self.size} to {len(grown)} commands")
        return grown

    def arg(self, hint, tag):
        """Declare a positional argument on the most recently added command."""
        return self._extend_last(lambda descriptor: descriptor.with_subject(hint, tag))

    def properties(self, properties):
        """Declare properties on the most recently added command."""
        properties = tuple(properties)
        return self._extend_last(lambda descriptor: descriptor.with_properties(properties))

    def build(self):
        """
        Finalize the builder into a CommandTable.

        Routines are indexed by phrase in registration order; when two
        commands share a phrase the later one wins. The descriptor
        sequence keeps every command.

        Returns:
            CommandTable: The immutable command table
        """
        commands, handlers = self._take()

        index = {}
        for phrase, routine in handlers:
            if phrase in index:
                logger.debug("Phrase '%s' registered more than once", phrase)
            index[phrase] = routine

        logger.debug("Built command table with %d commands", len(commands))
        return CommandTable(descriptors=commands, index=MappingProxyType(index))

    def _extend_last(self, extend):
        self._ensure_alive()
        if not self.size:
            raise IndexError("No command has been added yet")

        descriptor = extend(self._commands[-1])
        commands, handlers = self._take()
        return CommandBuilder(
            self.state,
            commands=array_push(commands[:-1], descriptor),
            handlers=handlers,
            size=self.size,
        )

    def _take(self):
        self._ensure_alive()
        self._consumed = True

        commands, handlers = self._commands, self._handlers
        self._commands = self._handlers = ()
        return commands, handlers

    def _ensure_alive(self):
        if self._consumed:
            raise BuilderConsumedError("This command builder has already been consumed")

    def __repr__(self):
        state = "consumed" if self._consumed else f"{self.size} commands"
        return f"CommandBuilder({state})"
