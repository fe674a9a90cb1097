"""
Command dispatching for LtQuiz.
Builds the argument grammar from a command table, converts tokens into
typed values and runs the matching routine.
"""

import argparse
import logging
import sys

from colorama import Fore, Style

from ltquiz.errors import DispatchError
from ltquiz.grammar import Type

logger = logging.getLogger(__name__)


def _converter(kind):
    """Wrap Type.parse so argparse names the type in its error messages."""
    def convert(token):
        return kind.parse(token)

    convert.__name__ = kind.value
    return convert


def _arg_dest(index):
    return f"arg_{index}"


def _prop_dest(name):
    return f"prop_{name}"


def setup_parser(subparsers, descriptor):
    """
    Set up the parser of one command from its descriptor.

    Args:
        subparsers: Subparsers object from the main parser
        descriptor (CommandDescriptor): The command to describe

    Returns:
        argparse.ArgumentParser: The command's parser
    """
    parser = subparsers.add_parser(
        descriptor.phrase,
        description=descriptor.hint or None,
        help=descriptor.hint or None,
    )

    for index, subject in enumerate(descriptor.subjects):
        parser.add_argument(
            _arg_dest(index),
            metavar=subject.hint.replace(" ", "_"),
            type=_converter(subject.kind),
            help=f"{subject.hint} ({subject.kind.value})",
        )

    for name, prop in descriptor.properties.items():
        flags = ["--" + name.replace("_", "-")]
        if "_" in name:
            flags.append("--" + name)

        options = {"dest": _prop_dest(name), "default": argparse.SUPPRESS, "help": prop.hint}
        if prop.kind is Type.BOOL:
            options["action"] = "store_true"
        elif prop.kind is Type.LIST:
            # Each token may itself be comma separated; flattened in _collect_props
            options.update(nargs="+", action="extend", metavar=name.upper())
        else:
            options.update(type=_converter(prop.kind), metavar=name.upper())

        parser.add_argument(*flags, **options)

    return parser


class Dispatcher:
    """
    Routes command lines to the routines of a finalized command table.

    When two commands share a phrase the last one registered is used,
    which matches the routine the table indexes under that phrase.
    """

    def __init__(self, table, prog="ltquiz", description=None, parents=()):
        self.table = table

        self.descriptors = {}
        for descriptor in table.descriptors:
            if descriptor.phrase in self.descriptors:
                logger.warning("Command '%s' is registered more than once; using the last one",
                               descriptor.phrase)
            self.descriptors[descriptor.phrase] = descriptor

        self.parser = argparse.ArgumentParser(
            prog=prog,
            description=description,
            parents=list(parents),
            epilog=f"Use '{prog} <command> --help' for more information about a command.",
        )
        subparsers = self.parser.add_subparsers(title="commands", dest="command", metavar="command")
        for descriptor in self.descriptors.values():
            setup_parser(subparsers, descriptor)

    def execute(self, phrase, args=(), props=None):
        """
        Run the routine registered under a phrase.

        Raises:
            DispatchError: If the phrase is unknown or the command fails
        """
        routine = self.table.index.get(phrase)
        if routine is None:
            raise DispatchError(f"Unknown command '{phrase}'")

        logger.debug("Dispatching '%s' args=%s props=%s", phrase, args, props)
        routine(list(args), dict(props or {}))

    def run(self, argv=None):
        """
        Parse a command line and run the selected command.

        Args:
            argv (list, optional): Arguments without the program name

        Returns:
            int: Exit code (0 for success, non-zero for errors)
        """
        namespace = self.parser.parse_args(argv)

        if namespace.command is None:
            self.parser.print_help()
            return 0

        descriptor = self.descriptors[namespace.command]
        args = [getattr(namespace, _arg_dest(index)) for index in range(len(descriptor.subjects))]
        props = self._collect_props(namespace, descriptor)

        try:
            self.execute(namespace.command, args, props)
        except DispatchError as e:
            report_error(e.message)
            return 1

        return 0

    @staticmethod
    def _collect_props(namespace, descriptor):
        props = {}
        for name, prop in descriptor.properties.items():
            if not hasattr(namespace, _prop_dest(name)):
                continue

            value = getattr(namespace, _prop_dest(name))
            if prop.kind is Type.LIST:
                value = [item for token in value for item in Type.LIST.parse(token)]
            props[name] = value
        return props


def report_error(message, stream=None):
    """Print an error message for the user."""
    stream = stream if stream is not None else sys.stderr
    print(f"{Fore.RED}Error:{Style.RESET_ALL} {message}", file=stream)
