"""
Main CLI entry point for LtQuiz.
"""

import argparse
import logging
import sys
from pathlib import Path

from colorama import just_fix_windows_console

from ltquiz import __version__
from ltquiz.commands.export import export
from ltquiz.commands.questions import (
    TAG_FILTERS, import_from, questions, questions_about, questions_list
)
from ltquiz.commands.settings import config
from ltquiz.config import load_config
from ltquiz.database.manager import DatabaseManager
from ltquiz.dispatcher import Dispatcher, report_error
from ltquiz.errors import ConfigError
from ltquiz.grammar import Type
from ltquiz.registry import CommandBuilder
from ltquiz.state import State

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_commands(state):
    """
    Register every command against the shared state.

    Args:
        state (State): Shared application state

    Returns:
        CommandTable: The finalized command table
    """
    return (
        CommandBuilder.with_state(state)
        .command(import_from, args=[("path", Type.PATH)])
        .command(questions_list, properties=TAG_FILTERS)
        .command(questions_about, properties=TAG_FILTERS)
        .command(questions, properties=TAG_FILTERS)
        .command(export, args=[("path", Type.PATH)], properties=TAG_FILTERS)
        .command(config)
        .build()
    )


def user_path(value):
    """Expand a leading ~ in a path given on the command line."""
    return Path(value).expanduser()


def global_parser():
    """Options accepted before the command."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        '--version',
        action='version',
        version=f"LtQuiz CLI v{__version__}"
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="Show debug logging"
    )
    parser.add_argument(
        '--db',
        type=user_path,
        help="Path of the question database (overrides config)"
    )
    parser.add_argument(
        '--config',
        dest='config_path',
        type=user_path,
        help="Path of the config file (default: ~/.ltquiz/config.toml)"
    )
    return parser


def setup_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def main(argv=None):
    """Main CLI entry point."""
    just_fix_windows_console()

    argv = sys.argv[1:] if argv is None else list(argv)
    parents = global_parser()
    options, _ = parents.parse_known_args(argv)
    setup_logging(options.verbose)

    try:
        settings = load_config(options.config_path)
    except ConfigError as e:
        report_error(str(e))
        return 1

    logger.debug("Running with arguments %s", argv)
    db = DatabaseManager(options.db or settings.db_path)
    try:
        state = State(settings, db)
        dispatcher = Dispatcher(
            build_commands(state),
            prog="ltquiz",
            description="LtQuiz - a quiz question bank manager",
            parents=[parents],
        )
        return dispatcher.run(argv)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
