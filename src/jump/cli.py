"""
Command-line entry point for jump.

The first positional argument selects one command from a small fixed
vocabulary. It is parsed once into a :class:`Command` and dispatched to a
handler; handlers raise, and this module decides which failures end the
process with a non-zero status and which are only reported.
"""

import os
import sys
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

import click
import yaml

from .config.parser import ConfigParser, ConfigurationError
from .models.config import JumpConfig
from .models.database import VisitDatabase
from .storage import paths
from .storage.database_store import DatabaseStore, DatabaseError
from .storage.locking import exclusive_lock
from .tools.resolver import DirectoryResolver, InvalidPatternError
from .tools.shell_script import ShellKind, parse_shell, render_shell_script


logger = logging.getLogger(__name__)


class CommandKind(Enum):
    """Every operation the command line can request."""
    RESOLVE_PATH = "resolve_path"
    RECORD_VISIT = "record_visit"
    EMIT_SHELL_SCRIPT = "emit_shell_script"
    GET_CONFIG = "get_config"
    SET_CONFIG = "set_config"
    RESET_DATABASE = "reset_database"
    PRINT_DATABASE = "print_database"
    INVALID = "invalid"


# Commands that write the database or config; they run under the lock
MUTATING_COMMANDS = frozenset({
    CommandKind.RECORD_VISIT,
    CommandKind.SET_CONFIG,
    CommandKind.RESET_DATABASE,
})

_SIMPLE_COMMANDS = {
    'cd': CommandKind.RESOLVE_PATH,
    'chdir': CommandKind.RECORD_VISIT,
    'shell': CommandKind.EMIT_SHELL_SCRIPT,
    'reset': CommandKind.RESET_DATABASE,
    'print': CommandKind.PRINT_DATABASE,
}


@dataclass
class Command:
    """
    A parsed command line.

    Attributes:
        kind: Operation to perform
        name: Command word as typed, None if no command was given
        argument: First argument after the command word, if any
    """
    kind: CommandKind
    name: Optional[str] = None
    argument: Optional[str] = None


@dataclass
class JumpState:
    """Persisted state loaded for one invocation."""
    directory: Path
    config: JumpConfig
    database: VisitDatabase
    config_parser: ConfigParser
    store: DatabaseStore

    @classmethod
    def load(cls, directory: Path) -> 'JumpState':
        """
        Load config and database from a data directory, creating missing files.

        Raises:
            ConfigurationError: If the config file exists but is invalid
            DatabaseError: If the database cannot be read or decoded
        """
        config_parser = ConfigParser()
        config = config_parser.load_config(paths.config_path(directory))
        store = DatabaseStore(paths.database_path(directory))
        database = store.load()
        return cls(
            directory=directory,
            config=config,
            database=database,
            config_parser=config_parser,
            store=store
        )


def parse_command(args: Sequence[str]) -> Command:
    """
    Parse positional arguments into a Command.

    Args:
        args: Arguments following the program name and global options

    Returns:
        The parsed Command; unknown or missing command words give INVALID
    """
    if not args:
        return Command(kind=CommandKind.INVALID)

    name = args[0]
    argument = args[1] if len(args) > 1 else None

    if name == 'config':
        kind = CommandKind.GET_CONFIG if argument is None else CommandKind.SET_CONFIG
        return Command(kind=kind, name=name, argument=argument)

    kind = _SIMPLE_COMMANDS.get(name, CommandKind.INVALID)
    return Command(kind=kind, name=name, argument=argument)


def _resolve_path(command: Command, state: JumpState) -> int:
    query = command.argument
    if query is None:
        query = os.environ.get('OLDPWD', '')

    click.echo(DirectoryResolver(state.database).resolve(query))
    return 0


def _record_visit(command: Command, state: JumpState) -> int:
    try:
        cwd = os.getcwd()
    except OSError as e:
        _report_error(f"Cannot determine current directory: {e}")
        return 1

    # Undecodable names come back with surrogate escapes; msgpack cannot store them
    try:
        cwd.encode('utf-8')
    except UnicodeEncodeError:
        _report_error(f"Cannot record directory with a non-UTF-8 name: {cwd!r}")
        return 1

    count = state.database.record_visit(cwd)
    state.store.save(state.database)
    logger.debug(f"Recorded visit {count} to {cwd}")
    return 0


def _emit_shell_script(command: Command, state: JumpState) -> int:
    shell = ShellKind.BASH
    if command.argument is not None:
        try:
            shell = parse_shell(command.argument)
        except ValueError as e:
            _report_error(str(e))
            return 1

    click.echo(render_shell_script(state.config.command, shell))
    return 0


def _get_config(command: Command, state: JumpState) -> int:
    click.echo(state.config_parser.dump_config(state.config))
    return 0


def _set_config(command: Command, state: JumpState) -> int:
    config = state.config_parser.set_value(state.config, command.argument)

    try:
        state.config_parser.save_config(config, paths.config_path(state.directory))
    except ConfigurationError as e:
        # The new value only lives in memory for this run
        click.echo(f"Failed to write config: {e}", err=True)
        return 0

    state.config = config
    return 0


def _reset_database(command: Command, state: JumpState) -> int:
    state.database.reset()
    state.store.save(state.database)
    return 0


def _print_database(command: Command, state: JumpState) -> int:
    click.echo(yaml.safe_dump(
        state.database.to_mapping(),
        default_flow_style=False,
        sort_keys=True,
        allow_unicode=True
    ).rstrip())
    return 0


_HANDLERS: Dict[CommandKind, Callable[[Command, JumpState], int]] = {
    CommandKind.RESOLVE_PATH: _resolve_path,
    CommandKind.RECORD_VISIT: _record_visit,
    CommandKind.EMIT_SHELL_SCRIPT: _emit_shell_script,
    CommandKind.GET_CONFIG: _get_config,
    CommandKind.SET_CONFIG: _set_config,
    CommandKind.RESET_DATABASE: _reset_database,
    CommandKind.PRINT_DATABASE: _print_database,
}


def _report_error(message: str) -> None:
    click.echo(f"Error: {message}", err=True)


def _dispatch(command: Command, directory: Path) -> int:
    state = JumpState.load(directory)
    return _HANDLERS[command.kind](command, state)


def run(command: Command, data_dir: Optional[Path] = None) -> int:
    """
    Execute a parsed command.

    Args:
        command: Command to execute
        data_dir: Data directory override, platform default if None

    Returns:
        Process exit status
    """
    if command.kind is CommandKind.INVALID:
        if command.name is None:
            _report_error("Missing command")
        else:
            _report_error(f"Invalid command: {command.name}")
        return 1

    try:
        directory = paths.data_dir(data_dir)
    except OSError as e:
        _report_error(f"Cannot create data directory: {e}")
        return 1

    try:
        if command.kind in MUTATING_COMMANDS:
            with exclusive_lock(paths.lock_path(directory)):
                return _dispatch(command, directory)
        return _dispatch(command, directory)
    except (ConfigurationError, DatabaseError, InvalidPatternError, OSError) as e:
        _report_error(str(e))
        return 1


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )


@click.command(context_settings={
    'ignore_unknown_options': True,
    'allow_interspersed_args': False,
    'help_option_names': ['-h', '--help'],
})
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path), default=None,
              help='Directory holding config.yaml and database.jdb (default: platform data dir).')
@click.option('-v', '--verbose', is_flag=True, help='Log debug output to stderr.')
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, data_dir: Optional[Path], verbose: bool, args: Sequence[str]) -> None:
    """Jump to frequently visited directories.

    \b
    Commands:
      cd [QUERY]         print the best directory for QUERY (default: $OLDPWD)
      chdir              record the current directory as visited
      shell [bash|zsh]   print the shell integration script
      config [KEY=VALUE] show or change the configuration
      reset              forget every recorded directory
      print              show the recorded directories
    """
    _configure_logging(verbose)
    ctx.exit(run(parse_command(args), data_dir=data_dir))
