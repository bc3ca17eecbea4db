"""Command line interface for fit archiver."""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .core.organizer import FitArchiver
from .core.template import ArchiveTemplate
from .exceptions import ConfigurationError, FitArchiverError
from .models.config import DEFAULT_FILE_TEMPLATE, ArchiveConfig, load_config

console = Console()
error_console = Console(stderr=True)

TEMPLATE_EPILOG = f"""Format template tags: '/' separates path components. All strftime()
directives are expanded with the creation time of the activity. In
addition the following FIT file specific tags are supported:

\b
{ArchiveTemplate.help_table()}

The shell may try to replace tags itself, so pass the template as a
quoted string.
"""

# options that may also come from a config file, cli name -> config key
CONFIG_OPTIONS = {
    'directory': 'archive_directory',
    'file_template': 'file_template',
    'move': 'move',
    'dry_run': 'dry_run',
    'strict': 'strict',
}


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


def build_config(ctx: click.Context, config_path: Optional[Path]) -> ArchiveConfig:
    """Combine the config file with options given on the command line."""
    base = ArchiveConfig()
    if config_path:
        try:
            base = load_config(config_path)
        except ConfigurationError as e:
            raise click.BadParameter(str(e), ctx=ctx, param_hint="'--config'")

    overrides = {}
    for option, key in CONFIG_OPTIONS.items():
        source = ctx.get_parameter_source(option)
        if config_path is None or source is ParameterSource.COMMANDLINE:
            overrides[key] = ctx.params[option]

    try:
        return base.merged(overrides)
    except ConfigurationError as e:
        raise click.UsageError(str(e), ctx=ctx)


@click.command(
    context_settings={'help_option_names': ['-h', '--help']},
    epilog=TEMPLATE_EPILOG,
)
@click.version_option(__version__, prog_name="fit-archiver")
@click.argument('files', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    '-d', '--directory',
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    metavar='DIRECTORY',
    help='Base directory where the archive is created.'
)
@click.option(
    '-f', '--file-template',
    default=DEFAULT_FILE_TEMPLATE,
    show_default=True,
    metavar='TEMPLATE',
    help='Format string defining the path and name of the archive file in the archive directory.'
)
@click.option(
    '-m', '--move',
    is_flag=True,
    help='Move files to archive instead of copying them.'
)
@click.option(
    '-n', '--dry-run',
    is_flag=True,
    help='Do not copy or move the files, just show what will happen.'
)
@click.option(
    '-c', '--config',
    'config_path',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='JSON configuration file. Options given on the command line take precedence.'
)
@click.option(
    '--strict',
    is_flag=True,
    help='Exit with a non-zero status if any file could not be archived.'
)
@click.option(
    '-v', '--verbose',
    is_flag=True,
    help='Verbose output'
)
@click.pass_context
def cli(
    ctx: click.Context,
    files: Tuple[Path, ...],
    directory: Path,
    file_template: str,
    move: bool,
    dry_run: bool,
    config_path: Optional[Path],
    strict: bool,
    verbose: bool
):
    """Copy or move FIT FILES into an archive named after their content."""
    setup_logging(verbose)
    config = build_config(ctx, config_path)

    archiver = FitArchiver(config, console=console, error_console=error_console)
    try:
        summary = archiver.process_files(files)
    except FitArchiverError as e:
        error_console.print(f"ERROR: {e}", markup=False, highlight=False, soft_wrap=True)
        if config.strict:
            sys.exit(1)
        return

    console.print(summary.summary_line(), markup=False, highlight=False, soft_wrap=True)
    if config.strict and summary.errors:
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
