# s3apt/cli/main.py
"""Main CLI entry point for s3apt"""

import sys
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import click
from rich.logging import RichHandler

from ..constants import APP_NAME, LOG_FORMAT
from ..models.config import RepoConfig
from ..services import ConfigService, PublishService
from ..storage import StorageFactory
from .utils.output import console

# Import all commands
from .commands import (
    upload,
    delete,
    list_cmd,
    verify,
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiofiles").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)


class Context:
    """CLI context object.

    The configuration is only loaded when a command asks for it, so
    ``--help`` works without a configuration file.
    """

    def __init__(self):
        self.config_path: Optional[Path] = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False
        self._config: Optional[RepoConfig] = None

    def load_config(self, config_path: Optional[Path] = None) -> RepoConfig:
        """Load and validate the repository configuration

        Args:
            config_path: Command-level override of the group --config option
        """
        if self._config is None:
            service = ConfigService(config_path or self.config_path)
            self._config = service.load_config()
            self._config.validate()
        return self._config

    @asynccontextmanager
    async def session(self, config: RepoConfig) -> AsyncIterator[PublishService]:
        """Open the configured store and yield a publish service on it"""
        storage = StorageFactory.create_from_config(config.storage)
        async with storage:
            yield PublishService(storage, config)

    def progress(self, key: str) -> None:
        """Print a key about to be written"""
        if not self.quiet:
            console.print(f"  [dim]->[/dim] {key}")


@click.group(name=APP_NAME)
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='Configuration file (default: $S3APT_CONFIG or .s3apt.yaml)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, config_path, verbose, debug, quiet):
    """s3apt - Publish Debian packages to an APT repository in object storage

    Keeps the Packages indexes and the signed Release of a repository
    stored in S3 (or a local directory) consistent with the packages
    uploaded to it.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.config_path = config_path
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.quiet = quiet


# Register commands
cli.add_command(upload.upload)
cli.add_command(delete.delete)
cli.add_command(list_cmd.list_packages)
cli.add_command(verify.verify)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
