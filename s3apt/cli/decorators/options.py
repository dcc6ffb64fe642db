# s3apt/cli/decorators/options.py
"""Shared options and error handling for repository commands"""

import sys
from functools import wraps
from pathlib import Path
from typing import Callable

import click

from ..utils.output import print_error
from ...api.exceptions import S3AptError


def repository_options(func: Callable) -> Callable:
    """Add the --config, --codename, --component and --arch overrides"""
    options = [
        click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
                     default=None, help='Configuration file'),
        click.option('--codename', '-n', default=None,
                     help='Distribution codename (default from configuration)'),
        click.option('--component', '-m', default=None,
                     help='Repository component (default from configuration)'),
        click.option('--arch', '-a', 'architecture', default=None,
                     help='Restrict to one architecture'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def handle_errors(func: Callable) -> Callable:
    """Print repository errors as a panel and exit with status 1"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except S3AptError as e:
            print_error(e)
            sys.exit(1)

    return wrapper
