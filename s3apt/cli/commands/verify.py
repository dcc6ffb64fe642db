"""Verify command implementation"""

import sys

import click

from ..decorators import repository_options, handle_errors
from ..utils.output import format_verify_result
from ...utils.async_utils import run_async


@click.command()
@click.option('--fix', is_flag=True, help='Drop records whose package file is missing')
@repository_options
@click.pass_context
@handle_errors
def verify(ctx, fix, config_path, codename, component, architecture):
    """Check that every indexed package file exists in the store"""
    config = ctx.obj.load_config(config_path)

    async def _run():
        async with ctx.obj.session(config) as service:
            return await service.verify(
                fix=fix,
                component=component,
                codename=codename,
                architecture=architecture,
                progress=ctx.obj.progress,
            )

    result = run_async(_run())
    format_verify_result(result)
    if not result.is_valid and not result.fixed:
        sys.exit(1)
