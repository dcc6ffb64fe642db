"""List command implementation"""

import click

from ..decorators import repository_options, handle_errors
from ..utils.output import format_package_table
from ...utils.async_utils import run_async


@click.command(name='list')
@repository_options
@click.pass_context
@handle_errors
def list_packages(ctx, config_path, codename, component, architecture):
    """List the packages of a component"""
    config = ctx.obj.load_config(config_path)

    async def _run():
        async with ctx.obj.session(config) as service:
            return await service.list_packages(
                component=component,
                codename=codename,
                architecture=architecture,
            )

    format_package_table(run_async(_run()))
