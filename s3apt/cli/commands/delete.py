"""Delete command implementation"""

import click

from ..decorators import repository_options, handle_errors
from ..utils.output import format_publish_result
from ...utils.async_utils import run_async


@click.command()
@click.argument('name')
@click.option('--versions', '-V', multiple=True,
              help='Version to keep; may be repeated')
@repository_options
@click.option('--sign', 'sign_key', default=None,
              help='GPG key used to sign the Release')
@click.pass_context
@handle_errors
def delete(ctx, name, versions, config_path, codename, component, architecture, sign_key):
    """Remove a package from the indexes

    Every record of NAME is removed except those whose version is given
    with --versions. Package files in pool/ are not removed.

    Examples:
        # Remove every version of foo
        s3apt delete foo

        # Keep only 1.2.0 of foo
        s3apt delete foo --versions 1.2.0
    """
    config = ctx.obj.load_config(config_path)
    if sign_key is not None:
        config.signing.key = sign_key

    async def _run():
        async with ctx.obj.session(config) as service:
            return await service.delete(
                name,
                versions=list(versions) or None,
                component=component,
                codename=codename,
                architecture=architecture,
                progress=ctx.obj.progress,
            )

    result = run_async(_run())
    format_publish_result(result, "Delete")
