"""Upload command implementation"""

from pathlib import Path

import click

from ..decorators import repository_options, handle_errors
from ..utils.output import console, format_publish_result
from ...utils.async_utils import run_async


@click.command()
@click.argument('debs', nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@repository_options
@click.option('--preserve-versions/--no-preserve-versions', default=None,
              help='Keep other versions of the uploaded packages in the index')
@click.option('--fail-if-exists', is_flag=True, default=None,
              help='Refuse to replace a package file with different content')
@click.option('--skip-package-upload', is_flag=True, default=None,
              help='Only update the indexes, do not upload the .deb files')
@click.option('--sign', 'sign_key', default=None,
              help='GPG key used to sign the Release')
@click.pass_context
@handle_errors
def upload(ctx, debs, config_path, codename, component, architecture,
           preserve_versions, fail_if_exists, skip_package_upload, sign_key):
    """Upload .deb packages and republish the repository metadata

    Examples:
        # Upload to the configured codename and component
        s3apt upload dist/foo_1.0_amd64.deb

        # Upload to another codename, signing the Release
        s3apt upload --codename jammy --sign ABCD1234 dist/*.deb
    """
    config = ctx.obj.load_config(config_path)
    repo = config.repository

    if preserve_versions is not None:
        repo.preserve_versions = preserve_versions
    if fail_if_exists:
        repo.fail_if_exists = True
    if skip_package_upload:
        repo.skip_package_upload = True
    if sign_key is not None:
        config.signing.key = sign_key

    console.print(f"[bold]Uploading {len(debs)} package(s)[/bold] ({config.storage.get_display_info()})")

    async def _run():
        async with ctx.obj.session(config) as service:
            return await service.upload(
                list(debs),
                component=component,
                codename=codename,
                architecture=architecture,
                progress=ctx.obj.progress,
            )

    result = run_async(_run())
    format_publish_result(result, "Upload")
