"""Restore command implementation"""

import sys

import click

from ..utils.output import console
from ...api.exceptions import WorkspaceDeployError
from ...utils.async_utils import run_async


@click.command()
@click.option('-t', '--target', 'target_name', required=True,
              help='Target whose transformer produced the file')
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.argument('output', type=click.Path(dir_okay=False))
@click.pass_context
def restore(ctx, target_name, source, output):
    """Restore a deployed file through the target's transformer

    Reads SOURCE, reverses the transformation configured for the target
    and writes the original bytes to OUTPUT.

    Example:

        workspace-deploy restore --target encrypted out/app.py app.py
    """
    try:
        deployer = ctx.obj.deployer
        path = run_async(deployer.restore_file_async(source, target_name, output))
        console.print(f"[green]✓[/green] Restored to {path}")

    except WorkspaceDeployError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
