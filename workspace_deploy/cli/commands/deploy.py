"""Deploy command implementation"""

import asyncio
import signal
import sys
from pathlib import Path
from typing import List

import click

from ..utils.output import console, format_deploy_result, format_file_event
from ...api.exceptions import UserCancelledError, WorkspaceDeployError
from ...models import DeployResult, DeployWorkspaceOptions


@click.command()
@click.option('-t', '--target', 'target_name', required=True, help='Target to deploy to')
@click.option('-p', '--package', 'package_name', help='Deploy the files of a package')
@click.option('-b', '--base-dir', help='Directory file paths are made relative to (default: workspace root)')
@click.argument('files', nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def deploy(ctx, target_name, package_name, base_dir, files):
    """Deploy files to a target

    Deploys the given FILES, or the files of --package. Without either,
    the files of every configured package are deployed.

    Press Ctrl+C to cancel: the file being copied is finished, the
    remaining files are reported as canceled.

    Examples:

        # Deploy two files
        workspace-deploy deploy --target staging src/app.py src/util.py

        # Deploy a package
        workspace-deploy deploy --target production --package web
    """
    if files and package_name:
        console.print("[red]Error: Cannot specify both FILES and --package[/red]")
        sys.exit(1)

    try:
        deployer = ctx.obj.deployer
        target = deployer.get_target(target_name)

        opts = DeployWorkspaceOptions(
            on_file_completed=lambda sender, event: format_file_event(event),
            base_directory=base_dir,
        )

        if files:
            jobs = [[f.resolve() for f in files]]
        elif package_name:
            jobs = [deployer.get_package(package_name).resolve_files(deployer.workspace_root)]
        else:
            jobs = [p.resolve_files(deployer.workspace_root) for p in deployer.context.packages()]

        jobs = [job for job in jobs if job]
        if not jobs:
            console.print("[yellow]Nothing to deploy[/yellow]")
            return

        console.print(f"[cyan]Deploying to {target.get_display_info()}...[/cyan]")
        results = asyncio.run(_deploy_all(deployer, jobs, target_name, opts))

        for result in results:
            format_deploy_result(result)

        if deployer.cancellation.is_cancelled or any(r.canceled for r in results):
            raise UserCancelledError()

        if not all(r.success for r in results):
            sys.exit(1)

    except UserCancelledError as e:
        console.print(f"[yellow]{e}[/yellow]")
        sys.exit(130)
    except WorkspaceDeployError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Deployment cancelled[/yellow]")
        sys.exit(1)


async def _deploy_all(deployer, jobs: List[list], target_name: str,
                      opts: DeployWorkspaceOptions) -> List[DeployResult]:
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, deployer.cancel)
    except (NotImplementedError, RuntimeError):
        # Not supported on this platform / thread
        pass

    results = []
    for files in jobs:
        if deployer.cancellation.is_cancelled:
            break
        results.append(await deployer.deploy_files_async(files, target_name, opts))

    return results
