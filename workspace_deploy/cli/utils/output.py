# workspace_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import Dict, List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...constants import EMOJI_CANCELED, EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import DeployResult, FileDeployedEvent, Package, Target

console = Console()


def format_file_event(event: FileDeployedEvent) -> None:
    """Print one line for a completed file"""
    file = escape(event.file)
    if event.canceled:
        console.print(f"[yellow]{EMOJI_CANCELED}[/yellow] {file} [dim](canceled)[/dim]")
    elif event.error is not None:
        console.print(f"[red]{EMOJI_ERROR}[/red] {file}: {escape(str(event.error))}")
    else:
        console.print(f"[green]{EMOJI_SUCCESS}[/green] {file}")


def format_deploy_result(result: DeployResult) -> None:
    """Format and display a workspace deployment result"""
    target = escape(result.event.target.name)

    if result.event.error is not None:
        console.print(f"\n[red]{EMOJI_ERROR} Deployment to '{target}' failed:[/red] "
                      f"{escape(str(result.event.error))}")
    elif result.canceled:
        console.print(f"\n[yellow]{EMOJI_WARNING} Deployment to '{target}' was canceled[/yellow]")
    elif result.success:
        console.print(f"\n[green]{EMOJI_SUCCESS} Deployment to '{target}' completed successfully![/green]")
    else:
        console.print(f"\n[yellow]{EMOJI_WARNING} Deployment to '{target}' completed with errors[/yellow]")

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Deployed", str(len(result.deployed)))
    table.add_row("Failed", str(len(result.failed)))
    table.add_row("Canceled", str(len(result.skipped)))
    if result.duration is not None:
        table.add_row("Duration", f"{result.duration:.2f}s")
    console.print(table)


def format_targets(targets: List[Target]) -> None:
    """Display configured targets"""
    if not targets:
        console.print("[yellow]No targets configured[/yellow]")
        return

    table = Table(title="Targets", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Order", justify="right")
    table.add_column("Directory")
    table.add_column("Mappings", justify="right")
    table.add_column("Description", style="dim")

    for target in targets:
        table.add_row(
            target.name,
            target.type,
            str(target.sort_order),
            target.base_dir,
            str(len(target.mappings)),
            target.description or "",
        )

    console.print(table)


def format_packages(packages: List[Package]) -> None:
    """Display configured packages"""
    if not packages:
        console.print("[yellow]No packages configured[/yellow]")
        return

    table = Table(title="Packages", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Order", justify="right")
    table.add_column("Files")
    table.add_column("Exclude")
    table.add_column("Description", style="dim")

    for package in packages:
        table.add_row(
            package.name,
            str(package.sort_order),
            ", ".join(package.files),
            ", ".join(package.exclude),
            package.description or "",
        )

    console.print(table)


def format_plugins(plugins: Dict[str, str]) -> None:
    """Display loaded plugins (type -> description)"""
    table = Table(title="Plugins", box=box.ROUNDED)
    table.add_column("Type", style="cyan")
    table.add_column("Description")

    for plugin_type, description in plugins.items():
        table.add_row(plugin_type, description)

    console.print(table)
