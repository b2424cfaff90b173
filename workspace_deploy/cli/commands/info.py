"""Informational commands"""

import sys

import click

from ..utils.output import console, format_packages, format_plugins, format_targets
from ...api.exceptions import WorkspaceDeployError


@click.command()
@click.pass_context
def targets(ctx):
    """List configured targets"""
    try:
        format_targets(ctx.obj.deployer.context.targets())
    except WorkspaceDeployError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.command()
@click.pass_context
def packages(ctx):
    """List configured packages"""
    try:
        format_packages(ctx.obj.deployer.context.packages())
    except WorkspaceDeployError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@click.command()
@click.pass_context
def plugins(ctx):
    """List loaded transport plugins"""
    try:
        format_plugins(ctx.obj.deployer.registry.describe())
    except WorkspaceDeployError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
