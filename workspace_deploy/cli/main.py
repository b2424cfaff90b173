# workspace_deploy/cli/main.py
"""Main CLI entry point for workspace-deploy"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..api.deployer import Deployer
from ..constants import APP_NAME, ENV_WORKSPACE_ROOT, LOG_FORMAT
from ..core.context import OutputChannel
from ..services.config_service import ConfigService

# Import all commands
from .commands import deploy, info, restore
from .utils.output import console


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


class Context:
    """CLI context object with lazy deployer creation

    The configuration is only loaded when a command asks for the deployer.
    """

    def __init__(self, workspace_root: Path, config_path: Optional[str] = None):
        self.workspace_root = workspace_root
        self.config_path = config_path
        self.verbose: bool = False
        self.debug: bool = False
        self._deployer: Optional[Deployer] = None

    @property
    def deployer(self) -> Deployer:
        """Get deployer instance (lazy loading)

        Raises:
            ConfigurationError: If the configuration cannot be loaded
        """
        if self._deployer is None:
            config = ConfigService(self.workspace_root, self.config_path).load_config()
            self._deployer = Deployer(
                self.workspace_root,
                config=config,
                output=OutputChannel(console, echo=config.open_output_on_deploy),
            )
        return self._deployer


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('-w', '--workspace', type=click.Path(file_okay=False, path_type=Path),
              default=lambda: os.environ.get(ENV_WORKSPACE_ROOT, "."),
              help='Workspace root directory')
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False),
              help='Configuration file (default: .deploy.yaml in the workspace)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, workspace, config_path):
    """Workspace Deploy - push workspace files to configured targets

    Targets and packages are read from .deploy.yaml in the workspace root.
    Each target names a transport type (for example "local") that copies
    files to its destination, optionally through directory mappings and a
    data transformer.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context(Path(workspace), config_path)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(deploy.deploy)
cli.add_command(restore.restore)
cli.add_command(info.targets)
cli.add_command(info.packages)
cli.add_command(info.plugins)


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
