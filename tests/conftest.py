"""Shared fixtures"""

import io

import pytest
from rich.console import Console

from workspace_deploy.core.context import CancellationToken, DeployContext, OutputChannel
from workspace_deploy.models import DeployConfiguration
from workspace_deploy.plugins.registry import PluginRegistry


@pytest.fixture
def workspace(tmp_path):
    """A small workspace with nested files"""
    root = tmp_path / "workspace"
    (root / "src" / "a").mkdir(parents=True)
    (root / "src" / "a" / "x.txt").write_text("x content")
    (root / "src" / "main.py").write_text("print('hello')\n")
    (root / "readme.md").write_text("# readme\n")
    return root.resolve()


@pytest.fixture
def output():
    """Output channel that renders into a buffer"""
    return OutputChannel(Console(file=io.StringIO(), width=200))


@pytest.fixture
def cancellation():
    return CancellationToken()


@pytest.fixture
def make_context(workspace, output, cancellation):
    """Factory for contexts over the test workspace"""
    def factory(targets=(), packages=(), modules=()):
        config = DeployConfiguration(
            targets=list(targets),
            packages=list(packages),
            modules=list(modules),
        )
        return DeployContext(config, workspace, output, cancellation)
    return factory


@pytest.fixture
def context(make_context):
    return make_context()


@pytest.fixture
def registry(context):
    """Registry with the builtin plugins loaded"""
    registry = PluginRegistry(context)
    registry.load_builtin_plugins()
    return registry
