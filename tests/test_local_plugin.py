"""Tests for the local filesystem transport"""

import base64
import os
from unittest.mock import Mock

import pytest

from workspace_deploy.api.exceptions import (
    DeployError,
    DirectoryError,
    MappingError,
    TransformError,
    WriteError,
)
from workspace_deploy.models import (
    DeployFileOptions,
    DeployWorkspaceOptions,
    Target,
    TargetMapping,
)
from workspace_deploy.plugins.builtin.local import LocalPlugin


@pytest.fixture
def plugin(registry):
    return registry.resolve("local")


@pytest.fixture
def dest(tmp_path):
    return tmp_path / "dest"


def local_target(dest, **kwargs):
    return Target(name="local", type="local", dir=str(dest), **kwargs)


class TestDeployFile:
    """Test single file deployment"""

    @pytest.mark.asyncio
    async def test_copies_file(self, plugin, workspace, dest):
        on_completed = Mock()
        source = workspace / "src" / "a" / "x.txt"

        event = await plugin.deploy_file(str(source), local_target(dest),
                                         DeployFileOptions(on_completed=on_completed))

        assert event.success
        assert (dest / "src" / "a" / "x.txt").read_text() == "x content"
        on_completed.assert_called_once_with(plugin, event)

    @pytest.mark.asyncio
    async def test_uses_mappings(self, plugin, workspace, dest):
        target = local_target(dest, mappings=(
            TargetMapping("src/a", "out/a"),
            TargetMapping("src", "out"),
        ))

        await plugin.deploy_file(str(workspace / "src" / "a" / "x.txt"), target)

        assert (dest / "out" / "a" / "x.txt").exists()
        assert not (dest / "out" / "a" / "a").exists()

    @pytest.mark.asyncio
    async def test_preserves_timestamps(self, plugin, workspace, dest):
        source = workspace / "readme.md"
        os.utime(source, (1_000_000_000, 1_000_000_000))

        await plugin.deploy_file(str(source), local_target(dest))

        assert int((dest / "readme.md").stat().st_mtime) == 1_000_000_000

    @pytest.mark.asyncio
    async def test_overwrites_existing_file(self, plugin, workspace, dest):
        dest.mkdir()
        (dest / "readme.md").write_text("old")

        await plugin.deploy_file(str(workspace / "readme.md"), local_target(dest))

        assert (dest / "readme.md").read_text() == "# readme\n"

    @pytest.mark.asyncio
    async def test_before_deploy_sees_existing_directory(self, plugin, workspace, dest):
        seen = []

        def on_before_deploy(sender, event):
            seen.append((event.destination, os.path.isdir(event.destination)))

        await plugin.deploy_file(str(workspace / "src" / "main.py"), local_target(dest),
                                 DeployFileOptions(on_before_deploy=on_before_deploy))

        assert seen == [(str(dest / "src"), True)]

    @pytest.mark.asyncio
    async def test_cancellation_short_circuits(self, plugin, workspace, dest, cancellation):
        cancellation.cancel()
        on_before_deploy = Mock()
        on_completed = Mock()

        event = await plugin.deploy_file(
            str(workspace / "src" / "main.py"),
            local_target(dest),
            DeployFileOptions(on_before_deploy=on_before_deploy, on_completed=on_completed),
        )

        assert event.canceled is True
        assert event.error is None
        assert not dest.exists()
        on_before_deploy.assert_not_called()
        on_completed.assert_called_once()

    @pytest.mark.asyncio
    async def test_mapping_failure_is_reported(self, plugin, tmp_path, dest):
        outside = tmp_path / "outside.txt"
        outside.write_text("nope")
        on_completed = Mock()

        event = await plugin.deploy_file(str(outside), local_target(dest),
                                         DeployFileOptions(on_completed=on_completed))

        assert isinstance(event.error, MappingError)
        assert not dest.exists()
        on_completed.assert_called_once()

    @pytest.mark.asyncio
    async def test_directory_failure_is_reported(self, plugin, workspace, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")

        event = await plugin.deploy_file(str(workspace / "src" / "main.py"), local_target(blocker))

        assert isinstance(event.error, DirectoryError)

    @pytest.mark.asyncio
    async def test_write_failure_is_reported(self, plugin, workspace, dest):
        on_completed = Mock()

        event = await plugin.deploy_file(str(workspace / "missing.txt"), local_target(dest),
                                         DeployFileOptions(on_completed=on_completed))

        assert isinstance(event.error, WriteError)
        on_completed.assert_called_once()

    @pytest.mark.asyncio
    async def test_failing_before_hook_completes_once(self, plugin, workspace, dest):
        on_completed = Mock()

        def on_before_deploy(sender, event):
            raise RuntimeError("hook failed")

        event = await plugin.deploy_file(
            str(workspace / "readme.md"),
            local_target(dest),
            DeployFileOptions(on_before_deploy=on_before_deploy, on_completed=on_completed),
        )

        assert type(event.error) is DeployError
        assert event.error.error_code == "WD105"
        assert isinstance(event.error.__cause__, RuntimeError)
        assert "hook failed" in str(event.error)
        assert not (dest / "readme.md").exists()
        on_completed.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("transformer", [None, "workspace_deploy.transformers.base64_codec"])
    async def test_refuses_to_overwrite_source(self, plugin, workspace, transformer):
        source = workspace / "readme.md"
        on_completed = Mock()

        event = await plugin.deploy_file(str(source), Target(name="t", type="local", transformer=transformer),
                                         DeployFileOptions(on_completed=on_completed))

        assert isinstance(event.error, WriteError)
        assert "same file" in str(event.error)
        assert source.read_bytes() == b"# readme\n"
        on_completed.assert_called_once()

    @pytest.mark.asyncio
    async def test_base_directory(self, plugin, workspace, dest):
        (workspace / "proj").mkdir()
        (workspace / "proj" / "readme.md").write_text("proj readme")

        event = await plugin.deploy_file(str(workspace / "proj" / "readme.md"), local_target(dest),
                                         DeployFileOptions(base_directory="proj"))

        assert event.success
        assert (dest / "readme.md").read_text() == "proj readme"
        assert not (dest / "proj").exists()

    @pytest.mark.asyncio
    async def test_outside_base_directory(self, plugin, workspace, dest):
        (workspace / "proj").mkdir()

        event = await plugin.deploy_file(str(workspace / "readme.md"), local_target(dest),
                                         DeployFileOptions(base_directory="proj"))

        assert isinstance(event.error, MappingError)


class TestDryRun:
    """Test the dry-run transport against the same hooks"""

    @pytest.mark.asyncio
    async def test_failing_before_hook(self, registry, workspace, dest, output):
        def on_before_deploy(sender, event):
            raise RuntimeError("hook failed")

        event = await registry.resolve("test").deploy_file(
            str(workspace / "readme.md"),
            local_target(dest),
            DeployFileOptions(on_before_deploy=on_before_deploy),
        )

        assert type(event.error) is DeployError
        assert event.error.error_code == "WD105"
        assert not any(line.startswith("[TEST]") for line in output.lines)

    @pytest.mark.asyncio
    async def test_base_directory(self, registry, workspace, dest, output):
        (workspace / "proj").mkdir()
        (workspace / "proj" / "readme.md").write_text("proj readme")

        await registry.resolve("test").deploy_file(
            str(workspace / "proj" / "readme.md"),
            local_target(dest),
            DeployFileOptions(base_directory="proj"),
        )

        assert output.lines[-1].endswith(f"=> '{dest / 'readme.md'}'")


class TestTransformedWrite:
    """Test writes through a transformer"""

    @pytest.mark.asyncio
    async def test_writes_transformed_bytes(self, plugin, workspace, dest):
        target = local_target(dest, transformer="workspace_deploy.transformers.base64_codec")

        event = await plugin.deploy_file(str(workspace / "readme.md"), target)

        assert event.success
        assert (dest / "readme.md").read_bytes() == base64.b64encode(b"# readme\n")

    @pytest.mark.asyncio
    async def test_one_sided_transformer_fails_file(self, plugin, workspace, dest):
        (workspace / "restore_only.py").write_text(
            "def restore_data(ctx):\n"
            "    return ctx.data\n"
        )
        target = local_target(dest, transformer="restore_only.py")

        event = await plugin.deploy_file(str(workspace / "readme.md"), target)

        assert isinstance(event.error, TransformError)
        assert not (dest / "readme.md").exists()


class TestDeployWorkspace:
    """Test sequential workspace deployment"""

    @pytest.mark.asyncio
    async def test_callback_cardinality(self, plugin, workspace, dest):
        files = [
            str(workspace / "readme.md"),
            str(workspace / "missing.txt"),
            str(workspace / "src" / "main.py"),
        ]
        file_events = []
        on_completed = Mock()

        event = await plugin.deploy_workspace(files, local_target(dest), DeployWorkspaceOptions(
            on_file_completed=lambda sender, e: file_events.append(e),
            on_completed=on_completed,
        ))

        assert [e.file for e in file_events] == files
        assert [e.success for e in file_events] == [True, False, True]
        on_completed.assert_called_once_with(plugin, event)
        assert event.success

    @pytest.mark.asyncio
    async def test_empty_clears_destination_first(self, plugin, workspace, dest):
        (dest / "stale").mkdir(parents=True)
        (dest / "stale" / "old.txt").write_text("old")
        (dest / "old.txt").write_text("old")
        seen = []

        def on_before_deploy_file(sender, event):
            seen.append(sorted(p.name for p in dest.iterdir()))

        event = await plugin.deploy_workspace(
            [str(workspace / "readme.md")],
            local_target(dest, empty=True),
            DeployWorkspaceOptions(on_before_deploy_file=on_before_deploy_file),
        )

        assert event.success
        assert seen == [[]]
        assert sorted(p.name for p in dest.iterdir()) == ["readme.md"]

    @pytest.mark.asyncio
    async def test_empty_failure_aborts(self, plugin, workspace, tmp_path, output):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        file_completed = Mock()
        on_completed = Mock()

        event = await plugin.deploy_workspace(
            [str(workspace / "readme.md")],
            local_target(blocker, empty=True),
            DeployWorkspaceOptions(on_file_completed=file_completed, on_completed=on_completed),
        )

        assert isinstance(event.error, DirectoryError)
        file_completed.assert_not_called()
        on_completed.assert_called_once()
        assert blocker.read_text() == "a file, not a directory"
        assert "[FAILED:" in output.lines[-1]

    @pytest.mark.asyncio
    async def test_cancel_midway(self, plugin, workspace, dest, cancellation):
        files = [str(workspace / "readme.md"), str(workspace / "src" / "main.py")]
        file_events = []

        def on_file_completed(sender, event):
            file_events.append(event)
            cancellation.cancel()

        event = await plugin.deploy_workspace(files, local_target(dest), DeployWorkspaceOptions(
            on_file_completed=on_file_completed,
        ))

        assert event.canceled is True
        assert [e.canceled for e in file_events] == [False, True]
        assert (dest / "readme.md").exists()
        assert not (dest / "src").exists()

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, plugin, workspace, dest, cancellation):
        cancellation.cancel()

        event = await plugin.deploy_workspace([str(workspace / "readme.md")], local_target(dest, empty=True))

        assert event.canceled is True
        assert not dest.exists()


class TestInfo:

    def test_info(self, plugin):
        assert isinstance(plugin, LocalPlugin)
        assert "local folder" in plugin.info().description
