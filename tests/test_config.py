"""Tests for configuration models and loading"""

import pytest
import yaml

from workspace_deploy.api.exceptions import ConfigurationError
from workspace_deploy.models import DeployConfiguration, Package, Target, TargetMapping
from workspace_deploy.services import ConfigService


class TestTarget:
    """Test target records"""

    def test_from_dict(self):
        target = Target.from_dict({
            "name": "Web",
            "type": " LOCAL ",
            "dir": "/srv/www",
            "empty": True,
            "sort_order": 3,
            "mappings": [{"source": "/src", "target": "app"}],
            "deployed": {"type": "Open", "target": "http://localhost/"},
            "transformer": "crypt.py",
            "transformer_options": {"key": "secret"},
            "host": "example.com",
        })

        assert target.type == "local"
        assert target.empty is True
        assert target.mappings == (TargetMapping("/src", "app"),)
        assert target.deployed[0].type == "open"
        assert target.transformer_options == {"key": "secret"}
        assert target.options == {"host": "example.com"}
        assert target.has_transformer

    def test_single_mapping_object(self):
        target = Target.from_dict({
            "name": "a", "type": "local",
            "mappings": {"source": "src", "target": "dist"},
        })

        assert target.mappings == (TargetMapping("src", "dist"),)

    def test_defaults(self):
        target = Target.from_dict({"name": "a", "type": "test"})

        assert target.base_dir == "./"
        assert target.mappings == ()
        assert target.empty is False
        assert not target.has_transformer

    def test_to_dict_keeps_extra_options(self):
        data = {"name": "a", "type": "local", "dir": "out", "port": 21}

        assert Target.from_dict(data).to_dict() == {
            "name": "a", "type": "local", "sort_order": 0, "dir": "out", "port": 21,
        }


class TestPackage:
    """Test package file resolution"""

    def test_default_includes_everything(self, workspace):
        files = Package(name="all").resolve_files(workspace)

        assert [p.relative_to(workspace).as_posix() for p in files] == [
            "readme.md", "src/a/x.txt", "src/main.py",
        ]

    def test_excludes(self, workspace):
        package = Package(name="code", files=["**/*"], exclude=["*.md", "src/a/"])

        files = package.resolve_files(workspace)

        assert [p.relative_to(workspace).as_posix() for p in files] == ["src/main.py"]

    def test_overlapping_patterns_are_deduplicated(self, workspace):
        package = Package(name="dup", files=["src/**/*", "src/main.py"])

        assert len(package.resolve_files(workspace)) == 2

    def test_from_dict_defaults(self):
        package = Package.from_dict({"name": "p"})

        assert package.files == ["**/*"]
        assert package.exclude == []


class TestDeployConfiguration:

    def test_sorting(self):
        config = DeployConfiguration.from_dict({
            "targets": [
                {"name": "zeta", "type": "local", "sort_order": 1},
                {"name": "Beta", "type": "local", "sort_order": 1},
                {"name": "omega", "type": "local"},
            ],
        })

        assert [t.name for t in config.sorted_targets()] == ["omega", "Beta", "zeta"]

    def test_lookup_is_case_insensitive(self):
        config = DeployConfiguration.from_dict({
            "targets": [{"name": "Staging", "type": "local"}],
            "packages": [{"name": "Web"}],
        })

        assert config.get_target("staging").name == "Staging"
        assert config.get_package(" web ").name == "Web"
        assert config.get_target("prod") is None

    def test_single_module(self):
        config = DeployConfiguration.from_dict({"modules": "plugins/ftp.py"})
        assert config.modules == ["plugins/ftp.py"]

    def test_empty(self):
        config = DeployConfiguration.from_dict(None)
        assert config.targets == [] and config.packages == []

    @pytest.mark.parametrize("data,expected", [
        ({}, True),
        ({"open_output_on_deploy": False}, False),
    ])
    def test_open_output_on_deploy(self, data, expected):
        assert DeployConfiguration.from_dict(data).open_output_on_deploy is expected


class TestConfigService:
    """Test loading and saving .deploy.yaml"""

    def write(self, workspace, text, name=".deploy.yaml"):
        (workspace / name).write_text(text)

    def test_load(self, workspace):
        self.write(workspace, "targets:\n  - name: out\n    type: local\n    dir: dist\n")

        config = ConfigService(workspace).load_config()

        assert config.get_target("out").dir == "dist"

    def test_env_expansion(self, workspace, monkeypatch):
        monkeypatch.setenv("DEPLOY_OUT", "/tmp/deploy-out")
        self.write(workspace, "targets:\n  - name: out\n    type: local\n    dir: ${DEPLOY_OUT}\n")

        config = ConfigService(workspace).load_config()

        assert config.get_target("out").dir == "/tmp/deploy-out"

    def test_missing_file(self, workspace):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigService(workspace).load_config()

        assert exc_info.value.error_code == "WD001"

    def test_invalid_yaml(self, workspace):
        self.write(workspace, "targets: [unclosed\n")

        with pytest.raises(ConfigurationError):
            ConfigService(workspace).load_config()

    def test_root_must_be_mapping(self, workspace):
        self.write(workspace, "- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            ConfigService(workspace).load_config()

    def test_config_path_from_environment(self, workspace, monkeypatch):
        self.write(workspace, "packages:\n  - name: docs\n", name="alt.yaml")
        monkeypatch.setenv("WORKSPACE_DEPLOY_CONFIG", "alt.yaml")

        service = ConfigService(workspace)

        assert service.config_path == workspace / "alt.yaml"
        assert service.config.get_package("docs") is not None

    def test_save_creates_backup(self, workspace):
        self.write(workspace, "targets: []\n")
        service = ConfigService(workspace)
        config = DeployConfiguration(targets=[Target(name="out", type="local", dir="dist")])

        service.save_config(config)

        assert (workspace / ".deploy.yaml.bak").read_text() == "targets: []\n"
        saved = yaml.safe_load((workspace / ".deploy.yaml").read_text())
        assert saved["targets"] == [{"name": "out", "type": "local", "sort_order": 0, "dir": "dist"}]
