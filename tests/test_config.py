"""
Tests for configuration loading — pomless.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from pomless.core.config.loader import ConfigError, find_config_file, load_settings, project_dir
from pomless.core.models.settings import ReaderSettings


@pytest.fixture
def full_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        marker_file: module.properties
        test_suffix: .itests
        snapshot_qualifier: false
        max_depth: 5
        project_root: .
        group_ids:
          plugins: org.example.plugins
    """)
    path = tmp_path / "pomless.yml"
    path.write_text(content)
    return path


class TestLoadSettings:
    def test_full_config(self, full_config: Path, tmp_path: Path):
        settings = load_settings(full_config)
        assert settings.marker_file == "module.properties"
        assert settings.test_suffix == ".itests"
        assert settings.snapshot_qualifier is False
        assert settings.max_depth == 5

    def test_paths_resolved_against_config_dir(self, full_config: Path, tmp_path: Path):
        settings = load_settings(full_config)
        assert settings.project_root == str(tmp_path.resolve())
        assert settings.group_ids == {str((tmp_path / "plugins").resolve()): "org.example.plugins"}

    def test_wrapped_config(self, tmp_path: Path):
        path = tmp_path / "pomless.yml"
        path.write_text("pomless:\n  test_suffix: .it\n")
        assert load_settings(path).test_suffix == ".it"

    def test_empty_config_means_defaults(self, tmp_path: Path):
        path = tmp_path / "pomless.yml"
        path.write_text("")
        assert load_settings(path) == ReaderSettings()

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".mvn").mkdir()
        monkeypatch.chdir(tmp_path)
        settings = load_settings()
        assert settings.marker_file == "build.properties"
        assert settings.test_suffix == ".tests"
        assert settings.snapshot_qualifier is True
        assert settings.project_root is None

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "pomless.yml"
        path.write_text("marker_file: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "pomless.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_settings(path)

    def test_schema_violation(self, tmp_path: Path):
        path = tmp_path / "pomless.yml"
        path.write_text("max_depth: 0\n")
        with pytest.raises(ConfigError, match="Invalid reader configuration"):
            load_settings(path)


class TestFindConfigFile:
    def test_found_in_module_dir(self, full_config: Path, tmp_path: Path):
        assert find_config_file(tmp_path) == full_config.resolve()

    def test_found_walking_up(self, full_config: Path, tmp_path: Path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == full_config.resolve()

    def test_mvn_folder(self, tmp_path: Path):
        (tmp_path / ".mvn").mkdir()
        config = tmp_path / ".mvn" / "pomless.yml"
        config.write_text("test_suffix: .it\n")
        module = tmp_path / "bundles" / "b1"
        module.mkdir(parents=True)
        assert find_config_file(module) == config.resolve()

    def test_mvn_folder_preferred(self, tmp_path: Path):
        (tmp_path / ".mvn").mkdir()
        (tmp_path / ".mvn" / "pomless.yml").write_text("")
        (tmp_path / "pomless.yml").write_text("")
        assert find_config_file(tmp_path) == (tmp_path / ".mvn" / "pomless.yml").resolve()

    def test_stops_at_project_root(self, tmp_path: Path):
        (tmp_path / "pomless.yml").write_text("max_depth: 3\n")
        project = tmp_path / "project"
        (project / ".mvn").mkdir(parents=True)
        module = project / "bundle"
        module.mkdir()
        assert find_config_file(module) is None

    def test_nearest_wins(self, full_config: Path, tmp_path: Path):
        module = tmp_path / "bundle"
        module.mkdir()
        (module / "pomless.yml").write_text("")
        assert find_config_file(module) == (module / "pomless.yml").resolve()


class TestDiscoveredSettings:
    def test_found_from_start_dir(self, full_config: Path, tmp_path: Path):
        module = tmp_path / "plugins" / "b1"
        module.mkdir(parents=True)
        assert load_settings(start_dir=module).marker_file == "module.properties"

    def test_cwd_is_not_searched_when_start_dir_given(self, full_config: Path, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        elsewhere = tmp_path / "elsewhere"
        (elsewhere / ".mvn").mkdir(parents=True)
        assert load_settings(start_dir=elsewhere) == ReaderSettings()

    def test_mvn_paths_resolved_against_project_dir(self, tmp_path: Path):
        (tmp_path / ".mvn").mkdir()
        (tmp_path / ".mvn" / "pomless.yml").write_text(
            "project_root: .\ngroup_ids:\n  plugins: org.example.plugins\n"
        )
        settings = load_settings(start_dir=tmp_path)
        assert settings.project_root == str(tmp_path.resolve())
        assert settings.group_ids == {str((tmp_path / "plugins").resolve()): "org.example.plugins"}

    def test_project_dir(self, tmp_path: Path):
        assert project_dir(tmp_path / "pomless.yml") == tmp_path.resolve()
        assert project_dir(tmp_path / ".mvn" / "pomless.yml") == tmp_path.resolve()
