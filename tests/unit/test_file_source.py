"""Unit tests for configuration file loading and discovery."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from argconfig.exceptions import ConfigFileError
from argconfig.sources.file import (
    FileSource,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
)
from argconfig.value import Value, ValueKind


@pytest.mark.unit
class TestLoadConfigFile:
    """Test loading each supported format."""

    def test_load_toml(self, tmp_path):
        """Test loading a TOML file."""
        path = tmp_path / "config.toml"
        path.write_text('mode = "save"\n[pdf]\npages = [1, 2]\n')
        assert load_config_file(path) == {"mode": "save", "pdf": {"pages": [1, 2]}}

    def test_load_json(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"mode": "save"}))
        assert load_config_file(str(path)) == {"mode": "save"}

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_load_yaml(self, tmp_path, suffix):
        """Test loading YAML files with either extension."""
        path = tmp_path / f"config{suffix}"
        path.write_text(yaml.safe_dump({"tags": ["a", "b"]}))
        assert load_config_file(path) == {"tags": ["a", "b"]}

    def test_empty_yaml_is_empty_config(self, tmp_path):
        """Test that an empty YAML document loads as an empty mapping."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_pyproject_section(self, tmp_path):
        """Test extracting the [tool.<app>] table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.myapp]\nverbose = true\n')
        assert load_config_file(path, app_name="myapp") == {"verbose": True}

    def test_pyproject_without_section(self, tmp_path):
        """Test that a pyproject.toml without the table is empty."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_config_file(path, app_name="myapp") == {}

    def test_pyproject_requires_app_name(self, tmp_path):
        """Test that pyproject.toml needs the table name."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.myapp]\n")
        with pytest.raises(ConfigFileError):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises."""
        with pytest.raises(ConfigFileError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_directory_is_rejected(self, tmp_path):
        """Test that a directory path raises."""
        with pytest.raises(ConfigFileError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown extensions raise."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n")
        with pytest.raises(ConfigFileError, match="Unsupported config file format"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "name, content",
        [
            ("bad.toml", "mode = \n"),
            ("bad.json", "{not json"),
            ("bad.yaml", "a: [unclosed"),
        ],
    )
    def test_malformed_files(self, tmp_path, name, content):
        """Test that parse errors are wrapped with the file path."""
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(path)
        assert exc_info.value.file_path == str(path)
        assert exc_info.value.original_error is not None

    @pytest.mark.parametrize("name, content", [("list.json", "[1, 2]"), ("list.yaml", "- a\n- b\n")])
    def test_non_mapping_root(self, tmp_path, name, content):
        """Test that a non-mapping document is rejected."""
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigFileError, match="must contain"):
            load_config_file(path)


@pytest.mark.unit
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_find_in_start_dir(self, tmp_path):
        """Test finding a config file in the starting directory."""
        config_file = tmp_path / ".myapp.toml"
        config_file.write_text("verbose = true\n")
        assert find_config_in_parents("myapp", tmp_path) == config_file.resolve()

    def test_find_in_parent(self, tmp_path):
        """Test walking up to a parent directory."""
        config_file = tmp_path / ".myapp.json"
        config_file.write_text("{}")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_config_in_parents("myapp", child) == config_file.resolve()

    def test_prefers_toml_over_json(self, tmp_path):
        """Test file name priority within one directory."""
        (tmp_path / ".myapp.json").write_text("{}")
        (tmp_path / ".myapp.toml").write_text("")
        assert find_config_in_parents("myapp", tmp_path).name == ".myapp.toml"

    def test_pyproject_only_with_section(self, tmp_path):
        """Test that pyproject.toml only counts when it has the tool table."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n')
        assert find_config_in_parents("myapp", tmp_path) is None

        pyproject.write_text("[tool.myapp]\nverbose = true\n")
        assert find_config_in_parents("myapp", tmp_path) == pyproject.resolve()

    def test_discover_falls_back_to_home(self, tmp_path):
        """Test discovery in the home directory."""
        cwd = tmp_path / "cwd"
        home = tmp_path / "home"
        cwd.mkdir()
        home.mkdir()
        config_file = home / ".myapp.yaml"
        config_file.write_text("a: 1\n")

        with patch("pathlib.Path.cwd", return_value=cwd), patch("pathlib.Path.home", return_value=home):
            assert discover_config_file("myapp") == config_file

    def test_discover_nothing(self, tmp_path):
        """Test that discovery returns None without config files."""
        with patch("pathlib.Path.cwd", return_value=tmp_path), patch("pathlib.Path.home", return_value=tmp_path):
            assert discover_config_file("myapp-that-does-not-exist") is None
            assert FileSource.discover("myapp-that-does-not-exist") is None


@pytest.mark.unit
class TestFileSource:
    """Test FileSource collection."""

    def test_collect_tags_origin_with_path(self, tmp_path):
        """Test that values are tagged with the file path."""
        path = tmp_path / "config.toml"
        path.write_text('mode = "save"\n[pdf]\npages = [1, 2]\n')
        values = FileSource(path).collect()
        assert values["mode"] == Value.string("save", str(path))
        assert values["pdf"].kind is ValueKind.TABLE
        assert values["pdf"].payload["pages"].origin == str(path)

    def test_optional_missing_file(self, tmp_path):
        """Test that an optional missing file contributes nothing."""
        assert FileSource(tmp_path / "absent.toml", required=False).collect() == {}

    def test_required_missing_file(self, tmp_path):
        """Test that a required missing file fails."""
        with pytest.raises(ConfigFileError):
            FileSource(tmp_path / "absent.toml").collect()

    def test_discover_source(self, tmp_path):
        """Test building a source from discovery."""
        config_file = tmp_path / ".myapp.toml"
        config_file.write_text("verbose = true\n")
        with patch("pathlib.Path.cwd", return_value=tmp_path):
            source = FileSource.discover("myapp")
        assert source is not None
        assert Path(source.path) == config_file.resolve()
        assert source.collect()["verbose"].payload is True
