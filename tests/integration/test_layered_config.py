"""Integration tests: command-line arguments merged with other configuration layers."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse

import pytest

from argconfig import (
    ArgparseSource,
    ConfigBuilder,
    ConfigTypeError,
    EnvironmentSource,
    FileSource,
    TrackingAppendAction,
    TrackingStoreAction,
    TrackingStoreTrueAction,
    Value,
    ValueKind,
)


@pytest.mark.integration
class TestArgumentsInConfig:
    """Test reading parsed arguments back through a built Config."""

    def test_basic_types_work(self, myapp_parser):
        """Test that string, bool and array arguments are readable from the config."""
        args = ["-v", "-i", "filename", "-t", "tagone", "-t", "tagtwo"]
        config = ConfigBuilder().add_source(ArgparseSource.from_parser(myapp_parser, args)).build()

        assert config.get_string("input") == "filename"
        assert config.get_bool("verbose") is True
        assert config.get_bool("debug") is False
        tags = [v.into_string() for v in config.get_array("tag")]
        assert tags == ["tagone", "tagtwo"]

    def test_single_multiple_values_isnt_array(self, myapp_parser):
        """Test that without metadata a repeatable option used once is not an array."""
        config = ConfigBuilder().add_source(ArgparseSource.from_parser(myapp_parser, ["-t", "tagone"])).build()

        with pytest.raises(ConfigTypeError) as exc_info:
            config.get_array("tag")
        assert exc_info.value.unexpected == (ValueKind.STRING, "tagone")
        assert exc_info.value.origin == "argparse"

    def test_single_multiple_values_is_string(self, myapp_parser):
        """Test that a repeatable option used once reads as a string."""
        config = ConfigBuilder().add_source(ArgparseSource.from_parser(myapp_parser, ["-t", "tagone"])).build()
        assert config.get_string("tag") == "tagone"

    def test_single_multiple_values_with_metadata_is_array(self, myapp_parser):
        """Test that an array hint makes a single use readable as a one-element array."""
        source = ArgparseSource.from_parser(myapp_parser, ["-t", "tagone"], metadata={"tag": Value.array([])})
        config = ConfigBuilder().add_source(source).build()

        tags = config.get_array("tag")
        assert len(tags) == 1
        assert tags[0].into_string() == "tagone"

    def test_repeated_option_is_not_a_string(self, myapp_parser):
        """Test that an array cannot be read as a string."""
        source = ArgparseSource.from_parser(myapp_parser, ["-t", "a", "-t", "b"])
        config = ConfigBuilder().add_source(source).build()
        with pytest.raises(ConfigTypeError):
            config.get_string("tag")


@pytest.fixture
def tracking_parser():
    parser = argparse.ArgumentParser(prog="myapp")
    parser.add_argument("--output", action=TrackingStoreAction, default="out")
    parser.add_argument("--verbose", action=TrackingStoreTrueAction)
    parser.add_argument("--tag", action=TrackingAppendAction)
    return parser


@pytest.mark.integration
class TestLayerPriority:
    """Test command-line arguments layered over files and the environment."""

    def test_file_env_and_arguments(self, tmp_path, tracking_parser):
        """Test the usual precedence: defaults < file < environment < arguments."""
        config_file = tmp_path / "myapp.toml"
        config_file.write_text('output = "from-file"\nverbose = false\ntag = ["file"]\n[pdf]\npages = "1-2"\n')
        environ = {"MYAPP_OUTPUT": "from-env", "MYAPP_PDF__PAGES": "3"}

        cli = ArgparseSource.from_parser(
            tracking_parser, ["--verbose", "--tag", "cli"], infer_metadata=True, provided_only=True
        )
        config = (
            ConfigBuilder()
            .set_default("output", "default")
            .add_source(FileSource(config_file))
            .add_source(EnvironmentSource("MYAPP", environ=environ))
            .add_source(cli)
            .build()
        )

        assert config.get_string("output") == "from-env"
        assert config.get("output").origin == "environment"
        assert config.get_bool("verbose") is True
        assert config.get("verbose").origin == "argparse"
        assert [v.into_string() for v in config.get_array("tag")] == ["cli"]
        assert config.get_int("pdf.pages") == 3

    def test_parser_defaults_shadow_lower_layers_without_provided_only(self, tmp_path, tracking_parser):
        """Test that collecting defaults lets them override file values."""
        config_file = tmp_path / "myapp.json"
        config_file.write_text('{"output": "from-file"}')

        cli = ArgparseSource.from_parser(tracking_parser, [])
        config = ConfigBuilder().add_source(FileSource(config_file)).add_source(cli).build()

        assert config.get_string("output") == "out"
        assert config.get("output").origin == "argparse"

    def test_origin_in_type_error(self, tmp_path, tracking_parser):
        """Test that a type error points at the layer that supplied the value."""
        config_file = tmp_path / "myapp.yaml"
        config_file.write_text("tag: single\n")
        config = ConfigBuilder().add_source(FileSource(config_file)).build()

        with pytest.raises(ConfigTypeError) as exc_info:
            config.get_array("tag")
        assert exc_info.value.origin == str(config_file)
