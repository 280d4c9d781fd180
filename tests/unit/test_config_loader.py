"""
Unit tests for config_loader module.
"""

import pytest
import yaml

from pdf2cad.utils.config_loader import Config, GeneratorConfig
from pdf2cad.utils.error_handlers import ConfigurationError


class TestGeneratorConfig:
    """Tests for GeneratorConfig dataclass."""

    def test_defaults(self):
        """Test default values."""
        config = GeneratorConfig()
        assert config.handle_seed == 0x20
        assert config.text_line_pitch == 10.0
        assert config.layers == ["0"]

    def test_layers_deduplicated(self):
        """Test layer list keeps order without duplicates."""
        config = GeneratorConfig(geometry_layer="LINES", text_layer="LINES")
        assert config.layers == ["0", "LINES"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"handle_seed": 0},
            {"coordinate_precision": 17},
            {"geometry_layer": ""},
            {"text_line_pitch": 0.0},
            {"text_height": -1.0},
            {"lineweight_scale": 0.0},
            {"limits": (0.0, 297.0)},
            {"log_level": "VERBOSE"},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test out-of-range values raise ValueError."""
        with pytest.raises(ValueError):
            GeneratorConfig(**kwargs)


class TestConfigLoad:
    """Tests for Config.load."""

    def test_none_gives_defaults(self):
        """Test loading without a path."""
        assert Config.load() == GeneratorConfig()

    def test_load_yaml(self, tmp_path):
        """Test values from a YAML file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            yaml.safe_dump(
                {
                    "generator": {"handle_seed": 64},
                    "layers": {"geometry": "GEOM"},
                    "text_layout": {"origin": [5, 15], "line_pitch": 12},
                    "drawing": {"metric": False},
                }
            )
        )

        config = Config.load(config_file)

        assert config.handle_seed == 64
        assert config.geometry_layer == "GEOM"
        assert config.text_origin == (5.0, 15.0)
        assert config.text_line_pitch == 12
        assert config.metric is False
        assert config.text_layer == "0"

    def test_empty_file_gives_defaults(self, tmp_path):
        """Test an empty YAML file."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert Config.load(config_file) == GeneratorConfig()

    def test_missing_file(self, tmp_path):
        """Test missing files raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Config.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML raises ConfigurationError."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("generator: [unclosed")
        with pytest.raises(ConfigurationError) as exc_info:
            Config.load(config_file)
        assert exc_info.value.original_error is not None

    def test_non_mapping(self, tmp_path):
        """Test a top-level list raises ConfigurationError."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            Config.load(config_file)


class TestConfigFromDict:
    """Tests for Config.from_dict and Config.to_dict."""

    def test_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            Config.from_dict({"generator": {"seed": 1}})
        assert exc_info.value.config_key == "generator.seed"

    def test_section_not_mapping(self):
        """Test sections must be mappings."""
        with pytest.raises(ConfigurationError):
            Config.from_dict({"layers": "GEOM"})

    def test_bad_pair(self):
        """Test pair fields must be numeric."""
        with pytest.raises(ConfigurationError):
            Config.from_dict({"drawing": {"limits": ["a", "b"]}})

    def test_out_of_range_value(self):
        """Test dataclass validation errors are wrapped."""
        with pytest.raises(ConfigurationError):
            Config.from_dict({"text_layout": {"height": -2}})

    def test_round_trip(self):
        """Test to_dict output is accepted by from_dict."""
        config = GeneratorConfig(text_layer="NOTES", limits=(594.0, 420.0))
        assert Config.from_dict(Config.to_dict(config)) == config


class TestConfigValidate:
    """Tests for Config.validate."""

    def test_valid_names(self):
        """Test default names pass."""
        assert Config.validate(GeneratorConfig()) == []

    def test_invalid_characters(self):
        """Test reserved characters in layer names."""
        errors = Config.validate(GeneratorConfig(geometry_layer="A/B"))
        assert len(errors) == 1
        assert "layers.geometry" in errors[0]

    def test_whitespace_and_length(self):
        """Test surrounding whitespace and overlong names."""
        errors = Config.validate(
            GeneratorConfig(geometry_layer=" GEOM", text_layer="T" * 256)
        )
        assert len(errors) == 2


class TestLayerNameCharacters:
    """Tests for characters that would break the one-value-per-line layout."""

    def test_newline_rejected(self):
        """Test layer names with a line break are rejected."""
        with pytest.raises(ValueError):
            GeneratorConfig(geometry_layer="A\nB")

    def test_other_control_characters_rejected(self):
        """Test tabs, carriage returns, and NUL are rejected."""
        for name in ("A\tB", "A\rB", "A\x00B", "A\x7fB"):
            with pytest.raises(ValueError):
                GeneratorConfig(text_layer=name)

    def test_non_string_rejected(self):
        """Test layer names must be strings."""
        with pytest.raises(ValueError):
            GeneratorConfig(geometry_layer=5)

    def test_from_dict_wraps_error(self):
        """Test YAML-supplied control characters raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Config.from_dict({"layers": {"geometry": "GEOM\nETRY"}})
