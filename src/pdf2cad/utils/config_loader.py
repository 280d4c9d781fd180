"""Configuration loading and validation for the pdf2cad assembler.

This module provides the immutable generator configuration and utilities to
load it from a YAML file and validate the values that end up in the DXF
symbol tables.

Typical usage example:
    config = Config.load("config/generator_config.yaml")
    errors = Config.validate(config)
    if errors:
        raise ConfigurationError(f"Configuration invalid: {errors}")
"""

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .error_handlers import ConfigurationError

# Characters AutoCAD rejects in symbol table names (layers, styles).
_INVALID_SYMBOL_CHARS = re.compile(r'[<>/\\":;?*|=`]')

# A DXF value occupies exactly one line.
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable configuration for one CAD generator.

    Attributes:
        handle_seed: First value issued by the handle allocator. The
            allocator rejects seeds inside the reserved skeleton range.
        coordinate_precision: Decimal places written for float values.
        geometry_layer: Layer that receives translated vector entities.
        text_layer: Layer that receives text entities.
        text_origin: (x, y) insertion point of the first text entity.
        text_line_pitch: Vertical distance between successive text entities.
        text_height: Text height written to TEXT entities and the Standard style.
        lineweight_enabled: Whether element thickness is written as lineweight.
        lineweight_scale: Hundredths of a millimetre per thickness unit.
            The default converts PDF points.
        metric: Metric drawing units when True, imperial otherwise.
        limits: (x, y) upper corner of the drawing limits.
        log_level: Logging level name.

    Raises:
        ValueError: If any parameter is outside its acceptable range.
    """

    handle_seed: int = 0x20  # first handle above the reserved skeleton range
    coordinate_precision: int = 6
    geometry_layer: str = "0"
    text_layer: str = "0"
    text_origin: Tuple[float, float] = (0.0, 0.0)
    text_line_pitch: float = 10.0
    text_height: float = 2.5
    lineweight_enabled: bool = True
    lineweight_scale: float = 35.2778
    metric: bool = True
    limits: Tuple[float, float] = (420.0, 297.0)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter is outside acceptable range.
        """
        if self.handle_seed <= 0:
            raise ValueError(f"handle_seed must be positive, got {self.handle_seed}")
        if not 0 <= self.coordinate_precision <= 16:
            raise ValueError(
                "coordinate_precision must be between 0 and 16, "
                f"got {self.coordinate_precision}"
            )
        for layer in (self.geometry_layer, self.text_layer):
            if not isinstance(layer, str) or not layer:
                raise ValueError(f"Layer names must be non-empty strings, got {layer!r}")
            if _CONTROL_CHARS.search(layer):
                raise ValueError(f"Layer name contains control characters: {layer!r}")
        if len(self.text_origin) != 2:
            raise ValueError(f"text_origin must be an (x, y) pair, got {self.text_origin}")
        if self.text_line_pitch <= 0:
            raise ValueError(
                f"text_line_pitch must be positive, got {self.text_line_pitch}"
            )
        if self.text_height <= 0:
            raise ValueError(f"text_height must be positive, got {self.text_height}")
        if self.lineweight_scale <= 0:
            raise ValueError(
                f"lineweight_scale must be positive, got {self.lineweight_scale}"
            )
        if len(self.limits) != 2 or min(self.limits) <= 0:
            raise ValueError(f"limits must be a positive (x, y) pair, got {self.limits}")
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log_level: {self.log_level}")

    @property
    def layers(self) -> List[str]:
        """Layer names in table order, without duplicates."""
        names: List[str] = []
        for name in ("0", self.geometry_layer, self.text_layer):
            if name not in names:
                names.append(name)
        return names


class Config:
    """Static utility class for loading and validating configuration files.

    The YAML file is organised in sections; each (section, key) pair maps
    onto one GeneratorConfig field. Missing sections or keys keep their
    defaults.
    """

    # (section, key) -> GeneratorConfig field
    _FIELD_MAP: Dict[Tuple[str, str], str] = {
        ("generator", "handle_seed"): "handle_seed",
        ("generator", "coordinate_precision"): "coordinate_precision",
        ("layers", "geometry"): "geometry_layer",
        ("layers", "text"): "text_layer",
        ("text_layout", "origin"): "text_origin",
        ("text_layout", "line_pitch"): "text_line_pitch",
        ("text_layout", "height"): "text_height",
        ("lineweight", "enabled"): "lineweight_enabled",
        ("lineweight", "scale"): "lineweight_scale",
        ("drawing", "metric"): "metric",
        ("drawing", "limits"): "limits",
        ("logging", "level"): "log_level",
    }

    _PAIR_FIELDS = ("text_origin", "limits")

    @staticmethod
    def load(config_path: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """Load generator configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file. If None, the
                built-in defaults are returned.

        Returns:
            GeneratorConfig built from the file contents.

        Raises:
            ConfigurationError: If the file does not exist, is not valid YAML,
                does not contain a dictionary, or holds out-of-range values.
        """
        if config_path is None:
            return GeneratorConfig()

        config_file_path = Path(config_path)
        if not config_file_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_file_path}"
            )

        try:
            with open(config_file_path, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse configuration file: {config_file_path}",
                original_error=e,
            ) from e

        if config_dict is None:
            return GeneratorConfig()
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration file must contain a YAML dictionary")

        return Config.from_dict(config_dict)

    @staticmethod
    def from_dict(config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Build a GeneratorConfig from a sectioned dictionary.

        Args:
            config_dict: Dictionary shaped like the YAML configuration file.

        Returns:
            GeneratorConfig with the provided values applied over defaults.

        Raises:
            ConfigurationError: If a section is not a mapping, a key is
                unknown, or a value is out of range.
        """
        kwargs: Dict[str, Any] = {}
        for section_name, section in config_dict.items():
            if not isinstance(section, dict):
                raise ConfigurationError(
                    f"Configuration section '{section_name}' must be a mapping",
                    config_key=str(section_name),
                )
            for key, value in section.items():
                field_name = Config._FIELD_MAP.get((section_name, key))
                if field_name is None:
                    raise ConfigurationError(
                        f"Unknown configuration key: {section_name}.{key}",
                        config_key=f"{section_name}.{key}",
                    )
                if field_name in Config._PAIR_FIELDS:
                    try:
                        value = tuple(float(v) for v in value)
                    except (TypeError, ValueError) as e:
                        raise ConfigurationError(
                            f"{section_name}.{key} must be a list of two numbers",
                            config_key=f"{section_name}.{key}",
                            original_error=e,
                        ) from e
                kwargs[field_name] = value

        try:
            return GeneratorConfig(**kwargs)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid configuration value: {e}", original_error=e
            ) from e

    @staticmethod
    def to_dict(config: GeneratorConfig) -> Dict[str, Dict[str, Any]]:
        """Convert a GeneratorConfig back into the sectioned layout.

        Args:
            config: Configuration to convert.

        Returns:
            Dictionary that Config.from_dict accepts.
        """
        values = {f.name: getattr(config, f.name) for f in fields(config)}
        result: Dict[str, Dict[str, Any]] = {}
        for (section_name, key), field_name in Config._FIELD_MAP.items():
            value = values[field_name]
            if field_name in Config._PAIR_FIELDS:
                value = list(value)
            result.setdefault(section_name, {})[key] = value
        return result

    @staticmethod
    def validate(config: GeneratorConfig) -> List[str]:
        """Validate symbol names that are written into the DXF tables.

        Args:
            config: GeneratorConfig object to validate.

        Returns:
            List of error messages. Empty list if all names are valid.
        """
        errors: List[str] = []

        names_to_check = [
            ("layers.geometry", config.geometry_layer),
            ("layers.text", config.text_layer),
        ]

        for config_key, name in names_to_check:
            if _INVALID_SYMBOL_CHARS.search(name):
                errors.append(f"Invalid characters in {config_key}: {name!r}")
            elif name != name.strip():
                errors.append(
                    f"Leading or trailing whitespace in {config_key}: {name!r}"
                )
            elif len(name) > 255:
                errors.append(f"Name too long for {config_key}: {len(name)} chars")

        return errors
