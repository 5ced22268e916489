# src/ast3d_core/config.py
"""
Builder configuration.

A configuration is a small nested mapping, usually written in YAML:

    layout:
      algorithm: grid
      node_spacing: 40
    visual:
      colors:
        function: "#00FF00"

`load_config` validates such a mapping against a Cerberus schema before turning
it into a `BuilderConfig`. Omitted keys keep their defaults, and a partial colour
table is merged over the default one.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cerberus
import yaml

from .constants import DEFAULT_NODE_COLORS, NEUTRAL_GRAY
from .errors import DiagnosableError, format_diagnostic_report

logger = logging.getLogger(__name__)


class LayoutAlgorithm(Enum):
    HIERARCHICAL = "hierarchical"
    FORCE_DIRECTED = "force-directed"
    CIRCULAR = "circular"
    GRID = "grid"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class LayoutConfig:
    algorithm: LayoutAlgorithm = LayoutAlgorithm.HIERARCHICAL
    node_spacing: float = 2.0


@dataclass(frozen=True)
class MaterialConfig:
    metalness: float = 0.1
    roughness: float = 0.7
    opacity: float = 0.9


@dataclass(frozen=True)
class VisualConfig:
    theme: str = "dark"
    colors: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_NODE_COLORS))
    default_color: str = NEUTRAL_GRAY
    material: MaterialConfig = field(default_factory=MaterialConfig)

    def color_for(self, type_tag: str) -> str:
        return self.colors.get(type_tag, self.default_color)


@dataclass(frozen=True)
class BuilderConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    visual: VisualConfig = field(default_factory=VisualConfig)

    def to_dict(self) -> Dict[str, Any]:
        """The raw mapping form accepted by `load_config`."""
        return {
            "layout": {
                "algorithm": self.layout.algorithm.value,
                "node_spacing": self.layout.node_spacing,
            },
            "visual": {
                "theme": self.visual.theme,
                "colors": dict(self.visual.colors),
                "default_color": self.visual.default_color,
                "material": {
                    "metalness": self.visual.material.metalness,
                    "roughness": self.visual.material.roughness,
                    "opacity": self.visual.material.opacity,
                },
            },
        }


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(base: BuilderConfig, overrides: Dict[str, Any]) -> BuilderConfig:
    """Applies a partial raw mapping on top of an existing configuration and validates the result."""
    return load_config(_deep_merge(base.to_dict(), overrides))


class ConfigParsingError(DiagnosableError):
    """Raised when a configuration mapping or file does not match the schema."""
    def __init__(self, errors: Union[Dict[str, Any], str], source: Optional[Path] = None):
        self.errors = errors
        self.source = source
        super().__init__(str(self))

    def _error_lines(self):
        if isinstance(self.errors, str):
            return [f"  - {self.errors}"]
        return [f"  - Field '{k}': {v}" for k, v in sorted(self.errors.items())]

    def __str__(self):
        return "Builder configuration is invalid:\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Configuration Error",
            details=str(self),
            suggestion=(
                "Valid layout algorithms are: "
                + ", ".join(a.value for a in LayoutAlgorithm)
                + ". 'node_spacing' must be a positive number and material values lie in [0, 1]."
            ),
            context={'source_file': self.source}
        )


class ConfigValidator(cerberus.Validator):
    """Cerberus validator with a 'positive' rule for spacing values."""

    def _validate_positive(self, constraint, field, value):
        """
        Validates that a number is strictly greater than zero.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, (int, float)) and value <= 0:
            self._error(field, f"must be a positive number, got {value}")


_unit_interval = {"type": "number", "min": 0, "max": 1}

CONFIG_SCHEMA = {
    "layout": {
        "type": "dict",
        "required": False,
        "schema": {
            "algorithm": {"type": "string", "allowed": [a.value for a in LayoutAlgorithm]},
            "node_spacing": {"type": "number", "positive": True},
        },
    },
    "visual": {
        "type": "dict",
        "required": False,
        "schema": {
            "theme": {"type": "string", "allowed": ["dark", "light", "custom"]},
            "colors": {
                "type": "dict",
                "keysrules": {"type": "string"},
                "valuesrules": {"type": "string", "empty": False},
            },
            "default_color": {"type": "string", "empty": False},
            "material": {
                "type": "dict",
                "schema": {
                    "metalness": _unit_interval,
                    "roughness": _unit_interval,
                    "opacity": _unit_interval,
                },
            },
        },
    },
}


def load_config(raw: Optional[Dict[str, Any]] = None, source: Optional[Path] = None) -> BuilderConfig:
    """Validates a raw configuration mapping and returns the BuilderConfig it describes."""
    if not raw:
        return BuilderConfig()

    validator = ConfigValidator(CONFIG_SCHEMA)
    validator.allow_unknown = False
    if not validator.validate(raw):
        raise ConfigParsingError(validator.errors, source)

    layout_raw = raw.get("layout", {})
    visual_raw = raw.get("visual", {})
    material_raw = visual_raw.get("material", {})
    defaults = BuilderConfig()

    layout = LayoutConfig(
        algorithm=LayoutAlgorithm(layout_raw.get("algorithm", defaults.layout.algorithm.value)),
        node_spacing=float(layout_raw.get("node_spacing", defaults.layout.node_spacing)),
    )
    visual = VisualConfig(
        theme=visual_raw.get("theme", defaults.visual.theme),
        colors={**defaults.visual.colors, **visual_raw.get("colors", {})},
        default_color=visual_raw.get("default_color", defaults.visual.default_color),
        material=MaterialConfig(**{**defaults.visual.material.__dict__, **material_raw}),
    )
    config = BuilderConfig(layout=layout, visual=visual)
    logger.debug(f"Loaded builder configuration: layout={layout.algorithm}, spacing={layout.node_spacing}")
    return config


def load_config_file(path: Union[str, Path]) -> BuilderConfig:
    """Reads a YAML configuration file and validates it with `load_config`."""
    source = Path(path).resolve()
    if not source.is_file():
        raise ConfigParsingError(f"Configuration file not found at path: {source}", source)
    try:
        with source.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigParsingError(f"Invalid YAML syntax: {e}", source) from e
    if content is None:
        return BuilderConfig()
    if not isinstance(content, dict):
        raise ConfigParsingError("The root of the configuration file must be a mapping.", source)
    return load_config(content, source)
