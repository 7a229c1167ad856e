"""
Indicator configuration.

One dataclass per indicator variant, validated once at construction.
Defaults match the values a chart user sees before changing anything.
"""

import logging
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TypeVar

from dotenv import load_dotenv

from .session import validate_open_hour

logger = logging.getLogger(__name__)

ENV_PREFIX = "ORDERFLOW_"

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

# Minimum font size accepted by the chart host
MIN_FONT_SIZE = 8

# Minimum pixel offset between the candle high and the first label row
MIN_LABEL_OFFSET = 2

# Extra pixels between stacked text rows
ROW_PADDING = 4


def _check_color(name: str, value: str) -> None:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"{name} must be a hex color like '#55cc55', got {value!r}")


@dataclass
class DeltaColors:
    """Colors shared by the delta text indicators."""

    positive: str = "#55cc55"  # Net buying
    negative: str = "#dd5555"  # Net selling
    neutral: str = "#888888"  # Exactly zero
    label: str = "#aaaaaa"  # Volume row

    def __post_init__(self) -> None:
        """Validate color values."""
        for f in fields(self):
            _check_color(f.name, getattr(self, f.name))


@dataclass
class DeltaGridConfig:
    """Configuration for the volume / delta / cumulative delta grid."""

    colors: DeltaColors = field(default_factory=DeltaColors)
    font_size: int = 10

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.font_size < MIN_FONT_SIZE:
            raise ValueError(f"font_size must be at least {MIN_FONT_SIZE}")

    @property
    def row_gap(self) -> int:
        """Pixel distance between text rows."""
        return self.font_size + ROW_PADDING


@dataclass
class CandleInfoConfig:
    """Configuration for the volume / delta labels above each candle."""

    colors: DeltaColors = field(default_factory=DeltaColors)
    font_size: int = 10
    label_offset: int = 8  # px above the high wick

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.font_size < MIN_FONT_SIZE:
            raise ValueError(f"font_size must be at least {MIN_FONT_SIZE}")
        if self.label_offset < MIN_LABEL_OFFSET:
            raise ValueError(f"label_offset must be at least {MIN_LABEL_OFFSET}")

    @property
    def row_gap(self) -> int:
        """Pixel distance between text rows."""
        return self.font_size + ROW_PADDING


@dataclass
class PocBoxesConfig:
    """
    Configuration for the per-bar Point of Control boxes.

    session_open_hour is evaluated in the machine's local time; the
    default of 17 matches the CME Globex open in Central time.
    """

    poc_color: str = "#FFD700"  # Gold
    opacity: int = 70  # Percent, 10-100
    session_open_hour: int = 17
    tick_size: float = 0.25  # Used when the instrument's tick size is unknown

    def __post_init__(self) -> None:
        """Validate configuration."""
        _check_color("poc_color", self.poc_color)
        if not 10 <= self.opacity <= 100:
            raise ValueError("opacity must be between 10 and 100")
        validate_open_hour(self.session_open_hour)
        if self.tick_size < 0.01:
            raise ValueError("tick_size must be at least 0.01")

    @property
    def opacity_fraction(self) -> float:
        """Opacity as a 0-1 fraction for the fill style."""
        return self.opacity / 100


ConfigT = TypeVar("ConfigT", DeltaGridConfig, CandleInfoConfig, PocBoxesConfig)


def _coerce(raw: str, current):
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    return raw


def load_config_from_env(config_cls: type[ConfigT], env_path: Path | None = None) -> ConfigT:
    """
    Build a config from ORDERFLOW_* environment variables.

    Top-level scalar fields map to ORDERFLOW_<FIELD> (e.g.
    ORDERFLOW_SESSION_OPEN_HOUR=16). Color fields of DeltaColors map to
    ORDERFLOW_COLOR_<NAME>. A .env file is loaded first when present.

    Args:
        config_cls: Config dataclass to build
        env_path: Optional explicit .env path

    Returns:
        Validated config instance
    """
    if env_path is not None:
        load_dotenv(env_path)
    else:
        load_dotenv()

    defaults = config_cls()
    kwargs = {}

    for f in fields(config_cls):
        current = getattr(defaults, f.name)
        if isinstance(current, DeltaColors):
            color_kwargs = {}
            for color_field in fields(DeltaColors):
                raw = os.getenv(f"{ENV_PREFIX}COLOR_{color_field.name.upper()}")
                if raw is not None:
                    color_kwargs[color_field.name] = raw
            if color_kwargs:
                kwargs[f.name] = DeltaColors(**color_kwargs)
            continue

        raw = os.getenv(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is not None:
            kwargs[f.name] = _coerce(raw, current)

    if kwargs:
        logger.info(f"{config_cls.__name__} overrides from environment: {sorted(kwargs)}")

    return config_cls(**kwargs)
