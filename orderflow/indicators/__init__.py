"""
Order flow chart indicators.

Available indicators:
- delta_grid: Volume / delta / cumulative delta rows in a separate panel
- candle_info: Volume and delta labels above each candle high
- poc_boxes: Point of Control box per bar, current session only

Usage:
    from orderflow.indicators import get_indicator

    indicator = get_indicator("delta_grid")
    indicator.init()
    output = indicator.map(bar)
"""

from .base import AreaChoice, Indicator
from .candle_info import CandleInfo
from .delta_grid import DeltaGrid
from .poc_boxes import PocBoxes
from .volume_profile import BarProfileBuilder, Trade, find_point_of_control, level_metric

# Registry of all indicators
_INDICATORS: dict[str, type[Indicator]] = {
    "delta_grid": DeltaGrid,
    "candle_info": CandleInfo,
    "poc_boxes": PocBoxes,
}


def _normalize(name: str) -> str:
    return name.lower().replace(" ", "_").replace("-", "_")


def get_indicator(name: str, config=None, **kwargs) -> Indicator:
    """
    Create an indicator by name.

    Args:
        name: Indicator name (case-insensitive, underscores/hyphens/spaces accepted)
        config: Optional config instance for the indicator
        **kwargs: Extra constructor arguments (e.g. clock for poc_boxes)

    Returns:
        New Indicator instance

    Raises:
        ValueError: If indicator not found
    """
    key = _normalize(name)
    if key not in _INDICATORS:
        available = ", ".join(_INDICATORS.keys())
        raise ValueError(f"Unknown indicator '{name}'. Available: {available}")

    return _INDICATORS[key](config, **kwargs)


def list_indicators() -> list[tuple[str, str]]:
    """
    List available indicators with descriptions.

    Returns:
        List of (name, description) tuples
    """
    return [(name, cls.description) for name, cls in _INDICATORS.items()]


def register_indicator(name: str, indicator_cls: type[Indicator]) -> None:
    """Register a custom indicator class."""
    _INDICATORS[_normalize(name)] = indicator_cls


__all__ = [
    # Base classes
    "AreaChoice",
    "Indicator",
    # Indicators
    "CandleInfo",
    "DeltaGrid",
    "PocBoxes",
    # Volume profile
    "BarProfileBuilder",
    "Trade",
    "find_point_of_control",
    "level_metric",
    # Registry functions
    "get_indicator",
    "list_indicators",
    "register_indicator",
]
