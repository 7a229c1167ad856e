"""
orderflow - Per-bar order flow indicators for chart hosts.

Computes volume, aggressor delta, session-cumulative delta and per-bar
Point of Control, and describes them as keyed graphics primitives.

Quick start::

    from orderflow import Bar, get_indicator

    grid = get_indicator("delta_grid")
    grid.init()
    output = grid.map(bar)
    host_payload = output.to_dict()
"""

from orderflow.core import (
    PROFILE_UNAVAILABLE,
    Bar,
    CandleInfoConfig,
    CumulativeDeltaAggregator,
    DeltaColors,
    DeltaGridConfig,
    PocBoxesConfig,
    ProfileAvailable,
    VolumeProfileLevel,
    current_session_start,
    process_bar,
)
from orderflow.graphics import EMPTY_OUTPUT, IndicatorOutput, du, op, px
from orderflow.indicators import (
    CandleInfo,
    DeltaGrid,
    PocBoxes,
    find_point_of_control,
    get_indicator,
    list_indicators,
)

__version__ = "0.1.0"

__all__ = [
    "Bar",
    "VolumeProfileLevel",
    "ProfileAvailable",
    "PROFILE_UNAVAILABLE",
    "DeltaColors",
    "DeltaGridConfig",
    "CandleInfoConfig",
    "PocBoxesConfig",
    "CumulativeDeltaAggregator",
    "process_bar",
    "current_session_start",
    "find_point_of_control",
    "du",
    "px",
    "op",
    "IndicatorOutput",
    "EMPTY_OUTPUT",
    "DeltaGrid",
    "CandleInfo",
    "PocBoxes",
    "get_indicator",
    "list_indicators",
]
