"""
Core order flow engine.

Modules:
- models: Bars, profile levels, aggregator state
- session: Session clock and day keys
- aggregator: Per-bar delta and session-cumulative delta
- config: Validated indicator configuration
- errors: Host-side error types
"""

from orderflow.core.aggregator import CumulativeDeltaAggregator, process_bar
from orderflow.core.config import (
    CandleInfoConfig,
    DeltaColors,
    DeltaGridConfig,
    PocBoxesConfig,
    load_config_from_env,
)
from orderflow.core.errors import BarOrderError, OrderflowError
from orderflow.core.models import (
    PROFILE_UNAVAILABLE,
    AggregatorState,
    Bar,
    BarDeltas,
    DayKey,
    ProfileAvailable,
    ProfileData,
    ProfileUnavailable,
    VolumeProfileLevel,
    clean_volume,
)
from orderflow.core.session import current_session_start, day_key, is_in_current_session

__all__ = [
    "AggregatorState",
    "Bar",
    "BarDeltas",
    "BarOrderError",
    "CandleInfoConfig",
    "CumulativeDeltaAggregator",
    "DayKey",
    "DeltaColors",
    "DeltaGridConfig",
    "OrderflowError",
    "PROFILE_UNAVAILABLE",
    "PocBoxesConfig",
    "ProfileAvailable",
    "ProfileData",
    "ProfileUnavailable",
    "VolumeProfileLevel",
    "clean_volume",
    "current_session_start",
    "day_key",
    "is_in_current_session",
    "load_config_from_env",
    "process_bar",
]
