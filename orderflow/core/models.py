"""
Order Flow Data Models.

Core data structures passed between the host and the indicator engine:
- Bar: One price bar with aggressor-side volume split
- VolumeProfileLevel: Traded volume at a single price inside one bar
- ProfileAvailable / ProfileUnavailable: Optional per-bar profile data
- AggregatorState: Running session key and cumulative delta
- BarDeltas: Result of one aggregation step
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple


def clean_volume(value: float | None) -> float:
    """Treat missing, non-finite or negative volume as zero."""
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return float(value)


class DayKey(NamedTuple):
    """Calendar-day identity of a bar (year, month, day)."""

    year: int
    month: int
    day: int


@dataclass(frozen=True)
class Bar:
    """
    Single price bar as delivered by the host.

    bid_volume is volume traded by sell aggressors (hitting the bid),
    offer_volume is volume traded by buy aggressors (lifting the offer).
    """

    index: int
    timestamp: datetime
    high: float
    volume: float = 0.0
    bid_volume: float = 0.0
    offer_volume: float = 0.0
    open: float | None = None
    low: float | None = None
    close: float | None = None

    @property
    def delta(self) -> float:
        """Aggressor delta (positive = net buying pressure)."""
        return clean_volume(self.offer_volume) - clean_volume(self.bid_volume)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "index": self.index,
            "timestamp": self.timestamp.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
            "bid_volume": self.bid_volume,
            "offer_volume": self.offer_volume,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Bar":
        """Create from dictionary."""
        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)

        return cls(
            index=int(data["index"]),
            timestamp=timestamp,
            high=float(data["high"]),
            volume=clean_volume(_optional_float(data.get("volume"))),
            bid_volume=clean_volume(_optional_float(data.get("bid_volume"))),
            offer_volume=clean_volume(_optional_float(data.get("offer_volume"))),
            open=_optional_float(data.get("open")),
            low=_optional_float(data.get("low")),
            close=_optional_float(data.get("close")),
        )


def _optional_float(value) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class VolumeProfileLevel:
    """
    Volume at one price level of a bar's profile.

    vol is the total traded volume; bid_vol and ask_vol are the
    aggressor-side breakdown (zero when the feed doesn't split them).
    """

    price: float
    vol: float = 0.0
    bid_vol: float = 0.0
    ask_vol: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "price": self.price,
            "vol": self.vol,
            "bid_vol": self.bid_vol,
            "ask_vol": self.ask_vol,
        }


@dataclass(frozen=True)
class ProfileAvailable:
    """Profile data supplied by the host for one bar (may be empty)."""

    levels: Sequence[VolumeProfileLevel] = ()


@dataclass(frozen=True)
class ProfileUnavailable:
    """The host provides no profile data (feature not enabled)."""


PROFILE_UNAVAILABLE = ProfileUnavailable()

ProfileData = ProfileAvailable | ProfileUnavailable


@dataclass
class AggregatorState:
    """
    Running state of one bar aggregator.

    Owned by exactly one indicator instance and mutated only by
    process_bar(). session_key is None until the first bar arrives.
    """

    session_key: DayKey | None = None
    cumulative_delta: float = 0.0


@dataclass(frozen=True)
class BarDeltas:
    """Delta values produced by one aggregation step."""

    bar_delta: float
    cumulative_delta: float
    reset: bool = False
