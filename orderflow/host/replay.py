"""
Replay Host.

A minimal stand-in for the charting runtime: feeds stored bars to an
indicator in chronological order, one redraw pass at a time, and keeps
the keyed graphics of the previous pass so it can report which objects
a real host would reuse, add, or remove.

Usage:
    host = ReplayHost(get_indicator("delta_grid"))
    result = host.run(bars)
    print(result.outputs[0].to_dict())
"""

import bisect
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from orderflow.core.errors import BarOrderError
from orderflow.core.models import PROFILE_UNAVAILABLE, Bar, ProfileAvailable, ProfileData
from orderflow.graphics.primitives import IndicatorOutput
from orderflow.indicators.base import Indicator
from orderflow.indicators.volume_profile import BarProfileBuilder, Trade

logger = logging.getLogger(__name__)


def build_bar_profiles(
    bars: Sequence[Bar],
    trades: Iterable[Trade],
    tick_size: float,
) -> dict[int, ProfileAvailable]:
    """
    Assign trades to bars and build each bar's volume profile.

    A trade belongs to the latest bar whose timestamp is at or before
    the trade's. Trades before the first bar are dropped.

    Args:
        bars: Bars in chronological order
        trades: Tick trades (any order)
        tick_size: Price bucket size

    Returns:
        Mapping of bar index -> ProfileAvailable (bars without trades
        get an empty level list)
    """
    starts = [bar.timestamp for bar in bars]
    builders = {bar.index: BarProfileBuilder(tick_size) for bar in bars}

    dropped = 0
    for trade in trades:
        position = bisect.bisect_right(starts, trade.timestamp) - 1
        if position < 0:
            dropped += 1
            continue
        builders[bars[position].index].add_trade(trade)

    if dropped:
        logger.debug(f"Dropped {dropped} trades before the first bar")

    return {index: ProfileAvailable(tuple(b.get_levels())) for index, b in builders.items()}


def check_bar_order(previous: Bar | None, bar: Bar) -> None:
    """
    Enforce non-decreasing index and timestamp between consecutive bars.

    Raises:
        BarOrderError: If bar comes before previous
    """
    if previous is None:
        return
    if bar.index < previous.index or bar.timestamp < previous.timestamp:
        raise BarOrderError(
            f"Bar {bar.index} ({bar.timestamp.isoformat()}) arrived after "
            f"bar {previous.index} ({previous.timestamp.isoformat()})",
            index=bar.index,
            previous_index=previous.index,
        )


@dataclass
class RedrawStats:
    """Keyed diff between two redraw passes."""

    added: int = 0
    reused: int = 0
    removed: int = 0


@dataclass
class ReplayResult:
    """Outputs of one redraw pass."""

    outputs: dict[int, IndicatorOutput] = field(default_factory=dict)
    stats: RedrawStats = field(default_factory=RedrawStats)

    @property
    def drawn_bars(self) -> list[int]:
        """Indexes of bars that produced graphics."""
        return [index for index, output in self.outputs.items() if not output.is_empty]


class ReplayHost:
    """
    Drives one indicator instance over stored bars.

    Each run() is a full redraw pass: init() once, then map() exactly
    once per bar in order.
    """

    def __init__(self, indicator: Indicator, contract_tick_size: float | None = None):
        """
        Initialize the host.

        Args:
            indicator: Indicator instance owned by this host
            contract_tick_size: Instrument tick size passed to init()
        """
        self.indicator = indicator
        self.contract_tick_size = contract_tick_size
        self._previous_keys: set[str] = set()

    def run(
        self,
        bars: Iterable[Bar],
        profiles: dict[int, ProfileAvailable] | None = None,
    ) -> ReplayResult:
        """
        Run one redraw pass.

        Args:
            bars: Bars in chronological order
            profiles: Per-bar profile data (only passed to indicators
                that request volume profiles)

        Returns:
            ReplayResult with per-bar outputs and keyed diff stats

        Raises:
            BarOrderError: If bars are out of order
        """
        self.indicator.init(contract_tick_size=self.contract_tick_size)

        result = ReplayResult()
        previous: Bar | None = None
        keys: set[str] = set()

        for bar in bars:
            check_bar_order(previous, bar)
            previous = bar

            output = self.indicator.map(bar, self._profile_for(bar, profiles))
            result.outputs[bar.index] = output
            keys.update(output.keys)

        result.stats = RedrawStats(
            added=len(keys - self._previous_keys),
            reused=len(keys & self._previous_keys),
            removed=len(self._previous_keys - keys),
        )
        self._previous_keys = keys

        logger.info(
            f"{self.indicator.name}: {len(result.outputs)} bars, "
            f"{len(result.drawn_bars)} drawn, {result.stats.added} keys added, "
            f"{result.stats.reused} reused, {result.stats.removed} removed"
        )
        return result

    def _profile_for(self, bar: Bar, profiles: dict[int, ProfileAvailable] | None) -> ProfileData:
        if not self.indicator.requires_volume_profile or profiles is None:
            return PROFILE_UNAVAILABLE
        return profiles.get(bar.index, PROFILE_UNAVAILABLE)
