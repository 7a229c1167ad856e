"""
Bar Aggregator - Running aggressor delta per session.

process_bar() is the single step function: it takes the state object
explicitly, resets it when the bar belongs to a new day, and accumulates
the bar's delta. CumulativeDeltaAggregator wraps one state for an
indicator instance.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from .models import AggregatorState, Bar, BarDeltas, DayKey, clean_volume
from .session import day_key

logger = logging.getLogger(__name__)

DayKeyFn = Callable[[datetime], DayKey]


def process_bar(
    state: AggregatorState,
    bar: Bar,
    day_key_fn: DayKeyFn = day_key,
) -> BarDeltas:
    """
    Fold one bar into the aggregator state.

    The cumulative delta resets whenever the bar's day key differs from
    the stored key, then the bar's own delta is added.

    Args:
        state: Aggregator state (updated in place)
        bar: Bar to process
        day_key_fn: Maps a bar timestamp to its session identity

    Returns:
        BarDeltas with the bar delta and the updated cumulative delta
    """
    key = day_key_fn(bar.timestamp)
    reset = state.session_key is None or state.session_key != key

    if reset:
        state.session_key = key
        state.cumulative_delta = 0.0

    bar_delta = clean_volume(bar.offer_volume) - clean_volume(bar.bid_volume)
    state.cumulative_delta += bar_delta

    return BarDeltas(
        bar_delta=bar_delta,
        cumulative_delta=state.cumulative_delta,
        reset=reset,
    )


class CumulativeDeltaAggregator:
    """
    Owns the aggregation state for one indicator instance.

    Bars must be fed in chronological order, once per bar per redraw.
    Not safe for concurrent use.
    """

    def __init__(self, day_key_fn: DayKeyFn = day_key):
        self.day_key_fn = day_key_fn
        self.state = AggregatorState()

    def update(self, bar: Bar) -> BarDeltas:
        """Process a bar and return its deltas."""
        deltas = process_bar(self.state, bar, self.day_key_fn)
        if deltas.reset:
            logger.debug(f"Session reset at bar {bar.index}: key={self.state.session_key}")
        return deltas

    def reset(self) -> None:
        """Clear all state (session key and cumulative delta)."""
        self.state = AggregatorState()

    @property
    def cumulative_delta(self) -> float:
        """Cumulative delta of the current session."""
        return self.state.cumulative_delta

    @property
    def session_key(self) -> DayKey | None:
        """Day key of the current session, or None before the first bar."""
        return self.state.session_key
