#!/usr/bin/env python3
"""
Unit tests for the core engine: session clock, bar aggregator, config.

Run with:
    python -m pytest tests/test_core.py -v
"""

import sys
from dataclasses import fields
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path for standalone execution
sys.path.insert(0, str(Path(__file__).parent.parent))

from orderflow.core import (
    AggregatorState,
    Bar,
    CandleInfoConfig,
    CumulativeDeltaAggregator,
    DayKey,
    DeltaColors,
    DeltaGridConfig,
    PocBoxesConfig,
    clean_volume,
    current_session_start,
    day_key,
    is_in_current_session,
    load_config_from_env,
    process_bar,
)


def make_bar(index: int, timestamp: datetime, bid: float = 0.0, offer: float = 0.0) -> Bar:
    return Bar(
        index=index,
        timestamp=timestamp,
        high=100.0,
        volume=bid + offer,
        bid_volume=bid,
        offer_volume=offer,
    )


# =============================================================================
# Session Clock
# =============================================================================


class TestCurrentSessionStart:
    """Tests for current_session_start."""

    def test_before_open_hour_uses_previous_day(self) -> None:
        """At 10:00 with a 17:00 open, the session began yesterday at 17:00."""
        now = datetime(2026, 3, 10, 10, 42, 13, 500)
        assert current_session_start(17, now) == datetime(2026, 3, 9, 17, 0)

    def test_after_open_hour_uses_today(self) -> None:
        """At 20:00 with a 17:00 open, the session began today at 17:00."""
        now = datetime(2026, 3, 10, 20, 5)
        assert current_session_start(17, now) == datetime(2026, 3, 10, 17, 0)

    def test_exact_open_hour_counts_as_open(self) -> None:
        """The open hour itself belongs to the new session."""
        now = datetime(2026, 3, 10, 17, 0, 1)
        assert current_session_start(17, now) == datetime(2026, 3, 10, 17, 0)

    def test_month_boundary(self) -> None:
        """Subtracting a day crosses month boundaries correctly."""
        now = datetime(2026, 3, 1, 2, 0)
        assert current_session_start(17, now) == datetime(2026, 2, 28, 17, 0)

    def test_midnight_open(self) -> None:
        """An open hour of 0 always starts today."""
        now = datetime(2026, 3, 10, 0, 30)
        assert current_session_start(0, now) == datetime(2026, 3, 10, 0, 0)

    def test_defaults_to_wall_clock(self) -> None:
        """Without an injected clock the start is never in the future."""
        start = current_session_start(datetime.now().hour)
        assert start <= datetime.now()
        assert start.minute == 0 and start.second == 0 and start.microsecond == 0

    def test_recomputed_per_call(self) -> None:
        """The boundary advances as the clock advances."""
        before = current_session_start(17, datetime(2026, 3, 10, 16, 59))
        after = current_session_start(17, datetime(2026, 3, 10, 17, 1))
        assert after - before == timedelta(days=1)

    def test_invalid_open_hour(self) -> None:
        """Open hours outside 0-23 are rejected."""
        with pytest.raises(ValueError):
            current_session_start(24, datetime(2026, 3, 10, 12))
        with pytest.raises(ValueError):
            current_session_start(-1, datetime(2026, 3, 10, 12))


class TestSessionMembership:
    """Tests for is_in_current_session and day_key."""

    def test_bar_before_session_start(self) -> None:
        now = datetime(2026, 3, 10, 20, 0)
        assert not is_in_current_session(datetime(2026, 3, 10, 16, 59), 17, now)

    def test_bar_at_session_start(self) -> None:
        now = datetime(2026, 3, 10, 20, 0)
        assert is_in_current_session(datetime(2026, 3, 10, 17, 0), 17, now)

    def test_aware_timestamp(self) -> None:
        """Aware bar timestamps compare against the local session start."""
        now = datetime(2026, 3, 10, 20, 0)
        local_start = current_session_start(17, now).astimezone()
        bar_time = (local_start + timedelta(minutes=5)).astimezone(timezone.utc)
        assert is_in_current_session(bar_time, 17, now)

    def test_day_key(self) -> None:
        assert day_key(datetime(2026, 3, 10, 23, 59)) == DayKey(2026, 3, 10)
        assert day_key(datetime(2026, 3, 10, 0, 0)) != day_key(datetime(2026, 3, 11, 0, 0))


# =============================================================================
# Bar Aggregator
# =============================================================================


class TestProcessBar:
    """Tests for the process_bar step function."""

    def test_first_bar_resets(self) -> None:
        """The first bar sets the session key and starts from zero."""
        state = AggregatorState()
        deltas = process_bar(state, make_bar(0, datetime(2026, 3, 10, 9), bid=3, offer=5))

        assert deltas.reset
        assert deltas.bar_delta == 2
        assert deltas.cumulative_delta == 2
        assert state.session_key == DayKey(2026, 3, 10)

    def test_accumulates_within_day(self) -> None:
        """Cumulative delta is the exact sum of bar deltas in one day."""
        state = AggregatorState()
        start = datetime(2026, 3, 10, 9)
        pairs = [(3, 5), (10, 4), (2, 2), (0, 7.5)]

        expected = 0.0
        for i, (bid, offer) in enumerate(pairs):
            deltas = process_bar(state, make_bar(i, start + timedelta(minutes=i), bid, offer))
            expected += offer - bid
            assert deltas.cumulative_delta == expected
            assert deltas.reset == (i == 0)

    def test_resets_to_own_delta_on_new_day(self) -> None:
        """After a day change the cumulative equals the new bar's own delta."""
        state = AggregatorState()
        process_bar(state, make_bar(0, datetime(2026, 3, 10, 23, 0), bid=1, offer=20))
        deltas = process_bar(state, make_bar(1, datetime(2026, 3, 11, 0, 0), bid=4, offer=1))

        assert deltas.reset
        assert deltas.cumulative_delta == -3

    def test_custom_day_key(self) -> None:
        """A custom key function controls when sessions reset."""
        state = AggregatorState()

        def by_hour(ts: datetime) -> DayKey:
            return DayKey(ts.year, ts.month, ts.hour)

        process_bar(state, make_bar(0, datetime(2026, 3, 10, 9, 0), offer=5), by_hour)
        deltas = process_bar(state, make_bar(1, datetime(2026, 3, 10, 10, 0), offer=1), by_hour)
        assert deltas.cumulative_delta == 1

    def test_missing_and_negative_volume_is_zero(self) -> None:
        """None or negative volumes count as zero."""
        state = AggregatorState()
        bar = Bar(
            index=0,
            timestamp=datetime(2026, 3, 10, 9),
            high=1.0,
            bid_volume=None,
            offer_volume=-5,
        )
        deltas = process_bar(state, bar)
        assert deltas.bar_delta == 0
        assert clean_volume(None) == 0.0
        assert clean_volume(-1) == 0.0

    def test_non_finite_volume_is_zero(self) -> None:
        """NaN and infinite volumes count as zero and don't poison the session."""
        state = AggregatorState()
        nan_bar = Bar(
            index=0,
            timestamp=datetime(2026, 3, 10, 9),
            high=1.0,
            volume=float("nan"),
            bid_volume=float("nan"),
            offer_volume=2.0,
        )
        deltas = process_bar(state, nan_bar)
        assert deltas.bar_delta == 2.0

        deltas = process_bar(state, make_bar(1, datetime(2026, 3, 10, 9, 1), bid=1, offer=4))
        assert deltas.cumulative_delta == 5.0
        assert clean_volume(float("inf")) == 0.0
        assert clean_volume(float("-inf")) == 0.0


class TestCumulativeDeltaAggregator:
    """Tests for the stateful aggregator wrapper."""

    def test_update_and_reset(self) -> None:
        agg = CumulativeDeltaAggregator()
        assert agg.session_key is None

        agg.update(make_bar(0, datetime(2026, 3, 10, 9), bid=1, offer=4))
        agg.update(make_bar(1, datetime(2026, 3, 10, 9, 1), bid=1, offer=4))
        assert agg.cumulative_delta == 6

        agg.reset()
        assert agg.cumulative_delta == 0
        assert agg.session_key is None

    def test_instances_do_not_share_state(self) -> None:
        a = CumulativeDeltaAggregator()
        b = CumulativeDeltaAggregator()
        a.update(make_bar(0, datetime(2026, 3, 10, 9), offer=10))
        assert b.cumulative_delta == 0

    def test_state_holds_only_key_and_total(self) -> None:
        """The session key and running total are the whole aggregation state."""
        assert [f.name for f in fields(AggregatorState)] == ["session_key", "cumulative_delta"]


# =============================================================================
# Configuration
# =============================================================================


class TestConfig:
    """Tests for indicator configuration validation."""

    def test_defaults(self) -> None:
        config = PocBoxesConfig()
        assert config.poc_color == "#FFD700"
        assert config.opacity_fraction == 0.7
        assert config.session_open_hour == 17
        assert DeltaGridConfig().row_gap == 14

    def test_opacity_range(self) -> None:
        with pytest.raises(ValueError):
            PocBoxesConfig(opacity=5)
        with pytest.raises(ValueError):
            PocBoxesConfig(opacity=101)
        assert PocBoxesConfig(opacity=10).opacity_fraction == 0.1

    def test_open_hour_range(self) -> None:
        with pytest.raises(ValueError):
            PocBoxesConfig(session_open_hour=24)

    def test_tick_size_minimum(self) -> None:
        with pytest.raises(ValueError):
            PocBoxesConfig(tick_size=0.001)

    def test_font_size_and_offset(self) -> None:
        with pytest.raises(ValueError):
            DeltaGridConfig(font_size=7)
        with pytest.raises(ValueError):
            CandleInfoConfig(label_offset=1)

    def test_color_validation(self) -> None:
        with pytest.raises(ValueError):
            DeltaColors(positive="green")
        assert DeltaColors(neutral="#abc").neutral == "#abc"

    def test_env_overrides(self, monkeypatch, tmp_path) -> None:
        """ORDERFLOW_* variables override config defaults."""
        monkeypatch.setenv("ORDERFLOW_SESSION_OPEN_HOUR", "16")
        monkeypatch.setenv("ORDERFLOW_OPACITY", "40")
        config = load_config_from_env(PocBoxesConfig, env_path=tmp_path / "missing.env")

        assert config.session_open_hour == 16
        assert config.opacity == 40

    def test_env_color_overrides(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("ORDERFLOW_COLOR_POSITIVE", "#00ff00")
        config = load_config_from_env(DeltaGridConfig, env_path=tmp_path / "missing.env")
        assert config.colors.positive == "#00ff00"
        assert config.colors.negative == "#dd5555"

    def test_env_invalid_value(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("ORDERFLOW_OPACITY", "0")
        with pytest.raises(ValueError):
            load_config_from_env(PocBoxesConfig, env_path=tmp_path / "missing.env")
