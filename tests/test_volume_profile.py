"""
Unit tests for the per-bar volume profile.

Tests:
- Point of Control reducer (metric selection, ties, empty/unavailable input)
- BarProfileBuilder
"""

from datetime import datetime

import pytest

from orderflow.core.models import PROFILE_UNAVAILABLE, ProfileAvailable, VolumeProfileLevel
from orderflow.indicators.volume_profile import (
    BarProfileBuilder,
    Trade,
    find_point_of_control,
    level_metric,
)

# =============================================================================
# Test Point of Control
# =============================================================================


class TestFindPointOfControl:
    """Tests for find_point_of_control."""

    def test_unavailable_profile(self) -> None:
        """No profile data means no POC."""
        assert find_point_of_control(PROFILE_UNAVAILABLE) is None
        assert find_point_of_control(None) is None

    def test_empty_profile(self) -> None:
        assert find_point_of_control([]) is None
        assert find_point_of_control(ProfileAvailable(())) is None

    def test_zero_volume_level_never_selected(self) -> None:
        """A level with no volume cannot be the POC."""
        levels = [VolumeProfileLevel(price=100.0, vol=0, bid_vol=0, ask_vol=0)]
        assert find_point_of_control(levels) is None

    def test_metric_is_chosen_per_level(self) -> None:
        """Each level uses bid+ask if non-zero, else vol: 5 vs 2 picks 100."""
        levels = [
            VolumeProfileLevel(price=100.0, bid_vol=3, ask_vol=2, vol=0),
            VolumeProfileLevel(price=101.0, bid_vol=1, ask_vol=1, vol=50),
        ]
        # Level 101 has bid+ask = 2 > 0, so its metric is 2, not 50
        assert level_metric(levels[0]) == 5
        assert level_metric(levels[1]) == 2
        assert find_point_of_control(levels) == 100.0

    def test_vol_fallback(self) -> None:
        """Levels without a bid/ask split rank by vol."""
        levels = [
            VolumeProfileLevel(price=100.0, bid_vol=3, ask_vol=2, vol=0),
            VolumeProfileLevel(price=101.0, bid_vol=0, ask_vol=0, vol=50),
        ]
        assert level_metric(levels[1]) == 50
        assert find_point_of_control(levels) == 101.0

    def test_tie_keeps_first(self) -> None:
        """Equal metrics keep the first level scanned."""
        levels = [
            VolumeProfileLevel(price=99.75, vol=10),
            VolumeProfileLevel(price=100.0, vol=12),
            VolumeProfileLevel(price=100.25, vol=12),
        ]
        assert find_point_of_control(levels) == 100.0
        assert find_point_of_control(list(reversed(levels))) == 100.25

    def test_result_is_an_input_price(self) -> None:
        levels = [VolumeProfileLevel(price=p, vol=v) for p, v in [(1.5, 1), (2.5, 9), (3.5, 4)]]
        poc = find_point_of_control(ProfileAvailable(tuple(levels)))
        assert poc in {level.price for level in levels}
        assert poc == 2.5

    def test_negative_volume_treated_as_zero(self) -> None:
        levels = [VolumeProfileLevel(price=100.0, vol=-5, bid_vol=-1, ask_vol=0)]
        assert find_point_of_control(levels) is None


# =============================================================================
# Test Builder
# =============================================================================


class TestBarProfileBuilder:
    """Tests for BarProfileBuilder."""

    def test_aggressor_split(self) -> None:
        """Buy aggressors count as ask volume, sell aggressors as bid volume."""
        builder = BarProfileBuilder(tick_size=0.25)
        now = datetime(2026, 3, 10, 9, 30)
        builder.add_trades(
            [
                Trade(timestamp=now, price=100.0, size=5.0, side="B"),
                Trade(timestamp=now, price=100.0, size=3.0, side="A"),
            ]
        )

        [level] = builder.get_levels()
        assert level.price == 100.0
        assert level.vol == 8.0
        assert level.ask_vol == 5.0
        assert level.bid_vol == 3.0

    def test_price_bucketing(self) -> None:
        """Prices inside a tick fall into the bucket at the tick's low edge."""
        builder = BarProfileBuilder(tick_size=0.25)
        now = datetime(2026, 3, 10, 9, 30)
        for price in (100.0, 100.1, 100.24, 100.25):
            builder.add_trade(Trade(timestamp=now, price=price, size=1.0, side="B"))

        levels = builder.get_levels()
        assert [lv.price for lv in levels] == [100.0, 100.25]
        assert levels[0].vol == 3.0

    def test_levels_sorted_and_reset(self) -> None:
        builder = BarProfileBuilder(tick_size=1.0)
        now = datetime(2026, 3, 10, 9, 30)
        builder.add_trade(Trade(timestamp=now, price=105.0, size=1.0, side="A"))
        builder.add_trade(Trade(timestamp=now, price=101.0, size=1.0, side="A"))

        assert [lv.price for lv in builder.get_levels()] == [101.0, 105.0]
        assert builder.trade_count == 2

        builder.reset()
        assert builder.is_empty
        assert builder.get_levels() == []

    def test_invalid_tick_size(self) -> None:
        with pytest.raises(ValueError):
            BarProfileBuilder(tick_size=0)

    def test_trade_round_trip(self) -> None:
        trade = Trade(timestamp=datetime(2026, 1, 20, 10), price=5000.25, size=2.0, side="B")
        assert Trade.from_dict(trade.to_dict()) == trade
