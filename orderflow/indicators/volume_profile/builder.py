"""
Bar Profile Builder.

Builds one bar's volume profile from tick trades, for hosts that have
the raw tape but no footprint levels.

Usage:
    builder = BarProfileBuilder(tick_size=0.25)

    for trade in trades_in_bar:
        builder.add_trade(trade)

    levels = builder.get_levels()
    builder.reset()
"""

from orderflow.core.models import VolumeProfileLevel

from .models import Trade


class BarProfileBuilder:
    """
    Aggregates trades into tick-size price buckets for a single bar.

    Buy aggressors (side "B") lift the offer and count as ask volume;
    sell aggressors (side "A") hit the bid and count as bid volume.
    """

    def __init__(self, tick_size: float = 0.25):
        """
        Initialize the builder.

        Args:
            tick_size: Price bucket size (instrument tick)
        """
        if tick_size <= 0:
            raise ValueError("tick_size must be positive")

        self.tick_size = tick_size

        # price bucket -> [vol, bid_vol, ask_vol]
        self._levels: dict[float, list[float]] = {}
        self._trade_count: int = 0

    def add_trade(self, trade: Trade) -> None:
        """
        Add a single trade to the bar profile.

        Args:
            trade: Trade object to add
        """
        if trade.size <= 0:
            return

        bucket = self._price_to_bucket(trade.price)
        totals = self._levels.setdefault(bucket, [0.0, 0.0, 0.0])

        totals[0] += trade.size
        if trade.side == "B":
            totals[2] += trade.size
        else:
            totals[1] += trade.size
        self._trade_count += 1

    def add_trades(self, trades: list[Trade]) -> None:
        """Add multiple trades to the bar profile."""
        for trade in trades:
            self.add_trade(trade)

    def _price_to_bucket(self, price: float) -> float:
        """Round price down to its tick bucket."""
        ticks = round(price / self.tick_size, 9)
        return round(int(ticks // 1) * self.tick_size, 10)

    def get_levels(self) -> list[VolumeProfileLevel]:
        """
        Get the bar's levels in ascending price order.

        Returns:
            List of VolumeProfileLevel (empty if no trades were added)
        """
        return [
            VolumeProfileLevel(price=price, vol=vol, bid_vol=bid_vol, ask_vol=ask_vol)
            for price, (vol, bid_vol, ask_vol) in sorted(self._levels.items())
        ]

    def reset(self) -> None:
        """Clear all data for the next bar."""
        self._levels.clear()
        self._trade_count = 0

    @property
    def trade_count(self) -> int:
        """Number of trades in the current bar."""
        return self._trade_count

    @property
    def level_count(self) -> int:
        """Number of price levels in the current bar."""
        return len(self._levels)

    @property
    def is_empty(self) -> bool:
        """Check if the bar has no trades."""
        return not self._levels
