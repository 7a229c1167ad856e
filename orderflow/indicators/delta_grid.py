"""
Volume / Delta / Cumulative Delta Grid.

Compact separate panel with three text rows per bar:
    Row 1 - Total volume        (label color)
    Row 2 - Bar delta           (positive / negative / neutral)
    Row 3 - Cumulative delta    (positive / negative / neutral, resets daily)

Delta = offer_volume - bid_volume (aggressor-based).
"""

from orderflow.core.aggregator import CumulativeDeltaAggregator
from orderflow.core.config import DeltaGridConfig
from orderflow.core.models import PROFILE_UNAVAILABLE, Bar, ProfileData, clean_volume
from orderflow.graphics.coords import du, op, px
from orderflow.graphics.primitives import Container, IndicatorOutput
from orderflow.graphics.render import bar_key, format_count, pick_color, text_row

from .base import AreaChoice, Indicator

# Fixed plot range that keeps the panel's y axis centered on row 2
PANEL_LOWER = -1.0
PANEL_UPPER = 1.0


class DeltaGrid(Indicator):
    """Three-row volume / delta / cumulative delta panel."""

    name = "delta_grid"
    description = "Volume / Delta / Cumulative Delta Grid"
    area = AreaChoice.NEW

    def __init__(self, config: DeltaGridConfig | None = None):
        self.config = config or DeltaGridConfig()
        self.aggregator = CumulativeDeltaAggregator()

    def init(self, contract_tick_size: float | None = None) -> None:
        self.aggregator.reset()

    def map(self, bar: Bar, profile: ProfileData = PROFILE_UNAVAILABLE) -> IndicatorOutput:
        deltas = self.aggregator.update(bar)

        colors = self.config.colors
        font_size = self.config.font_size
        row_gap = self.config.row_gap

        x = du(bar.index)
        y_mid = du(0)

        rows = (
            text_row(
                bar_key("vol", bar.index),
                x,
                op(y_mid, "-", px(row_gap)),
                format_count(clean_volume(bar.volume)),
                font_size,
                colors.label,
            ),
            text_row(
                bar_key("delta", bar.index),
                x,
                y_mid,
                format_count(deltas.bar_delta),
                font_size,
                pick_color(deltas.bar_delta, colors.positive, colors.negative, colors.neutral),
            ),
            text_row(
                bar_key("cdelta", bar.index),
                x,
                op(y_mid, "+", px(row_gap)),
                format_count(deltas.cumulative_delta),
                font_size,
                pick_color(
                    deltas.cumulative_delta, colors.positive, colors.negative, colors.neutral
                ),
            ),
        )

        return IndicatorOutput(
            items=(Container(key=bar_key("grid", bar.index), children=rows),),
            plots={"lower": PANEL_LOWER, "upper": PANEL_UPPER},
        )
