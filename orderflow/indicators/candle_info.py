"""
Volume and Delta Labels Above Candle High.

Two rows above each candle's high wick:
    V: <volume>   (label color)
    D: <delta>    (positive / negative / neutral, bold)
"""

from orderflow.core.config import CandleInfoConfig
from orderflow.core.models import PROFILE_UNAVAILABLE, Bar, ProfileData, clean_volume
from orderflow.graphics.coords import du, op, px
from orderflow.graphics.primitives import Container, IndicatorOutput
from orderflow.graphics.render import bar_key, format_count, pick_color, text_row

from .base import AreaChoice, Indicator


class CandleInfo(Indicator):
    """Per-candle volume and delta labels. Stateless between bars."""

    name = "candle_info"
    description = "Volume Delta Candle Info"
    area = AreaChoice.SAME

    def __init__(self, config: CandleInfoConfig | None = None):
        self.config = config or CandleInfoConfig()

    def map(self, bar: Bar, profile: ProfileData = PROFILE_UNAVAILABLE) -> IndicatorOutput:
        colors = self.config.colors
        font_size = self.config.font_size
        offset = self.config.label_offset
        delta = bar.delta

        x = du(bar.index)
        high = du(bar.high)
        y_delta = op(high, "-", px(offset))  # closer to the high
        y_vol = op(high, "-", px(offset + self.config.row_gap))

        rows = (
            text_row(
                bar_key("vol", bar.index),
                x,
                y_vol,
                f"V: {format_count(clean_volume(bar.volume))}",
                font_size,
                colors.label,
            ),
            text_row(
                bar_key("delta", bar.index),
                x,
                y_delta,
                f"D: {format_count(delta)}",
                font_size,
                pick_color(delta, colors.positive, colors.negative, colors.neutral),
                font_weight="bold",
            ),
        )

        return IndicatorOutput(items=(Container(key=bar_key("grid", bar.index), children=rows),))
