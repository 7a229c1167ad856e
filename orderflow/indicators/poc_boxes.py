"""
Point of Control Boxes - Current Session Only.

Draws a filled, outlined box at the highest-volume price level of every
bar in the active trading session. Bars from earlier sessions get no
graphics, so boxes don't pile up across days.

The session boundary comes from the local wall clock (see
orderflow.core.session), not from the bars being drawn.

Requires per-bar volume profile data from the host.
"""

from orderflow.core.config import PocBoxesConfig
from orderflow.core.models import PROFILE_UNAVAILABLE, Bar, ProfileData
from orderflow.core.session import Clock, is_in_current_session
from orderflow.graphics.primitives import (
    EMPTY_OUTPUT,
    ContourShapes,
    FillStyle,
    IndicatorOutput,
    LineStyle,
    Polygon,
    Shapes,
)
from orderflow.graphics.render import bar_box_corners, bar_key

from .base import AreaChoice, Indicator
from .volume_profile import find_point_of_control


class PocBoxes(Indicator):
    """One-tick POC box per bar of the current session."""

    name = "poc_boxes"
    description = "POC Boxes - Current Session Only"
    area = AreaChoice.SAME
    requires_volume_profile = True

    def __init__(self, config: PocBoxesConfig | None = None, clock: Clock | None = None):
        """
        Initialize the indicator.

        Args:
            config: Box style and session configuration
            clock: Wall-clock source (defaults to datetime.now)
        """
        self.config = config or PocBoxesConfig()
        self.clock = clock
        self.tick_size = self.config.tick_size

    def init(self, contract_tick_size: float | None = None) -> None:
        """Prefer the instrument's tick size, fall back to the configured one."""
        self.tick_size = contract_tick_size if contract_tick_size else self.config.tick_size

    def map(self, bar: Bar, profile: ProfileData = PROFILE_UNAVAILABLE) -> IndicatorOutput:
        now = self.clock() if self.clock else None
        if not is_in_current_session(bar.timestamp, self.config.session_open_hour, now):
            return EMPTY_OUTPUT

        poc_price = find_point_of_control(profile)
        if poc_price is None:
            return EMPTY_OUTPUT

        color = self.config.poc_color
        box = (Polygon(points=bar_box_corners(bar.index, poc_price, self.tick_size)),)

        return IndicatorOutput(
            items=(
                Shapes(
                    key=bar_key("poc_fill", bar.index),
                    primitives=box,
                    fill_style=FillStyle(color=color, opacity=self.config.opacity_fraction),
                ),
                # Border stays visible at any fill opacity
                ContourShapes(
                    key=bar_key("poc_border", bar.index),
                    primitives=box,
                    line_style=LineStyle(color=color, line_width=1),
                ),
            )
        )
