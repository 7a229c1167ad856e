"""
Base class for chart indicators.

The host creates one indicator instance per chart overlay, calls init()
once, then map() for every bar in chronological order on each redraw
pass. Per-instance state lives on the instance and is never shared.
"""

from abc import ABC, abstractmethod
from enum import Enum

from orderflow.core.models import PROFILE_UNAVAILABLE, Bar, ProfileData
from orderflow.graphics.primitives import IndicatorOutput


class AreaChoice(Enum):
    """Where the host places the indicator."""

    NEW = "new"  # Separate panel below the price chart
    SAME = "same"  # Overlay on the price chart


class Indicator(ABC):
    """
    A per-bar calculator that turns bars into graphics.

    Subclasses set the class attributes and implement map().
    """

    name: str = ""
    description: str = ""
    area: AreaChoice = AreaChoice.SAME
    requires_volume_profile: bool = False

    def init(self, contract_tick_size: float | None = None) -> None:
        """
        Reset per-instance state before the first bar of a pass.

        Args:
            contract_tick_size: Tick size of the charted instrument, if known
        """

    @abstractmethod
    def map(self, bar: Bar, profile: ProfileData = PROFILE_UNAVAILABLE) -> IndicatorOutput:
        """
        Compute the graphics for one bar.

        Args:
            bar: Bar to render
            profile: Volume profile of the bar, if the host provides one

        Returns:
            IndicatorOutput (EMPTY_OUTPUT to draw nothing)
        """
