"""
Volume Profile Module.

- Trade model and per-bar profile builder
- Point of Control reducer
"""

from .builder import BarProfileBuilder
from .indicator import find_point_of_control, level_metric
from .models import Trade

__all__ = [
    # Models
    "Trade",
    # Builders
    "BarProfileBuilder",
    # Functions
    "find_point_of_control",
    "level_metric",
]
