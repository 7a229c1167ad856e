"""
Reference host for running indicators outside a charting runtime.

- storage: Bar and trade files (Parquet / CSV)
- replay: Ordered redraw passes with keyed diffing
"""

from .replay import RedrawStats, ReplayHost, ReplayResult, build_bar_profiles, check_bar_order
from .storage import BarStorage

__all__ = [
    "BarStorage",
    "RedrawStats",
    "ReplayHost",
    "ReplayResult",
    "build_bar_profiles",
    "check_bar_order",
]
