"""
Volume Profile Reducer.

Pure functions over one bar's price levels.

Functions:
- level_metric: Volume used to rank a level
- find_point_of_control: Price level with the highest traded volume
"""

from collections.abc import Sequence

from orderflow.core.models import (
    ProfileAvailable,
    ProfileData,
    ProfileUnavailable,
    VolumeProfileLevel,
    clean_volume,
)


def level_metric(level: VolumeProfileLevel) -> float:
    """
    Volume of a level for POC ranking.

    bid_vol + ask_vol matches what footprint charts display; vol is used
    when the feed doesn't split volume by aggressor side.
    """
    bid_ask = clean_volume(level.bid_vol) + clean_volume(level.ask_vol)
    return bid_ask if bid_ask > 0 else clean_volume(level.vol)


def find_point_of_control(
    profile: ProfileData | Sequence[VolumeProfileLevel] | None,
) -> float | None:
    """
    Point of Control - price level with highest volume in a bar.

    Scans once. A level replaces the current POC only when its metric is
    strictly greater, so ties keep the first level seen. The running
    maximum starts at 0, so a zero-volume level is never selected.

    Args:
        profile: Bar profile (ProfileAvailable / ProfileUnavailable) or a
            plain sequence of levels

    Returns:
        POC price, or None when the profile is unavailable, empty, or
        carries no volume
    """
    if profile is None or isinstance(profile, ProfileUnavailable):
        return None

    levels = profile.levels if isinstance(profile, ProfileAvailable) else profile
    if not levels:
        return None

    max_volume = 0.0
    poc_price = None

    for level in levels:
        total = level_metric(level)
        if total > max_volume:
            max_volume = total
            poc_price = level.price

    return poc_price
