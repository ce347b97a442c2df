from typing import Iterable


def longest_drought(rainfall: Iterable[float]) -> int:
    """
    Longest run of consecutive days without rainfall.

    Only exact zero readings count as dry; any trace of rain ends the run.

    Args:
        rainfall: Daily precipitation [mm]

    Returns:
        int: Number of days of the longest dry period
    """
    drought = 0
    drought_max = 0
    for precipitation in rainfall:
        if precipitation == 0.0:
            drought += 1
            drought_max = max(drought_max, drought)
        else:
            drought = 0
    return drought_max
