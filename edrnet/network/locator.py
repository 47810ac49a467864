"""Binary search over uniform-width histogram bins."""

from collections.abc import Sequence

NOT_FOUND = -1


def locate_bin(bins: Sequence[float], bin_width: float, value: float) -> int:
    """Find the bin whose interval (bins[i], bins[i] + bin_width] holds value.

    The upper edge of a probed bin is computed as bins[middle] + bin_width
    instead of being read from bins[middle + 1], so the boundaries must be
    strictly uniform.

    Args:
        bins: Ascending lower boundaries.
        bin_width: Common width of every bin.
        value: Distance to locate.

    Returns:
        Index i with bins[i] < value <= bins[i] + bin_width, or NOT_FOUND
        when value <= bins[0] or value > bins[-1] + bin_width.
    """
    lower, upper = 0, len(bins) - 1
    while lower <= upper:
        middle = lower + (upper - lower) // 2
        lower_edge = bins[middle]
        if lower_edge < value <= lower_edge + bin_width:
            return middle
        if value <= lower_edge:
            upper = middle - 1
        else:
            lower = middle + 1
    return NOT_FOUND
