"""Half-up rounding for published values.

Python's ``round`` breaks exact ``.5`` ties toward the even neighbour, so
``round(72.5) == 72``. Dashboard values round ties upward instead
(``72.5 -> 73``, ``-2.5 -> -2``).
"""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float | int:
    """Round ``value`` to ``digits`` decimals, ties toward +infinity.

    Returns an ``int`` when ``digits`` is 0, otherwise a ``float``.
    """
    if digits == 0:
        return math.floor(value + 0.5)
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale
