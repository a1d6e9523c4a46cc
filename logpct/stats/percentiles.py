# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""
Percentile pickers over an ascending-sorted sequence.

Two interchangeable methods are provided:
- nearest: rank selection, always returns an element of the input
- linear: interpolation between the two closest ranks

Both take the percentile on a 0-100 scale and return nan on empty input.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Callable, Optional, Sequence

Picker = Callable[[Sequence[float], float], float]

NEAREST = "nearest"
LINEAR = "linear"
METHODS = (NEAREST, LINEAR)

_SEPARATORS = re.compile(r"[ ,]+")


def parse_percentiles(text: Optional[str]) -> list[float]:
    """
    Parse a free-text percentile list such as "50, 90, 99.5".

    Tokens that are not numbers, not finite, or not strictly inside (0, 100)
    are dropped. Order and duplicates are kept.
    """
    values = []
    for token in _SEPARATORS.split(text or ""):
        if not token or "_" in token:
            continue
        try:
            value = float(token)
        except ValueError:
            continue
        if math.isfinite(value) and 0 < value < 100:
            values.append(value)
    return values


def nearest_rank(sorted_values: Sequence[float], p: float) -> float:
    n = len(sorted_values)
    if not n:
        return math.nan
    rank = math.ceil(p / 100 * n)
    return sorted_values[min(max(rank - 1, 0), n - 1)]


def linear_interp(sorted_values: Sequence[float], p: float) -> float:
    n = len(sorted_values)
    if not n:
        return math.nan
    pos = p / 100 * (n - 1)
    lo = math.floor(pos)
    hi = math.ceil(pos)
    if hi >= n:
        return sorted_values[n - 1]
    return sorted_values[lo] + (pos - lo) * (sorted_values[hi] - sorted_values[lo])


def round_half_up(value: float, digits: int) -> float:
    """Round the exact binary value of `value`, with ties going away from zero."""
    if not math.isfinite(value):
        return value
    exact = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        return float(exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP))


_PICKERS: dict[str, Picker] = {
    NEAREST: nearest_rank,
    LINEAR: linear_interp,
}


def get_picker(method: str) -> Picker:
    """Return the picker function for `nearest` or `linear`."""
    try:
        return _PICKERS[method]
    except KeyError:
        raise ValueError(
            f"Unknown percentile method {method!r}, expected one of {list(METHODS)}"
        ) from None
