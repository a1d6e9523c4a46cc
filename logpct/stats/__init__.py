# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

from logpct.stats.percentiles import (
    LINEAR,
    METHODS,
    NEAREST,
    Picker,
    get_picker,
    linear_interp,
    nearest_rank,
    parse_percentiles,
    round_half_up,
)

__all__ = [
    "LINEAR",
    "METHODS",
    "NEAREST",
    "Picker",
    "get_picker",
    "linear_interp",
    "nearest_rank",
    "parse_percentiles",
    "round_half_up",
]
