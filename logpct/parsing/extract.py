# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the license found in the
# LICENSE file in the root directory of this source tree.

"""Pull the JSON object embedded in a log line."""

import json
import re
from typing import Any, Optional

_LINE_BREAK = re.compile(r"\r?\n")


def _reject_constant(name: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def split_lines(text: str) -> list[str]:
    """Split file content on `\\n` or `\\r\\n`, keeping empty lines."""
    return _LINE_BREAK.split(text or "")


def extract_json(line: str) -> Optional[dict[str, Any]]:
    """
    Decode the substring between the first `{` and the last `}` of a line.

    Log prefixes/suffixes around a single object are tolerated. A `}` that
    appears after the object's real end (e.g. in trailing text) widens the
    substring and makes the decode fail.

    Returns:
        The decoded mapping, or None when the line holds no decodable object.
    """
    first = line.find("{")
    last = line.rfind("}")
    if first < 0 or last < first:
        return None
    try:
        obj = json.loads(line[first : last + 1], parse_constant=_reject_constant)
    except ValueError:
        return None
    if not isinstance(obj, dict):
        return None
    return obj
