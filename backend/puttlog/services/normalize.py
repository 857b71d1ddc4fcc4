"""
Numeric input normalization for count fields typed by a user.

Every character that is not an ASCII digit is dropped ("1O" → 1, "-3" → 3,
" 12 " → 12) and an empty result becomes 0. This runs before values are sent;
the backend still validates whatever arrives.
"""

import re
from typing import Union

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_count(value: Union[str, int, None]) -> int:
    """Turn free-form text into a non-negative integer count."""
    if value is None:
        return 0
    digits = _NON_DIGITS.sub("", str(value))
    return int(digits) if digits else 0
