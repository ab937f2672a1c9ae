"""
Human-readable byte counts for thumbnail and original file sizes.
"""

import re
from decimal import Decimal, ROUND_HALF_UP

UNITS = ['B', 'KB', 'MB', 'GB', 'TB', 'PB', 'EB', 'ZB', 'YB']

LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def parse_int(value) -> int:
    """Integer prefix of value ('1500.7' -> 1500, 12.9 -> 12); 0 if there is none."""
    if isinstance(value, str):
        match = LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def human_readable_size(bytes_val) -> str:
    """
    Format a byte count using the largest unit that keeps the value under 1024.

    Raw byte counts and values of 10 or more are shown without decimals;
    scaled values under 10 keep one decimal place. Ties round up.

    Examples:
        human_readable_size(1500)      -> "1.5 KB"
        human_readable_size(10485760)  -> "10 MB"
    """
    value = parse_int(bytes_val)

    index = 0
    while value >= 1024 and index < len(UNITS) - 1:
        value = value / 1024
        index += 1

    decimals = 1 if index > 0 and value < 10 else 0
    rounded = Decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    return f"{rounded} {UNITS[index]}"
