"""
RU: Контрольная цифра UPC-A (взвешенная сумма по модулю 10).
EN: UPC-A check digit (mod-10 weighted sum).
"""

from __future__ import annotations

import re
from typing import Any, Final, Pattern

__all__ = [
    "PAYLOAD_LENGTH",
    "CODE_LENGTH",
    "sanitize_digits",
    "calculate_checksum",
]

PAYLOAD_LENGTH: Final[int] = 11
CODE_LENGTH: Final[int] = 12

# \d would also match non-ASCII digits
_NON_DIGIT: Final[Pattern[str]] = re.compile(r"[^0-9]")


def sanitize_digits(code: Any) -> str:
    """Return ``str(code)`` with every non-digit character removed."""
    return _NON_DIGIT.sub("", code if isinstance(code, str) else str(code))


def calculate_checksum(code11: Any) -> int:
    """
    Calculate the UPC-A check digit for an 11-digit payload.

    The input is sanitized, left-padded with zeros to 11 digits and truncated
    to the first 11. Digits at even 0-based positions weigh 3, odd positions
    weigh 1.

    Example:
        >>> calculate_checksum("01234567890")
        5
    """
    digits = sanitize_digits(code11).rjust(PAYLOAD_LENGTH, "0")[:PAYLOAD_LENGTH]
    total = sum(int(d) * (3 if i % 2 == 0 else 1) for i, d in enumerate(digits))
    return (10 - total % 10) % 10
