"""
RU: Нормализация ввода UPC-A, проверка и форматирование.
EN: UPC-A input normalization, validation and display formatting.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from upca_renderer.barcodegen.checksum import (
    CODE_LENGTH,
    PAYLOAD_LENGTH,
    calculate_checksum,
    sanitize_digits,
)
from upca_renderer.barcodegen.errors import (
    InvalidChecksumError,
    InvalidLengthError,
    InvalidOptionError,
)
from upca_renderer.model.enums import ChecksumPolicy, coerce_checksum_policy

logger = logging.getLogger(__name__)

__all__ = ["normalize_input", "validate", "format_upc"]


def normalize_input(
    code: Any, checksum: Union[ChecksumPolicy, str] = ChecksumPolicy.AUTO
) -> str:
    """
    Normalize ``code`` to a canonical 12-digit UPC-A string.

    Non-digits are stripped first. Up to 11 digits are left-padded to 11 and
    get a computed check digit. For 12 digits the policy decides: VALIDATE
    rejects a wrong check digit, AUTO and RECALCULATE overwrite it.

    Args:
        code: Raw code, e.g. ``"0 36000 29145 2"``.
        checksum: Checksum policy (enum member or its string value).

    Returns:
        12-digit string.

    Raises:
        InvalidChecksumError: VALIDATE policy and the check digit mismatches.
        InvalidLengthError: no digits or more than 12.
        InvalidOptionError: unknown policy name.
    """
    try:
        policy = coerce_checksum_policy(checksum)
    except ValueError as e:
        raise InvalidOptionError(str(e)) from None

    digits = sanitize_digits(code)
    length = len(digits)

    if 0 < length <= PAYLOAD_LENGTH:
        payload = digits.rjust(PAYLOAD_LENGTH, "0")
        return f"{payload}{calculate_checksum(payload)}"

    if length == CODE_LENGTH:
        payload = digits[:PAYLOAD_LENGTH]
        provided = int(digits[PAYLOAD_LENGTH])
        expected = calculate_checksum(payload)
        if policy.is_strict:
            if provided != expected:
                logger.warning(
                    "UPC-A checksum mismatch for %s: expected %d, got %d",
                    digits,
                    expected,
                    provided,
                )
                raise InvalidChecksumError(expected, provided)
            return digits
        # AUTO и RECALCULATE всегда перезаписывают контрольную цифру
        return f"{payload}{expected}"

    raise InvalidLengthError(length)


def validate(code: Any) -> bool:
    """Return True if ``code`` can be rendered without altering a supplied check digit."""
    digits = sanitize_digits(code)
    if len(digits) == CODE_LENGTH:
        return int(digits[PAYLOAD_LENGTH]) == calculate_checksum(digits[:PAYLOAD_LENGTH])
    return 0 < len(digits) <= PAYLOAD_LENGTH


def format_upc(code: Any) -> str:
    """
    Format as ``D-DDDDD-DDDDD-D``.

    A 12-digit code is formatted as given; anything else is normalized with
    the AUTO policy first.

    Example:
        >>> format_upc("012345678905")
        '0-12345-67890-5'
    """
    digits = sanitize_digits(code)
    if len(digits) != CODE_LENGTH:
        digits = normalize_input(digits)
    return f"{digits[0]}-{digits[1:6]}-{digits[6:11]}-{digits[11]}"
