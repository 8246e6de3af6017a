"""
RU: Кодирование UPC-A в 95-модульный рисунок штрихов.
EN: UPC-A symbol encoder: canonical 12-digit code to the 95-module bar pattern.

UPC-A always uses the all-L left half (EAN-13 with a leading zero), so only
the L and R tables are needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final, Iterator, Tuple, Union

from upca_renderer.barcodegen.normalizer import normalize_input
from upca_renderer.model.enums import ChecksumPolicy

logger = logging.getLogger(__name__)

__all__ = [
    "L_CODES",
    "R_CODES",
    "START_GUARD",
    "CENTER_GUARD",
    "END_GUARD",
    "MODULES_PER_DIGIT",
    "PATTERN_LENGTH",
    "LEFT_DIGITS_START",
    "RIGHT_DIGITS_START",
    "EncodedSymbol",
    "encode",
    "is_guard_module",
]

L_CODES: Final[Tuple[str, ...]] = (
    "0001101",
    "0011001",
    "0010011",
    "0111101",
    "0100011",
    "0110001",
    "0101111",
    "0111011",
    "0110111",
    "0001011",
)
R_CODES: Final[Tuple[str, ...]] = (
    "1110010",
    "1100110",
    "1101100",
    "1000010",
    "1011100",
    "1001110",
    "1010000",
    "1000100",
    "1001000",
    "1110100",
)

START_GUARD: Final[str] = "101"
CENTER_GUARD: Final[str] = "01010"
END_GUARD: Final[str] = "101"

MODULES_PER_DIGIT: Final[int] = 7
DIGITS_PER_HALF: Final[int] = 6

# Module offsets: start guard 0-2, left digits 3-44, center guard 45-49,
# right digits 50-91, end guard 92-94.
LEFT_DIGITS_START: Final[int] = len(START_GUARD)
CENTER_GUARD_START: Final[int] = LEFT_DIGITS_START + DIGITS_PER_HALF * MODULES_PER_DIGIT
RIGHT_DIGITS_START: Final[int] = CENTER_GUARD_START + len(CENTER_GUARD)
END_GUARD_START: Final[int] = RIGHT_DIGITS_START + DIGITS_PER_HALF * MODULES_PER_DIGIT
PATTERN_LENGTH: Final[int] = END_GUARD_START + len(END_GUARD)


@dataclass(frozen=True)
class EncodedSymbol:
    """Bar pattern (``"1"`` = ink module) and the 12-digit code it encodes."""

    pattern: str
    full_code: str

    def __len__(self) -> int:
        return len(self.pattern)

    def __iter__(self) -> Iterator[str]:
        # Allows ``pattern, full_code = encode(...)``
        return iter((self.pattern, self.full_code))


def is_guard_module(index: int) -> bool:
    """True for module indices inside the start, center or end guard."""
    return (
        index < LEFT_DIGITS_START
        or CENTER_GUARD_START <= index < RIGHT_DIGITS_START
        or index >= END_GUARD_START
    )


def encode(
    code: Any, checksum: Union[ChecksumPolicy, str] = ChecksumPolicy.AUTO
) -> EncodedSymbol:
    """
    Encode ``code`` as a UPC-A bar pattern.

    Args:
        code: 1-12 digit input (non-digits ignored).
        checksum: Checksum policy forwarded to :func:`normalize_input`.

    Returns:
        EncodedSymbol with a 95-character pattern.

    Raises:
        InvalidChecksumError, InvalidLengthError, InvalidOptionError:
            propagated from normalization.
    """
    full_code = normalize_input(code, checksum)
    left = "".join(L_CODES[int(d)] for d in full_code[:DIGITS_PER_HALF])
    right = "".join(R_CODES[int(d)] for d in full_code[DIGITS_PER_HALF:])
    pattern = f"{START_GUARD}{left}{CENTER_GUARD}{right}{END_GUARD}"
    logger.debug("Encoded UPC-A %s (%d modules)", full_code, len(pattern))
    return EncodedSymbol(pattern=pattern, full_code=full_code)
