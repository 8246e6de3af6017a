"""
model/enums.py

(Краткое RU: Перечисления для рендерера UPC-A: политика контрольной цифры, стиль штрихов, выравнивание текста.)

EN: Domain enums for the UPC-A renderer. Values are the plain strings accepted
in option mappings, so ``ChecksumPolicy("validate")`` and
``BarStyle("flat")`` round-trip with user configuration.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Literal, Union

_logger: Final[logging.Logger] = logging.getLogger(__name__)


class ChecksumPolicy(str, Enum):
    """How a supplied 12th digit is treated during normalization."""

    AUTO = "auto"
    VALIDATE = "validate"
    RECALCULATE = "recalculate"

    @property
    def is_strict(self) -> bool:
        return self is ChecksumPolicy.VALIDATE

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            ChecksumPolicy.AUTO: "Автоматически",
            ChecksumPolicy.VALIDATE: "Проверять",
            ChecksumPolicy.RECALCULATE: "Пересчитывать",
        }
        names_en = {
            ChecksumPolicy.AUTO: "Automatic",
            ChecksumPolicy.VALIDATE: "Validate",
            ChecksumPolicy.RECALCULATE: "Recalculate",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class BarStyle(str, Enum):
    """NOTCHED extends guard bars below the data bars; FLAT keeps all bars equal."""

    NOTCHED = "notched"
    FLAT = "flat"

    @property
    def extends_guards(self) -> bool:
        return self is BarStyle.NOTCHED

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            BarStyle.NOTCHED: "С выступающими ограничителями",
            BarStyle.FLAT: "Плоский",
        }
        names_en = {
            BarStyle.NOTCHED: "Notched",
            BarStyle.FLAT: "Flat",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class TextAnchor(str, Enum):
    # Values match the SVG text-anchor attribute.
    START = "start"
    MIDDLE = "middle"
    END = "end"


def coerce_checksum_policy(value: Union[ChecksumPolicy, str]) -> ChecksumPolicy:
    """Return ``value`` as a ChecksumPolicy.

    Raises:
        ValueError: for an unknown policy name.
    """
    if isinstance(value, ChecksumPolicy):
        return value
    try:
        return ChecksumPolicy(str(value).lower())
    except ValueError:
        _logger.warning("Unknown checksum policy: %r", value)
        raise ValueError(
            f"Unknown checksum policy {value!r}; expected one of "
            f"{', '.join(p.value for p in ChecksumPolicy)}"
        ) from None


def coerce_bar_style(value: Union[BarStyle, str]) -> BarStyle:
    """Return ``value`` as a BarStyle.

    Raises:
        ValueError: for an unknown style name.
    """
    if isinstance(value, BarStyle):
        return value
    try:
        return BarStyle(str(value).lower())
    except ValueError:
        _logger.warning("Unknown bar style: %r", value)
        raise ValueError(
            f"Unknown bar style {value!r}; expected one of "
            f"{', '.join(s.value for s in BarStyle)}"
        ) from None
