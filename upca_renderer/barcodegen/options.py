"""
RU: Опции рендеринга UPC-A: значения по умолчанию, проверка и слияние.
EN: UPC-A render options: documented defaults, validation and merging.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Final, FrozenSet, Mapping, Optional, TypedDict, Union

from upca_renderer.barcodegen.errors import InvalidOptionError
from upca_renderer.model.enums import (
    BarStyle,
    ChecksumPolicy,
    coerce_bar_style,
    coerce_checksum_policy,
)

logger = logging.getLogger(__name__)

__all__ = [
    "RenderOptions",
    "RenderOptionsDict",
    "OptionsLike",
    "DEFAULT_OPTIONS",
    "DEFAULT_FONT",
    "resolve_options",
]

DEFAULT_FONT: Final[str] = '"OCR-B", "Courier New", monospace'


class RenderOptionsDict(TypedDict, total=False):
    """
    Типобезопасные опции рендеринга UPC-A (все поля опциональны).

    Example:
        >>> options: RenderOptionsDict = {"module_width": 3, "style": "flat"}
        >>> svg = to_vector_string("03600029145", options)
    """

    module_width: float  # Ширина одного модуля в пикселях
    height: float  # Высота основных штрихов
    guard_extend: float  # Насколько ограничители выступают вниз (notched)
    font_size: float  # Размер шрифта средних цифр; 0 отключает текст
    small_digit_font_size: float  # Размер шрифта первой/последней цифры
    text_margin: float  # Зазор между штрихами и текстом
    quiet_zone: float  # Тихая зона в модулях (GS1 рекомендует 9)
    outer_digit_gap: float  # Зазор между внешними цифрами и ограничителями
    padding_left: float
    padding_right: float
    padding_top: float
    padding_bottom: float
    background: str
    foreground: str
    font: str  # font-family для SVG
    font_path: Optional[str]  # TrueType-файл для растрового вывода
    style: Union[BarStyle, str]
    checksum: Union[ChecksumPolicy, str]


@dataclass(frozen=True)
class RenderOptions:
    """Immutable render configuration with documented defaults.

    Built once per call via :meth:`from_mapping` and passed by value through
    the layout and rendering steps.
    """

    module_width: float = 2
    height: float = 70
    guard_extend: float = 10
    font_size: float = 14
    small_digit_font_size: float = 10
    text_margin: float = 2
    quiet_zone: float = 9
    outer_digit_gap: float = 2
    padding_left: float = 0
    padding_right: float = 0
    padding_top: float = 0
    padding_bottom: float = 0
    background: str = "#FFFFFF"
    foreground: str = "#000000"
    font: str = DEFAULT_FONT
    font_path: Optional[str] = None
    style: BarStyle = BarStyle.NOTCHED
    checksum: ChecksumPolicy = ChecksumPolicy.AUTO

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "style", coerce_bar_style(self.style))
            object.__setattr__(self, "checksum", coerce_checksum_policy(self.checksum))
        except ValueError as e:
            raise InvalidOptionError(str(e)) from None

        for name in _NUMERIC_OPTIONS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                logger.warning("Option %s must be a number, got %r", name, value)
                raise InvalidOptionError(
                    f"Option '{name}' must be a number, got {type(value).__name__}"
                )
            if not math.isfinite(value):
                logger.warning("Option %s must be finite, got %r", name, value)
                raise InvalidOptionError(f"Option '{name}' must be finite, got {value}")
            if value < 0:
                logger.warning("Option %s must be non-negative, got %r", name, value)
                raise InvalidOptionError(f"Option '{name}' must be >= 0, got {value}")
        if self.module_width <= 0:
            logger.warning("Option module_width must be positive, got %r", self.module_width)
            raise InvalidOptionError(
                f"Option 'module_width' must be > 0, got {self.module_width}"
            )

        for name in ("background", "foreground", "font"):
            if not isinstance(getattr(self, name), str):
                raise InvalidOptionError(f"Option '{name}' must be a string")
        if self.font_path is not None and not isinstance(self.font_path, str):
            raise InvalidOptionError("Option 'font_path' must be a string or None")

    @classmethod
    def option_names(cls) -> FrozenSet[str]:
        return _OPTION_NAMES

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> "RenderOptions":
        """Merge ``mapping`` over the defaults.

        Raises:
            InvalidOptionError: for unknown keys or invalid values.
        """
        if not mapping:
            return cls()
        unknown = sorted(k for k in mapping if k not in _OPTION_NAMES)
        if unknown:
            logger.warning("Unknown render options rejected: %s", unknown)
            raise InvalidOptionError(f"Unknown render option(s): {', '.join(unknown)}")
        return cls(**dict(mapping))

    def merged(self, **overrides: Any) -> "RenderOptions":
        unknown = sorted(k for k in overrides if k not in _OPTION_NAMES)
        if unknown:
            raise InvalidOptionError(f"Unknown render option(s): {', '.join(unknown)}")
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        dct: Dict[str, Any] = asdict(self)
        dct["style"] = self.style.value
        dct["checksum"] = self.checksum.value
        return dct

    @property
    def is_notched(self) -> bool:
        return self.style.extends_guards

    @property
    def shows_text(self) -> bool:
        return self.font_size > 0


_OPTION_NAMES: Final[FrozenSet[str]] = frozenset(
    f.name for f in fields(RenderOptions)
)
_NUMERIC_OPTIONS: Final[tuple[str, ...]] = (
    "module_width",
    "height",
    "guard_extend",
    "font_size",
    "small_digit_font_size",
    "text_margin",
    "quiet_zone",
    "outer_digit_gap",
    "padding_left",
    "padding_right",
    "padding_top",
    "padding_bottom",
)

DEFAULT_OPTIONS: Final[RenderOptions] = RenderOptions()

OptionsLike = Union[RenderOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None) -> RenderOptions:
    """Return a RenderOptions for ``None``, a mapping, or an existing record."""
    if isinstance(options, RenderOptions):
        return options
    if options is not None and not isinstance(options, Mapping):
        raise InvalidOptionError(
            f"options must be a mapping or RenderOptions, got {type(options).__name__}"
        )
    return RenderOptions.from_mapping(options)
