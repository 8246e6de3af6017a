"""
RU: Геометрия и план отрисовки UPC-A, не зависящие от носителя.
EN: Medium-independent UPC-A geometry and draw plan.

Both renderers consume the same :class:`DrawPlan`, so bar and digit
placement is computed exactly once per call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final, List, Optional, Tuple

from upca_renderer.barcodegen.encoder import (
    MODULES_PER_DIGIT,
    PATTERN_LENGTH,
    LEFT_DIGITS_START,
    RIGHT_DIGITS_START,
    EncodedSymbol,
    encode,
    is_guard_module,
)
from upca_renderer.barcodegen.options import OptionsLike, RenderOptions, resolve_options
from upca_renderer.model.enums import TextAnchor

logger = logging.getLogger(__name__)

__all__ = [
    "Geometry",
    "BarRect",
    "TextItem",
    "DrawPlan",
    "compute_geometry",
    "plan_symbol",
    "plan_code",
]

# Ширина внешней цифры относительно её кегля
OUTER_DIGIT_WIDTH_RATIO: Final[float] = 0.7

# Digits drawn under each half (the first and last digit sit outside the guards)
_GROUP_SIZE: Final[int] = 5


@dataclass(frozen=True)
class Geometry:
    """Absolute dimensions and offsets for one render call, in pixels."""

    module_width: float
    bar_height: float
    guard_height: float
    barcode_width: float
    quiet_zone_px: float
    left_outer_space: float
    right_outer_space: float
    content_width: float
    content_height: float
    total_width: float
    total_height: float
    barcode_start_x: float
    offset_y: float
    text_top: float
    small_digit_top: float

    @property
    def view_box(self) -> Tuple[float, float, float, float]:
        return (0, 0, self.total_width, self.total_height)


@dataclass(frozen=True)
class BarRect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextItem:
    """One digit. ``x`` is the anchor point, ``top`` the top of its em box."""

    text: str
    x: float
    top: float
    font_size: float
    anchor: TextAnchor

    @property
    def baseline(self) -> float:
        return self.top + self.font_size


@dataclass(frozen=True)
class DrawPlan:
    geometry: Geometry
    bars: Tuple[BarRect, ...]
    texts: Tuple[TextItem, ...]
    background: str
    foreground: str
    font: str
    font_path: Optional[str]
    full_code: str

    @property
    def width(self) -> float:
        return self.geometry.total_width

    @property
    def height(self) -> float:
        return self.geometry.total_height


def compute_geometry(
    options: RenderOptions, pattern_length: int = PATTERN_LENGTH
) -> Geometry:
    """
    Compute absolute geometry from render options.

    The text row is always reserved, even when ``font_size`` is 0 and no
    digits are drawn.
    """
    mw = options.module_width
    barcode_width = pattern_length * mw
    guard_height = options.height + options.guard_extend if options.is_notched else options.height
    quiet_zone_px = options.quiet_zone * mw

    outer_digit_width = options.small_digit_font_size * OUTER_DIGIT_WIDTH_RATIO
    left_outer_space = outer_digit_width + options.outer_digit_gap
    right_outer_space = outer_digit_width + options.outer_digit_gap

    content_width = (
        left_outer_space + quiet_zone_px + barcode_width + quiet_zone_px + right_outer_space
    )
    content_height = guard_height + options.font_size + options.text_margin
    total_width = content_width + options.padding_left + options.padding_right
    total_height = content_height + options.padding_top + options.padding_bottom

    offset_y = options.padding_top
    text_top = offset_y + options.height + options.text_margin
    return Geometry(
        module_width=mw,
        bar_height=options.height,
        guard_height=guard_height,
        barcode_width=barcode_width,
        quiet_zone_px=quiet_zone_px,
        left_outer_space=left_outer_space,
        right_outer_space=right_outer_space,
        content_width=content_width,
        content_height=content_height,
        total_width=total_width,
        total_height=total_height,
        barcode_start_x=options.padding_left + left_outer_space + quiet_zone_px,
        offset_y=offset_y,
        text_top=text_top,
        small_digit_top=text_top + (options.font_size - options.small_digit_font_size) / 2,
    )


def _plan_bars(pattern: str, geometry: Geometry, notched: bool) -> List[BarRect]:
    bars: List[BarRect] = []
    mw = geometry.module_width
    for i, bit in enumerate(pattern):
        if bit != "1":
            continue
        height = geometry.guard_height if notched and is_guard_module(i) else geometry.bar_height
        bars.append(BarRect(geometry.barcode_start_x + i * mw, geometry.offset_y, mw, height))
    return bars


def _plan_texts(
    full_code: str, pattern_length: int, geometry: Geometry, options: RenderOptions
) -> List[TextItem]:
    mw = geometry.module_width
    start_x = geometry.barcode_start_x
    cell = MODULES_PER_DIGIT * mw
    small = options.small_digit_font_size

    texts = [
        TextItem(
            full_code[0],
            start_x - options.outer_digit_gap,
            geometry.small_digit_top,
            small,
            TextAnchor.END,
        )
    ]
    for group_start, module_offset in ((1, LEFT_DIGITS_START), (6, RIGHT_DIGITS_START)):
        origin = start_x + module_offset * mw
        for i in range(_GROUP_SIZE):
            texts.append(
                TextItem(
                    full_code[group_start + i],
                    origin + (i + 0.5) * cell,
                    geometry.text_top,
                    options.font_size,
                    TextAnchor.MIDDLE,
                )
            )
    texts.append(
        TextItem(
            full_code[11],
            start_x + pattern_length * mw + options.outer_digit_gap,
            geometry.small_digit_top,
            small,
            TextAnchor.START,
        )
    )
    return texts


def plan_symbol(symbol: EncodedSymbol, options: RenderOptions) -> DrawPlan:
    """Build the draw plan for an encoded symbol."""
    geometry = compute_geometry(options, len(symbol.pattern))
    bars = _plan_bars(symbol.pattern, geometry, options.is_notched)
    texts = (
        _plan_texts(symbol.full_code, len(symbol.pattern), geometry, options)
        if options.shows_text
        else []
    )
    logger.debug(
        "Planned %s: %d bars, %d digits, %sx%s px",
        symbol.full_code,
        len(bars),
        len(texts),
        geometry.total_width,
        geometry.total_height,
    )
    return DrawPlan(
        geometry=geometry,
        bars=tuple(bars),
        texts=tuple(texts),
        background=options.background,
        foreground=options.foreground,
        font=options.font,
        font_path=options.font_path,
        full_code=symbol.full_code,
    )


def plan_code(code: Any, options: OptionsLike = None) -> DrawPlan:
    """Resolve options, encode ``code`` and plan it: the front half of every render."""
    opts = resolve_options(options)
    return plan_symbol(encode(code, opts.checksum), opts)
