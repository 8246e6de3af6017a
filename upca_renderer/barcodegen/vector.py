"""
RU: Векторный вывод UPC-A (SVG) через xml.etree.ElementTree.
EN: Vector UPC-A backend: renders into an ``<svg>`` ElementTree element and
serializes it to markup.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Final, Optional

from upca_renderer.barcodegen.errors import InvalidTargetError
from upca_renderer.barcodegen.layout import BarRect, TextItem, plan_code
from upca_renderer.barcodegen.options import OptionsLike
from upca_renderer.barcodegen.targets import draw_plan

logger = logging.getLogger(__name__)

__all__ = [
    "SVG_NS",
    "VectorSurface",
    "render_to_vector",
    "to_vector_string",
    "format_number",
]

SVG_NS: Final[str] = "http://www.w3.org/2000/svg"

# Namespaced roots serialize as <svg xmlns="..."> instead of <ns0:svg>
ET.register_namespace("", SVG_NS)


def format_number(value: float) -> str:
    """Attribute text for a coordinate: ``244`` for whole numbers, ``7.5`` otherwise."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6f}".rstrip("0").rstrip(".")


def _is_svg_element(element: Any) -> bool:
    if not isinstance(element, ET.Element) or not isinstance(element.tag, str):
        return False
    return element.tag in ("svg", f"{{{SVG_NS}}}svg")


class VectorSurface:
    """RenderTarget adapter over an ``svg`` element, mutated in place."""

    def __init__(self, root: ET.Element) -> None:
        if not _is_svg_element(root):
            raise InvalidTargetError(root, "SVG element")
        self.root = root
        self._prefix = f"{{{SVG_NS}}}" if root.tag.startswith("{") else ""

    def _append(self, name: str, attrs: Dict[str, str], text: Optional[str] = None) -> ET.Element:
        element = ET.SubElement(self.root, f"{self._prefix}{name}", attrs)
        element.text = text
        return element

    def begin(self, width: float, height: float, background: str) -> None:
        for child in list(self.root):
            self.root.remove(child)
        self.root.text = None

        w, h = format_number(width), format_number(height)
        if not self._prefix:
            self.root.set("xmlns", SVG_NS)
        self.root.set("width", w)
        self.root.set("height", h)
        self.root.set("viewBox", f"0 0 {w} {h}")
        self._append("rect", {"width": w, "height": h, "fill": background})

    def fill_rect(self, rect: BarRect, color: str) -> None:
        self._append(
            "rect",
            {
                "x": format_number(rect.x),
                "y": format_number(rect.y),
                "width": format_number(rect.width),
                "height": format_number(rect.height),
                "fill": color,
            },
        )

    def draw_text(self, item: TextItem, font: str, font_path: Optional[str], color: str) -> None:
        self._append(
            "text",
            {
                "x": format_number(item.x),
                "y": format_number(item.baseline),
                "text-anchor": item.anchor.value,
                "font-family": font,
                "font-size": format_number(item.font_size),
                "fill": color,
            },
            item.text,
        )

    def to_string(self) -> str:
        return ET.tostring(self.root, encoding="unicode")


def render_to_vector(svg: ET.Element, code: Any, options: OptionsLike = None) -> ET.Element:
    """
    Render ``code`` into ``svg`` in place.

    Prior children are removed; width, height and viewBox are set; other
    attributes on the element are kept.

    Raises:
        InvalidTargetError: ``svg`` is not an ``svg`` Element.
        UPCAGenError: normalization or option errors.
    """
    surface = VectorSurface(svg)
    draw_plan(surface, plan_code(code, options))
    return svg


def to_vector_string(code: Any, options: OptionsLike = None) -> str:
    """Render into a fresh ``<svg>`` element and return its markup."""
    surface = VectorSurface(ET.Element("svg"))
    draw_plan(surface, plan_code(code, options))
    markup = surface.to_string()
    logger.info("UPC-A SVG produced: %d chars", len(markup))
    return markup
