"""
RU: Растровый вывод UPC-A через Pillow (PNG, data URL, асинхронный blob).
EN: Raster UPC-A backend on Pillow: in-place surface rendering, PNG bytes,
data URLs and an async single-shot blob conversion.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import math
from functools import lru_cache
from io import BytesIO
from typing import Any, Final, Optional, Union

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont
from PIL.ImageFont import ImageFont as PILImageFont

from upca_renderer.barcodegen.errors import BlobEncodingError, InvalidTargetError
from upca_renderer.barcodegen.layout import BarRect, TextItem, plan_code
from upca_renderer.barcodegen.options import OptionsLike
from upca_renderer.barcodegen.targets import draw_plan
from upca_renderer.model.enums import TextAnchor

logger = logging.getLogger(__name__)

__all__ = [
    "RasterSurface",
    "render",
    "to_image_bytes",
    "to_image_data_url",
    "to_image_blob",
]

PNG_MIME: Final[str] = "image/png"

PILFont = Union[FreeTypeFont, PILImageFont]


@lru_cache(maxsize=32)
def _load_font(font_path: Optional[str], size: int) -> PILFont:
    """TrueType font from ``font_path``, else Pillow's default scalable font."""
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as e:
            logger.warning("Failed to load font (%r): %r; using default", font_path, e)
    return ImageFont.load_default(size)


def _snap(value: float) -> int:
    """Pixel edge for a coordinate: halves go up, float noise is dropped."""
    return math.floor(round(value, 6) + 0.5)


class RasterSurface:
    """
    Mutable pixel surface backed by a Pillow image.

    :meth:`begin` replaces the image with one of the requested size, which
    is how a render resizes the surface in place.

    Example:
        >>> surface = RasterSurface()
        >>> render(surface, "03600029145")
        >>> surface.image.size
        (244, 96)
    """

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        mode: str = "RGB",
        background: str = "#FFFFFF",
    ) -> None:
        self.mode = mode
        self.image: Image.Image = Image.new(mode, (max(width, 0), max(height, 0)), background)
        self._draw: ImageDraw.ImageDraw = ImageDraw.Draw(self.image)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def begin(self, width: float, height: float, background: str) -> None:
        # Rounded like the SVG attributes so float noise cannot add a pixel
        size = (math.ceil(round(width, 6)), math.ceil(round(height, 6)))
        self.image = Image.new(self.mode, size, background)
        self._draw = ImageDraw.Draw(self.image)

    def fill_rect(self, rect: BarRect, color: str) -> None:
        # Half-open spans; both edges snap half-up so adjacent modules tile
        x0, y0 = _snap(rect.x), _snap(rect.y)
        x1, y1 = _snap(rect.x + rect.width), _snap(rect.y + rect.height)
        if x1 <= x0 or y1 <= y0:
            return
        self._draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=color)

    def draw_text(self, item: TextItem, font: str, font_path: Optional[str], color: str) -> None:
        # ``font`` is a CSS family list; only the vector backend can use it
        pil_font = _load_font(font_path, max(1, int(round(item.font_size))))
        text_width = self._draw.textlength(item.text, font=pil_font)
        x = item.x
        if item.anchor is TextAnchor.MIDDLE:
            x -= text_width / 2
        elif item.anchor is TextAnchor.END:
            x -= text_width
        self._draw.text((x, item.top), item.text, font=pil_font, fill=color)

    def to_bytes(self, image_format: str = "PNG") -> bytes:
        """
        Encode the current image.

        Raises:
            BlobEncodingError: if Pillow cannot encode the image.
        """
        buf = BytesIO()
        try:
            self.image.save(buf, format=image_format)
        except (OSError, ValueError, KeyError) as e:
            logger.warning("Image encoding failed (%s): %r", image_format, e)
            raise BlobEncodingError("Failed to create blob", image_format) from e
        logger.debug("Surface encoded as %s (%d bytes)", image_format, buf.getbuffer().nbytes)
        return buf.getvalue()

    def to_data_url(self) -> str:
        b64 = base64.b64encode(self.to_bytes("PNG")).decode("ascii")
        return f"data:{PNG_MIME};base64,{b64}"


def render(surface: RasterSurface, code: Any, options: OptionsLike = None) -> RasterSurface:
    """
    Render ``code`` onto ``surface`` in place, resizing it first.

    Raises:
        InvalidTargetError: ``surface`` is not a RasterSurface.
        UPCAGenError: normalization or option errors.
    """
    if not isinstance(surface, RasterSurface):
        raise InvalidTargetError(surface, "raster surface")
    draw_plan(surface, plan_code(code, options))
    return surface


def to_image_bytes(code: Any, options: OptionsLike = None) -> bytes:
    """Render onto a fresh surface and return PNG bytes."""
    surface = RasterSurface()
    render(surface, code, options)
    return surface.to_bytes("PNG")


def to_image_data_url(code: Any, options: OptionsLike = None) -> str:
    """Render onto a fresh surface and return a ``data:image/png;base64`` URI."""
    surface = RasterSurface()
    render(surface, code, options)
    url = surface.to_data_url()
    logger.info("UPC-A data URL produced: %dx%d", surface.width, surface.height)
    return url


async def to_image_blob(code: Any, options: OptionsLike = None) -> bytes:
    """
    Async PNG conversion on the loop's default executor.

    Completes once with the PNG bytes, or raises the render error or
    :class:`BlobEncodingError`.
    """
    loop = asyncio.get_running_loop()
    blob = await loop.run_in_executor(None, lambda: to_image_bytes(code, options))
    logger.info("UPC-A blob produced: %d bytes", len(blob))
    return blob
