"""
RU: Объектный API генератора UPC-A.
EN: Object API wrapping normalization, encoding and both backends for one code.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from PIL import Image

from upca_renderer.barcodegen.encoder import EncodedSymbol, encode
from upca_renderer.barcodegen.errors import InvalidChecksumError, InvalidLengthError
from upca_renderer.barcodegen.normalizer import normalize_input
from upca_renderer.barcodegen.options import OptionsLike, RenderOptions, resolve_options
from upca_renderer.barcodegen.raster import RasterSurface, render
from upca_renderer.barcodegen.vector import to_vector_string

logger = logging.getLogger(__name__)

__all__ = ["UPCAGenerator"]


class UPCAGenerator:
    """
    Object API for one UPC-A code.

    Args:
        data: Payload string (1-12 digits, separators ignored).
        options: Render options mapping or RenderOptions.

    Example:
        >>> gen = UPCAGenerator("03600029145", {"style": "flat"})
        >>> gen.full_code
        '036000291452'
        >>> png = gen.render_bytes()
    """

    def __init__(self, data: Any, options: OptionsLike = None) -> None:
        self.data = data
        self.options: RenderOptions = resolve_options(options)

    @property
    def full_code(self) -> str:
        return normalize_input(self.data, self.options.checksum)

    def validate(self) -> None:
        """
        Проверяет входные данные по правилам UPC-A и политике контрольной цифры.

        Raises:
            InvalidLengthError: no digits or more than 12.
            InvalidChecksumError: VALIDATE policy and a wrong check digit.
        """
        try:
            normalize_input(self.data, self.options.checksum)
        except (InvalidLengthError, InvalidChecksumError) as e:
            logger.warning("UPC-A validation failed for %r: %s", self.data, e)
            raise

    def encode(self) -> EncodedSymbol:
        return encode(self.data, self.options.checksum)

    def render_image(self) -> Image.Image:
        """Render to a new Pillow image sized by the layout."""
        self.validate()
        surface = RasterSurface()
        render(surface, self.data, self.options)
        return surface.image

    def render_bytes(self) -> bytes:
        self.validate()
        surface = RasterSurface()
        render(surface, self.data, self.options)
        return surface.to_bytes("PNG")

    def render_svg(self) -> str:
        self.validate()
        return to_vector_string(self.data, self.options)

    async def render_bytes_async(self) -> bytes:
        """Async wrapper for render_bytes (for thread pools)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.render_bytes)
