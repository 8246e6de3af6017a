import asyncio
import base64
import math
from io import BytesIO
from typing import Any, Dict
from unittest.mock import patch

import pytest
from PIL import Image

from upca_renderer.barcodegen.encoder import encode
from upca_renderer.barcodegen.errors import (
    BlobEncodingError,
    InvalidChecksumError,
    InvalidLengthError,
    InvalidTargetError,
)
from upca_renderer.barcodegen.layout import plan_code
from upca_renderer.barcodegen.raster import (
    RasterSurface,
    render,
    to_image_blob,
    to_image_bytes,
    to_image_data_url,
)

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

# Without digits nothing but bars can touch the pixels under test
NO_TEXT: Dict[str, Any] = {"font_size": 0}


@pytest.fixture
def surface() -> RasterSurface:
    return RasterSurface()


class TestRender:
    def test_resizes_surface_in_place(self, surface: RasterSurface) -> None:
        result = render(surface, "012345678905")
        assert result is surface
        assert surface.size == (244, 96)
        assert surface.image.mode == "RGB"

    def test_rerender_resizes_again(self, surface: RasterSurface) -> None:
        render(surface, "012345678905", {"module_width": 4})
        render(surface, "012345678905", {"style": "flat"})
        assert surface.size == (244, 86)

    def test_fractional_size_rounds_up(self, surface: RasterSurface) -> None:
        render(surface, "012345678905", {"padding_left": 0.5})
        assert surface.size == (245, 96)

    def test_bar_pixels(self, surface: RasterSurface) -> None:
        render(surface, "012345678905", NO_TEXT)
        img = surface.image
        # start guard module 0 -> x 27..28
        assert img.getpixel((27, 0)) == BLACK
        assert img.getpixel((28, 69)) == BLACK
        # module 1 is a space
        assert img.getpixel((29, 10)) == WHITE
        # quiet zone
        assert img.getpixel((20, 10)) == WHITE
        # module 6 is ink in the L-code of "0" (data bar, 70 px high)
        assert img.getpixel((39, 69)) == BLACK
        assert img.getpixel((39, 71)) == WHITE

    def test_notched_guards_extend(self, surface: RasterSurface) -> None:
        render(surface, "012345678905", NO_TEXT)
        # center guard module 46 -> x 119
        assert surface.image.getpixel((119, 75)) == BLACK
        assert surface.image.getpixel((119, 80)) == WHITE

    def test_flat_guards_do_not_extend(self, surface: RasterSurface) -> None:
        render(surface, "012345678905", {**NO_TEXT, "style": "flat"})
        assert surface.image.getpixel((119, 69)) == BLACK
        assert surface.image.getpixel((119, 71)) == WHITE

    def test_colors(self, surface: RasterSurface) -> None:
        render(
            surface,
            "012345678905",
            {**NO_TEXT, "background": "#00FF00", "foreground": "#0000FF"},
        )
        assert surface.image.getpixel((0, 0)) == (0, 255, 0)
        assert surface.image.getpixel((27, 0)) == (0, 0, 255)

    def test_digits_are_drawn_below_bars(self, surface: RasterSurface) -> None:
        render(surface, "012345678905")
        # modules 3-44 hold no guards, so only digits can ink this region
        text_row = surface.image.crop((33, 72, 117, 96)).convert("L")
        assert text_row.getextrema()[0] < 128

    def test_no_digits_when_font_size_zero(self, surface: RasterSurface) -> None:
        render(surface, "012345678905", {**NO_TEXT, "style": "flat"})
        text_row = surface.image.crop((0, 71, surface.width, surface.height))
        assert text_row.getcolors() == [(text_row.width * text_row.height, WHITE)]

    @pytest.mark.parametrize(
        "extra",
        [{"small_digit_font_size": 5}, {"outer_digit_gap": 2.5}, {"padding_left": 0.5}],
    )
    def test_half_pixel_start_keeps_every_module(
        self, surface: RasterSurface, extra: Dict[str, Any]
    ) -> None:
        options = {"module_width": 1, **NO_TEXT, **extra}
        render(surface, "012345678905", options)
        start_x = plan_code("012345678905", options).geometry.barcode_start_x
        assert start_x % 1 == 0.5

        pattern = encode("012345678905").pattern
        inked = [x for x in range(surface.width) if surface.image.getpixel((x, 1)) == BLACK]
        origin = math.floor(start_x + 0.5)
        assert len(inked) == pattern.count("1")
        assert inked == [origin + i for i, bit in enumerate(pattern) if bit == "1"]

    def test_missing_font_file_falls_back(self, surface: RasterSurface) -> None:
        render(surface, "012345678905", {"font_path": "/nonexistent/font.ttf"})
        assert surface.size == (244, 96)

    @pytest.mark.parametrize("target", [None, "canvas", Image.new("RGB", (10, 10))])
    def test_invalid_target(self, target: Any) -> None:
        with pytest.raises(InvalidTargetError):
            render(target, "012345678905")

    def test_invalid_code(self, surface: RasterSurface) -> None:
        with pytest.raises(InvalidLengthError):
            render(surface, "")

    def test_validate_policy(self, surface: RasterSurface) -> None:
        with pytest.raises(InvalidChecksumError):
            render(surface, "012345678900", {"checksum": "validate"})


class TestEncodedOutput:
    def test_image_bytes_are_png(self) -> None:
        data = to_image_bytes("03600029145")
        assert data[:4] == b"\x89PNG"
        assert Image.open(BytesIO(data)).size == (244, 96)

    def test_data_url(self) -> None:
        url = to_image_data_url("03600029145")
        prefix = "data:image/png;base64,"
        assert url.startswith(prefix)
        img = Image.open(BytesIO(base64.b64decode(url[len(prefix):])))
        assert img.format == "PNG"
        assert img.size == (244, 96)

    def test_blob(self) -> None:
        blob = asyncio.run(to_image_blob("03600029145", {"module_width": 1}))
        assert isinstance(blob, bytes)
        assert blob[:4] == b"\x89PNG"
        assert Image.open(BytesIO(blob)).width == 131

    def test_blob_encoding_failure(self) -> None:
        with patch.object(Image.Image, "save", side_effect=OSError("encoder error")):
            with pytest.raises(BlobEncodingError, match="Failed to create blob") as exc_info:
                asyncio.run(to_image_blob("03600029145"))
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_blob_render_error_propagates(self) -> None:
        with pytest.raises(InvalidLengthError):
            asyncio.run(to_image_blob("1234567890123"))

    def test_unknown_format(self, surface: RasterSurface) -> None:
        render(surface, "03600029145")
        with pytest.raises(BlobEncodingError):
            surface.to_bytes("NOT-A-FORMAT")
