import asyncio
import xml.etree.ElementTree as ET
from io import BytesIO
from unittest.mock import patch

import pytest
from PIL import Image

from upca_renderer.barcodegen.errors import (
    BlobEncodingError,
    InvalidChecksumError,
    InvalidLengthError,
    InvalidOptionError,
)
from upca_renderer.barcodegen.options import RenderOptions
from upca_renderer.barcodegen.upca_generator import UPCAGenerator
from upca_renderer.model.enums import BarStyle


class TestUPCAGenerator:
    """UPCAGenerator object API."""

    @pytest.fixture
    def generator(self) -> UPCAGenerator:
        return UPCAGenerator("03600029145")

    # === Initialization ===
    def test_init_defaults(self, generator: UPCAGenerator) -> None:
        assert generator.data == "03600029145"
        assert generator.options == RenderOptions()

    def test_init_with_options(self) -> None:
        gen = UPCAGenerator("03600029145", {"style": "flat", "module_width": 3})
        assert gen.options.style is BarStyle.FLAT
        assert gen.options.module_width == 3

    def test_init_rejects_unknown_options(self) -> None:
        with pytest.raises(InvalidOptionError):
            UPCAGenerator("03600029145", {"dpi": 300})

    # === Validation ===
    def test_full_code(self, generator: UPCAGenerator) -> None:
        assert generator.full_code == "036000291452"

    def test_validate_success(self, generator: UPCAGenerator) -> None:
        generator.validate()

    def test_validate_empty(self) -> None:
        with pytest.raises(InvalidLengthError):
            UPCAGenerator("   ").validate()

    def test_validate_checksum_policy(self) -> None:
        gen = UPCAGenerator("036000291450", {"checksum": "validate"})
        with pytest.raises(InvalidChecksumError, match="expected 2, got 0"):
            gen.validate()

    def test_encode(self, generator: UPCAGenerator) -> None:
        symbol = generator.encode()
        assert symbol.full_code == "036000291452"
        assert len(symbol.pattern) == 95

    # === Rendering ===
    def test_render_image(self, generator: UPCAGenerator) -> None:
        img = generator.render_image()
        assert isinstance(img, Image.Image)
        assert img.size == (244, 96)

    def test_render_image_invalid(self) -> None:
        with pytest.raises(InvalidLengthError):
            UPCAGenerator("1" * 13).render_image()

    def test_render_bytes(self, generator: UPCAGenerator) -> None:
        data = generator.render_bytes()
        assert data[:4] == b"\x89PNG"
        assert Image.open(BytesIO(data)).size == (244, 96)

    def test_render_bytes_encoding_error(self, generator: UPCAGenerator) -> None:
        with patch.object(Image.Image, "save", side_effect=ValueError("bad params")):
            with pytest.raises(BlobEncodingError):
                generator.render_bytes()

    def test_render_svg(self, generator: UPCAGenerator) -> None:
        root = ET.fromstring(generator.render_svg())
        assert root.get("viewBox") == "0 0 244 96"

    def test_render_bytes_async(self, generator: UPCAGenerator) -> None:
        async def _run() -> bytes:
            return await generator.render_bytes_async()

        data = asyncio.run(_run())
        assert data == generator.render_bytes()

    @pytest.mark.parametrize("method", ["render_image", "render_bytes", "render_svg"])
    def test_render_methods_validate_first(self, generator: UPCAGenerator, method: str) -> None:
        with patch.object(
            UPCAGenerator, "validate", side_effect=InvalidLengthError(13)
        ) as mocked:
            with pytest.raises(InvalidLengthError):
                getattr(generator, method)()
        mocked.assert_called_once_with()
