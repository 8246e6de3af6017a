"""
barcodegen

Генерация штрихкодов UPC-A: контрольная цифра, нормализация, кодирование,
раскладка и вывод в растр (Pillow) или SVG.

Public API:
    - calculate_checksum, normalize_input, validate, format_upc
    - encode / EncodedSymbol: 95-модульный рисунок штрихов
    - render / RasterSurface, to_image_data_url, to_image_blob (async)
    - render_to_vector, to_vector_string
    - UPCAGenerator: объектный API
    - RenderOptions, RenderOptionsDict, DEFAULT_OPTIONS
    - UPCAGenError и подклассы

Примеры:
    >>> from upca_renderer.barcodegen import encode, to_vector_string
    >>> encode("03600029145").full_code
    '036000291452'
    >>> svg = to_vector_string("03600029145", {"style": "flat"})

Зависимости:
    Pillow
"""

from upca_renderer.barcodegen.checksum import calculate_checksum, sanitize_digits
from upca_renderer.barcodegen.encoder import (
    L_CODES,
    PATTERN_LENGTH,
    R_CODES,
    EncodedSymbol,
    encode,
    is_guard_module,
)
from upca_renderer.barcodegen.errors import (
    BlobEncodingError,
    InvalidChecksumError,
    InvalidLengthError,
    InvalidOptionError,
    InvalidTargetError,
    UPCAGenError,
)
from upca_renderer.barcodegen.layout import (
    DrawPlan,
    Geometry,
    compute_geometry,
    plan_code,
    plan_symbol,
)
from upca_renderer.barcodegen.normalizer import format_upc, normalize_input, validate
from upca_renderer.barcodegen.options import (
    DEFAULT_OPTIONS,
    RenderOptions,
    RenderOptionsDict,
)
from upca_renderer.barcodegen.raster import (
    RasterSurface,
    render,
    to_image_blob,
    to_image_bytes,
    to_image_data_url,
)
from upca_renderer.barcodegen.targets import RenderTarget, draw_plan
from upca_renderer.barcodegen.upca_generator import UPCAGenerator
from upca_renderer.barcodegen.vector import (
    SVG_NS,
    VectorSurface,
    render_to_vector,
    to_vector_string,
)

__all__ = [
    "calculate_checksum",
    "sanitize_digits",
    "normalize_input",
    "validate",
    "format_upc",
    "encode",
    "EncodedSymbol",
    "is_guard_module",
    "L_CODES",
    "R_CODES",
    "PATTERN_LENGTH",
    "Geometry",
    "DrawPlan",
    "compute_geometry",
    "plan_symbol",
    "plan_code",
    "RenderTarget",
    "draw_plan",
    "RasterSurface",
    "render",
    "to_image_bytes",
    "to_image_data_url",
    "to_image_blob",
    "SVG_NS",
    "VectorSurface",
    "render_to_vector",
    "to_vector_string",
    "UPCAGenerator",
    "RenderOptions",
    "RenderOptionsDict",
    "DEFAULT_OPTIONS",
    "UPCAGenError",
    "InvalidChecksumError",
    "InvalidLengthError",
    "InvalidTargetError",
    "BlobEncodingError",
    "InvalidOptionError",
]
