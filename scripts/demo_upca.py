#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Demo script for the UPC-A renderer: writes PNG and SVG samples.

Usage:
    python demo_upca.py [output_dir]
"""

from __future__ import annotations

import sys
from pathlib import Path

from upca_renderer import (
    RasterSurface,
    format_upc,
    render,
    to_vector_string,
    validate,
)

SAMPLES = [
    ("03600029145", {}),
    ("012345678905", {"checksum": "validate", "style": "flat"}),
    ("7 25272 73070 6", {"module_width": 3, "padding_left": 10, "padding_right": 10}),
    ("12345", {"font_size": 0}),
]


def print_banner(text: str) -> None:
    """Print section banner."""
    print()
    print("=" * 70)
    print(f"  {text}")
    print("=" * 70)


def main(output_dir: Path) -> int:
    output_dir.mkdir(parents=True, exist_ok=True)
    print_banner("UPC-A samples")
    for code, options in SAMPLES:
        label = format_upc(code)
        surface = render(RasterSurface(), code, options)
        png_path = output_dir / f"upca_{label}.png"
        surface.image.save(png_path)
        svg_path = output_dir / f"upca_{label}.svg"
        svg_path.write_text(to_vector_string(code, options), encoding="utf-8")
        print(f"{code!r:20} -> {label} valid={validate(code)} {surface.size} {png_path.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("upca_samples")))
