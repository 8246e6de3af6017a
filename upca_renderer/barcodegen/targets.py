"""
RU: Общий протокол цели отрисовки и единая процедура вывода плана.
EN: Render-target protocol shared by the raster and vector backends.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from upca_renderer.barcodegen.layout import BarRect, DrawPlan, TextItem

logger = logging.getLogger(__name__)

__all__ = ["RenderTarget", "draw_plan"]


@runtime_checkable
class RenderTarget(Protocol):
    """Backend adapter translating draw commands to a concrete surface."""

    def begin(self, width: float, height: float, background: str) -> None:
        """Resize/clear the target and paint the background."""
        ...

    def fill_rect(self, rect: BarRect, color: str) -> None:
        ...

    def draw_text(self, item: TextItem, font: str, font_path: Optional[str], color: str) -> None:
        ...


def draw_plan(target: RenderTarget, plan: DrawPlan) -> None:
    """Replay ``plan`` onto ``target`` (background, bars, then digits)."""
    target.begin(plan.width, plan.height, plan.background)
    for rect in plan.bars:
        target.fill_rect(rect, plan.foreground)
    for item in plan.texts:
        target.draw_text(item, plan.font, plan.font_path, plan.foreground)
    logger.debug(
        "Drew %s on %s: %d bars, %d digits",
        plan.full_code,
        type(target).__name__,
        len(plan.bars),
        len(plan.texts),
    )
