"""Mini README: Snapshot rasterisation collaborator.

Structure:
    * SnapshotRasteriser - abstract collaborator turning ledger state into a bitmap.
    * DashboardRasteriser - Pillow implementation drawing the dashboard surface.

Image and document exporters only call ``capture``; all pixel work lives
here so alternative renderers (headless browsers, plotting libraries) can be
swapped in. The Pillow renderer draws the summary cards, the usage meter,
a donut chart of the per-item analytics and the transaction list on a black
background at twice the logical resolution.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..analytics import AnalyticsRecord, color_for
from ..ledger import LedgerSnapshot
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_WIDTH = 800
_HEADER = 90
_SUMMARY = 230
_CHART = 280
_ROW = 40
_FOOTER = 50

_TEXT = "#D4D4D8"
_MUTED = "#71717A"
_PANEL = "#18181B"
_ACCENT = "#6366F1"
_DANGER = "#F43F5E"
_SAFE = "#34D399"


def _display(value: float) -> str:
    """Thousands separators, decimals only when needed."""

    text = f"{value:,.2f}"
    return text[:-3] if text.endswith(".00") else text


class SnapshotRasteriser(ABC):
    """Collaborator that captures the visual surface of a ledger snapshot."""

    scale: int = 1
    background: str = "#000000"

    @abstractmethod
    def capture(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> Image.Image:
        """Render the snapshot to an RGB bitmap."""


class DashboardRasteriser(SnapshotRasteriser):
    """Draw the ledger dashboard with Pillow."""

    def __init__(self, *, scale: int = 2, background: str = "#000000") -> None:
        if scale < 1:
            raise ValueError("Scale must be at least 1")
        self.scale = scale
        self.background = background
        self._fonts = {}
        LOGGER.debug("DashboardRasteriser initialised with scale=%s background=%s", scale, background)

    @classmethod
    def from_settings(cls) -> "DashboardRasteriser":
        from ..configuration import get_settings

        settings = get_settings()
        return cls(scale=settings.raster_scale, background=settings.raster_background)

    def _px(self, value: float) -> int:
        return int(round(value * self.scale))

    def _font(self, size: int) -> ImageFont.ImageFont:
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size=self._px(size))
        return self._fonts[size]

    def _text(self, draw: ImageDraw.ImageDraw, xy: Tuple[float, float], text: str, *, size: int = 14, fill: str = _TEXT) -> None:
        draw.text((self._px(xy[0]), self._px(xy[1])), text, fill=fill, font=self._font(size))

    def _box(self, draw: ImageDraw.ImageDraw, box: Tuple[float, float, float, float], fill: str) -> None:
        draw.rectangle(tuple(self._px(value) for value in box), fill=fill)

    def surface_size(self, snapshot: LedgerSnapshot) -> Tuple[int, int]:
        """Logical (unscaled) size of the dashboard for ``snapshot``."""

        rows = max(len(snapshot.expenses), 1)
        return _WIDTH, _HEADER + _SUMMARY + _CHART + rows * _ROW + _FOOTER

    def capture(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> Image.Image:
        width, height = self.surface_size(snapshot)
        image = Image.new("RGB", (self._px(width), self._px(height)), ImageColor.getrgb(self.background))
        draw = ImageDraw.Draw(image)
        symbol = snapshot.currency.symbol

        self._text(draw, (32, 28), "BUDGET.BITE", size=22, fill="#FFFFFF")
        self._text(draw, (width - 110, 32), snapshot.currency.code, size=16, fill=_ACCENT)

        top = _HEADER
        self._box(draw, (24, top, width - 24, top + _SUMMARY - 20), _PANEL)
        self._text(draw, (48, top + 20), "TOTAL SPENT", size=12, fill=_MUTED)
        self._text(draw, (48, top + 44), f"{symbol}{_display(analytics.total)}", size=36, fill="#FFFFFF")
        self._text(draw, (width - 180, top + 56), f"{analytics.usage_percent:.1f}%", size=20)

        meter_top = top + 104
        self._box(draw, (48, meter_top, width - 48, meter_top + 10), "#27272A")
        fill_width = (width - 96) * max(analytics.meter_fill_percent, 0.0) / 100
        if fill_width > 0:
            meter_colour = _DANGER if analytics.usage_ratio > 1 else _ACCENT
            self._box(draw, (48, meter_top, 48 + fill_width, meter_top + 10), meter_colour)

        self._text(draw, (48, top + 140), "BUDGET", size=12, fill=_MUTED)
        self._text(draw, (48, top + 160), f"{symbol}{_display(snapshot.budget)}", size=20)
        self._text(draw, (width / 2, top + 140), "SAFE TO SPEND", size=12, fill=_MUTED)
        self._text(
            draw,
            (width / 2, top + 160),
            f"{symbol}{_display(analytics.safe_to_spend)}",
            size=20,
            fill=_DANGER if analytics.is_over_budget else _SAFE,
        )

        chart_top = top + _SUMMARY
        self._draw_donut(draw, analytics, centre=(200, chart_top + _CHART / 2), radius=110)
        legend_y = chart_top + 30
        for item in analytics.per_item[:8]:
            if item.placeholder:
                self._text(draw, (380, legend_y), "NO TRANSACTIONS YET", size=14, fill=_MUTED)
                break
            self._box(draw, (380, legend_y + 4, 392, legend_y + 16), item.color)
            self._text(draw, (402, legend_y), f"{item.name}  {item.budget_share_percent}%", size=14)
            legend_y += 28

        list_top = chart_top + _CHART
        if not snapshot.expenses:
            self._text(draw, (48, list_top + 10), "Ledger is empty", size=14, fill=_MUTED)
        for index, expense in enumerate(snapshot.expenses):
            row_y = list_top + index * _ROW
            self._box(draw, (32, row_y + 8, 44, row_y + 28), color_for(expense.name))
            self._text(draw, (56, row_y + 10), expense.name, size=14)
            self._text(draw, (360, row_y + 10), expense.created_at.strftime("%H:%M"), size=12, fill=_MUTED)
            self._text(draw, (width - 200, row_y + 10), f"-{symbol}{_display(expense.amount)}", size=14)

        LOGGER.debug("Rasterised snapshot at %sx%s", image.width, image.height)
        return image

    def _draw_donut(
        self,
        draw: ImageDraw.ImageDraw,
        analytics: AnalyticsRecord,
        *,
        centre: Tuple[float, float],
        radius: float,
    ) -> None:
        cx, cy = centre
        bounds = tuple(self._px(v) for v in (cx - radius, cy - radius, cx + radius, cy + radius))
        weights = [(item.value, item.color) for item in analytics.per_item if item.value > 0]
        total = sum(weight for weight, _ in weights)
        if total <= 0:
            draw.ellipse(bounds, fill=_PANEL)
        else:
            start = -90.0
            for weight, colour in weights:
                sweep = 360.0 * weight / total
                draw.pieslice(bounds, start, start + sweep, fill=colour)
                start += sweep
        inner = radius * 0.76
        draw.ellipse(
            tuple(self._px(v) for v in (cx - inner, cy - inner, cx + inner, cy + inner)),
            fill=ImageColor.getrgb(self.background),
        )
