"""Mini README: One-page PDF statement exporter.

Structure:
    * a4_placement - where a bitmap lands on an A4 portrait page.
    * DocumentExporter - rasterises the snapshot and composes the page.

The bitmap is anchored at the top-left corner, stretched to the page width
and given the height that keeps its aspect ratio. Tall snapshots run off the
bottom of the single page rather than being split.
"""

from __future__ import annotations

from io import BytesIO
from typing import Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .base import ExportKind
from .image import RasterExporter
from .registry import REGISTRY
from ..analytics import AnalyticsRecord
from ..ledger import LedgerSnapshot
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


def a4_placement(width_px: int, height_px: int) -> Tuple[float, float, float, float]:
    """Return ``(x, y, width, height)`` in points for reportlab's bottom-left origin."""

    if width_px <= 0 or height_px <= 0:
        raise ValueError("Bitmap dimensions must be positive")
    page_width, page_height = A4
    draw_height = height_px * page_width / width_px
    return 0.0, page_height - draw_height, page_width, draw_height


class DocumentExporter(RasterExporter):
    kind = ExportKind.DOCUMENT
    filename = "budget-statement.pdf"
    media_type = "application/pdf"

    def render(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> bytes:
        bitmap = self.resolve_rasteriser().capture(snapshot, analytics)
        x, y, width, height = a4_placement(bitmap.width, bitmap.height)
        LOGGER.debug("Placing %sx%s bitmap on A4 at height %.2fpt", bitmap.width, bitmap.height, height)

        buffer = BytesIO()
        document = canvas.Canvas(buffer, pagesize=A4)
        document.setTitle("Budget statement")
        document.drawImage(ImageReader(bitmap), x, y, width=width, height=height)
        document.showPage()
        document.save()
        return buffer.getvalue()


REGISTRY.register(DocumentExporter)
