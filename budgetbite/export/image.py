"""Mini README: PNG snapshot exporter.

Delegates drawing to the configured rasteriser and encodes the bitmap as
``budget-snapshot.png``. Rasteriser failures propagate unchanged.
"""

from __future__ import annotations

from io import BytesIO

from .base import ExportKind, LedgerExporter
from .rasteriser import DashboardRasteriser, SnapshotRasteriser
from .registry import REGISTRY
from ..analytics import AnalyticsRecord
from ..ledger import LedgerSnapshot


class RasterExporter(LedgerExporter):
    """Common plumbing for exporters built on a captured bitmap."""

    def resolve_rasteriser(self) -> SnapshotRasteriser:
        if self.rasteriser is None:
            self.rasteriser = DashboardRasteriser.from_settings()
        return self.rasteriser


class ImageExporter(RasterExporter):
    kind = ExportKind.IMAGE
    filename = "budget-snapshot.png"
    media_type = "image/png"

    def render(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> bytes:
        bitmap = self.resolve_rasteriser().capture(snapshot, analytics)
        buffer = BytesIO()
        bitmap.save(buffer, format="PNG")
        return buffer.getvalue()


REGISTRY.register(ImageExporter)
