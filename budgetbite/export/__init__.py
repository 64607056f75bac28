"""Mini README: Export artifacts for BudgetBite ledgers.

Exposes the CSV, PNG and PDF exporters together with the shared registry.
Importing the package registers every built-in exporter.
"""

from .base import ExportArtifact, ExportKind, LedgerExporter
from .registry import REGISTRY, ExporterRegistry
from .rasteriser import DashboardRasteriser, SnapshotRasteriser
from .tabular import TabularExporter
from .image import ImageExporter
from .document import DocumentExporter, a4_placement

__all__ = [
    "DashboardRasteriser",
    "DocumentExporter",
    "ExportArtifact",
    "ExportKind",
    "ExporterRegistry",
    "ImageExporter",
    "LedgerExporter",
    "REGISTRY",
    "SnapshotRasteriser",
    "TabularExporter",
    "a4_placement",
]
