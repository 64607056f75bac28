"""Mini README: Exporter registry keyed by artifact kind.

Structure:
    * ExporterRegistry - maps ``ExportKind`` values to exporter classes.
    * REGISTRY - shared registry populated when exporter modules are imported.

Exporter modules call ``REGISTRY.register`` at import time, mirroring how
new artifact kinds can be added without touching the web or CLI layers.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Type

from .base import ExportArtifact, ExportKind, LedgerExporter
from ..analytics import AnalyticsRecord
from ..ledger import LedgerSnapshot
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class ExporterRegistry:
    """Simple registry for mapping export kinds to exporter classes."""

    def __init__(self) -> None:
        self._exporters: Dict[ExportKind, Type[LedgerExporter]] = {}

    def register(self, exporter: Type[LedgerExporter]) -> None:
        """Register an exporter class under its declared kind."""

        LOGGER.debug("Registering exporter '%s'", exporter.kind.value)
        self._exporters[exporter.kind] = exporter

    def available_kinds(self) -> Iterable[str]:
        """Return kind identifiers for display."""

        return sorted(kind.value for kind in self._exporters)

    def create(self, identifier: object, *, rasteriser=None) -> LedgerExporter:
        """Instantiate the exporter for ``identifier`` (kind name or extension)."""

        try:
            kind = ExportKind.from_str(identifier)
        except ValueError as error:
            raise KeyError(f"Unknown export kind '{identifier}'") from error
        exporter_cls = self._exporters.get(kind)
        if not exporter_cls:
            raise KeyError(f"Unknown export kind '{identifier}'")
        return exporter_cls(rasteriser=rasteriser)

    def export(
        self,
        identifier: object,
        snapshot: LedgerSnapshot,
        analytics: Optional[AnalyticsRecord] = None,
        *,
        rasteriser=None,
    ) -> ExportArtifact:
        """Create the matching exporter and run it against ``snapshot``."""

        return self.create(identifier, rasteriser=rasteriser).export(snapshot, analytics)


REGISTRY = ExporterRegistry()
