"""Mini README: Shared export abstractions.

Structure:
    * ExportKind - enumeration of artifact kinds with their aliases.
    * ExportArtifact - bytes plus the file name and media type to offer them under.
    * LedgerExporter - abstract exporter turning a snapshot into an artifact.

Exporters only read snapshots. They never receive the ledger store, so a
failing export cannot leave the ledger half-modified.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from ..analytics import AnalyticsRecord, compute_analytics
from ..ledger import LedgerSnapshot
from ..logging_utils import get_logger

if TYPE_CHECKING:
    from .rasteriser import SnapshotRasteriser

LOGGER = get_logger(__name__)

_ALIASES = {
    "csv": "table",
    "png": "image",
    "pdf": "document",
}


class ExportKind(str, Enum):
    """Artifact kinds a user can request."""

    TABLE = "table"
    IMAGE = "image"
    DOCUMENT = "document"

    @classmethod
    def from_str(cls, value: object) -> "ExportKind":
        """Accept kind names as well as their file extensions."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower().lstrip(".")
            return cls(_ALIASES.get(normalised, normalised))
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported export kind: {value}") from error


@dataclass(frozen=True, slots=True)
class ExportArtifact:
    """An exported file held in memory."""

    filename: str
    media_type: str
    content: bytes

    def write_to(self, directory: Path) -> Path:
        """Write the artifact into ``directory`` under its own file name."""

        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        destination = directory / self.filename
        destination.write_bytes(self.content)
        LOGGER.info("Wrote %s (%s bytes)", destination, len(self.content))
        return destination


class LedgerExporter(ABC):
    """Base interface for artifact exporters."""

    kind: ExportKind
    filename: str
    media_type: str

    def __init__(self, rasteriser: Optional["SnapshotRasteriser"] = None) -> None:
        self.rasteriser = rasteriser

    def export(
        self, snapshot: LedgerSnapshot, analytics: Optional[AnalyticsRecord] = None
    ) -> ExportArtifact:
        """Serialise ``snapshot`` into this exporter's artifact."""

        analytics = analytics or compute_analytics(snapshot)
        content = self.render(snapshot, analytics)
        LOGGER.info(
            "Exported %s expenses as %s (%s bytes)",
            len(snapshot.expenses),
            self.filename,
            len(content),
        )
        return ExportArtifact(filename=self.filename, media_type=self.media_type, content=content)

    @abstractmethod
    def render(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> bytes:
        """Produce the artifact bytes."""
