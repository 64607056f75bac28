"""Mini README: Tests for CSV, PNG and PDF exports.

Structure:
    * CSV layout, ordering and agreement with analytics.
    * PNG rendering through the Pillow rasteriser.
    * PDF page composition and A4 placement.
    * Registry lookups and collaborator failures.
"""

from __future__ import annotations

from datetime import datetime
from io import BytesIO

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4

from budgetbite.analytics import AnalyticsRecord, compute_analytics
from budgetbite.export import (
    REGISTRY,
    DashboardRasteriser,
    DocumentExporter,
    ExportKind,
    ImageExporter,
    SnapshotRasteriser,
    TabularExporter,
    a4_placement,
)
from budgetbite.ledger import Currency, LedgerSnapshot, LedgerStore
from budgetbite.storage import InMemoryKeyValueStore

RENT_ID = 1_717_000_000_000
FOOD_ID = 1_717_086_400_000


def report_date(expense_id: int) -> str:
    moment = datetime.fromtimestamp(expense_id / 1000)
    return f"{moment.month}/{moment.day}/{moment.year}"


@pytest.fixture()
def store() -> LedgerStore:
    ticks = iter([RENT_ID, FOOD_ID])
    ledger = LedgerStore(InMemoryKeyValueStore(), clock=lambda: next(ticks))
    ledger.add_expense("rent", "1200")
    ledger.add_expense("food", "300")
    ledger.set_budget(1000)
    return ledger


class SolidRasteriser(SnapshotRasteriser):
    """Returns a fixed-size bitmap and records each call."""

    def __init__(self, size=(400, 600)) -> None:
        self.size = size
        self.calls = []

    def capture(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> Image.Image:
        self.calls.append((snapshot, analytics))
        return Image.new("RGB", self.size, (0, 0, 0))


class BrokenRasteriser(SnapshotRasteriser):
    def capture(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> Image.Image:
        raise RuntimeError("canvas unavailable")


def test_csv_has_header_and_one_row_per_expense(store: LedgerStore) -> None:
    """Two expenses give three lines whose values agree with analytics."""

    artifact = TabularExporter().export(store.snapshot())
    lines = artifact.content.decode("utf-8").split("\n")

    assert artifact.filename == "budget-report.csv"
    assert artifact.media_type.startswith("text/csv")
    assert lines == [
        "Date,Item,Amount (USD),% of Budget",
        f"{report_date(FOOD_ID)},FOOD,300,30.00%",
        f"{report_date(RENT_ID)},RENT,1200,120.00%",
    ]
    analytics = compute_analytics(store.snapshot())
    shares = [float(line.rsplit(",", 1)[1].rstrip("%")) for line in lines[1:]]
    assert shares == [item.budget_share_percent for item in analytics.per_item]


def test_csv_without_budget_and_other_currency(store: LedgerStore) -> None:
    store.set_budget(0)
    store.set_currency("BDT")
    lines = TabularExporter().export(store.snapshot()).content.decode("utf-8").split("\n")

    assert lines[0] == "Date,Item,Amount (BDT),% of Budget"
    assert lines[1].endswith(",FOOD,300,0%")


def test_csv_for_empty_ledger_is_header_only() -> None:
    content = TabularExporter().export(LedgerSnapshot(currency=Currency.GBP)).content
    assert content == "Date,Item,Amount (GBP),% of Budget".encode("utf-8")


def test_csv_passes_commas_through_unescaped() -> None:
    """Names with commas are written verbatim and widen the row."""

    ledger = LedgerStore(InMemoryKeyValueStore(), clock=lambda: RENT_ID)
    ledger.add_expense("milk, eggs", "12.5")
    row = TabularExporter().export(ledger.snapshot()).content.decode("utf-8").split("\n")[1]
    assert row == f"{report_date(RENT_ID)},MILK, EGGS,12.5,0%"
    assert len(row.split(",")) == 5


def test_csv_spells_out_overflowing_shares() -> None:
    ledger = LedgerStore(InMemoryKeyValueStore(), clock=lambda: RENT_ID)
    ledger.add_expense("yacht", "1e308")
    ledger.set_budget("1")
    row = TabularExporter().export(ledger.snapshot()).content.decode("utf-8").split("\n")[1]
    assert row == f"{report_date(RENT_ID)},YACHT,1e+308,Infinity%"


def test_png_export_uses_scaled_black_canvas(store: LedgerStore) -> None:
    rasteriser = DashboardRasteriser(scale=2, background="#000000")
    artifact = ImageExporter(rasteriser=rasteriser).export(store.snapshot())

    assert artifact.filename == "budget-snapshot.png"
    assert artifact.content.startswith(b"\x89PNG\r\n\x1a\n")
    image = Image.open(BytesIO(artifact.content))
    width, height = rasteriser.surface_size(store.snapshot())
    assert image.size == (width * 2, height * 2)
    assert image.convert("RGB").getpixel((0, 0)) == (0, 0, 0)


def test_png_export_renders_empty_ledger() -> None:
    artifact = ImageExporter(rasteriser=DashboardRasteriser(scale=1)).export(LedgerSnapshot())
    assert Image.open(BytesIO(artifact.content)).format == "PNG"


def test_pdf_export_composes_single_a4_page(store: LedgerStore) -> None:
    rasteriser = SolidRasteriser()
    artifact = DocumentExporter(rasteriser=rasteriser).export(store.snapshot())

    assert artifact.filename == "budget-statement.pdf"
    assert artifact.media_type == "application/pdf"
    assert artifact.content.startswith(b"%PDF")
    assert b"/Count 1" in artifact.content
    assert len(rasteriser.calls) == 1


def test_a4_placement_keeps_aspect_ratio() -> None:
    page_width, page_height = A4
    x, y, width, height = a4_placement(1600, 2000)

    assert x == 0.0
    assert width == pytest.approx(page_width)
    assert height == pytest.approx(page_width * 2000 / 1600)
    assert y == pytest.approx(page_height - height)
    with pytest.raises(ValueError):
        a4_placement(0, 10)


def test_registry_resolves_kinds_and_aliases() -> None:
    assert list(REGISTRY.available_kinds()) == ["document", "image", "table"]
    assert isinstance(REGISTRY.create("csv"), TabularExporter)
    assert isinstance(REGISTRY.create("PNG"), ImageExporter)
    assert isinstance(REGISTRY.create(ExportKind.DOCUMENT), DocumentExporter)
    with pytest.raises(KeyError):
        REGISTRY.create("xlsx")


def test_rasteriser_failure_propagates_and_leaves_ledger_alone(store: LedgerStore) -> None:
    before = store.snapshot()
    with pytest.raises(RuntimeError):
        REGISTRY.export("pdf", before, rasteriser=BrokenRasteriser())
    assert store.snapshot() == before
