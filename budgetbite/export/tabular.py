"""Mini README: CSV report exporter.

Rows follow the ledger order (newest first). Item names are written as-is;
a name containing a comma therefore produces a row with an extra column.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from .base import ExportKind, LedgerExporter
from .registry import REGISTRY
from ..analytics import AnalyticsRecord, budget_share
from ..analytics.formatting import format_amount, to_fixed
from ..ledger import Expense, LedgerSnapshot


def format_report_date(moment: datetime) -> str:
    """Month/day/year without zero padding, e.g. ``5/3/2024``."""

    return f"{moment.month}/{moment.day}/{moment.year}"


def format_share(amount: float, budget: float) -> str:
    """Budget share with two decimals, or ``0`` when no budget is set."""

    if budget > 0:
        return to_fixed(budget_share(amount, budget), 2)
    return "0"


class TabularExporter(LedgerExporter):
    """Write the ledger as a comma separated report."""

    kind = ExportKind.TABLE
    filename = "budget-report.csv"
    media_type = "text/csv; charset=utf-8"

    def header(self, snapshot: LedgerSnapshot) -> str:
        return ",".join(["Date", "Item", f"Amount ({snapshot.currency.code})", "% of Budget"])

    def row(self, expense: Expense, budget: float) -> str:
        return (
            f"{format_report_date(expense.created_at)},{expense.name},"
            f"{format_amount(expense.amount)},{format_share(expense.amount, budget)}%"
        )

    def lines(self, snapshot: LedgerSnapshot) -> List[str]:
        return [self.header(snapshot)] + [
            self.row(expense, snapshot.budget) for expense in snapshot.expenses
        ]

    def render(self, snapshot: LedgerSnapshot, analytics: AnalyticsRecord) -> bytes:
        return "\n".join(self.lines(snapshot)).encode("utf-8")


REGISTRY.register(TabularExporter)
