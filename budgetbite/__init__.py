"""Mini README: Core package initializer for BudgetBite.

BudgetBite is a personal expense ledger: expenses recorded against an
optional session budget, derived analytics for dashboards, and exports as a
CSV report, a PNG snapshot or a one-page PDF statement. The package root
only exposes the logging factory so importing it stays cheap; the ledger,
analytics and export subpackages are imported explicitly by callers.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
