"""Mini README: Interactive interfaces for BudgetBite.

Exports the FastAPI application factory that forwards dashboard intents to
the ledger. The command line entry point lives in ``main_budget_console``.
"""

from .web_app import create_application

__all__ = ["create_application"]
