"""Mini README: FastAPI intent surface for the BudgetBite ledger.

Structure:
    * create_application - application factory wiring ledger intents and exports.
    * ledger_payload - JSON view of a snapshot with its analytics.

A presentation layer (browser dashboard, mobile shell) calls these routes
to forward user intents and to fetch the values it renders. Mutations run
on the event loop so the ledger is only ever touched from one thread;
exports work on an immutable snapshot and are rendered in the thread pool.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from ..analytics import compute_analytics
from ..export import REGISTRY, SnapshotRasteriser
from ..ledger import Currency, LedgerSnapshot, LedgerStore
from ..logging_utils import get_logger
from ..storage import LedgerPersistenceError

LOGGER = get_logger(__name__)


def ledger_payload(snapshot: LedgerSnapshot) -> Dict[str, object]:
    """Combine the snapshot and its analytics for the dashboard."""

    payload = snapshot.as_dict()
    payload["analytics"] = compute_analytics(snapshot).as_dict()
    return payload


def create_application(
    store: Optional[LedgerStore] = None,
    rasteriser: Optional[SnapshotRasteriser] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    app = FastAPI(title="BudgetBite Ledger", version="1.0.0")
    ledger = store or LedgerStore.from_settings()

    def _persistence_failure(error: LedgerPersistenceError) -> HTTPException:
        return HTTPException(status_code=500, detail=str(error))

    @app.get("/ledger")
    async def read_ledger() -> JSONResponse:
        """Return the current snapshot with derived analytics."""

        return JSONResponse(ledger_payload(ledger.snapshot()))

    @app.get("/currencies")
    async def list_currencies() -> JSONResponse:
        """Return the selectable currencies and their symbols."""

        return JSONResponse(
            {"currencies": [{"code": currency.code, "symbol": currency.symbol} for currency in Currency]}
        )

    @app.post("/expenses")
    async def add_expense(name: str = Form(""), amount: str = Form("")) -> JSONResponse:
        """Record an expense; unusable input leaves the ledger unchanged."""

        try:
            expense = ledger.add_expense(name, amount)
        except LedgerPersistenceError as error:
            raise _persistence_failure(error) from error
        payload = ledger_payload(ledger.snapshot())
        payload["added"] = expense.as_dict() if expense else False
        return JSONResponse(payload)

    @app.post("/expenses/clear")
    async def clear_expenses() -> JSONResponse:
        """Remove every expense."""

        try:
            ledger.clear_all()
        except LedgerPersistenceError as error:
            raise _persistence_failure(error) from error
        return JSONResponse(ledger_payload(ledger.snapshot()))

    @app.delete("/expenses/{expense_id}")
    async def remove_expense(expense_id: int) -> JSONResponse:
        """Remove an expense by id; unknown ids are not an error."""

        try:
            removed = ledger.remove_expense(expense_id)
        except LedgerPersistenceError as error:
            raise _persistence_failure(error) from error
        payload = ledger_payload(ledger.snapshot())
        payload["removed"] = removed
        return JSONResponse(payload)

    @app.post("/budget")
    async def set_budget(value: str = Form("")) -> JSONResponse:
        """Replace the session budget."""

        try:
            ledger.set_budget(value)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(ledger_payload(ledger.snapshot()))

    @app.post("/currency")
    async def set_currency(code: str = Form(...)) -> JSONResponse:
        """Select the display currency."""

        try:
            ledger.set_currency(code)
        except LedgerPersistenceError as error:
            raise _persistence_failure(error) from error
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(ledger_payload(ledger.snapshot()))

    @app.get("/export/{kind}")
    async def export(kind: str) -> Response:
        """Render the requested artifact from the current snapshot."""

        try:
            exporter = REGISTRY.create(kind, rasteriser=rasteriser)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        snapshot = ledger.snapshot()
        artifact = await run_in_threadpool(exporter.export, snapshot, compute_analytics(snapshot))
        LOGGER.info("Serving %s (%s bytes)", artifact.filename, len(artifact.content))
        return Response(
            content=artifact.content,
            media_type=artifact.media_type,
            headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
        )

    return app
