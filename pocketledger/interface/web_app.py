"""Mini README: FastAPI-powered dashboard for Pocket Ledger.

Structure:
    * create_application - application factory wiring routes and templates.
    * Intent routes - HTML form posts that mutate the session and redirect.
    * /api/state - JSON rendering of the current view state.

The dashboard is server-rendered: every intent posts a form, the session
handles it, and the browser is redirected back to ``/`` to redraw. Invalid
transaction forms are not errors; the form simply stays open.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import PocketLedgerSettings, get_settings
from ..logging_utils import get_logger
from ..session import TrackerSession
from ..storage import create_store

LOGGER = get_logger(__name__)


def _back_to_dashboard() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


def create_application(
    session: Optional[TrackerSession] = None,
    settings: Optional[PocketLedgerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application around a tracker session."""

    if session is None:
        settings = settings or get_settings()
        session = TrackerSession(
            create_store(settings),
            seed_demo_data=settings.seed_demo_data,
            default_currency=settings.default_currency,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        session.close()

    app = FastAPI(title="Pocket Ledger", version="0.3.0", lifespan=lifespan)
    app.state.session = session
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render stat cards, the add/edit form and the filtered history."""

        state = session.view_state()
        LOGGER.debug(
            "Rendering dashboard: %s of %s transactions shown",
            len(state["filtered_transactions"]),
            len(state["transactions"]),
        )
        return templates.TemplateResponse(request, "dashboard.html", state)

    @app.get("/api/state")
    async def api_state() -> JSONResponse:
        return JSONResponse(session.view_state())

    @app.post("/form/show")
    async def show_form() -> RedirectResponse:
        session.show_form()
        return _back_to_dashboard()

    @app.post("/form/cancel")
    async def cancel_form() -> RedirectResponse:
        session.cancel_form()
        return _back_to_dashboard()

    @app.post("/form/type")
    async def change_form_type(transaction_type: str = Form(..., alias="type")) -> RedirectResponse:
        """Switch the pending form between income and expense."""

        try:
            session.update_form(transaction_type=transaction_type)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _back_to_dashboard()

    @app.post("/form/submit")
    async def submit_form(
        amount: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        category: Optional[str] = Form(None),
        occurred_on: Optional[str] = Form(None, alias="date"),
        transaction_type: Optional[str] = Form(None, alias="type"),
    ) -> RedirectResponse:
        """Create or update a transaction from the posted form fields."""

        try:
            session.fill_form(
                transaction_type=transaction_type,
                amount=amount,
                description=description,
                category=category,
                date=occurred_on,
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        transaction = session.submit_form()
        if transaction is None:
            LOGGER.debug("Form submission ignored; form left open")
        return _back_to_dashboard()

    @app.post("/transactions/{transaction_id}/edit")
    async def edit_transaction(transaction_id: int) -> RedirectResponse:
        session.begin_edit(transaction_id)
        return _back_to_dashboard()

    @app.post("/transactions/{transaction_id}/delete")
    async def delete_transaction(transaction_id: int) -> RedirectResponse:
        session.delete(transaction_id)
        return _back_to_dashboard()

    @app.post("/filter")
    async def set_filter(
        category: Optional[str] = Form(None),
        transaction_type: Optional[str] = Form(None, alias="type"),
        month: Optional[str] = Form(None),
    ) -> RedirectResponse:
        """Merge the posted fields into the active filter."""

        try:
            session.set_filter(category=category, transaction_type=transaction_type, month=month)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _back_to_dashboard()

    @app.post("/filter/clear-month")
    async def clear_month() -> RedirectResponse:
        session.clear_month_filter()
        return _back_to_dashboard()

    @app.post("/currency")
    async def set_currency(code: str = Form(...)) -> RedirectResponse:
        try:
            session.set_currency(code)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _back_to_dashboard()

    @app.post("/theme")
    async def set_theme(theme: str = Form(...)) -> RedirectResponse:
        try:
            session.set_theme(theme)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return _back_to_dashboard()

    return app
