"""Mini README: FastAPI JSON interface over the Budget Buddy store.

Structure:
    * create_application - application factory wiring routes to a store.
    * Request models - payloads for category, transaction and budget writes.

Each route is a thin translation between JSON and a ``BudgetStore`` call.
Validation failures surface as HTTP 422 with the machine-readable reason,
stale ids as HTTP 404, so clients can refresh instead of crashing.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..configuration import get_settings
from ..ledger import BudgetStore, NotFoundError, ValidationError, palette_order
from ..ledger.categories import DEFAULT_ICON
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class CategoryCreate(BaseModel):
    name: str
    icon: str = DEFAULT_ICON
    color: Optional[str] = Field(
        None, description="Explicit hex color; omit to take the next palette color."
    )


class CategoryPatch(BaseModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class TransactionCreate(BaseModel):
    title: str
    amount: float = Field(..., description="Negative for expenses, positive for income.")
    category_id: str
    occurred_on: date
    note: Optional[str] = None


class TransactionPatch(BaseModel):
    title: Optional[str] = None
    amount: Optional[float] = None
    category_id: Optional[str] = None
    occurred_on: Optional[date] = None
    note: Optional[str] = None


class BudgetUpdate(BaseModel):
    amount: float


def _as_http_error(error: Exception) -> HTTPException:
    """Translate store errors into HTTP errors callers can act on."""

    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=422,
            detail={"reason": error.reason.value, "message": error.message},
        )
    return HTTPException(status_code=404, detail=str(error))


def create_application(store: Optional[BudgetStore] = None) -> FastAPI:
    """Create the FastAPI application bound to ``store`` (or a fresh one)."""

    budget_store = store if store is not None else BudgetStore()
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if not budget_store.closed:
            budget_store.close()

    app = FastAPI(title="Budget Buddy", version="0.1.0", lifespan=lifespan)
    app.state.store = budget_store
    LOGGER.debug("Budget Buddy interface created for environment '%s'", settings.environment)

    @app.get("/summary")
    async def summary() -> JSONResponse:
        """Return header figures plus the spending breakdown for the chart."""

        return JSONResponse(
            {
                **budget_store.summary().as_dict(),
                "breakdown": [entry.as_dict() for entry in budget_store.category_breakdown()],
            }
        )

    @app.put("/budget")
    async def set_budget(payload: BudgetUpdate) -> JSONResponse:
        try:
            amount = budget_store.set_budget(payload.amount)
        except ValidationError as error:
            raise _as_http_error(error) from error
        return JSONResponse({"monthly_budget": amount})

    @app.get("/palette")
    async def palette() -> JSONResponse:
        """Return the palette in assignment order and the next auto color."""

        return JSONResponse(
            {"colors": palette_order(), "next_color": budget_store.peek_next_color()}
        )

    @app.get("/categories")
    async def list_categories() -> JSONResponse:
        return JSONResponse(
            {"categories": [category.as_dict() for category in budget_store.list_categories()]}
        )

    @app.post("/categories", status_code=201)
    async def add_category(payload: CategoryCreate) -> JSONResponse:
        try:
            category = budget_store.add_category(payload.name, icon=payload.icon, color=payload.color)
        except ValidationError as error:
            raise _as_http_error(error) from error
        return JSONResponse(category.as_dict(), status_code=201)

    @app.get("/categories/{category_id}")
    async def get_category(category_id: str) -> JSONResponse:
        category = budget_store.get_category(category_id)
        if category is None:
            raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
        return JSONResponse(category.as_dict())

    @app.patch("/categories/{category_id}")
    async def update_category(category_id: str, payload: CategoryPatch) -> JSONResponse:
        try:
            category = budget_store.update_category(
                category_id, payload.model_dump(exclude_unset=True)
            )
        except (ValidationError, NotFoundError) as error:
            raise _as_http_error(error) from error
        return JSONResponse(category.as_dict())

    @app.get("/categories/{category_id}/transaction-count")
    async def category_transaction_count(category_id: str) -> JSONResponse:
        """Report how many transactions a delete of this category would remove."""

        try:
            count = budget_store.count_transactions_for_category(category_id)
        except NotFoundError as error:
            raise _as_http_error(error) from error
        return JSONResponse({"category_id": category_id, "transaction_count": count})

    @app.delete("/categories/{category_id}")
    async def delete_category(category_id: str) -> JSONResponse:
        try:
            removed = budget_store.delete_category(category_id)
        except NotFoundError as error:
            raise _as_http_error(error) from error
        return JSONResponse({"category_id": category_id, "transactions_removed": removed})

    @app.get("/transactions")
    async def list_transactions(occurred_on: Optional[date] = None) -> JSONResponse:
        """List all transactions, or only those on ``occurred_on``."""

        if occurred_on is None:
            transactions = budget_store.list_transactions()
        else:
            transactions = budget_store.list_by_date(occurred_on)
        return JSONResponse(
            {"transactions": [transaction.as_dict() for transaction in transactions]}
        )

    @app.get("/transactions/grouped")
    async def grouped_transactions() -> JSONResponse:
        return JSONResponse(
            {"groups": [group.as_dict() for group in budget_store.group_by_date()]}
        )

    @app.post("/transactions", status_code=201)
    async def add_transaction(payload: TransactionCreate) -> JSONResponse:
        try:
            transaction = budget_store.add_transaction(
                payload.title,
                payload.amount,
                payload.category_id,
                payload.occurred_on,
                note=payload.note,
            )
        except (ValidationError, NotFoundError) as error:
            raise _as_http_error(error) from error
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.patch("/transactions/{transaction_id}")
    async def update_transaction(transaction_id: str, payload: TransactionPatch) -> JSONResponse:
        try:
            transaction = budget_store.update_transaction(
                transaction_id, payload.model_dump(exclude_unset=True)
            )
        except (ValidationError, NotFoundError) as error:
            raise _as_http_error(error) from error
        return JSONResponse(transaction.as_dict())

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        try:
            budget_store.delete_transaction(transaction_id)
        except NotFoundError as error:
            raise _as_http_error(error) from error
        LOGGER.debug("Transaction %s removed via API", transaction_id)
        return JSONResponse({"transaction_id": transaction_id})

    return app
