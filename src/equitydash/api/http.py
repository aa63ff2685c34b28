# src/equitydash/api/http.py
from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query

from equitydash.adapters.config import config
from equitydash.adapters.sql_repo import (
    SqlPartnerRepository,
    SqlPropertyRepository,
    SqlTransactionRepository,
    SqlValueHistoryRepository,
)
from equitydash.domain.ports import PropertyNotFoundError
from equitydash.domain.property import OverrideKind
from equitydash.services import dashboard as svc
from equitydash.services.dashboard import DashboardContext
from .schemas import (
    AssumptionsUpdate,
    DashboardResponse,
    HomeValueCreate,
    LoanBalanceCreate,
    TransactionCreate,
    TransactionUpdate,
)

app = FastAPI(title="equitydash")


@lru_cache(maxsize=1)
def _default_context() -> DashboardContext:
    return DashboardContext(
        properties=SqlPropertyRepository(config.DB_URI),
        history=SqlValueHistoryRepository(config.DB_URI),
        transactions=SqlTransactionRepository(config.DB_URI),
        partners=SqlPartnerRepository(config.DB_URI),
    )


def get_context() -> DashboardContext:
    """Request-scoped store access; tests override this dependency."""
    return _default_context()


def _share_or_none(ctx: DashboardContext, my_share: bool) -> float | None:
    return svc.resolve_share(ctx) if my_share else None


# -----------------------------
# Read side
# -----------------------------

@app.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    spread: float | None = Query(None, ge=0, le=1, description="Scenario offset; defaults to config"),
    ctx: DashboardContext = Depends(get_context),
) -> dict[str, Any]:
    try:
        return svc.build_dashboard(ctx, spread=spread)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.get("/loan/balance")
def get_loan_balance(ctx: DashboardContext = Depends(get_context)) -> dict[str, Any]:
    try:
        return svc.current_position(ctx).to_dict()
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@app.get("/projections/annual")
def get_annual_projection(
    rate_offset: float = Query(0.0, description="Added to home growth rate"),
    my_share: bool = Query(False, description="Scale figures to the partner's share"),
    ctx: DashboardContext = Depends(get_context),
) -> list[dict[str, Any]]:
    try:
        share = _share_or_none(ctx, my_share)
        points = svc.annual_projection(ctx, rate_offset=rate_offset, share=share)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return [p.to_dict() for p in points]


@app.get("/projections/monthly")
def get_monthly_projection(
    rate_offset: float = Query(0.0, description="Added to rent growth and inflation"),
    my_share: bool = Query(False, description="Scale figures to the partner's share"),
    ctx: DashboardContext = Depends(get_context),
) -> list[dict[str, Any]]:
    try:
        share = _share_or_none(ctx, my_share)
        points = svc.monthly_projection(ctx, rate_offset=rate_offset, share=share)
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return [p.to_dict() for p in points]


@app.get("/transactions")
def list_transactions(ctx: DashboardContext = Depends(get_context)) -> list[dict[str, Any]]:
    return [t.model_dump() for t in ctx.transactions.list_all()]


@app.get("/history/{kind}")
def list_history(kind: OverrideKind, ctx: DashboardContext = Depends(get_context)) -> list[dict[str, Any]]:
    return [e.model_dump() for e in ctx.history.history(kind)]


# -----------------------------
# Write side
# -----------------------------

@app.patch("/property/assumptions")
def patch_assumptions(body: AssumptionsUpdate, ctx: DashboardContext = Depends(get_context)) -> dict[str, Any]:
    try:
        return svc.update_assumptions(ctx, body.changes()).model_dump()
    except PropertyNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.post("/transactions", status_code=201)
def create_transaction(body: TransactionCreate, ctx: DashboardContext = Depends(get_context)) -> dict[str, Any]:
    try:
        txn = svc.add_transaction(
            ctx,
            amount=body.amount,
            kind=body.kind,
            category=body.category,
            txn_date=body.date,
            note=body.note,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return txn.model_dump()


@app.put("/transactions/{txn_id}")
def update_transaction(
    txn_id: int,
    body: TransactionUpdate,
    ctx: DashboardContext = Depends(get_context),
) -> dict[str, Any]:
    try:
        return svc.edit_transaction(ctx, txn_id, body.changes()).model_dump()
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"transaction {txn_id} not found") from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.delete("/transactions/{txn_id}", status_code=204)
def remove_transaction(txn_id: int, ctx: DashboardContext = Depends(get_context)) -> None:
    try:
        svc.delete_transaction(ctx, txn_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"transaction {txn_id} not found") from e


@app.post("/history/home-value", status_code=201)
def create_home_value(body: HomeValueCreate, ctx: DashboardContext = Depends(get_context)) -> dict[str, Any]:
    entry = svc.record_home_value(
        ctx,
        body.value,
        recorded_at=body.recorded_at,
        source=body.source,
        note=body.note,
    )
    return entry.model_dump()


@app.post("/history/loan-balance", status_code=201)
def create_loan_balance(body: LoanBalanceCreate, ctx: DashboardContext = Depends(get_context)) -> dict[str, Any]:
    entry = svc.record_loan_balance(ctx, body.value, recorded_at=body.recorded_at, note=body.note)
    return entry.model_dump()
