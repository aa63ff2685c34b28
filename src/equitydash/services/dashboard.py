# src/equitydash/services/dashboard.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Literal

from equitydash.adapters.config import config
from equitydash.adapters.logging_utils import get_logger
from equitydash.analysis.amortization import (
    calculate_current_balance,
    resolve_current_balance,
    resolve_current_home_value,
)
from equitydash.analysis.ownership import ownership_share, scale_annual, scale_monthly
from equitydash.analysis.projections import project_annual, project_monthly
from equitydash.analysis.scenarios import (
    build_annual_scenarios,
    build_monthly_scenarios,
    merge_cash_flow_scenarios,
)
from equitydash.analysis.summary import summarize
from equitydash.domain.ports import (
    PartnerRepository,
    PropertyNotFoundError,
    PropertyRepository,
    TransactionRepository,
    ValueHistoryRepository,
)
from equitydash.domain.projection import AnnualPoint, MonthlyPoint
from equitydash.domain.property import (
    PropertyAssumptions,
    Transaction,
    TransactionCategory,
    ValueOverride,
    ValueSource,
    signed_amount,
)

logger = get_logger(__name__)


@dataclass
class DashboardContext:
    """
    Everything a request needs, passed explicitly instead of living in
    module globals. Build one per request (or per CLI run).
    """
    properties: PropertyRepository
    history: ValueHistoryRepository
    transactions: TransactionRepository
    partners: PartnerRepository


@dataclass
class CurrentPosition:
    home_value: float
    loan_balance: float
    # amortization-only figure, None without origination facts
    calculated_loan_balance: float | None
    latest_home_value: ValueOverride | None
    latest_loan_override: ValueOverride | None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "home_value": self.home_value,
            "loan_balance": self.loan_balance,
            "calculated_loan_balance": self.calculated_loan_balance,
            "latest_home_value": self.latest_home_value.model_dump() if self.latest_home_value else None,
            "latest_loan_override": (
                self.latest_loan_override.model_dump() if self.latest_loan_override else None
            ),
        }


def load_property(ctx: DashboardContext) -> PropertyAssumptions:
    prop = ctx.properties.get()
    if prop is None:
        raise PropertyNotFoundError("no property row in the store")
    return prop


def current_position(ctx: DashboardContext, as_of: date | None = None) -> CurrentPosition:
    """Resolve today's home value and loan balance from the row plus override history."""
    as_of = as_of or date.today()
    prop = load_property(ctx)

    latest_home = ctx.history.latest("home_value")
    latest_loan = ctx.history.latest("loan_balance")

    calculated = None
    if prop.has_origination:
        calculated = calculate_current_balance(
            original_loan_amount=prop.original_loan_amount,
            annual_rate=prop.interest_rate,
            term_years=prop.loan_term_years,
            loan_start_date=prop.loan_start_date,
            as_of=as_of,
        )

    position = CurrentPosition(
        home_value=resolve_current_home_value(prop, latest_home),
        loan_balance=resolve_current_balance(prop, latest_loan, as_of=as_of),
        calculated_loan_balance=calculated,
        latest_home_value=latest_home,
        latest_loan_override=latest_loan,
    )
    logger.debug(
        "resolved current position",
        extra={"context": {"home_value": position.home_value, "loan_balance": position.loan_balance}},
    )
    return position


def resolve_share(ctx: DashboardContext) -> float:
    return ownership_share(ctx.partners.list_all(), default=config.DEFAULT_OWNERSHIP_SHARE)


def annual_projection(
    ctx: DashboardContext,
    *,
    rate_offset: float = 0.0,
    share: float | None = None,
    as_of: date | None = None,
) -> List[AnnualPoint]:
    """Annual series from the resolved position; scaled when a share is given."""
    prop = load_property(ctx)
    pos = current_position(ctx, as_of=as_of)
    points = project_annual(
        prop,
        rate_offset=rate_offset,
        start_home_value=pos.home_value,
        start_loan_balance=pos.loan_balance,
    )
    return scale_annual(points, share) if share is not None else points


def monthly_projection(
    ctx: DashboardContext,
    *,
    rate_offset: float = 0.0,
    share: float | None = None,
    as_of: date | None = None,
) -> List[MonthlyPoint]:
    prop = load_property(ctx)
    pos = current_position(ctx, as_of=as_of)
    points = project_monthly(prop, rate_offset=rate_offset, start_loan_balance=pos.loan_balance)
    return scale_monthly(points, share) if share is not None else points


def build_dashboard(
    ctx: DashboardContext,
    *,
    spread: float | None = None,
    as_of: date | None = None,
) -> Dict[str, Any]:
    """
    Full dashboard payload: resolved position, partner share, headline
    summary, three annual scenarios and the merged monthly cash-flow rows.
    Projections are total-property figures; the summary is already scaled.
    """
    as_of = as_of or date.today()
    spread = config.SCENARIO_SPREAD if spread is None else spread

    prop = load_property(ctx)
    pos = current_position(ctx, as_of=as_of)
    share = resolve_share(ctx)
    transactions = ctx.transactions.list_all()

    annual = build_annual_scenarios(
        prop,
        spread=spread,
        start_home_value=pos.home_value,
        start_loan_balance=pos.loan_balance,
    )
    monthly = build_monthly_scenarios(prop, spread=spread, start_loan_balance=pos.loan_balance)
    summary = summarize(annual.base, transactions, share=share, as_of=as_of)

    logger.info(
        "dashboard built",
        extra={
            "context": {
                "as_of": as_of.isoformat(),
                "share": share,
                "spread": spread,
                "transactions": len(transactions),
                "equity": summary.equity,
            }
        },
    )

    return {
        "as_of": as_of.isoformat(),
        "property": prop.model_dump(),
        "position": pos.to_dict(),
        "ownership_share": share,
        "summary": summary.to_dict(),
        "annual": annual.to_dict(),
        "cash_flow": merge_cash_flow_scenarios(monthly),
        "transactions": [t.model_dump() for t in transactions],
    }


# -----------------------------
# Writes (admin actions)
# -----------------------------

def update_assumptions(ctx: DashboardContext, changes: Dict[str, Any]) -> PropertyAssumptions:
    updated = ctx.properties.update_assumptions(changes)
    logger.info("assumptions updated", extra={"context": {"fields": sorted(changes)}})
    return updated


def record_home_value(
    ctx: DashboardContext,
    value: float,
    *,
    recorded_at: date | None = None,
    source: ValueSource | None = "Zillow",
    note: str | None = None,
) -> ValueOverride:
    if not value or value <= 0:
        raise ValueError("home value must be positive")
    entry = ValueOverride(
        kind="home_value",
        recorded_at=recorded_at or date.today(),
        value=value,
        source=source,
        note=note or None,
    )
    ctx.history.append(entry)
    logger.info("home value recorded", extra={"context": {"value": value, "source": source}})
    return entry


def record_loan_balance(
    ctx: DashboardContext,
    value: float,
    *,
    recorded_at: date | None = None,
    note: str | None = None,
) -> ValueOverride:
    if not value or value <= 0:
        raise ValueError("loan balance must be positive")
    entry = ValueOverride(
        kind="loan_balance",
        recorded_at=recorded_at or date.today(),
        value=value,
        note=note or None,
    )
    ctx.history.append(entry)
    logger.info("loan balance override recorded", extra={"context": {"value": value}})
    return entry


def add_transaction(
    ctx: DashboardContext,
    *,
    amount: float,
    kind: Literal["income", "expense"],
    category: TransactionCategory,
    txn_date: date | None = None,
    note: str | None = None,
) -> Transaction:
    """Entries arrive unsigned plus a type; the stored amount carries the sign."""
    if not amount:
        raise ValueError("amount must be non-zero")
    txn = Transaction(
        date=txn_date or date.today(),
        category=category,
        amount=signed_amount(amount, kind),
        note=note or None,
    )
    saved = ctx.transactions.add(txn)
    logger.info(
        "transaction added",
        extra={"context": {"id": saved.id, "category": category, "amount": saved.amount}},
    )
    return saved


def edit_transaction(ctx: DashboardContext, txn_id: int, changes: Dict[str, Any]) -> Transaction:
    return ctx.transactions.update(txn_id, changes)


def delete_transaction(ctx: DashboardContext, txn_id: int) -> None:
    ctx.transactions.delete(txn_id)
    logger.info("transaction deleted", extra={"context": {"id": txn_id}})
