from datetime import date
from typing import Iterable, Sequence

from equitydash.analysis.ownership import apply_share
from equitydash.domain.finance import round_currency
from equitydash.domain.projection import AnnualPoint, DashboardSummary
from equitydash.domain.property import Transaction


def current_month_total(transactions: Iterable[Transaction], as_of: date | None = None) -> float:
    """Sum of signed amounts dated in the calendar month of `as_of`."""
    as_of = as_of or date.today()
    return sum(
        (t.amount for t in transactions if t.date.year == as_of.year and t.date.month == as_of.month),
        0.0,
    )


def running_total(transactions: Iterable[Transaction]) -> float:
    return sum((t.amount for t in transactions), 0.0)


def summarize(
    annual: Sequence[AnnualPoint],
    transactions: Sequence[Transaction],
    share: float = 1.0,
    as_of: date | None = None,
) -> DashboardSummary:
    """
    The three headline figures, all scaled to the partner's share:
    - equity now (year 0)
    - equity growth per month, estimated as (year 2 - year 1) / 12
    - this month's net transactions and the all-time running balance
    """
    equity = apply_share(annual[0].equity, share) if annual else 0.0

    equity_delta = 0.0
    if len(annual) >= 3:
        equity_delta = round_currency((annual[2].equity - annual[1].equity) * share / 12)

    return DashboardSummary(
        equity=equity,
        equity_delta_monthly=equity_delta,
        month_cash_flow=apply_share(current_month_total(transactions, as_of), share),
        running_balance=apply_share(running_total(transactions), share),
    )
