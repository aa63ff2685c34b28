from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass
class AnnualPoint:
    year: int             # 0 == "now"
    home_value: float
    loan_balance: float   # end-of-year balance
    equity: float         # home_value - loan_balance
    cash_flow: float      # pre-tax operating cash flow for the year
    tax_benefit: float    # negative when the year owes tax

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MonthlyPoint:
    month: int            # 0..119
    month_label: str      # "Now", "Yr N" or ""
    income: float         # vacancy-adjusted rent
    expenses: float
    net: float            # income - expenses
    tax_benefit: float
    adjusted_net: float   # net + tax_benefit
    cumulative: float     # running sum of adjusted_net

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DashboardSummary:
    equity: float                 # partner's share of current equity
    equity_delta_monthly: float   # estimated equity growth per month
    month_cash_flow: float        # this calendar month's transactions
    running_balance: float        # all transactions to date

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
