from dataclasses import replace
from typing import Iterable, List, TypeVar

from equitydash.domain.finance import round_currency
from equitydash.domain.projection import AnnualPoint, MonthlyPoint
from equitydash.domain.property import Partner

_ANNUAL_MONEY_FIELDS = ("home_value", "loan_balance", "equity", "cash_flow", "tax_benefit")
_MONTHLY_MONEY_FIELDS = ("income", "expenses", "net", "tax_benefit", "adjusted_net", "cumulative")

T = TypeVar("T", AnnualPoint, MonthlyPoint)


def apply_share(value: float, share: float) -> float:
    """Total-property figure -> one partner's figure."""
    return round_currency(value * share)


def ownership_share(partners: Iterable[Partner], default: float = 1.0) -> float:
    # single-partner view: the first partner row is the viewer
    for partner in partners:
        return partner.ownership_share
    return default


def _scale(point: T, fields: tuple, share: float) -> T:
    return replace(point, **{f: apply_share(getattr(point, f), share) for f in fields})


def scale_annual(points: Iterable[AnnualPoint], share: float) -> List[AnnualPoint]:
    return [_scale(p, _ANNUAL_MONEY_FIELDS, share) for p in points]


def scale_monthly(points: Iterable[MonthlyPoint], share: float) -> List[MonthlyPoint]:
    return [_scale(p, _MONTHLY_MONEY_FIELDS, share) for p in points]
