from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from equitydash.analysis.projections import project_annual, project_monthly
from equitydash.domain.projection import AnnualPoint, MonthlyPoint
from equitydash.domain.property import PropertyAssumptions

DEFAULT_SPREAD = 0.02

P = TypeVar("P")


@dataclass
class ScenarioSet(Generic[P]):
    """Three runs of the same engine, offset by 0, +spread and -spread."""
    spread: float
    base: List[P]
    optimistic: List[P]
    pessimistic: List[P]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spread": self.spread,
            "base": [p.to_dict() for p in self.base],
            "optimistic": [p.to_dict() for p in self.optimistic],
            "pessimistic": [p.to_dict() for p in self.pessimistic],
        }


def build_annual_scenarios(
    property: PropertyAssumptions,
    spread: float = DEFAULT_SPREAD,
    start_home_value: Optional[float] = None,
    start_loan_balance: Optional[float] = None,
) -> ScenarioSet[AnnualPoint]:
    def run(offset: float) -> List[AnnualPoint]:
        return project_annual(
            property,
            rate_offset=offset,
            start_home_value=start_home_value,
            start_loan_balance=start_loan_balance,
        )

    return ScenarioSet(spread=spread, base=run(0.0), optimistic=run(spread), pessimistic=run(-spread))


def build_monthly_scenarios(
    property: PropertyAssumptions,
    spread: float = DEFAULT_SPREAD,
    start_loan_balance: Optional[float] = None,
) -> ScenarioSet[MonthlyPoint]:
    def run(offset: float) -> List[MonthlyPoint]:
        return project_monthly(property, rate_offset=offset, start_loan_balance=start_loan_balance)

    return ScenarioSet(spread=spread, base=run(0.0), optimistic=run(spread), pessimistic=run(-spread))


def merge_cash_flow_scenarios(scenarios: ScenarioSet[MonthlyPoint]) -> List[Dict[str, Any]]:
    """
    One row per base month with the optimistic / pessimistic cumulative totals
    alongside, for a single combined chart. A missing scenario month falls
    back to the base cumulative.
    """
    rows: List[Dict[str, Any]] = []
    for i, point in enumerate(scenarios.base):
        row = point.to_dict()
        row["cumulative_optimistic"] = (
            scenarios.optimistic[i].cumulative if i < len(scenarios.optimistic) else point.cumulative
        )
        row["cumulative_pessimistic"] = (
            scenarios.pessimistic[i].cumulative if i < len(scenarios.pessimistic) else point.cumulative
        )
        rows.append(row)
    return rows
