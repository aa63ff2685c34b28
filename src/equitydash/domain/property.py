import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

# Categories offered by the transaction entry form
TransactionCategory = Literal[
    "mortgage",
    "rent",
    "repair",
    "management_fee",
    "insurance",
    "tax",
    "other",
]

OverrideKind = Literal["home_value", "loan_balance"]

# Where a home-value observation came from
ValueSource = Literal["Zillow", "Redfin", "Appraisal", "Other"]


def _coerce_date(v: Any) -> dt.date | None:
    if v is None or v == "":
        return None
    if isinstance(v, dt.date):
        return v
    try:
        return dt.date.fromisoformat(str(v).strip()[:10])
    except ValueError:
        return None


class PropertyAssumptions(BaseModel):
    """
    The single `property` row: current facts plus the adjustable projection
    assumptions. Rates are fractions (0.04 == 4%) and are not range-checked;
    bad numbers flow straight into the projections.
    """
    home_value: float = Field(..., description="Stored home value (latest history entry wins when present)")
    loan_balance: float = Field(..., description="Static loan balance, used when origination facts are missing")
    original_loan_amount: float | None = Field(default=None, description="Principal at origination")
    loan_start_date: dt.date | None = Field(default=None, description="First day of the loan, for auto-amortization")

    interest_rate: float = Field(..., description="e.g. 0.0599 for 5.99% APR")
    loan_term_years: int = Field(default=30)

    monthly_rent: float = 1850.0
    monthly_maintenance: float = 300.0
    monthly_management: float = 95.0
    monthly_escrow: float = 0.0

    property_tax_annual: float = 0.0
    insurance_annual: float = 0.0
    pmi_annual: float = 488.88
    pmi_years: int = 4
    depreciation_annual: float = 10229.09

    home_growth_rate: float = 0.04
    rent_growth_rate: float = 0.04
    inflation_rate: float = 0.03
    vacancy_rate: float = 0.05
    effective_tax_rate: float = 0.24

    @field_validator("loan_start_date", mode="before")
    @classmethod
    def _lenient_start_date(cls, v: Any) -> dt.date | None:
        # an unreadable start date means "no origination facts", not an error
        return _coerce_date(v)

    @property
    def has_origination(self) -> bool:
        return bool(self.original_loan_amount) and self.loan_start_date is not None


class ValueOverride(BaseModel):
    """
    One manually entered observation (bank statement, Zillow estimate...).
    History is append-only; the newest entry per kind is the current one.
    """
    kind: OverrideKind
    recorded_at: dt.date
    value: float
    source: ValueSource | None = None
    note: str | None = None


class Transaction(BaseModel):
    id: int | None = None
    date: dt.date
    category: TransactionCategory
    amount: float = Field(..., description="Positive = income, negative = expense")
    note: str | None = None


class Partner(BaseModel):
    name: str
    ownership_share: float = Field(..., description="0.3333 means a one-third share")


def signed_amount(amount: float, kind: Literal["income", "expense"]) -> float:
    """Entry forms take an unsigned figure plus a type; the store keeps the sign."""
    if kind == "expense":
        return -abs(amount)
    return abs(amount)
