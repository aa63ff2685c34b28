# src/equitydash/api/schemas.py
from __future__ import annotations

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from equitydash.domain.property import TransactionCategory, ValueSource


# --------------------------------------------
# Assumptions (admin settings panel)
# --------------------------------------------

class AssumptionsUpdate(BaseModel):
    """
    Partial update of the property row. Only fields actually sent are applied.
    Rates are fractions (0.04), not percents; growth rates may be negative.
    """
    model_config = ConfigDict(extra="forbid")

    home_value: float | None = Field(None, gt=0)
    loan_balance: float | None = Field(None, ge=0)
    original_loan_amount: float | None = Field(None, ge=0)
    loan_start_date: dt.date | None = None
    interest_rate: float | None = Field(None, ge=0)
    loan_term_years: int | None = Field(None, gt=0)

    monthly_rent: float | None = Field(None, ge=0)
    monthly_maintenance: float | None = Field(None, ge=0)
    monthly_management: float | None = Field(None, ge=0)
    monthly_escrow: float | None = Field(None, ge=0)

    property_tax_annual: float | None = Field(None, ge=0)
    insurance_annual: float | None = Field(None, ge=0)
    pmi_annual: float | None = Field(None, ge=0)
    pmi_years: int | None = Field(None, ge=0)
    depreciation_annual: float | None = Field(None, ge=0)

    home_growth_rate: float | None = None
    rent_growth_rate: float | None = None
    inflation_rate: float | None = None
    vacancy_rate: float | None = Field(None, ge=0, le=1)
    effective_tax_rate: float | None = Field(None, ge=0, le=1)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# --------------------------------------------
# Transactions
# --------------------------------------------

class TransactionCreate(BaseModel):
    date: dt.date | None = None
    amount: float = Field(..., gt=0, description="Unsigned; the sign comes from `kind`")
    kind: Literal["income", "expense"] = "expense"
    category: TransactionCategory = "mortgage"
    note: str | None = None


class TransactionUpdate(BaseModel):
    """Edits take the signed amount as stored."""
    model_config = ConfigDict(extra="forbid")

    date: dt.date | None = None
    amount: float | None = None
    category: TransactionCategory | None = None
    note: str | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# --------------------------------------------
# Override history
# --------------------------------------------

class HomeValueCreate(BaseModel):
    value: float = Field(..., gt=0)
    recorded_at: dt.date | None = None
    source: ValueSource = "Zillow"
    note: str | None = None


class LoanBalanceCreate(BaseModel):
    value: float = Field(..., gt=0)
    recorded_at: dt.date | None = None
    note: str | None = None


# --------------------------------------------
# Responses
# --------------------------------------------

class DashboardResponse(BaseModel):
    """Permissive: the service payload grows as the dashboard does."""
    model_config = ConfigDict(extra="allow")

    as_of: str
    ownership_share: float
    summary: dict[str, float]
