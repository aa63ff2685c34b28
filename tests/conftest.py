# tests/conftest.py
from datetime import date

import pytest
from fastapi.testclient import TestClient

from equitydash.adapters.memory_repo import (
    InMemoryPartnerRepository,
    InMemoryPropertyRepository,
    InMemoryTransactionRepository,
    InMemoryValueHistoryRepository,
)
from equitydash.api.http import app, get_context
from equitydash.domain.property import Partner, PropertyAssumptions, Transaction
from equitydash.services.dashboard import DashboardContext

AS_OF = date(2026, 10, 19)


def make_property(**overrides) -> PropertyAssumptions:
    fields = dict(
        home_value=330_000.0,
        loan_balance=274_803.87,
        original_loan_amount=274_803.87,
        loan_start_date=date(2024, 12, 19),
        interest_rate=0.0599,
        loan_term_years=30,
        monthly_rent=1850.0,
        monthly_maintenance=300.0,
        monthly_management=95.0,
        monthly_escrow=0.0,
        property_tax_annual=3809.04,
        insurance_annual=2117.23,
        pmi_annual=488.88,
        pmi_years=4,
        depreciation_annual=10229.09,
        home_growth_rate=0.04,
        rent_growth_rate=0.04,
        inflation_rate=0.03,
        vacancy_rate=0.05,
        effective_tax_rate=0.24,
    )
    fields.update(overrides)
    return PropertyAssumptions(**fields)


@pytest.fixture
def prop() -> PropertyAssumptions:
    return make_property()


@pytest.fixture
def ctx(prop) -> DashboardContext:
    txns = InMemoryTransactionRepository()
    txns.add(Transaction(date=date(2026, 9, 1), category="mortgage", amount=-2377.11, note="Mortgage"))
    txns.add(Transaction(date=date(2026, 9, 1), category="rent", amount=1850.0, note="Rent Income"))
    txns.add(Transaction(date=date(2026, 10, 1), category="mortgage", amount=-2377.11, note="Mortgage"))
    txns.add(Transaction(date=date(2026, 10, 1), category="rent", amount=1850.0, note="Rent Income"))
    txns.add(Transaction(date=date(2026, 10, 3), category="repair", amount=-300.0, note="Garage Door Fix"))
    return DashboardContext(
        properties=InMemoryPropertyRepository(prop),
        history=InMemoryValueHistoryRepository(),
        transactions=txns,
        partners=InMemoryPartnerRepository([Partner(name="Alex", ownership_share=0.3333)]),
    )


@pytest.fixture
def client(ctx):
    app.dependency_overrides[get_context] = lambda: ctx
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
