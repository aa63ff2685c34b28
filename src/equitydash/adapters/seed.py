# src/equitydash/adapters/seed.py
"""
Starting figures for the partnership property, as first entered from the
spreadsheet. Used to seed a fresh store and for the CLI's --demo mode.
"""
from __future__ import annotations

from datetime import date

from equitydash.domain.property import Partner, PropertyAssumptions, Transaction


DEMO_PROPERTY = PropertyAssumptions(
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

DEMO_PARTNERS = [Partner(name="Partner", ownership_share=0.3333)]

# (date, category, amount, note)
DEMO_TRANSACTIONS = [
    ("2025-06-01", "mortgage", -2454.72, "Mortgage"),
    ("2025-06-01", "rent", 1836.5, "Rent Income"),
    ("2025-06-01", "rent", 13.5, "Rent Income"),
    ("2025-06-04", "repair", -400.0, "Deep Cleaning"),
    ("2025-06-09", "other", -925.0, "Lease Fee"),
    ("2025-06-09", "management_fee", -95.0, "Manag Fee"),
    ("2025-06-20", "repair", -150.0, "Toilet Repair"),
    ("2025-07-01", "mortgage", -2454.72, "Mortgage"),
    ("2025-07-01", "rent", 1850.0, "Rent Income"),
    ("2025-07-08", "management_fee", -95.0, "Manag Fee"),
    ("2025-08-01", "mortgage", -2454.72, "Mortgage"),
    ("2025-08-01", "repair", -320.0, "Plumbing Leak"),
    ("2025-08-01", "rent", 873.5, "Rent Income"),
    ("2025-08-01", "rent", 763.0, "Rent Income"),
    ("2025-08-04", "repair", -595.0, "Irrigation Leak"),
    ("2025-08-06", "repair", -1550.0, "Water Leak Repair"),
    ("2025-08-07", "management_fee", -95.0, "Manag Fee"),
    ("2025-08-28", "repair", -475.0, "Dry wall repair"),
    ("2025-09-01", "mortgage", -2377.11, "Mortgage"),
    ("2025-09-01", "management_fee", -95.0, "Manag Fee"),
    ("2025-09-01", "rent", 1850.0, "Rent Income"),
    ("2025-09-03", "repair", -300.0, "Garage Door Fix"),
]


def demo_transactions() -> list[Transaction]:
    return [
        Transaction(date=date.fromisoformat(d), category=cat, amount=amt, note=note)
        for d, cat, amt, note in DEMO_TRANSACTIONS
    ]
