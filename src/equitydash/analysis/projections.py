from typing import List, Optional

from equitydash.domain.finance import monthly_mortgage_pi, round_currency
from equitydash.domain.projection import AnnualPoint, MonthlyPoint
from equitydash.domain.property import PropertyAssumptions

PROJECTION_YEARS = 10
PROJECTION_MONTHS = PROJECTION_YEARS * 12


def _grow(value: float, rate: float, periods: int) -> float:
    """value compounded `periods` times at `rate`, always from the given base."""
    return value * (1 + rate) ** periods


def _amortize_month(balance: float, payment: float, monthly_rate: float) -> tuple:
    """One payment: returns (interest, new_balance). A paid-off loan stays at 0."""
    interest = balance * monthly_rate
    balance -= payment - interest
    if balance < 0:
        balance = 0.0
    return interest, balance


def _tax_benefit(taxable_income: float, effective_tax_rate: float) -> float:
    """
    Paper loss shelters other income (positive benefit); a profit owes tax,
    reported as a negative benefit.
    """
    if taxable_income < 0:
        return abs(taxable_income) * effective_tax_rate
    return -(taxable_income * effective_tax_rate)


def project_annual(
    property: PropertyAssumptions,
    rate_offset: float = 0.0,
    start_home_value: Optional[float] = None,
    start_loan_balance: Optional[float] = None,
) -> List[AnnualPoint]:
    """
    Year 0 ("now") plus ten projected years of equity, cash flow and tax effect.

    rate_offset shifts home value growth only. Rent and maintenance escalate
    from year 2 on (exponent year - 1), home value from year 1 (exponent year).
    cash_flow is pre-tax; tax_benefit is reported beside it, not folded in.
    """
    home0 = property.home_value if start_home_value is None else start_home_value
    loan0 = property.loan_balance if start_loan_balance is None else start_loan_balance
    growth = property.home_growth_rate + rate_offset

    monthly_pi = monthly_mortgage_pi(loan0, property.interest_rate, property.loan_term_years)
    r = property.interest_rate / 12.0

    points: List[AnnualPoint] = [
        AnnualPoint(
            year=0,
            home_value=round_currency(home0),
            loan_balance=round_currency(loan0),
            equity=round_currency(home0 - loan0),
            cash_flow=0.0,
            tax_benefit=0.0,
        )
    ]

    balance = loan0
    for year in range(1, PROJECTION_YEARS + 1):
        # compounded from the starting value every year, never chained
        home_value = _grow(home0, growth, year)
        rent = _grow(property.monthly_rent, property.rent_growth_rate, year - 1)
        maintenance = _grow(property.monthly_maintenance, property.inflation_rate, year - 1)
        pmi_monthly = property.pmi_annual / 12 if year <= property.pmi_years else 0.0

        # --- income ---
        effective_income = rent * 12 * (1 - property.vacancy_rate)

        # --- expenses ---
        maintenance_annual = maintenance * 12
        management_annual = property.monthly_management * 12
        pmi_annual = pmi_monthly * 12
        total_expenses = (
            monthly_pi * 12
            + property.monthly_escrow * 12
            + maintenance_annual
            + management_annual
            + pmi_annual
        )
        cash_flow = effective_income - total_expenses

        # --- amortize twelve months from the running balance ---
        interest_paid = 0.0
        for _ in range(12):
            interest, balance = _amortize_month(balance, monthly_pi, r)
            interest_paid += interest

        # --- tax effect ---
        deductible = (
            interest_paid
            + property.property_tax_annual
            + property.insurance_annual
            + maintenance_annual
            + management_annual
            + pmi_annual
            + property.depreciation_annual
        )
        tax_benefit = _tax_benefit(effective_income - deductible, property.effective_tax_rate)

        points.append(
            AnnualPoint(
                year=year,
                home_value=round_currency(home_value),
                loan_balance=round_currency(balance),
                equity=round_currency(home_value - balance),
                cash_flow=round_currency(cash_flow),
                tax_benefit=round_currency(tax_benefit),
            )
        )

    return points


def _month_label(month: int) -> str:
    if month == 0:
        return "Now"
    if month % 12 == 0:
        return f"Yr {month // 12}"
    return ""


def project_monthly(
    property: PropertyAssumptions,
    rate_offset: float = 0.0,
    start_loan_balance: Optional[float] = None,
) -> List[MonthlyPoint]:
    """
    120 months of cash flow with a running cumulative total.

    Unlike project_annual, rate_offset shifts rent growth and inflation (not
    home growth), escalation starts in month 12 (exponent year), and the tax
    benefit is folded into adjusted_net / cumulative.
    """
    loan0 = property.loan_balance if start_loan_balance is None else start_loan_balance
    rent_growth = property.rent_growth_rate + rate_offset
    inflation = property.inflation_rate + rate_offset

    monthly_pi = monthly_mortgage_pi(loan0, property.interest_rate, property.loan_term_years)
    r = property.interest_rate / 12.0

    depreciation = property.depreciation_annual / 12
    property_tax = property.property_tax_annual / 12
    insurance = property.insurance_annual / 12
    pmi_months = property.pmi_years * 12

    out: List[MonthlyPoint] = []
    balance = loan0
    cumulative = 0.0

    for month in range(PROJECTION_MONTHS):
        year = month // 12

        rent = _grow(property.monthly_rent, rent_growth, year)
        maintenance = _grow(property.monthly_maintenance, inflation, year)
        management = property.monthly_management
        pmi = property.pmi_annual / 12 if month < pmi_months else 0.0

        income = rent * (1 - property.vacancy_rate)
        expenses = monthly_pi + property.monthly_escrow + maintenance + management + pmi
        net = income - expenses

        interest, balance = _amortize_month(balance, monthly_pi, r)

        deductible = interest + property_tax + insurance + maintenance + management + pmi + depreciation
        tax_benefit = _tax_benefit(income - deductible, property.effective_tax_rate)

        adjusted_net = net + tax_benefit
        cumulative += adjusted_net

        out.append(
            MonthlyPoint(
                month=month,
                month_label=_month_label(month),
                income=round_currency(income),
                expenses=round_currency(expenses),
                net=round_currency(net),
                tax_benefit=round_currency(tax_benefit),
                adjusted_net=round_currency(adjusted_net),
                cumulative=round_currency(cumulative),
            )
        )

    return out
