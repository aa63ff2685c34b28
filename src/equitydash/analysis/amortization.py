from datetime import date

from equitydash.domain.finance import monthly_mortgage_pi, round_cents
from equitydash.domain.property import PropertyAssumptions, ValueOverride


def months_elapsed(start: date, as_of: date) -> int:
    """
    Whole payment periods between `start` and `as_of`.
    The current month only counts once its day-of-month reaches the start day.
    """
    months = (as_of.year - start.year) * 12 + (as_of.month - start.month)
    if as_of.day < start.day:
        months -= 1
    return max(0, months)


def _month_index(d: date) -> int:
    return d.year * 12 + d.month


def calculate_current_balance(
    original_loan_amount: float,
    annual_rate: float,
    term_years: int,
    loan_start_date: date,
    as_of: date | None = None,
) -> float:
    """
    Remaining principal as of `as_of`, stepping through each elapsed month
    since origination. Returns 0 as soon as the loan is paid off.
    """
    as_of = as_of or date.today()
    months = months_elapsed(loan_start_date, as_of)
    if months == 0:
        return original_loan_amount

    payment = monthly_mortgage_pi(original_loan_amount, annual_rate, term_years)
    r = annual_rate / 12.0

    balance = original_loan_amount
    for _ in range(months):
        interest = balance * r
        principal = payment - interest
        balance -= principal
        if balance <= 0:
            return 0.0

    return round_cents(balance)


def resolve_current_balance(
    property: PropertyAssumptions,
    latest_override: ValueOverride | None,
    as_of: date | None = None,
) -> float:
    """
    The one loan balance everything else should use.

    - No origination facts: latest manual entry, else the stored balance.
    - Otherwise amortize from origination, unless the latest manual entry was
      recorded this month (or later), in which case it wins. An older entry
      is stale: the schedule has moved on since.
    """
    if not property.has_origination:
        if latest_override is not None:
            return latest_override.value
        return property.loan_balance

    as_of = as_of or date.today()
    calculated = calculate_current_balance(
        original_loan_amount=property.original_loan_amount,
        annual_rate=property.interest_rate,
        term_years=property.loan_term_years,
        loan_start_date=property.loan_start_date,
        as_of=as_of,
    )

    if latest_override is None:
        return calculated

    if _month_index(latest_override.recorded_at) >= _month_index(as_of):
        return latest_override.value

    return calculated


def resolve_current_home_value(
    property: PropertyAssumptions,
    latest_override: ValueOverride | None,
) -> float:
    if latest_override is not None:
        return latest_override.value
    return property.home_value
