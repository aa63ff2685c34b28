import math


def annuity_payment(rate_monthly: float, n_months: int, principal: float) -> float:
    r = rate_monthly
    if n_months <= 0:
        # no payment schedule to speak of; let the NaN show up downstream
        return float("nan")
    if r == 0:
        return principal / n_months
    return principal * (r * (1 + r) ** n_months) / ((1 + r) ** n_months - 1)


def monthly_mortgage_pi(loan_balance: float, annual_rate: float, term_years: int) -> float:
    """
    Fixed monthly principal-and-interest payment:
    M = P * [ r(1+r)^n / ((1+r)^n - 1) ]
    r = annual_rate / 12, n = term_years * 12
    """
    return annuity_payment(annual_rate / 12.0, int(term_years * 12), loan_balance)


def round_currency(value: float) -> float:
    """
    Round half up to a whole currency unit (-2.5 -> -2, 2.5 -> 3), the way
    the dashboard has always displayed figures. Non-finite values pass through.
    """
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))


def round_cents(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.floor(value * 100 + 0.5) / 100
