from datetime import date

import pytest

from conftest import AS_OF, make_property
from equitydash.analysis.amortization import (
    calculate_current_balance,
    months_elapsed,
    resolve_current_balance,
    resolve_current_home_value,
)
from equitydash.domain.property import ValueOverride


def _loan_override(value: float, recorded_at: date) -> ValueOverride:
    return ValueOverride(kind="loan_balance", recorded_at=recorded_at, value=value, note="bank statement")


@pytest.mark.parametrize(
    "start, as_of, expected",
    [
        (date(2024, 12, 19), date(2026, 10, 19), 22),
        (date(2024, 12, 19), date(2026, 10, 18), 21),
        (date(2024, 12, 19), date(2025, 1, 18), 0),
        (date(2024, 12, 19), date(2025, 1, 19), 1),
        (date(2024, 12, 19), date(2024, 6, 1), 0),  # before origination
    ],
)
def test_months_elapsed(start, as_of, expected):
    assert months_elapsed(start, as_of) == expected


def test_zero_elapsed_months_returns_original_amount():
    bal = calculate_current_balance(274_803.87, 0.0599, 30, date(2024, 12, 19), as_of=date(2025, 1, 18))
    assert bal == 274_803.87


def test_one_month_matches_single_amortization_step():
    principal, rate = 274_803.87, 0.0599
    r = rate / 12
    n = 360
    payment = principal * (r * (1 + r) ** n) / ((1 + r) ** n - 1)
    expected = principal - (payment - principal * r)

    bal = calculate_current_balance(principal, rate, 30, date(2024, 12, 19), as_of=date(2025, 1, 19))

    assert bal == pytest.approx(expected, abs=0.005)


def test_balance_is_non_increasing_month_over_month():
    start = date(2020, 1, 1)
    previous = None
    for m in range(0, 61):
        as_of = date(2020 + m // 12, m % 12 + 1, 1)
        bal = calculate_current_balance(200_000.0, 0.05, 30, start, as_of=as_of)
        if previous is not None:
            assert bal <= previous
        previous = bal


def test_paid_off_loan_returns_zero_and_stays_zero():
    start = date(2020, 1, 1)
    # 2-year loan: done after 24 payments
    assert calculate_current_balance(10_000.0, 0.05, 2, start, as_of=date(2022, 1, 1)) == 0.0
    assert calculate_current_balance(10_000.0, 0.05, 2, start, as_of=date(2025, 6, 1)) == 0.0


def test_no_origination_uses_override_then_static_balance():
    prop = make_property(original_loan_amount=None, loan_start_date=None, loan_balance=250_000.0)

    assert resolve_current_balance(prop, None, as_of=AS_OF) == 250_000.0
    override = _loan_override(240_000.0, date(2020, 1, 1))
    # even a stale override beats the static field when we cannot amortize
    assert resolve_current_balance(prop, override, as_of=AS_OF) == 240_000.0


def test_missing_start_date_alone_falls_back():
    prop = make_property(loan_start_date=None, loan_balance=250_000.0)
    assert resolve_current_balance(prop, None, as_of=AS_OF) == 250_000.0


def test_malformed_start_date_degrades_to_fallback():
    prop = make_property(loan_start_date="not-a-date", loan_balance=250_000.0)
    assert prop.loan_start_date is None
    assert resolve_current_balance(prop, None, as_of=AS_OF) == 250_000.0


def test_origination_without_override_amortizes(prop):
    expected = calculate_current_balance(274_803.87, 0.0599, 30, date(2024, 12, 19), as_of=AS_OF)
    got = resolve_current_balance(prop, None, as_of=AS_OF)
    assert got == expected
    assert got < prop.original_loan_amount


def test_override_from_current_month_wins(prop):
    override = _loan_override(250_000.0, date(2026, 10, 2))
    assert resolve_current_balance(prop, override, as_of=AS_OF) == 250_000.0


def test_override_from_a_later_month_wins(prop):
    override = _loan_override(249_000.0, date(2026, 11, 1))
    assert resolve_current_balance(prop, override, as_of=AS_OF) == 249_000.0


def test_stale_override_loses_to_amortization(prop):
    override = _loan_override(250_000.0, date(2026, 8, 15))
    calculated = resolve_current_balance(prop, None, as_of=AS_OF)

    got = resolve_current_balance(prop, override, as_of=AS_OF)

    assert got == calculated
    assert got != 250_000.0


def test_home_value_prefers_latest_history(prop):
    assert resolve_current_home_value(prop, None) == 330_000.0
    entry = ValueOverride(kind="home_value", recorded_at=date(2026, 5, 1), value=345_000.0, source="Zillow")
    assert resolve_current_home_value(prop, entry) == 345_000.0
