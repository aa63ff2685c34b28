import math

import pytest
from hypothesis import given, strategies as st

from conftest import make_property
from equitydash.analysis import projections
from equitydash.analysis.projections import project_annual
from equitydash.domain.finance import monthly_mortgage_pi, round_currency


def test_eleven_points_year_zero_to_ten(prop):
    points = project_annual(prop)
    assert [p.year for p in points] == list(range(11))


def test_year_zero_is_an_unprojected_snapshot(prop):
    p0 = project_annual(prop, rate_offset=0.02, start_home_value=345_123.4, start_loan_balance=260_000.6)[0]

    assert p0.cash_flow == 0
    assert p0.tax_benefit == 0
    assert p0.home_value == round_currency(345_123.4)
    assert p0.loan_balance == round_currency(260_000.6)
    assert p0.equity == round_currency(345_123.4 - 260_000.6)


def test_year_one_home_value_end_to_end(prop):
    points = project_annual(prop, rate_offset=0)
    assert points[1].home_value == 343_200


def test_start_values_default_to_stored_fields(prop):
    points = project_annual(prop)
    assert points[0].home_value == 330_000
    assert points[0].loan_balance == round_currency(274_803.87)


@given(
    start=st.floats(min_value=50_000.0, max_value=2_000_000.0),
    rate=st.floats(min_value=-0.05, max_value=0.12),
)
def test_home_value_compounds_from_start_each_year(start, rate):
    prop = make_property(home_growth_rate=rate)
    points = project_annual(prop, start_home_value=start)
    for p in points[1:]:
        assert p.home_value == round_currency(start * (1 + rate) ** p.year)


def test_grow_is_a_single_power_not_a_chain():
    assert projections._grow(1000.0, 0.1, 0) == 1000.0
    assert projections._grow(330_000.0, 0.04, 10) == 330_000.0 * 1.04 ** 10
    assert projections._grow(330_000.0, 0.04, 3) == 330_000.0 * 1.04 ** 3


def test_every_year_grows_home_value_from_the_start_value(monkeypatch):
    calls = []
    real = projections._grow

    def recording(value, rate, periods):
        calls.append((value, rate, periods))
        return real(value, rate, periods)

    monkeypatch.setattr(projections, "_grow", recording)
    prop = make_property(home_growth_rate=0.04)
    points = project_annual(prop, rate_offset=0.01, start_home_value=345_000.0)

    home_calls = [c for c in calls if c[0] == 345_000.0]
    growth = 0.04 + 0.01
    assert home_calls == [(345_000.0, growth, year) for year in range(1, 11)]
    assert points[10].home_value == round_currency(345_000.0 * (1 + growth) ** 10)


def test_escrow_is_a_cash_expense_but_not_deductible():
    prop = make_property(monthly_escrow=250.0)
    pi = monthly_mortgage_pi(prop.loan_balance, prop.interest_rate, prop.loan_term_years)
    income = 1850.0 * 12 * 0.95
    expenses = pi * 12 + 250.0 * 12 + 300.0 * 12 + 95.0 * 12 + 488.88

    with_escrow = project_annual(prop)
    without = project_annual(make_property())

    assert with_escrow[1].cash_flow == round_currency(income - expenses)
    assert with_escrow[1].cash_flow == pytest.approx(without[1].cash_flow - 3000, abs=1)
    assert [p.tax_benefit for p in with_escrow] == [p.tax_benefit for p in without]


def test_offset_moves_home_growth_only(prop):
    base = project_annual(prop)
    up = project_annual(prop, rate_offset=0.02)

    assert up[10].home_value > base[10].home_value
    # rent / expenses / amortization do not see the offset
    assert [p.cash_flow for p in up] == [p.cash_flow for p in base]
    assert [p.tax_benefit for p in up] == [p.tax_benefit for p in base]
    assert [p.loan_balance for p in up] == [p.loan_balance for p in base]


def test_year_one_cash_flow_uses_unescalated_rent(prop):
    pi = monthly_mortgage_pi(prop.loan_balance, prop.interest_rate, prop.loan_term_years)
    income = 1850.0 * 12 * (1 - 0.05)
    expenses = pi * 12 + 0.0 + 300.0 * 12 + 95.0 * 12 + 488.88
    assert project_annual(prop)[1].cash_flow == round_currency(income - expenses)


def test_year_two_rent_and_maintenance_escalate_once(prop):
    pi = monthly_mortgage_pi(prop.loan_balance, prop.interest_rate, prop.loan_term_years)
    income = 1850.0 * 1.04 * 12 * 0.95
    expenses = pi * 12 + 300.0 * 1.03 * 12 + 95.0 * 12 + 488.88
    assert project_annual(prop)[2].cash_flow == round_currency(income - expenses)


def test_pmi_stops_after_pmi_years():
    prop = make_property(rent_growth_rate=0.0, inflation_rate=0.0)
    points = project_annual(prop)
    # year 4 still pays PMI, year 5 does not
    assert points[5].cash_flow - points[4].cash_flow == pytest.approx(488.88, abs=1)


def test_tax_benefit_matches_interest_schedule(prop):
    r = prop.interest_rate / 12
    pi = monthly_mortgage_pi(prop.loan_balance, prop.interest_rate, prop.loan_term_years)
    balance = prop.loan_balance
    interest = 0.0
    for _ in range(12):
        i = balance * r
        interest += i
        balance -= pi - i

    income = 1850.0 * 12 * 0.95
    deductible = interest + 3809.04 + 2117.23 + 3600.0 + 1140.0 + 488.88 + 10229.09
    taxable = income - deductible
    expected = abs(taxable) * 0.24 if taxable < 0 else -(taxable * 0.24)

    p1 = project_annual(prop)[1]
    assert p1.tax_benefit == round_currency(expected)
    assert p1.loan_balance == round_currency(balance)
    assert p1.equity == round_currency(330_000 * 1.04 - balance)


def test_profitable_year_owes_tax_as_negative_benefit():
    prop = make_property(
        monthly_rent=10_000.0,
        depreciation_annual=0.0,
        property_tax_annual=0.0,
        insurance_annual=0.0,
    )
    assert all(p.tax_benefit < 0 for p in project_annual(prop)[1:])


def test_paper_loss_is_positive_benefit():
    prop = make_property(monthly_rent=0.0)
    assert all(p.tax_benefit > 0 for p in project_annual(prop)[1:])


def test_cash_flow_excludes_tax_benefit(prop):
    no_tax = make_property(effective_tax_rate=0.0)
    assert [p.cash_flow for p in project_annual(no_tax)] == [p.cash_flow for p in project_annual(prop)]


def test_short_loan_pays_off_and_stays_at_zero():
    prop = make_property(loan_balance=50_000.0, loan_term_years=2)
    points = project_annual(prop)

    balances = [p.loan_balance for p in points]
    assert balances == sorted(balances, reverse=True)
    assert all(b == 0 for b in balances[2:])
    assert points[5].equity == points[5].home_value


def test_bad_numbers_propagate_instead_of_raising():
    points = project_annual(make_property(interest_rate=float("nan")))
    assert math.isnan(points[1].loan_balance)
    assert math.isnan(points[1].cash_flow)

    zero_term = project_annual(make_property(loan_term_years=0))
    assert math.isnan(zero_term[1].cash_flow)
