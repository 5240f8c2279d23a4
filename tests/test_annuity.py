import pytest

from microgridcost.layers.annuity import (
    compute_annuity,
    discount_factors,
    replacement_count,
    replacement_years,
)
from microgridcost.validation import InvalidConfiguration


def _renewable(horizon, discount_rate, lifetime=20.0):
    """10 kW source at 1000 $/kW, 20 $/kW/yr, replacement 1.2x, salvage 0.8x."""
    return compute_annuity(
        horizon=horizon,
        discount_rate=discount_rate,
        quantity=10.0,
        investment_price=1000.0,
        replacement_price=1200.0,
        salvage_price=800.0,
        om_price=20.0,
        fuel_consumption=0.0,
        fuel_price=0.0,
        lifetime=lifetime,
    )


def test_discount_factors_constant_without_discount():
    factors = discount_factors(0.0, 10)
    assert len(factors) == 10
    assert all(float(d) == 1.0 for d in factors)


def test_discount_factors_strictly_decreasing():
    factors = [float(d) for d in discount_factors(0.05, 30)]
    assert all(a > b for a, b in zip(factors, factors[1:]))
    assert factors[0] == pytest.approx(1 / 1.05)
    assert factors[-1] == pytest.approx(1.05**-30)


def test_replacement_count():
    assert replacement_count(30, 20) == 1
    assert replacement_count(25, 10) == 2
    assert replacement_count(30, 10) == 2  # third unit ends exactly at horizon
    assert replacement_count(20, 20) == 0
    assert replacement_count(20, 35) == 0


def test_replacement_years():
    assert [float(y) for y in replacement_years(7.5, 3)] == [7.5, 15.0, 22.5]
    assert len(replacement_years(20.0, 0)) == 0


def test_renewable_no_discount():
    """30 yr project, 20 yr source: one replacement, half a life salvaged."""
    c = _renewable(30, 0.0)
    assert c.investment == pytest.approx(10000.0)
    assert c.om == pytest.approx(6000.0)
    assert c.replacement == pytest.approx(12000.0)
    assert c.fuel == 0.0
    assert c.salvage == pytest.approx(-4000.0)
    assert c.salvage_credit == pytest.approx(4000.0)
    assert c.total == pytest.approx(24000.0)


def test_renewable_5pct_discount():
    c = _renewable(30, 0.05)
    assert c.investment == pytest.approx(10000.0)
    assert round(c.om, 2) == 3074.49
    assert round(c.replacement, 2) == 4522.67
    assert round(c.salvage_credit, 2) == 925.51
    assert round(c.total, 2) == 16671.65


def test_total_is_sum_of_parts():
    c = compute_annuity(
        horizon=17,
        discount_rate=0.08,
        quantity=3.5,
        investment_price=420.0,
        replacement_price=380.0,
        salvage_price=300.0,
        om_price=12.0,
        fuel_consumption=250.0,
        fuel_price=1.3,
        lifetime=6.0,
    )
    assert c.total == pytest.approx(
        c.investment + c.replacement + c.om + c.fuel + c.salvage
    )
    assert c.salvage <= 0


def test_lifetime_beyond_horizon():
    """No replacement, salvage prorated over the unused 10 of 40 years."""
    c = _renewable(30, 0.0, lifetime=40.0)
    assert c.replacement == 0.0
    assert c.salvage == pytest.approx(-800.0 * 10.0 * 10.0 / 40.0)


def test_lifetime_equal_to_horizon_has_no_salvage():
    c = _renewable(20, 0.05, lifetime=20.0)
    assert c.replacement == 0.0
    assert c.salvage == pytest.approx(0.0)


def test_zero_fuel_consumption_gives_exact_zero():
    c = compute_annuity(10, 0.07, 1.0, 100.0, 100.0, 100.0, 5.0, 0.0, 3.0, 10.0)
    assert c.fuel == 0.0


def test_fuel_cost_no_discount():
    c = compute_annuity(10, 0.0, 1.0, 100.0, 100.0, 100.0, 5.0, 100.0, 2.0, 10.0)
    assert c.fuel == pytest.approx(2000.0)


class TestInvalidInputs:
    def test_discount_rate_at_minus_one(self):
        with pytest.raises(InvalidConfiguration, match="discount_rate"):
            _renewable(30, -1.0)

    def test_zero_horizon(self):
        with pytest.raises(InvalidConfiguration, match="horizon"):
            _renewable(0, 0.05)

    def test_fractional_horizon(self):
        with pytest.raises(InvalidConfiguration, match="horizon"):
            _renewable(12.5, 0.05)

    def test_zero_lifetime(self):
        with pytest.raises(InvalidConfiguration, match="lifetime"):
            _renewable(30, 0.05, lifetime=0.0)

    def test_negative_price(self):
        with pytest.raises(InvalidConfiguration, match="om_price"):
            compute_annuity(10, 0.05, 1.0, 100.0, 100.0, 100.0, -5.0, 0.0, 0.0, 10.0)

    def test_negative_quantity(self):
        with pytest.raises(InvalidConfiguration, match="quantity"):
            compute_annuity(10, 0.05, -1.0, 100.0, 100.0, 100.0, 5.0, 0.0, 0.0, 10.0)


def test_replacement_count_tolerates_rounding():
    """A lifetime a hair below 12.5 yr still divides a 25 yr horizon twice."""
    assert replacement_count(25, 12.5 * (1 - 1e-13)) == 1
    assert replacement_count(25, 12.5 * (1 - 1e-6)) == 2


def test_derived_lifetime_rounding_has_no_phantom_replacement():
    exact = _renewable(25, 0.05, lifetime=12.5)
    rounded = _renewable(25, 0.05, lifetime=12.5 * (1 - 1e-13))
    assert rounded.replacement == pytest.approx(exact.replacement)
    assert rounded.salvage == pytest.approx(exact.salvage, abs=1e-6)
    assert rounded.salvage <= 0
