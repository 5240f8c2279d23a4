import pytest

from microgridcost.layers.economics import (
    annualized_cost,
    compute_coe,
    compute_crf,
    compute_lcoe,
    lifetime_served_energy,
)
from microgridcost.validation import DegenerateComputation


def test_crf_basic():
    """CRF at 7% for 30 years should be ~0.0806."""
    crf = compute_crf(0.07, 30)
    assert abs(crf - 0.0806) < 0.001


def test_crf_high_rate():
    """CRF at 10% for 20 years should be ~0.1175."""
    crf = compute_crf(0.10, 20)
    assert abs(crf - 0.1175) < 0.001


def test_crf_zero_rate_limit():
    """At r = 0 the CRF is a plain 1/N."""
    assert compute_crf(0.0, 25) == pytest.approx(0.04)
    assert compute_crf(1e-9, 25) == pytest.approx(0.04, rel=1e-6)


def test_crf_zero_horizon():
    with pytest.raises(DegenerateComputation, match="horizon"):
        compute_crf(0.05, 0)


def test_annualized_cost_inverts_present_value():
    """A flat annuity A over N years has NPC = A * sum(d_i); annualizing gives A."""
    npc = 1000.0 * sum(1.05**-i for i in range(1, 21))
    assert annualized_cost(npc, 0.05, 20) == pytest.approx(1000.0)


# ---- served energy ----


def test_lifetime_energy_no_discount():
    assert lifetime_served_energy(5000.0, 0.0, 25) == pytest.approx(5000.0 * 25)


def test_lifetime_energy_first_year_undiscounted():
    """E * (1 + d_1 + ... + d_{N-1})."""
    expected = 5000.0 * (1 + sum(1.05**-i for i in range(1, 25)))
    assert lifetime_served_energy(5000.0, 0.05, 25) == pytest.approx(expected)


def test_lifetime_energy_single_year():
    assert lifetime_served_energy(5000.0, 0.05, 1) == pytest.approx(5000.0)


# ---- COE / LCOE ----


def test_coe():
    assert compute_coe(856000.0, 5e6) == pytest.approx(0.1712)


def test_coe_zero_energy():
    with pytest.raises(DegenerateComputation, match="served_energy"):
        compute_coe(1000.0, 0.0)


def test_lcoe():
    assert compute_lcoe(21.4e6, 1.25e8) == pytest.approx(0.1712)


def test_lcoe_zero_energy():
    with pytest.raises(DegenerateComputation, match="LCOE"):
        compute_lcoe(1000.0, 0.0)
