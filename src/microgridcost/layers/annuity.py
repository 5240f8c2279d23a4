"""Layer 1: Annuity model — discounting, replacements, prorated salvage.

Cash flows are end-of-year: year i (1..N) is discounted by 1/(1+r)^i,
the initial investment is incurred at year 0 and is not discounted.
"""

import math

import jax.numpy as jnp

from microgridcost.types import ComponentCosts
from microgridcost.validation import (
    InvalidConfiguration,
    ensure_non_negative,
    ensure_positive,
    ensure_project_terms,
)


_RATIO_TOL = 1e-9


def discount_factors(discount_rate: float, horizon: int):
    """Discount factors d_i = 1/(1+r)^i for i = 1..horizon."""
    years = jnp.arange(1, int(horizon) + 1)
    return 1.0 / (1.0 + discount_rate) ** years


def discount_factor_at(discount_rate: float, year):
    """Discount factor(s) for (possibly fractional) years."""
    return 1.0 / (1.0 + discount_rate) ** jnp.asarray(year, dtype=float)


def replacement_count(horizon: float, lifetime: float) -> int:
    """Number of replacements k = ceil(horizon/lifetime) - 1, never negative.

    A ratio within 1e-9 of a whole number counts as that number, so derived
    lifetimes (e.g. cycle life / cycles per year) do not gain a replacement
    from rounding.
    """
    if lifetime <= 0:
        raise InvalidConfiguration(f"lifetime must be positive, got {lifetime}")
    return max(math.ceil(horizon / lifetime - _RATIO_TOL) - 1, 0)


def replacement_years(lifetime: float, n_replacements: int):
    """Years lifetime, 2*lifetime, ..., k*lifetime (empty when k = 0)."""
    return jnp.arange(1, n_replacements + 1) * lifetime


def compute_annuity(
    horizon: int,
    discount_rate: float,
    quantity: float,
    investment_price: float,
    replacement_price: float,
    salvage_price: float,
    om_price: float,
    fuel_consumption: float,
    fuel_price: float,
    lifetime: float,
) -> ComponentCosts:
    """Present costs of a component over the project horizon.

    quantity is the sizing variable (kW, kWh...) that the unit prices apply
    to. fuel_consumption is per year. Returns a ComponentCosts with a
    negative salvage term.
    """
    ensure_project_terms(horizon, discount_rate)
    ensure_positive(lifetime, "lifetime")
    ensure_non_negative(quantity, "quantity")
    ensure_non_negative(investment_price, "investment_price")
    ensure_non_negative(replacement_price, "replacement_price")
    ensure_non_negative(salvage_price, "salvage_price")
    ensure_non_negative(om_price, "om_price")
    ensure_non_negative(fuel_consumption, "fuel_consumption")
    ensure_non_negative(fuel_price, "fuel_price")

    factors = discount_factors(discount_rate, horizon)
    sum_discounts = jnp.sum(factors)

    n_repl = replacement_count(horizon, lifetime)
    repl_factors = discount_factor_at(
        discount_rate, replacement_years(lifetime, n_repl)
    )

    # Remaining life at project end, in [0, lifetime)
    remaining_life = max(lifetime * (n_repl + 1) - horizon, 0.0)
    salvage_price_effective = salvage_price * remaining_life / lifetime

    investment = investment_price * quantity
    om = om_price * quantity * sum_discounts
    if n_repl == 0:
        replacement = 0.0
    else:
        replacement = replacement_price * quantity * jnp.sum(repl_factors)
    salvage = -salvage_price_effective * quantity * factors[-1]
    if fuel_consumption > 0.0:
        fuel = fuel_price * fuel_consumption * sum_discounts
    else:
        fuel = 0.0

    return ComponentCosts.from_parts(
        investment=float(investment),
        replacement=float(replacement),
        om=float(om),
        fuel=float(fuel),
        salvage=float(salvage),
    )
