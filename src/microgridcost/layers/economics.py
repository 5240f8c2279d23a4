"""Layer 3: Economics — CRF, annualized cost, COE, LCOE."""

import jax.numpy as jnp

from microgridcost.layers.annuity import discount_factors
from microgridcost.validation import DegenerateComputation


def compute_crf(discount_rate: float, horizon: float) -> float:
    """Capital Recovery Factor: CRF = r*(1+r)^N / ((1+r)^N - 1).

    At r = 0 the limit is 1/N.
    """
    if horizon <= 0:
        raise DegenerateComputation(f"CRF undefined for horizon = {horizon}")
    r = discount_rate
    n = horizon
    if r == 0:
        return 1.0 / n
    growth = (1 + r) ** n
    return (r * growth) / (growth - 1)


def annualized_cost(npc: float, discount_rate: float, horizon: float) -> float:
    """Uniform yearly payment equivalent to the net present cost."""
    return npc * compute_crf(discount_rate, horizon)


def lifetime_served_energy(
    served_energy: float, discount_rate: float, horizon: int
) -> float:
    """Discounted energy served over the project.

    The first year counts in full, years 2..N are discounted by
    d_1..d_{N-1}:  E * (1 + sum_{i=1}^{N-1} d_i).
    """
    factors = discount_factors(discount_rate, horizon)
    # Year 1 weighs 1, the last factor d_N is not used
    weights = jnp.concatenate([jnp.ones(1), factors[:-1]])
    return float(served_energy * jnp.sum(weights))


def compute_coe(annual_cost: float, served_energy: float) -> float:
    """Annualized cost of energy, in currency per unit of served energy."""
    if served_energy <= 0:
        raise DegenerateComputation(
            f"COE undefined for served_energy = {served_energy}"
        )
    return annual_cost / served_energy


def compute_lcoe(npc: float, energy_lifetime: float) -> float:
    """Levelized cost of energy: NPC / discounted lifetime served energy."""
    if energy_lifetime <= 0:
        raise DegenerateComputation(
            f"LCOE undefined for lifetime served energy = {energy_lifetime}"
        )
    return npc / energy_lifetime
