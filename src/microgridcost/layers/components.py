"""Layer 2: Technology adapters — per-component present costs.

Each adapter maps a component's native parameters onto the annuity model
(or, for the generator, an hour-driven variant) and returns a
ComponentCosts with the salvage credit stored negative.
"""

import math
import warnings
from functools import singledispatch

import jax.numpy as jnp

from microgridcost.layers.annuity import (
    compute_annuity,
    discount_factor_at,
    discount_factors,
    replacement_count,
    replacement_years,
)
from microgridcost.types import ComponentCosts, OperationStats
from microgridcost.validation import (
    Battery,
    DieselGenerator,
    NonDispatchableSource,
    Project,
    PVInverter,
    ensure_non_negative,
    ensure_positive,
    ensure_project_terms,
)


def nondispatchable_costs(nd: NonDispatchableSource, project: Project) -> ComponentCosts:
    """Present costs of a simple renewable source (no fuel)."""
    return compute_annuity(
        horizon=project.lifetime,
        discount_rate=project.discount_rate,
        quantity=nd.power_rated,
        investment_price=nd.investment_price,
        replacement_price=nd.investment_price * nd.replacement_price_ratio,
        salvage_price=nd.investment_price * nd.salvage_price_ratio,
        om_price=nd.om_price,
        fuel_consumption=0.0,
        fuel_price=0.0,
        lifetime=nd.lifetime,
    )


def pv_inverter_costs(pvi: PVInverter, project: Project) -> ComponentCosts:
    """Present costs of a PV plant: inverter (AC) plus panels (DC)."""
    ac = compute_annuity(
        horizon=project.lifetime,
        discount_rate=project.discount_rate,
        quantity=pvi.power_rated,
        investment_price=pvi.investment_price_ac,
        replacement_price=pvi.investment_price_ac * pvi.replacement_price_ratio,
        salvage_price=pvi.investment_price_ac * pvi.salvage_price_ratio,
        om_price=pvi.om_price_ac,
        fuel_consumption=0.0,
        fuel_price=0.0,
        lifetime=pvi.lifetime_ac,
    )
    dc = compute_annuity(
        horizon=project.lifetime,
        discount_rate=project.discount_rate,
        quantity=pvi.power_rated * pvi.ilr,  # DC rated power
        investment_price=pvi.investment_price_dc,
        replacement_price=pvi.investment_price_dc * pvi.replacement_price_ratio,
        salvage_price=pvi.investment_price_dc * pvi.salvage_price_ratio,
        om_price=pvi.om_price_dc,
        fuel_consumption=0.0,
        fuel_price=0.0,
        lifetime=pvi.lifetime_dc,
    )
    return ac + dc


@singledispatch
def source_costs(source, project: Project) -> ComponentCosts:
    """Present costs of any non-dispatchable source."""
    raise TypeError(f"No cost adapter for {type(source).__name__}")


source_costs.register(NonDispatchableSource, nondispatchable_costs)
source_costs.register(PVInverter, pv_inverter_costs)


def generator_costs(
    dg: DieselGenerator, project: Project, oper_stats: OperationStats
) -> ComponentCosts:
    """Present costs of a generator whose wear is counted in operating hours.

    The yearly operation of oper_stats is assumed to repeat every year, so
    replacements happen every lifetime_hours/gen_hours years (fractional
    years allowed).
    """
    horizon = project.lifetime
    rate = project.discount_rate
    ensure_project_terms(horizon, rate)
    ensure_non_negative(dg.power_rated, "power_rated")
    ensure_non_negative(dg.fuel_price, "fuel_price")
    ensure_non_negative(dg.investment_price, "investment_price")
    ensure_non_negative(dg.om_price_hours, "om_price_hours")
    ensure_positive(dg.lifetime_hours, "lifetime_hours")
    ensure_non_negative(dg.replacement_price_ratio, "replacement_price_ratio")
    ensure_non_negative(dg.salvage_price_ratio, "salvage_price_ratio")
    ensure_non_negative(oper_stats.gen_hours, "gen_hours")
    ensure_non_negative(oper_stats.gen_fuel, "gen_fuel")

    if oper_stats.gen_hours == 0 and oper_stats.gen_fuel > 0:
        warnings.warn(
            f"gen_fuel = {oper_stats.gen_fuel} with gen_hours = 0: "
            f"fuel is costed but the generator never wears",
            stacklevel=2,
        )

    factors = discount_factors(rate, horizon)
    total_gen_hours = horizon * oper_stats.gen_hours

    n_repl = replacement_count(total_gen_hours, dg.lifetime_hours)
    if n_repl > 0:
        years_per_life = dg.lifetime_hours / oper_stats.gen_hours
        repl_factors = discount_factor_at(
            rate, replacement_years(years_per_life, n_repl)
        )
    else:
        repl_factors = jnp.zeros(0)

    investment = dg.investment_price * dg.power_rated
    # O&M accrues per operating hour, every year
    om = jnp.sum(dg.om_price_hours * dg.power_rated * oper_stats.gen_hours * factors)
    replacement = jnp.sum(dg.replacement_price_ratio * investment * repl_factors)

    # Remaining operating hours at project end, in [0, lifetime_hours]
    remaining_hours = dg.lifetime_hours - (
        total_gen_hours - dg.lifetime_hours * n_repl
    )
    if math.isclose(remaining_hours, 0.0, abs_tol=1e-9 * dg.lifetime_hours):
        salvage = 0.0
    else:
        nominal_salvage = (
            dg.salvage_price_ratio * investment * remaining_hours / dg.lifetime_hours
        )
        salvage = -nominal_salvage * factors[-1]

    fuel = jnp.sum(dg.fuel_price * oper_stats.gen_fuel * factors)

    return ComponentCosts.from_parts(
        investment=float(investment),
        replacement=float(replacement),
        om=float(om),
        fuel=float(fuel),
        salvage=float(salvage),
    )


def battery_lifetime(bt: Battery, storage_cycles: float) -> float:
    """Effective battery lifetime [yr]: the tighter of cycling and calendar limits."""
    ensure_non_negative(storage_cycles, "storage_cycles")
    if storage_cycles > 0.0:
        lifetime = min(bt.lifetime_cycles / storage_cycles, bt.lifetime_calendar)
    else:
        lifetime = bt.lifetime_calendar
    if lifetime < 1.0:
        warnings.warn(
            f"Battery lifetime of {lifetime:.3f} yr is below one year "
            f"({storage_cycles} cycles/yr for a {bt.lifetime_cycles} cycle life)",
            stacklevel=3,
        )
    return lifetime


def battery_costs(
    bt: Battery, project: Project, oper_stats: OperationStats
) -> ComponentCosts:
    """Present costs of the battery, with cycle-limited lifetime."""
    lifetime = battery_lifetime(bt, oper_stats.storage_cycles)
    return compute_annuity(
        horizon=project.lifetime,
        discount_rate=project.discount_rate,
        quantity=bt.energy_rated,
        investment_price=bt.investment_price,
        replacement_price=bt.investment_price * bt.replacement_price_ratio,
        salvage_price=bt.investment_price * bt.salvage_price_ratio,
        om_price=bt.om_price,
        fuel_consumption=0.0,
        fuel_price=0.0,
        lifetime=lifetime,
    )
