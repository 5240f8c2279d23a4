"""Top-level cost aggregation: wires the annuity, adapter and economics layers."""

from microgridcost.layers.components import (
    battery_costs,
    generator_costs,
    source_costs,
)
from microgridcost.layers.economics import (
    annualized_cost,
    compute_coe,
    compute_lcoe,
    lifetime_served_energy,
)
from microgridcost.types import (
    FAMILY_TO_CATEGORY,
    ComponentCosts,
    CostCategory,
    MicrogridCosts,
    OperationStats,
)
from microgridcost.validation import (
    DegenerateComputation,
    Microgrid,
    ensure_non_negative,
    ensure_project_terms,
)


def component_costs(
    mg: Microgrid, oper_stats: OperationStats
) -> list[tuple[CostCategory, ComponentCosts]]:
    """Present costs of every component, tagged with its cost category."""
    project = mg.project
    pairs = [
        (FAMILY_TO_CATEGORY[source.family], source_costs(source, project))
        for source in mg.nondispatchables
    ]
    pairs.append(
        (CostCategory.GENERATOR, generator_costs(mg.generator, project, oper_stats))
    )
    pairs.append(
        (CostCategory.BATTERY, battery_costs(mg.storage, project, oper_stats))
    )
    return pairs


def economics(mg: Microgrid, oper_stats: OperationStats) -> MicrogridCosts:
    """Economic results of microgrid `mg` given its yearly `oper_stats`.

    Two error types reach a caller:
    - pydantic.ValidationError when a record is built with out-of-domain
      values (Project, DieselGenerator, ...), before this function runs
    - InvalidConfiguration when values reach it unvalidated (e.g. through
      model_copy(update=...), which skips validation) or oper_stats is
      negative; DegenerateComputation when no energy is served
    """
    project = mg.project
    ensure_project_terms(project.lifetime, project.discount_rate)
    ensure_non_negative(oper_stats.served_energy, "served_energy")
    if oper_stats.served_energy == 0:
        raise DegenerateComputation("served_energy is zero: COE and LCOE are undefined")

    categories = {cat: ComponentCosts.zero() for cat in CostCategory}
    for cat, costs in component_costs(mg, oper_stats):
        categories[cat] = categories[cat] + costs

    overall = ComponentCosts.zero()
    for costs in categories.values():
        overall = overall + costs
    npc = overall.total

    annual = annualized_cost(npc, project.discount_rate, project.lifetime)
    coe = compute_coe(annual, oper_stats.served_energy)
    energy_lifetime = lifetime_served_energy(
        oper_stats.served_energy, project.discount_rate, project.lifetime
    )
    lcoe = compute_lcoe(npc, energy_lifetime)

    return MicrogridCosts(
        npc=npc,
        annualized_cost=annual,
        coe=coe,
        lcoe=lcoe,
        total_investment_cost=overall.investment,
        total_replacement_cost=overall.replacement,
        total_om_cost=overall.om,
        total_fuel_cost=overall.fuel,
        total_salvage_cost=overall.salvage,
        categories=categories,
        currency=project.currency,
    )


_SENSITIVITY_KEYS = {
    "project": ["discount_rate"],
    "generator": [
        "fuel_price",
        "investment_price",
        "om_price_hours",
        "lifetime_hours",
        "replacement_price_ratio",
        "salvage_price_ratio",
    ],
    "storage": [
        "investment_price",
        "om_price",
        "lifetime_calendar",
        "lifetime_cycles",
        "replacement_price_ratio",
        "salvage_price_ratio",
    ],
}


def lcoe_sensitivity(
    mg: Microgrid, oper_stats: OperationStats, rel_step: float = 0.01
) -> dict[str, float]:
    """Compute d(LCOE)/d(param) by forward finite differences.

    Keys are "<record>.<field>" (e.g. "generator.fuel_price").
    Zero-valued parameters are skipped.
    """
    base_lcoe = economics(mg, oper_stats).lcoe
    sensitivities = {}

    for record_name, keys in _SENSITIVITY_KEYS.items():
        record = getattr(mg, record_name)
        for key in keys:
            base_val = getattr(record, key)
            if base_val == 0:
                continue
            delta = abs(base_val) * rel_step
            bumped = record.model_copy(update={key: base_val + delta})
            mg_plus = mg.model_copy(update={record_name: bumped})
            lcoe_plus = economics(mg_plus, oper_stats).lcoe
            sensitivities[f"{record_name}.{key}"] = (lcoe_plus - base_lcoe) / delta

    return sensitivities
