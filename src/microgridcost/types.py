from dataclasses import dataclass, field, fields
from enum import Enum


class SourceFamily(Enum):
    PHOTOVOLTAIC = "photovoltaic"
    WIND = "wind"
    OTHER = "other"


class CostCategory(Enum):
    GENERATOR = "generator"
    BATTERY = "battery"
    PHOTOVOLTAIC = "photovoltaic"
    WIND = "wind"
    OTHER = "other"


FAMILY_TO_CATEGORY = {
    SourceFamily.PHOTOVOLTAIC: CostCategory.PHOTOVOLTAIC,
    SourceFamily.WIND: CostCategory.WIND,
    SourceFamily.OTHER: CostCategory.OTHER,
}


@dataclass(frozen=True)
class OperationStats:
    """Yearly operation summary produced by the dispatch simulation.

    Only served_energy, gen_hours, gen_fuel and storage_cycles are read by
    the cost engine. Energies in kWh, powers in kW, rates in [0, 1].
    """

    served_energy: float  # Load energy served over the year [kWh]
    gen_hours: float  # Generator operating hours [h/yr]
    gen_fuel: float  # Generator fuel consumed [L/yr]
    storage_cycles: float  # Battery equivalent full cycles [cycles/yr]
    shed_energy: float = 0.0
    shed_max: float = 0.0
    shed_hours: float = 0.0
    shed_duration: float = 0.0
    shed_rate: float = 0.0
    gen_energy: float = 0.0
    storage_char_energy: float = 0.0
    storage_dis_energy: float = 0.0
    storage_loss_energy: float = 0.0
    spilled_energy: float = 0.0
    spilled_max: float = 0.0
    spilled_rate: float = 0.0
    renew_productible_energy: float = 0.0
    renew_energy: float = 0.0
    renew_rate: float = 0.0

    @classmethod
    def from_mapping(cls, data: dict) -> "OperationStats":
        valid_fields = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in valid_fields})


@dataclass(frozen=True)
class ComponentCosts:
    """Present-value cost breakdown of one component over the project.

    salvage is a credit and is stored negative, so that
    total = investment + replacement + om + fuel + salvage.
    """

    total: float = 0.0
    investment: float = 0.0
    replacement: float = 0.0
    om: float = 0.0
    fuel: float = 0.0
    salvage: float = 0.0

    @classmethod
    def zero(cls) -> "ComponentCosts":
        return cls()

    @classmethod
    def from_parts(
        cls,
        investment: float,
        replacement: float,
        om: float,
        fuel: float,
        salvage: float,
    ) -> "ComponentCosts":
        """Build a record whose total is the sum of the given parts."""
        return cls(
            total=investment + replacement + om + fuel + salvage,
            investment=investment,
            replacement=replacement,
            om=om,
            fuel=fuel,
            salvage=salvage,
        )

    @property
    def salvage_credit(self) -> float:
        """Salvage value as a positive amount, for display."""
        return -self.salvage

    def __add__(self, other: "ComponentCosts") -> "ComponentCosts":
        if not isinstance(other, ComponentCosts):
            return NotImplemented
        return ComponentCosts(
            total=self.total + other.total,
            investment=self.investment + other.investment,
            replacement=self.replacement + other.replacement,
            om=self.om + other.om,
            fuel=self.fuel + other.fuel,
            salvage=self.salvage + other.salvage,
        )


@dataclass(frozen=True)
class MicrogridCosts:
    """Project-level cost results (present values in the project currency)."""

    npc: float  # Net present cost
    annualized_cost: float  # npc * CRF [currency/yr]
    coe: float  # Annualized cost of energy [currency/kWh]
    lcoe: float  # Levelized cost of energy [currency/kWh]
    total_investment_cost: float
    total_replacement_cost: float
    total_om_cost: float
    total_fuel_cost: float
    total_salvage_cost: float  # Negative (credit)
    categories: dict[CostCategory, ComponentCosts] = field(default_factory=dict)
    currency: str = "$"

    def category(self, cat: CostCategory) -> ComponentCosts:
        return self.categories.get(cat, ComponentCosts.zero())

    @property
    def generator(self) -> ComponentCosts:
        return self.category(CostCategory.GENERATOR)

    @property
    def battery(self) -> ComponentCosts:
        return self.category(CostCategory.BATTERY)

    @property
    def photovoltaic(self) -> ComponentCosts:
        return self.category(CostCategory.PHOTOVOLTAIC)

    @property
    def wind(self) -> ComponentCosts:
        return self.category(CostCategory.WIND)

    @property
    def other(self) -> ComponentCosts:
        return self.category(CostCategory.OTHER)

    def to_dict(self) -> dict[str, float]:
        """Flatten to {"npc": ..., "generator.fuel": ...} for reporting."""
        out = {
            "npc": float(self.npc),
            "annualized_cost": float(self.annualized_cost),
            "coe": float(self.coe),
            "lcoe": float(self.lcoe),
            "total_investment_cost": float(self.total_investment_cost),
            "total_replacement_cost": float(self.total_replacement_cost),
            "total_om_cost": float(self.total_om_cost),
            "total_fuel_cost": float(self.total_fuel_cost),
            "total_salvage_cost": float(self.total_salvage_cost),
        }
        for cat in CostCategory:
            c = self.category(cat)
            for f in fields(ComponentCosts):
                out[f"{cat.value}.{f.name}"] = float(getattr(c, f.name))
        return out
