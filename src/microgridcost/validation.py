"""Input records and validation for the microgrid cost model.

Two validation tiers:
- Tier 1: pydantic records with Field-level constraints, checked once when
  the configuration is built (raises pydantic.ValidationError)
- Tier 2: numeric guards on the raw arguments of the computation layers
  (raises InvalidConfiguration / DegenerateComputation)
"""

import math

from pydantic import BaseModel, ConfigDict, Field

from microgridcost.types import SourceFamily


class InvalidConfiguration(ValueError):
    """Parameters outside their physical or financial domain."""


class DegenerateComputation(ArithmeticError):
    """A metric is undefined for the given inputs (e.g. zero served energy)."""


# ---------------------------------------------------------------------------
# Tier 2: numeric guards
# ---------------------------------------------------------------------------


def ensure_non_negative(value: float, name: str) -> None:
    if not math.isfinite(value):
        raise InvalidConfiguration(f"{name} must be a finite number, got {value}")
    if value < 0:
        raise InvalidConfiguration(f"{name} must be non-negative, got {value}")


def ensure_positive(value: float, name: str) -> None:
    if not math.isfinite(value):
        raise InvalidConfiguration(f"{name} must be a finite number, got {value}")
    if value <= 0:
        raise InvalidConfiguration(f"{name} must be positive, got {value}")


def ensure_project_terms(horizon: int, discount_rate: float) -> None:
    """Check the project horizon (whole years > 0) and discount rate (> -1)."""
    if isinstance(horizon, bool) or int(horizon) != horizon:
        raise InvalidConfiguration(
            f"horizon must be a whole number of years, got {horizon}"
        )
    if horizon <= 0:
        raise InvalidConfiguration(f"horizon must be positive, got {horizon}")
    if not math.isfinite(discount_rate) or discount_rate <= -1:
        raise InvalidConfiguration(
            f"discount_rate must be greater than -1, got {discount_rate}"
        )


# ---------------------------------------------------------------------------
# Tier 1: configuration records
# ---------------------------------------------------------------------------


class Project(BaseModel):
    """Financial frame of a microgrid study."""

    model_config = ConfigDict(frozen=True)

    lifetime: int = Field(gt=0, strict=True)  # Project horizon [yr]
    discount_rate: float = Field(gt=-1)
    timestep: float = Field(default=1.0, gt=0)  # Dispatch timestep [h]
    currency: str = "$"


class NonDispatchableSource(BaseModel):
    """Renewable source with a single price set and calendar lifetime.

    Prices are per unit of rated power (e.g. $/kW and $/kW/yr).
    """

    model_config = ConfigDict(frozen=True)

    power_rated: float = Field(ge=0)
    investment_price: float = Field(ge=0)
    om_price: float = Field(ge=0)
    lifetime: float = Field(gt=0)  # [yr]
    replacement_price_ratio: float = Field(default=1.0, ge=0)
    salvage_price_ratio: float = Field(default=1.0, ge=0)
    family: SourceFamily = SourceFamily.OTHER


class Photovoltaic(NonDispatchableSource):
    family: SourceFamily = SourceFamily.PHOTOVOLTAIC


class WindPower(NonDispatchableSource):
    family: SourceFamily = SourceFamily.WIND


class PVInverter(BaseModel):
    """PV plant with separately lived inverter (AC) and panels (DC).

    power_rated is the AC (inverter) rating; the panel array is rated at
    power_rated * ilr.
    """

    model_config = ConfigDict(frozen=True)

    power_rated: float = Field(ge=0)
    ilr: float = Field(gt=0)  # Inverter loading ratio (DC/AC)
    investment_price_ac: float = Field(ge=0)
    om_price_ac: float = Field(ge=0)
    lifetime_ac: float = Field(gt=0)
    investment_price_dc: float = Field(ge=0)
    om_price_dc: float = Field(ge=0)
    lifetime_dc: float = Field(gt=0)
    replacement_price_ratio: float = Field(default=1.0, ge=0)
    salvage_price_ratio: float = Field(default=1.0, ge=0)
    family: SourceFamily = SourceFamily.PHOTOVOLTAIC


class DieselGenerator(BaseModel):
    """Dispatchable generator whose lifetime is counted in operating hours."""

    model_config = ConfigDict(frozen=True)

    power_rated: float = Field(ge=0)
    fuel_price: float = Field(ge=0)  # [$/L]
    investment_price: float = Field(ge=0)  # [$/kW]
    om_price_hours: float = Field(ge=0)  # [$/kW/h]
    lifetime_hours: float = Field(gt=0)  # [h]
    replacement_price_ratio: float = Field(default=1.0, ge=0)
    salvage_price_ratio: float = Field(default=1.0, ge=0)


class Battery(BaseModel):
    """Energy storage limited by both calendar ageing and cycling."""

    model_config = ConfigDict(frozen=True)

    energy_rated: float = Field(ge=0)  # [kWh]
    investment_price: float = Field(ge=0)  # [$/kWh]
    om_price: float = Field(ge=0)  # [$/kWh/yr]
    lifetime_calendar: float = Field(gt=0)  # [yr]
    lifetime_cycles: float = Field(gt=0)  # [cycles]
    replacement_price_ratio: float = Field(default=1.0, ge=0)
    salvage_price_ratio: float = Field(default=1.0, ge=0)


class Microgrid(BaseModel):
    """Complete microgrid configuration: project, generator, storage, renewables."""

    model_config = ConfigDict(frozen=True)

    project: Project
    generator: DieselGenerator
    storage: Battery
    nondispatchables: list[NonDispatchableSource | PVInverter] = Field(
        default_factory=list
    )
