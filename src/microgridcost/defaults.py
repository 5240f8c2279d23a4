"""Load the reference microgrid configuration from YAML."""

import yaml
from pathlib import Path

from microgridcost.types import OperationStats
from microgridcost.validation import (
    Battery,
    DieselGenerator,
    Microgrid,
    NonDispatchableSource,
    Photovoltaic,
    Project,
    PVInverter,
    WindPower,
)

_DATA_DIR = Path(__file__).parent / "data" / "defaults"

SOURCE_TYPES = {
    "photovoltaic": Photovoltaic,
    "wind": WindPower,
    "pv_inverter": PVInverter,
    "other": NonDispatchableSource,
}


def _load_yaml(path: Path = None) -> dict:
    if path is None:
        path = _DATA_DIR / "typical_microgrid.yaml"
    with open(path) as f:
        return yaml.safe_load(f)


def _known_fields(model_cls, data: dict) -> dict:
    valid_fields = set(model_cls.model_fields)
    return {k: v for k, v in data.items() if k in valid_fields}


def build_source(data: dict):
    """Build a non-dispatchable source from a mapping with a `type` key."""
    kind = data.get("type", "other")
    if kind not in SOURCE_TYPES:
        raise ValueError(
            f"Unknown source type: {kind} (expected one of {', '.join(SOURCE_TYPES)})"
        )
    model_cls = SOURCE_TYPES[kind]
    return model_cls(**_known_fields(model_cls, data))


def load_typical_microgrid(discount_rate: float = None, path: Path = None) -> Microgrid:
    """Load the reference microgrid, optionally overriding its discount rate."""
    data = _load_yaml(path)
    project_data = _known_fields(Project, data["project"])
    if discount_rate is not None:
        project_data["discount_rate"] = discount_rate
    return Microgrid(
        project=Project(**project_data),
        generator=DieselGenerator(**_known_fields(DieselGenerator, data["generator"])),
        storage=Battery(**_known_fields(Battery, data["storage"])),
        nondispatchables=[build_source(s) for s in data.get("nondispatchables") or []],
    )


def load_typical_operation(path: Path = None) -> OperationStats:
    """Load the yearly operation snapshot that goes with the reference microgrid."""
    data = _load_yaml(path)
    return OperationStats.from_mapping(data["operation"])
