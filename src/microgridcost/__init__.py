import os as _os
import warnings

# Default to CPU — suppresses "NVIDIA GPU may be present" warning.
# Users with CUDA-enabled jaxlib can set JAX_PLATFORMS=cuda to override.
_os.environ.setdefault("JAX_PLATFORMS", "cpu")

import jax as _jax

# Cent-level results on multi-million NPCs need double precision
_jax.config.update("jax_enable_x64", True)

from dataclasses import dataclass

from microgridcost.model import economics, lcoe_sensitivity
from microgridcost.types import (
    FAMILY_TO_CATEGORY as FAMILY_TO_CATEGORY,
)
from microgridcost.types import (
    ComponentCosts as ComponentCosts,
)
from microgridcost.types import (
    CostCategory as CostCategory,
)
from microgridcost.types import (
    MicrogridCosts,
    OperationStats,
)
from microgridcost.types import (
    SourceFamily as SourceFamily,
)
from microgridcost.validation import (
    Battery as Battery,
)
from microgridcost.validation import (
    DegenerateComputation,
    Microgrid,
)
from microgridcost.validation import (
    DieselGenerator as DieselGenerator,
)
from microgridcost.validation import (
    InvalidConfiguration as InvalidConfiguration,
)
from microgridcost.validation import (
    NonDispatchableSource as NonDispatchableSource,
)
from microgridcost.validation import (
    Photovoltaic as Photovoltaic,
)
from microgridcost.validation import (
    Project as Project,
)
from microgridcost.validation import (
    PVInverter as PVInverter,
)
from microgridcost.validation import (
    WindPower as WindPower,
)


@dataclass
class ComparisonResult:
    label: str
    lcoe: float
    costs: MicrogridCosts


def compare_all(
    candidates: list[tuple[str, Microgrid, OperationStats]],
) -> list[ComparisonResult]:
    """Evaluate labelled (microgrid, operation) pairs, rank by LCOE."""
    results = []
    for label, mg, oper_stats in candidates:
        try:
            costs = economics(mg, oper_stats)
        except DegenerateComputation as exc:
            warnings.warn(f"Skipping {label}: {exc}", stacklevel=2)
            continue
        results.append(ComparisonResult(label=label, lcoe=costs.lcoe, costs=costs))

    return sorted(results, key=lambda r: r.lcoe)
