"""Example: reference microgrid — cost breakdown and LCOE sensitivity."""

from microgridcost import CostCategory, economics, lcoe_sensitivity
from microgridcost.defaults import load_typical_microgrid, load_typical_operation

mg = load_typical_microgrid()
oper_stats = load_typical_operation()
costs = economics(mg, oper_stats)
cur = costs.currency

print(f"Reference microgrid — {mg.project.lifetime} yr, "
      f"{mg.project.discount_rate:.1%} discount rate")
print(f"  NPC             : {costs.npc / 1e6:10.3f} M{cur}")
print(f"  Annualized cost : {costs.annualized_cost / 1e3:10.1f} k{cur}/yr")
print(f"  COE             : {costs.coe:10.4f} {cur}/kWh")
print(f"  LCOE            : {costs.lcoe:10.4f} {cur}/kWh")

print(f"\n{'Category':<14} {'Total':>10} {'Invest':>10} {'Replace':>10} "
      f"{'O&M':>10} {'Fuel':>10} {'Salvage':>10}")
print("-" * 80)
for cat in CostCategory:
    c = costs.category(cat)
    if c.total == 0:
        continue
    print(f"{cat.value:<14} {c.total / 1e3:>10.1f} {c.investment / 1e3:>10.1f} "
          f"{c.replacement / 1e3:>10.1f} {c.om / 1e3:>10.1f} "
          f"{c.fuel / 1e3:>10.1f} {c.salvage / 1e3:>10.1f}")
print(f"(k{cur}, salvage is a credit)")

# ── Sensitivity: which lever moves LCOE the most? ─────────────────
sens = lcoe_sensitivity(mg, oper_stats)
print("\nLCOE sensitivity (elasticity, % LCOE / % param)")
for key, d_lcoe in sorted(sens.items(), key=lambda kv: -abs(kv[1])):
    record, name = key.split(".")
    value = getattr(getattr(mg, record), name)
    print(f"  {key:<34}: {d_lcoe * value / costs.lcoe:+.4f}")
