"""Example: Parameter sweeps — battery size and fuel price vs LCOE."""

from microgridcost import compare_all, economics
from microgridcost.defaults import load_typical_microgrid, load_typical_operation

mg = load_typical_microgrid()
oper_stats = load_typical_operation()
base_lcoe = economics(mg, oper_stats).lcoe

# ── Fuel price sweep (0.5 → 2.0 $/L) ─────────────────────────────
fuel_prices = [0.5 + i * 0.25 for i in range(7)]
print("Fuel Price Sweep — reference microgrid")
print(f"{'Fuel price':>14} {'LCOE':>10} {'Δ LCOE':>10}")
print(f"{'$/L':>14} {'$/kWh':>10} {'$/kWh':>10}")
print("-" * 36)
for price in fuel_prices:
    gen = mg.generator.model_copy(update={"fuel_price": price})
    lcoe = economics(mg.model_copy(update={"generator": gen}), oper_stats).lcoe
    print(f"{price:>14.2f} {lcoe:>10.4f} {lcoe - base_lcoe:>+10.4f}")

# ── Discount rate ranking ────────────────────────────────────────
# Operation is held fixed: only the financial frame changes.
candidates = [
    (f"r = {rate:.0%}", load_typical_microgrid(discount_rate=rate), oper_stats)
    for rate in (0.0, 0.03, 0.05, 0.08, 0.10)
]
print("\nDiscount Rate Ranking (by LCOE)")
for r in compare_all(candidates):
    print(f"  {r.label:<8} LCOE {r.lcoe:.4f} $/kWh   NPC {r.costs.npc / 1e6:.3f} M$")
