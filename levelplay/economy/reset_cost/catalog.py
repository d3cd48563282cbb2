from __future__ import annotations

from levelplay.economy.reset_cost.types import CostTier

# Ordered, non-overlapping; the last tier has no upper bound.
RESET_COST_TIERS: tuple[CostTier, ...] = (
    CostTier(0, 30, 20, "Quick reset (under 30 seconds)", "0-30s"),
    CostTier(30, 60, 40, "Short session (30s - 1 minute)", "30s-1m"),
    CostTier(60, 120, 55, "Medium session (1-2 minutes)", "1-2m"),
    CostTier(120, 300, 70, "Long session (2-5 minutes)", "2-5m"),
    CostTier(300, 600, 90, "Extended session (5-10 minutes)", "5-10m"),
    CostTier(600, 1200, 100, "Very long session (10-20 minutes)", "10-20m"),
    CostTier(1200, None, 110, "Marathon session (over 20 minutes)", "20m+"),
)
