from levelplay.economy.reset_cost.catalog import RESET_COST_TIERS
from levelplay.economy.reset_cost.rules import (
    describe_tier,
    find_reset_tier,
    price_reset,
    quote_reset,
    time_range_for_display,
)
from levelplay.economy.reset_cost.types import CostTier, ResetPurchaseResult, ResetPurchaseStatus, ResetQuote

__all__ = [
    "RESET_COST_TIERS",
    "CostTier",
    "ResetPurchaseResult",
    "ResetPurchaseStatus",
    "ResetQuote",
    "describe_tier",
    "find_reset_tier",
    "price_reset",
    "quote_reset",
    "time_range_for_display",
]
