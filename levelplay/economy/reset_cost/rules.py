from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence

from levelplay.economy.reset_cost.catalog import RESET_COST_TIERS
from levelplay.economy.reset_cost.types import CostTier, ResetQuote


def find_reset_tier(seconds_spent: float, tiers: Sequence[CostTier] = RESET_COST_TIERS) -> CostTier:
    """Return the first tier whose upper bound is >= ``seconds_spent``."""
    seconds = max(0.0, seconds_spent)
    bounded = [tier.upper_bound_seconds for tier in tiers if tier.upper_bound_seconds is not None]
    position = bisect_left(bounded, seconds)
    if position < len(bounded):
        return tiers[position]
    return tiers[-1]


def price_reset(seconds_spent: float) -> int:
    return find_reset_tier(seconds_spent).coin_cost


def describe_tier(seconds_spent: float) -> str:
    return find_reset_tier(seconds_spent).label


def time_range_for_display(seconds_spent: float) -> str:
    return find_reset_tier(seconds_spent).time_range


def quote_reset(seconds_spent: int) -> ResetQuote:
    tier = find_reset_tier(seconds_spent)
    return ResetQuote(
        seconds_spent=max(0, seconds_spent),
        coin_cost=tier.coin_cost,
        label=tier.label,
        time_range=tier.time_range,
    )
