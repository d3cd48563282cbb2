from levelplay.economy.reset_cost import price_reset, quote_reset
from levelplay.economy.rewards import calculate_reward

__all__ = [
    "calculate_reward",
    "price_reset",
    "quote_reset",
]
