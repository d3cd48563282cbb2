from levelplay.economy.rewards.catalog import REWARD_CONFIG, get_reward_config
from levelplay.economy.rewards.rules import calculate_reward, describe_reward_tier, reward_breakdown
from levelplay.economy.rewards.types import RewardBreakdown, RewardResult, RewardTier

__all__ = [
    "REWARD_CONFIG",
    "RewardBreakdown",
    "RewardResult",
    "RewardTier",
    "calculate_reward",
    "describe_reward_tier",
    "get_reward_config",
    "reward_breakdown",
]
