from __future__ import annotations

import structlog

from levelplay.economy.rewards.catalog import get_reward_config
from levelplay.economy.rewards.types import RewardBreakdown, RewardResult, RewardTier
from levelplay.game.modes.catalog import Difficulty
from levelplay.game.modes.rules import normalize_difficulty

logger = structlog.get_logger("levelplay.economy.rewards")

NO_REWARD = RewardResult(coins=0, label="No Reward", tier=None, base_coins=0)


def calculate_reward(
    difficulty: str | Difficulty | None,
    time_spent_seconds: float,
    *,
    is_correct: bool,
) -> RewardResult:
    if not is_correct:
        return NO_REWARD

    normalized = normalize_difficulty(difficulty)
    if normalized is None:
        logger.warning("reward_unknown_difficulty", difficulty=difficulty, fallback=Difficulty.EASY.value)
        normalized = Difficulty.EASY

    config = get_reward_config(normalized)
    seconds = max(0.0, time_spent_seconds)
    tier = next((candidate for candidate in config.tiers if candidate.contains(seconds)), config.tiers[-1])
    return RewardResult(coins=tier.coins, label=tier.label, tier=tier, base_coins=config.base_coins)


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f}s"
    if seconds < 3600:
        return f"{seconds / 60:.1f}m"
    return f"{seconds / 3600:.1f}h"


def describe_reward_tier(tier: RewardTier | None) -> str:
    if tier is None:
        return "No Tier"
    if tier.max_seconds is None:
        return f"{format_duration(tier.min_seconds)}+"
    return f"{format_duration(tier.min_seconds)}-{format_duration(tier.max_seconds)}"


def reward_breakdown(
    difficulty: str | Difficulty,
    time_spent_seconds: float,
    *,
    is_correct: bool,
) -> RewardBreakdown:
    reward = calculate_reward(difficulty, time_spent_seconds, is_correct=is_correct)
    difficulty_name = difficulty.value if isinstance(difficulty, Difficulty) else str(difficulty)
    return RewardBreakdown(
        coins=reward.coins,
        label=reward.label,
        difficulty=difficulty_name.capitalize(),
        time_spent=format_duration(time_spent_seconds),
        tier=describe_reward_tier(reward.tier),
    )
