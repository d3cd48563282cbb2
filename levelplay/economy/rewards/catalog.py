from __future__ import annotations

from levelplay.economy.rewards.types import DifficultyRewardConfig, RewardTier
from levelplay.game.modes.catalog import Difficulty

_TIER_BOUNDS: tuple[tuple[int, int | None, str], ...] = (
    (0, 10, "Lightning Fast!"),
    (10, 20, "Very Fast!"),
    (20, 30, "Fast!"),
    (30, 60, "Quick!"),
    (60, 120, "Good!"),
    (120, 180, "Nice!"),
    (180, 240, "Okay!"),
    (240, 300, "Slow!"),
    (300, 600, "Very Slow!"),
    (600, 1200, "Too Slow!"),
    (1200, None, ""),
)


def _tiers(coins: tuple[int, ...], *, floor_label: str) -> tuple[RewardTier, ...]:
    return tuple(
        RewardTier(
            min_seconds=min_seconds,
            max_seconds=max_seconds,
            coins=tier_coins,
            label=label or floor_label,
        )
        for (min_seconds, max_seconds, label), tier_coins in zip(_TIER_BOUNDS, coins, strict=True)
    )


REWARD_CONFIG: dict[Difficulty, DifficultyRewardConfig] = {
    Difficulty.EASY: DifficultyRewardConfig(
        base_coins=10,
        tiers=_tiers((10, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0), floor_label="No Reward"),
    ),
    Difficulty.MEDIUM: DifficultyRewardConfig(
        base_coins=15,
        tiers=_tiers((15, 14, 13, 12, 11, 10, 9, 8, 7, 6, 5), floor_label="Minimum Reward"),
    ),
    Difficulty.HARD: DifficultyRewardConfig(
        base_coins=20,
        tiers=_tiers((20, 19, 18, 17, 16, 15, 14, 13, 12, 11, 10), floor_label="Minimum Reward"),
    ),
}


def get_reward_config(difficulty: Difficulty) -> DifficultyRewardConfig:
    return REWARD_CONFIG[difficulty]
