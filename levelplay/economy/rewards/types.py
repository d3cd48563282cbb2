from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RewardTier:
    min_seconds: int
    max_seconds: int | None
    coins: int
    label: str

    def contains(self, seconds: float) -> bool:
        if seconds < self.min_seconds:
            return False
        return self.max_seconds is None or seconds < self.max_seconds


@dataclass(frozen=True, slots=True)
class DifficultyRewardConfig:
    base_coins: int
    tiers: tuple[RewardTier, ...]


@dataclass(frozen=True, slots=True)
class RewardResult:
    coins: int
    label: str
    tier: RewardTier | None
    base_coins: int


@dataclass(frozen=True, slots=True)
class RewardBreakdown:
    coins: int
    label: str
    difficulty: str
    time_spent: str
    tier: str
