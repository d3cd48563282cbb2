from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class CostTier:
    lower_bound_seconds: int
    upper_bound_seconds: int | None
    coin_cost: int
    label: str
    time_range: str


@dataclass(frozen=True, slots=True)
class ResetQuote:
    seconds_spent: int
    coin_cost: int
    label: str
    time_range: str


class ResetPurchaseStatus(str, Enum):
    RESTARTED = "restarted"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    RESTART_BUSY = "restart_busy"


@dataclass(frozen=True, slots=True)
class ResetPurchaseResult:
    status: ResetPurchaseStatus
    quote: ResetQuote
    charged: bool
    balance_after: int | None = None
