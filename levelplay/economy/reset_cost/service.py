from __future__ import annotations

from typing import Protocol

import structlog

from levelplay.economy.reset_cost.rules import quote_reset
from levelplay.economy.reset_cost.types import ResetPurchaseResult, ResetPurchaseStatus, ResetQuote
from levelplay.ports import CoinLedger, DebitResult

logger = structlog.get_logger("levelplay.economy.reset_cost")


class _RestartableSession(Protocol):
    @property
    def time_elapsed(self) -> int: ...

    @property
    def restart_in_progress(self) -> bool: ...

    async def restart(self) -> bool: ...


class ResetTimerService:
    @staticmethod
    def quote(session: _RestartableSession) -> ResetQuote:
        return quote_reset(session.time_elapsed)

    @staticmethod
    async def purchase_reset(session: _RestartableSession, ledger: CoinLedger) -> ResetPurchaseResult:
        quote = ResetTimerService.quote(session)
        if session.restart_in_progress:
            logger.info("reset_purchase_skipped_restart_busy", coin_cost=quote.coin_cost)
            return ResetPurchaseResult(status=ResetPurchaseStatus.RESTART_BUSY, quote=quote, charged=False)

        debit_result = await ledger.debit(quote.coin_cost)
        if debit_result != DebitResult.SUCCESS:
            logger.info(
                "reset_purchase_insufficient_funds",
                coin_cost=quote.coin_cost,
                seconds_spent=quote.seconds_spent,
            )
            return ResetPurchaseResult(
                status=ResetPurchaseStatus.INSUFFICIENT_FUNDS,
                quote=quote,
                charged=False,
                balance_after=await ledger.get_balance(),
            )

        restarted = await session.restart()
        if not restarted:
            # another restart won the lock after the debit went through
            await ledger.credit(quote.coin_cost)
            logger.info("reset_purchase_refunded_restart_busy", coin_cost=quote.coin_cost)
            return ResetPurchaseResult(
                status=ResetPurchaseStatus.RESTART_BUSY,
                quote=quote,
                charged=False,
                balance_after=await ledger.get_balance(),
            )

        logger.info(
            "reset_purchase_completed",
            coin_cost=quote.coin_cost,
            seconds_spent=quote.seconds_spent,
            tier=quote.time_range,
        )
        return ResetPurchaseResult(
            status=ResetPurchaseStatus.RESTARTED,
            quote=quote,
            charged=True,
            balance_after=await ledger.get_balance(),
        )
