"""
Reward disbursement hand-off.

Sends recorded rewards to the on-chain transfer collaborator. The reward
record always exists before a transfer is attempted, and a failed
transfer never removes or alters it beyond leaving it unsettled.
"""

import asyncio
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from loguru import logger

from poke_rewards.models.reward import RewardRecord
from poke_rewards.repositories.base import RewardStorage
from poke_rewards.utils.exceptions import StorageError
from poke_rewards.utils.security import mask_address


class Disburser(Protocol):
    """On-chain transfer collaborator."""

    async def disburse(self, reward: RewardRecord, payout_address: str) -> str:
        """
        Transfer a reward to a payout address.

        Returns:
            Settlement reference (e.g. transaction signature)
        """
        ...


@dataclass
class DisbursementResult:
    """Result of one disbursement attempt."""

    reward_id: UUID
    success: bool
    settlement_reference: str | None = None
    error: str | None = None


class DisbursementService:
    """Runs disbursements for recorded rewards."""

    def __init__(self, storage: RewardStorage, disburser: Disburser) -> None:
        """
        Initialize disbursement service.

        Args:
            storage: Reward storage, used to record settlement references
            disburser: Transfer collaborator
        """
        self.storage = storage
        self.disburser = disburser
        self._pending: set[asyncio.Task[DisbursementResult]] = set()

    async def disburse(self, reward: RewardRecord, payout_address: str) -> DisbursementResult:
        """
        Transfer one reward and record its settlement reference.

        Transfer failures are reported in the result, not raised.

        Args:
            reward: Recorded reward
            payout_address: Player payout address

        Returns:
            DisbursementResult
        """
        result = DisbursementResult(reward_id=reward.id, success=False)

        if reward.settlement_reference is not None:
            result.error = "Reward already settled"
            result.settlement_reference = reward.settlement_reference
            return result

        try:
            reference = await self.disburser.disburse(reward, payout_address)
        except Exception as exc:
            logger.error(
                f"Disbursement failed for reward {reward.id} "
                f"to {mask_address(payout_address)}: {exc}"
            )
            result.error = str(exc)
            return result

        try:
            await self.storage.set_settlement_reference(reward.id, reference)
        except StorageError as exc:
            logger.error(
                "Settlement reference not recorded",
                extra={
                    "reward_id": str(reward.id),
                    "settlement_reference": reference,
                    "error": str(exc),
                },
            )
            result.settlement_reference = reference
            result.error = str(exc)
            return result

        logger.info(
            "Reward disbursed",
            extra={
                "reward_id": str(reward.id),
                "player_id": reward.player_id,
                "address": mask_address(payout_address),
                "settlement_reference": reference,
            },
        )
        result.success = True
        result.settlement_reference = reference
        return result

    def schedule(self, reward: RewardRecord, payout_address: str) -> "asyncio.Task[DisbursementResult]":
        """
        Start a disbursement in the background and return immediately.

        Must be called from a running event loop.

        Returns:
            Task resolving to the DisbursementResult
        """
        task = asyncio.create_task(self.disburse(reward, payout_address))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def wait_pending(self) -> list[DisbursementResult]:
        """Wait for all scheduled disbursements to finish."""
        if not self._pending:
            return []
        return list(await asyncio.gather(*self._pending))
