"""
Tests for reward disbursement hand-off.
"""

from unittest.mock import AsyncMock

import pytest

from poke_rewards.services import DisbursementService, RewardEngine
from poke_rewards.utils.exceptions import StorageError


PAYOUT_ADDRESS = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


@pytest.fixture
def disburser() -> AsyncMock:
    """Mock transfer collaborator."""
    disburser = AsyncMock()
    disburser.disburse = AsyncMock(return_value="5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnb")
    return disburser


@pytest.fixture
def service(storage, disburser: AsyncMock) -> DisbursementService:
    """Disbursement service over in-memory storage."""
    return DisbursementService(storage, disburser)


class TestDisbursementService:
    """Tests for DisbursementService."""

    @pytest.mark.asyncio
    async def test_successful_disbursement(
        self, engine: RewardEngine, storage, service: DisbursementService, disburser: AsyncMock
    ) -> None:
        """Test settlement reference is recorded on the reward."""
        reward = (await engine.process_welcome_event("player1")).reward

        result = await service.disburse(reward, PAYOUT_ADDRESS)

        assert result.success is True
        assert result.settlement_reference == disburser.disburse.return_value
        disburser.disburse.assert_awaited_once_with(reward, PAYOUT_ADDRESS)

        stored = await storage.get_reward(reward.id)
        assert stored.settlement_reference == disburser.disburse.return_value

    @pytest.mark.asyncio
    async def test_transfer_failure_keeps_reward(
        self, engine: RewardEngine, storage, service: DisbursementService, disburser: AsyncMock
    ) -> None:
        """Test failed transfer leaves the reward recorded and unsettled."""
        reward = (await engine.process_welcome_event("player1")).reward
        disburser.disburse.side_effect = RuntimeError("RPC timeout")

        result = await service.disburse(reward, PAYOUT_ADDRESS)

        assert result.success is False
        assert result.error == "RPC timeout"
        stored = await storage.get_reward(reward.id)
        assert stored is not None
        assert stored.settlement_reference is None
        assert stored.claimed is False

    @pytest.mark.asyncio
    async def test_already_settled_skipped(
        self, engine: RewardEngine, storage, service: DisbursementService, disburser: AsyncMock
    ) -> None:
        """Test settled reward is not transferred again."""
        reward = (await engine.process_welcome_event("player1")).reward
        await storage.set_settlement_reference(reward.id, "sig-1")
        settled = await storage.get_reward(reward.id)

        result = await service.disburse(settled, PAYOUT_ADDRESS)

        assert result.success is False
        assert result.settlement_reference == "sig-1"
        disburser.disburse.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_failure_reported(
        self, engine: RewardEngine, disburser: AsyncMock
    ) -> None:
        """Test reference that cannot be stored is still returned."""
        reward = (await engine.process_welcome_event("player1")).reward
        failing_storage = AsyncMock()
        failing_storage.set_settlement_reference.side_effect = StorageError("database is locked")
        service = DisbursementService(failing_storage, disburser)

        result = await service.disburse(reward, PAYOUT_ADDRESS)

        assert result.success is False
        assert result.settlement_reference == disburser.disburse.return_value
        assert result.error == "database is locked"

    @pytest.mark.asyncio
    async def test_schedule_runs_in_background(
        self, engine: RewardEngine, storage, service: DisbursementService
    ) -> None:
        """Test scheduled disbursements complete after wait_pending."""
        first = (await engine.process_welcome_event("player1")).reward
        second = (await engine.process_welcome_event("player2")).reward

        task = service.schedule(first, PAYOUT_ADDRESS)
        service.schedule(second, PAYOUT_ADDRESS)
        results = await service.wait_pending()

        assert len(results) == 2
        assert all(r.success for r in results)
        assert task.done()
        assert (await storage.get_reward(second.id)).settlement_reference is not None

    @pytest.mark.asyncio
    async def test_wait_pending_empty(self, service: DisbursementService) -> None:
        """Test nothing to wait for."""
        assert await service.wait_pending() == []
