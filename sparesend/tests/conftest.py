"""
Test configuration for sparesend tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

import pytest
from sparecore.address import encode_puzzle_hash
from sparecore.models import Addition, FeeTierResponse, SendResult, SyncingStatus
from sparewallet.backends.base import WalletBackend

PUZZLE_HASH = bytes.fromhex("ab" * 32)


def make_response(prefix: str, custom: bool = False) -> FeeTierResponse:
    """A successful reply whose tx ids start with prefix."""
    data: dict[str, Any] = {
        "success": True,
        "short": {"tx_id": f"{prefix}-short", "fee": 7, "fee_rate": 3},
        "medium": {"tx_id": f"{prefix}-medium", "fee": 5, "fee_rate": 2},
        "long": {"tx_id": f"{prefix}-long", "fee": 2, "fee_rate": 1},
    }
    if custom:
        data["custom"] = {"tx_id": f"{prefix}-custom", "fee": 40, "fee_rate": 20}
    return FeeTierResponse.model_validate(data)


async def drain(turns: int = 5) -> None:
    """Let woken tasks run to completion."""
    for _ in range(turns):
        await asyncio.sleep(0)


class ControlledBackend(WalletBackend):
    """
    Wallet backend whose fee tier replies are released by the test.

    With `reply` set every request is answered immediately; otherwise each
    request waits on a future appended to `pending`.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.pending: list[asyncio.Future[FeeTierResponse]] = []
        self.reply: FeeTierResponse | Exception | None = None
        self.sync_status = SyncingStatus.SYNCED
        self.sent: list[tuple[str, tuple[Any, ...]]] = []

    async def request_fee_tiers(
        self,
        wallet_id: int,
        additions: Sequence[Addition],
        custom_fee_rate: int | None = None,
    ) -> FeeTierResponse:
        self.calls.append(
            {
                "wallet_id": wallet_id,
                "additions": list(additions),
                "custom_fee_rate": custom_fee_rate,
            }
        )
        if isinstance(self.reply, Exception):
            raise self.reply
        if self.reply is not None:
            return self.reply
        future: asyncio.Future[FeeTierResponse] = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future

    def resolve(self, index: int, reply: FeeTierResponse | Exception) -> None:
        future = self.pending[index]
        if isinstance(reply, Exception):
            future.set_exception(reply)
        else:
            future.set_result(reply)

    async def send_transaction(
        self, wallet_id: int, amount: int, fee: int, address: str
    ) -> SendResult:
        self.sent.append(("send_transaction", (wallet_id, amount, fee, address)))
        return SendResult(success=True, tx_id="custom-sent")

    async def send_fee_rate_transaction(self, tx_id: str) -> SendResult:
        self.sent.append(("send_fee_rate_transaction", (tx_id,)))
        return SendResult(success=True, tx_id=tx_id)

    async def get_sync_status(self, wallet_id: int) -> SyncingStatus:
        return self.sync_status


@pytest.fixture
def backend() -> ControlledBackend:
    return ControlledBackend()


@pytest.fixture
def valid_address() -> str:
    return encode_puzzle_hash(PUZZLE_HASH, "xch")


@pytest.fixture
def dialogs() -> list[str]:
    return []


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def settle():
    return drain
