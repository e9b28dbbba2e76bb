"""
Base wallet backend interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from sparecore.models import Addition, FeeTierResponse, SendResult, SyncingStatus


class WalletRpcError(Exception):
    """Raised when the wallet reports a failed command."""


class WalletBackend(ABC):
    """
    Abstract wallet backend interface.

    The send flow only needs the backend to pre-build fee-tier
    transactions, push a chosen one, and report sync state.
    """

    @abstractmethod
    async def request_fee_tiers(
        self,
        wallet_id: int,
        additions: Sequence[Addition],
        custom_fee_rate: int | None = None,
    ) -> FeeTierResponse:
        """Build short/medium/long (and optionally custom) candidate transactions.

        A reply with success=False is returned, not raised.
        """

    @abstractmethod
    async def send_transaction(
        self, wallet_id: int, amount: int, fee: int, address: str
    ) -> SendResult:
        """Build and push a transaction with an explicit fee in mojos"""

    @abstractmethod
    async def send_fee_rate_transaction(self, tx_id: str) -> SendResult:
        """Push a transaction previously built by request_fee_tiers"""

    @abstractmethod
    async def get_sync_status(self, wallet_id: int) -> SyncingStatus:
        """Get wallet synchronisation state"""

    async def close(self) -> None:
        """Close backend connection"""
        pass
