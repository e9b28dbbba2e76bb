"""
Wallet daemon RPC backend.

Each command is a POST of a JSON object to <rpc_url>/<command>. The daemon
authenticates clients by TLS certificate.
"""

from __future__ import annotations

import os
import ssl
from collections.abc import Sequence
from typing import Any

import httpx
from loguru import logger
from sparecore.constants import DEFAULT_WALLET_RPC_URL
from sparecore.models import Addition, FeeTierResponse, SendResult, SyncingStatus

from sparewallet.backends.base import WalletBackend, WalletRpcError

# Timeout for regular RPC calls (seconds)
DEFAULT_RPC_TIMEOUT = 30.0

# Environment variable to enable sensitive logging (addresses, puzzle hashes)
SENSITIVE_LOGGING = os.environ.get("SENSITIVE_LOGGING", "").lower() in ("1", "true", "yes")


def _tls_context(
    cert_path: str | None, key_path: str | None, verify: bool
) -> ssl.SSLContext | bool:
    """Build the client TLS context used for certificate authentication."""
    if not (cert_path and key_path):
        return verify
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    context.load_cert_chain(cert_path, key_path)
    return context


class WalletRpcBackend(WalletBackend):
    """
    Wallet backend talking to the wallet daemon RPC server.
    """

    def __init__(
        self,
        rpc_url: str = DEFAULT_WALLET_RPC_URL,
        cert_path: str | None = None,
        key_path: str | None = None,
        verify: bool = False,
        timeout: float = DEFAULT_RPC_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.rpc_url = rpc_url.rstrip("/")
        self.client = httpx.AsyncClient(
            timeout=timeout,
            verify=_tls_context(cert_path, key_path, verify),
            transport=transport,
        )

    async def _rpc_call(
        self, command: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Make an RPC call to the wallet daemon.

        Args:
            command: RPC command name
            payload: Command arguments

        Returns:
            Decoded JSON reply

        Raises:
            httpx.HTTPError: On connection/timeout/status errors
            WalletRpcError: On a reply that is not a JSON object
        """
        url = f"{self.rpc_url}/{command}"
        try:
            response = await self.client.post(url, json=payload or {})
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"RPC call timed out: {command} - {e}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"RPC call failed: {command} - {e}")
            raise
        except ValueError as e:
            logger.error(f"RPC call returned invalid JSON: {command} - {e}")
            raise WalletRpcError(f"Invalid reply to {command}") from e

        if not isinstance(data, dict):
            raise WalletRpcError(f"Unexpected reply to {command}: {data!r}")
        return data

    @staticmethod
    def _check_success(command: str, data: dict[str, Any]) -> None:
        if data.get("success") is not True:
            error = data.get("error") or f"{command} failed"
            raise WalletRpcError(error)

    async def request_fee_tiers(
        self,
        wallet_id: int,
        additions: Sequence[Addition],
        custom_fee_rate: int | None = None,
    ) -> FeeTierResponse:
        payload: dict[str, Any] = {
            "wallet_id": wallet_id,
            "additions": [addition.model_dump() for addition in additions],
        }
        if custom_fee_rate is not None:
            payload["fee_rate"] = custom_fee_rate

        if SENSITIVE_LOGGING:
            logger.debug(f"create_fee_rate_transactions payload: {payload}")

        data = await self._rpc_call("create_fee_rate_transactions", payload)
        return FeeTierResponse.model_validate(data)

    async def send_transaction(
        self, wallet_id: int, amount: int, fee: int, address: str
    ) -> SendResult:
        data = await self._rpc_call(
            "send_transaction",
            {"wallet_id": wallet_id, "amount": amount, "fee": fee, "address": address},
        )
        self._check_success("send_transaction", data)
        return SendResult(success=True, tx_id=data.get("transaction_id"))

    async def send_fee_rate_transaction(self, tx_id: str) -> SendResult:
        data = await self._rpc_call("send_fee_rate_transaction", {"tx_id": tx_id})
        self._check_success("send_fee_rate_transaction", data)
        return SendResult(success=True, tx_id=data.get("transaction_id", tx_id))

    async def get_sync_status(self, wallet_id: int) -> SyncingStatus:
        data = await self._rpc_call("get_sync_status", {"wallet_id": wallet_id})
        self._check_success("get_sync_status", data)
        return SyncingStatus.from_flags(
            bool(data.get("synced", False)), bool(data.get("syncing", False))
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self.client.aclose()
