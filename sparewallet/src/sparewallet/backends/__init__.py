"""
Wallet backend implementations.

Available backends:
- WalletRpcBackend: wallet daemon over HTTPS JSON RPC
"""

from sparewallet.backends.base import WalletBackend, WalletRpcError
from sparewallet.backends.wallet_rpc import WalletRpcBackend

__all__ = [
    "WalletBackend",
    "WalletRpcBackend",
    "WalletRpcError",
]
