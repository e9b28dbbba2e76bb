"""
Chia-style wallet constants shared by the send components.

Amounts on the wire are always integers in mojos, the smallest currency unit.
"""

from __future__ import annotations

# 1 coin = 10^12 mojos
MOJO_PER_COIN = 1_000_000_000_000
MOJO_DECIMALS = 12

# Wallet amounts and fees are uint64 mojos
MAX_MOJOS = 2**64 - 1

# Raw address forms passed through without bech32m decoding
ADDRESS_URI_PREFIX = "chia_addr://"
HEX_PREFIXES = ("0x", "0X")

# Substring that marks an address from a coloured-coin (CAT) namespace
FOREIGN_ASSET_MARKER = "colour"

# Puzzle hashes are sha256 tree hashes
PUZZLE_HASH_LENGTH = 32

# 4608 blocks per day
SECONDS_PER_BLOCK = (24 * 60 * 60) / 4608  # 18.75 seconds

# Confirmation targets behind the three standard fee tiers
SHORT_TARGET_BLOCKS = 10  # ~3 minutes
MEDIUM_TARGET_BLOCKS = 60  # ~20 minutes
LONG_TARGET_BLOCKS = 600  # ~3 hours

# Default wallet RPC endpoint of a local full node install
DEFAULT_WALLET_RPC_URL = "https://localhost:9256"
