"""
sparecore - Shared building blocks for the spare-send components

Provides constants, data models, unit conversion and the address codec.
"""

__version__ = "0.3.0"

from sparecore.address import (
    AddressDecodeError,
    InvalidAddressError,
    address_to_puzzle_hash,
    decode_puzzle_hash,
    encode_puzzle_hash,
    is_foreign_asset_address,
)
from sparecore.constants import MOJO_PER_COIN
from sparecore.models import (
    STANDARD_TIERS,
    Addition,
    FeeQuote,
    FeeTierResponse,
    FeeTierSet,
    NetworkType,
    SendResult,
    SyncingStatus,
    Tier,
)
from sparecore.units import coin_to_mojo, is_numeric, mojo_to_coin_string

__all__ = [
    "Addition",
    "AddressDecodeError",
    "FeeQuote",
    "FeeTierResponse",
    "FeeTierSet",
    "InvalidAddressError",
    "MOJO_PER_COIN",
    "NetworkType",
    "STANDARD_TIERS",
    "SendResult",
    "SyncingStatus",
    "Tier",
    "address_to_puzzle_hash",
    "coin_to_mojo",
    "decode_puzzle_hash",
    "encode_puzzle_hash",
    "is_foreign_asset_address",
    "is_numeric",
    "mojo_to_coin_string",
]
