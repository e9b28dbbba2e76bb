"""
Core data models using Pydantic for validation and serialization.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class NetworkType(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def address_prefix(self) -> str:
        return "xch" if self == NetworkType.MAINNET else "txch"

    @property
    def currency_code(self) -> str:
        return "XCH" if self == NetworkType.MAINNET else "TXCH"


class SyncingStatus(str, Enum):
    """Wallet synchronisation state as reported by the backend."""

    SYNCED = "synced"
    SYNCING = "syncing"
    NOT_SYNCED = "not_synced"

    @classmethod
    def from_flags(cls, synced: bool, syncing: bool) -> SyncingStatus:
        if synced:
            return cls.SYNCED
        if syncing:
            return cls.SYNCING
        return cls.NOT_SYNCED


class Tier(str, Enum):
    """Fee speed class. The value doubles as the `fee_rate` form tag."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    CUSTOM = "custom"


STANDARD_TIERS: tuple[Tier, ...] = (Tier.SHORT, Tier.MEDIUM, Tier.LONG)


class FeeQuote(BaseModel):
    """A pre-built candidate transaction for one tier."""

    tx_id: str = Field(..., min_length=1)
    fee: int = Field(..., ge=0, description="Fee in mojos")
    fee_rate: int = Field(..., ge=0, description="Fee in mojos per vbyte")

    model_config = {"frozen": True}


class Addition(BaseModel):
    """Single transaction output requested from the backend."""

    puzzlehash: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0, description="Amount in mojos")


class FeeTierResponse(BaseModel):
    """Reply of the backend's fee-rate transaction builder."""

    success: bool = False
    error: str | None = None
    short: FeeQuote | None = None
    medium: FeeQuote | None = None
    long: FeeQuote | None = None
    custom: FeeQuote | None = None

    model_config = {"extra": "ignore"}


class FeeTierSet(BaseModel):
    """
    Quotes available for one set of send inputs.

    Always replaced as a whole when a newer refresh is accepted. A custom
    quote is only kept when a custom fee rate was part of the request.
    """

    quotes: dict[Tier, FeeQuote] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def from_response(cls, response: FeeTierResponse, custom_requested: bool) -> FeeTierSet:
        quotes: dict[Tier, FeeQuote] = {}
        for tier in STANDARD_TIERS:
            quote = getattr(response, tier.value)
            if quote is not None:
                quotes[tier] = quote
        if custom_requested and response.custom is not None:
            quotes[Tier.CUSTOM] = response.custom
        return cls(quotes=quotes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FeeTierSet:
        return cls(quotes={Tier(k): FeeQuote.model_validate(v) for k, v in data.items()})

    def get(self, tier: Tier | None) -> FeeQuote | None:
        if tier is None:
            return None
        return self.quotes.get(tier)

    @property
    def tiers(self) -> list[Tier]:
        return [tier for tier in Tier if tier in self.quotes]

    def __contains__(self, tier: object) -> bool:
        return tier in self.quotes

    def is_empty(self) -> bool:
        return not self.quotes


class SendResult(BaseModel):
    """Outcome of pushing a transaction through the wallet."""

    success: bool
    tx_id: str | None = None
    error: str | None = None

    model_config = {"extra": "ignore"}
