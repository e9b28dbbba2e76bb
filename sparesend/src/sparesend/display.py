"""
Human-readable rendering of fee tiers for the send form and the CLI.
"""

from __future__ import annotations

from sparecore.constants import (
    LONG_TARGET_BLOCKS,
    MEDIUM_TARGET_BLOCKS,
    SECONDS_PER_BLOCK,
    SHORT_TARGET_BLOCKS,
)
from sparecore.models import FeeQuote, FeeTierSet, Tier
from sparecore.units import coin_to_mojo, mojo_to_coin_string

TIER_LABELS: dict[Tier, str] = {
    Tier.SHORT: "Fast ~ 3 minutes",
    Tier.MEDIUM: "Medium ~ 20 minutes",
    Tier.LONG: "Slow ~ 3 hours",
    Tier.CUSTOM: "Custom Fee Rate",
}

TARGET_BLOCKS: dict[Tier, int] = {
    Tier.SHORT: SHORT_TARGET_BLOCKS,
    Tier.MEDIUM: MEDIUM_TARGET_BLOCKS,
    Tier.LONG: LONG_TARGET_BLOCKS,
}


def estimated_seconds(tier: Tier) -> float | None:
    """Expected confirmation time, None for custom."""
    blocks = TARGET_BLOCKS.get(tier)
    if blocks is None:
        return None
    return blocks * SECONDS_PER_BLOCK


def format_fee_quote(
    quote: FeeQuote | None,
    currency_code: str,
    loading: bool = False,
    disabled: bool = False,
) -> str:
    if loading:
        return "Loading..."
    if quote is None or disabled:
        return "Not Available"
    unit = "mojo" if quote.fee_rate == 1 else "mojos"
    return (
        f"{mojo_to_coin_string(quote.fee)} {currency_code} ({quote.fee_rate} {unit}/vbyte)"
    )


def quote_fee(fee_tiers: FeeTierSet | None, tier: Tier | None) -> int:
    """Fee in mojos of the quote for tier, 0 when there is none."""
    if fee_tiers is None:
        return 0
    quote = fee_tiers.get(tier)
    return quote.fee if quote else 0


def total_spend(amount: str, fee_tiers: FeeTierSet | None, tier: Tier | None) -> int:
    try:
        amount_mojos = coin_to_mojo(amount)
    except ValueError:
        amount_mojos = 0
    return amount_mojos + quote_fee(fee_tiers, tier)


def format_total_spend(
    amount: str, fee_tiers: FeeTierSet | None, tier: Tier | None, currency_code: str
) -> str:
    total = mojo_to_coin_string(total_spend(amount, fee_tiers, tier))
    fee = mojo_to_coin_string(quote_fee(fee_tiers, tier))
    return (
        f"Total Spend: {total} {currency_code} "
        f"(including {fee} {currency_code} of transaction fees)"
    )


def info_message(address: str, is_synced: bool) -> str | None:
    if not is_synced:
        return "You need to wait for wallet synchronisation"
    if not address:
        return "You need to enter address first"
    return None
