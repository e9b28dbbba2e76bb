"""
Fee tier selection and transaction binding.

The bound tx_id is always derived from the selected tier and the latest
accepted FeeTierSet; it is never set directly by callers.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger
from sparecore.models import FeeTierSet, Tier


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of the selection. selected_tier None means nothing selected."""

    selected_tier: Tier | None = None
    bound_tx_id: str = ""


class TierSelectionStateMachine:
    """
    States: nothing selected (initial), short, medium, long, custom.

    There is no automatic transition back to nothing selected; only reset()
    does that.
    """

    def __init__(self) -> None:
        self.selected_tier: Tier | None = None
        self.bound_tx_id: str = ""
        self._fee_tiers: FeeTierSet | None = None

    @property
    def state(self) -> SelectionState:
        return SelectionState(selected_tier=self.selected_tier, bound_tx_id=self.bound_tx_id)

    @property
    def fee_tiers(self) -> FeeTierSet | None:
        return self._fee_tiers

    @staticmethod
    def can_select(tier: Tier, address: str, is_synced: bool) -> bool:
        # Custom may be picked before any quote exists so a fee can be typed first
        if tier == Tier.CUSTOM:
            return True
        return is_synced and bool(address)

    def select(self, tier: Tier, *, address: str, is_synced: bool) -> bool:
        """
        Select a tier and rebind from the quotes already held.

        Returns:
            False if the guard rejected the transition (state unchanged)
        """
        if not self.can_select(tier, address, is_synced):
            logger.debug(f"Tier {tier.value} not selectable (synced={is_synced})")
            return False

        self.selected_tier = tier
        self.bound_tx_id = ""
        self._derive()
        return True

    def rebind(self, fee_tiers: FeeTierSet | None) -> None:
        """Take a newly accepted (or cleared) set and re-derive the binding."""
        self._fee_tiers = fee_tiers
        self.bound_tx_id = ""
        self._derive()

    def clear_binding(self) -> None:
        """Drop the held set and the bound tx_id; selection is kept."""
        self._fee_tiers = None
        self.bound_tx_id = ""

    def reset(self) -> None:
        self.selected_tier = None
        self.clear_binding()

    def _derive(self) -> None:
        quote = self._fee_tiers.get(self.selected_tier) if self._fee_tiers else None
        if quote is not None:
            self.bound_tx_id = quote.tx_id
            logger.debug(f"Bound {self.selected_tier.value} tier to tx {quote.tx_id}")
