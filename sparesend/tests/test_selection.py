"""
Tests for TierSelectionStateMachine.
"""

from __future__ import annotations

from sparecore.models import FeeTierSet, Tier

from sparesend.selection import SelectionState, TierSelectionStateMachine


def _fee_tiers(response_factory, custom: bool = False) -> FeeTierSet:
    return FeeTierSet.from_response(response_factory("g1", custom=custom), custom_requested=custom)


def test_initial_state() -> None:
    machine = TierSelectionStateMachine()
    assert machine.state == SelectionState(selected_tier=None, bound_tx_id="")


def test_standard_tier_needs_address_and_sync() -> None:
    machine = TierSelectionStateMachine()
    assert not machine.select(Tier.SHORT, address="", is_synced=True)
    assert not machine.select(Tier.SHORT, address="xch1abc", is_synced=False)
    assert machine.selected_tier is None
    assert machine.select(Tier.SHORT, address="xch1abc", is_synced=True)
    assert machine.selected_tier == Tier.SHORT


def test_custom_selectable_before_any_quote() -> None:
    machine = TierSelectionStateMachine()
    assert machine.select(Tier.CUSTOM, address="", is_synced=False)
    assert machine.state == SelectionState(selected_tier=Tier.CUSTOM, bound_tx_id="")


def test_select_binds_from_held_set(response_factory) -> None:
    machine = TierSelectionStateMachine()
    machine.rebind(_fee_tiers(response_factory))
    machine.select(Tier.MEDIUM, address="xch1abc", is_synced=True)
    assert machine.bound_tx_id == "g1-medium"
    machine.select(Tier.LONG, address="xch1abc", is_synced=True)
    assert machine.bound_tx_id == "g1-long"


def test_select_missing_quote_leaves_binding_empty(response_factory) -> None:
    machine = TierSelectionStateMachine()
    machine.rebind(_fee_tiers(response_factory))
    machine.select(Tier.SHORT, address="xch1abc", is_synced=True)
    assert machine.bound_tx_id == "g1-short"
    machine.select(Tier.CUSTOM, address="xch1abc", is_synced=True)
    assert machine.bound_tx_id == ""


def test_rejected_select_keeps_previous_binding(response_factory) -> None:
    machine = TierSelectionStateMachine()
    machine.rebind(_fee_tiers(response_factory))
    machine.select(Tier.SHORT, address="xch1abc", is_synced=True)
    assert not machine.select(Tier.LONG, address="", is_synced=True)
    assert machine.state == SelectionState(selected_tier=Tier.SHORT, bound_tx_id="g1-short")


def test_rebind_keeps_selected_tier(response_factory) -> None:
    machine = TierSelectionStateMachine()
    machine.select(Tier.CUSTOM, address="", is_synced=False)
    assert machine.bound_tx_id == ""
    machine.rebind(_fee_tiers(response_factory, custom=True))
    assert machine.state == SelectionState(selected_tier=Tier.CUSTOM, bound_tx_id="g1-custom")


def test_rebind_to_none_clears_binding(response_factory) -> None:
    machine = TierSelectionStateMachine()
    machine.rebind(_fee_tiers(response_factory))
    machine.select(Tier.SHORT, address="xch1abc", is_synced=True)
    machine.rebind(None)
    assert machine.state == SelectionState(selected_tier=Tier.SHORT, bound_tx_id="")


def test_clear_binding_and_reset(response_factory) -> None:
    machine = TierSelectionStateMachine()
    machine.rebind(_fee_tiers(response_factory))
    machine.select(Tier.SHORT, address="xch1abc", is_synced=True)

    machine.clear_binding()
    assert machine.selected_tier == Tier.SHORT
    assert machine.bound_tx_id == ""
    assert machine.fee_tiers is None

    machine.reset()
    assert machine.state == SelectionState()
