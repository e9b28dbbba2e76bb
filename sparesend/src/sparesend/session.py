"""
One send flow: form, validation, fee tier refreshes and submission.

The session watches (address, amount, custom fee when custom is selected,
sync state). Each change of that tuple that passes the pre-flight checks
schedules exactly one refresh; the coordinator discards whatever earlier
refreshes return afterwards.
"""

from __future__ import annotations

from loguru import logger
from sparecore.address import strip_address_prefixes
from sparecore.models import FeeTierSet, SendResult, SyncingStatus, Tier
from sparecore.units import coin_to_mojo
from sparewallet.backends.base import WalletBackend

from sparesend.coordinator import FeeTierRequestCoordinator
from sparesend.errors import SendFlowError, ValidationError
from sparesend.form import FormInputs
from sparesend.selection import SelectionState, TierSelectionStateMachine
from sparesend.validator import DialogHandler, ErrorRouter, InputValidator

WatchedInputs = tuple[str, str, str | None, bool]

SYNC_REQUIRED_MESSAGE = "Please finish wallet syncing before making a transaction"
SELECT_FEE_MESSAGE = "Please select network fee or enter custom fee value"


class SendSession:
    """
    Owning actor for a single send form.

    All mutators are plain methods meant to be called from the event loop
    that runs the refresh tasks.
    """

    def __init__(
        self,
        backend: WalletBackend,
        wallet_id: int,
        is_synced: bool = False,
        dialog_handler: DialogHandler | None = None,
    ):
        self.backend = backend
        self.wallet_id = wallet_id
        self.is_synced = is_synced
        self.form = FormInputs()
        self.validator = InputValidator()
        self.router = ErrorRouter(dialog_handler)
        self.selection = TierSelectionStateMachine()
        self.coordinator = FeeTierRequestCoordinator(
            backend, wallet_id, self.selection, self.form, self.router
        )
        self._last_watched: WatchedInputs | None = None

    @classmethod
    async def start(
        cls,
        backend: WalletBackend,
        wallet_id: int,
        dialog_handler: DialogHandler | None = None,
    ) -> SendSession:
        """Create a session with the wallet's current sync state."""
        status = await backend.get_sync_status(wallet_id)
        logger.debug(f"Wallet {wallet_id} sync status: {status.value}")
        return cls(
            backend,
            wallet_id,
            is_synced=status == SyncingStatus.SYNCED,
            dialog_handler=dialog_handler,
        )

    # Read side

    @property
    def selected_tier(self) -> Tier | None:
        return self.selection.selected_tier

    @property
    def bound_tx_id(self) -> str:
        return self.selection.bound_tx_id

    @property
    def selection_state(self) -> SelectionState:
        return self.selection.state

    @property
    def fee_tiers(self) -> FeeTierSet | None:
        return self.coordinator.fee_tiers

    @property
    def loading(self) -> bool:
        return self.coordinator.loading

    @property
    def can_select(self) -> bool:
        return self.is_synced and bool(self.form.address)

    def _watched(self) -> WatchedInputs:
        custom_fee: str | None = None
        if self.selected_tier == Tier.CUSTOM and self.form.custom_fee_value.strip():
            custom_fee = self.form.custom_fee_value
        return (self.form.address, self.form.amount, custom_fee, self.is_synced)

    def _sync_form(self) -> None:
        self.form.fee_rate = self.selection.selected_tier
        self.form.tx_id = self.selection.bound_tx_id

    # Input events

    def set_address(self, address: str) -> None:
        self.form.address = address
        self._on_inputs_changed()

    def set_amount(self, amount: str) -> None:
        self.form.amount = amount
        self._on_inputs_changed()

    def set_custom_fee(self, custom_fee_value: str) -> None:
        self.form.custom_fee_value = custom_fee_value
        self._on_inputs_changed()

    def set_synced(self, is_synced: bool) -> None:
        self.is_synced = is_synced
        self._on_inputs_changed()

    def set_inputs(
        self,
        address: str,
        amount: str,
        custom_fee_value: str = "",
        tier: Tier | None = None,
    ) -> bool:
        """
        Fill the whole form at once; at most one refresh is issued.

        Returns:
            False if tier was given but could not be selected
        """
        self.form.address = address
        self.form.amount = amount
        self.form.custom_fee_value = custom_fee_value
        selected = tier is None or self.selection.select(
            tier, address=address, is_synced=self.is_synced
        )
        try:
            self._on_inputs_changed()
        finally:
            self._sync_form()
        return selected

    def select_tier(self, tier: Tier) -> bool:
        """
        Select a fee tier.

        Switching between standard tiers only re-derives the bound tx_id from
        the quotes already held; the backend is asked again only when the
        watched inputs change (custom selected or left with a fee entered),
        or when the last refresh failed and nothing is held.
        """
        if not self.selection.select(tier, address=self.form.address, is_synced=self.is_synced):
            return False
        rearm = self.coordinator.fee_tiers is None and self.coordinator.error is not None
        try:
            self._on_inputs_changed(force=rearm)
        finally:
            self._sync_form()
        return True

    def _on_inputs_changed(self, force: bool = False) -> None:
        watched = self._watched()
        if watched == self._last_watched and not force:
            self._sync_form()
            return
        self._last_watched = watched

        try:
            self.validator.check(self.form, self.selected_tier)
        except SendFlowError as e:
            self.coordinator.invalidate()
            self._sync_form()
            self.router.route(e, self.form)
            raise

        self.coordinator.schedule_refresh(
            self.form.address,
            self.form.amount,
            watched[2],
            self.selected_tier,
            self.is_synced,
        )
        self._sync_form()

    async def wait_settled(self) -> None:
        await self.coordinator.wait_settled()
        self._sync_form()

    # Submission

    def _block(self, message: str) -> ValidationError:
        error = ValidationError(message)
        self.router.route(error, self.form)
        return error

    async def submit(self) -> SendResult:
        """
        Push the prepared transaction.

        Standard tiers submit the bound tx_id; custom sends the amount with
        the entered fee directly.

        Raises:
            SendFlowError: If the form is not ready to submit
            WalletRpcError: If the wallet rejects the transaction
        """
        self._sync_form()
        if not self.is_synced:
            raise self._block(SYNC_REQUIRED_MESSAGE)
        if self.selected_tier is None:
            raise self._block(SELECT_FEE_MESSAGE)

        try:
            self.validator.check_amount(self.form.amount, required=True)
            self.validator.check_asset_class(self.form.address)
            if self.selected_tier == Tier.CUSTOM:
                self.validator.check_custom_fee(self.form.custom_fee_value, required=True)
        except SendFlowError as e:
            self.router.route(e, self.form)
            raise

        if self.selected_tier == Tier.CUSTOM:
            address = strip_address_prefixes(self.form.address)
            amount = coin_to_mojo(self.form.amount)
            fee = coin_to_mojo(self.form.custom_fee_value)
            logger.info(f"Sending {amount} mojos with custom fee {fee} mojos")
            result = await self.backend.send_transaction(self.wallet_id, amount, fee, address)
        else:
            tx_id = self.selection.bound_tx_id
            if not tx_id:
                raise self._block(SELECT_FEE_MESSAGE)
            logger.info(f"Sending prepared {self.selected_tier.value} transaction {tx_id}")
            result = await self.backend.send_fee_rate_transaction(tx_id)

        self.reset()
        return result

    def reset(self) -> None:
        """Start over: empty form, nothing selected, pending refreshes superseded."""
        self.coordinator.invalidate()
        self.selection.reset()
        self.form.reset()
        self._last_watched = None

    def close(self) -> None:
        self.coordinator.close()
