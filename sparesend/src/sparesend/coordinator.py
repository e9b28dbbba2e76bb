"""
Fee tier request coordination.

Every accepted input change issues a refresh that asks the backend to
pre-build the short/medium/long (and optionally custom) transactions.
Refreshes are numbered; when a response arrives, it is applied only if no
later refresh has been issued since. Earlier responses are dropped on
arrival. Nothing is cancelled on the wire and nothing is retried.

All state here is touched from the event loop thread only, either in direct
response to a user event or when a backend call completes.
"""

from __future__ import annotations

import asyncio

from loguru import logger
from sparecore.address import address_to_puzzle_hash
from sparecore.models import Addition, FeeTierResponse, FeeTierSet, Tier
from sparecore.units import coin_to_mojo, is_numeric
from sparewallet.backends.base import WalletBackend

from sparesend.errors import BackendRequestError, SendFlowError
from sparesend.form import FormField, FormInputs
from sparesend.selection import TierSelectionStateMachine
from sparesend.validator import ErrorRouter


class FeeTierRequestCoordinator:
    """
    Owns the authoritative FeeTierSet for one send form.

    The generation counter starts at zero and only goes up; a fresh
    coordinator is the only way to reset it.
    """

    def __init__(
        self,
        backend: WalletBackend,
        wallet_id: int,
        selection: TierSelectionStateMachine,
        form: FormInputs,
        router: ErrorRouter | None = None,
    ):
        self.backend = backend
        self.wallet_id = wallet_id
        self.selection = selection
        self.form = form
        self.router = router or ErrorRouter()

        self.fee_tiers: FeeTierSet | None = None
        self.error: SendFlowError | None = None
        self.loading = False
        self.generation = 0
        self.in_flight: set[int] = set()
        self.closed = False
        self._tasks: set[asyncio.Task[FeeTierSet | None]] = set()

    @property
    def is_settled(self) -> bool:
        """True when the latest issued generation is no longer pending."""
        return self.generation not in self.in_flight

    def _is_current(self, generation: int) -> bool:
        return not self.closed and generation == self.generation

    def _clear_fee_tiers(self) -> None:
        self.fee_tiers = None
        self.error = None
        self.selection.clear_binding()

    def invalidate(self) -> None:
        """
        Supersede every in-flight refresh and drop the held quotes.

        Used when the inputs stop being refreshable (address cleared, wallet
        not synced, pre-flight check failed). No backend call is made.
        """
        if self.closed:
            return
        self.generation += 1
        self.loading = False
        self._clear_fee_tiers()
        logger.debug(f"Fee tiers invalidated at generation {self.generation}")

    def _begin(self, address: str, is_synced: bool) -> int | None:
        if self.closed:
            return None
        if not address or not is_synced:
            self.invalidate()
            return None

        self.generation += 1
        generation = self.generation
        self.in_flight.add(generation)
        self.loading = True
        self.form.clear_errors(FormField.ADDRESS, FormField.TX_ID)
        # Quotes for the previous inputs must never be submittable
        self._clear_fee_tiers()
        return generation

    async def refresh(
        self,
        address: str,
        amount: str,
        custom_fee_value: str | None,
        selected_tier: Tier | None,
        is_synced: bool,
    ) -> FeeTierSet | None:
        """
        Issue one refresh and wait for it.

        Returns:
            The accepted FeeTierSet, or None if the inputs were not
            refreshable, the request failed, or a newer refresh superseded it
        """
        generation = self._begin(address, is_synced)
        if generation is None:
            return None
        return await self._fetch(generation, address, amount, custom_fee_value, selected_tier)

    def schedule_refresh(
        self,
        address: str,
        amount: str,
        custom_fee_value: str | None,
        selected_tier: Tier | None,
        is_synced: bool,
    ) -> asyncio.Task[FeeTierSet | None] | None:
        """
        Issue a refresh without waiting for it.

        The generation is assigned before this returns, so the order of
        calls is the order of generations.
        """
        generation = self._begin(address, is_synced)
        if generation is None:
            return None
        task = asyncio.create_task(
            self._fetch(generation, address, amount, custom_fee_value, selected_tier)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch(
        self,
        generation: int,
        address: str,
        amount: str,
        custom_fee_value: str | None,
        selected_tier: Tier | None,
    ) -> FeeTierSet | None:
        custom_fee_rate: int | None = None
        try:
            puzzle_hash = address_to_puzzle_hash(address)
            amount_mojos = coin_to_mojo(amount) if amount.strip() else 0
            if (
                selected_tier == Tier.CUSTOM
                and custom_fee_value
                and is_numeric(custom_fee_value)
            ):
                custom_fee_rate = coin_to_mojo(custom_fee_value)

            logger.debug(
                f"Requesting fee tiers (generation {generation}, amount {amount_mojos}, "
                f"custom fee rate {custom_fee_rate})"
            )
            response: FeeTierResponse = await self.backend.request_fee_tiers(
                self.wallet_id,
                [Addition(puzzlehash=puzzle_hash, amount=amount_mojos)],
                custom_fee_rate,
            )
            if not response.success:
                raise BackendRequestError(
                    response.error or "Unable to create fee rate transactions"
                )
        except Exception as e:
            if not self._is_current(generation):
                logger.debug(f"Discarding superseded failure of generation {generation}: {e}")
                return None
            self._apply_failure(self.router.classify(e))
            return None
        else:
            if not self._is_current(generation):
                logger.debug(
                    f"Discarding superseded fee tiers of generation {generation} "
                    f"(latest {self.generation})"
                )
                return None
            fee_tiers = FeeTierSet.from_response(
                response, custom_requested=custom_fee_rate is not None
            )
            self._apply_success(fee_tiers)
            return fee_tiers
        finally:
            self.in_flight.discard(generation)
            if self._is_current(generation):
                self.loading = False

    def _apply_success(self, fee_tiers: FeeTierSet) -> None:
        self.fee_tiers = fee_tiers
        self.error = None
        self.selection.rebind(fee_tiers)
        logger.info(
            f"Fee tiers ready: {', '.join(tier.value for tier in fee_tiers.tiers) or 'none'}"
        )

    def _apply_failure(self, error: SendFlowError) -> None:
        self.error = error
        self.fee_tiers = None
        self.selection.rebind(None)
        self.router.route(error, self.form)

    async def wait_settled(self) -> None:
        """Wait for every scheduled refresh, including superseded ones."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """
        Tear down. Pending refreshes are abandoned, not cancelled: their
        results are ignored when they arrive.
        """
        if not self.closed:
            self.closed = True
            logger.debug(f"Coordinator closed with {len(self._tasks)} pending refresh(es)")
