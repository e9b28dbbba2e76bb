"""
Pre-flight input checks and error routing.

The validator runs synchronously before any refresh is issued. The router
decides where a failure is shown: a blocking dialog for pre-flight errors,
or the address / tx_id field for errors raised while refreshing.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger
from sparecore.address import InvalidAddressError, is_foreign_asset_address
from sparecore.models import Tier
from sparecore.units import coin_to_mojo

from sparesend.errors import (
    BackendRequestError,
    ErrorKind,
    InvalidAddress,
    SendFlowError,
    ValidationError,
    WrongAssetClassError,
)
from sparesend.form import FormField, FormInputs

DialogHandler = Callable[[str], None]

# Inline errors land on these fields
FIELD_FOR_KIND: dict[ErrorKind, FormField] = {
    ErrorKind.INVALID_ADDRESS: FormField.ADDRESS,
    ErrorKind.BACKEND_REQUEST: FormField.TX_ID,
}


def _is_mojo_amount(value: str) -> bool:
    """Non-negative decimal that converts to a uint64 mojo amount."""
    if value.strip().startswith("-"):
        return False
    try:
        coin_to_mojo(value)
    except ValueError:
        return False
    return True


class InputValidator:
    """Checks raw form values in a fixed order; first failure wins."""

    def check(self, inputs: FormInputs, selected_tier: Tier | None) -> None:
        """
        Raises:
            ValidationError: Amount, or custom fee while custom is selected,
                is not numeric
            WrongAssetClassError: Address is from a coloured-coin namespace
        """
        self.check_amount(inputs.amount)
        if selected_tier == Tier.CUSTOM:
            self.check_custom_fee(inputs.custom_fee_value)
        self.check_asset_class(inputs.address)

    @staticmethod
    def check_amount(amount: str, required: bool = False) -> None:
        # An empty amount is allowed while typing; it is sent as 0 mojos
        if not amount.strip() and not required:
            return
        if not _is_mojo_amount(amount):
            raise ValidationError("Please enter a valid numeric amount")

    @staticmethod
    def check_custom_fee(custom_fee_value: str, required: bool = False) -> None:
        if not custom_fee_value.strip() and not required:
            return
        if not _is_mojo_amount(custom_fee_value):
            raise ValidationError("Please enter a valid numeric fee")

    @staticmethod
    def check_asset_class(address: str) -> None:
        if is_foreign_asset_address(address):
            raise WrongAssetClassError(
                "Cannot send chia to coloured address. Please enter a chia address."
            )


def _log_dialog(message: str) -> None:
    logger.warning(f"Send blocked: {message}")


class ErrorRouter:
    """Classifies failures and writes them where the user will see them."""

    def __init__(self, dialog_handler: DialogHandler | None = None):
        self.dialog_handler = dialog_handler or _log_dialog

    @staticmethod
    def classify(exc: BaseException) -> SendFlowError:
        if isinstance(exc, SendFlowError):
            return exc
        if isinstance(exc, InvalidAddressError):
            return InvalidAddress(str(exc))
        message = str(exc) or exc.__class__.__name__
        return BackendRequestError(message)

    def route(self, error: SendFlowError, form: FormInputs) -> None:
        if error.is_blocking:
            logger.info(f"Pre-flight check failed ({error.kind.value}): {error.message}")
            self.dialog_handler(error.message)
            return

        form_field = FIELD_FOR_KIND[error.kind]
        logger.warning(
            f"Refresh failed ({error.kind.value}) on {form_field.value}: {error.message}"
        )
        form.set_error(form_field, error.message)
