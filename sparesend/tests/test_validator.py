"""
Tests for the pre-flight validator and the error router.
"""

from __future__ import annotations

import httpx
import pytest
from sparecore.address import InvalidAddressError
from sparecore.models import Tier

from sparesend.errors import (
    BackendRequestError,
    ErrorKind,
    InvalidAddress,
    ValidationError,
    WrongAssetClassError,
)
from sparesend.form import FormField, FormInputs
from sparesend.validator import ErrorRouter, InputValidator


class TestInputValidator:
    def test_valid_inputs(self, valid_address: str) -> None:
        inputs = FormInputs(address=valid_address, amount="1.5")
        InputValidator().check(inputs, Tier.SHORT)

    def test_empty_amount_is_allowed_while_typing(self, valid_address: str) -> None:
        InputValidator().check(FormInputs(address=valid_address, amount=""), None)

    @pytest.mark.parametrize("amount", ["abc", "1e3", "-1", "1,5", "12345678901234567"])
    def test_bad_amount(self, valid_address: str, amount: str) -> None:
        with pytest.raises(ValidationError, match="valid numeric amount"):
            InputValidator().check(FormInputs(address=valid_address, amount=amount), None)

    def test_required_amount(self) -> None:
        with pytest.raises(ValidationError):
            InputValidator.check_amount("  ", required=True)

    def test_custom_fee_beyond_uint64(self) -> None:
        with pytest.raises(ValidationError, match="valid numeric fee"):
            InputValidator.check_custom_fee("18446744.073709551616")

    def test_custom_fee_checked_only_when_custom_selected(self, valid_address: str) -> None:
        inputs = FormInputs(address=valid_address, amount="1", custom_fee_value="lots")
        InputValidator().check(inputs, Tier.MEDIUM)
        with pytest.raises(ValidationError, match="valid numeric fee"):
            InputValidator().check(inputs, Tier.CUSTOM)

    def test_empty_custom_fee_is_not_checked(self, valid_address: str) -> None:
        inputs = FormInputs(address=valid_address, amount="1", custom_fee_value="")
        InputValidator().check(inputs, Tier.CUSTOM)

    def test_wrong_asset_class(self) -> None:
        with pytest.raises(WrongAssetClassError, match="coloured address"):
            InputValidator().check(FormInputs(address="colour:abcdef", amount="1"), None)

    def test_amount_checked_before_asset_class(self) -> None:
        inputs = FormInputs(address="colour:abcdef", amount="abc")
        with pytest.raises(ValidationError):
            InputValidator().check(inputs, None)

    def test_custom_fee_checked_before_asset_class(self) -> None:
        inputs = FormInputs(address="colour:abcdef", amount="1", custom_fee_value="x")
        with pytest.raises(ValidationError):
            InputValidator().check(inputs, Tier.CUSTOM)


class TestErrorRouter:
    def test_classify_invalid_address(self) -> None:
        error = ErrorRouter.classify(InvalidAddressError("xch1bad"))
        assert isinstance(error, InvalidAddress)
        assert error.kind == ErrorKind.INVALID_ADDRESS
        assert "xch1bad" in error.message

    def test_classify_passes_send_flow_errors_through(self) -> None:
        original = BackendRequestError("Insufficient funds")
        assert ErrorRouter.classify(original) is original

    def test_classify_transport_failure(self) -> None:
        error = ErrorRouter.classify(httpx.ConnectError("connection refused"))
        assert isinstance(error, BackendRequestError)
        assert error.message == "connection refused"

    def test_classify_uses_class_name_without_message(self) -> None:
        assert ErrorRouter.classify(RuntimeError()).message == "RuntimeError"

    def test_blocking_errors_go_to_dialog(self, dialogs: list[str]) -> None:
        form = FormInputs()
        router = ErrorRouter(dialogs.append)
        router.route(ValidationError("Please enter a valid numeric amount"), form)
        router.route(WrongAssetClassError("coloured"), form)
        assert dialogs == ["Please enter a valid numeric amount", "coloured"]
        assert form.errors == {}

    def test_invalid_address_goes_to_address_field(self, dialogs: list[str]) -> None:
        form = FormInputs()
        ErrorRouter(dialogs.append).route(InvalidAddress("bad address"), form)
        assert form.error_for(FormField.ADDRESS) == "bad address"
        assert form.error_for(FormField.TX_ID) is None
        assert dialogs == []

    def test_backend_error_goes_to_tx_id_field(self, dialogs: list[str]) -> None:
        form = FormInputs()
        ErrorRouter(dialogs.append).route(BackendRequestError("Insufficient funds"), form)
        assert form.error_for(FormField.TX_ID) == "Insufficient funds"
        assert dialogs == []

    def test_default_dialog_handler_does_not_raise(self) -> None:
        ErrorRouter().route(ValidationError("x"), FormInputs())
