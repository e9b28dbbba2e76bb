"""
Send form state shared with the outer send flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sparecore.models import Tier


class FormField(str, Enum):
    ADDRESS = "address"
    AMOUNT = "amount"
    FEE = "fee"
    FEE_RATE = "fee_rate"
    TX_ID = "tx_id"


@dataclass
class FormInputs:
    """
    User-entered values plus the fields the engine produces.

    `tx_id` is the only value the outer flow submits for a standard tier;
    amount and fee are informational once it is bound.
    """

    address: str = ""
    amount: str = ""
    custom_fee_value: str = ""
    fee_rate: Tier | None = None
    tx_id: str = ""
    errors: dict[FormField, str] = field(default_factory=dict)

    def set_error(self, form_field: FormField, message: str) -> None:
        self.errors[form_field] = message

    def clear_errors(self, *fields: FormField) -> None:
        for form_field in fields:
            self.errors.pop(form_field, None)

    def error_for(self, form_field: FormField) -> str | None:
        return self.errors.get(form_field)

    def reset(self) -> None:
        self.address = ""
        self.amount = ""
        self.custom_fee_value = ""
        self.fee_rate = None
        self.tx_id = ""
        self.errors.clear()

    def as_form_values(self) -> dict[str, str]:
        """Form surface as submitted by the outer flow."""
        return {
            FormField.ADDRESS.value: self.address,
            FormField.AMOUNT.value: self.amount,
            FormField.FEE.value: self.custom_fee_value if self.fee_rate == Tier.CUSTOM else "",
            FormField.FEE_RATE.value: self.fee_rate.value if self.fee_rate else "",
            FormField.TX_ID.value: self.tx_id,
        }
