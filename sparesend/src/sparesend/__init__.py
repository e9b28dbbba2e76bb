"""
sparesend - Fee tier transaction preparation for the wallet send flow

Asks the wallet to pre-build fast/medium/slow (and custom fee) candidate
transactions for the current inputs and binds the one the user picks.
"""

__version__ = "0.3.0"

from sparesend.coordinator import FeeTierRequestCoordinator
from sparesend.errors import (
    BackendRequestError,
    ErrorKind,
    InvalidAddress,
    SendFlowError,
    ValidationError,
    WrongAssetClassError,
)
from sparesend.form import FormField, FormInputs
from sparesend.selection import SelectionState, TierSelectionStateMachine
from sparesend.session import SendSession
from sparesend.validator import ErrorRouter, InputValidator

__all__ = [
    "BackendRequestError",
    "ErrorKind",
    "ErrorRouter",
    "FeeTierRequestCoordinator",
    "FormField",
    "FormInputs",
    "InputValidator",
    "InvalidAddress",
    "SelectionState",
    "SendFlowError",
    "SendSession",
    "TierSelectionStateMachine",
    "ValidationError",
    "WrongAssetClassError",
]
