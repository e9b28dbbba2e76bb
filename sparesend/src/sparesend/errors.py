"""
Error taxonomy of the send flow.

Pre-flight errors (ValidationError, WrongAssetClassError) are raised before
any backend call and are shown as blocking dialogs. Refresh errors
(InvalidAddress, BackendRequestError) are shown inline on a form field.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    WRONG_ASSET_CLASS = "wrong_asset_class"
    INVALID_ADDRESS = "invalid_address"
    BACKEND_REQUEST = "backend_request"


class SendFlowError(Exception):
    """Base class for all send flow failures."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def is_blocking(self) -> bool:
        """True for errors shown as a dialog instead of on a field."""
        return self.kind in (ErrorKind.VALIDATION, ErrorKind.WRONG_ASSET_CLASS)


class ValidationError(SendFlowError):
    """Amount or custom fee is not a number."""

    kind = ErrorKind.VALIDATION


class WrongAssetClassError(SendFlowError):
    """Address belongs to a coloured-coin namespace."""

    kind = ErrorKind.WRONG_ASSET_CLASS


class InvalidAddress(SendFlowError):
    kind = ErrorKind.INVALID_ADDRESS


class BackendRequestError(SendFlowError):
    kind = ErrorKind.BACKEND_REQUEST
