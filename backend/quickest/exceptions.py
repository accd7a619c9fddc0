"""Custom exception hierarchy for the QuickEst estimation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quickest.models.blocks import FieldError


class QuickEstError(Exception):
    """Base exception for all QuickEst errors."""


class FormatError(QuickEstError, ValueError):
    """Raised when a dimension list string cannot be parsed."""

    def __init__(self, text: str, token: str) -> None:
        self.text = text
        self.token = token
        super().__init__(f"Cannot parse '{token}' in dimension list '{text}'")


class ValidationError(QuickEstError):
    """Raised when a calculation is requested for an invalid model.

    Validation is normally reported as data (``BuildingModel.validate``);
    this is only raised when a caller skips that step.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        fields = ", ".join(sorted({e.field for e in self.errors}))
        super().__init__(f"Invalid input for: {fields}")


class MissingReferenceError(QuickEstError):
    """Raised when a resolved component code has no reference record."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Unknown product code '{code}'")


class ReferenceStoreUnavailable(QuickEstError):
    """Raised when a reference catalog cannot be loaded."""
