"""Transfer domain exceptions.

This module defines exceptions specific to the transfer bounded context:
amount parsing failures and illegal wizard transitions.
"""

from giro.domain.shared.exceptions import (
    BusinessRuleViolation,
    ErrorCode,
    ValidationError,
)


class InvalidAmountError(ValidationError):
    """Raised when an amount text is not a positive monetary value."""

    def __init__(self, raw_value: str, reason: str) -> None:
        super().__init__(
            message=f"Invalid amount {raw_value!r}: {reason}",
            code=ErrorCode.INVALID_AMOUNT,
            details={"raw_value": raw_value, "reason": reason},
        )
        self.raw_value = raw_value
        self.reason = reason


class InvalidWizardTransitionError(BusinessRuleViolation):
    """Raised when an event is not allowed in the current wizard step."""

    def __init__(self, step: str, event: str) -> None:
        super().__init__(
            message=f"Event {event} is not allowed in step {step}",
            code=ErrorCode.INVALID_WIZARD_TRANSITION,
            details={"step": step, "event": event},
        )
        self.step = step
        self.event = event


class DraftFrozenError(BusinessRuleViolation):
    """Raised when a field edit arrives while the draft is shown read-only."""

    def __init__(self, step: str, field: str) -> None:
        super().__init__(
            message=f"Cannot edit {field!r} while in step {step}",
            code=ErrorCode.DRAFT_FROZEN,
            details={"step": step, "field": field},
        )
        self.step = step
        self.field = field
