"""Domain services for the transfer context."""

from giro.domain.transfer.services.transfer_validation_service import (
    MSG_DATE_IN_PAST,
    MSG_INVALID_AMOUNT,
    MSG_INVALID_BIC,
    MSG_INVALID_DATE,
    MSG_INVALID_IBAN,
    MSG_RECEIVER_REQUIRED,
    TransferValidationService,
    ValidationErrorSet,
)

__all__ = [
    "MSG_DATE_IN_PAST",
    "MSG_INVALID_AMOUNT",
    "MSG_INVALID_BIC",
    "MSG_INVALID_DATE",
    "MSG_INVALID_IBAN",
    "MSG_RECEIVER_REQUIRED",
    "TransferValidationService",
    "ValidationErrorSet",
]
