"""Validation of a transfer draft before it may be submitted."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Optional

from giro.domain.transfer.entities import TransferDraft
from giro.domain.transfer.exceptions import InvalidAmountError
from giro.domain.transfer.value_objects import (
    TransferField,
    is_future_or_today,
    is_valid_bic,
    is_valid_iban,
    parse_money,
)

logger = logging.getLogger(__name__)

MSG_RECEIVER_REQUIRED = "Empfänger ist erforderlich."
MSG_INVALID_IBAN = "Bitte geben Sie eine gültige IBAN ein."
MSG_INVALID_BIC = "Das Format der BIC ist ungültig."
MSG_INVALID_AMOUNT = "Bitte geben Sie einen positiven Betrag ein."
MSG_INVALID_DATE = "Bitte wählen Sie ein gültiges Datum (TT.MM.JJJJ)."
MSG_DATE_IN_PAST = "Das Datum darf nicht in der Vergangenheit liegen."


class ValidationErrorSet(Mapping[TransferField, str]):
    """Field-scoped validation messages; empty means submittable."""

    def __init__(self, errors: Optional[dict[TransferField, str]] = None):
        self._errors: dict[TransferField, str] = dict(errors or {})

    def __getitem__(self, field: TransferField) -> str:
        return self._errors[field]

    def __iter__(self) -> Iterator[TransferField]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ValidationErrorSet({self._errors!r})"

    @property
    def is_empty(self) -> bool:
        return not self._errors

    def add(self, field: TransferField, message: str) -> None:
        self._errors[field] = message

    def clear_field(self, field: TransferField) -> bool:
        """Drop the error for one field. Returns True if one was present."""
        return self._errors.pop(field, None) is not None

    def clear(self) -> None:
        self._errors.clear()


class TransferValidationService:
    """Runs every field rule against a draft and reports all failures at once."""

    def validate(self, draft: TransferDraft) -> ValidationErrorSet:
        errors = ValidationErrorSet()

        if not draft.receiver.strip():
            errors.add(TransferField.RECEIVER, MSG_RECEIVER_REQUIRED)

        if not is_valid_iban(draft.iban):
            errors.add(TransferField.IBAN, MSG_INVALID_IBAN)

        if draft.bic and not is_valid_bic(draft.bic):
            errors.add(TransferField.BIC, MSG_INVALID_BIC)

        try:
            parse_money(draft.amount)
        except InvalidAmountError as e:
            logger.debug("Amount rejected: %s", e.reason)
            errors.add(TransferField.AMOUNT, MSG_INVALID_AMOUNT)

        if draft.transfer_kind.requires_execution_date:
            # An unparsable text buffer leaves execution_date empty
            if not draft.execution_date:
                errors.add(TransferField.EXECUTION_DATE, MSG_INVALID_DATE)
            elif not is_future_or_today(draft.execution_date):
                errors.add(TransferField.EXECUTION_DATE, MSG_DATE_IN_PAST)

        return errors
