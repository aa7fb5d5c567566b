"""Names of the user-facing transfer fields."""

from enum import Enum


class TransferField(str, Enum):
    """User-editable fields of a transfer draft.

    Values match the ``TransferDraft`` attribute names.
    """

    RECEIVER = "receiver"
    IBAN = "iban"
    BIC = "bic"
    PURPOSE = "purpose"
    AMOUNT = "amount"
    EXECUTION_DATE = "execution_date"

    @property
    def normalizes_on_blur(self) -> bool:
        """Free-text fields get umlauts transliterated when focus leaves."""
        return self in (TransferField.RECEIVER, TransferField.PURPOSE)
