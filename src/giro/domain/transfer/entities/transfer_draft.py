"""Transfer draft entity and its frozen snapshot."""

from __future__ import annotations

from dataclasses import dataclass, fields

from pydantic import BaseModel, ConfigDict

from giro.domain.transfer.value_objects import (
    TransferKind,
    format_money,
    iso_to_local_display,
    normalize_iban,
)

PURPOSE_MAX_LENGTH = 140


@dataclass
class TransferDraft:
    """The in-progress transfer request, editable only during input.

    ``bank_name`` and ``bank_city`` are derived from the BIC lookup and are
    never edited by the user directly.
    """

    receiver: str = ""
    iban: str = ""
    bic: str = ""
    bank_name: str = ""
    bank_city: str = ""
    purpose: str = ""
    amount: str = ""
    transfer_kind: TransferKind = TransferKind.STANDARD
    execution_date: str = ""

    @classmethod
    def empty(cls) -> TransferDraft:
        return cls()

    @property
    def has_bank_info(self) -> bool:
        return bool(self.bank_name)

    def set_bank_info(self, bank_name: str, bank_city: str) -> None:
        self.bank_name = bank_name
        self.bank_city = bank_city

    def clear_bank_info(self) -> None:
        self.bank_name = ""
        self.bank_city = ""

    def freeze(self) -> TransferSnapshot:
        """Return an immutable copy for the summary and success views."""
        return TransferSnapshot(
            **{f.name: getattr(self, f.name) for f in fields(self)},
        )


class TransferSnapshot(BaseModel):
    """Read-only view of a validated transfer draft."""

    receiver: str
    iban: str
    bic: str
    bank_name: str
    bank_city: str
    purpose: str
    amount: str
    transfer_kind: TransferKind
    execution_date: str

    model_config = ConfigDict(frozen=True)

    @property
    def formatted_amount(self) -> str:
        return format_money(self.amount)

    @property
    def formatted_iban(self) -> str:
        """IBAN in groups of four, e.g. ``DE89 3704 0044 ...``."""
        iban = normalize_iban(self.iban)
        return " ".join(iban[i : i + 4] for i in range(0, len(iban), 4))

    @property
    def display_execution_date(self) -> str:
        return iso_to_local_display(self.execution_date)

    @property
    def is_scheduled(self) -> bool:
        return self.transfer_kind.requires_execution_date

    @property
    def bank_label(self) -> str:
        """Bank name with city in parentheses, empty without bank info."""
        if not self.bank_name:
            return ""
        if self.bank_city:
            return f"{self.bank_name} ({self.bank_city})"
        return self.bank_name
