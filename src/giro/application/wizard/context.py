"""Session state of one transfer wizard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from giro.application.wizard.steps import WizardStep
from giro.domain.transfer.entities import TransferDraft, TransferSnapshot
from giro.domain.transfer.services import ValidationErrorSet
from giro.domain.transfer.value_objects import iso_today

if TYPE_CHECKING:
    from giro.application.services import PendingLookup

BANK_LOOKUP_IN_PROGRESS = "Bankdaten werden abgerufen..."


@dataclass
class WizardContext:
    """Everything the wizard mutates, held in one place.

    ``date_text`` is the raw execution date as typed; ``draft.execution_date``
    only ever holds a committed, valid ISO date or "".
    """

    step: WizardStep = WizardStep.INPUT
    draft: TransferDraft = field(default_factory=TransferDraft.empty)
    errors: ValidationErrorSet = field(default_factory=ValidationErrorSet)
    date_text: str = ""
    is_checking_bank: bool = False
    pending_lookup: Optional[PendingLookup] = None
    snapshot: Optional[TransferSnapshot] = None

    @property
    def min_date(self) -> str:
        """Earliest date the calendar offers."""
        return iso_today()

    @property
    def bank_hint(self) -> str:
        """Text shown under the BIC field."""
        if self.is_checking_bank:
            return BANK_LOOKUP_IN_PROGRESS
        draft = self.draft
        if not draft.bank_name:
            return ""
        if draft.bank_city:
            return f"{draft.bank_name}, {draft.bank_city}"
        return draft.bank_name

    def reset(self) -> None:
        self.step = WizardStep.INPUT
        self.draft = TransferDraft.empty()
        self.errors = ValidationErrorSet()
        self.date_text = ""
        self.is_checking_bank = False
        self.pending_lookup = None
        self.snapshot = None
