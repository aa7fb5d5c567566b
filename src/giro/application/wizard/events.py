"""Discrete events consumed by the transfer wizard.

The presentation layer translates user interaction (typing, leaving a field,
pressing a button) into these events; the bank lookup gateway reports its
progress through the lookup events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from giro.domain.transfer.value_objects import TransferField, TransferKind

if TYPE_CHECKING:
    from giro.application.services import PendingLookup
    from giro.domain.banking.value_objects import BankInfo


@dataclass(frozen=True)
class WizardEvent:
    """Base class for wizard events."""

    @property
    def name(self) -> str:
        return type(self).__name__


# Input step: draft edits


@dataclass(frozen=True)
class FieldEdited(WizardEvent):
    field: TransferField
    value: str


@dataclass(frozen=True)
class FieldBlurred(WizardEvent):
    field: TransferField


@dataclass(frozen=True)
class TransferKindChanged(WizardEvent):
    kind: TransferKind


@dataclass(frozen=True)
class DateTextEdited(WizardEvent):
    """Raw text typed into the execution date field."""

    text: str


@dataclass(frozen=True)
class DateSelected(WizardEvent):
    """ISO date picked from the calendar."""

    iso_date: str


# Step transitions


@dataclass(frozen=True)
class CheckRequested(WizardEvent):
    pass


@dataclass(frozen=True)
class BackRequested(WizardEvent):
    pass


@dataclass(frozen=True)
class ExecuteRequested(WizardEvent):
    pass


@dataclass(frozen=True)
class ResetRequested(WizardEvent):
    pass


# Bank lookup progress


@dataclass(frozen=True)
class BankLookupStarted(WizardEvent):
    lookup: PendingLookup


@dataclass(frozen=True)
class BankLookupResolved(WizardEvent):
    lookup: PendingLookup
    info: Optional[BankInfo]
