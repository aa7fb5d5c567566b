"""Transfer wizard: session context, events and the state machine."""

from giro.application.wizard.context import BANK_LOOKUP_IN_PROGRESS, WizardContext
from giro.application.wizard.events import (
    BackRequested,
    BankLookupResolved,
    BankLookupStarted,
    CheckRequested,
    DateSelected,
    DateTextEdited,
    ExecuteRequested,
    FieldBlurred,
    FieldEdited,
    ResetRequested,
    TransferKindChanged,
    WizardEvent,
)
from giro.application.wizard.steps import WizardStep
from giro.application.wizard.transfer_wizard import TransferWizard, WizardListener

__all__ = [
    "BANK_LOOKUP_IN_PROGRESS",
    "BackRequested",
    "BankLookupResolved",
    "BankLookupStarted",
    "CheckRequested",
    "DateSelected",
    "DateTextEdited",
    "ExecuteRequested",
    "FieldBlurred",
    "FieldEdited",
    "ResetRequested",
    "TransferKindChanged",
    "TransferWizard",
    "WizardContext",
    "WizardEvent",
    "WizardListener",
    "WizardStep",
]
