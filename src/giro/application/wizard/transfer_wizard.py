"""Transfer wizard state machine.

Steps run ``INPUT -> SUMMARY -> SUCCESS`` with ``SUMMARY -> INPUT`` (back)
and ``SUCCESS -> INPUT`` (reset). Every change to the session goes through
``dispatch``, one event at a time, on the event loop thread.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from giro.application.services import is_lookup_eligible
from giro.application.wizard.context import WizardContext
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
from giro.domain.shared.exceptions import ErrorCode, ValidationError
from giro.domain.transfer.entities import PURPOSE_MAX_LENGTH
from giro.domain.transfer.exceptions import (
    DraftFrozenError,
    InvalidWizardTransitionError,
)
from giro.domain.transfer.services import TransferValidationService
from giro.domain.transfer.value_objects import (
    BIC_MAX_LENGTH,
    IBAN_MAX_LENGTH,
    TransferField,
    iso_to_local_display,
    local_display_to_iso,
    normalize_diacritics,
)

if TYPE_CHECKING:
    from giro.application.services import BankLookupGateway, PendingLookup
    from giro.domain.banking.value_objects import BankInfo

logger = logging.getLogger(__name__)

WizardListener = Callable[[WizardEvent, WizardContext], None]

# Longest value each text field accepts; longer input is cut off
_FIELD_MAX_LENGTHS = {
    TransferField.IBAN: IBAN_MAX_LENGTH,
    TransferField.BIC: BIC_MAX_LENGTH,
    TransferField.PURPOSE: PURPOSE_MAX_LENGTH,
}

_UPPERCASE_FIELDS = (TransferField.IBAN, TransferField.BIC)


class TransferWizard:
    """Owns the wizard session and applies events to it."""

    def __init__(
        self,
        gateway: BankLookupGateway,
        context: Optional[WizardContext] = None,
        validation_service: Optional[TransferValidationService] = None,
        listener: Optional[WizardListener] = None,
    ):
        self._gateway = gateway
        self._context = context or WizardContext()
        self._validation_service = validation_service or TransferValidationService()
        self._listener = listener
        self._handlers: dict[type, Callable] = {
            FieldEdited: self._on_field_edited,
            FieldBlurred: self._on_field_blurred,
            TransferKindChanged: self._on_transfer_kind_changed,
            DateTextEdited: self._on_date_text_edited,
            DateSelected: self._on_date_selected,
            CheckRequested: self._on_check,
            BackRequested: self._on_back,
            ExecuteRequested: self._on_execute,
            ResetRequested: self._on_reset,
            BankLookupStarted: self._on_lookup_started,
            BankLookupResolved: self._on_lookup_resolved,
        }

    @property
    def context(self) -> WizardContext:
        return self._context

    @property
    def step(self) -> WizardStep:
        return self._context.step

    @property
    def gateway(self) -> BankLookupGateway:
        return self._gateway

    def dispatch(self, event: WizardEvent) -> WizardContext:
        """Apply one event to the session and return the updated context.

        Raises
        ------
        DraftFrozenError
            If a draft edit arrives outside the input step.
        InvalidWizardTransitionError
            If a step transition is not possible from the current step.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            msg = f"Unsupported wizard event: {event!r}"
            raise TypeError(msg)

        handler(event)

        if self._listener is not None:
            self._listener(event, self._context)
        return self._context

    # -------------------------------------------------------------------------
    # Draft edits
    # -------------------------------------------------------------------------

    def _require_input_step(self, field_name: str) -> None:
        if self._context.step is not WizardStep.INPUT:
            raise DraftFrozenError(self._context.step.value, field_name)

    def _on_field_edited(self, event: FieldEdited) -> None:
        if event.field is TransferField.EXECUTION_DATE:
            self._on_date_text_edited(DateTextEdited(event.value))
            return

        self._require_input_step(event.field.value)
        ctx = self._context

        value = event.value
        if event.field in _UPPERCASE_FIELDS:
            value = value.upper()
        max_length = _FIELD_MAX_LENGTHS.get(event.field)
        if max_length is not None:
            value = value[:max_length]

        previous = getattr(ctx.draft, event.field.value)
        setattr(ctx.draft, event.field.value, value)
        ctx.errors.clear_field(event.field)

        if event.field is TransferField.BIC and value != previous:
            self._on_bic_changed(value)

    def _on_field_blurred(self, event: FieldBlurred) -> None:
        self._require_input_step(event.field.value)
        if not event.field.normalizes_on_blur:
            return

        draft = self._context.draft
        current = getattr(draft, event.field.value)
        normalized = normalize_diacritics(current)
        if normalized != current:
            setattr(draft, event.field.value, normalized)

    def _on_transfer_kind_changed(self, event: TransferKindChanged) -> None:
        self._require_input_step("transfer_kind")
        ctx = self._context
        ctx.draft.transfer_kind = event.kind
        if not event.kind.requires_execution_date:
            # The date field is hidden for this kind
            ctx.errors.clear_field(TransferField.EXECUTION_DATE)

    def _on_date_text_edited(self, event: DateTextEdited) -> None:
        self._require_input_step(TransferField.EXECUTION_DATE.value)
        ctx = self._context
        ctx.date_text = event.text
        ctx.errors.clear_field(TransferField.EXECUTION_DATE)
        # Partial or malformed text must not leave a stale committed date
        ctx.draft.execution_date = local_display_to_iso(event.text) or ""

    def _on_date_selected(self, event: DateSelected) -> None:
        self._require_input_step(TransferField.EXECUTION_DATE.value)
        display = iso_to_local_display(event.iso_date)
        if not display:
            msg = f"Calendar returned an invalid date: {event.iso_date!r}"
            raise ValidationError(msg, code=ErrorCode.INVALID_DATE)

        ctx = self._context
        ctx.draft.execution_date = event.iso_date
        ctx.date_text = display
        ctx.errors.clear_field(TransferField.EXECUTION_DATE)

    # -------------------------------------------------------------------------
    # Bank lookup
    # -------------------------------------------------------------------------

    def _on_bic_changed(self, bic: str) -> None:
        ctx = self._context
        # Bank info belonged to the previous BIC
        ctx.draft.clear_bank_info()
        ctx.is_checking_bank = False
        self._gateway.cancel(ctx.pending_lookup)
        ctx.pending_lookup = self._schedule_lookup(bic)

    def _schedule_lookup(self, bic: str) -> Optional[PendingLookup]:
        return self._gateway.schedule(
            bic,
            on_started=lambda lookup: self.dispatch(BankLookupStarted(lookup)),
            on_resolved=lambda lookup, info: self.dispatch(
                BankLookupResolved(lookup, info),
            ),
        )

    def _cancel_lookup(self) -> None:
        ctx = self._context
        self._gateway.cancel(ctx.pending_lookup)
        ctx.pending_lookup = None
        ctx.is_checking_bank = False

    def _is_current_lookup(self, lookup: PendingLookup) -> bool:
        ctx = self._context
        return (
            ctx.step is WizardStep.INPUT
            and lookup is ctx.pending_lookup
            and lookup.bic == ctx.draft.bic
        )

    def _on_lookup_started(self, event: BankLookupStarted) -> None:
        if self._is_current_lookup(event.lookup):
            self._context.is_checking_bank = True

    def _on_lookup_resolved(self, event: BankLookupResolved) -> None:
        if not self._is_current_lookup(event.lookup):
            logger.debug("Ignoring stale bank lookup result for %s", event.lookup.bic)
            return

        ctx = self._context
        ctx.pending_lookup = None
        ctx.is_checking_bank = False
        self._apply_bank_info(event.info)

    def _apply_bank_info(self, info: Optional[BankInfo]) -> None:
        draft = self._context.draft
        if info is None:
            draft.clear_bank_info()
            logger.info("No bank found for BIC %s", draft.bic)
        else:
            draft.set_bank_info(info.bank_name, info.city)
            logger.info("BIC %s resolved to %s", draft.bic, info)

    # -------------------------------------------------------------------------
    # Step transitions
    # -------------------------------------------------------------------------

    def _require_step(self, step: WizardStep, event: WizardEvent) -> None:
        if self._context.step is not step:
            raise InvalidWizardTransitionError(self._context.step.value, event.name)

    def _on_check(self, event: CheckRequested) -> None:
        self._require_step(WizardStep.INPUT, event)
        ctx = self._context

        ctx.errors = self._validation_service.validate(ctx.draft)
        if not ctx.errors.is_empty:
            logger.debug(
                "Transfer draft rejected: %s",
                ", ".join(f.value for f in ctx.errors),
            )
            return

        # The draft is read-only from here on
        self._cancel_lookup()
        ctx.snapshot = ctx.draft.freeze()
        ctx.step = WizardStep.SUMMARY
        logger.debug("Transfer draft accepted, showing summary")

    def _on_back(self, event: BackRequested) -> None:
        self._require_step(WizardStep.SUMMARY, event)
        ctx = self._context
        ctx.snapshot = None
        ctx.step = WizardStep.INPUT

        # A lookup cancelled by the check never filled in the bank
        bic = ctx.draft.bic
        if not ctx.draft.has_bank_info and is_lookup_eligible(bic):
            ctx.pending_lookup = self._schedule_lookup(bic)

    def _on_execute(self, event: ExecuteRequested) -> None:
        self._require_step(WizardStep.SUMMARY, event)
        ctx = self._context
        snapshot = ctx.snapshot
        ctx.step = WizardStep.SUCCESS
        if snapshot is not None:
            logger.info(
                "%s over %s accepted",
                snapshot.transfer_kind.label,
                snapshot.formatted_amount,
            )

    def _on_reset(self, event: ResetRequested) -> None:
        self._require_step(WizardStep.SUCCESS, event)
        self._cancel_lookup()
        self._context.reset()
        logger.debug("Wizard reset for a new transfer")
