"""Interactive terminal session driving the transfer wizard."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from giro.application.wizard import (
    BANK_LOOKUP_IN_PROGRESS,
    BackRequested,
    CheckRequested,
    DateTextEdited,
    ExecuteRequested,
    FieldBlurred,
    FieldEdited,
    ResetRequested,
    TransferKindChanged,
    TransferWizard,
    WizardStep,
)
from giro.domain.transfer.value_objects import TransferField, TransferKind
from giro.presentation.cli.views import (
    FIELD_LABELS,
    render_errors,
    render_success,
    render_summary,
)

if TYPE_CHECKING:
    from rich.console import Console

    from giro.domain.transfer.entities import TransferSnapshot

KIND_CHOICES = {
    "standard": TransferKind.STANDARD,
    "termin": TransferKind.SCHEDULED,
    "sofort": TransferKind.INSTANT,
}

TEXT_FIELDS = (
    TransferField.RECEIVER,
    TransferField.IBAN,
    TransferField.BIC,
    TransferField.PURPOSE,
    TransferField.AMOUNT,
)

# Optional fields keep their value on empty input; this entry clears them
CLEAR_INPUT = "-"
OPTIONAL_FIELDS = (TransferField.BIC, TransferField.PURPOSE)


class TransferSession:
    """Prompts for a transfer step by step until the user stops."""

    def __init__(self, wizard: TransferWizard, console: Console):
        self._wizard = wizard
        self._console = console

    async def run(self) -> int:
        """Run wizard rounds; returns the number of executed transfers."""
        executed = 0
        fields_to_ask: tuple[TransferField, ...] = TEXT_FIELDS
        ask_kind = True

        while True:
            step = self._wizard.step

            if step is WizardStep.INPUT:
                await self._collect(fields_to_ask, ask_kind)
                self._wizard.dispatch(CheckRequested())
                errors = self._wizard.context.errors
                if not errors.is_empty:
                    render_errors(self._console, errors)
                    fields_to_ask = tuple(f for f in TEXT_FIELDS if f in errors)
                    ask_kind = TransferField.EXECUTION_DATE in errors
                continue

            if step is WizardStep.SUMMARY:
                render_summary(self._console, self._snapshot())
                if Confirm.ask("Überweisung ausführen?", console=self._console):
                    self._wizard.dispatch(ExecuteRequested())
                else:
                    self._wizard.dispatch(BackRequested())
                    fields_to_ask, ask_kind = TEXT_FIELDS, True
                continue

            render_success(self._console, self._snapshot())
            executed += 1
            if not Confirm.ask(
                "Neue Überweisung?",
                console=self._console,
                default=False,
            ):
                await self._wizard.gateway.aclose()
                return executed
            self._wizard.dispatch(ResetRequested())
            fields_to_ask, ask_kind = TEXT_FIELDS, True

    def _snapshot(self) -> TransferSnapshot:
        snapshot = self._wizard.context.snapshot
        if snapshot is None:
            msg = "Summary shown without a frozen draft"
            raise RuntimeError(msg)
        return snapshot

    async def _collect(
        self,
        fields: tuple[TransferField, ...],
        ask_kind: bool,
    ) -> None:
        for field in fields:
            self._ask_field(field)
            if field is TransferField.BIC:
                await self._show_bank()

        if ask_kind:
            self._ask_kind()

        ctx = self._wizard.context
        if ctx.draft.transfer_kind.requires_execution_date:
            text = Prompt.ask(
                f"{FIELD_LABELS[TransferField.EXECUTION_DATE]} (TT.MM.JJJJ)",
                console=self._console,
                default=ctx.date_text,
                show_default=bool(ctx.date_text),
            )
            self._wizard.dispatch(DateTextEdited(text))

    def _ask_field(self, field: TransferField) -> None:
        current = getattr(self._wizard.context.draft, field.value)
        clearable = field in OPTIONAL_FIELDS and bool(current)
        label = FIELD_LABELS[field]
        if clearable:
            label = f"{label} ({CLEAR_INPUT} zum Leeren)"
        value = Prompt.ask(
            label,
            console=self._console,
            default=current,
            show_default=bool(current),
        )
        if clearable and value.strip() == CLEAR_INPUT:
            value = ""
        self._wizard.dispatch(FieldEdited(field, value))
        self._wizard.dispatch(FieldBlurred(field))

    def _ask_kind(self) -> None:
        current = self._wizard.context.draft.transfer_kind
        default = next(key for key, kind in KIND_CHOICES.items() if kind is current)
        choice = Prompt.ask(
            "Überweisungsart",
            console=self._console,
            choices=list(KIND_CHOICES),
            default=default,
        )
        self._wizard.dispatch(TransferKindChanged(KIND_CHOICES[choice]))

    async def _show_bank(self) -> None:
        ctx = self._wizard.context
        if ctx.pending_lookup is None:
            return

        with self._console.status(BANK_LOOKUP_IN_PROGRESS):
            await self._wizard.gateway.wait_idle()

        if ctx.bank_hint:
            self._console.print(f"  [blue]{escape(ctx.bank_hint)}[/blue]")
        else:
            self._console.print("  [dim]Keine Bankdaten gefunden.[/dim]")
