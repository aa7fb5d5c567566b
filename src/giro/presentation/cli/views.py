"""Rich renderings of the wizard's read-only views."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from giro.domain.transfer.value_objects import TransferField, TransferKind

if TYPE_CHECKING:
    from rich.console import Console

    from giro.domain.transfer.entities import TransferSnapshot
    from giro.domain.transfer.services import ValidationErrorSet

FIELD_LABELS = {
    TransferField.RECEIVER: "Empfänger",
    TransferField.IBAN: "IBAN",
    TransferField.BIC: "BIC",
    TransferField.PURPOSE: "Verwendungszweck",
    TransferField.AMOUNT: "Betrag (EUR)",
    TransferField.EXECUTION_DATE: "Ausführung am",
}

KIND_ICONS = {
    TransferKind.STANDARD: "→",
    TransferKind.SCHEDULED: "📅",
    TransferKind.INSTANT: "⚡",
}


def render_errors(console: Console, errors: ValidationErrorSet) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="bold red")
    table.add_column(style="red")
    for field, message in errors.items():
        table.add_row(FIELD_LABELS[field], message)
    console.print(Panel(table, title="Bitte Eingaben korrigieren", border_style="red"))


def render_summary(console: Console, snapshot: TransferSnapshot) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="dim")
    table.add_column()

    kind = snapshot.transfer_kind
    table.add_row("Überweisungsart", f"{KIND_ICONS[kind]} [bold]{kind.label}[/bold]")
    table.add_row("Empfänger", escape(snapshot.receiver))
    table.add_row("Betrag", f"[bold blue]{snapshot.formatted_amount}[/bold blue]")
    table.add_row("IBAN", escape(snapshot.formatted_iban))
    table.add_row("BIC", escape(snapshot.bic))
    if snapshot.bank_label:
        table.add_row("Bank", escape(snapshot.bank_label))
    table.add_row("Verwendungszweck", escape(snapshot.purpose))
    if snapshot.is_scheduled:
        table.add_row("Ausführung am", escape(snapshot.display_execution_date))

    console.print(
        Panel(
            table,
            title="Angaben prüfen",
            subtitle="Bitte überprüfen Sie Ihre Überweisungsdaten.",
            border_style="blue",
        ),
    )


def render_success(console: Console, snapshot: TransferSnapshot) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="dim")
    table.add_column(justify="right")
    table.add_row("Empfänger", escape(snapshot.receiver))
    table.add_row("Betrag", f"[bold]{snapshot.formatted_amount}[/bold]")
    if snapshot.is_scheduled:
        table.add_row("Ausführung", f"[blue]{snapshot.display_execution_date}[/blue]")

    console.print(
        Panel(
            table,
            title="[green]✓ Überweisung erfolgreich![/green]",
            subtitle=f"Ihre {snapshot.transfer_kind.label} wurde entgegengenommen.",
            border_style="green",
        ),
    )
