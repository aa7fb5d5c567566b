"""giro CLI application using Typer.

This module provides the interactive transfer wizard and small utilities
for checking account identifiers from the command line.
"""

import asyncio
import logging
import sys
from enum import Enum
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from giro.application.services import BankLookupGateway, is_lookup_eligible
from giro.application.wizard import BANK_LOOKUP_IN_PROGRESS, TransferWizard
from giro.domain.transfer.value_objects import (
    is_valid_bic,
    is_valid_iban,
    normalize_bic,
    normalize_iban,
)
from giro.infrastructure.banking import create_bank_lookup
from giro.presentation.cli.session import TransferSession
from giro_config import Settings, get_settings

app = typer.Typer(
    name="giro",
    help="giro - SEPA transfer wizard CLI",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)


class LookupProvider(str, Enum):
    directory = "directory"
    ollama = "ollama"
    none = "none"


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Configure application logging.

    - Console output with timestamps and module names, on stderr so it
      does not mix with the prompts
    - Configurable log level for giro modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level_str = "DEBUG" if verbose else settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=logging.WARNING,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,  # Override any existing config
    )

    logging.getLogger("giro").setLevel(log_level)
    logging.getLogger("giro_config").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _build_gateway(settings: Settings) -> BankLookupGateway:
    return BankLookupGateway(
        create_bank_lookup(settings),
        debounce_seconds=settings.bank_lookup_debounce_seconds,
    )


@app.callback()
def common(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
) -> None:
    """Global options."""
    configure_logging(get_settings(), verbose=verbose)


@app.command("transfer")
def transfer() -> None:
    """Enter a new transfer, check it and execute it."""
    settings = get_settings()
    console.print("\n[bold blue]Neue Überweisung[/bold blue]")

    async def _run() -> int:
        wizard = TransferWizard(_build_gateway(settings))
        return await TransferSession(wizard, console).run()

    executed = asyncio.run(_run())
    logger.debug("Session finished after %d transfer(s)", executed)


@app.command("check-iban")
def check_iban(iban: str = typer.Argument(..., help="IBAN, spaces allowed")) -> None:
    """Validate an IBAN (structure and mod-97 checksum)."""
    normalized = normalize_iban(iban)
    if is_valid_iban(normalized):
        console.print(f"[green]✓[/green] IBAN gültig: {escape(normalized)}")
        return
    console.print(f"[red]✗[/red] IBAN ungültig: {escape(normalized)}")
    raise typer.Exit(code=1)


@app.command("check-bic")
def check_bic(bic: str = typer.Argument(..., help="BIC with 8 or 11 characters")) -> None:
    """Validate the format of a BIC."""
    normalized = normalize_bic(bic)
    if is_valid_bic(normalized):
        console.print(f"[green]✓[/green] BIC gültig: {escape(normalized)}")
        return
    console.print(f"[red]✗[/red] Das Format der BIC ist ungültig: {escape(normalized)}")
    raise typer.Exit(code=1)


@app.command("lookup-bic")
def lookup_bic(
    bic: str = typer.Argument(..., help="BIC to resolve"),
    provider: Optional[LookupProvider] = typer.Option(
        None,
        "--provider",
        help="Override the configured lookup provider",
        case_sensitive=False,
    ),
) -> None:
    """Look up the bank name and city for a BIC."""
    settings = get_settings()
    if provider is not None:
        settings = settings.model_copy(
            update={"bank_lookup_provider": provider.value},
        )

    normalized = normalize_bic(bic)
    if not is_lookup_eligible(normalized):
        console.print(f"[red]✗[/red] Das Format der BIC ist ungültig: {escape(normalized)}")
        raise typer.Exit(code=1)

    gateway = _build_gateway(settings)
    with console.status(BANK_LOOKUP_IN_PROGRESS):
        info = asyncio.run(gateway.resolve(normalized))

    if info is None:
        console.print(f"[yellow]Keine Bankdaten gefunden für {escape(normalized)}[/yellow]")
        raise typer.Exit(code=2)
    console.print(f"[green]{escape(info.bank_name)}[/green] {escape(info.city)}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
