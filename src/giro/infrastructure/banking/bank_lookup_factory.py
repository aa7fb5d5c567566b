"""Factory for the configured bank lookup provider."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from giro.infrastructure.banking.institute_directory import (
    InstituteDirectory,
    InstituteDirectoryBankLookup,
)
from giro.infrastructure.banking.null_bank_lookup import NullBankLookup
from giro.infrastructure.banking.ollama_bank_lookup import OllamaBankLookup

if TYPE_CHECKING:
    from giro.domain.banking.ports import BankLookupPort
    from giro_config import Settings

logger = logging.getLogger(__name__)


def create_bank_lookup(settings: Settings) -> BankLookupPort:
    """Build the bank lookup provider selected by ``bank_lookup_provider``."""
    provider = settings.bank_lookup_provider

    if provider == "ollama":
        lookup: BankLookupPort = OllamaBankLookup(
            model=settings.ollama_model,
            base_url=settings.ollama_base_url,
            timeout=settings.ollama_timeout,
        )
    elif provider == "directory":
        directory = InstituteDirectory(
            settings.resolved_institute_csv_path,
            encoding=settings.institute_csv_encoding,
        )
        lookup = InstituteDirectoryBankLookup(directory)
    else:
        lookup = NullBankLookup()

    logger.debug("Using bank lookup provider %s", lookup.provider_name)
    return lookup
