"""Banking infrastructure adapters."""

from giro.infrastructure.banking.bank_lookup_factory import create_bank_lookup
from giro.infrastructure.banking.institute_directory import (
    CsvFileNotFoundError,
    CsvParseError,
    InstituteDirectory,
    InstituteDirectoryBankLookup,
    InstituteDirectoryError,
    InstituteInfo,
)
from giro.infrastructure.banking.null_bank_lookup import NullBankLookup
from giro.infrastructure.banking.ollama_bank_lookup import OllamaBankLookup

__all__ = [
    "CsvFileNotFoundError",
    "CsvParseError",
    "InstituteDirectory",
    "InstituteDirectoryBankLookup",
    "InstituteDirectoryError",
    "InstituteInfo",
    "NullBankLookup",
    "OllamaBankLookup",
    "create_bank_lookup",
]
