"""Institute Directory - look up bank name and city by BIC from CSV."""

from __future__ import annotations

import asyncio
import csv
import logging
from dataclasses import dataclass
from io import StringIO
from pathlib import Path
from typing import Iterable, Optional

from giro.domain.banking.ports import BankLookupPort
from giro.domain.banking.value_objects import BankInfo
from giro.domain.shared.exceptions import DomainException, ErrorCode
from giro_config import get_config_dir

logger = logging.getLogger(__name__)

# CSV column indices (0-based)
COL_BLZ = 1
COL_BIC = 2
COL_NAME = 3
COL_CITY = 4

# 11-character BICs of a bank's head office end in this branch code
PRIMARY_OFFICE_BRANCH = "XXX"


@dataclass(frozen=True)
class InstituteInfo:
    """Information about a bank institute listed in the directory."""

    blz: str
    bic: str
    name: str
    city: str

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} ({self.bic})"

    def to_bank_info(self) -> BankInfo:
        return BankInfo(bank_name=self.name, city=self.city)


class InstituteDirectoryError(DomainException):
    """Base exception for Institute Directory errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.BANK_DIRECTORY_UNAVAILABLE)


class CsvFileNotFoundError(InstituteDirectoryError):
    """Raised when the CSV file cannot be found."""


class CsvParseError(InstituteDirectoryError):
    """Raised when the CSV file cannot be parsed."""


class InstituteDirectory:
    """
    Directory service for looking up bank institutes by BIC.

    Parses the CSV file from Deutsche Kreditwirtschaft listing German banks
    with their bank code, BIC, name and city.

    The CSV is expected to be semicolon-delimited with CP1252 encoding.
    """

    def __init__(
        self,
        csv_path: Optional[Path] = None,
        *,
        encoding: str = "cp1252",  # encoding of the published FinTS institute list
    ):
        self._csv_path = csv_path or (get_config_dir() / "fints_institute.csv")
        self._encoding = encoding
        self._bic_index: dict[str, InstituteInfo] = {}
        self._loaded = False
        self._load_error: Optional[Exception] = None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def load_error(self) -> Optional[Exception]:
        return self._load_error

    @property
    def institute_count(self) -> int:
        return len(self._bic_index)

    def load(self) -> bool:
        """Load institute data from CSV file on disk.

        A failed load is remembered and not retried until
        :meth:`invalidate_cache` is called.
        """
        if self._loaded:
            return True
        if self._load_error is not None:
            return False

        try:
            self._parse_csv_file()
            self._loaded = True
            self._load_error = None
            logger.info(
                "Loaded %d institutes from %s",
                len(self._bic_index),
                self._csv_path,
            )
            return True

        except FileNotFoundError:
            self._load_error = CsvFileNotFoundError(
                f"CSV file not found: {self._csv_path}",
            )
            logger.warning("Institute CSV not found: %s", self._csv_path)
            return False

        except Exception as e:
            self._load_error = CsvParseError(f"Failed to parse CSV: {e}")
            logger.warning("Failed to parse institute CSV: %s", e)
            return False

    def load_from_text(self, csv_text: str) -> bool:
        """Load institute data from already decoded CSV text."""
        if self._loaded:
            return True

        try:
            self._process_rows(csv.reader(StringIO(csv_text), delimiter=";"))
            self._loaded = True
            self._load_error = None
            return True

        except Exception as e:
            self._load_error = CsvParseError(f"Failed to parse CSV text: {e}")
            logger.warning("Failed to parse institute CSV text: %s", e)
            return False

    def invalidate_cache(self) -> None:
        """Clear loaded data and force reload on next access."""
        self._loaded = False
        self._load_error = None
        self._bic_index.clear()

    def _parse_csv_file(self) -> None:
        """Parse CSV from file on disk."""
        if not self._csv_path.exists():
            msg = f"CSV file not found: {self._csv_path}"
            raise FileNotFoundError(msg) from FileNotFoundError

        with Path(self._csv_path).open(encoding=self._encoding, newline="") as f:
            self._process_rows(csv.reader(f, delimiter=";"))

    def _process_rows(self, reader: Iterable[list[str]]) -> None:
        """Process CSV rows and populate the BIC index."""
        rows = iter(reader)
        # Skip header row
        try:
            next(rows)
        except StopIteration:
            msg = "CSV file is empty"
            raise CsvParseError(msg) from StopIteration

        row_count = 0
        for row_num, row in enumerate(rows, start=2):
            try:
                institute = self._parse_row(row)
                # Same BIC may appear for several branches; first one wins
                if institute and institute.bic not in self._bic_index:
                    self._bic_index[institute.bic] = institute
                    row_count += 1

            except Exception as e:
                # Log but continue parsing other rows
                logger.debug("Skipping row %d: %s", row_num, e)
                continue

        if row_count == 0:
            msg = "No valid institute entries found in CSV"
            raise CsvParseError(msg) from ValueError

    def _parse_row(self, row: list[str]) -> Optional[InstituteInfo]:
        # Ensure row has enough columns
        if len(row) <= COL_CITY:
            return None

        blz = row[COL_BLZ].strip()
        bic = row[COL_BIC].strip().upper()
        name = row[COL_NAME].strip()
        city = row[COL_CITY].strip()

        if not bic or not name:
            return None

        # Validate BIC length (8 or 11 characters)
        if len(bic) not in (8, 11):
            return None

        return InstituteInfo(blz=blz, bic=bic, name=name, city=city)

    def find_by_bic(self, bic: str) -> Optional[InstituteInfo]:
        """Find an institute by BIC.

        An 8-character BIC also matches the head office entry ``<BIC>XXX``
        and vice versa.
        """
        # Lazy load on first access
        if not self._loaded:
            self.load()

        # Normalize BIC (uppercase, no spaces)
        bic = bic.strip().upper().replace(" ", "")

        for candidate in _bic_variants(bic):
            institute = self._bic_index.get(candidate)
            if institute is not None:
                return institute
        return None


def _bic_variants(bic: str) -> list[str]:
    if len(bic) == 8:
        return [bic, bic + PRIMARY_OFFICE_BRANCH]
    if len(bic) == 11 and bic.endswith(PRIMARY_OFFICE_BRANCH):
        return [bic, bic[:8]]
    return [bic]


class InstituteDirectoryBankLookup(BankLookupPort):
    """Bank lookup backed by the institute directory CSV."""

    def __init__(self, directory: InstituteDirectory):
        self._directory = directory

    @property
    def provider_name(self) -> str:
        return "directory"

    async def lookup(self, bic: str) -> Optional[BankInfo]:
        try:
            if not self._directory.is_loaded:
                # File parsing blocks; keep it off the event loop
                loaded = await asyncio.to_thread(self._directory.load)
                if not loaded:
                    return None
            institute = self._directory.find_by_bic(bic)
        except Exception as e:
            logger.warning("Institute directory lookup failed for %s: %s", bic, e)
            return None

        if institute is None:
            logger.debug("BIC %s not found in institute directory", bic)
            return None

        return institute.to_bank_info()
