"""Unit tests for InstituteDirectory and its bank lookup adapter."""

import logging
from pathlib import Path

import pytest

from giro.domain.banking.value_objects import BankInfo
from giro.infrastructure.banking import (
    CsvFileNotFoundError,
    CsvParseError,
    InstituteDirectory,
    InstituteDirectoryBankLookup,
    InstituteInfo,
)

_HEADER = (
    "Nr.;BLZ;BIC;Institut;Ort;RZ;Organisation;HBCI-Zugang DNS;"
    "HBCI-Zugang IP;HBCI-Version;DDV;RDH-1;RDH-2;RDH-3;RDH-4;RDH-5;"
    "RDH-6;RDH-7;RDH-8;RDH-9;RDH-10;RAH-7;RAH-9;RAH-10;PIN/TAN-Zugang URL;"
    "Version;Datum\n"
)


class TestInstituteInfo:
    """Tests for the InstituteInfo dataclass."""

    def test_create_institute_info(self):
        """Should create an immutable institute info object."""
        info = InstituteInfo(
            blz="50031000",
            bic="TRODDEF1XXX",
            name="Triodos Bank Deutschland",
            city="Frankfurt am Main",
        )

        assert info.blz == "50031000"
        assert info.bic == "TRODDEF1XXX"
        assert info.name == "Triodos Bank Deutschland"
        assert info.city == "Frankfurt am Main"

    def test_institute_info_is_immutable(self):
        """Should not allow modification after creation."""
        info = InstituteInfo(blz="1", bic="TRODDEF1XXX", name="Test", city="X")

        with pytest.raises(AttributeError):
            info.name = "Other"  # type: ignore

    def test_str_representation(self):
        info = InstituteInfo(
            blz="50031000",
            bic="TRODDEF1XXX",
            name="Triodos Bank",
            city="Frankfurt",
        )

        assert str(info) == "Triodos Bank (TRODDEF1XXX)"

    def test_to_bank_info(self):
        info = InstituteInfo(blz="1", bic="COBADEBBXXX", name="Commerzbank", city="Berlin")

        assert info.to_bank_info() == BankInfo(bank_name="Commerzbank", city="Berlin")


class TestInstituteDirectoryWithValidCsv:
    """Tests for InstituteDirectory with valid CSV data."""

    @pytest.fixture
    def valid_csv_content(self) -> str:
        """Create valid CSV content for testing."""
        return (
            _HEADER
            + "1;50031000;TRODDEF1XXX;Triodos Bank Deutschland;Frankfurt am Main;"
            "Atruvia AG;BVR;fints2.atruvia.de;;3.0;;;;;;;;ja;;ja;ja;;;;"
            "https://fints2.atruvia.de/cgi-bin/hbciservlet;FinTS V3.0;06.09.2023\n"
            "2;10040000;COBADEBBXXX;Commerzbank;Berlin;eigenes Rechenzentrum;BdB;"
            "hbci.commerzbank.de;;3.0;;ja;ja;ja;;ja;;;ja;ja;ja;;ja;ja;"
            "https://fints.commerzbank.de/fints;FinTS V3.0;27.02.2024\n"
            "3;12030000;BYLADEM1001;Deutsche Kreditbank Berlin (DKB) AG;Berlin;"
            "eigenes Rechenzentrum;VÖB;;;;;;;;;;;;;;;;;;"
            "https://fints.dkb.de/fints;FinTS V3.0;30.10.2024\n"
            "4;70150000;SSKMDEMM;Stadtsparkasse München;München;"
            "Finanz Informatik;DSGV;;;;;;;;;;;;;;;;;;;;\n"
        )

    @pytest.fixture
    def csv_file(self, valid_csv_content: str, tmp_path: Path) -> Path:
        """Create a temporary CSV file."""
        csv_path = tmp_path / "fints_institute.csv"
        csv_path.write_text(valid_csv_content, encoding="cp1252")
        return csv_path

    @pytest.fixture
    def directory(self, csv_file: Path) -> InstituteDirectory:
        return InstituteDirectory(csv_path=csv_file)

    def test_load_csv_successfully(self, directory: InstituteDirectory):
        """Should load CSV file successfully."""
        result = directory.load()

        assert result is True
        assert directory.is_loaded is True
        assert directory.load_error is None
        assert directory.institute_count == 4

    def test_find_by_bic_found(self, directory: InstituteDirectory):
        info = directory.find_by_bic("COBADEBBXXX")

        assert info is not None
        assert info.blz == "10040000"
        assert info.name == "Commerzbank"
        assert info.city == "Berlin"

    def test_cp1252_umlauts_are_decoded(self, directory: InstituteDirectory):
        info = directory.find_by_bic("SSKMDEMM")

        assert info is not None
        assert info.name == "Stadtsparkasse München"
        assert info.city == "München"

    def test_find_by_bic_normalizes_input(self, directory: InstituteDirectory):
        """Should normalize BIC input (case, spaces)."""
        info = directory.find_by_bic("  cobadebbxxx  ")

        assert info is not None
        assert info.bic == "COBADEBBXXX"

    def test_short_bic_matches_head_office(self, directory: InstituteDirectory):
        """An 8-character BIC finds the ``XXX`` head office entry."""
        info = directory.find_by_bic("COBADEBB")

        assert info is not None
        assert info.name == "Commerzbank"

    def test_head_office_bic_matches_short_entry(self, directory: InstituteDirectory):
        info = directory.find_by_bic("SSKMDEMMXXX")

        assert info is not None
        assert info.bic == "SSKMDEMM"

    def test_branch_bic_does_not_fall_back(self, directory: InstituteDirectory):
        assert directory.find_by_bic("BYLADEM1") is None
        assert directory.find_by_bic("COBADEBB123") is None

    def test_find_by_bic_not_found(self, directory: InstituteDirectory):
        assert directory.find_by_bic("UNKNOWNXXX") is None

    def test_lazy_loading(self, directory: InstituteDirectory):
        """Should lazy load on first find_by_bic call."""
        assert directory.is_loaded is False

        directory.find_by_bic("COBADEBBXXX")

        assert directory.is_loaded is True

    def test_multiple_loads_are_idempotent(self, directory: InstituteDirectory):
        directory.load()
        count_after_first = directory.institute_count

        directory.load()

        assert directory.institute_count == count_after_first

    def test_invalidate_cache(self, directory: InstituteDirectory):
        directory.load()

        directory.invalidate_cache()

        assert directory.is_loaded is False
        assert directory.institute_count == 0
        assert directory.find_by_bic("COBADEBBXXX") is not None

    def test_load_from_text(self, valid_csv_content: str, tmp_path: Path):
        directory = InstituteDirectory(csv_path=tmp_path / "unused.csv")

        assert directory.load_from_text(valid_csv_content) is True
        assert directory.institute_count == 4


class TestInstituteDirectoryEdgeCases:
    """Tests for edge cases and error handling."""

    def test_file_not_found(self, tmp_path: Path):
        """Should handle missing CSV file gracefully."""
        directory = InstituteDirectory(csv_path=tmp_path / "nonexistent.csv")

        result = directory.load()

        assert result is False
        assert directory.is_loaded is False
        assert isinstance(directory.load_error, CsvFileNotFoundError)

    def test_file_not_found_find_returns_none(self, tmp_path: Path):
        directory = InstituteDirectory(csv_path=tmp_path / "nonexistent.csv")

        assert directory.find_by_bic("COBADEBBXXX") is None
        assert directory.is_loaded is False

    def test_failed_load_is_not_retried(self, tmp_path: Path, caplog):
        """Should warn once and keep the failure until the cache is invalidated."""
        csv_path = tmp_path / "late.csv"
        directory = InstituteDirectory(csv_path=csv_path)

        with caplog.at_level(logging.WARNING):
            assert directory.load() is False
            assert directory.load() is False
            assert directory.find_by_bic("COBADEBBXXX") is None

        assert len(caplog.records) == 1

        csv_path.write_text(
            "Nr.;BLZ;BIC;Institut;Ort;RZ\n1;10040000;COBADEBBXXX;Commerzbank;Berlin;\n",
            encoding="cp1252",
        )
        assert directory.load() is False

        directory.invalidate_cache()

        assert directory.load() is True
        assert directory.load_error is None

    def test_empty_csv_file(self, tmp_path: Path):
        csv_path = tmp_path / "empty.csv"
        csv_path.write_text("", encoding="cp1252")

        directory = InstituteDirectory(csv_path=csv_path)

        assert directory.load() is False
        assert isinstance(directory.load_error, CsvParseError)

    def test_csv_with_only_header(self, tmp_path: Path):
        csv_path = tmp_path / "header_only.csv"
        csv_path.write_text("Nr.;BLZ;BIC;Institut;Ort;etc\n", encoding="cp1252")

        directory = InstituteDirectory(csv_path=csv_path)

        assert directory.load() is False
        assert isinstance(directory.load_error, CsvParseError)

    def test_csv_with_invalid_rows(self, tmp_path: Path):
        """Should skip invalid rows but continue parsing."""
        csv_content = (
            "Nr.;BLZ;BIC;Institut;Ort;RZ\n"
            "1;11111111;XXX;Bad BIC;City;\n"
            "2;50031000;TRODDEF1XXX;Valid Bank;Frankfurt;\n"
            "3;22222222;GENODEF1S04;;City;\n"  # no name
            "4;33333333\n"  # too short
        )
        csv_path = tmp_path / "mixed.csv"
        csv_path.write_text(csv_content, encoding="cp1252")

        directory = InstituteDirectory(csv_path=csv_path)

        assert directory.load() is True
        assert directory.institute_count == 1
        assert directory.find_by_bic("TRODDEF1XXX") is not None

    def test_csv_with_duplicate_bic(self, tmp_path: Path):
        """Should keep first occurrence of a BIC shared by several rows."""
        csv_content = (
            "Nr.;BLZ;BIC;Institut;Ort;RZ\n"
            "1;50031000;TRODDEF1XXX;First Bank;City1;\n"
            "2;50031001;TRODDEF1XXX;Second Bank;City2;\n"
        )
        csv_path = tmp_path / "duplicates.csv"
        csv_path.write_text(csv_content, encoding="cp1252")

        directory = InstituteDirectory(csv_path=csv_path)
        directory.load()

        info = directory.find_by_bic("TRODDEF1XXX")
        assert info is not None
        assert info.name == "First Bank"

    def test_load_from_invalid_text(self, tmp_path: Path):
        directory = InstituteDirectory(csv_path=tmp_path / "unused.csv")

        assert directory.load_from_text("") is False
        assert isinstance(directory.load_error, CsvParseError)


class TestInstituteDirectoryBankLookup:
    @pytest.fixture
    def lookup(self, tmp_path: Path) -> InstituteDirectoryBankLookup:
        csv_path = tmp_path / "fints_institute.csv"
        csv_path.write_text(
            "Nr.;BLZ;BIC;Institut;Ort;RZ\n1;10040000;COBADEBBXXX;Commerzbank;Berlin;\n",
            encoding="cp1252",
        )
        return InstituteDirectoryBankLookup(InstituteDirectory(csv_path=csv_path))

    def test_provider_name(self, lookup):
        assert lookup.provider_name == "directory"

    @pytest.mark.asyncio
    async def test_lookup_found(self, lookup):
        info = await lookup.lookup("COBADEBB")

        assert info == BankInfo(bank_name="Commerzbank", city="Berlin")

    @pytest.mark.asyncio
    async def test_lookup_not_found(self, lookup):
        assert await lookup.lookup("DEUTDEFF") is None

    @pytest.mark.asyncio
    async def test_missing_file_gives_none(self, tmp_path: Path):
        lookup = InstituteDirectoryBankLookup(
            InstituteDirectory(csv_path=tmp_path / "missing.csv"),
        )

        assert await lookup.lookup("COBADEBB") is None

    @pytest.mark.asyncio
    async def test_missing_file_warns_once_over_repeated_lookups(
        self, tmp_path: Path, caplog
    ):
        lookup = InstituteDirectoryBankLookup(
            InstituteDirectory(csv_path=tmp_path / "missing.csv"),
        )

        with caplog.at_level(logging.WARNING):
            for bic in ("COBADEBB", "DEUTDEFF", "COBADEBBXXX"):
                assert await lookup.lookup(bic) is None

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "not found" in warnings[0].getMessage()
