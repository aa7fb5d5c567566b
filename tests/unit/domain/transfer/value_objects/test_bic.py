"""Unit tests for BIC validation."""

import pytest

from giro.domain.transfer.value_objects import is_valid_bic, normalize_bic


class TestIsValidBic:
    def test_eight_character_bic(self):
        assert is_valid_bic("DEUTDEFF") is True

    def test_eleven_character_bic(self):
        assert is_valid_bic("DEUTDEFF500") is True

    def test_six_characters_is_too_short(self):
        assert is_valid_bic("DEUTDE") is False

    @pytest.mark.parametrize(
        "bic",
        [
            "DEUTDEFF5",  # 9 characters
            "DEUTDEFF50",  # 10 characters
            "DEUTDEFF5000",  # 12 characters
            "1EUTDEFF",  # bank code must be letters
            "DEUT1EFF",  # country code must be letters
            "deutdeff",  # input is upper-cased on entry, not here
            "DEUT DEFF",
            "",
        ],
    )
    def test_rejects_malformed_bics(self, bic: str):
        assert is_valid_bic(bic) is False

    def test_location_and_branch_may_contain_digits(self):
        assert is_valid_bic("GENODEF1S04") is True
        assert is_valid_bic("COBADE33") is True


class TestNormalizeBic:
    def test_strips_spaces_and_uppercases(self):
        assert normalize_bic(" geno de f1 s04 ") == "GENODEF1S04"
