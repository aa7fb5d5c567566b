"""Free-text normalization for transfer fields."""

# SEPA character set has no umlauts; banks transliterate them
_DIACRITIC_REPLACEMENTS = {
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
    "Ä": "Ae",
    "Ö": "Oe",
    "Ü": "Ue",
    "ß": "ss",
}

_TRANSLATION_TABLE = str.maketrans(_DIACRITIC_REPLACEMENTS)


def normalize_diacritics(text: str) -> str:
    """Replace German umlauts and sharp s with their ASCII transliteration."""
    return text.translate(_TRANSLATION_TABLE)
