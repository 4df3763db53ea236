import re
import unicodedata
from functools import lru_cache

# German letters that must be transliterated, not just stripped of their marks
TRANSLITERATIONS: dict[str, str] = {
    "ß": "ss",
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
}

# Abbreviations common in EFA stop names (lowercase -> expanded).
# Applied in order, so an entry must come before any shorter one it contains.
ABBREVIATIONS: dict[str, str] = {
    "str.": "strasse",
    "pl.": "platz",
    "s-bf.": "bahnhof",
    "s-bf": "bahnhof",
    "hbf.": "hauptbahnhof",
    "hbf": "hauptbahnhof",
    "bf.": "bahnhof",
}

# Five-digit German postal codes carry no information about the stop name
POSTAL_CODE = re.compile(r"\b\d{5}\b")

PUNCTUATION = re.compile(r"[,;()]")


@lru_cache(maxsize=4096)
def remove_accents(text: str) -> str:
    """Remove accents from text.

    Example: "Café Möhnesee" -> "Cafe Mohnesee"
    """
    # Normalize to NFD (decomposes accented characters)
    normalized = unicodedata.normalize("NFD", text)
    # Remove combining diacritical marks
    return "".join(c for c in normalized if unicodedata.category(c) != "Mn")


@lru_cache(maxsize=4096)
def normalize_text(text: str) -> str:
    """Normalize an address or stop name for fuzzy comparison.

    - Converts to lowercase
    - Transliterates umlauts and ß, removes other accents
    - Drops postal codes and punctuation
    - Expands abbreviations
    - Normalizes whitespace

    Example: "Mergelteichstraße 80, 44225 Dortmund" -> "mergelteichstrasse 80 dortmund"
    Example: "Dortmund, Mergelteichstr." -> "dortmund mergelteichstrasse"
    """
    result = text.lower().strip()

    for letter, replacement in TRANSLITERATIONS.items():
        result = result.replace(letter, replacement)
    result = remove_accents(result)

    result = POSTAL_CODE.sub(" ", result)

    for abbrev, expanded in ABBREVIATIONS.items():
        if abbrev.endswith("."):
            # also matches as a suffix, e.g. "mergelteichstr." -> "mergelteichstrasse"
            result = result.replace(abbrev, expanded)
        else:
            result = re.sub(rf"\b{re.escape(abbrev)}\b", expanded, result)

    result = PUNCTUATION.sub(" ", result)

    return " ".join(result.split())
