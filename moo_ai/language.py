# Moo AI - Language Detection
# Script-range detection. Cheap and deterministic, but it cannot tell
# languages that share a script apart (Hindi vs Marathi on Devanagari).

import re
from typing import Optional

UNKNOWN = "Unknown"

# Checked in order; the first range with any character in the text wins.
LANGUAGE_RANGES = (
    ("Hindi", re.compile(r"[\u0900-\u097F]")),    # Devanagari
    ("Marathi", re.compile(r"[\u0900-\u097F]")),  # Devanagari (same as Hindi)
    ("Kannada", re.compile(r"[\u0C80-\u0CFF]")),
    ("Bengali", re.compile(r"[\u0980-\u09FF]")),
    ("English", re.compile(r"[a-zA-Z]")),
)

# UI locale codes that settle a shared-script tie
LOCALE_LANGUAGES = {
    "hi": "Hindi",
    "mr": "Marathi",
    "kn": "Kannada",
    "bn": "Bengali",
    "en": "English",
}

_DEVANAGARI = {"Hindi", "Marathi"}


def detect_language_by_utf(text: str, locale: Optional[str] = None) -> str:
    """
    Name of the first configured language whose script appears in `text`,
    or "Unknown".

    Devanagari always reads as Hindi unless the session's UI locale says
    Marathi.
    """
    text = text or ""
    for language, pattern in LANGUAGE_RANGES:
        if pattern.search(text):
            preferred = LOCALE_LANGUAGES.get((locale or "").lower())
            if language in _DEVANAGARI and preferred in _DEVANAGARI:
                return preferred
            return language
    return UNKNOWN
