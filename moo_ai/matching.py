# Moo AI - Fuzzy Matching
# Breed-name correction and keyword containment tests, built on rapidfuzz.

import re
from typing import Callable, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process, utils

from moo_ai.vocabulary import BREEDS

# Looseness is a 0..1 distance (0 = identical), the way the mobile app tuned it.
# A candidate is accepted when its distance is <= looseness.
BREED_LOOSENESS = 0.3
# Inline word-by-word correction runs over every token of a sentence, so it
# needs a tighter cutoff to leave words like "rather" alone.
INLINE_BREED_LOOSENESS = 0.2
KEYWORD_THRESHOLD_PERCENT = 80

# Keywords this long or longer may match as a stem inside a longer word
# ("feed" in "feeding", "symptom" in "symptoms").
MIN_STEM_LENGTH = 4


def containment_ratio(word: str, keyword: str, **kwargs) -> float:
    """
    Similarity (0–100) between a query word and a keyword.

    Plain Levenshtein-style ratio, raised to the substring-aligned ratio when
    the keyword is a long-enough stem and shorter than the word. The reverse
    direction is not allowed: "is" must not match inside "disease".
    """
    score = fuzz.ratio(word, keyword)
    if len(keyword) >= MIN_STEM_LENGTH and len(word) > len(keyword):
        score = max(score, fuzz.partial_ratio(keyword, word))
    return score


class SimilarityMatcher:
    """
    Thin wrapper over rapidfuzz.process.extractOne.

    best_match() returns (candidate, distance) where distance is
    1 - similarity/100, or None when nothing is within `threshold`.
    A stricter threshold can only ever shrink the set of accepted matches.
    Ties go to the candidate listed first.
    """

    def __init__(self, scorer: Callable = fuzz.ratio, processor: Callable = utils.default_process):
        self.scorer = scorer
        self.processor = processor

    def best_match(self, query: str, candidates: Sequence[str], threshold: float) -> Optional[Tuple[str, float]]:
        if not query or not candidates:
            return None
        result = process.extractOne(
            query,
            candidates,
            scorer=self.scorer,
            processor=self.processor,
            score_cutoff=round((1 - threshold) * 100, 6),
        )
        if result is None:
            return None
        candidate, score, _ = result
        return candidate, round(1 - score / 100, 4)


breed_matcher = SimilarityMatcher()
keyword_matcher = SimilarityMatcher(scorer=containment_ratio)


# ─────────────────────────────────────────
# BREEDS
# ─────────────────────────────────────────

def match_breed(word: str, looseness: float = BREED_LOOSENESS) -> Optional[str]:
    """Best fuzzy breed for a single word or short phrase, or None."""
    match = breed_matcher.best_match(word, BREEDS, looseness)
    return match[0] if match else None


_BREED_PATTERNS = tuple(
    (breed, re.compile(rf"\b{re.escape(breed.lower())}\b"))
    for breed in BREEDS
)


def find_breed_mention(text: str) -> Optional[str]:
    """
    First breed (in vocabulary order) that appears in `text` as a whole word,
    case-insensitively. Exact only; typos are not considered here.
    """
    text_lower = (text or "").lower()
    for breed, pattern in _BREED_PATTERNS:
        if pattern.search(text_lower):
            return breed
    return None


def correct_breed_spelling(text: str) -> str:
    """
    Replace misspelled breed names word by word.
    e.g. "tell me about sahiwaal cows" -> "tell me about Sahiwal cows"
    """
    corrected = []
    for word in (text or "").split(" "):
        if len(word) < 3:
            corrected.append(word)
            continue
        breed = match_breed(word, looseness=INLINE_BREED_LOOSENESS)
        corrected.append(breed if breed else word)
    return " ".join(corrected)


# ─────────────────────────────────────────
# KEYWORDS
# ─────────────────────────────────────────

def fuzzy_match(word: str, keywords: Sequence[str], threshold: int = KEYWORD_THRESHOLD_PERCENT) -> bool:
    """True if `word` matches any keyword with at least `threshold` percent similarity."""
    return keyword_matcher.best_match(word, keywords, 1 - threshold / 100) is not None
