"""
Tests for breed matching and the shared fuzzy keyword primitive.
Run with: python -m pytest tests/test_matching.py -v
"""

import pytest

from moo_ai.matching import (
    SimilarityMatcher,
    containment_ratio,
    correct_breed_spelling,
    find_breed_mention,
    fuzzy_match,
    match_breed,
)
from moo_ai.vocabulary import BREEDS


# ─────────────────────────────────────────────────────────────
# match_breed (fuzzy)
# ─────────────────────────────────────────────────────────────

class TestMatchBreed:

    def test_exact_name(self):
        assert match_breed("Ongole") == "Ongole"

    def test_case_insensitive(self):
        assert match_breed("sahiwal") == "Sahiwal"

    def test_typo_corrected(self):
        assert match_breed("sahiwaal") == "Sahiwal"

    def test_typo_in_long_name(self):
        assert match_breed("Tharparker") == "Tharparkar"

    def test_multiword_phrase(self):
        assert match_breed("red sindi") == "Red Sindhi"

    def test_short_name_with_extra_letter(self):
        assert match_breed("girr") == "Gir"

    def test_unrelated_word_returns_none(self):
        assert match_breed("xyz") is None

    def test_empty_returns_none(self):
        assert match_breed("") is None

    def test_deterministic(self):
        assert match_breed("kankrage") == match_breed("kankrage")


# ─────────────────────────────────────────────────────────────
# find_breed_mention (exact, whole word)
# ─────────────────────────────────────────────────────────────

class TestFindBreedMention:

    def test_finds_breed_in_sentence(self):
        assert find_breed_mention("I love my GIR cow") == "Gir"

    def test_requires_whole_word(self):
        """'Girnar' contains 'gir' but is not the breed."""
        assert find_breed_mention("We went to the Girnar hills") is None

    def test_vocabulary_order_wins(self):
        """Gir comes before Sahiwal in the vocabulary, so it wins even though Sahiwal appears first."""
        assert find_breed_mention("Compare Sahiwal and Gir") == "Gir"

    def test_multiword_breed(self):
        assert find_breed_mention("how much milk does a red sindhi give") == "Red Sindhi"

    def test_misspelling_not_matched(self):
        assert find_breed_mention("tell me about sahiwaal") is None

    def test_none_and_empty(self):
        assert find_breed_mention("") is None
        assert find_breed_mention(None) is None

    @pytest.mark.parametrize("breed", BREEDS)
    def test_every_breed_detected(self, breed):
        assert find_breed_mention(f"how much milk does a {breed.upper()} give?") == breed


# ─────────────────────────────────────────────────────────────
# correct_breed_spelling (inline)
# ─────────────────────────────────────────────────────────────

class TestCorrectBreedSpelling:

    def test_replaces_misspelled_breed(self):
        assert correct_breed_spelling("tell me about sahiwaal cows") == "tell me about Sahiwal cows"

    def test_leaves_ordinary_words_alone(self):
        """'rather' is close to 'Rathi' but below the inline cutoff."""
        assert correct_breed_spelling("I would rather have a Gir") == "I would rather have a Gir"

    def test_empty(self):
        assert correct_breed_spelling("") == ""


# ─────────────────────────────────────────────────────────────
# fuzzy_match / SimilarityMatcher
# ─────────────────────────────────────────────────────────────

CARE_FEEDING = ["feed", "nutrition", "diet", "food"]
DISEASE_COMMON = ["common", "infection", "symptom", "illness", "disease"]


class TestFuzzyMatch:

    def test_stem_inside_longer_word(self):
        assert fuzzy_match("feeding", CARE_FEEDING)

    def test_plural(self):
        assert fuzzy_match("symptoms", DISEASE_COMMON)

    def test_typo(self):
        assert fuzzy_match("nutriton", CARE_FEEDING)

    def test_short_word_not_contained_in_keyword(self):
        """'is' appears inside 'disease' but must not count as a match."""
        assert not fuzzy_match("is", DISEASE_COMMON)

    def test_unrelated(self):
        assert not fuzzy_match("banana", CARE_FEEDING)

    def test_stricter_threshold_rejects(self):
        assert fuzzy_match("nutriton", CARE_FEEDING, threshold=80)
        assert not fuzzy_match("nutriton", CARE_FEEDING, threshold=95)


class TestSimilarityMatcher:

    def test_returns_candidate_and_distance(self):
        match = SimilarityMatcher().best_match("Gir", ["Sahiwal", "Gir"], 0.3)
        assert match == ("Gir", 0.0)

    def test_none_below_threshold(self):
        assert SimilarityMatcher().best_match("abc", ["Sahiwal"], 0.3) is None

    def test_empty_candidates(self):
        assert SimilarityMatcher().best_match("Gir", [], 0.3) is None

    def test_threshold_monotonic(self):
        """Anything accepted at a strict threshold is also accepted at a looser one."""
        matcher = SimilarityMatcher()
        words = ["sahiwaal", "girr", "deoni", "tharparker", "cow", "milk", "ongol"]
        strict = {w for w in words if matcher.best_match(w, BREEDS, 0.1)}
        loose = {w for w in words if matcher.best_match(w, BREEDS, 0.3)}
        assert strict <= loose

    def test_ties_go_to_first_candidate(self):
        match = SimilarityMatcher().best_match("ab", ["ax", "bx"], 0.6)
        assert match[0] == "ax"

    def test_containment_ratio_direction(self):
        assert containment_ratio("feeding", "feed") == 100
        assert containment_ratio("feed", "feeding") < 100
