# Moo AI - Fixed Vocabularies
# Breed names, topic synonyms and subtopic keyword tables.
# Everything here is built once at import and never mutated afterwards.

from enum import Enum
from types import MappingProxyType


class VocabularyError(Exception):
    """Raised at import time when the fixed tables are inconsistent."""


class Topic(str, Enum):
    GENERAL = "general"
    CARE = "care"
    BREEDING = "breeding"
    DISEASE = "disease"

    def __str__(self) -> str:
        return self.value


# ─────────────────────────────────────────
# BREEDS
# ─────────────────────────────────────────

# Major Indian cow breeds. Order matters: exact-mention scans and fuzzy
# tie-breaks both take the first entry that qualifies.
BREEDS = (
    "Gir", "Sahiwal", "Tharparkar", "Red Sindhi", "Kankrej", "Ongole", "Vechur",
    "Deoni", "Hariana", "Rathi", "Krishna Valley", "Punganur", "Khillar", "Kangayam",
    "Kasargod Dwarf", "Amritmahal", "Bargur", "Hallikar", "Nagori", "Gaolao", "Dharwar",
)


# ─────────────────────────────────────────
# TOPIC SYNONYMS
# ─────────────────────────────────────────

_TOPIC_SYNONYMS = {
    "general": Topic.GENERAL,
    "gen": Topic.GENERAL,
    "general info": Topic.GENERAL,
    "information": Topic.GENERAL,
    "info": Topic.GENERAL,
    "care": Topic.CARE,
    "management": Topic.CARE,
    "feeding": Topic.CARE,
    "nutrition": Topic.CARE,
    "health care": Topic.CARE,
    "breeding": Topic.BREEDING,
    "reproduction": Topic.BREEDING,
    "repro": Topic.BREEDING,
    "mating": Topic.BREEDING,
    "disease": Topic.DISEASE,
    "diseases": Topic.DISEASE,
    "health": Topic.DISEASE,
    "illness": Topic.DISEASE,
    "sickness": Topic.DISEASE,
    "prevention": Topic.DISEASE,
}

# Subtopic cue words that only make sense under one parent topic.
# "trait" and "management" appear in two families so they are left out.
_TOPIC_CUES = {
    Topic.GENERAL: (
        "origin", "origins", "history", "evolution", "physical", "size",
        "importance", "economic", "cultural", "benefits",
    ),
    Topic.CARE: (
        "feed", "food", "diet", "climate", "weather", "environment",
        "shelter", "housing",
    ),
    Topic.BREEDING: (
        "gestation", "insemination", "crossbreeding", "crossbreed",
        "calving", "calf", "calves", "genetics", "maturity",
    ),
    Topic.DISEASE: (
        "symptom", "symptoms", "infection", "vaccine", "vaccination",
        "treatment", "diagnosis", "veterinary", "biosecurity",
    ),
}


def _build_topic_synonyms() -> dict:
    table = dict(_TOPIC_SYNONYMS)
    for topic, cues in _TOPIC_CUES.items():
        for cue in cues:
            # Explicit synonyms win over cue words
            table.setdefault(cue, topic)
    return table


TOPIC_SYNONYMS = MappingProxyType(_build_topic_synonyms())


# ─────────────────────────────────────────
# SUBTOPIC KEYWORDS
# ─────────────────────────────────────────

SUBTOPIC_KEYWORDS = MappingProxyType({
    Topic.GENERAL: MappingProxyType({
        "origin": ("origin", "history", "evolution"),
        "physical": ("physical", "size", "trait", "characteristic"),
        "importance": ("importance", "economic", "cultural", "benefit", "advantage"),
    }),
    Topic.CARE: MappingProxyType({
        "feeding": ("feed", "nutrition", "diet", "food"),
        "environment": ("environment", "climate", "weather"),
        "shelter": ("shelter", "housing", "pen", "management"),
    }),
    Topic.BREEDING: MappingProxyType({
        "reproduction": ("maturity", "reproductive", "gestation", "cycle"),
        "techniques": ("technique", "insemination", "crossbreed", "natural", "artificial"),
        "calving": ("calving", "birth", "neonatal", "newborn", "calf", "parturition"),
        "genetics": ("genetic", "trait", "improvement"),
    }),
    Topic.DISEASE: MappingProxyType({
        "common": ("common", "infection", "symptom", "illness", "disease"),
        "diagnosis": ("diagnosis", "treatment", "veterinary", "medicine"),
        "prevention": ("prevent", "vaccine", "immunization", "biosecurity"),
        "management": ("long-term", "management", "screening", "record"),
    }),
})


def validate_vocabulary(breeds=BREEDS, synonyms=TOPIC_SYNONYMS, subtopics=SUBTOPIC_KEYWORDS) -> None:
    """
    Check the fixed tables for consistency.

    Every synonym must resolve to a canonical Topic, every canonical topic
    must own a non-empty subtopic table, and no keyword list may be empty.
    There is no useful degraded mode without these tables, so any problem
    raises VocabularyError.
    """
    if not breeds:
        raise VocabularyError("breed vocabulary is empty")
    if len({b.lower() for b in breeds}) != len(breeds):
        raise VocabularyError("breed vocabulary contains duplicates")

    for word, topic in synonyms.items():
        if not isinstance(topic, Topic):
            raise VocabularyError(f"synonym {word!r} maps to unknown topic {topic!r}")
        if word != word.strip().lower():
            raise VocabularyError(f"synonym {word!r} is not normalized")

    missing = set(Topic) - set(subtopics)
    if missing:
        raise VocabularyError(f"no subtopic table for: {sorted(t.value for t in missing)}")

    for topic, table in subtopics.items():
        if not isinstance(topic, Topic):
            raise VocabularyError(f"subtopic table keyed by unknown topic {topic!r}")
        if not table:
            raise VocabularyError(f"subtopic table for {topic.value!r} is empty")
        for subtopic, keywords in table.items():
            if not keywords:
                raise VocabularyError(f"no keywords for {topic.value}/{subtopic}")


validate_vocabulary()
