# Moo AI - Topics & Subtopics
# Maps freeform words onto the four canonical topics, then refines each
# topic into subtopics with fuzzy keyword matching.

from typing import Iterable, List

from moo_ai.matching import fuzzy_match
from moo_ai.vocabulary import SUBTOPIC_KEYWORDS, TOPIC_SYNONYMS, Topic

_STRIP_CHARS = " \t\r\n.,!?;:'\"()[]"


def normalize_topics(words: Iterable[str]) -> List[Topic]:
    """
    Canonical topics for a list of words or short phrases.

    Unknown words are dropped. Duplicates are removed and first-seen order is
    kept, so feeding the output back in (as strings) returns the same list.
    """
    normalized: List[Topic] = []
    for word in words:
        topic = TOPIC_SYNONYMS.get(str(word).strip(_STRIP_CHARS).lower())
        if topic is not None and topic not in normalized:
            normalized.append(topic)
    return normalized


def extract_subtopics(topic: Topic, query: str) -> List[str]:
    """
    Subtopics of `topic` that the query touches on, in table order.

    Each subtopic is activated by the first query word that fuzzy-matches
    one of its keywords; it is never added twice.
    """
    query_words = (query or "").lower().split()
    subtopics = []
    for subtopic, keywords in SUBTOPIC_KEYWORDS[Topic(topic)].items():
        for word in query_words:
            if fuzzy_match(word, keywords):
                subtopics.append(subtopic)
                break
    return subtopics


def extract_general_subtopics(query: str) -> List[str]:
    return extract_subtopics(Topic.GENERAL, query)


def extract_care_subtopics(query: str) -> List[str]:
    return extract_subtopics(Topic.CARE, query)


def extract_breeding_subtopics(query: str) -> List[str]:
    return extract_subtopics(Topic.BREEDING, query)


def extract_disease_subtopics(query: str) -> List[str]:
    return extract_subtopics(Topic.DISEASE, query)


SUBTOPIC_EXTRACTORS = {
    Topic.GENERAL: extract_general_subtopics,
    Topic.CARE: extract_care_subtopics,
    Topic.BREEDING: extract_breeding_subtopics,
    Topic.DISEASE: extract_disease_subtopics,
}
