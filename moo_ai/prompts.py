# Moo AI - Prompt Composer
# Turns (breed, topics, query) into the instruction blocks sent to the model.

from types import MappingProxyType
from typing import Iterable, Optional

from moo_ai.language import UNKNOWN, detect_language_by_utf
from moo_ai.topics import SUBTOPIC_EXTRACTORS, normalize_topics
from moo_ai.vocabulary import SUBTOPIC_KEYWORDS, Topic, VocabularyError

ASSISTANT_SYSTEM_PROMPT = """You are Moo AI, a cow care assistant for Indian dairy farmers and cattle keepers.

Answer questions about Indian cow breeds, their care, breeding and health using the instruction blocks in the user's message.
The safety and welfare of all cows is paramount. Never give advice on slaughter or meat.
Answer in plain text, don't use markdown."""

PERSONA_SYSTEM_PROMPT = (
    "You are an Indian cow. Your default identity is that of a General Indian Cow. "
    "You will answer questions from the user from your perspective as a cow of this breed. "
    "If the user specifies a particular Indian cow breed (e.g., Gir, Sahiwal, Tharparkar, etc.), "
    "you will then adopt the characteristics and perspective of that specific breed and answer accordingly. "
    "Remember, the safety and welfare of all cows is paramount. "
    "We should be treated with kindness and respect. "
    "Answer in plain text, don't use markdown."
)


# ─────────────────────────────────────────
# TEMPLATES
# ─────────────────────────────────────────

SUBTOPIC_TEMPLATES = MappingProxyType({
    Topic.GENERAL: {
        "origin": (
            "### Origin & History of {breed}:\n"
            "Provide a detailed explanation of the origin and historical development of the {breed} breed."
        ),
        "physical": (
            "### Physical Characteristics of {breed}:\n"
            "Describe the body structure, size, and distinctive traits of the {breed} breed."
        ),
        "importance": (
            "### Economic and Cultural Importance of {breed}:\n"
            "Explain the benefits and cultural significance of raising {breed} cattle."
        ),
    },
    Topic.CARE: {
        "feeding": (
            "### Feeding and Nutrition for {breed}:\n"
            "Provide recommendations for diet, feeding schedule, and essential nutrients for {breed}."
        ),
        "environment": (
            "### Environment and Climate for {breed}:\n"
            "Describe the ideal climate conditions and environmental management practices for {breed}."
        ),
        "shelter": (
            "### Shelter and Housing for {breed}:\n"
            "Explain best practices for cow housing and shelter design, including maintenance tips."
        ),
    },
    Topic.BREEDING: {
        "reproduction": (
            "### Reproductive Cycle & Maturity for {breed}:\n"
            "Provide details on the age of maturity, gestation period, and key reproductive features of {breed}."
        ),
        "techniques": (
            "### Breeding Techniques for {breed}:\n"
            "Discuss natural versus artificial insemination and recommended crossbreeding strategies for {breed}."
        ),
        "calving": (
            "### Calving and Neonatal Care for {breed}:\n"
            "Offer guidelines for calving and care instructions for newborn calves of the {breed} breed."
        ),
        "genetics": (
            "### Genetic Traits & Improvements for {breed}:\n"
            "Describe desired genetic traits in breeding pairs and strategies for improving herd quality in {breed}."
        ),
    },
    Topic.DISEASE: {
        "common": (
            "### Common Diseases Affecting {breed}:\n"
            "List and explain common diseases and their symptoms in {breed}."
        ),
        "diagnosis": (
            "### Diagnosis & Treatment for {breed}:\n"
            "Provide recommended veterinary treatments and diagnostic procedures for diseases affecting {breed}."
        ),
        "prevention": (
            "### Preventive Measures for {breed}:\n"
            "Detail vaccination schedules and biosecurity measures to prevent diseases in {breed}."
        ),
        "management": (
            "### Long-term Health Management for {breed}:\n"
            "Explain strategies for regular health screening and record-keeping for {breed}."
        ),
    },
})

# Used when a topic is active but the query names none of its subtopics
FULL_TOPIC_TEMPLATES = MappingProxyType({
    Topic.GENERAL: (
        "## General Information about {breed}:\n"
        "Provide comprehensive details covering origin, physical traits, and the benefits of raising {breed}."
    ),
    Topic.CARE: (
        "## Care and Management of {breed}:\n"
        "Provide an overview of the ideal climate, feeding recommendations, and sheltering practices for {breed}."
    ),
    Topic.BREEDING: (
        "## Breeding Information for {breed}:\n"
        "Provide a complete overview covering reproductive features, breeding conditions, "
        "and ideal crossbreeding strategies for {breed}."
    ),
    Topic.DISEASE: (
        "## Common Diseases & Prevention for {breed}:\n"
        "Provide comprehensive information on common diseases, symptoms, treatments, "
        "and preventive measures for {breed}."
    ),
})

LANGUAGE_TEMPLATE = (
    "### Language Preference:\n"
    "The user prefers responses in {language}. Please provide the answer in {language}."
)


def _check_templates() -> None:
    for topic, table in SUBTOPIC_KEYWORDS.items():
        if topic not in FULL_TOPIC_TEMPLATES:
            raise VocabularyError(f"no fallback template for {topic.value!r}")
        missing = set(table) - set(SUBTOPIC_TEMPLATES.get(topic, {}))
        if missing:
            raise VocabularyError(f"no template for {topic.value} subtopics: {sorted(missing)}")


_check_templates()


# ─────────────────────────────────────────
# COMPOSER
# ─────────────────────────────────────────

def compose_prompt(breed: str, topics: Iterable[str], query: str, locale: Optional[str] = None) -> str:
    """
    Build the instruction text for one turn.

    For every active topic (normalized, deduplicated, in order) the query is
    run through that topic's subtopic extractor. Each matched subtopic adds
    its own block; a topic with no matches adds its full-topic block instead.
    A language block goes last when the query's script is recognised.
    Blocks are separated by a blank line. Same inputs, same output.
    """
    blocks = []
    for topic in normalize_topics(topics):
        subtopics = SUBTOPIC_EXTRACTORS[topic](query)
        if subtopics:
            for sub in subtopics:
                blocks.append(SUBTOPIC_TEMPLATES[topic][sub].format(breed=breed))
        else:
            blocks.append(FULL_TOPIC_TEMPLATES[topic].format(breed=breed))

    language = detect_language_by_utf(query, locale=locale)
    if language != UNKNOWN:
        blocks.append(LANGUAGE_TEMPLATE.format(language=language))

    return "\n\n".join(blocks)


def build_completion_prompt(composed: str, query: str) -> str:
    """Instruction blocks followed by the user's own words."""
    question = f"### User Question:\n{(query or '').strip()}"
    return f"{composed}\n\n{question}" if composed else question
