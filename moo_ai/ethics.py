# Moo AI - Ethical Filter
# Blunt keyword gate for meat/slaughter requests. Substring match, no scoring.

REFUSAL_MESSAGE = "I'm sorry, but I cannot assist with that request."

DISALLOWED_KEYWORDS = (
    "cooking",
    "butchering",
    "beef",
    "eating",
    "juicy",
    "consumption",
    "meat",
    "slaughter",
)


def is_problematic(query: str) -> bool:
    query_lower = (query or "").lower()
    return any(word in query_lower for word in DISALLOWED_KEYWORDS)
