# Moo AI - Conversation State
# Per-session memory of the breed and topics the user has been talking about.

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from moo_ai import config
from moo_ai.matching import find_breed_mention
from moo_ai.topics import normalize_topics
from moo_ai.vocabulary import Topic

logger = logging.getLogger(__name__)


@dataclass
class ConversationState:
    """
    Sticky session state.

    current_breed is overwritten only by a new exact breed mention and never
    cleared. current_topics only grows. locale is the user's UI language
    code (e.g. "hi", "mr") and is used to break script ties in language
    detection.
    """
    current_breed: Optional[str] = None
    current_topics: List[Topic] = field(default_factory=list)
    locale: Optional[str] = None
    turns: int = 0

    def to_dict(self) -> dict:
        return {
            "current_breed": self.current_breed,
            "current_topics": [t.value for t in self.current_topics],
            "locale": self.locale,
            "turns": self.turns,
        }


def update_state(query: str, state: ConversationState) -> None:
    """
    Fold one user turn into `state`, in place.

    1. An exact whole-word breed mention replaces current_breed.
    2. Topics found in the whitespace-split query are appended if new.
    A query that mentions neither leaves the state as it was.
    """
    breed = find_breed_mention(query)
    if breed:
        state.current_breed = breed

    for topic in normalize_topics((query or "").split()):
        if topic not in state.current_topics:
            state.current_topics.append(topic)


class SessionStore:
    """
    In-memory registry of ConversationState keyed by session id.

    A state lives from the first message of a session until close() is
    called or it has been idle for longer than `ttl` seconds. Idle sessions
    are swept on every access. ttl <= 0 keeps sessions until closed.
    Nothing is persisted across process restarts.
    """

    def __init__(self, ttl: float = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = config.SESSION_TTL_SECONDS if ttl is None else ttl
        self._clock = clock
        self._sessions: Dict[str, ConversationState] = {}
        self._last_seen: Dict[str, float] = {}

    def get(self, session_id: str) -> ConversationState:
        """State for `session_id`, created if new. Counts as activity."""
        self.evict_idle()
        self._last_seen[session_id] = self._clock()
        return self._sessions.setdefault(session_id, ConversationState())

    def peek(self, session_id: str) -> Optional[ConversationState]:
        """State for `session_id` or None. Does not refresh the idle timer."""
        self.evict_idle()
        return self._sessions.get(session_id)

    def close(self, session_id: str) -> bool:
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def evict_idle(self) -> int:
        """Drop sessions idle for longer than ttl. Returns how many were dropped."""
        if self.ttl <= 0:
            return 0
        cutoff = self._clock() - self.ttl
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for sid in expired:
            self.close(sid)
        if expired:
            logger.info("Evicted %d idle session(s)", len(expired))
        return len(expired)

    def __contains__(self, session_id: str) -> bool:
        self.evict_idle()
        return session_id in self._sessions

    def __len__(self) -> int:
        self.evict_idle()
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        self.evict_idle()
        return iter(list(self._sessions))
