# Moo AI - Response Orchestrator
# Runs one chat turn end to end: filter, state update, prompt, completion.
#
# Per-turn stages:
#   IDLE -> FILTERING -> REFUSED                                       (done)
#                     -> STATE_UPDATING -> PROMPT_COMPOSING -> DELEGATING -> DONE
#
# Only ConversationState survives between turns.

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from moo_ai import config
from moo_ai.completion import CompletionError
from moo_ai.ethics import REFUSAL_MESSAGE, is_problematic
from moo_ai.matching import (
    BREED_LOOSENESS,
    breed_matcher,
    correct_breed_spelling,
    find_breed_mention,
    match_breed,
)
from moo_ai.prompts import PERSONA_SYSTEM_PROMPT, build_completion_prompt, compose_prompt
from moo_ai.state import ConversationState, SessionStore, update_state
from moo_ai.vocabulary import BREEDS

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Sorry, I couldn't process your request. Please try again."

# A turn this short with no exact breed in it may be a lone breed name with a
# typo ("sahiwaal" -> "Sahiwal", "red sindi" -> "Red Sindhi").
MAX_FREESTANDING_WORDS = 2

_MULTIWORD_BREEDS = tuple(b for b in BREEDS if " " in b)


class TurnStage(str, Enum):
    IDLE = "idle"
    FILTERING = "filtering"
    REFUSED = "refused"
    STATE_UPDATING = "state_updating"
    PROMPT_COMPOSING = "prompt_composing"
    DELEGATING = "delegating"
    DONE = "done"


@dataclass
class TurnResult:
    reply: str
    stage: TurnStage
    prompt: Optional[str] = None
    delegated: bool = False
    failed: bool = False

    @property
    def refused(self) -> bool:
        return self.stage == TurnStage.REFUSED


def correct_freestanding_breed(text: str) -> str:
    """
    Spell-correct breed names in a one- or two-word turn.

    A single word, or a two-word phrase that is itself a two-word breed, is
    replaced by the canonical name. Any other two-word turn is corrected word
    by word so the non-breed word ("Sahiwaal feed" -> "Sahiwal feed") is kept.
    Longer turns and turns with an exact breed mention come back unchanged.
    """
    words = (text or "").split()
    if not words or len(words) > MAX_FREESTANDING_WORDS:
        return text
    if find_breed_mention(text):
        return text
    if len(words) == 1:
        return match_breed(words[0]) or text

    phrase = " ".join(words)
    match = breed_matcher.best_match(phrase, _MULTIWORD_BREEDS, BREED_LOOSENESS)
    if match:
        return match[0]
    corrected = correct_breed_spelling(phrase)
    return corrected if corrected != phrase else text


class ChatOrchestrator:
    """
    Entry point used by the chat UI / HTTP layer.

    completer is anything with complete(prompt, system=None) -> str.
    The session's ConversationState is passed in explicitly (handle_turn) or
    looked up by id (process_turn).
    """

    def __init__(self, completer, sessions: SessionStore = None,
                 default_breed: str = None, default_topics: Sequence[str] = None):
        self.completer = completer
        self.sessions = sessions if sessions is not None else SessionStore()
        self.default_breed = default_breed or config.DEFAULT_BREED
        self.default_topics = list(default_topics or config.DEFAULT_TOPICS)

    def process_turn(self, session_id: str, user_text: str) -> str:
        state = self.sessions.get(session_id)
        return self.handle_turn(state, user_text).reply

    def handle_turn(self, state: ConversationState, user_text: str) -> TurnResult:
        """
        Run one turn against `state`.

        Never raises: a refused query returns the refusal text, and any
        failure after filtering returns FALLBACK_MESSAGE. A refused query
        returns before the state update, so it leaves state untouched.
        """
        if is_problematic(user_text):
            logger.info("[REFUSED] query matched the disallowed keyword list")
            return TurnResult(reply=REFUSAL_MESSAGE, stage=TurnStage.REFUSED)

        prompt = None
        try:
            stage = TurnStage.STATE_UPDATING
            query = correct_freestanding_breed(user_text or "")
            update_state(query, state)
            state.turns += 1

            stage = TurnStage.PROMPT_COMPOSING
            breed = state.current_breed or self.default_breed
            topics = state.current_topics or self.default_topics
            composed = compose_prompt(breed, topics, query, locale=state.locale)
            prompt = build_completion_prompt(composed, query)

            stage = TurnStage.DELEGATING
            t0 = time.time()
            reply = self.completer.complete(prompt)
            logger.info("[TIMING] turn delegated in %.2fs (breed=%s, topics=%s)",
                        time.time() - t0, breed, [str(t) for t in topics])
        except CompletionError as e:
            logger.error("[COMPLETION] delegated call failed: %s", e)
            return TurnResult(reply=FALLBACK_MESSAGE, stage=TurnStage.DONE, prompt=prompt,
                              delegated=True, failed=True)
        except Exception:
            logger.exception("[COMPLETION] turn failed during %s", stage.value)
            return TurnResult(reply=FALLBACK_MESSAGE, stage=TurnStage.DONE, prompt=prompt,
                              delegated=stage == TurnStage.DELEGATING, failed=True)

        return TurnResult(reply=reply, stage=TurnStage.DONE, prompt=prompt, delegated=True)

    def persona_reply(self, user_text: str) -> str:
        """
        Single-turn "talk to a cow" chat: breed typos are corrected and the
        model answers in character. No session state is kept.
        """
        if is_problematic(user_text):
            logger.info("[REFUSED] persona query matched the disallowed keyword list")
            return REFUSAL_MESSAGE
        corrected = correct_breed_spelling(user_text or "")
        try:
            return self.completer.complete(corrected, system=PERSONA_SYSTEM_PROMPT)
        except CompletionError as e:
            logger.error("[COMPLETION] persona call failed: %s", e)
        except Exception:
            logger.exception("[COMPLETION] persona call failed")
        return FALLBACK_MESSAGE

    def close_session(self, session_id: str) -> bool:
        return self.sessions.close(session_id)
