#!/usr/bin/env python3
"""
Preview the prompts Moo AI would send for a conversation, without calling
any model.

Usage
-----
One turn:
    python scripts/preview_prompt.py "Tell me about Gir origin"

Several turns of the same session (state carries over between them):
    python scripts/preview_prompt.py "Tell me about Gir origin" "what about feeding"

Marathi UI locale (settles the Devanagari Hindi/Marathi tie):
    python scripts/preview_prompt.py --locale mr "गीर गायीचे मूळ"

Each turn prints the session state after the update and the full prompt.
Refused turns print the refusal and leave the state alone.
"""

import argparse
import os
import sys

# Make sure project root is on the path so we can import moo_ai/
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from moo_ai.orchestrator import ChatOrchestrator
from moo_ai.state import ConversationState


class _EchoCompleter:
    """Stands in for the model: hands back the prompt it was given."""

    def complete(self, prompt: str, system: str = None) -> str:
        return prompt


def main():
    parser = argparse.ArgumentParser(description="Preview Moo AI prompts for a simulated session.")
    parser.add_argument("turns", nargs="+", help="user messages, in order")
    parser.add_argument("--locale", default=None, help="UI locale code, e.g. hi, mr, kn")
    parser.add_argument("--breed", default=None, help="default breed before one is mentioned")
    args = parser.parse_args()

    orchestrator = ChatOrchestrator(_EchoCompleter(), default_breed=args.breed)
    state = ConversationState(locale=args.locale)

    for i, text in enumerate(args.turns, start=1):
        result = orchestrator.handle_turn(state, text)
        print(f"── Turn {i}: {text!r} " + "─" * 20)
        print(f"stage={result.stage.value}  breed={state.current_breed}  "
              f"topics={[t.value for t in state.current_topics]}")
        print()
        print(result.prompt if result.prompt is not None else result.reply)
        print()


if __name__ == "__main__":
    main()
