import os
import sys

import pytest

# Add project root to path so moo_ai can be imported without installing it
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class FakeCompleter:
    """Records every prompt; returns `reply` or raises `error`."""

    def __init__(self, reply="Moo! Here is what I know.", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def complete(self, prompt, system=None):
        self.calls.append((prompt, system))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def completer():
    return FakeCompleter()
