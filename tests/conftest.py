import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)


class ScriptedSource:
    """Deterministic RandomSource: replays queued indices and values.

    Falls back to index 0 and the first candidate value once a queue runs dry.
    """

    def __init__(self, indices=(), values=()):
        self.indices = list(indices)
        self.values = list(values)
        self.index_calls = []

    def uniform_index(self, n):
        self.index_calls.append(n)
        idx = self.indices.pop(0) if self.indices else 0
        assert 0 <= idx < n
        return idx

    def weighted_choice(self, values, weights):
        value = self.values.pop(0) if self.values else values[0]
        assert value in values
        return value


@pytest.fixture
def scripted():
    return ScriptedSource
