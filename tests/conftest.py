"""
Shared fixtures: a scripted random source and recording collaborators.
"""

import random

import pytest

from neondefense.bridges import RenderBridge
from neondefense.models.registry import EntityRegistry
from neondefense.ui.text import ScoreDisplay


class ScriptedRandom(random.Random):
    """Random source that replays a fixed list of fractions in [0, 1).

    ``uniform(a, b)`` returns ``a + (b - a) * t`` and ``choice(seq)``
    returns ``seq[int(t * len(seq))]`` for the next scripted ``t``.
    Once the script runs out every draw is 0.5.
    """

    def __init__(self, values=()):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return 0.5

    def uniform(self, a, b):
        return a + (b - a) * self.random()

    def choice(self, seq):
        return seq[int(self.random() * len(seq))]


class RecordingAudio:
    def __init__(self):
        self.events = []

    def play(self, event, **params):
        self.events.append((event, params))

    def count(self, event):
        return sum(1 for e, _ in self.events if e is event)


class RecordingRender(RenderBridge):
    def __init__(self):
        self.created = []
        self.updated = []
        self.removed = []

    def on_entity_created(self, entity, visual_kind):
        self.created.append((entity, visual_kind))
        return ("handle", len(self.created))

    def on_entity_updated(self, entity):
        self.updated.append(entity)

    def on_entity_removed(self, entity):
        self.removed.append(entity)


class ExplodingRender(RenderBridge):
    def on_entity_created(self, entity, visual_kind):
        raise RuntimeError("render down")

    def on_entity_updated(self, entity):
        raise RuntimeError("render down")

    def on_entity_removed(self, entity):
        raise RuntimeError("render down")


class ExplodingAudio:
    def play(self, event, **params):
        raise RuntimeError("audio down")


class ExplodingStore:
    def load_high_score(self):
        raise OSError("disk gone")

    def save_high_score(self, score):
        raise OSError("disk gone")


class MemoryStore:
    def __init__(self, high_score=0):
        self.high_score = high_score
        self.saves = []

    def load_high_score(self):
        return self.high_score

    def save_high_score(self, score):
        self.saves.append(score)
        self.high_score = score


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def render():
    return RecordingRender()


@pytest.fixture
def registry(render):
    reg = EntityRegistry(render=render)
    reg.seed_structures()
    return reg


@pytest.fixture
def score():
    return ScoreDisplay()


@pytest.fixture
def fakes():
    """Collaborator doubles, for tests that build their own Game."""
    from types import SimpleNamespace

    return SimpleNamespace(
        ScriptedRandom=ScriptedRandom,
        RecordingAudio=RecordingAudio,
        RecordingRender=RecordingRender,
        ExplodingRender=ExplodingRender,
        ExplodingAudio=ExplodingAudio,
        ExplodingStore=ExplodingStore,
        MemoryStore=MemoryStore,
    )
