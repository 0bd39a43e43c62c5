"""
Pytest configuration and shared fixtures.
"""
import random
from typing import List, Optional

import pytest

from load_balancer.config import Settings
from load_balancer.gameplay.persistence import MemoryStore
from load_balancer.gameplay.session import Session
from load_balancer.gameplay.state import GameState


class ScriptedRandom(random.Random):
    """Random source that replays fixed draws for random()."""

    def __init__(self, draws: List[float]):
        super().__init__(0)
        self.draws = list(draws)

    def random(self) -> float:
        return self.draws.pop(0)


class CountingStore(MemoryStore):
    """Memory store that counts writes."""

    def __init__(self, initial: Optional[dict] = None):
        super().__init__(initial)
        self.writes = 0

    def set(self, key: str, value: int) -> None:
        self.writes += 1
        super().set(key, value)


class BrokenStore:
    """Store whose backing storage is unavailable."""

    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return random.Random(42)


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def state():
    return GameState(is_playing=True)


@pytest.fixture
def session(settings, store, rng):
    """A started session with a memory store."""
    s = Session(settings, store=store, rng=rng)
    s.start()
    return s
