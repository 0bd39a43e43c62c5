"""
Difficulty escalation by wave.
NO UI DEPENDENCIES.
"""
from typing import Optional

from .constants import (
    SPAWN_INTERVAL_INITIAL, SPAWN_INTERVAL_MIN, SPAWN_INTERVAL_DECAY,
    WAVE_INTERVAL, WAVE_SPEED_STEP
)
from .events import WaveAdvancedEvent
from .state import GameState


class DifficultyController:
    """
    Tracks play time and raises the wave every `wave_interval` ms.

    Each new wave shortens the spawn interval (floored at `min_interval`)
    and, through `speed_multiplier`, makes new packets fall faster.
    """

    def __init__(
        self,
        state: GameState,
        wave_interval: float = WAVE_INTERVAL,
        initial_interval: float = SPAWN_INTERVAL_INITIAL,
        min_interval: float = SPAWN_INTERVAL_MIN,
        decay: float = SPAWN_INTERVAL_DECAY,
    ):
        self.state = state
        self.wave_interval = wave_interval
        self.initial_interval = initial_interval
        self.min_interval = min_interval
        self.decay = decay

        self.spawn_interval: float = initial_interval
        self.elapsed: float = 0.0
        self._wave_timer: float = 0.0

    def reset(self) -> None:
        self.spawn_interval = self.initial_interval
        self.elapsed = 0.0
        self._wave_timer = 0.0

    @property
    def speed_multiplier(self) -> float:
        """Fall-speed multiplier for newly spawned packets."""
        return 1.0 + self.state.wave * WAVE_SPEED_STEP

    def update(self, dt: float) -> Optional[WaveAdvancedEvent]:
        """
        Advance play time by dt ms.
        Returns an event if a new wave started this tick.
        """
        self.elapsed += dt
        self._wave_timer += dt
        if self._wave_timer < self.wave_interval:
            return None

        self._wave_timer = 0.0
        self.state.wave += 1
        self.spawn_interval = max(self.min_interval, self.spawn_interval * self.decay)
        return WaveAdvancedEvent(wave=self.state.wave, spawn_interval=self.spawn_interval)
