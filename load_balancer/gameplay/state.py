"""
Session bookkeeping record.
NO UI DEPENDENCIES.
"""
from dataclasses import dataclass

from .constants import INITIAL_LIVES, INITIAL_MONEY, INITIAL_WAVE


@dataclass
class GameState:
    """
    Mutable per-session counters.

    score only grows and lives only shrink while playing; money only
    shrinks through a validated purchase. Created fresh by every
    Session.start().
    """
    score: int = 0
    money: int = INITIAL_MONEY
    lives: int = INITIAL_LIVES
    wave: int = INITIAL_WAVE
    is_playing: bool = False
    is_game_over: bool = False
    high_score: int = 0

    def lose_life(self) -> None:
        """Drop one life, never below zero."""
        self.lives = max(0, self.lives - 1)
