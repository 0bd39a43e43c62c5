"""
Configuration management for Load Balancer.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from load_balancer.gameplay import constants as c


class Settings(BaseSettings):
    """Session tunables, loaded from LOAD_BALANCER_* environment variables."""

    # Rack
    server_count: int = Field(
        default=c.SERVER_COUNT, ge=1,
        description="Number of server nodes under the play field"
    )

    # Session
    initial_lives: int = Field(default=c.INITIAL_LIVES, ge=1)
    initial_money: int = Field(default=c.INITIAL_MONEY, ge=0)

    # Gateway geometry (normalized)
    gateway_y: float = Field(default=c.GATEWAY_Y, gt=0.0, lt=1.0)
    gateway_width: float = Field(default=c.GATEWAY_WIDTH, gt=0.0, le=1.0)
    gateway_band_height: float = Field(
        default=c.GATEWAY_BAND_HEIGHT, gt=0.0, le=1.0,
        description="Vertical extent of the capture band below gateway_y"
    )

    # Difficulty
    spawn_interval_ms: float = Field(default=c.SPAWN_INTERVAL_INITIAL, gt=0.0)
    min_spawn_interval_ms: float = Field(default=c.SPAWN_INTERVAL_MIN, gt=0.0)
    spawn_interval_decay: float = Field(default=c.SPAWN_INTERVAL_DECAY, gt=0.0, lt=1.0)
    wave_interval_ms: float = Field(default=c.WAVE_INTERVAL, gt=0.0)

    # Tick
    max_frame_ms: float = Field(
        default=c.MAX_FRAME_MS, gt=0.0,
        description="Upper bound on a single tick's delta"
    )

    # Randomness
    rng_seed: Optional[int] = Field(
        default=None,
        description="Seed for packet and particle randomness. None means unseeded"
    )

    # Presentation
    particles_enabled: bool = Field(default=True)

    # Persistence
    high_score_file: Optional[Path] = Field(
        default=None,
        description="JSON file for the high score. None keeps it in memory"
    )

    # Logging
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def check_spawn_floor(self) -> "Settings":
        """The spawn interval may only shrink from its starting value."""
        if self.min_spawn_interval_ms > self.spawn_interval_ms:
            raise ValueError(
                f"min_spawn_interval_ms ({self.min_spawn_interval_ms}) must not exceed "
                f"spawn_interval_ms ({self.spawn_interval_ms})"
            )
        return self

    class Config:
        env_prefix = "LOAD_BALANCER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
