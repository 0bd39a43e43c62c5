"""
Packets and the timer-driven packet spawner.
NO UI DEPENDENCIES.
"""
import itertools
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional

from .constants import (
    SPAWN_X_MIN, SPAWN_X_MAX, SPAWN_Y, HEAVY_CHANCE,
    BASE_SPEED_MIN, BASE_SPEED_RANGE,
    STANDARD_VALUE, STANDARD_HEAT, HEAVY_VALUE, HEAVY_HEAT,
    COLOR_PACKET_STANDARD, COLOR_PACKET_HEAVY
)
from .difficulty import DifficultyController


class PacketType(Enum):
    """Kinds of traffic."""
    STANDARD = auto()
    HEAVY = auto()    # traffic spike: worth more, runs hotter


@dataclass(frozen=True)
class PacketProfile:
    """Fixed stats for a packet type."""
    value: int
    heat_generated: float
    color: tuple


PACKET_PROFILES: Dict[PacketType, PacketProfile] = {
    PacketType.STANDARD: PacketProfile(
        value=STANDARD_VALUE,
        heat_generated=STANDARD_HEAT,
        color=COLOR_PACKET_STANDARD
    ),
    PacketType.HEAVY: PacketProfile(
        value=HEAVY_VALUE,
        heat_generated=HEAVY_HEAT,
        color=COLOR_PACKET_HEAVY
    ),
}


@dataclass
class Packet:
    """
    A unit of traffic falling through the field.

    y is negative until the packet enters view and grows by
    `speed` per millisecond.
    """
    id: int
    x: float
    y: float
    speed: float
    packet_type: PacketType = PacketType.STANDARD
    value: int = STANDARD_VALUE
    heat_generated: float = STANDARD_HEAT

    @property
    def heavy(self) -> bool:
        return self.packet_type == PacketType.HEAVY

    @property
    def color(self) -> tuple:
        return PACKET_PROFILES[self.packet_type].color


def create_packet(
    packet_id: int,
    x: float,
    y: float = SPAWN_Y,
    speed: float = BASE_SPEED_MIN,
    packet_type: PacketType = PacketType.STANDARD
) -> Packet:
    """Convenience function to create packets with their type's stats."""
    profile = PACKET_PROFILES[packet_type]
    return Packet(
        id=packet_id,
        x=x,
        y=y,
        speed=speed,
        packet_type=packet_type,
        value=profile.value,
        heat_generated=profile.heat_generated
    )


class PacketSpawner:
    """
    Emits one packet each time the accumulated time exceeds the
    difficulty controller's current spawn interval.
    """

    def __init__(self, difficulty: DifficultyController, rng: Optional[random.Random] = None):
        self.difficulty = difficulty
        self.rng = rng if rng is not None else random.Random()
        self.timer: float = 0.0
        self._ids = itertools.count(1)

    def reset(self) -> None:
        self.timer = 0.0
        self._ids = itertools.count(1)

    def update(self, dt: float) -> Optional[Packet]:
        """
        Advance the spawn timer by dt ms.
        Returns the new packet, if one was due.
        """
        self.timer += dt
        if self.timer <= self.difficulty.spawn_interval:
            return None

        self.timer = 0.0
        return self.spawn()

    def spawn(self) -> Packet:
        """Create a packet right now, ignoring the timer."""
        heavy = self.rng.random() > 1.0 - HEAVY_CHANCE
        packet_type = PacketType.HEAVY if heavy else PacketType.STANDARD

        x = SPAWN_X_MIN + self.rng.random() * (SPAWN_X_MAX - SPAWN_X_MIN)
        base_speed = self.rng.random() * BASE_SPEED_RANGE + BASE_SPEED_MIN
        speed = base_speed * self.difficulty.speed_multiplier

        return create_packet(next(self._ids), x, SPAWN_Y, speed, packet_type)
