"""
Cosmetic particle bursts.
NO UI DEPENDENCIES.

Nothing here feeds back into gameplay; a headless session can run
without an emitter and produce identical outcomes.
"""
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .constants import (
    PARTICLE_SPREAD, PARTICLE_DECAY, MISS_Y,
    BURST_DELIVERED, BURST_DROPPED, BURST_MISSED, BURST_OVERHEAT,
    COLOR_SUCCESS, COLOR_EXPLOSION
)
from .events import (
    GameEvent, PacketDeliveredEvent, PacketDroppedEvent, PacketMissedEvent,
    ServerOverheatedEvent
)


@dataclass
class Particle:
    """A single spark. life runs from 1.0 down to 0.0."""
    x: float
    y: float
    vx: float
    vy: float
    life: float = 1.0
    color: tuple = COLOR_SUCCESS


class ParticleEmitter:
    """Spawns bursts for gameplay events and ages them every tick."""

    def __init__(self, server_count: int, rng: Optional[random.Random] = None):
        self.server_count = server_count
        self.rng = rng if rng is not None else random.Random()
        self.particles: List[Particle] = []

    def clear(self) -> None:
        self.particles = []

    def burst(self, x: float, y: float, color: tuple, count: int) -> None:
        for _ in range(count):
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=(self.rng.random() - 0.5) * PARTICLE_SPREAD,
                vy=(self.rng.random() - 0.5) * PARTICLE_SPREAD,
                color=color
            ))

    def handle(self, event: GameEvent) -> None:
        """Emit the burst that goes with an event, if any."""
        if isinstance(event, PacketDeliveredEvent):
            self.burst(event.x, event.y, COLOR_SUCCESS, BURST_DELIVERED)
        elif isinstance(event, PacketDroppedEvent):
            self.burst(event.x, event.y, COLOR_EXPLOSION, BURST_DROPPED)
        elif isinstance(event, PacketMissedEvent):
            self.burst(event.x, MISS_Y, COLOR_EXPLOSION, BURST_MISSED)
        elif isinstance(event, ServerOverheatedEvent):
            x = (event.server_id + 0.5) / self.server_count
            self.burst(x, MISS_Y, COLOR_EXPLOSION, BURST_OVERHEAT)

    def handle_all(self, events: Iterable[GameEvent]) -> None:
        for event in events:
            self.handle(event)

    def update(self) -> None:
        """Move every particle one step and prune the dead ones."""
        for particle in self.particles:
            particle.x += particle.vx
            particle.y += particle.vy
            particle.life -= PARTICLE_DECAY
        self.particles = [p for p in self.particles if p.life > 0]
