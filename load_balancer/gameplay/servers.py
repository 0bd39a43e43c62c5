"""
Server nodes and their thermal state machine.
NO UI DEPENDENCIES.

Two states only: ACTIVE and REBOOTING. "Overheated" is a display
hint derived from heat, not a state.

    ACTIVE --(heat >= max_heat)--> REBOOTING
    REBOOTING --(timer <= 0)--> ACTIVE   (heat = warm baseline)
    REBOOTING --(repair)-------> ACTIVE   (heat = 0)
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .constants import (
    SERVER_COUNT, SERVER_MAX_HEAT, SERVER_COOLING_RATE, SERVER_PROCESSING_POWER,
    HEAT_SCALE, REBOOT_SECONDS, REBOOT_WARM_RATIO, OVERHEAT_DISPLAY_RATIO,
    COOLING_STEP, CAPACITY_STEP, MIN_PROCESSING_POWER
)
from .events import GameEvent, ServerOverheatedEvent, ServerRecoveredEvent


class ServerStatus(Enum):
    """Functional state of a server."""
    ACTIVE = auto()
    REBOOTING = auto()


@dataclass
class Server:
    """
    A server node in the rack.

    heat stays within [0, max_heat]. processing_power is an
    inverse-efficiency coefficient: lower means less heat per packet.
    reboot_timer is in seconds and only meaningful while rebooting.
    """
    id: int
    name: str
    heat: float = 0.0
    max_heat: float = SERVER_MAX_HEAT
    cooling_rate: float = SERVER_COOLING_RATE
    processing_power: float = SERVER_PROCESSING_POWER
    status: ServerStatus = ServerStatus.ACTIVE
    reboot_timer: float = 0.0

    @property
    def is_active(self) -> bool:
        return self.status == ServerStatus.ACTIVE

    @property
    def is_rebooting(self) -> bool:
        return self.status == ServerStatus.REBOOTING

    @property
    def heat_ratio(self) -> float:
        """Return heat as 0.0 to 1.0."""
        return self.heat / self.max_heat if self.max_heat > 0 else 0.0

    @property
    def overheated(self) -> bool:
        """Display hint: running hot but still online."""
        return self.is_active and self.heat_ratio > OVERHEAT_DISPLAY_RATIO

    def heat_for(self, heat_generated: float) -> float:
        """Heat one packet adds to this server."""
        return heat_generated / (HEAT_SCALE / self.processing_power)

    def absorb(self, heat_generated: float) -> float:
        """
        Process a packet's heat.
        Returns the heat actually added (clamped at max_heat).
        """
        before = self.heat
        self.heat = min(self.max_heat, self.heat + self.heat_for(heat_generated))
        return self.heat - before

    def update(self, dt: float) -> Optional[GameEvent]:
        """
        Advance the thermal state by dt ms.
        Returns an event on a state transition.
        """
        if self.status == ServerStatus.ACTIVE:
            if self.heat >= self.max_heat:
                self.heat = self.max_heat
                self.status = ServerStatus.REBOOTING
                self.reboot_timer = REBOOT_SECONDS
                return ServerOverheatedEvent(server_id=self.id)

            self.heat = max(0.0, self.heat - (self.cooling_rate / 1000) * dt)
            return None

        self.reboot_timer -= dt / 1000
        if self.reboot_timer <= 0:
            self.status = ServerStatus.ACTIVE
            self.heat = self.max_heat * REBOOT_WARM_RATIO
            self.reboot_timer = 0.0
            return ServerRecoveredEvent(server_id=self.id, repaired=False)
        return None

    # =========================================================================
    # UPGRADE EFFECTS (paid for by the ledger)
    # =========================================================================

    def upgrade_cooling(self) -> bool:
        """Faster cooling. Only while active."""
        if not self.is_active:
            return False
        self.cooling_rate += COOLING_STEP
        return True

    def upgrade_capacity(self) -> bool:
        """Less heat per packet, down to a floor. Only while active."""
        if not self.is_active:
            return False
        self.processing_power = max(MIN_PROCESSING_POWER, self.processing_power - CAPACITY_STEP)
        return True

    def repair(self) -> Optional[ServerRecoveredEvent]:
        """Force a rebooting server back online, cold."""
        if not self.is_rebooting:
            return None
        self.status = ServerStatus.ACTIVE
        self.heat = 0.0
        self.reboot_timer = 0.0
        return ServerRecoveredEvent(server_id=self.id, repaired=True)


def create_servers(count: int = SERVER_COUNT) -> List[Server]:
    """Fresh rack in its initial configuration."""
    return [Server(id=i, name=f"SRV-{i + 1:02d}") for i in range(count)]
