"""
Gameplay events emitted by a tick (for UI and particles to react to).
NO UI DEPENDENCIES.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .economy import UpgradeType


@dataclass
class GameEvent:
    """An event that occurred during gameplay."""
    pass


@dataclass
class PacketSpawnedEvent(GameEvent):
    """A packet entered the field."""
    packet_id: int
    x: float
    heavy: bool


@dataclass
class PacketDeliveredEvent(GameEvent):
    """A packet was caught and processed by an active server."""
    packet_id: int
    server_id: int
    x: float
    y: float
    value: int
    heat_added: float


@dataclass
class PacketDroppedEvent(GameEvent):
    """A packet was caught but its server was rebooting."""
    packet_id: int
    server_id: int
    x: float
    y: float


@dataclass
class PacketMissedEvent(GameEvent):
    """A packet fell past the bottom edge."""
    packet_id: int
    x: float


@dataclass
class ServerOverheatedEvent(GameEvent):
    """A server hit max heat and started rebooting."""
    server_id: int


@dataclass
class ServerRecoveredEvent(GameEvent):
    """A server came back online."""
    server_id: int
    repaired: bool


@dataclass
class WaveAdvancedEvent(GameEvent):
    """Difficulty escalated."""
    wave: int
    spawn_interval: float


@dataclass
class UpgradePurchasedEvent(GameEvent):
    """An upgrade command was accepted and paid for."""
    server_id: int
    upgrade: "UpgradeType"
    cost: int


@dataclass
class GameOverEvent(GameEvent):
    """Lives ran out."""
    score: int
    high_score: int
    new_high_score: bool
