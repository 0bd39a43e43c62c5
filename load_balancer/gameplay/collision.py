"""
Packet motion and gateway capture.
NO UI DEPENDENCIES.
"""
import math
from typing import List, Sequence

from .constants import GATEWAY_Y, GATEWAY_WIDTH, GATEWAY_BAND_HEIGHT, MISS_Y
from .economy import Ledger
from .events import GameEvent, PacketDeliveredEvent, PacketDroppedEvent, PacketMissedEvent
from .packets import Packet
from .servers import Server
from .state import GameState


class Gateway:
    """
    The player's routing bar.

    A horizontal band at fixed `y` (`band_height` tall) and `width`
    wide, centered on `x`. The server under `x` receives what it
    catches.
    """

    def __init__(
        self,
        y: float = GATEWAY_Y,
        width: float = GATEWAY_WIDTH,
        band_height: float = GATEWAY_BAND_HEIGHT,
        x: float = 0.5
    ):
        self.y = y
        self.width = width
        self.band_height = band_height
        self.move_to(x)

    def move_to(self, x: float) -> None:
        """Set the center, clamped to the field."""
        self.x = max(0.0, min(1.0, x))

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.y + self.band_height

    def covers_x(self, x: float) -> bool:
        return self.left <= x <= self.right

    def crosses_band(self, y_from: float, y_to: float) -> bool:
        """True if the vertical segment [y_from, y_to] touches the band."""
        return y_to >= self.y and y_from <= self.bottom

    def target_index(self, server_count: int) -> int:
        """Index of the server currently under the gateway."""
        index = math.floor(self.x * server_count)
        return max(0, min(server_count - 1, index))


class MotionResolver:
    """
    Owns the live packets. Moves them, and settles each one exactly
    once: caught by the gateway or missed off the bottom.

    The whole per-tick path of a packet is tested against the band, so
    a fast packet cannot step over the gateway between two ticks.
    """

    def __init__(self, gateway: Gateway, servers: Sequence[Server], ledger: Ledger, state: GameState):
        self.gateway = gateway
        self.servers = servers
        self.ledger = ledger
        self.state = state
        self.packets: List[Packet] = []

    def add(self, packet: Packet) -> None:
        self.packets.append(packet)

    def clear(self) -> None:
        self.packets = []

    def update(self, dt: float) -> List[GameEvent]:
        """Advance all packets by dt ms and resolve captures and misses."""
        events: List[GameEvent] = []

        # Backwards, so deleting index i never skips or revisits a packet
        for i in range(len(self.packets) - 1, -1, -1):
            packet = self.packets[i]
            y_before = packet.y
            packet.y += packet.speed * dt

            if self.gateway.crosses_band(y_before, packet.y) and self.gateway.covers_x(packet.x):
                del self.packets[i]
                events.append(self._capture(packet))
            elif packet.y > MISS_Y:
                del self.packets[i]
                self.state.lose_life()
                events.append(PacketMissedEvent(packet_id=packet.id, x=packet.x))

        return events

    def _capture(self, packet: Packet) -> GameEvent:
        """Route a caught packet to the server under the gateway."""
        server = self.servers[self.gateway.target_index(len(self.servers))]

        if server.is_active:
            heat_added = server.absorb(packet.heat_generated)
            self.ledger.record_delivery(packet.value)
            return PacketDeliveredEvent(
                packet_id=packet.id,
                server_id=server.id,
                x=packet.x,
                y=packet.y,
                value=packet.value,
                heat_added=heat_added
            )

        self.state.lose_life()
        return PacketDroppedEvent(packet_id=packet.id, server_id=server.id, x=packet.x, y=packet.y)
