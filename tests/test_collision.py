"""
Tests for packet motion, gateway capture and misses.
"""
import pytest
from load_balancer.gameplay.collision import Gateway, MotionResolver
from load_balancer.gameplay.economy import Ledger
from load_balancer.gameplay.events import (
    PacketDeliveredEvent, PacketDroppedEvent, PacketMissedEvent
)
from load_balancer.gameplay.packets import PacketType, create_packet
from load_balancer.gameplay.servers import ServerStatus, create_servers
from load_balancer.gameplay.state import GameState
from load_balancer.gameplay.constants import INITIAL_LIVES


def make_resolver(gateway_x: float = 0.5):
    state = GameState(is_playing=True)
    servers = create_servers(4)
    gateway = Gateway(x=gateway_x)
    resolver = MotionResolver(gateway, servers, Ledger(state), state)
    return resolver, state, servers


def run_until_settled(resolver: MotionResolver, dt: float = 100.0, max_ticks: int = 1000):
    events = []
    for _ in range(max_ticks):
        if not resolver.packets:
            break
        events.extend(resolver.update(dt))
    return events


class TestGateway:
    """Tests for gateway geometry."""

    def test_clamps_position(self):
        """Out-of-range input is clamped, not rejected."""
        gateway = Gateway()
        gateway.move_to(1.7)
        assert gateway.x == 1.0
        gateway.move_to(-0.3)
        assert gateway.x == 0.0

    def test_constructor_position(self):
        """The starting x is centered by default and clamped when given."""
        assert Gateway().x == 0.5
        assert Gateway(x=0.2).x == 0.2
        assert Gateway(x=4.0).x == 1.0

    def test_horizontal_extent(self):
        """Width is centered on x."""
        gateway = Gateway(width=0.15, x=0.5)
        assert gateway.left == pytest.approx(0.425)
        assert gateway.right == pytest.approx(0.575)
        assert gateway.covers_x(0.5)
        assert gateway.covers_x(0.43)
        assert not gateway.covers_x(0.6)

    @pytest.mark.parametrize("x, expected", [
        (0.0, 0), (0.24, 0), (0.25, 1), (0.5, 2), (0.74, 2), (0.99, 3), (1.0, 3),
    ])
    def test_target_index(self, x, expected):
        """Target server is floor(x * n), clamped to the last server."""
        gateway = Gateway(x=x)
        assert gateway.target_index(4) == expected

    def test_band_crossing(self):
        """A motion segment that touches the band counts."""
        gateway = Gateway(y=0.75, band_height=0.02)
        assert gateway.crosses_band(0.70, 0.76)
        assert gateway.crosses_band(0.755, 0.765)
        assert gateway.crosses_band(0.70, 1.20)
        assert not gateway.crosses_band(0.60, 0.74)
        assert not gateway.crosses_band(0.78, 0.90)


class TestCapture:
    """Tests for packets caught by the gateway."""

    def test_centered_packet_goes_to_server_two(self):
        """x=0.5 under a gateway at 0.5 is caught by server index 2."""
        resolver, state, servers = make_resolver(0.5)
        resolver.add(create_packet(1, x=0.5, y=-0.1, speed=0.001))

        events = run_until_settled(resolver)

        delivered = [e for e in events if isinstance(e, PacketDeliveredEvent)]
        assert len(delivered) == 1
        assert delivered[0].server_id == 2
        assert state.score == 10
        assert state.money == 5
        assert servers[2].heat == pytest.approx(10 / (100 / 15))
        assert all(s.heat == 0.0 for i, s in enumerate(servers) if i != 2)
        assert state.lives == INITIAL_LIVES
        assert resolver.packets == []

    def test_caught_when_reaching_band(self):
        """The packet is caught on the tick it reaches y >= 0.75."""
        resolver, _, _ = make_resolver(0.5)
        resolver.add(create_packet(1, x=0.5, y=0.70, speed=0.001))

        assert resolver.update(40.0) == []
        events = resolver.update(20.0)
        assert len(events) == 1
        assert isinstance(events[0], PacketDeliveredEvent)

    def test_target_sampled_at_capture_time(self):
        """Routing follows where the gateway is when the packet lands."""
        resolver, _, servers = make_resolver(0.5)
        resolver.add(create_packet(1, x=0.9, y=0.0, speed=0.001))

        resolver.update(100.0)
        resolver.gateway.move_to(0.9)
        events = run_until_settled(resolver)

        assert events[0].server_id == 3
        assert servers[3].heat > 0

    def test_heavy_capture(self):
        """Heavy packets give 20 score and 10 money."""
        resolver, state, servers = make_resolver(0.5)
        resolver.add(create_packet(1, x=0.5, y=0.74, speed=0.001, packet_type=PacketType.HEAVY))

        resolver.update(20.0)

        assert state.score == 20
        assert state.money == 10
        assert servers[2].heat == pytest.approx(4.5)

    def test_rebooting_server_drops_packet(self):
        """A packet routed to a rebooting server costs a life."""
        resolver, state, servers = make_resolver(0.5)
        servers[2].heat = 100.0
        servers[2].update(16)
        assert servers[2].status == ServerStatus.REBOOTING

        resolver.add(create_packet(1, x=0.5, y=0.74, speed=0.001))
        events = resolver.update(20.0)

        assert isinstance(events[0], PacketDroppedEvent)
        assert state.lives == INITIAL_LIVES - 1
        assert state.score == 0
        assert servers[2].heat == 100.0

    def test_fast_packet_cannot_tunnel(self):
        """A packet stepping clean over the band is still caught."""
        resolver, state, _ = make_resolver(0.5)
        resolver.add(create_packet(1, x=0.5, y=0.5, speed=0.01))

        events = resolver.update(100.0)

        assert len(events) == 1
        assert isinstance(events[0], PacketDeliveredEvent)
        assert state.lives == INITIAL_LIVES


class TestMiss:
    """Tests for packets that fall past the bottom."""

    def test_packet_outside_gateway_is_missed(self):
        """A packet away from the gateway falls through and costs a life."""
        resolver, state, _ = make_resolver(0.0)
        resolver.add(create_packet(7, x=0.9, y=-0.1, speed=0.001))

        events = run_until_settled(resolver)

        assert len(events) == 1
        assert isinstance(events[0], PacketMissedEvent)
        assert events[0].packet_id == 7
        assert state.lives == INITIAL_LIVES - 1
        assert resolver.packets == []

    def test_not_missed_at_exactly_one(self):
        """y == 1.0 is still on the field; only y > 1.0 is a miss."""
        resolver, state, _ = make_resolver(0.0)
        resolver.add(create_packet(1, x=0.9, y=0.5, speed=0.5 / 128))

        assert resolver.update(128.0) == []
        assert resolver.packets[0].y == 1.0
        assert state.lives == INITIAL_LIVES

        events = resolver.update(1.0)
        assert isinstance(events[0], PacketMissedEvent)

    def test_lives_floor_at_zero(self):
        """Misses never push lives below zero."""
        resolver, state, _ = make_resolver(0.0)
        state.lives = 1
        for i in range(3):
            resolver.add(create_packet(i, x=0.9, y=0.99, speed=0.001))
        resolver.update(100.0)
        assert state.lives == 0


class TestSettlement:
    """Each packet is settled exactly once."""

    def test_count_drops_by_one_per_outcome(self):
        """Packet count falls by exactly the number of outcome events."""
        resolver, _, _ = make_resolver(0.5)
        for i in range(6):
            resolver.add(create_packet(i, x=0.5 if i % 2 else 0.9, y=0.74, speed=0.003))
        for i in range(6, 10):
            resolver.add(create_packet(i, x=0.3, y=0.2, speed=0.0005))

        while resolver.packets:
            before = len(resolver.packets)
            events = resolver.update(50.0)
            assert len(resolver.packets) == before - len(events)

    def test_each_packet_settled_once(self):
        """No packet id appears in two outcome events."""
        resolver, _, _ = make_resolver(0.5)
        for i in range(20):
            resolver.add(create_packet(i, x=0.05 + 0.045 * i, y=0.7 - 0.03 * i, speed=0.002))

        events = run_until_settled(resolver, dt=16.0)

        ids = [e.packet_id for e in events]
        assert sorted(ids) == list(range(20))
