"""
Session controller - orchestrates all gameplay systems.
NO UI DEPENDENCIES.

This is the central gameplay module. It can be fully tested
without any UI framework.
"""
import logging
import random
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from load_balancer.config import Settings, get_settings

from .collision import Gateway, MotionResolver
from .constants import HIGH_SCORE_KEY
from .difficulty import DifficultyController
from .economy import Ledger, UpgradeType
from .events import GameEvent, GameOverEvent, PacketSpawnedEvent
from .packets import Packet, PacketSpawner
from .particles import ParticleEmitter
from .persistence import HighScoreStore, JsonFileStore, MemoryStore
from .servers import Server, ServerStatus, create_servers
from .state import GameState

logger = logging.getLogger(__name__)


# =============================================================================
# SNAPSHOTS (read-only views for the renderer)
# =============================================================================

@dataclass(frozen=True)
class ServerSnapshot:
    id: int
    name: str
    heat: float
    max_heat: float
    status: ServerStatus
    reboot_timer: float
    overheated: bool


@dataclass(frozen=True)
class PacketSnapshot:
    id: int
    x: float
    y: float
    heavy: bool
    color: tuple


@dataclass(frozen=True)
class ParticleSnapshot:
    x: float
    y: float
    life: float
    color: tuple


@dataclass(frozen=True)
class GameSnapshot:
    """Everything the presentation layer may read, copied after a tick."""
    servers: Tuple[ServerSnapshot, ...]
    packets: Tuple[PacketSnapshot, ...]
    particles: Tuple[ParticleSnapshot, ...]
    score: int
    money: int
    lives: int
    wave: int
    is_playing: bool
    is_game_over: bool
    is_paused: bool
    high_score: int
    gateway_x: float
    gateway_width: float
    gateway_y: float
    target_server: int


class Session:
    """
    One play session of the load balancer.

    The session exclusively owns servers, packets, particles and
    counters; they only change inside tick() or an upgrade command.
    The UI reads `snapshot` and sends commands as method calls.

    Usage:
        session = Session()
        session.start()
        while session.state.is_playing:
            session.set_gateway_x(mouse_x)
            events = session.tick(dt_ms)
            # UI renders session.snapshot
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
        particles: Optional[bool] = None,
    ):
        self.settings = settings if settings is not None else get_settings()
        self.rng = rng if rng is not None else random.Random(self.settings.rng_seed)

        if store is not None:
            self.store = store
        elif self.settings.high_score_file is not None:
            self.store = JsonFileStore(self.settings.high_score_file)
        else:
            self.store = MemoryStore()

        # Separate stream: the packet sequence must not depend on particles
        particle_seed = self.rng.getrandbits(32)
        if particles is None:
            particles = self.settings.particles_enabled
        self.emitter: Optional[ParticleEmitter] = (
            ParticleEmitter(self.settings.server_count, random.Random(particle_seed))
            if particles else None
        )

        self.gateway = Gateway(
            y=self.settings.gateway_y,
            width=self.settings.gateway_width,
            band_height=self.settings.gateway_band_height
        )
        self.paused = False
        self.tick_number = 0

        # Upgrade commands from other threads, applied at the next tick
        self._command_queue: List[Tuple[int, UpgradeType]] = []
        self._command_lock = threading.Lock()

        # Events from immediate commands, reported by the next tick
        self._pending_events: List[GameEvent] = []

        self._build_world(GameState(
            money=self.settings.initial_money,
            lives=self.settings.initial_lives
        ))

    def _build_world(self, state: GameState) -> None:
        """Wire fresh components around a GameState."""
        self.state = state
        self.servers: List[Server] = create_servers(self.settings.server_count)
        self.ledger = Ledger(state)
        self.difficulty = DifficultyController(
            state,
            wave_interval=self.settings.wave_interval_ms,
            initial_interval=self.settings.spawn_interval_ms,
            min_interval=self.settings.min_spawn_interval_ms,
            decay=self.settings.spawn_interval_decay
        )
        self.spawner = PacketSpawner(self.difficulty, self.rng)
        self.resolver = MotionResolver(self.gateway, self.servers, self.ledger, state)
        if self.emitter is not None:
            self.emitter.clear()
        self._commit_snapshot()

    # =========================================================================
    # GAME FLOW COMMANDS
    # =========================================================================

    def start(self) -> None:
        """Reset everything and begin playing."""
        high_score = max(self._load_high_score(), self.state.high_score)

        with self._command_lock:
            self._command_queue.clear()
        self._pending_events = []
        self.paused = False
        self.tick_number = 0

        self._build_world(GameState(
            money=self.settings.initial_money,
            lives=self.settings.initial_lives,
            is_playing=True,
            high_score=high_score
        ))
        logger.info(f"Session started (high score: {high_score})")

    def restart(self) -> None:
        """Alias for start()."""
        self.start()

    def pause(self) -> None:
        if self.state.is_playing:
            self.paused = True
            self._commit_snapshot()

    def resume(self) -> None:
        if self.state.is_playing and not self.state.is_game_over:
            self.paused = False
            self._commit_snapshot()

    def set_gateway_x(self, x: float) -> None:
        """Latest pointer position, normalized. Clamped to [0, 1]."""
        self.gateway.move_to(x)

    def target_server_index(self) -> int:
        return self.gateway.target_index(len(self.servers))

    # =========================================================================
    # UPGRADE COMMANDS
    # =========================================================================

    def get_server(self, server_id: int) -> Optional[Server]:
        for server in self.servers:
            if server.id == server_id:
                return server
        return None

    def apply_upgrade(self, server_id: int, upgrade: UpgradeType) -> bool:
        """
        Buy an upgrade right now.
        Call only from the thread that ticks. Returns True if accepted.
        """
        events = self._purchase(server_id, upgrade)
        if not events:
            return False
        self._pending_events.extend(events)
        self._commit_snapshot()
        return True

    def queue_upgrade(self, server_id: int, upgrade: UpgradeType) -> None:
        """Buy an upgrade at the start of the next tick. Safe from any thread."""
        with self._command_lock:
            self._command_queue.append((server_id, upgrade))

    def _purchase(self, server_id: int, upgrade: UpgradeType) -> List[GameEvent]:
        if self.state.is_game_over:
            return []
        server = self.get_server(server_id)
        if server is None:
            logger.debug(f"Rejected {upgrade.name} for unknown server {server_id}")
            return []
        return self.ledger.purchase(server, upgrade)

    def _drain_commands(self) -> List[GameEvent]:
        with self._command_lock:
            commands = self._command_queue
            self._command_queue = []

        events: List[GameEvent] = []
        for server_id, upgrade in commands:
            events.extend(self._purchase(server_id, upgrade))
        return events

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def tick(self, dt: float) -> List[GameEvent]:
        """
        Advance the simulation by dt milliseconds (clamped).
        Returns list of events that occurred. No-op unless playing.
        """
        if not self.state.is_playing or self.paused:
            return []

        dt = max(0.0, min(dt, self.settings.max_frame_ms))
        self.tick_number += 1

        events = self._pending_events
        self._pending_events = []
        events.extend(self._drain_commands())

        # 1. Difficulty
        wave_event = self.difficulty.update(dt)
        if wave_event is not None:
            logger.info(f"Wave {wave_event.wave} (spawn interval {wave_event.spawn_interval:.0f}ms)")
            events.append(wave_event)

        # 2. Spawning
        packet = self.spawner.update(dt)
        if packet is not None:
            self.resolver.add(packet)
            events.append(PacketSpawnedEvent(packet.id, packet.x, packet.heavy))

        # 3. Motion and capture
        events.extend(self.resolver.update(dt))

        # 4. Servers
        for server in self.servers:
            server_event = server.update(dt)
            if server_event is not None:
                events.append(server_event)

        # 5. Particles
        if self.emitter is not None:
            self.emitter.handle_all(events)
            self.emitter.update()

        # 6. Game over
        game_over = self.check_game_over()
        if game_over is not None:
            events.append(game_over)

        self._commit_snapshot()
        return events

    def check_game_over(self) -> Optional[GameOverEvent]:
        """
        End the session if lives ran out.
        Fires at most once per session; later calls return None.
        """
        if self.state.lives > 0 or self.state.is_game_over:
            return None

        self.state.is_game_over = True
        self.state.is_playing = False
        self.paused = False

        new_high_score = self.state.score > self.state.high_score
        if new_high_score:
            self.state.high_score = self.state.score
            self._save_high_score(self.state.score)

        logger.info(f"Game over: score {self.state.score}, high score {self.state.high_score}")
        return GameOverEvent(
            score=self.state.score,
            high_score=self.state.high_score,
            new_high_score=new_high_score
        )

    # =========================================================================
    # PERSISTENCE (best effort)
    # =========================================================================

    def _load_high_score(self) -> int:
        try:
            stored = self.store.get(HIGH_SCORE_KEY)
        except Exception as e:
            logger.warning(f"Could not read high score: {e}")
            return 0
        return stored if stored is not None else 0

    def _save_high_score(self, score: int) -> None:
        try:
            self.store.set(HIGH_SCORE_KEY, score)
        except Exception as e:
            logger.warning(f"Could not save high score: {e}")

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    @property
    def packets(self) -> List[Packet]:
        return self.resolver.packets

    @property
    def snapshot(self) -> GameSnapshot:
        """Most recently committed state."""
        return self._snapshot

    def _commit_snapshot(self) -> None:
        particles = self.emitter.particles if self.emitter is not None else []
        self._snapshot = GameSnapshot(
            servers=tuple(
                ServerSnapshot(
                    id=s.id,
                    name=s.name,
                    heat=s.heat,
                    max_heat=s.max_heat,
                    status=s.status,
                    reboot_timer=s.reboot_timer,
                    overheated=s.overheated
                )
                for s in self.servers
            ),
            packets=tuple(
                PacketSnapshot(p.id, p.x, p.y, p.heavy, p.color)
                for p in self.resolver.packets
            ),
            particles=tuple(
                ParticleSnapshot(p.x, p.y, p.life, p.color) for p in particles
            ),
            score=self.state.score,
            money=self.state.money,
            lives=self.state.lives,
            wave=self.state.wave,
            is_playing=self.state.is_playing,
            is_game_over=self.state.is_game_over,
            is_paused=self.paused,
            high_score=self.state.high_score,
            gateway_x=self.gateway.x,
            gateway_width=self.gateway.width,
            gateway_y=self.gateway.y,
            target_server=self.target_server_index()
        )

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def simulate(self, ms: float, dt: float = 16.0) -> List[GameEvent]:
        """
        Simulate the session for a number of milliseconds.
        Returns all events that occurred.
        """
        all_events: List[GameEvent] = []
        elapsed = 0.0
        while elapsed < ms and self.state.is_playing and not self.paused:
            all_events.extend(self.tick(dt))
            elapsed += dt
        return all_events
