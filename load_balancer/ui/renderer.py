"""
Renderer - Reads session snapshots and renders to pyunicodegame windows.
This is a THIN ADAPTER - no game logic here.
"""
import pyunicodegame

from load_balancer.gameplay.economy import UPGRADE_COSTS, UpgradeType
from load_balancer.gameplay.servers import ServerStatus
from load_balancer.gameplay.session import GameSnapshot, Session


# Visual constants
SCREEN_WIDTH = 60
SCREEN_HEIGHT = 30
FIELD_HEIGHT = 22
RACK_HEIGHT = SCREEN_HEIGHT - FIELD_HEIGHT

# Colors
COLOR_GRID = (30, 35, 50)
COLOR_GATEWAY = (255, 255, 255)
COLOR_BEAM = (56, 120, 180)
COLOR_HUD = (200, 200, 200)
COLOR_MONEY = (52, 211, 153)
COLOR_WAVE = (251, 146, 60)
COLOR_LIFE_ON = (56, 189, 248)
COLOR_LIFE_OFF = (40, 45, 60)
COLOR_HEAT_OK = (16, 185, 129)
COLOR_HEAT_WARM = (249, 115, 22)
COLOR_HEAT_HOT = (239, 68, 68)
COLOR_ONLINE = (74, 222, 128)
COLOR_REBOOT = (248, 113, 113)
COLOR_SELECTED = (56, 189, 248)
COLOR_IDLE = (100, 116, 139)

UPGRADE_KEYS = {
    UpgradeType.COOLING: 'C',
    UpgradeType.CAPACITY: 'P',
    UpgradeType.REPAIR: 'R',
}


def to_cell(x: float, y: float) -> tuple:
    """Normalized field position to a field cell."""
    col = int(x * (SCREEN_WIDTH - 1))
    row = int(y * (FIELD_HEIGHT - 1))
    return col, row


class Renderer:
    """
    Renders session snapshots to pyunicodegame windows.

    This class reads from Session but never modifies it.
    """

    def __init__(self, session: Session):
        self.session = session

        # Windows will be created in init_windows()
        self.field_window = None
        self.rack_window = None
        self.hud_window = None

        # Server picked for upgrades (UI state only)
        self.selected_server = 0

    def init_windows(self):
        """Initialize pyunicodegame windows."""
        self.field_window = pyunicodegame.create_window(
            "field", 0, 0, SCREEN_WIDTH, FIELD_HEIGHT,
            z_index=0, bg=(15, 23, 42, 255)
        )
        self.rack_window = pyunicodegame.create_window(
            "rack", 0, FIELD_HEIGHT, SCREEN_WIDTH, RACK_HEIGHT,
            z_index=0, bg=(2, 6, 23, 255)
        )
        self.hud_window = pyunicodegame.create_window(
            "hud", 0, 0, SCREEN_WIDTH, SCREEN_HEIGHT,
            z_index=10, bg=None, fixed=True
        )

    def render(self):
        """Render the latest committed snapshot."""
        snap = self.session.snapshot
        self.render_field(snap)
        self.render_rack(snap)
        self.render_hud(snap)

    def render_field(self, snap: GameSnapshot):
        """Render packets, the gateway and particles."""
        for row in range(FIELD_HEIGHT):
            for col in range(SCREEN_WIDTH):
                char = '·' if col % 6 == 0 and row % 3 == 0 else ' '
                self.field_window.put(col, row, char, COLOR_GRID)

        # Beam from the gateway down to the targeted server
        _, gateway_row = to_cell(snap.gateway_x, snap.gateway_y)
        server_width = SCREEN_WIDTH / max(1, len(snap.servers))
        beam_col = int((snap.target_server + 0.5) * server_width)
        for row in range(gateway_row + 1, FIELD_HEIGHT):
            self.field_window.put(beam_col, row, '┆', COLOR_BEAM)

        left, _ = to_cell(snap.gateway_x - snap.gateway_width / 2, snap.gateway_y)
        right, _ = to_cell(snap.gateway_x + snap.gateway_width / 2, snap.gateway_y)
        for col in range(max(0, left), min(SCREEN_WIDTH - 1, right) + 1):
            self.field_window.put(col, gateway_row, '▀', COLOR_GATEWAY)

        for packet in snap.packets:
            if packet.y < 0:
                continue
            col, row = to_cell(packet.x, min(packet.y, 1.0))
            self.field_window.put(col, row, '◆' if packet.heavy else '■', packet.color)

        for particle in snap.particles:
            if not (0.0 <= particle.x <= 1.0 and 0.0 <= particle.y <= 1.0):
                continue
            col, row = to_cell(particle.x, particle.y)
            fade = max(0.2, particle.life)
            color = tuple(int(ch * fade) for ch in particle.color)
            self.field_window.put(col, row, '*' if particle.life > 0.5 else '.', color)

    def render_rack(self, snap: GameSnapshot):
        """Render one column per server: name, status, heat gauge, upgrades."""
        for row in range(RACK_HEIGHT):
            self.rack_window.put_string(0, row, ' ' * SCREEN_WIDTH, COLOR_HUD)

        column_width = SCREEN_WIDTH // max(1, len(snap.servers))
        for i, server in enumerate(snap.servers):
            x = i * column_width + 1
            name_color = COLOR_SELECTED if i == self.selected_server else COLOR_IDLE
            marker = '▶' if i == snap.target_server and snap.is_playing else ' '
            self.rack_window.put_string(x, 0, f"{marker}{server.name}", name_color)

            if server.status == ServerStatus.REBOOTING:
                self.rack_window.put_string(x, 1, f"REBOOT {server.reboot_timer:.1f}s", COLOR_REBOOT)
            elif server.overheated:
                self.rack_window.put_string(x, 1, "CRITICAL", COLOR_HEAT_HOT)
            else:
                self.rack_window.put_string(x, 1, "ONLINE", COLOR_ONLINE)

            ratio = server.heat / server.max_heat if server.max_heat > 0 else 0.0
            bar_width = column_width - 3
            filled = int(ratio * bar_width)
            if ratio > 0.8:
                heat_color = COLOR_HEAT_HOT
            elif ratio > 0.5:
                heat_color = COLOR_HEAT_WARM
            else:
                heat_color = COLOR_HEAT_OK
            gauge = '█' * filled + '░' * (bar_width - filled)
            self.rack_window.put_string(x, 2, gauge, heat_color)
            self.rack_window.put_string(x, 3, f"{server.heat:5.1f}°", heat_color)

            for j, (upgrade, key) in enumerate(UPGRADE_KEYS.items()):
                cost = UPGRADE_COSTS[upgrade]
                color = COLOR_MONEY if snap.money >= cost else COLOR_IDLE
                self.rack_window.put_string(x, 4 + j, f"{key} {upgrade.name[:4]} ${cost}", color)

    def render_hud(self, snap: GameSnapshot):
        """Render HUD overlay."""
        self.hud_window.put_string(1, 0, f"SCORE {snap.score:<7}", COLOR_HUD)
        self.hud_window.put_string(1, 1, f"PEAK  {snap.high_score:<7}", COLOR_IDLE)
        self.hud_window.put_string(1, 2, f"$ {snap.money:<8}", COLOR_MONEY)

        for i in range(self.session.settings.initial_lives):
            color = COLOR_LIFE_ON if i < snap.lives else COLOR_LIFE_OFF
            self.hud_window.put(SCREEN_WIDTH - 2 - i, 0, '▮', color)
        self.hud_window.put_string(SCREEN_WIDTH - 10, 1, f"WAVE_{snap.wave:<3}", COLOR_WAVE)

        if snap.is_game_over:
            message = f"SYSTEM CRITICAL - score {snap.score} - ENTER to reboot"
        elif not snap.is_playing:
            message = "LOAD BALANCER - ENTER to start"
        elif snap.is_paused:
            message = "PAUSED - SPACE to resume"
        else:
            message = ""
        self.hud_window.put_string(0, FIELD_HEIGHT // 2, message.center(SCREEN_WIDTH), COLOR_HUD)

    def select_server(self, index: int):
        """Pick the server that upgrade keys apply to."""
        self.selected_server = max(0, min(len(self.session.servers) - 1, index))
