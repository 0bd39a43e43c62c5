"""
Input Handler - Translates key presses and pointer motion to session commands.
This is a THIN ADAPTER - no game logic here.
"""
import pygame

from load_balancer.gameplay.economy import UpgradeType
from load_balancer.gameplay.session import Session
from load_balancer.ui.renderer import Renderer


SERVER_KEYS = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
    pygame.K_5: 4,
    pygame.K_6: 5,
}

UPGRADE_KEYS = {
    pygame.K_c: UpgradeType.COOLING,
    pygame.K_p: UpgradeType.CAPACITY,
    pygame.K_r: UpgradeType.REPAIR,
}

# Gateway travel per second with the arrow keys (field widths)
GATEWAY_KEY_SPEED = 1.2


class InputHandler:
    """
    Handles keyboard and mouse input and translates to session commands.

    The input handler:
    - Feeds the gateway position from the mouse or arrow keys
    - Updates renderer state (selected server)
    - Queues upgrade commands for the next tick
    """

    def __init__(self, session: Session, renderer: Renderer):
        self.session = session
        self.renderer = renderer
        self._last_mouse_x = None

    def handle_key(self, key: int) -> bool:
        """
        Handle a single key press.
        Returns True if the game should quit.
        """
        if key == pygame.K_ESCAPE:
            return True

        state = self.session.state

        if key == pygame.K_RETURN:
            if not state.is_playing or state.is_game_over:
                self.session.start()

        elif key == pygame.K_SPACE:
            if self.session.paused:
                self.session.resume()
            else:
                self.session.pause()

        elif key in SERVER_KEYS:
            self.renderer.select_server(SERVER_KEYS[key])

        elif key in UPGRADE_KEYS:
            server = self.session.servers[self.renderer.selected_server]
            self.session.queue_upgrade(server.id, UPGRADE_KEYS[key])

        return False

    def handle_held_keys(self, dt: float):
        """
        Handle continuously held keys and pointer motion.
        Called every frame. dt is in seconds.
        """
        surface = pygame.display.get_surface()
        if surface is not None and surface.get_width() > 0:
            mouse_x, _ = pygame.mouse.get_pos()
            if mouse_x != self._last_mouse_x:
                self._last_mouse_x = mouse_x
                self.session.set_gateway_x(mouse_x / surface.get_width())

        keys = pygame.key.get_pressed()
        step = GATEWAY_KEY_SPEED * dt
        if keys[pygame.K_LEFT]:
            self.session.set_gateway_x(self.session.gateway.x - step)
        if keys[pygame.K_RIGHT]:
            self.session.set_gateway_x(self.session.gateway.x + step)
