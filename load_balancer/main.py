#!/usr/bin/env python3
"""
Load Balancer - Main Entry Point

Traffic spikes incoming. Slide the gateway to route falling packets
into the server rack, keep every server below its heat limit, and
spend what you earn on cooling, capacity and emergency repairs.

Usage:
    python -m load_balancer.main [--seed N] [--no-particles] [--high-score-file PATH]

Controls:
    Mouse / Left, Right: Move gateway
    1-4: Select server
    C: Buy cooling (+cooling rate)
    P: Buy capacity (-heat per packet)
    R: Repair a rebooting server
    Space: Pause / resume
    Enter: Start / restart
    Escape: Quit
"""
import argparse
import logging

import pyunicodegame

from load_balancer.config import get_settings
from load_balancer.gameplay.events import GameOverEvent
from load_balancer.gameplay.session import Session
from load_balancer.ui.renderer import Renderer, SCREEN_WIDTH, SCREEN_HEIGHT
from load_balancer.ui.input_handler import InputHandler

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Load Balancer")
    parser.add_argument("--seed", type=int, default=None, help="Seed for packet randomness")
    parser.add_argument("--no-particles", action="store_true", help="Disable particle effects")
    parser.add_argument("--high-score-file", default=None, help="JSON file for the high score")
    args = parser.parse_args()

    settings = get_settings()
    overrides = {}
    if args.seed is not None:
        overrides["rng_seed"] = args.seed
    if args.no_particles:
        overrides["particles_enabled"] = False
    if args.high_score_file is not None:
        overrides["high_score_file"] = args.high_score_file
    if overrides:
        settings = settings.model_copy(update=overrides)

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    session = Session(settings)

    pyunicodegame.init(
        "Load Balancer",
        width=SCREEN_WIDTH,
        height=SCREEN_HEIGHT,
        bg=(2, 6, 23, 255)
    )

    renderer = Renderer(session)
    renderer.init_windows()

    input_handler = InputHandler(session, renderer)

    def update(dt: float):
        """Update game state. pyunicodegame passes seconds."""
        input_handler.handle_held_keys(dt)

        events = session.tick(dt * 1000.0)
        for event in events:
            if isinstance(event, GameOverEvent) and event.new_high_score:
                logger.info(f"New high score: {event.high_score}")

    def render():
        renderer.render()

    def on_key(key: int):
        if input_handler.handle_key(key):
            pyunicodegame.quit()

    logger.info("Starting game loop...")
    pyunicodegame.run(update=update, render=render, on_key=on_key)


if __name__ == "__main__":
    main()
