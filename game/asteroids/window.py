"""
Arcade frame driver and renderer for AsteroidsEngine

Play:
    python -m game.asteroids.window

Arrow keys steer and thrust, Space fires, R restarts after a crash, Esc quits.
"""

from __future__ import annotations

import argparse
import logging
import math
from typing import Optional, Set

import arcade

from .engine import AsteroidsEngine, StepInput

# Ship outline in ship-local coordinates, nose along +x
SHIP_SHAPE = [(20.0, 0.0), (-15.0, 10.0), (-15.0, -10.0)]
PROJECTILE_RADIUS = 3


class KeyboardInput:
    """
    Turns key events into per-tick engine input.

    Arrow keys are read while held; Space counts once per press and the
    press is consumed by the next sampled tick.
    """

    def __init__(self):
        self.held: Set[int] = set()
        self.fire_pressed = False

    def press(self, symbol: int):
        self.held.add(symbol)
        if symbol == arcade.key.SPACE:
            self.fire_pressed = True

    def release(self, symbol: int):
        self.held.discard(symbol)

    def clear(self):
        self.held.clear()
        self.fire_pressed = False

    def sample(self) -> StepInput:
        fire = self.fire_pressed
        self.fire_pressed = False
        return StepInput(
            thrust=arcade.key.UP in self.held,
            turn_left=arcade.key.LEFT in self.held,
            turn_right=arcade.key.RIGHT in self.held,
            fire=fire,
        )


class AsteroidsWindow(arcade.Window):
    """
    Arcade window that draws engine snapshots.

    With interactive=True the window is also the frame driver: every
    on_update call turns the keyboard state into one engine tick.
    """

    def __init__(
        self,
        engine: AsteroidsEngine,
        width: int,
        height: int,
        title: str = "Asteroids",
        interactive: bool = False,
    ):
        super().__init__(width, height, title)
        self.engine = engine
        self.interactive = interactive

        self.keyboard = KeyboardInput()

        # Colors
        self.background_color = (0, 0, 0)
        self.SHIP_C = arcade.color.WHITE
        self.PROJECTILE_C = arcade.color.RED
        self.OBSTACLE_C = arcade.color.GRAY
        self.ITEM_C = arcade.color.BLUE
        self.HUD_C = (220, 220, 220)

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        # A gymnasium env drives a non-interactive window and owns its lifetime
        if not self.interactive:
            return
        if symbol == arcade.key.R and self.engine.is_terminal():
            self.engine.reset()
            self.keyboard.clear()
        elif symbol == arcade.key.ESCAPE:
            self.close()
        else:
            self.keyboard.press(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.keyboard.release(symbol)

    def on_update(self, delta_time: float):
        # One tick per frame regardless of delta_time
        if not self.interactive or self.engine.is_terminal():
            return
        self.engine.step(self.keyboard.sample())

    # ----------------------------
    # Drawing
    # ----------------------------

    def _to_screen(self, x: float, y: float):
        # Engine y grows downward, arcade y grows upward
        return x, self.height - y

    def on_draw(self):
        self.clear()
        state = self.engine.snapshot()

        if state.terminal:
            self._draw_game_over()
            return

        ship = state.ship
        c, s = math.cos(ship.angle), math.sin(ship.angle)
        points = [
            self._to_screen(ship.x + px * c - py * s, ship.y + px * s + py * c)
            for px, py in SHIP_SHAPE
        ]
        arcade.draw_polygon_filled(points, self.SHIP_C)

        for p in state.projectiles:
            x, y = self._to_screen(p.x, p.y)
            arcade.draw_circle_filled(x, y, PROJECTILE_RADIUS, self.PROJECTILE_C)

        for o in state.obstacles:
            x, y = self._to_screen(o.x, o.y)
            color = self.ITEM_C if o.is_item else self.OBSTACLE_C
            arcade.draw_circle_outline(x, y, o.radius, color, 2)

        if state.power_up_active:
            arcade.draw_text(f"SHOTGUN {state.power_up_ticks}", 12, self.height - 28, self.ITEM_C, 14)

    def _draw_game_over(self):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("Game Over", cx, cy, self.HUD_C, 48, anchor_x="center")
        if self.interactive:
            arcade.draw_text("Press R to Restart", cx, cy - 50, self.HUD_C, 24, anchor_x="center")


def play(width: int = 800, height: int = 600, seed: Optional[int] = None):
    """Open a window and play until it is closed"""
    engine = AsteroidsEngine(width=width, height=height, seed=seed)
    window = AsteroidsWindow(engine, width, height, interactive=True)
    window.set_update_rate(1 / 60)
    arcade.run()


def main():
    parser = argparse.ArgumentParser(description="Play Asteroids")
    parser.add_argument("--width", type=int, default=800, help="Window width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Window height (default: 600)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for obstacle spawns")
    parser.add_argument("--verbose", action="store_true", help="Log every spawn and shot")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    play(width=args.width, height=args.height, seed=args.seed)


if __name__ == "__main__":
    main()
