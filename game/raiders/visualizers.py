"""
Arcade front end: window, renderer and keyboard input for the engine
"""

from __future__ import annotations

from typing import Callable, Optional

import arcade

from .ports import PlayerCommand, QueueController
from .space_field import SpaceField

KEY_BINDINGS = {
    arcade.key.UP: PlayerCommand.MOVE_SHIP_UP,
    arcade.key.DOWN: PlayerCommand.MOVE_SHIP_DOWN,
    arcade.key.LEFT: PlayerCommand.MOVE_SHIP_LEFT,
    arcade.key.RIGHT: PlayerCommand.MOVE_SHIP_RIGHT,
    arcade.key.SPACE: PlayerCommand.LAUNCH_MISSILE,
    arcade.key.P: PlayerCommand.PAUSE_GAME,
}


class RaidersWindow(arcade.Window):
    """Arcade window drawing one space field snapshot per frame"""

    def __init__(self, width: int, height: int, controller: Optional[QueueController] = None):
        super().__init__(width, height, "Galaxy Raiders - Arcade")
        self.controller = controller
        self.field: Optional[SpaceField] = None
        self.score = 0.0

        # Colors
        self.BG = (18, 18, 22)
        self.SHIP_C = (80, 200, 120)
        self.ASTEROID_C = (170, 140, 110)
        self.MISSILE_C = (180, 180, 220)
        self.EXPLOSION_C = (240, 150, 60)
        self.HUD_C = (220, 220, 220)

    def on_key_press(self, symbol: int, modifiers: int):
        command = KEY_BINDINGS.get(symbol)
        if command is not None and self.controller is not None:
            self.controller.push(command)

    def on_draw(self):
        self.clear()
        arcade.set_background_color(self.BG)
        if self.field is None:
            return
        field = self.field

        for e in field.explosions:
            arcade.draw_circle_outline(e.center.x, e.center.y, e.radius, self.EXPLOSION_C, 2)

        for a in field.asteroids:
            arcade.draw_circle_filled(a.center.x, a.center.y, a.radius, self.ASTEROID_C)

        for m in field.missiles:
            arcade.draw_circle_filled(m.center.x, m.center.y, m.radius, self.MISSILE_C)

        ship = field.ship
        arcade.draw_circle_filled(ship.center.x, ship.center.y, ship.radius, self.SHIP_C)

        # Text HUD
        txt = (f"Score: {self.score:.0f}  "
               f"Asteroids: {len(field.asteroids)}  "
               f"Missiles: {len(field.missiles)}")
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)


class ArcadeVisualizer:
    """Visualizer port backed by a RaidersWindow.

    Rendering also pumps the window's event queue, which is where keyboard
    commands reach the controller.
    """

    def __init__(self, width: int, height: int, controller: Optional[QueueController] = None,
                 score_source: Optional[Callable[[], float]] = None):
        self.window = RaidersWindow(width, height, controller)
        self.score_source = score_source

    def render_space_field(self, field: SpaceField) -> None:
        self.window.field = field
        if self.score_source is not None:
            self.window.score = self.score_source()
        self.window.dispatch_events()
        self.window.on_draw()
        self.window.flip()

    def close(self):
        self.window.close()
