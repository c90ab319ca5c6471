"""
Character-grid visualizer for terminals and logs
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from .physics import clamp
from .space_field import SpaceField


class TextVisualizer:
    """Draws each object's glyph on a coarse grid scaled down from the field"""

    def __init__(self, columns: int = 80, rows: int = 24, stream: Optional[TextIO] = None):
        self.columns = columns
        self.rows = rows
        self.stream = stream if stream is not None else sys.stdout

    def draw(self, field: SpaceField) -> List[str]:
        grid = [[" "] * self.columns for _ in range(self.rows)]

        # Later layers overwrite earlier ones, ship always on top
        layers = [field.explosions, field.asteroids, field.missiles, [field.ship]]
        for layer in layers:
            for obj in layer:
                if obj.is_out_of_bounds(field.width, field.height):
                    continue
                col = int(clamp(obj.center.x / field.width * self.columns, 0, self.columns - 1))
                # y grows upward in the field but downward on screen
                row = int(clamp((1.0 - obj.center.y / field.height) * self.rows, 0, self.rows - 1))
                grid[row][col] = obj.symbol

        border = "+" + "-" * self.columns + "+"
        return [border] + ["|" + "".join(line) + "|" for line in grid] + [border]

    def render_space_field(self, field: SpaceField) -> None:
        self.stream.write("\n".join(self.draw(field)) + "\n")
        self.stream.flush()
