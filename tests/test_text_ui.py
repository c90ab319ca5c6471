import io

from game.raiders.config import GameConfig
from game.raiders.entities import Asteroid
from game.raiders.physics import Point2D, Vector2D
from game.raiders.space_field import SpaceField
from game.raiders.text_ui import TextVisualizer

from conftest import FakeGenerator


def test_text_visualizer_places_glyphs():
    field = SpaceField(GameConfig(), FakeGenerator())
    field.asteroids.append(Asteroid(center=Point2D(0, 600), velocity=Vector2D(0, -1), radius=5, mass=50))
    stream = io.StringIO()

    TextVisualizer(columns=40, rows=10, stream=stream).render_space_field(field)

    lines = stream.getvalue().splitlines()
    assert len(lines) == 12
    assert lines[0] == "+" + "-" * 40 + "+"
    # ship sits at the bottom center, the asteroid at the top-left corner
    assert lines[10][1 + 20] == "@"
    assert lines[1][1] == "."
