"""
Command-line entry point for playing or simulating Galaxy Raiders

    python -m game.raiders.app                      # arcade window, keyboard
    python -m game.raiders.app --ui text --ticks 200 --random-controller
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigurationError, GameConfig
from .engine import GameEngine
from .ports import NullVisualizer, NumpyRandomGenerator, QueueController, RandomController
from .scoreboard import ScoreRepository
from .text_ui import TextVisualizer

logger = logging.getLogger("game.raiders")


def load_config(config_path=None) -> GameConfig:
    """JSON file if given, otherwise GR__* environment variables"""
    if config_path is not None:
        return GameConfig.from_json(Path(config_path))
    return GameConfig.from_env()


def build_engine(config: GameConfig, ui: str = "arcade", seed=None,
                 random_controller: bool = False, persist: bool = True) -> GameEngine:
    generator = NumpyRandomGenerator(seed)
    if random_controller:
        controller = RandomController(NumpyRandomGenerator(None if seed is None else seed + 1))
    else:
        controller = QueueController()

    if ui == "arcade":
        from .visualizers import ArcadeVisualizer
        visualizer = ArcadeVisualizer(
            config.space_field_width,
            config.space_field_height,
            controller if isinstance(controller, QueueController) else None,
        )
    elif ui == "text":
        visualizer = TextVisualizer()
    else:
        visualizer = NullVisualizer()

    repository = None
    if persist:
        repository = ScoreRepository(config.scoreboard_path, config.leaderboard_path,
                                     config.leaderboard_size)

    engine = GameEngine(config, generator, controller, visualizer, repository)
    if ui == "arcade":
        visualizer.score_source = lambda: engine.state.score
    return engine


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Galaxy Raiders simulation core")
    parser.add_argument("--config", type=str, default=None, help="Path to a JSON config file")
    parser.add_argument("--ticks", type=int, default=None,
                        help="Run exactly this many ticks without pacing (default: run forever)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--ui", choices=["arcade", "text", "none"], default="arcade")
    parser.add_argument("--random-controller", action="store_true",
                        help="Drive the ship with random commands")
    parser.add_argument("--no-persist", action="store_true", help="Do not write score files")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    engine = build_engine(config, ui=args.ui, seed=args.seed,
                          random_controller=args.random_controller,
                          persist=not args.no_persist)

    logger.info("Session starting on a %dx%d field", config.space_field_width, config.space_field_height)
    try:
        engine.execute(args.ticks)
    except KeyboardInterrupt:
        pass
    logger.info("Session over after %d ticks, score %.1f", engine.tick_count, engine.state.score)
    return 0


if __name__ == "__main__":
    sys.exit(main())
