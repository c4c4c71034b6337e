"""
Main entry point for FACE CHASE.

Loads settings from the environment (and .env), applies command line
overrides and launches the desktop window.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from pydantic import ValidationError

from facechase.config.settings import Settings, get_settings
from facechase.game.variants import VARIANTS


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure console logging, plus a file log truncated on each run."""
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    level = logging.DEBUG if debug else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        except OSError as e:
            logging.warning(f"Cannot open log file {log_file}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            logging.info(f"Logging to file: {log_file}")

    # Per-frame detail is too noisy even for --debug
    logging.getLogger("facechase.game.publisher").setLevel(logging.INFO)
    logging.getLogger("facechase.core.events").setLevel(logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="facechase",
        description="Dodge the chaser for as long as you can.",
    )
    parser.add_argument("--variant", choices=sorted(VARIANTS), help="game variant to play")
    parser.add_argument("--fullscreen", action="store_true", default=None, help="start fullscreen")
    parser.add_argument("--width", type=int, help="window width in pixels")
    parser.add_argument("--height", type=int, help="window height in pixels")
    parser.add_argument("--debug", action="store_true", default=None, help="verbose logging")
    parser.add_argument("--mute", action="store_true", default=None, help="start with audio muted")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return ``settings`` with any command line values applied on top."""
    window_updates = {
        name: value
        for name, value in (("width", args.width), ("height", args.height), ("fullscreen", args.fullscreen))
        if value is not None
    }
    updates = {
        name: value
        for name, value in (("variant", args.variant), ("debug", args.debug), ("mute", args.mute))
        if value is not None
    }
    if window_updates:
        updates["window"] = settings.window.model_copy(update=window_updates)
    return settings.model_copy(update=updates) if updates else settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Load environment variables
    load_dotenv()

    try:
        settings = apply_overrides(get_settings(), args)
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("FACE CHASE starting...")
    logger.info("Controls: ARROWS/WASD move, SPACE start/retry, M mute, F fullscreen, F1 debug, ESC quit")

    from facechase.simulator.main import run

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("FACE CHASE stopped")


if __name__ == "__main__":
    main()
