#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                # interactive menu
    python main.py -f rich        # Rich terminal
    python main.py -f pyqt        # PyQt GUI (has its own menu)
    python main.py --scores       # view best scores
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import DATA_DIR, GameConfig  # noqa: E402

logger = logging.getLogger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pyqt = "pyqt"


class LogLevel(StrEnum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pyqt: "frontend.gui.pyqt.app",
}


# -- helpers ------------------------------------------------------------------


def setup_logging(level: LogLevel) -> None:
    """Configure logging (stderr, so the terminal UIs stay readable)."""
    logging.basicConfig(
        level=getattr(logging, level.value),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def _print_scores(config: GameConfig) -> None:
    from backend.models.highscore import BestScoreManager

    manager = BestScoreManager(config.scores_path, size=config.size)
    sizes = manager.all_sizes()

    print("\n  === BEST SCORES ===")
    if not sizes:
        print("  No best scores yet.\n")
        return
    for size in sizes:
        e = manager.best(size)
        if e is None:
            continue
        print(
            f"  {size}x{size}: {e.score:>6}  "
            f"({e.moves} moves, {e.elapsed}s)  ({e.date})"
        )
    print()


def _launch(frontend: Frontend, config: GameConfig) -> None:
    logger.info("Launching %s frontend", frontend.value)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(config)


def _menu_loop(config: GameConfig) -> None:
    choices = {
        "1": Frontend.vanilla,
        "2": Frontend.rich,
        "3": Frontend.pyqt,
    }
    while True:
        print()
        print("  ====================================")
        print("       S L I D I N G   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  Play  (PyQt GUI)")
        print("  4.  View Best Scores")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in choices:
            _launch(choices[choice], config)
        elif choice == "4":
            _print_scores(config)
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show best scores and exit.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        file_okay=False,
        help="Directory holding the best-score file.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        case_sensitive=False,
        help="Logging verbosity (logs go to stderr).",
    ),
) -> None:
    """Sliding Puzzle Game."""
    setup_logging(log_level)
    config = GameConfig(data_dir=data_dir)

    if scores:
        _print_scores(config)
        return

    if frontend is None:
        _menu_loop(config)
        return

    _launch(frontend, config)


if __name__ == "__main__":
    app()
