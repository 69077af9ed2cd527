"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a small menu for play and best scores.
"""

from __future__ import annotations

import sys

from backend.config import GameConfig
from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import Phase
from backend.models.board import Board
from backend.models.highscore import BestScoreManager
from frontend.cli.clock import TickClock
from frontend.cli.input_handler import get_key, get_key_timeout, to_direction


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_R = "\033[0m"       # reset


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _format_time(seconds: int) -> str:
    m, s = divmod(seconds, 60)
    return f"{m}:{s:02d}" if m else f"{s}s"


def _stats_line(game: GamePlay) -> str:
    """Return the formatted Moves + Time string (no newline)."""
    snap = game.snapshot()
    return (
        f"  Moves: {_Y}{snap.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(snap.elapsed_seconds)}{_R}"
    )


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> str:
    """Return an ANSI-coloured text representation of the board."""
    width = len(str(board.size * board.size - 1))  # widest number
    cell_w = width + 2  # padding
    sep = "+" + (("-" * cell_w + "+") * board.size)

    lines: list[str] = [sep]
    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append(f"{_DIM} {'·':>{width}} {_R}")
            elif board.is_tile_correct(r, c):
                cells.append(f"{_G} {val:>{width}} {_R}")
            else:
                cells.append(f" {val:>{width}} ")
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


# -- screens ------------------------------------------------------------------


def _show_menu(size: int) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}     S L I D I N G   P U Z Z L E     {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_DIM}{size}×{size} board{_R}")
    print()
    print(f"    {_C}1{_R}  Play")
    print(f"    {_DIM}2{_R}  Best Scores")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


def _show_game(game: GamePlay) -> None:
    """Draw the full game screen.

    The stats line (Moves + Time) is printed last, with no trailing
    newline, so ``_update_time`` can cheaply overwrite it in-place
    using ``\\r\\033[K``.
    """
    _clear()
    size = game.size
    print(f"  {_C}=== Sliding Puzzle ({size}×{size}) ==={_R}")
    print()
    print(_render_board(game.state.board))
    print()
    print(
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}R{_R}: shuffle  |  "
        f"{_C}Q{_R}: back"
    )
    sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_win(game: GamePlay) -> None:
    _clear()
    size = game.size
    snap = game.snapshot()
    print(f"  {_G}=== Sliding Puzzle ({size}×{size}) ==={_R}")
    print()
    print(_render_board(game.state.board))
    print()
    print(f"  {_G}★ CONGRATULATIONS! You solved it! ★{_R}")
    print()
    print(
        f"  Moves: {_Y}{snap.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(snap.elapsed_seconds)}{_R}"
    )
    if snap.result is not None:
        if snap.result.is_new_best:
            print(f"\n  {_G}New best score: {snap.result.best_score}{_R}")
        else:
            print(
                f"\n  {_DIM}Best: {snap.result.best_score} (lower is better){_R}"
            )


def _show_scores(manager: BestScoreManager) -> None:
    _clear()
    print()
    print(f"  {_BOLD}=== BEST SCORES ==={_R}")
    sizes = manager.all_sizes()
    if not sizes:
        print(f"\n  {_DIM}No best scores yet.{_R}")
    for size in sizes:
        e = manager.best(size)
        if e is None:
            continue
        print(
            f"\n  {_C}{size}×{size}{_R}  "
            f"{_Y}{e.score:>6}{_R}  "
            f"({e.moves} moves, {_format_time(e.elapsed)})  "
            f"{_DIM}{e.date}{_R}"
        )
    print(f"\n  {_DIM}Press any key to go back.{_R}")
    get_key()


# -- game loop ----------------------------------------------------------------


def _play_game(config: GameConfig, manager: BestScoreManager) -> None:
    game = GamePlay(config.size, recorder=manager)
    clock = TickClock(config.tick_interval)

    while True:
        game.new_game()
        clock.reset()

        while game.phase is Phase.PLAYING:
            _show_game(game)

            # Wait for input; keep the clock and time display moving.
            while True:
                key = get_key_timeout(0.25)
                if clock.pump(game):
                    _update_time(game)
                if key is not None:
                    break

            direction = to_direction(key)
            if direction is not None:
                game.attempt_directional_move(direction)
            elif key == "restart":
                game.new_game()
                clock.reset()
            elif key == "quit":
                return

        # -- win ---------------------------------------------------------------
        _show_win(game)
        print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(config: GameConfig) -> None:
    manager = BestScoreManager(config.scores_path, size=config.size)

    while True:
        _show_menu(config.size)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key in ("1", "enter"):
            _play_game(config, manager)
        elif key in ("2", "scores"):
            _show_scores(manager)


# -- public entry point -------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(config)
