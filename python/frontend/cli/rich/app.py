"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler, tick clock and backend as the vanilla CLI.
"""

from __future__ import annotations

import sys

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import Phase, Snapshot
from backend.models.board import Board
from backend.models.highscore import BestScoreManager
from frontend.cli.clock import TickClock
from frontend.cli.input_handler import get_key, get_key_timeout, to_direction

console = Console()


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: int) -> str:
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"


def _stats_text(snap: Snapshot) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(snap.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(snap.elapsed_seconds), style="bold yellow")
    return stats


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(r, c):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def _draw_menu(size: int) -> None:
    console.clear()

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="dim bold")
    opts.append("  Best Scores    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(Text(f"{size}×{size} board", style="dim")),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]S L I D I N G   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_game(game: GamePlay) -> None:
    console.clear()

    size = game.size
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  shuffle   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    panel = Panel(
        Align.center(_render_board(game.state.board)),
        title=f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save cursor position right before the stats line so _update_time()
    # can later restore to this exact spot and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats_text(game.snapshot())))
    console.print(Align.center(controls))


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats line using the saved cursor position.

    Uses raw ANSI codes (bypassing Rich) so only the single stats
    line is repainted — no flicker from a full redraw.
    """
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    snap = game.snapshot()
    clock = _format_time(snap.elapsed_seconds)
    stats_raw = (
        f"{_DIM}Moves: {_RS}{_YB}{snap.moves}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{clock}{_RS}"
    )

    # Centre the visible text to match what Rich would produce.
    visible_len = len(f"Moves: {snap.moves}    Time: {clock}")
    pad = max(0, (console.width - visible_len) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_win(game: GamePlay) -> None:
    console.clear()

    size = game.size
    snap = game.snapshot()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  You solved it!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    best = Text()
    if snap.result is not None:
        if snap.result.is_new_best:
            best.append(f"New best score: {snap.result.best_score}", style="bold green")
        else:
            best.append(
                f"Best: {snap.result.best_score} (lower is better)", style="dim"
            )

    group = Group(
        Align.center(_render_board(game.state.board)),
        Align.center(congrats),
        Align.center(_stats_text(snap)),
        Align.center(best),
    )

    panel = Panel(
        group,
        title=f"[bold green]Sliding Puzzle  {size}×{size}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_scores(manager: BestScoreManager) -> None:
    """Full-screen best-scores view (used from the menu)."""
    console.clear()

    sizes = manager.all_sizes()
    body: Table | Text
    if not sizes:
        body = Text("  No best scores yet.", style="dim")
    else:
        body = Table(
            box=rich.box.ROUNDED,
            border_style="dim",
            show_lines=False,
        )
        body.add_column("Grid", style="bold cyan")
        body.add_column("Score", justify="right", style="yellow")
        body.add_column("Moves", justify="right", style="yellow")
        body.add_column("Time", justify="right", style="yellow")
        body.add_column("Date", style="dim")
        for size in sizes:
            e = manager.best(size)
            if e is None:
                continue
            body.add_row(
                f"{size}×{size}",
                str(e.score),
                str(e.moves),
                _format_time(e.elapsed),
                e.date,
            )

    panel = Panel(
        Align.center(body),
        title="[bold]BEST  SCORES[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loop ----------------------------------------------------------------


def _play_game(config: GameConfig, manager: BestScoreManager) -> None:
    game = GamePlay(config.size, recorder=manager)
    clock = TickClock(config.tick_interval)

    while True:
        game.new_game()
        clock.reset()

        while game.phase is Phase.PLAYING:
            _draw_game(game)

            # Wait for input with a short timeout so the clock keeps ticking.
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
        _draw_win(game)
        console.print(
            Align.center(
                Text("\n  Press R to play again, Q to go back.\n", style="dim")
            )
        )

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
        _draw_menu(config.size)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key in ("1", "enter"):
            _play_game(config, manager)
        elif key in ("2", "scores"):
            _draw_scores(manager)


# -- public entry point -------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(config)
