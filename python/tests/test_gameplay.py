"""Puzzle state machine tests: phases, moves, the clock and scoring."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import Phase, Snapshot
from backend.models.board import Board, Direction
from backend.models.highscore import BestScoreManager

from conftest import FakeRecorder


# -- helpers ------------------------------------------------------------------


def _center_board() -> Board:
    """4×4 board with the blank at (1, 1), index 5."""
    return Board.from_flat(4, [1, 2, 3, 4, 5, 0, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15])


def _playing(board: Board, recorder: FakeRecorder | None = None) -> GamePlay:
    return GamePlay.from_board(board, recorder=recorder)


# -- lifecycle ----------------------------------------------------------------


def test_starts_ready_on_solved_board() -> None:
    game = GamePlay(4)
    snap = game.snapshot()
    assert snap.phase is Phase.READY
    assert list(snap.board) == list(range(1, 16)) + [0]
    assert snap.moves == 0
    assert snap.elapsed_seconds == 0
    assert snap.result is None


def test_ready_ignores_moves_and_ticks() -> None:
    game = GamePlay(4)
    assert not game.attempt_move(14)
    assert not game.attempt_directional_move(Direction.RIGHT)
    assert not game.tick()
    snap = game.snapshot()
    assert snap.moves == 0
    assert snap.elapsed_seconds == 0
    assert game.phase is Phase.READY


def test_new_game_starts_play() -> None:
    game = GamePlay(4, rng=random.Random(42))
    game.new_game()
    assert game.phase is Phase.PLAYING
    assert not game.is_solved()
    assert Solver.is_solvable(game.state.board)
    assert game.snapshot().moves == 0
    assert game.snapshot().elapsed_seconds == 0


def test_new_game_resets_counters_mid_game() -> None:
    game = GamePlay(4, rng=random.Random(1))
    game.new_game()
    game.tick()
    game.tick()
    for d in Direction:
        game.attempt_directional_move(d)
    game.new_game()
    snap = game.snapshot()
    assert snap.moves == 0
    assert snap.elapsed_seconds == 0
    assert snap.phase is Phase.PLAYING


def test_new_game_after_solved(one_move_board: Board, recorder: FakeRecorder) -> None:
    game = _playing(one_move_board, recorder)
    game.tick()
    game.attempt_move(15)
    assert game.phase is Phase.SOLVED

    game.new_game()
    snap = game.snapshot()
    assert snap.phase is Phase.PLAYING
    assert snap.moves == 0
    assert snap.elapsed_seconds == 0
    assert snap.result is None


def test_initialize_returns_to_ready() -> None:
    game = GamePlay(3, rng=random.Random(5))
    game.new_game()
    game.initialize()
    assert game.phase is Phase.READY
    assert game.is_solved()


def test_seeded_games_are_deterministic() -> None:
    a = GamePlay(4, rng=random.Random(11))
    b = GamePlay(4, rng=random.Random(11))
    a.new_game()
    b.new_game()
    assert a.snapshot().board == b.snapshot().board


# -- attempt_move -------------------------------------------------------------


def test_move_next_to_blank(one_move_board: Board, recorder: FakeRecorder) -> None:
    game = _playing(one_move_board, recorder)
    assert game.attempt_move(15)
    snap = game.snapshot()
    assert snap.board[14] == 15
    assert snap.board[15] == 0
    assert snap.moves == 1


def test_non_adjacent_move_is_noop() -> None:
    game = _playing(GameGenerator.solved(4))
    assert not game.attempt_move(0)
    assert game.state.board.tiles == list(range(1, 16)) + [0]
    assert game.snapshot().moves == 0


@pytest.mark.parametrize("index", [0, 10, 15, 7], ids=["corner", "diagonal", "far", "two-away"])
def test_illegal_targets_from_center(index: int) -> None:
    game = _playing(_center_board())
    before = game.snapshot()
    assert not game.attempt_move(index)
    assert game.snapshot() == before


@pytest.mark.parametrize("index", [-1, 16, 100])
def test_out_of_range_is_noop(index: int) -> None:
    game = _playing(_center_board())
    before = game.snapshot()
    assert not game.attempt_move(index)
    assert game.snapshot() == before


def test_blank_itself_is_noop() -> None:
    game = _playing(_center_board())
    assert not game.attempt_move(5)
    assert game.snapshot().moves == 0


def test_row_wraparound_is_not_adjacent() -> None:
    # Blank at index 4 (row 1, col 0); index 3 is (row 0, col 3).
    board = Board.from_flat(4, [1, 2, 3, 4, 0, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15])
    game = _playing(board)
    assert not game.attempt_move(3)
    assert game.attempt_move(0)


@pytest.mark.parametrize("index", [1, 4, 6, 9])
def test_all_four_neighbours_move(index: int) -> None:
    game = _playing(_center_board())
    tile = game.state.board.tiles[index]
    assert game.attempt_move(index)
    tiles = game.state.board.tiles
    assert tiles[5] == tile
    assert tiles[index] == 0
    assert game.state.board.blank_index == index
    assert game.snapshot().moves == 1


# -- attempt_directional_move -------------------------------------------------


@pytest.mark.parametrize(
    "direction, target",
    [
        (Direction.UP, 9),     # tile below slides up
        (Direction.DOWN, 1),   # tile above slides down
        (Direction.LEFT, 6),   # tile to the right slides left
        (Direction.RIGHT, 4),  # tile to the left slides right
    ],
)
def test_directional_moves(direction: Direction, target: int) -> None:
    game = _playing(_center_board())
    tile = game.state.board.tiles[target]
    assert game.attempt_directional_move(direction)
    assert game.state.board.tiles[5] == tile
    assert game.state.board.blank_index == target
    assert game.snapshot().moves == 1


@pytest.mark.parametrize("direction", [Direction.UP, Direction.LEFT])
def test_directional_move_at_edge_is_noop(direction: Direction) -> None:
    game = _playing(GameGenerator.solved(4))  # blank bottom-right
    assert not game.attempt_directional_move(direction)
    assert game.snapshot().moves == 0


def test_directional_left_solves(one_move_board: Board, recorder: FakeRecorder) -> None:
    # Blank at 14, tile 15 to its right: LEFT slides 15 into the blank.
    game = _playing(one_move_board, recorder)
    assert game.attempt_directional_move(Direction.LEFT)
    assert game.phase is Phase.SOLVED


# -- solving ------------------------------------------------------------------


def test_solving_records_once(one_move_board: Board, recorder: FakeRecorder) -> None:
    game = _playing(one_move_board, recorder)
    for _ in range(7):
        game.tick()
    assert game.attempt_move(15)

    assert game.phase is Phase.SOLVED
    assert game.is_won
    assert recorder.calls == [(1, 7)]
    assert game.snapshot().result is not None
    assert game.snapshot().result.best_score == 107


def test_solved_freezes_clock(one_move_board: Board, recorder: FakeRecorder) -> None:
    game = _playing(one_move_board, recorder)
    game.tick()
    game.attempt_move(15)
    for _ in range(5):
        assert not game.tick()
    assert game.snapshot().elapsed_seconds == 1


def test_solved_rejects_moves(one_move_board: Board, recorder: FakeRecorder) -> None:
    game = _playing(one_move_board, recorder)
    game.attempt_move(15)
    assert not game.attempt_move(14)
    assert not game.attempt_directional_move(Direction.RIGHT)
    assert game.snapshot().moves == 1
    assert len(recorder.calls) == 1


def test_multi_move_solve(recorder: FakeRecorder) -> None:
    # Goal with the blank walked up, up, left: walk it back.
    board = Board.from_flat(4, [1, 2, 3, 4, 5, 6, 0, 7, 9, 10, 11, 8, 13, 14, 15, 12])
    game = _playing(board, recorder)
    for index in (7, 11):
        assert game.attempt_move(index)
        assert game.phase is Phase.PLAYING
    assert game.attempt_move(15)
    assert game.phase is Phase.SOLVED
    assert recorder.calls == [(3, 0)]


def test_is_solved_is_idempotent() -> None:
    game = _playing(_center_board())
    assert game.is_solved() == game.is_solved()
    solved = _playing(GameGenerator.solved(3))
    assert solved.is_solved() and solved.is_solved()


def test_default_recorder_tracks_best(one_move_board: Board) -> None:
    game = GamePlay.from_board(one_move_board)
    game.attempt_move(15)
    result = game.snapshot().result
    assert result is not None
    assert result.is_new_best
    assert result.best_score == 100


def test_best_score_manager_as_recorder(one_move_board: Board) -> None:
    manager = BestScoreManager(size=4)
    first = GamePlay.from_board(one_move_board, recorder=manager)
    first.tick()
    first.attempt_move(15)

    second = GamePlay.from_board(one_move_board, recorder=manager)
    second.tick()
    second.tick()
    second.attempt_move(15)
    result = second.snapshot().result
    assert result is not None
    assert not result.is_new_best
    assert result.best_score == 101


# -- clock --------------------------------------------------------------------


def test_tick_counts_seconds_while_playing() -> None:
    game = _playing(_center_board())
    for _ in range(3):
        assert game.tick()
    assert game.snapshot().elapsed_seconds == 3


def test_moves_do_not_advance_clock() -> None:
    game = _playing(_center_board())
    game.attempt_move(6)
    game.attempt_move(5)
    assert game.snapshot().elapsed_seconds == 0


# -- observers ----------------------------------------------------------------


def test_observer_sees_changes_only() -> None:
    game = _playing(_center_board())
    seen: list[Snapshot] = []
    game.subscribe(seen.append)

    game.attempt_move(0)   # illegal
    game.attempt_move(6)   # legal
    game.tick()

    assert len(seen) == 2
    assert seen[0].moves == 1
    assert seen[1].elapsed_seconds == 1


def test_observer_sees_new_game_and_solve(one_move_board: Board, recorder: FakeRecorder) -> None:
    game = _playing(one_move_board, recorder)
    phases: list[Phase] = []
    game.subscribe(lambda snap: phases.append(snap.phase))
    game.attempt_move(15)
    game.new_game()
    assert phases == [Phase.SOLVED, Phase.PLAYING]


def test_unsubscribe() -> None:
    game = _playing(_center_board())
    seen: list[Snapshot] = []
    unsubscribe = game.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    game.attempt_move(6)
    assert seen == []


def test_snapshot_is_detached_from_board() -> None:
    game = _playing(_center_board())
    snap = game.snapshot()
    game.attempt_move(6)
    assert snap.board[5] == 0
    assert snap.moves == 0


def test_from_board_copies_input(one_move_board: Board) -> None:
    game = _playing(one_move_board)
    game.attempt_move(15)
    assert one_move_board.tiles[14] == 0


# -- recorder failures and odd input ------------------------------------------


def test_unknown_direction_is_noop() -> None:
    game = _playing(_center_board())
    before = game.snapshot()
    assert not game.attempt_directional_move("north")  # type: ignore[arg-type]
    assert game.snapshot() == before


def test_unwritable_scores_still_finish_game(tmp_path: Path, one_move_board: Board) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    manager = BestScoreManager(blocker / "bestscores.json", size=4)
    game = GamePlay.from_board(one_move_board, recorder=manager)
    seen: list[Snapshot] = []
    game.subscribe(seen.append)

    with pytest.raises(OSError):
        game.attempt_move(15)

    assert game.phase is Phase.SOLVED
    assert len(seen) == 1
    assert seen[0].phase is Phase.SOLVED
    assert seen[0].result is None
    assert not game.tick()
    assert manager.best() is None
