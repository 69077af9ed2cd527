"""PyQt6 GUI frontend — fully self-contained.

Main menu, puzzle board with a shuffle button, inline win banner and a
best-score page. The board repaints from the snapshots the game emits;
a ``QTimer`` feeds the game its one-second ticks.
"""

from __future__ import annotations

import sys

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGridLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSpacerItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from backend.config import GameConfig
from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import Phase, Snapshot
from backend.models.board import Direction
from backend.models.highscore import BestScoreManager

# ---------------------------------------------------------------------------
# Catppuccin Mocha CSS colours
# ---------------------------------------------------------------------------
_BASE = "#1e1e2e"
_MANTLE = "#181825"
_SURFACE0 = "#313244"
_SURFACE1 = "#45475a"
_OVERLAY0 = "#6c7086"
_TEXT = "#cdd6f4"
_SUBTEXT = "#a6adc8"
_BLUE = "#89b4fa"
_BLUE_H = "#a4c4fc"
_GREEN = "#a6e3a1"
_GREEN_H = "#b8ecb4"
_PINK = "#f5c2e7"
_YELLOW = "#f9e2af"
_RED = "#f38ba8"
_RED_H = "#f5a0b8"
_LAVENDER = "#b4befe"

_GLOBAL_CSS = f"""
    QMainWindow, QWidget#page {{ background: {_BASE}; }}
    QLabel {{ color: {_TEXT}; }}
"""

_CONTROLS_HINT = "Arrows / WASD  move     R  shuffle     Esc  menu"

_KEY_DIRECTIONS: dict[Qt.Key, Direction] = {
    Qt.Key.Key_Up: Direction.UP,
    Qt.Key.Key_W: Direction.UP,
    Qt.Key.Key_Down: Direction.DOWN,
    Qt.Key.Key_S: Direction.DOWN,
    Qt.Key.Key_Left: Direction.LEFT,
    Qt.Key.Key_A: Direction.LEFT,
    Qt.Key.Key_Right: Direction.RIGHT,
    Qt.Key.Key_D: Direction.RIGHT,
}


def _styled_btn(
    text: str,
    *,
    bg: str = _SURFACE0,
    hover: str = _SURFACE1,
    fg: str = _TEXT,
    font_size: int = 14,
    min_w: int = 0,
    min_h: int = 44,
) -> QPushButton:
    btn = QPushButton(text)
    btn.setFont(QFont("Helvetica", font_size, QFont.Weight.Bold))
    btn.setMinimumHeight(min_h)
    if min_w:
        btn.setMinimumWidth(min_w)
    btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
    btn.setCursor(Qt.CursorShape.PointingHandCursor)
    btn.setStyleSheet(
        f"QPushButton {{ background:{bg}; color:{fg};"
        f" border:none; border-radius:8px; padding:6px 18px; }}"
        f" QPushButton:hover {{ background:{hover}; }}"
    )
    return btn


def _label(text: str, size: int, colour: str = _TEXT, bold: bool = False) -> QLabel:
    lbl = QLabel(text)
    lbl.setFont(
        QFont("Helvetica", size, QFont.Weight.Bold if bold else QFont.Weight.Normal)
    )
    lbl.setStyleSheet(f"color:{colour};")
    lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
    return lbl


def _fmt(secs: int) -> str:
    m, s = divmod(secs, 60)
    return f"{m:02d}:{s:02d}"


# ═══════════════════════════════════════════════════════════════════════════
# Pages
# ═══════════════════════════════════════════════════════════════════════════


class _MenuPage(QWidget):
    """Main menu: play, best scores, quit."""

    def __init__(self, size: int) -> None:
        super().__init__()
        self.setObjectName("page")

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(12)
        root.setContentsMargins(30, 30, 30, 30)

        root.addWidget(_label("SLIDING  PUZZLE", 34, bold=True))
        root.addWidget(_label(f"{size}×{size}", 15, _SUBTEXT))
        root.addSpacerItem(QSpacerItem(0, 24))

        self.play_btn = _styled_btn(
            "P L A Y", bg=_BLUE, hover=_LAVENDER, fg=_BASE,
            font_size=16, min_w=240, min_h=52,
        )
        root.addWidget(self.play_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.scores_btn = _styled_btn("BEST SCORES", min_w=240, font_size=13)
        root.addWidget(self.scores_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        self.quit_btn = _styled_btn(
            "Q U I T", bg=_RED, hover=_RED_H, fg=_BASE, min_w=240, font_size=13
        )
        root.addWidget(self.quit_btn, alignment=Qt.AlignmentFlag.AlignCenter)


class _GamePage(QWidget):
    """The puzzle board with tile buttons, live stats and a win banner."""

    def __init__(self, config: GameConfig, hs: BestScoreManager) -> None:
        super().__init__()
        self.setObjectName("page")
        size = config.size
        self.game = GamePlay(size, recorder=hs)
        self.game.subscribe(self._on_snapshot)

        tile_px = max(40, min(84, 400 // size))
        f_sz = max(12, tile_px // 4)

        root = QVBoxLayout(self)
        root.setSpacing(6)
        root.setContentsMargins(16, 10, 16, 10)

        root.addWidget(_label(f"Sliding Puzzle  {size}×{size}", 17, bold=True))

        self._stats = _label("", 13, _PINK)
        root.addWidget(self._stats)

        # board
        frame = QFrame()
        frame.setStyleSheet(f"background:{_MANTLE}; border-radius:10px;")
        grid = QGridLayout(frame)
        grid.setSpacing(4)
        grid.setContentsMargins(8, 8, 8, 8)
        root.addWidget(frame, alignment=Qt.AlignmentFlag.AlignCenter)

        self._btns: list[QPushButton] = []
        for i in range(size * size):
            b = QPushButton()
            b.setFixedSize(tile_px, tile_px)
            b.setFont(QFont("Helvetica", f_sz, QFont.Weight.Bold))
            b.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            b.clicked.connect(lambda _, idx=i: self.game.attempt_move(idx))
            grid.addWidget(b, *divmod(i, size))
            self._btns.append(b)

        self._banner = _label("", 15, _GREEN, bold=True)
        root.addWidget(self._banner)
        self._best = _label("", 12, _YELLOW)
        root.addWidget(self._best)

        self.shuffle_btn = _styled_btn(
            "SHUFFLE", bg=_BLUE, hover=_BLUE_H, fg=_BASE, min_w=160, font_size=13
        )
        self.shuffle_btn.clicked.connect(self.new_game)
        root.addWidget(self.shuffle_btn, alignment=Qt.AlignmentFlag.AlignCenter)

        root.addWidget(_label(_CONTROLS_HINT, 11, _OVERLAY0))

        self._timer = QTimer(self)
        self._timer.setInterval(config.tick_interval_ms)
        self._timer.timeout.connect(self.game.tick)

        self._on_snapshot(self.game.snapshot())

    # -- game control --

    def new_game(self) -> None:
        self.game.new_game()
        self._timer.start()

    def move(self, d: Direction) -> None:
        self.game.attempt_directional_move(d)

    def stop(self) -> None:
        self._timer.stop()

    # -- rendering --

    def _on_snapshot(self, snap: Snapshot) -> None:
        board = self.game.state.board
        for i, v in enumerate(snap.board):
            b = self._btns[i]
            if v == 0:
                b.setText("")
                b.setStyleSheet(
                    f"QPushButton{{background:{_MANTLE};border:none;border-radius:8px;}}"
                )
                continue
            correct = board.is_tile_correct(*board.row_col(i))
            bg = _GREEN if correct else _BLUE
            hv = _GREEN_H if correct else _BLUE_H
            b.setText(str(v))
            b.setStyleSheet(
                f"QPushButton{{background:{bg};color:{_BASE};"
                f"border:none;border-radius:8px;font-weight:bold;}}"
                f"QPushButton:hover{{background:{hv};}}"
            )

        self._stats.setText(
            f"Moves: {snap.moves}    Time: {_fmt(snap.elapsed_seconds)}"
        )

        if snap.phase is Phase.SOLVED:
            self._timer.stop()
            self._banner.setText("★  S O L V E D  ★")
        else:
            self._banner.setText("")

        result = snap.result
        if result is None:
            self._best.setText("")
        elif result.is_new_best:
            self._best.setText(
                f"New best: {snap.moves} moves, {snap.elapsed_seconds}s"
                f"  (score {result.best_score})"
            )
        else:
            self._best.setText(f"Best: {result.best_score} (lower is better)")


class _ScoresPage(QWidget):
    """Best score per grid size with a back button."""

    def __init__(self, hs: BestScoreManager) -> None:
        super().__init__()
        self.setObjectName("page")

        root = QVBoxLayout(self)
        root.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.setSpacing(8)
        root.setContentsMargins(24, 20, 24, 16)

        root.addWidget(_label("BEST  SCORES", 26, bold=True))
        root.addSpacerItem(QSpacerItem(0, 12))

        sizes = hs.all_sizes()
        if not sizes:
            root.addWidget(_label("No best scores yet.", 14, _OVERLAY0))
        for sz in sizes:
            e = hs.best(sz)
            if e is None:
                continue
            root.addWidget(_label(f"—  {sz}×{sz}  —", 14, _BLUE, bold=True))
            root.addWidget(
                _label(
                    f"{e.score}   ({e.moves} moves, {_fmt(e.elapsed)})   {e.date}",
                    12,
                    _SUBTEXT,
                )
            )

        root.addSpacerItem(QSpacerItem(0, 12))
        self.back_btn = _styled_btn("B A C K", min_w=200, font_size=13)
        root.addWidget(self.back_btn, alignment=Qt.AlignmentFlag.AlignCenter)


# ═══════════════════════════════════════════════════════════════════════════
# Main window
# ═══════════════════════════════════════════════════════════════════════════

_IDX_MENU = 0
_IDX_GAME = 1
_IDX_SCORES = 2


class _MainWindow(QMainWindow):
    def __init__(self, config: GameConfig) -> None:
        super().__init__()
        self._config = config
        self._hs = BestScoreManager(config.scores_path, size=config.size)

        self.setWindowTitle("Sliding Puzzle")
        self.setStyleSheet(_GLOBAL_CSS)
        self.setMinimumSize(480, 620)

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)

        self._menu = _MenuPage(config.size)
        self._menu.play_btn.clicked.connect(self._on_play)
        self._menu.scores_btn.clicked.connect(self._show_scores)
        self._menu.quit_btn.clicked.connect(self.close)
        self._stack.addWidget(self._menu)  # 0

        self._game_page = _GamePage(config, self._hs)
        self._stack.addWidget(self._game_page)  # 1

        self._stack.addWidget(QWidget())  # 2, replaced on demand

        self._stack.setCurrentIndex(_IDX_MENU)

    # -- navigation ---

    def _show_menu(self) -> None:
        self._game_page.stop()
        self._stack.setCurrentIndex(_IDX_MENU)

    def _on_play(self) -> None:
        self._game_page.new_game()
        self._stack.setCurrentIndex(_IDX_GAME)

    def _show_scores(self) -> None:
        page = _ScoresPage(self._hs)
        page.back_btn.clicked.connect(self._show_menu)

        old = self._stack.widget(_IDX_SCORES)
        self._stack.removeWidget(old)
        old.deleteLater()
        self._stack.insertWidget(_IDX_SCORES, page)
        self._stack.setCurrentIndex(_IDX_SCORES)

    # -- keyboard ---

    def keyPressEvent(self, event: QKeyEvent | None) -> None:  # noqa: N802
        if event is None:
            return
        key = event.key()
        idx = self._stack.currentIndex()

        if idx == _IDX_MENU:
            if key == Qt.Key.Key_Return:
                self._on_play()
            elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
                self.close()

        elif idx == _IDX_GAME:
            if key in _KEY_DIRECTIONS:
                self._game_page.move(_KEY_DIRECTIONS[key])
            elif key == Qt.Key.Key_R:
                self._game_page.new_game()
            elif key in (Qt.Key.Key_M, Qt.Key.Key_Escape):
                self._show_menu()

        elif idx == _IDX_SCORES:
            if key in (Qt.Key.Key_Escape, Qt.Key.Key_Backspace, Qt.Key.Key_M):
                self._show_menu()

        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(config: GameConfig) -> None:
    """Launch the PyQt6 GUI (opens directly to the menu)."""
    qapp = QApplication.instance() or QApplication(sys.argv)
    window = _MainWindow(config)
    window.show()
    qapp.exec()
