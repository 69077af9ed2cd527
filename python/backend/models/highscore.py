"""Best-score persistence and management."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

MOVE_WEIGHT = 100


def compute_score(moves: int, elapsed_seconds: int) -> int:
    """Lower is better: every move costs as much as 100 seconds."""
    return moves * MOVE_WEIGHT + elapsed_seconds


@dataclass
class BestScoreEntry:
    score: int
    moves: int
    elapsed: int
    date: str


@dataclass(frozen=True)
class ScoreResult:
    is_new_best: bool
    best_score: int


def _parse_entry(raw: dict) -> BestScoreEntry:
    """Build an entry from its JSON form; ``ValueError`` on wrong types."""
    entry = BestScoreEntry(**raw)
    numbers = (entry.score, entry.moves, entry.elapsed)
    # bool is an int subclass but never a valid count
    if any(type(n) is not int for n in numbers) or not isinstance(entry.date, str):
        raise ValueError(f"Malformed score entry: {raw!r}")
    return entry


class ScoreRecorder(Protocol):
    """Anything the game can report a finished game to."""

    def record_result(self, moves: int, elapsed_seconds: int) -> ScoreResult: ...


class BestScoreManager:
    """Keeps the best score per grid size, optionally backed by a JSON file.

    With ``filepath=None`` scores live in memory only.
    """

    def __init__(self, filepath: Path | None = None, size: int = 4) -> None:
        self.filepath = filepath
        self.size = size
        self._best: dict[str, BestScoreEntry] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if self.filepath is None or not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
            self._best = {
                str(int(size_key)): _parse_entry(entry)
                for size_key, entry in data.items()
            }
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning(
                "Ignoring unreadable score file %s: %s", self.filepath, exc
            )
            self._best = {}

    def save(self) -> None:
        if self.filepath is None:
            return
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {size_key: asdict(e) for size_key, e in self._best.items()}
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- recording ------------------------------------------------------------

    def record_result(self, moves: int, elapsed_seconds: int) -> ScoreResult:
        """Store the game if it beats the current best for ``self.size``."""
        score = compute_score(moves, elapsed_seconds)
        key = str(self.size)
        prev = self._best.get(key)

        if prev is not None and score >= prev.score:
            return ScoreResult(is_new_best=False, best_score=prev.score)

        self._best[key] = BestScoreEntry(
            score=score,
            moves=moves,
            elapsed=elapsed_seconds,
            date=datetime.now().strftime("%Y-%m-%d %H:%M"),
        )
        try:
            self.save()
        except OSError:
            # Memory must keep matching the file.
            if prev is None:
                del self._best[key]
            else:
                self._best[key] = prev
            raise
        logger.info(
            "New best for %sx%s: %d (%d moves, %ds)",
            self.size, self.size, score, moves, elapsed_seconds,
        )
        return ScoreResult(is_new_best=True, best_score=score)

    # -- queries --------------------------------------------------------------

    def best(self, size: int | None = None) -> BestScoreEntry | None:
        return self._best.get(str(self.size if size is None else size))

    def all_sizes(self) -> list[int]:
        return sorted(int(k) for k in self._best)
