# scores.py
"""
High-score persistence.

The backing file is a JSON array of objects::

    [{"player": "ana", "score": 120, "difficulty": "NORMAL",
      "timestamp": "2024-05-01T18:22:03+02:00"}]

An empty array is a valid file. Reading never raises for I/O or format
problems; see `LoadResult`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
import contextlib
import json
import logging
import os
import stat
import tempfile
from typing import Any, Dict, List, Optional

from .config import Difficulty, MAX_SCORES_PER_DIFFICULTY

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighScoreRecord:
    score: int
    difficulty: Difficulty
    timestamp: datetime
    player: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player": self.player,
            "score": self.score,
            "difficulty": self.difficulty.name,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "HighScoreRecord":
        score = raw["score"]
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValueError(f"bad score {score!r}")
        player = raw.get("player", raw.get("player_name"))
        return cls(
            score=score,
            difficulty=Difficulty.parse(raw["difficulty"]),
            timestamp=datetime.fromisoformat(raw["timestamp"]),
            player=str(player) if player else None,
        )


@dataclass
class LoadResult:
    """Records read from disk, plus the reason if anything went wrong."""
    records: List[HighScoreRecord] = field(default_factory=list)
    error: Optional[str] = None
    missing: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def _sort_and_trim(records: List[HighScoreRecord], limit: Optional[int]) -> List[HighScoreRecord]:
    out: List[HighScoreRecord] = []
    for diff in Difficulty:
        bucket = [r for r in records if r.difficulty is diff]
        bucket.sort(key=lambda r: r.score, reverse=True)  # stable: older entries keep ties
        out.extend(bucket if limit is None else bucket[:limit])
    return out


def _file_mode(path: str) -> int:
    """Mode for a rewritten score file: keep the old one, else honor the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except OSError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class ScoreStore:
    """Owns the high-score list and is the only writer of its file."""

    def __init__(self, path, max_per_difficulty: Optional[int] = MAX_SCORES_PER_DIFFICULTY):
        self.path = os.fspath(path)
        self.max_per_difficulty = max_per_difficulty
        self.records: List[HighScoreRecord] = []

    # ----- reading -----
    def read(self) -> LoadResult:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return LoadResult(error=f"{self.path} does not exist", missing=True)
        except (OSError, UnicodeDecodeError) as e:
            return LoadResult(error=f"could not read {self.path}: {e}")
        except json.JSONDecodeError as e:
            return LoadResult(error=f"{self.path} is not valid JSON: {e}")

        if not isinstance(data, list):
            return LoadResult(error=f"{self.path} does not hold a list")

        records: List[HighScoreRecord] = []
        bad = 0
        for raw in data:
            try:
                records.append(HighScoreRecord.from_dict(raw))
            except (KeyError, TypeError, ValueError, AttributeError):
                bad += 1
        error = f"skipped {bad} malformed entr{'y' if bad == 1 else 'ies'}" if bad else None
        return LoadResult(records=_sort_and_trim(records, self.max_per_difficulty), error=error)

    def load(self) -> List[HighScoreRecord]:
        result = self.read()
        if result.missing:
            log.info("No high-score file yet (%s); starting empty", self.path)
        elif not result.ok:
            log.warning("High scores: %s", result.error)
        else:
            log.debug("Loaded %d high score(s) from %s", len(result.records), self.path)
        self.records = result.records
        return list(self.records)

    # ----- updating -----
    def record(
        self,
        score: int,
        difficulty: Difficulty,
        timestamp: Optional[datetime] = None,
        player: Optional[str] = None,
    ) -> List[HighScoreRecord]:
        if score < 0:
            raise ValueError(f"score must be non-negative, got {score}")
        entry = HighScoreRecord(
            score=int(score),
            difficulty=difficulty,
            timestamp=timestamp if timestamp is not None else datetime.now().astimezone(),
            player=player or None,
        )
        self.records = _sort_and_trim(self.records + [entry], self.max_per_difficulty)
        return list(self.records)

    def persist(self, records: Optional[List[HighScoreRecord]] = None) -> bool:
        """Write to disk. Returns False (and logs) if the write failed."""
        if records is not None:
            self.records = list(records)
        payload = json.dumps([r.to_dict() for r in self.records], indent=2)
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=directory, prefix=".scores-", suffix=".tmp", delete=False
            ) as f:
                tmp_path = f.name
                f.write(payload)
            os.chmod(tmp_path, _file_mode(self.path))
            os.replace(tmp_path, self.path)
        except OSError as e:
            log.warning("Failed to save high scores to %s: %s", self.path, e)
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.remove(tmp_path)
            return False
        log.info("Saved %d high score(s) to %s", len(self.records), self.path)
        return True

    # ----- queries -----
    def top(self, difficulty: Difficulty, n: Optional[int] = None) -> List[HighScoreRecord]:
        bucket = [r for r in self.records if r.difficulty is difficulty]
        return bucket if n is None else bucket[:n]

    def best(self, difficulty: Difficulty) -> int:
        bucket = self.top(difficulty, 1)
        return bucket[0].score if bucket else 0
