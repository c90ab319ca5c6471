"""
Score persistence: the current session's scoreboard and the shared leaderboard
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Reading or writing a score file failed"""


class ScoreRepository:
    """JSON files on disk.

    Scoreboard: a single ``{"score", "startTime", "endTime"}`` object.
    Leaderboard: an array of such objects, at most ``capacity`` long, keyed
    by ``startTime``.
    """

    def __init__(self, scoreboard_path, leaderboard_path, capacity: int = 3):
        self.scoreboard_path = Path(scoreboard_path)
        self.leaderboard_path = Path(leaderboard_path)
        self.capacity = capacity

    def save_score(self, record: Dict[str, Any]):
        self._write_json(self.scoreboard_path, record)

    def load_leaderboard(self) -> List[Dict[str, Any]]:
        if not self.leaderboard_path.exists():
            return []
        try:
            with self.leaderboard_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Could not read leaderboard {self.leaderboard_path}: {exc}") from exc
        if not isinstance(data, list):
            raise PersistenceError(f"Leaderboard {self.leaderboard_path} must hold a JSON array")
        for i, entry in enumerate(data):
            if not _is_valid_entry(entry):
                raise PersistenceError(f"Leaderboard {self.leaderboard_path} entry {i} is malformed: {entry!r}")
        return data

    def save_leaderboard(self, record: Dict[str, Any]) -> bool:
        """Upsert ``record``; returns True when the leaderboard changed"""
        entries = self.load_leaderboard()
        updated = upsert_leaderboard(entries, record, self.capacity)
        if updated:
            self._write_json(self.leaderboard_path, entries)
        return updated

    def _write_json(self, path: Path, payload: Any):
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(payload, f)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            # Drop a half-written temp file
            if tmp_path.exists():
                tmp_path.unlink()
            raise PersistenceError(f"Could not write {path}: {exc}") from exc


def _is_valid_entry(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    score = entry.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return False
    return isinstance(entry.get("startTime"), str)


def upsert_leaderboard(entries: List[Dict[str, Any]], record: Dict[str, Any], capacity: int) -> bool:
    """Apply the leaderboard policy to ``entries`` in place.

    1. An entry with the same startTime is replaced.
    2. Otherwise the record is appended while there is room.
    3. Otherwise the first lowest-scoring entry is replaced if the record
       scores higher.
    """
    for i, entry in enumerate(entries):
        if entry.get("startTime") == record["startTime"]:
            if entry == record:
                return False
            entries[i] = dict(record)
            return True

    if len(entries) < capacity:
        entries.append(dict(record))
        return True

    if not entries:
        return False

    lowest = min(range(len(entries)), key=lambda i: float(entries[i].get("score", 0.0)))
    if float(entries[lowest].get("score", 0.0)) < record["score"]:
        logger.info("New leaderboard entry %.1f replaces %.1f",
                    record["score"], float(entries[lowest].get("score", 0.0)))
        entries[lowest] = dict(record)
        return True
    return False
