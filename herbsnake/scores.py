"""
scores.py — Best-score persistence, one integer per difficulty.

The simulation only needs get_best() and set_best(). Storage problems are
this module's business: an unreadable or missing file counts as all zeros
and a failed write is logged, never raised.
"""

import json
import logging
import os

log = logging.getLogger(__name__)


class MemoryScoreStore:
    """Volatile store; used by tests and as the default when none is given."""

    def __init__(self, initial: dict | None = None):
        self._scores: dict[str, int] = dict(initial or {})

    def get_best(self, key: str) -> int:
        return int(self._scores.get(key, 0))

    def set_best(self, key: str, value: int) -> None:
        self._scores[key] = int(value)

    def reset_all(self) -> None:
        self._scores.clear()

    def all(self) -> dict[str, int]:
        return dict(self._scores)


class JsonScoreStore(MemoryScoreStore):
    """Scores kept in a small JSON object on disk, rewritten on every change."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self._scores = self._load()

    def set_best(self, key: str, value: int) -> None:
        super().set_best(key, value)
        self._save()

    def reset_all(self) -> None:
        super().reset_all()
        self._save()

    def _load(self) -> dict[str, int]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            log.warning("could not read scores from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            log.warning("ignoring malformed scores file %s", self.path)
            return {}
        scores = {}
        for key, value in data.items():
            try:
                scores[str(key)] = max(0, int(value))
            except (TypeError, ValueError):
                log.warning("ignoring bad score %r for %r", value, key)
        return scores

    def _save(self) -> None:
        # an interrupted write must never truncate the existing file
        tmp_path = self.path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._scores, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            log.warning("could not write scores to %s: %s", self.path, exc)
