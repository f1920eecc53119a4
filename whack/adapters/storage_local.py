from __future__ import annotations
import csv
import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from whack.domain.entities import ScoreRecord
from whack.domain.ports import StoragePort

_log = logging.getLogger(__name__)


class StorageLocal(StoragePort):
    """Local filesystem storage for user settings (JSON) and score history (CSV)."""

    SETTINGS_FILE = "user_settings.json"
    HISTORY_FILE = "score_history.csv"
    _HISTORY_FIELDS: Tuple[str, ...] = (
        "finished_at",
        "score",
        "pops",
        "round_seconds",
        "hole_count",
    )

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    # ---- User settings (JSON) ----
    def save_user_settings(self, payload: Dict) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = os.path.join(self.root, self.SETTINGS_FILE)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

    def load_user_settings(self) -> Optional[Dict]:
        path = os.path.join(self.root, self.SETTINGS_FILE)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"{self.SETTINGS_FILE} must contain a JSON object.")
        return payload

    # ---- Score history (CSV, one row per finished round) ----
    def append_round_record(self, record: ScoreRecord) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = os.path.join(self.root, self.HISTORY_FILE)
        write_header = not os.path.exists(path) or os.path.getsize(path) == 0
        with open(path, "a", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            if write_header:
                w.writerow(self._HISTORY_FIELDS)
            w.writerow(
                [
                    record.finished_at.isoformat(),
                    record.score,
                    record.pops,
                    record.round_seconds,
                    record.hole_count,
                ]
            )
        _log.debug("Appended round record to %s", path)

    def load_round_records(self) -> List[ScoreRecord]:
        path = os.path.join(self.root, self.HISTORY_FILE)
        if not os.path.exists(path):
            return []
        records: List[ScoreRecord] = []
        with open(path, "r", newline="", encoding="utf-8") as f:
            r = csv.DictReader(f)
            for line_no, row in enumerate(r, start=2):
                records.append(self._parse_row(row, line_no))
        return records

    @staticmethod
    def _parse_row(row: Dict[str, str], line_no: int) -> ScoreRecord:
        try:
            return ScoreRecord(
                finished_at=datetime.fromisoformat(row["finished_at"]),
                score=int(row["score"]),
                pops=int(row["pops"]),
                round_seconds=int(row["round_seconds"]),
                hole_count=int(row["hole_count"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed score history row {line_no}: {exc}") from exc
