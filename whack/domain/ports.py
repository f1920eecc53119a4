from __future__ import annotations
from typing import Callable, Dict, List, Optional, Protocol

from .entities import ScoreRecord

Clock = Callable[[], float]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports ----
class StoragePort(Protocol):
    """Persistence for user settings and the score history."""

    def save_user_settings(self, payload: Dict) -> None: ...
    def load_user_settings(self) -> Optional[Dict]: ...
    def append_round_record(self, record: ScoreRecord) -> None: ...
    def load_round_records(self) -> List[ScoreRecord]: ...
