from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from ..domain.entities import HoleIndex, HoleState, RoundPhase, RoundResult, RoundSnapshot
from .status_format import counter_text, hole_style, phase_label

HeaderDTO = Dict[str, Any]
HoleStyles = Dict[HoleIndex, Tuple[str, str]]


@dataclass
class GameVM:
    """Turn round snapshots into render-ready DTOs for the main window and grid.

    Responsibilities
    - Header DTO: time/score field text, start-button state, phase label
    - Hole DTO: ``{index: (text, background)}`` for holes whose state changed
    - Best score across saved history and this session (shown in the header)
    """

    on_update_header: Optional[Callable[[HeaderDTO], None]] = None
    on_update_holes: Optional[Callable[[HoleStyles], None]] = None

    last_snapshot: Optional[RoundSnapshot] = None
    best_score: Optional[int] = None
    _holes: Tuple[HoleState, ...] = field(default_factory=tuple)
    _log: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__), repr=False
    )

    def apply_snapshot(self, snapshot: RoundSnapshot) -> None:
        if not isinstance(snapshot, RoundSnapshot):
            raise TypeError("GameVM.apply_snapshot expects a RoundSnapshot.")
        self.last_snapshot = snapshot

        header = self.header_dto(snapshot)
        if self.on_update_header:
            self.on_update_header(header)

        if len(snapshot.holes) != len(self._holes):
            changed = range(len(snapshot.holes))
        else:
            changed = [
                i for i, (old, new) in enumerate(zip(self._holes, snapshot.holes)) if old is not new
            ]
        styles: HoleStyles = {i: hole_style(snapshot.holes[i]) for i in changed}
        self._holes = snapshot.holes
        if styles and self.on_update_holes:
            self.on_update_holes(styles)

    def header_dto(self, snapshot: RoundSnapshot) -> HeaderDTO:
        return {
            "time": counter_text(snapshot.remaining_s),
            "score": counter_text(snapshot.score),
            "start_enabled": snapshot.phase is RoundPhase.IDLE,
            "phase": phase_label(snapshot.phase),
            "best": counter_text(self.best_score),
        }

    def reset(self, hole_count: int) -> None:
        """Render an idle grid of ``hole_count`` holes (e.g. after a resize)."""
        self._holes = ()
        self.apply_snapshot(
            RoundSnapshot(
                phase=RoundPhase.IDLE,
                remaining_s=None,
                score=None,
                holes=(HoleState.DOWN,) * int(hole_count),
            )
        )

    def seed_best(self, score: Optional[int]) -> None:
        """Raise the best score to a previously saved one (e.g. from history)."""
        if score is None:
            return
        if self.best_score is None or score > self.best_score:
            self.best_score = score

    def note_result(self, result: RoundResult) -> bool:
        """Track the best score; returns True when ``result`` beats it."""
        if self.best_score is None or result.score > self.best_score:
            self.best_score = result.score
            self._log.debug("New best score: %d", result.score)
            return True
        return False
