from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from engine.error_handler import get_logger

log = get_logger("telemetry")


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


def _cell(pos: Optional[Sequence[int]]) -> Optional[list]:
    return None if pos is None else [int(pos[0]), int(pos[1])]


@dataclass
class TelemetryLogger:
    """
    Append-only JSONL trace of enemy turns and decisions.

    Inactive until init() is called. Every row carries the enemy turn
    number it belongs to, so one turn's decisions can be grouped back
    together when reading the file.
    """
    path: Optional[Path] = None
    enabled: bool = True
    flush_each_write: bool = False
    rows_written: int = 0
    _turn: int = 0
    _started_at: float = field(default_factory=time.time)

    def init(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Append to an existing trace
        self.path.touch(exist_ok=True)
        self._started_at = time.time()
        self.log("telemetry_init", file=str(self.path))

    def close(self) -> None:
        self.path = None

    def next_turn(self) -> int:
        self._turn += 1
        return self._turn

    def log(self, event: str, **fields: Any) -> None:
        if not self.enabled or self.path is None:
            return

        entry: Dict[str, Any] = {
            "ts": _now_iso(),
            "elapsed": round(time.time() - self._started_at, 3),
            "turn": self._turn,
            "event": event,
        }
        entry.update(fields)

        try:
            with self.path.open("a", encoding="utf-8") as out:
                out.write(json.dumps(entry, ensure_ascii=False) + "\n")
                if self.flush_each_write:
                    out.flush()
        except OSError as e:
            log.warning("Telemetry write to %s failed: %s", self.path, e)
            return
        self.rows_written += 1

    def log_decision(
        self,
        enemy_id: str,
        archetype: str,
        origin: Sequence[int],
        destination: Optional[Sequence[int]],
        stage: str,
    ) -> None:
        """One row per enemy decision: where it was, where it wants to go, and why."""
        self.log(
            "enemy_decision",
            enemy=enemy_id,
            archetype=archetype,
            origin=_cell(origin),
            destination=_cell(destination),
            stage=stage,
        )


# global singleton (easy import everywhere)
telemetry = TelemetryLogger()
