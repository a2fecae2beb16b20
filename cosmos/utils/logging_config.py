"""Structured logging utilities for model construction tracking."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
from astropy import units as u


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _generate_run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _coerce_json_serializable(value: Any) -> Any:
    """Best-effort conversion of complex objects into JSON-serializable forms."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, u.Quantity):
        return {"value": _coerce_json_serializable(value.value), "unit": value.unit.to_string()}
    if isinstance(value, Mapping):
        return {str(key): _coerce_json_serializable(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_coerce_json_serializable(item) for item in value]
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if hasattr(value, "_asdict"):
        return _coerce_json_serializable(value._asdict())
    if hasattr(value, "__dict__"):
        return _coerce_json_serializable(vars(value))
    return str(value)


@dataclass
class StructuredLogger:
    """Structured event logger.

    Events are always kept in memory; when ``base_dir`` is given they are also
    appended to ``<base_dir>/<run_id>/events.jsonl``.
    """

    run_id: str = None  # type: ignore[assignment]
    base_dir: Optional[Path] = None
    console_level: int = logging.WARNING
    events: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.run_id is None:
            self.run_id = _generate_run_id()
        self._events_path = None
        if self.base_dir is not None:
            self.base_dir = Path(self.base_dir)
            run_dir = self.base_dir / self.run_id
            run_dir.mkdir(parents=True, exist_ok=True)
            self._events_path = run_dir / "events.jsonl"
        self._lock = Lock()

        logger_name = f"cosmos.run.{self.run_id}"
        self._logger = logging.getLogger(logger_name)
        self._logger.handlers = []
        self._logger.setLevel(logging.DEBUG)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.console_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(console_handler)
        self._logger.propagate = False

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def events_path(self) -> Optional[Path]:
        return self._events_path

    def log_event(
        self,
        event_type: str,
        payload: Optional[Mapping[str, Any]] = None,
        *,
        level: int = logging.INFO,
        message: Optional[str] = None,
    ) -> None:
        """Record an event and optionally emit ``message`` to the console."""
        record: Dict[str, Any] = {
            "timestamp": _timestamp(),
            "event": event_type,
            "level": logging.getLevelName(level),
        }
        if payload:
            record["payload"] = _coerce_json_serializable(payload)
        with self._lock:
            self.events.append(record)
            if self._events_path is not None:
                with self._events_path.open("a", encoding="utf-8") as handle:
                    json.dump(record, handle, sort_keys=True)
                    handle.write("\n")
        if message:
            self._logger.log(level, message)

    def find_events(self, event_type: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [event for event in self.events if event["event"] == event_type]


__all__ = ["StructuredLogger"]
