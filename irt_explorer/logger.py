from __future__ import annotations

import csv
import io
import time
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from . import config


def _format_value_preview(value: Optional[Any]) -> str:
    if value is None:
        return "—"
    if isinstance(value, bool):
        return "on" if value else "off"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text if text not in {"", "-0"} else "0"
    return str(value)


def format_preview_message(record: Dict[str, Any]) -> str:
    event = record.get("event", "event")
    if event == "param_change":
        param = record.get("param_name", "?")
        old_v = _format_value_preview(record.get("old_value"))
        new_v = _format_value_preview(record.get("new_value"))
        source = record.get("source", "source")
        return f"param_change: {param} {old_v} → {new_v} ({source})"
    if event == "information_toggle":
        return f"information_toggle: {_format_value_preview(record.get('new_value'))}"
    if event == "reset":
        return "reset: parameters restored"
    if event == "resize":
        return "resize: chart resized"
    return str(event)


def append_preview_log(log_data: Any, message: str) -> List[str]:
    capacity = config.PREVIEW_LOG_CAPACITY
    entries = list(log_data[-(capacity - 1):]) if isinstance(log_data, list) else []
    entries.append(message)
    return entries[-capacity:]


def flatten_record_for_csv(record: Dict[str, Any]) -> Dict[str, Any]:
    flat = dict.fromkeys(config.SCHEMA_COLUMNS, None)
    for key, value in record.items():
        if key in flat:
            flat[key] = value
    return flat


def build_csv_content(records: List[Dict[str, Any]]) -> Optional[str]:
    if not records:
        return None
    columns = list(config.SCHEMA_COLUMNS)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for record in records:
        writer.writerow(flatten_record_for_csv(record))
    return buffer.getvalue()


class ActivityLog:
    """Bounded in-memory record of interaction events for one session."""

    def __init__(self, capacity: int = config.TRACE_HISTORY_CAPACITY) -> None:
        self._records: Deque[Dict[str, Any]] = deque(maxlen=capacity)
        self._preview: List[str] = []
        self._seq = 0
        self._last_ms: Optional[int] = None

    def _next_seq_and_elapsed(self) -> Dict[str, Any]:
        now_ms = int(time.time() * 1000)
        self._seq += 1
        elapsed = 0 if self._last_ms is None else max(now_ms - self._last_ms, 0)
        self._last_ms = now_ms
        ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return {"seq": self._seq, "elapsed_time_ms": elapsed, "t_server_iso": ts}

    def record(
        self,
        event: str,
        *,
        state: Optional[Dict[str, Any]] = None,
        param_name: Optional[str] = None,
        old_value: Optional[Any] = None,
        new_value: Optional[Any] = None,
        source: str = "system",
    ) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "schema_version": config.SCHEMA_VERSION,
            "event": event,
            "model_type": config.MODEL_TYPE,
            "param_name": param_name,
            "old_value": old_value,
            "new_value": new_value,
            "source": source,
        }
        entry.update(self._next_seq_and_elapsed())
        if state:
            entry.update(state)
        self._records.append(entry)
        self._preview = append_preview_log(self._preview, format_preview_message(entry))
        return entry

    @property
    def records(self) -> List[Dict[str, Any]]:
        return list(self._records)

    @property
    def preview(self) -> List[str]:
        return list(self._preview)

    def to_csv(self) -> Optional[str]:
        return build_csv_content(self.records)
