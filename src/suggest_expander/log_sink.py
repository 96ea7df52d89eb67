"""Storage for per-search summary records.

Records are keyed ``search_log:<epoch-ms>``. The export path lists keys by
prefix, reads them in bulk and drops entries that come back empty.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from .config import LOG_KEY_PREFIX
from .errors import LogSinkError
from .models import LogRecord

logger = logging.getLogger(__name__)


class LogSink(Protocol):
    def put(self, key: str, record: LogRecord) -> None: ...

    def list_keys(self, prefix: str = LOG_KEY_PREFIX) -> List[str]: ...

    def get_many(self, keys: List[str]) -> List[Optional[LogRecord]]: ...


class LogKeyFactory:
    """Monotonic ``<prefix><epoch-ms>`` keys; same-millisecond calls bump by one."""

    def __init__(self, prefix: str = LOG_KEY_PREFIX) -> None:
        self.prefix = prefix
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self, now_ms: Optional[int] = None) -> str:
        ms = int(time.time() * 1000) if now_ms is None else now_ms
        with self._lock:
            if ms <= self._last:
                ms = self._last + 1
            self._last = ms
        return f"{self.prefix}{ms}"


class MemoryLogSink:
    def __init__(self) -> None:
        self._items: Dict[str, LogRecord] = {}
        self._lock = threading.Lock()

    def put(self, key: str, record: LogRecord) -> None:
        with self._lock:
            self._items[key] = record

    def list_keys(self, prefix: str = LOG_KEY_PREFIX) -> List[str]:
        with self._lock:
            return sorted(k for k in self._items if k.startswith(prefix))

    def get_many(self, keys: List[str]) -> List[Optional[LogRecord]]:
        with self._lock:
            return [self._items.get(k) for k in keys]


class FileLogSink:
    """One JSON document per key under ``directory``."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key.replace(':', '_')}.json"

    def put(self, key: str, record: LogRecord) -> None:
        payload = dict(record.to_dict(), key=key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            raise LogSinkError(f"cannot write {key}: {e}") from e

    def list_keys(self, prefix: str = LOG_KEY_PREFIX) -> List[str]:
        if not self.directory.is_dir():
            return []
        file_prefix = prefix.replace(":", "_")
        keys = []
        for p in self.directory.glob(f"{file_prefix}*.json"):
            keys.append(prefix + p.stem[len(file_prefix):])
        return sorted(keys)

    def get_many(self, keys: List[str]) -> List[Optional[LogRecord]]:
        return [self._read(k) for k in keys]

    def _read(self, key: str) -> Optional[LogRecord]:
        path = self._path(key)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                return None
            return LogRecord.from_dict(data)
        except FileNotFoundError:
            return None
        except (OSError, ValueError, TypeError) as e:
            logger.warning("unreadable log record %s: %s", path, e)
            return None


def build_log_sink(log_dir: Optional[Path]) -> LogSink:
    if log_dir:
        return FileLogSink(log_dir)
    return MemoryLogSink()
