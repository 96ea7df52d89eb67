from __future__ import annotations

import csv
import hmac
import io
import logging
import time
from typing import Iterable, List, Optional, Sequence

from .config import LOG_KEY_PREFIX
from .errors import UnauthorizedError
from .log_sink import LogSink
from .models import LogRecord, ResultItem
from .text_utils import safe_filename_part

logger = logging.getLogger(__name__)

RESULT_FIELDS = ["category", "suggestion"]
LOG_FIELDS = ["keyword", "country", "language", "date"]


def to_csv_bytes(rows: Iterable[dict], fieldnames: Sequence[str]) -> bytes:
    """CSV with a header row, UTF-8 with a byte-order mark for spreadsheets."""
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=list(fieldnames), extrasaction="ignore", lineterminator="\n")
    w.writeheader()
    for r in rows:
        w.writerow(r)
    return buf.getvalue().encode("utf-8-sig")


def results_to_csv(results: Iterable[ResultItem]) -> bytes:
    return to_csv_bytes((r.to_dict() for r in results), RESULT_FIELDS)


def logs_to_csv(records: Iterable[LogRecord]) -> bytes:
    return to_csv_bytes((r.to_dict() for r in records), LOG_FIELDS)


def results_filename(keyword: str, now: Optional[float] = None) -> str:
    ts = int(time.time() if now is None else now)
    return f"suggestions_{safe_filename_part(keyword)}_{ts}.csv"


def logs_filename(now: Optional[float] = None) -> str:
    ts = int((time.time() if now is None else now) * 1000)
    return f"search_logs_export_{ts}.csv"


def check_secret(password: Optional[str], secret: Optional[str]) -> None:
    if not secret or not password:
        raise UnauthorizedError("export password required")
    if not hmac.compare_digest(password.encode("utf-8"), secret.encode("utf-8")):
        raise UnauthorizedError("export password does not match")


def read_logs(sink: LogSink, prefix: str = LOG_KEY_PREFIX) -> List[LogRecord]:
    keys = sink.list_keys(prefix)
    if not keys:
        return []
    return [r for r in sink.get_many(keys) if r is not None]


def export_logs(sink: LogSink, password: Optional[str], secret: Optional[str]) -> Optional[bytes]:
    """Stored search logs as CSV, or ``None`` when there is nothing to export.

    The secret is checked before the sink is touched.
    """
    check_secret(password, secret)
    records = read_logs(sink)
    logger.info("exporting %d search log records", len(records))
    if not records:
        return None
    return logs_to_csv(records)
