"""Framework-neutral handlers for the two inbound operations.

``handle_suggestions`` takes the JSON body of a search request,
``handle_export`` the query parameters of a log export. Both return an
``ApiResponse`` that a web layer can turn into a real response.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .aggregator import Aggregator, validate_request
from .errors import UnauthorizedError, ValidationError
from .export import export_logs, logs_filename
from .log_sink import LogSink

logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    status: int
    payload: Union[Dict[str, Any], bytes]
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def _error(status: int, message: str) -> ApiResponse:
    return ApiResponse(status, {"error": message})


def handle_suggestions(
    body: Optional[Mapping[str, Any]],
    aggregator: Aggregator,
    method: str = "POST",
) -> ApiResponse:
    if method.upper() != "POST":
        return _error(405, "only POST is accepted")
    body = body or {}
    keyword, country, language = body.get("keyword"), body.get("country"), body.get("language")
    try:
        validate_request(keyword, country, language)
    except ValidationError as e:
        logger.info("rejected search request: %s", e)
        return _error(400, str(e))
    result = aggregator.aggregate(keyword.strip(), country, language)
    return ApiResponse(200, result.to_dict())


def handle_export(
    params: Optional[Mapping[str, Any]],
    sink: LogSink,
    secret: Optional[str],
    method: str = "GET",
) -> ApiResponse:
    if method.upper() != "GET":
        return _error(405, "only GET is accepted")
    password = (params or {}).get("pass")
    try:
        csv_bytes = export_logs(sink, password, secret)
    except UnauthorizedError as e:
        logger.warning("unauthorized log export: %s", e)
        return _error(401, "unauthorized: export password missing or incorrect")
    except Exception:  # noqa: BLE001
        logger.exception("log export failed")
        return _error(500, "internal error while exporting logs")
    if csv_bytes is None:
        return ApiResponse(200, {"message": "no logs to export"})
    return ApiResponse(
        200,
        csv_bytes,
        headers={
            "Content-Type": "text/csv; charset=utf-8",
            "Content-Disposition": f'attachment; filename="{logs_filename()}"',
        },
    )
