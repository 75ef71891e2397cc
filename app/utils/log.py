"""구조화 JSON 로깅 설정.

Structured JSON logging setup using python-json-logger. Every record
carries an ISO-8601 timestamp, its level, and the current request ID when
one is bound by the request logging middleware.
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger.json import JsonFormatter

# 현재 요청 ID — Request ID bound for the current request
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """현재 컨텍스트의 요청 ID를 반환합니다."""
    return request_id_ctx.get()


class RequestJsonFormatter(JsonFormatter):
    """ts, level, request_id 필드를 추가하는 JSON 포매터.

    JSON formatter adding ``ts``, ``level`` and ``request_id`` fields.
    """

    def add_fields(
        self,
        log_data: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_data, record, message_dict)
        if not log_data.get("ts"):
            log_data["ts"] = (
                datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
            )
        log_data["level"] = record.levelname
        if "request_id" not in log_data:
            request_id: str | None = get_request_id()
            if request_id:
                log_data["request_id"] = request_id


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """루트 로거를 JSON 출력으로 구성합니다.

    Configure the root logger to emit JSON lines on stdout and route the
    uvicorn loggers through the same handler. The uvicorn access log is
    disabled; the request logging middleware writes one line per request.

    Args:
        log_level: 로그 레벨 이름 (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        logging.Logger: 구성된 루트 로거 (Configured root logger)
    """
    root: logging.Logger = logging.getLogger()
    root.setLevel(log_level.upper())
    root.handlers = []

    handler: logging.Handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(RequestJsonFormatter("%(ts)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger: logging.Logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False
    logging.getLogger("uvicorn.access").disabled = True

    return root
