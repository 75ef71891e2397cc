"""요청 로깅 미들웨어 — 요청 ID 부여, 구조화 로그, 선택적 Axiom 전송.

Request logging middleware. Assigns every request an ID (echoed in the
``X-Request-ID`` header), writes one structured log line per request, and
ships the same event to Axiom when a token and dataset are configured.
Credential fields (password, token, secret) are masked before logging.
"""

import json
import logging
import re
import time
import uuid
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.utils.log import request_id_ctx

logger = logging.getLogger("app.requests")

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies
_SENSITIVE_KEYS = re.compile(r"(password|passwd|secret|token|authorization|credential)", re.IGNORECASE)

# 로깅 제외 경로 — Paths excluded from request logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

REQUEST_ID_HEADER: str = "X-Request-ID"


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드를 재귀적으로 마스킹합니다."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            key: "***" if _SENSITIVE_KEYS.search(str(key)) else mask_sensitive(value, depth + 1)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """모든 요청에 ID를 부여하고 한 줄 로그를 남기는 미들웨어.

    Middleware that tags each request with an ID and logs method, path,
    status and latency. Events are also ingested into Axiom when configured.
    """

    def __init__(self, app: Any, axiom_client: AxiomClient | None = None) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._client: AxiomClient | None = axiom_client
        if self._client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id: str = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            if request.url.path in _SKIP_PATHS:
                response: Response = await call_next(request)
                response.headers[REQUEST_ID_HEADER] = request_id
                return response

            start_time: float = time.perf_counter()
            request_body: Any = await self._read_body(request)
            try:
                response = await call_next(request)
            except Exception as exc:
                self._emit(request, request_body, 500, start_time, f"{type(exc).__name__}: {str(exc)[:300]}")
                raise

            response.headers[REQUEST_ID_HEADER] = request_id
            self._emit(request, request_body, response.status_code, start_time, None)
            return response
        finally:
            request_id_ctx.reset(token)

    @staticmethod
    async def _read_body(request: Request) -> Any:
        """본문이 있는 요청의 JSON 본문을 마스킹하여 반환합니다."""
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        body: bytes = await request.body()
        if not body:
            return None
        try:
            return mask_sensitive(json.loads(body))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    def _emit(
        self,
        request: Request,
        request_body: Any,
        status_code: int,
        start_time: float,
        error: str | None,
    ) -> None:
        event: dict[str, Any] = {
            "request_id": request.state.request_id,
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "latency_ms": round((time.perf_counter() - start_time) * 1000, 2),
        }
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        if request_body is not None:
            event["request_body"] = request_body
        if error:
            event["error"] = error

        if status_code >= 500:
            logger.error("Request completed", extra=event)
        elif status_code >= 400:
            logger.warning("Request completed", extra=event)
        else:
            logger.info("Request completed", extra=event)

        if self._client is None:
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않음 — Shipping failures never fail the request
            logger.warning("Failed to ship request log to Axiom", exc_info=True)
