"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends one structured event per request
to Axiom: endpoint, method, status code, duration, error reason, and for the
member search endpoints the search condition and paging parameters.
Sensitive query keys (password, token, secret ...) are masked.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

# 마스킹 대상 키 패턴 — Keys to mask in logged parameters
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 검색 조건 / 페이지 파라미터 이름 — Search condition and paging parameter names
_CONDITION_KEYS = ("username", "teamName", "ageGoe", "ageLoe")
_PAGING_KEYS = ("page", "size", "sort")


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive keys in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _extract_error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유 추출 — Pull ``detail`` out of an error body."""
    try:
        error_data = json.loads(body)
        detail = error_data.get("detail", error_data) if isinstance(error_data, dict) else error_data
        if not isinstance(detail, str):
            detail = json.dumps(detail, ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        detail = body.decode("utf-8", errors="replace")
    return detail[:500] + "..." if len(detail) > 500 else detail


def build_log_event(
    method: str,
    path: str,
    query_params: dict[str, list[str]],
    status_code: int,
    duration_ms: float,
    error_detail: str | None = None,
) -> dict[str, Any]:
    """Axiom 로그 이벤트를 구성합니다.

    Build the structured log event for one request. Search condition and
    paging parameters are split out so they can be queried in Axiom.

    Args:
        method: HTTP 메서드 (HTTP method)
        path: 요청 경로 (Request path)
        query_params: 쿼리 파라미터, 키별 값 목록 (Query params, all values per key)
        status_code: 응답 상태 코드 (Response status code)
        duration_ms: 처리 시간 ms (Duration in milliseconds)
        error_detail: 에러 사유, 선택 (Error reason, optional)

    Returns:
        dict[str, Any]: 로그 이벤트 (Log event)
    """
    params: dict[str, Any] = {
        k: v[0] if len(v) == 1 else v for k, v in _mask_dict(query_params).items()
    }

    log_event: dict[str, Any] = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": duration_ms,
    }

    condition = {k: params[k] for k in _CONDITION_KEYS if k in params}
    paging = {k: params[k] for k in _PAGING_KEYS if k in params}
    rest = {k: v for k, v in params.items() if k not in condition and k not in paging}

    if condition:
        log_event["condition"] = condition
    if paging:
        log_event["paging"] = paging
    if rest:
        log_event["query_params"] = rest
    if error_detail:
        log_event["error"] = error_detail
    return log_event


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs all API requests and responses to Axiom.
    Passes requests straight through when Axiom is not configured.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        # Axiom 미설정시 패스스루 — Pass through if Axiom not configured
        if not self._client:
            return await call_next(request)

        start_time = time.time()
        query_params: dict[str, list[str]] = {
            key: request.query_params.getlist(key) for key in request.query_params.keys()
        }

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _extract_error_detail(resp_body)

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            log_event = build_log_event(
                request.method,
                request.url.path,
                query_params,
                status_code,
                duration_ms,
                error_detail,
            )

            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure

        return response
