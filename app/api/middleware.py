"""
요청/감사 로깅 미들웨어

핵심 로직 밖에서 모든 요청을 감싸는 로깅 계층입니다.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.models.product import utcnow

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    요청 시작/종료를 기록하는 미들웨어

    X-Request-ID 헤더가 있으면 그대로 사용하고, 없으면 UUID4를 생성합니다.
    요청 ID는 structlog contextvars에 바인딩되어 요청 중 모든 로그에 포함되며,
    request.state.request_id와 응답 헤더로도 전달됩니다.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request.started",
            method=request.method,
            path=request.url.path,
            query=request.url.query,
            content_type=request.headers.get("content-type"),
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "request.failed",
                method=request.method,
                path=request.url.path,
                elapsed_ms=_elapsed_ms(started),
            )
            raise

        logger.info(
            "request.finished",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            elapsed_ms=_elapsed_ms(started),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class AuditLoggingMiddleware(BaseHTTPMiddleware):
    """
    상품 변경 요청(POST, PUT, DELETE)을 감사 로그로 남기는 미들웨어

    감사 대상 경로(prefix, 대소문자 무시)에 대한 요청만 기록하며
    JSON 요청 본문도 함께 남깁니다.
    """

    AUDITABLE_METHODS = frozenset({"POST", "PUT", "DELETE"})

    def __init__(self, app: ASGIApp, audit_paths: list[str]):
        super().__init__(app)
        self.audit_paths = [path.lower() for path in audit_paths]

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self.should_audit(request):
            await self._log_audit(request)

        return await call_next(request)

    def should_audit(self, request: Request) -> bool:
        """감사 대상 메서드 + 경로인지 확인"""
        path = request.url.path.lower()
        return request.method.upper() in self.AUDITABLE_METHODS and any(
            path.startswith(audit_path) for audit_path in self.audit_paths
        )

    async def _log_audit(self, request: Request) -> None:
        request_body = ""
        if "application/json" in request.headers.get("content-type", ""):
            # BaseHTTPMiddleware가 본문을 캐시하므로 이후 엔드포인트에서도 읽을 수 있음
            request_body = (await request.body()).decode("utf-8", errors="replace")

        correlation_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

        logger.info(
            "audit",
            timestamp=utcnow().isoformat(),
            method=request.method,
            path=request.url.path,
            query_string=request.url.query,
            user_agent=request.headers.get("user-agent", ""),
            remote_ip=request.client.host if request.client else None,
            correlation_id=correlation_id,
            request_body=request_body,
        )


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
