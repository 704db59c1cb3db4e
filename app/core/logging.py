"""
구조화 로깅 설정

structlog를 표준 logging 위에 연결합니다.
모든 모듈은 structlog.get_logger(__name__)로 로거를 얻고
"product.created" 같은 이벤트 이름과 키-값 컨텍스트로 기록합니다.
"""

import logging
import sys

import structlog

from app.core.config import Settings

# structlog와 표준 logging 레코드가 함께 사용하는 프로세서
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(settings: Settings) -> None:
    """
    structlog 및 루트 로거를 설정합니다.

    log_json이 True면 JSON 한 줄 로그, 아니면 개발용 콘솔 출력을 사용합니다.
    여러 번 호출해도 핸들러가 중복 등록되지 않습니다.

    Args:
        settings: 애플리케이션 설정 (log_level, log_json)
    """
    if settings.log_json:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # 이전 호출에서 등록한 핸들러 교체
    for existing in list(root_logger.handlers):
        if getattr(existing, "_catalog_handler", False):
            root_logger.removeHandler(existing)
    handler._catalog_handler = True
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level.upper())
