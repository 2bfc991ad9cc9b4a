"""
Logging setup for sunlit.

Routes every log line through loguru. Records from the stdlib loggers
used by the HTTP server and the Overpass client are forwarded with the
caller's real file/line and tagged with their logger name. uvicorn
access lines for the health, readiness and metrics endpoints are dropped.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Optional, TextIO, Union

from loguru import logger

DEFAULT_LOGGER_NAME = "sunlit"

# 접근 로그에서 제외할 경로 (헬스 체크/스크레이프 주기마다 찍힘)
QUIET_ACCESS_PATHS = frozenset({"/health", "/ready", "/metrics"})

# loguru 로 흡수할 표준 logging 로거
STDLIB_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "aiohttp.client", "asyncio")

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """표준 logging 레코드를 loguru 로 전달합니다."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # logging 모듈 내부 프레임을 건너뛰어 실제 호출 위치를 찾음
        frame, depth = sys._getframe(1), 1
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


class QuietAccessFilter(logging.Filter):
    """uvicorn 접근 로그 중 헬스 체크/메트릭 요청을 걸러냅니다."""

    def __init__(self, paths=QUIET_ACCESS_PATHS):
        super().__init__()
        self.paths = frozenset(paths)

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn 접근 로그 args: (client, method, path, http_version, status)
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3 and isinstance(args[2], str):
            return args[2].split("?", 1)[0] not in self.paths
        return True


def _default_name(record: dict) -> None:
    # bind 없이 loguru 를 직접 쓴 레코드도 포맷의 {extra[name]} 을 갖도록 함
    record["extra"].setdefault("name", DEFAULT_LOGGER_NAME)


def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in STDLIB_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [InterceptHandler()]
        stdlib_logger.propagate = False
    access = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, QuietAccessFilter) for f in access.filters):
        access.addFilter(QuietAccessFilter())


def setup_logging(log_level: str = "INFO",
                  colorize: bool = True,
                  sink: Optional[Union[TextIO, Callable[[Any], None]]] = None) -> int:
    """
    loguru 를 초기화하고 표준 logging 을 흡수합니다.

    Args:
        log_level: 최소 로그 레벨 (대소문자 무관)
        colorize: 콘솔 컬러 출력 여부
        sink: 출력 대상, 없으면 stdout

    Returns:
        추가된 sink 의 handler id
    """
    logger.remove()
    logger.configure(patcher=_default_name)
    handler_id = logger.add(
        sink=sink if sink is not None else (lambda m: print(m, end="")),
        format=LOG_FORMAT,
        colorize=colorize,
        backtrace=True,
        diagnose=False,
        level=log_level.upper(),
        enqueue=False,
    )
    _hook_stdlib_logging()
    return handler_id


def get_logger(name: str = DEFAULT_LOGGER_NAME, **ctx):
    """이름과 선택적 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)
