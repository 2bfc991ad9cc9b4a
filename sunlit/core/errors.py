"""
Error types for sunlit.

Query validation errors are raised by the orchestration layer and
surfaced verbatim to callers. Provider errors are raised by data-provider
adapters and classified into a small set of stable codes. Neither is
raised by the solar or shadow core.
"""

import asyncio

import aiohttp

MISSING_LOCATION_MESSAGE = "Either bbox or center+radiusMeters must be provided"


class SunlitError(Exception):
    """sunlit 기본 예외"""

    code = "error"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class QueryValidationError(SunlitError, ValueError):
    """조회 조건 검증 실패. 재시도 대상이 아님"""

    code = "validation_error"

    @classmethod
    def missing_location(cls) -> "QueryValidationError":
        return cls(MISSING_LOCATION_MESSAGE, code="missing_location")


class ProviderError(SunlitError):
    """데이터 제공자 오류"""

    code = "fetch_failed"


class BboxTooLargeError(ProviderError):
    code = "bbox_too_large"


class ProviderNetworkError(ProviderError):
    code = "network"


class ProviderFetchError(ProviderError):
    code = "fetch_failed"

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


def classify_provider_error(exc: BaseException) -> str:
    """
    임의의 조회 예외를 안정적인 오류 코드로 분류합니다.

    Args:
        exc: 제공자 호출 중 발생한 예외

    Returns:
        "bbox_too_large", "network", "fetch_failed" 중 하나
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if "bounding box too large" in str(exc).lower():
        return BboxTooLargeError.code
    if isinstance(exc, (aiohttp.ClientConnectionError, asyncio.TimeoutError, ConnectionError)):
        return ProviderNetworkError.code
    return ProviderFetchError.code


def to_provider_error(exc: BaseException) -> ProviderError:
    """예외를 분류된 ProviderError 로 변환합니다."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_provider_error(exc)
    message = str(exc) or exc.__class__.__name__
    if code == BboxTooLargeError.code:
        return BboxTooLargeError(message)
    if code == ProviderNetworkError.code:
        return ProviderNetworkError(message)
    return ProviderFetchError(message)
