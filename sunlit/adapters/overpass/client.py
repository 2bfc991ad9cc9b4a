"""
Overpass API client for sunlit.

This module provides a small client that posts Overpass QL queries
and returns the decoded JSON body, with retry on transient failures.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from sunlit.common.retry import retry_with_backoff
from sunlit.core.errors import BboxTooLargeError, ProviderFetchError, ProviderNetworkError
from sunlit.observability.logging_setup import get_logger

log = get_logger("sunlit.overpass")

DEFAULT_API_URL = "https://overpass-api.de/api/interpreter"

# 재시도 대상 HTTP 상태 (요청 과다, 서버 측 시간 초과/오류)
RETRYABLE_STATUS = {429, 502, 503, 504}


class _RetryableStatus(Exception):
    def __init__(self, status: int, reason: str):
        super().__init__(f"Overpass API error: {status} {reason}")
        self.status = status
        self.reason = reason


class OverpassClient:
    """Overpass API 클라이언트"""

    def __init__(self,
                 api_url: str = DEFAULT_API_URL,
                 timeout: float = 30,
                 max_retries: int = 2,
                 backoff_initial_sec: float = 0.5,
                 backoff_max_sec: float = 8.0,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        초기화합니다.

        Args:
            api_url: Overpass interpreter URL
            timeout: 요청 타임아웃 (초)
            max_retries: 최대 재시도 횟수
            backoff_initial_sec: 첫 재시도 지연 (초)
            backoff_max_sec: 최대 재시도 지연 (초)
            session: 외부에서 관리하는 세션 (없으면 요청마다 생성)
        """
        self.api_url = api_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_initial_sec = backoff_initial_sec
        self.backoff_max_sec = backoff_max_sec
        self.session = session

    async def _post(self, session: aiohttp.ClientSession, query: str) -> Dict[str, Any]:
        async with session.post(self.api_url, data={"data": query}) as response:
            if response.status in RETRYABLE_STATUS:
                raise _RetryableStatus(response.status, response.reason or "")
            if response.status >= 400:
                body = await response.text()
                if "too large" in body.lower():
                    raise BboxTooLargeError("Bounding box too large for Overpass query")
                raise ProviderFetchError(
                    f"Overpass API error: {response.status} {response.reason}",
                    status=response.status,
                )
            return await response.json(content_type=None)

    async def execute(self, query: str) -> Dict[str, Any]:
        """
        Overpass QL 쿼리를 실행합니다.

        Args:
            query: Overpass QL 쿼리

        Returns:
            응답 JSON

        Raises:
            ProviderNetworkError: 연결 실패 또는 시간 초과
            ProviderFetchError: HTTP 오류 응답
        """
        async def _request():
            if self.session is not None:
                return await self._post(self.session, query)
            async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
                return await self._post(session, query)

        try:
            return await retry_with_backoff(
                _request,
                max_retries=self.max_retries,
                base_delay=self.backoff_initial_sec,
                max_delay=self.backoff_max_sec,
                retry_on=(_RetryableStatus, aiohttp.ClientConnectionError, asyncio.TimeoutError),
            )
        except _RetryableStatus as e:
            log.error(f"Overpass 요청 실패 status:{e.status}")
            raise ProviderFetchError(str(e), status=e.status) from e
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            log.error(f"Overpass 연결 실패 error:{e!r}")
            raise ProviderNetworkError(f"Overpass API unreachable: {e!r}") from e
        except ValueError as e:
            # JSON 디코딩 실패
            raise ProviderFetchError(f"Overpass API returned invalid JSON: {e}") from e
