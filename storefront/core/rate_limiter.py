"""
Rate Limiter Service
IP 단위 속도 제한 (Sliding Window 알고리즘)

REDIS_URL 이 설정되면 Redis Sorted Set 으로 여러 워커가 카운터를 공유하고,
없으면 프로세스 메모리에 요청 시각을 보관한다.
"""

import logging
import secrets
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional

import redis.asyncio as aioredis
from fastapi import Request, Response

from .exceptions import ErrorCode, RateLimitExceededException

logger = logging.getLogger(__name__)


@dataclass
class RateLimitResult:
    """
    속도 제한 검사 결과

    Attributes:
        allowed: 요청 허용 여부
        limit: 최대 요청 수
        remaining: 남은 요청 수
        reset_at: 제한 초기화 시간 (Unix timestamp)
        retry_after: 재시도까지 남은 시간 (초) - 제한 초과 시에만 설정됨
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after: Optional[int] = None

    def to_headers(self) -> Dict[str, str]:
        """X-RateLimit-* 응답 헤더"""
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at),
        }
        if self.retry_after is not None:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class RateLimiterService:
    """
    속도 제한 서비스

    Redis 오류 시에는 요청을 허용한다 (Fail-open).
    """

    def __init__(
        self,
        redis_client: Optional[aioredis.Redis] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            redis_client: 공유 Redis 클라이언트 (없으면 메모리 저장소)
            clock: 현재 시각 (Unix timestamp) 공급자
        """
        self.redis = redis_client
        self.clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def _make_key(self, identifier: str) -> str:
        """예: "auth:127.0.0.1" -> "rate_limit:auth:127.0.0.1" """
        return f"rate_limit:{identifier}"

    async def check_rate_limit(
        self, key: str, limit: int, window_seconds: int
    ) -> RateLimitResult:
        """
        요청 1회를 기록하고 제한 초과 여부를 판정

        Args:
            key: 식별자 키 (예: "auth:192.168.1.1")
            limit: 윈도우 내 최대 요청 수
            window_seconds: 윈도우 크기 (초)
        """
        if self.redis is None:
            result = self._check_memory(key, limit, window_seconds)
        else:
            result = await self._check_redis(key, limit, window_seconds)

        if not result.allowed:
            logger.warning(
                f"Rate limit exceeded: {key}",
                extra={"key": key, "limit": limit, "retry_after": result.retry_after},
            )
        return result

    def _check_memory(self, key: str, limit: int, window_seconds: int) -> RateLimitResult:
        now = self.clock()
        hits = self._hits[key]

        # 윈도우 밖의 오래된 요청 제거
        while hits and hits[0] <= now - window_seconds:
            hits.popleft()

        if len(hits) < limit:
            hits.append(now)
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=limit - len(hits),
                reset_at=int(hits[0] + window_seconds),
            )

        reset_at = int(hits[0] + window_seconds)
        return RateLimitResult(
            allowed=False,
            limit=limit,
            remaining=0,
            reset_at=reset_at,
            retry_after=max(1, reset_at - int(now)),
        )

    async def _check_redis(self, key: str, limit: int, window_seconds: int) -> RateLimitResult:
        redis_key = self._make_key(key)
        now = self.clock()

        try:
            pipe = self.redis.pipeline()
            pipe.zremrangebyscore(redis_key, 0, now - window_seconds)
            pipe.zcard(redis_key)
            results = await pipe.execute()
            current_count = results[1]

            if current_count < limit:
                # 같은 시각의 요청이 겹치지 않도록 member 에 난수 접미사
                await self.redis.zadd(redis_key, {f"{now}:{secrets.token_hex(4)}": now})
                await self.redis.expire(redis_key, window_seconds + 10)
                return RateLimitResult(
                    allowed=True,
                    limit=limit,
                    remaining=limit - current_count - 1,
                    reset_at=int(now + window_seconds),
                )

            oldest = await self.redis.zrange(redis_key, 0, 0, withscores=True)
            if oldest:
                reset_at = int(oldest[0][1] + window_seconds)
                retry_after = max(1, reset_at - int(now))
            else:
                reset_at = int(now + window_seconds)
                retry_after = window_seconds

            return RateLimitResult(
                allowed=False,
                limit=limit,
                remaining=0,
                reset_at=reset_at,
                retry_after=retry_after,
            )

        except aioredis.RedisError as e:
            logger.error(
                f"Rate limit check failed: {key}",
                extra={"key": key, "error": str(e)},
            )
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=limit - 1,
                reset_at=int(now + window_seconds),
            )

    async def reset_limit(self, key: str) -> None:
        """특정 키의 속도 제한 초기화"""
        if self.redis is None:
            self._hits.pop(key, None)
        else:
            await self.redis.delete(self._make_key(key))
        logger.info(f"Rate limit reset: {key}", extra={"key": key})


def create_rate_limiter(redis_url: Optional[str]) -> RateLimiterService:
    """REDIS_URL 설정 여부에 따라 저장소를 선택"""
    if not redis_url:
        return RateLimiterService()
    client = aioredis.from_url(redis_url, encoding="utf-8", decode_responses=True)
    return RateLimiterService(redis_client=client)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def limit_auth_requests(request: Request, response: Response) -> None:
    """
    /api/auth 속도 제한 의존성 (IP 단위)

    허용 시 X-RateLimit-* 헤더를 응답에 추가한다.

    Raises:
        RateLimitExceededException: 윈도우 내 요청 수 초과 (429)
    """
    settings = request.app.state.settings
    limiter: RateLimiterService = request.app.state.rate_limiter
    window = settings.auth_rate_limit_window_seconds

    result = await limiter.check_rate_limit(
        f"auth:{client_ip(request)}", settings.auth_rate_limit, window
    )
    if not result.allowed:
        raise RateLimitExceededException(
            error_code=ErrorCode.RATE_LIMIT_EXCEEDED,
            message=(
                "Too many requests from this IP, "
                f"please try again after {max(1, window // 60)} minutes"
            ),
            headers=result.to_headers(),
        )

    for name, value in result.to_headers().items():
        response.headers[name] = value
