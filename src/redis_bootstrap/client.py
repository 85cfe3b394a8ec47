from datetime import timedelta
from typing import Any

from redis import Redis
from typing_extensions import override

from redis_bootstrap.protocols import RedisClient


def _expiration_millis(expiration: timedelta | float | None) -> int | None:
    """Convert an expiration to whole milliseconds, or None when the key should not expire."""
    if expiration is None:
        return None

    if not isinstance(expiration, timedelta):
        expiration = timedelta(seconds=float(expiration))

    if expiration <= timedelta(0):
        return None

    # Sub-millisecond expirations still expire, so round them up to the smallest unit redis accepts.
    return max(int(expiration / timedelta(milliseconds=1)), 1)


class RedisStoreClient(RedisClient):
    """A RedisClient that forwards every call to a redis-py client."""

    _client: Redis

    def __init__(self, client: Redis) -> None:
        """Initialize the client.

        Args:
            client: The redis-py client to forward calls to. It should be created with
                `decode_responses=True` so results come back as strings.
        """
        self._client = client

    @override
    def delete(self, *keys: str) -> int:
        return self._client.delete(*keys)  # pyright: ignore[reportReturnType]

    @override
    def hgetall(self, key: str) -> dict[str, str]:
        return self._client.hgetall(key)  # pyright: ignore[reportReturnType]

    @override
    def hmset(self, key: str, field: str, value: str, *pairs: str) -> Any:
        # Issued directly: Redis.hmset() is deprecated and hset() answers with a field count, not a status.
        return self._client.execute_command("HMSET", key, field, value, *pairs)

    @override
    def lpush(self, key: str, *values: str) -> int:
        return self._client.lpush(key, *values)  # pyright: ignore[reportReturnType]

    @override
    def lrange(self, key: str, start: int, stop: int) -> list[str]:
        return self._client.lrange(key, start, stop)  # pyright: ignore[reportReturnType]

    @override
    def lrem(self, key: str, count: int, value: Any) -> int:
        return self._client.lrem(key, count, value)  # pyright: ignore[reportReturnType]

    @override
    def ping(self) -> Any:
        return self._client.ping()  # pyright: ignore[reportUnknownMemberType]

    @override
    def set(self, key: str, value: Any, expiration: timedelta | float | None) -> Any:
        return self._client.set(name=key, value=value, px=_expiration_millis(expiration))

    @override
    def close(self) -> None:
        """Release the connections held by the underlying client."""
        self._client.close()
