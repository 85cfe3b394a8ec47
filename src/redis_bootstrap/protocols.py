from datetime import timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RedisClient(Protocol):
    """Protocol defining the redis operations available to the rest of the application."""

    def delete(self, *keys: str) -> int:
        """Remove the given keys and return how many existed."""
        ...

    def hgetall(self, key: str) -> dict[str, str]:
        """Return every field and value of the hash stored at `key`."""
        ...

    def hmset(self, key: str, field: str, value: str, *pairs: str) -> Any:
        """Set one or more field/value pairs on the hash stored at `key`."""
        ...

    def lpush(self, key: str, *values: str) -> int:
        """Prepend values to the list stored at `key` and return its new length."""
        ...

    def lrange(self, key: str, start: int, stop: int) -> list[str]:
        """Return the elements of the list stored at `key` between `start` and `stop` inclusive."""
        ...

    def lrem(self, key: str, count: int, value: Any) -> int:
        """Remove up to `count` occurrences of `value` from the list stored at `key`."""
        ...

    def ping(self) -> Any:
        """Check that the server is responding."""
        ...

    def set(self, key: str, value: Any, expiration: timedelta | float | None) -> Any:
        """Store `value` at `key`, expiring after `expiration` when it is positive."""
        ...

    def close(self) -> None:
        """Release any connections held by the client."""
        ...
