"""Backoff policies used while waiting for a store to come up.

A policy maps an attempt number to the number of seconds to wait before that
attempt. Policies hold no state between calls, so one instance can be shared by
every connection attempt in the process.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from redis_bootstrap.errors import BackoffExhaustedError


@runtime_checkable
class BackoffPolicy(Protocol):
    """Protocol for backoff policies."""

    def duration(self, attempt: int) -> float:
        """Return the seconds to wait before `attempt`, or raise BackoffExhaustedError."""
        ...


def _check_attempt(attempt: int) -> None:
    if attempt < 0:
        msg = f"attempt must be non-negative, got {attempt}"
        raise ValueError(msg)


@dataclass(frozen=True)
class ScheduleBackoffPolicy(BackoffPolicy):
    """A policy that walks a fixed schedule of waits given in milliseconds.

    The policy is exhausted once the attempt number runs past the end of the schedule.
    """

    millis: Sequence[int] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Freeze the schedule so callers cannot mutate a shared policy.
        object.__setattr__(self, "millis", tuple(self.millis))

        if any(m < 0 for m in self.millis):
            msg = "backoff schedule entries must be non-negative"
            raise ValueError(msg)

    def duration(self, attempt: int) -> float:
        _check_attempt(attempt)

        if attempt >= len(self.millis):
            raise BackoffExhaustedError(attempt=attempt, max_attempts=len(self.millis))

        return self.millis[attempt] / 1000


def _calculate_delay(initial_delay: float, max_delay: float, exponential_base: float, attempt: int) -> float:
    """Calculate the delay for a given attempt using exponential backoff."""
    delay = initial_delay * (exponential_base**attempt)
    return min(delay, max_delay)


@dataclass(frozen=True)
class ExponentialBackoffPolicy(BackoffPolicy):
    """A policy that grows the wait exponentially up to `max_delay`.

    Args:
        initial_delay: Seconds to wait before the first attempt. Defaults to 0.1.
        max_delay: Upper bound for any single wait. Defaults to 10.0.
        exponential_base: Growth factor between attempts. Defaults to 2.0.
        max_attempts: Number of attempts before the policy is exhausted. Defaults to 10.
    """

    initial_delay: float = 0.1
    max_delay: float = 10.0
    exponential_base: float = 2.0
    max_attempts: int = 10

    def __post_init__(self) -> None:
        if self.initial_delay < 0 or self.max_delay < 0:
            msg = "backoff delays must be non-negative"
            raise ValueError(msg)
        if self.max_attempts < 0:
            msg = "max_attempts must be non-negative"
            raise ValueError(msg)

    def duration(self, attempt: int) -> float:
        _check_attempt(attempt)

        if attempt >= self.max_attempts:
            raise BackoffExhaustedError(attempt=attempt, max_attempts=self.max_attempts)

        return _calculate_delay(self.initial_delay, self.max_delay, self.exponential_base, attempt)


DEFAULT_SCHEDULE_MILLIS: tuple[int, ...] = (0, 10, 10, 100, 100, 500, 500, 3000, 3000, 5000)

DEFAULT_POLICY: BackoffPolicy = ScheduleBackoffPolicy(millis=DEFAULT_SCHEDULE_MILLIS)
