import pytest

from redis_bootstrap.backoff import (
    DEFAULT_POLICY,
    DEFAULT_SCHEDULE_MILLIS,
    BackoffPolicy,
    ExponentialBackoffPolicy,
    ScheduleBackoffPolicy,
    _calculate_delay,
)
from redis_bootstrap.errors import BackoffExhaustedError


@pytest.mark.parametrize(
    ("initial_delay", "max_delay", "exponential_base", "attempt", "expected"),
    [
        (1.0, 10.0, 2.0, 0, 1.0),
        (1.0, 10.0, 2.0, 3, 8.0),
        (1.0, 10.0, 2.0, 4, 10.0),
    ],
    ids=["initial", "exponential", "capped"],
)
def test_calculate_delay(initial_delay: float, max_delay: float, exponential_base: float, attempt: int, expected: float) -> None:
    assert _calculate_delay(initial_delay, max_delay, exponential_base, attempt) == expected


def test_schedule_policy_walks_schedule() -> None:
    policy = ScheduleBackoffPolicy(millis=[0, 250, 1500])

    assert [policy.duration(attempt) for attempt in range(3)] == [0.0, 0.25, 1.5]


def test_schedule_policy_exhausted() -> None:
    policy = ScheduleBackoffPolicy(millis=[0, 250])

    with pytest.raises(BackoffExhaustedError, match="max_attempts: 2"):
        policy.duration(2)


def test_schedule_policy_is_stateless() -> None:
    policy = ScheduleBackoffPolicy(millis=[10, 20])

    assert policy.duration(1) == 0.02
    assert policy.duration(0) == 0.01
    assert policy.duration(1) == 0.02


def test_schedule_policy_copies_schedule() -> None:
    millis = [10, 20]
    policy = ScheduleBackoffPolicy(millis=millis)
    millis.append(30)

    with pytest.raises(BackoffExhaustedError):
        policy.duration(2)


def test_schedule_policy_accepts_one_shot_iterable() -> None:
    policy = ScheduleBackoffPolicy(millis=iter([10, 20]))  # pyright: ignore[reportArgumentType]

    assert [policy.duration(attempt) for attempt in range(2)] == [0.01, 0.02]


def test_empty_schedule_is_exhausted_immediately() -> None:
    with pytest.raises(BackoffExhaustedError):
        ScheduleBackoffPolicy().duration(0)


def test_schedule_policy_rejects_negative_entries() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        ScheduleBackoffPolicy(millis=[10, -1])


def test_exponential_policy() -> None:
    policy = ExponentialBackoffPolicy(initial_delay=0.5, max_delay=3.0, exponential_base=2.0, max_attempts=5)

    assert [policy.duration(attempt) for attempt in range(5)] == [0.5, 1.0, 2.0, 3.0, 3.0]

    with pytest.raises(BackoffExhaustedError):
        policy.duration(5)


def test_exponential_policy_zero_delay() -> None:
    policy = ExponentialBackoffPolicy(initial_delay=0, max_attempts=3)

    assert [policy.duration(attempt) for attempt in range(3)] == [0, 0, 0]


def test_exponential_policy_rejects_negative_delay() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        ExponentialBackoffPolicy(initial_delay=-1)


@pytest.mark.parametrize("policy", [ScheduleBackoffPolicy(millis=[0]), ExponentialBackoffPolicy()], ids=["schedule", "exponential"])
def test_negative_attempt_rejected(policy: BackoffPolicy) -> None:
    with pytest.raises(ValueError, match="non-negative"):
        policy.duration(-1)


def test_default_policy() -> None:
    assert isinstance(DEFAULT_POLICY, BackoffPolicy)
    assert DEFAULT_POLICY.duration(0) == 0
    assert sum(DEFAULT_POLICY.duration(attempt) for attempt in range(len(DEFAULT_SCHEDULE_MILLIS))) == pytest.approx(12.22)

    with pytest.raises(BackoffExhaustedError):
        DEFAULT_POLICY.duration(len(DEFAULT_SCHEDULE_MILLIS))
