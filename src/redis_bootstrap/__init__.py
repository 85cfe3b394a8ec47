"""redis-bootstrap - A small redis client that waits for its server to come up."""

from .backoff import DEFAULT_POLICY, BackoffPolicy, ExponentialBackoffPolicy, ScheduleBackoffPolicy
from .client import RedisStoreClient
from .connector import RedisAddress, connect, parse_address
from .errors import (
    BackoffExhaustedError,
    ConnectionPolicyExhaustedError,
    ConnectionVerificationFailedError,
    InvalidAddressError,
    RedisBootstrapError,
    StoreConnectionError,
)
from .protocols import RedisClient

__all__ = [
    "DEFAULT_POLICY",
    "BackoffExhaustedError",
    "BackoffPolicy",
    "ConnectionPolicyExhaustedError",
    "ConnectionVerificationFailedError",
    "ExponentialBackoffPolicy",
    "InvalidAddressError",
    "RedisAddress",
    "RedisBootstrapError",
    "RedisClient",
    "RedisStoreClient",
    "ScheduleBackoffPolicy",
    "StoreConnectionError",
    "connect",
    "parse_address",
]
