import logging
from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

from redis import Redis
from redis.exceptions import RedisError

from redis_bootstrap.backoff import DEFAULT_POLICY, BackoffPolicy
from redis_bootstrap.client import RedisStoreClient
from redis_bootstrap.errors import (
    BackoffExhaustedError,
    ConnectionPolicyExhaustedError,
    ConnectionVerificationFailedError,
    InvalidAddressError,
)
from redis_bootstrap.protocols import RedisClient
from redis_bootstrap.sleep import sleep as blocking_sleep

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
DEFAULT_DB = 0

SUPPORTED_SCHEMES = ("redis", "rediss")

# Socket failures can surface as OSError outside the redis-py exception hierarchy.
PING_ERRORS: tuple[type[Exception], ...] = (RedisError, OSError)


@dataclass(frozen=True)
class RedisAddress:
    """Where and how to reach a redis server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db: int = DEFAULT_DB
    password: str | None = None
    ssl: bool = False


ClientFactory = Callable[[RedisAddress], RedisClient]


def parse_address(address: str, *, db: int = DEFAULT_DB, password: str | None = None) -> RedisAddress:
    """Parse `host`, `host:port` or a `redis://` / `rediss://` URL.

    Values embedded in a URL take precedence over the `db` and `password` arguments.
    """
    raw = address.strip()
    if not raw:
        raise InvalidAddressError(address=address, reason="empty address")

    if "://" not in raw:
        raw = f"redis://{raw}"

    parsed_url = urlparse(raw)

    if parsed_url.scheme not in SUPPORTED_SCHEMES:
        raise InvalidAddressError(address=address, reason=f"unsupported scheme {parsed_url.scheme!r}")

    try:
        port = parsed_url.port
    except ValueError as e:
        raise InvalidAddressError(address=address, reason="invalid port") from e

    if port is None:
        port = DEFAULT_PORT
    elif port == 0:
        raise InvalidAddressError(address=address, reason="port 0 cannot be connected to")

    path = parsed_url.path.lstrip("/")
    if path:
        try:
            db = int(path)
        except ValueError as e:
            raise InvalidAddressError(address=address, reason=f"invalid database index {path!r}") from e

    return RedisAddress(
        host=parsed_url.hostname or DEFAULT_HOST,
        port=port,
        db=db,
        password=unquote(parsed_url.password) if parsed_url.password else password,
        ssl=parsed_url.scheme == "rediss",
    )


def default_client_factory(address: RedisAddress) -> RedisClient:
    """Build a RedisStoreClient backed by a new redis-py client."""
    return RedisStoreClient(
        client=Redis(
            host=address.host,
            port=address.port,
            db=address.db,
            password=address.password,
            ssl=address.ssl,
            decode_responses=True,
            # Commands are never retried by redis-py; waiting for the server is the backoff policy's job.
            retry=None,
        )
    )


def connect(
    address: str,
    *,
    policy: BackoffPolicy = DEFAULT_POLICY,
    db: int = DEFAULT_DB,
    password: str | None = None,
    client_factory: ClientFactory | None = None,
    sleep: Callable[[float], None] = blocking_sleep,
    logger: logging.Logger | None = None,
) -> RedisClient:
    """Connect to a redis server, waiting for it to come up.

    Before each attempt the calling thread sleeps for as long as `policy` asks. An attempt
    succeeds when the server answers a ping. Once an attempt succeeds the server is pinged
    one more time, and a failure there is not retried.

    Args:
        address: `host`, `host:port` or a `redis://` URL.
        policy: The backoff policy that decides how long to wait before each attempt. Defaults to DEFAULT_POLICY.
        db: Redis database number. Defaults to 0.
        password: Redis password. Defaults to None.
        client_factory: Builds a client for an address. Defaults to a redis-py backed RedisStoreClient.
        sleep: Blocking sleep function taking seconds. Defaults to time.sleep.
        logger: Logger for connection diagnostics. Defaults to this module's logger.

    Returns:
        A client whose server has answered two pings.

    Raises:
        InvalidAddressError: If `address` cannot be parsed.
        ConnectionPolicyExhaustedError: If the policy runs out of attempts before the server answers.
        ConnectionVerificationFailedError: If the confirmation ping fails.
    """
    log: logging.Logger = logger or logging.getLogger(__name__)
    target: RedisAddress = parse_address(address, db=db, password=password)
    build_client: ClientFactory = client_factory or default_client_factory

    attempt: int = 0

    while True:
        try:
            wait: float = policy.duration(attempt)
        except BackoffExhaustedError as e:
            raise ConnectionPolicyExhaustedError(address=address, attempts=attempt) from e

        if wait > 0:
            log.debug(f"waiting {wait}s before connecting to redis server {address}")
        sleep(wait)

        log.info(f"connecting to redis server {address}")
        client: RedisClient = build_client(target)

        try:
            _ = client.ping()
        except PING_ERRORS as e:
            client.close()
            attempt += 1
            log.warning(f"backing off because redis server {address} didn't respond to ping: {e}")
            continue

        break

    try:
        _ = client.ping()
    except PING_ERRORS as e:
        client.close()
        raise ConnectionVerificationFailedError(address=address, error=e) from e

    log.info(f"connected to redis server {address}")

    return client
