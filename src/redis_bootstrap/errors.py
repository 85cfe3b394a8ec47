ExtraInfoType = dict[str, str | int | float | bool | None]


class RedisBootstrapError(Exception):
    """Base exception for all redis-bootstrap errors."""

    def __init__(self, message: str | None = None, extra_info: ExtraInfoType | None = None):
        message_parts: list[str] = []

        if message:
            message_parts.append(message)

        if extra_info:
            extra_info_str = ";".join(f"{k}: {v}" for k, v in extra_info.items())
            if message:
                extra_info_str = "(" + extra_info_str + ")"

            message_parts.append(extra_info_str)

        super().__init__(": ".join(message_parts))


class BackoffExhaustedError(RedisBootstrapError):
    """Raised when a backoff policy has no more attempts to offer."""

    def __init__(self, attempt: int, max_attempts: int):
        super().__init__(
            message="The backoff policy has no more attempts.",
            extra_info={"attempt": attempt, "max_attempts": max_attempts},
        )


class InvalidAddressError(RedisBootstrapError):
    """Raised when a store address cannot be parsed."""

    def __init__(self, address: str, reason: str):
        super().__init__(
            message="The store address is invalid.",
            extra_info={"address": address, "reason": reason},
        )


class StoreConnectionError(RedisBootstrapError):
    """Raised when unable to establish a connection to the underlying store."""


class ConnectionPolicyExhaustedError(StoreConnectionError):
    """Raised when the backoff policy gives up before the store answered a ping."""

    def __init__(self, address: str, attempts: int):
        super().__init__(
            message="Gave up connecting to the redis server.",
            extra_info={"address": address, "attempts": attempts},
        )


class ConnectionVerificationFailedError(StoreConnectionError):
    """Raised when the confirmation ping after a successful connection fails."""

    def __init__(self, address: str, error: BaseException | None = None):
        super().__init__(
            message="Unable to ping the redis server.",
            extra_info={"address": address, "error": str(error) if error is not None else None},
        )
