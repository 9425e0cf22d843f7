"""Error taxonomy for creatorai.

Only ``ConfigurationError`` is meant to reach callers. Request errors are
converted into failure results by the assistants, and persistence errors are
reported through the history/preferences error channel.
"""


class CreatorAIError(Exception):
    """Base class for all creatorai errors."""


class ConfigurationError(CreatorAIError):
    """Required configuration (such as the API key) is missing or invalid."""


class RequestError(CreatorAIError):
    """A generation request failed and can be recovered with a fallback reply.

    Attributes:
        kind: Short failure category ("network", "timeout", "remote", "contract")
        code: Machine-readable code (HTTP status for remote errors)
    """

    kind = "request"
    code = "REQUEST_ERROR"

    def __init__(self, message: str, *, kind: str | None = None, code: str | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self)


class TransportError(RequestError):
    """Network failure or timeout before a response was received."""

    kind = "network"
    code = "NETWORK_ERROR"

    @classmethod
    def timeout(cls, seconds: float) -> "TransportError":
        return cls(
            f"Request timed out after {seconds:g} seconds",
            kind="timeout",
            code="TIMEOUT",
        )


class RemoteError(RequestError):
    """The endpoint answered with a non-success HTTP status."""

    kind = "remote"

    def __init__(self, message: str, status_code: int):
        super().__init__(message, code=str(status_code))
        self.status_code = status_code


class ContractError(RequestError):
    """The endpoint answered successfully but the body has the wrong shape."""

    kind = "contract"
    code = "INVALID_RESPONSE"


class PersistenceError(CreatorAIError):
    """Reading or writing the key-value store failed.

    Never changes control flow: it is logged and handed to the error callback.
    """

    def __init__(self, operation: str, key: str, cause: BaseException | None = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to {operation} '{key}'{detail}")
        self.operation = operation
        self.key = key
        self.cause = cause
