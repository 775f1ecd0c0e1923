from __future__ import annotations

from collections.abc import Mapping


class ChartError(RuntimeError):
    pass


class ChartConfigurationError(ChartError):
    """A required configuration input is absent; nothing is fetched or drawn."""

    def __init__(self, missing: tuple[str, ...], message: str = "Please configure all required parameters.") -> None:
        super().__init__(message)
        self.missing = missing


class DataFetchError(ChartError):
    """The data service rejected a request."""

    def __init__(self, message: str, *, cause: object | None = None) -> None:
        super().__init__(message)
        self.cause = cause


def error_message(exc: object) -> str:
    """Extract a display message from a service error, an exception, or any value.

    Structured bodies (``exc.body["message"]`` or ``exc.body.message``) win over
    the exception's own message, which wins over the plain string form.
    """

    if isinstance(exc, str):
        return exc
    body = getattr(exc, "body", None)
    if isinstance(body, Mapping):
        body_message = body.get("message")
    else:
        body_message = getattr(body, "message", None)
    if isinstance(body_message, str) and body_message:
        return body_message
    if isinstance(exc, BaseException):
        own = getattr(exc, "message", None)
        if isinstance(own, str) and own:
            return own
        if exc.args:
            return str(exc)
        return type(exc).__name__
    return str(exc)
