"""Root error class for the labelbus error hierarchy.

Every labelbus error carries a ``code`` that doubles as the error category
written to the dispatch log (``routing_error``, ``decode_error``,
``broker_error`` ...), so a failed delivery can be filtered by category
without parsing the message text.
"""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the labelbus error tree.

    Args:
        message: Human-readable description; also the dead-letter description
            when the error decides a message's fate.
        code: Error category; subclasses set ``default_code``.
        detail: Extra structured context merged into the log fields.
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def category(self) -> str:
        return self.code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(category={self.code!r}, message={self.message!r})"

    def log_fields(self) -> dict[str, Any]:
        """Key/value pairs for a structlog event describing this failure."""
        fields: dict[str, Any] = {**self.detail, "error": self.message, "error_category": self.code}
        if self.cause is not None:
            fields["error_cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return fields

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": type(self).__name__,
            "category": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


__all__ = ["BaseError"]
