from __future__ import annotations

from collections.abc import Iterable


class EnvelopeError(Exception):
    def __init__(self, message: str, *, error_code: str, reason_code: str) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.reason_code = reason_code


class InvalidStatusError(EnvelopeError, ValueError):
    def __init__(self, status: object, allowed: Iterable[str]) -> None:
        self.status = status
        self.allowed = tuple(sorted(allowed))
        super().__init__(
            f"Status must be one of these: {', '.join(self.allowed)}!",
            error_code="envelope_invalid_status",
            reason_code="invalid_status",
        )


class MissingKeyError(EnvelopeError, KeyError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Nonexisting key requested: {key}",
            error_code="envelope_missing_key",
            reason_code="missing_key",
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.message
