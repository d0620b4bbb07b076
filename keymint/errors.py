"""Error hierarchy returned by the KeyMint client."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "KeyMintError",
    "ConfigError",
    "EncodingError",
    "TransportError",
    "ApiError",
    "UnclassifiedApiError",
    "DecodingError",
]


class KeyMintError(RuntimeError):
    """Base error carrying the API ``message``, ``code`` and HTTP status.

    ``code`` is ``-1`` for every failure produced locally by the client.
    ``http_status`` is ``None`` when no HTTP response was received.
    """

    def __init__(self, message: str, code: int = -1, http_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def __str__(self) -> str:
        if self.http_status is not None:
            return (
                f"KeyMint API Error (code: {self.code}, status: {self.http_status}): "
                f"{self.message}"
            )
        return f"KeyMint API Error (code: {self.code}): {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"http_status={self.http_status!r})"
        )


class ConfigError(KeyMintError):
    """Raised when the client cannot be constructed."""


class EncodingError(KeyMintError):
    """The request parameters could not be serialized to JSON."""


class TransportError(KeyMintError):
    """The request could not be built or sent, or its body could not be read."""


class ApiError(KeyMintError):
    """The server answered with an error status and a well-formed error body."""


class UnclassifiedApiError(KeyMintError):
    """The server answered with an error status but an unrecognised body."""


class DecodingError(KeyMintError):
    """A success response whose body does not match the expected schema."""
