"""Client configuration and its environment-variable loader.

The access token is never embedded in code. It is passed explicitly or
supplied through the environment:

```
KEYMINT_ACCESS_TOKEN    Bearer token used on every request.
KEYMINT_API_BASE_URL    (Optional) API base URL, defaults to https://api.keymint.dev.
KEYMINT_TIMEOUT         (Optional) Per-request timeout in seconds, defaults to 30.
```
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

__all__ = [
    "ACCESS_TOKEN_ENV_VAR",
    "BASE_URL_ENV_VAR",
    "TIMEOUT_ENV_VAR",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "MISSING_TOKEN_MESSAGE",
    "ClientConfig",
]

ACCESS_TOKEN_ENV_VAR = "KEYMINT_ACCESS_TOKEN"
BASE_URL_ENV_VAR = "KEYMINT_API_BASE_URL"
TIMEOUT_ENV_VAR = "KEYMINT_TIMEOUT"

DEFAULT_BASE_URL = "https://api.keymint.dev"
DEFAULT_TIMEOUT = 30.0

MISSING_TOKEN_MESSAGE = "access token is required to initialize the client"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every request of a client."""

    access_token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def create(
        cls,
        access_token: Optional[str],
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "ClientConfig":
        """Validate the arguments and fill in the defaults."""

        if not access_token:
            raise ConfigError(MISSING_TOKEN_MESSAGE)

        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        if timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {timeout!r}")

        return cls(
            access_token=access_token,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout=timeout,
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        raw_timeout = os.getenv(TIMEOUT_ENV_VAR)
        timeout: Optional[float] = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigError(
                    f"{TIMEOUT_ENV_VAR} must be a number of seconds, got {raw_timeout!r}"
                ) from exc

        return cls.create(
            os.getenv(ACCESS_TOKEN_ENV_VAR),
            os.getenv(BASE_URL_ENV_VAR),
            timeout,
        )

    def __repr__(self) -> str:
        return (
            f"ClientConfig(access_token='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r})"
        )
