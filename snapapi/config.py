"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from snapapi.exceptions import SnapAPIValidationError

DEFAULT_BASE_URL = "https://api.snapapi.dev"
DEFAULT_TIMEOUT = 60.0

ENV_API_KEY = "SNAPAPI_KEY"
ENV_BASE_URL = "SNAPAPI_BASE_URL"
ENV_TIMEOUT = "SNAPAPI_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings shared by the sync and async clients.

    ``base_url`` is stored without trailing slashes so that joining it with an
    API path never produces ``//``.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_key:
            raise SnapAPIValidationError("API key is required")
        if self.timeout is None or self.timeout <= 0:
            raise SnapAPIValidationError(f"Timeout must be positive, got {self.timeout!r}")
        object.__setattr__(self, "base_url", (self.base_url or "").rstrip("/") or DEFAULT_BASE_URL)

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "ClientConfig":
        """Build a config from explicit values, falling back to the environment."""
        env_timeout = os.environ.get(ENV_TIMEOUT)
        if timeout is None and env_timeout:
            try:
                timeout = float(env_timeout)
            except ValueError:
                raise SnapAPIValidationError(
                    f"{ENV_TIMEOUT} must be a number, got {env_timeout!r}"
                ) from None
        return cls(
            api_key=api_key or os.environ.get(ENV_API_KEY, ""),
            base_url=base_url or os.environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ClientConfig":
        """Read ``SNAPAPI_KEY``, ``SNAPAPI_BASE_URL`` and ``SNAPAPI_TIMEOUT``.

        When ``env_file`` is given it is loaded first; variables already set in
        the process environment take precedence over the file.
        """
        if env_file:
            load_dotenv(dotenv_path=env_file, override=False)
        return cls.resolve()
