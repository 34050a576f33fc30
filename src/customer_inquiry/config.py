"""
Application settings for the Customer Inquiry UI.

Settings are read from the environment once, at composition time, and
passed explicitly to the services and controllers that need them:

    settings = Settings.from_env()
    settings.validate()
    app = create_app(settings)

Environment variables:
- CUSTOMER_API_BASE_URL: Backend base URL (required when CUSTOMER_UI_STRICT)
- CUSTOMER_UI_STRICT: Fail fast when the base URL is unset
- CUSTOMER_UI_SERVICE: "http" or "demo"
- CUSTOMER_API_TIMEOUT: Total request timeout in seconds
- CUSTOMER_UI_RETRIES: Extra attempts after a network error (0-3)
- CUSTOMER_UI_ZIP_FIXED_WIDTH: Zero-pad zip codes to 5 digits
- CUSTOMER_UI_EXIT_URL: Where exit navigates when no handler is supplied
  (unset: back in browser history)
- CUSTOMER_UI_PORT: Development server port
- LOG_LEVEL: Logging level
"""

import os
from dataclasses import dataclass
from typing import Mapping
from urllib.parse import urlparse

from customer_inquiry.errors import ConfigurationError

DEFAULT_BASE_URL = "http://localhost:8080/api"
MAX_RETRIES = 3

_TRUE_VALUES = {"1", "true", "yes"}


def _flag(env: Mapping[str, str], key: str, default: str = "false") -> bool:
    return env.get(key, default).strip().lower() in _TRUE_VALUES


def _number(env: Mapping[str, str], key: str, default: str, cast=int):
    raw = env.get(key, default).strip() or default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """
    Immutable application configuration.

    Attributes:
        api_base_url: Backend base URL, without the /customers suffix.
        service_kind: Which CustomerService implementation to use.
        request_timeout: Total HTTP timeout in seconds.
        network_retries: Extra attempts after a NetworkError.
        zip_fixed_width: Zero-pad zip codes on the detail screen.
        exit_url: Fallback navigation target for exit; None goes back in history.
        port: Development server port.
        log_level: Logging level name.
    """

    api_base_url: str = DEFAULT_BASE_URL
    service_kind: str = "http"
    request_timeout: float = 10.0
    network_retries: int = 0
    zip_fixed_width: bool = False
    exit_url: str | None = None
    port: int = 8050
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read instead of os.environ (used by tests).

        Raises:
            ConfigurationError: If strict mode is on and the base URL is unset,
                or a numeric variable does not parse.
        """
        env = os.environ if env is None else env
        base_url = env.get("CUSTOMER_API_BASE_URL", "").strip()
        if not base_url:
            if _flag(env, "CUSTOMER_UI_STRICT"):
                raise ConfigurationError("CUSTOMER_API_BASE_URL is not set")
            base_url = DEFAULT_BASE_URL
        return cls(
            api_base_url=base_url.rstrip("/"),
            service_kind=env.get("CUSTOMER_UI_SERVICE", "http").strip().lower(),
            request_timeout=_number(env, "CUSTOMER_API_TIMEOUT", "10", float),
            network_retries=_number(env, "CUSTOMER_UI_RETRIES", "0"),
            zip_fixed_width=_flag(env, "CUSTOMER_UI_ZIP_FIXED_WIDTH"),
            exit_url=env.get("CUSTOMER_UI_EXIT_URL", "").strip() or None,
            port=_number(env, "CUSTOMER_UI_PORT", "8050"),
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    def validate(self) -> "Settings":
        """
        Check the settings are usable.

        Returns:
            self, so calls can be chained.

        Raises:
            ConfigurationError: On the first invalid value.
        """
        parsed = urlparse(self.api_base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"CUSTOMER_API_BASE_URL must be an http(s) URL, got {self.api_base_url!r}"
            )
        if self.service_kind not in ("http", "demo"):
            raise ConfigurationError(
                f"CUSTOMER_UI_SERVICE must be 'http' or 'demo', got {self.service_kind!r}"
            )
        if self.request_timeout <= 0:
            raise ConfigurationError("CUSTOMER_API_TIMEOUT must be positive")
        if not 0 <= self.network_retries <= MAX_RETRIES:
            raise ConfigurationError(
                f"CUSTOMER_UI_RETRIES must be between 0 and {MAX_RETRIES}"
            )
        return self
