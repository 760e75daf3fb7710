import os
from dataclasses import dataclass
from typing import Optional


API_BASE_ENV = "API_BASE_URL"
API_TOKEN_ENV = "API_TOKEN"
API_TIMEOUT_ENV = "API_TIMEOUT_SECONDS"

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class APISettings:
    base_url: str
    token: Optional[str]
    timeout: float = DEFAULT_TIMEOUT_SECONDS


class MissingConfigurationError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


def get_settings(
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
) -> APISettings:
    """Load dashboard API settings from arguments or environment variables.

    Args:
        base_url: Optional base URL override.
        token: Optional API token override.
        timeout: Optional request timeout override in seconds.

    Returns:
        APISettings populated from the first non-empty value in the priority
        order of explicit override then environment variable.

    Raises:
        MissingConfigurationError: when the base URL is not provided or the
            timeout is not a positive number.
    """

    resolved_base = base_url or os.getenv(API_BASE_ENV)
    resolved_token = token or os.getenv(API_TOKEN_ENV)

    if not resolved_base:
        raise MissingConfigurationError(
            f"API base URL is required. Set {API_BASE_ENV} or pass --base-url."
        )

    resolved_timeout = timeout
    if resolved_timeout is None:
        raw = os.getenv(API_TIMEOUT_ENV)
        try:
            resolved_timeout = float(raw) if raw else DEFAULT_TIMEOUT_SECONDS
        except ValueError as exc:
            raise MissingConfigurationError(f"{API_TIMEOUT_ENV} must be a number, got {raw!r}") from exc
    if resolved_timeout <= 0:
        raise MissingConfigurationError("Request timeout must be positive.")

    return APISettings(base_url=resolved_base.rstrip("/"), token=resolved_token, timeout=resolved_timeout)
