"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from finchat.database.factories import DATABASE_URL_ENV, default_database_url

REQUEST_TIMEOUT_ENV = "FINCHAT_REQUEST_TIMEOUT"
API_TOKENS_ENV = "FINCHAT_API_TOKENS"
LOG_LEVEL_ENV = "FINCHAT_LOG_LEVEL"


def parse_api_tokens(value: str) -> dict[str, str]:
    """Parse ``token=owner`` pairs separated by commas.

    Raises:
        ValueError: If a pair has no ``=`` or an empty side
    """
    tokens = {}
    for pair in value.split(","):
        pair = pair.strip()
        if not pair:
            continue
        token, sep, owner_id = pair.partition("=")
        if not sep or not token.strip() or not owner_id.strip():
            raise ValueError(f"Invalid {API_TOKENS_ENV} entry: '{pair}' (expected token=owner)")
        tokens[token.strip()] = owner_id.strip()
    return tokens


@dataclass(frozen=True)
class Settings:
    """finchat service settings."""

    database_url: str
    request_timeout: float = 5.0
    api_tokens: dict[str, str] = field(default_factory=dict)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            overrides: Explicit values that win over the environment (None is ignored)
        """
        environ = os.environ if environ is None else environ

        timeout_str = environ.get(REQUEST_TIMEOUT_ENV, "5")
        try:
            request_timeout = float(timeout_str)
        except ValueError:
            raise ValueError(f"Invalid {REQUEST_TIMEOUT_ENV}: '{timeout_str}'")
        if request_timeout <= 0:
            raise ValueError(f"{REQUEST_TIMEOUT_ENV} must be positive")

        values = {
            "database_url": environ.get(DATABASE_URL_ENV) or None,
            "request_timeout": request_timeout,
            "api_tokens": parse_api_tokens(environ.get(API_TOKENS_ENV, "")),
            "log_level": environ.get(LOG_LEVEL_ENV, "INFO").upper(),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        if values["database_url"] is None:
            values["database_url"] = default_database_url()
        return cls(**values)
