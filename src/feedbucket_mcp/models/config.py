"""Runtime configuration read from the environment."""

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://dashboard.feedbucket.app/api/v1"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            "Configuration validation failed:\n" + "\n".join(errors)
        )


class FeedbucketConfig(BaseModel):
    """Immutable settings passed to the services that call Feedbucket."""

    project_id: str = Field(..., min_length=1)
    private_key: str = Field(..., min_length=1)
    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = Field(
        None, description="Public feedbucketKey for protected projects"
    )
    timeout: float | None = Field(
        None, description="Request timeout in seconds; None waits indefinitely"
    )
    log_level: str = "INFO"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FeedbucketConfig":
        """Build the config from ``FEEDBUCKET_*`` variables.

        Raises:
            ConfigurationError: If the project id or private key is missing,
                the timeout is not a number, or the log level is unknown.
                All problems are reported together.
        """
        env = os.environ if environ is None else environ
        errors = []

        project_id = env.get("FEEDBUCKET_PROJECT_ID", "").strip()
        private_key = env.get("FEEDBUCKET_PRIVATE_KEY", "").strip()
        base_url = env.get("FEEDBUCKET_BASE_URL", "").strip() or DEFAULT_BASE_URL

        if not project_id:
            errors.append("FEEDBUCKET_PROJECT_ID is required")
        if not private_key:
            errors.append("FEEDBUCKET_PRIVATE_KEY is required")

        timeout = None
        raw_timeout = env.get("FEEDBUCKET_TIMEOUT", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                errors.append("FEEDBUCKET_TIMEOUT must be a number of seconds")

        log_level = env.get("FEEDBUCKET_LOG_LEVEL", "").strip().upper() or "INFO"
        if log_level not in LOG_LEVELS:
            errors.append(
                f"FEEDBUCKET_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}"
            )

        if errors:
            raise ConfigurationError(errors)

        return cls(
            project_id=project_id,
            private_key=private_key,
            base_url=base_url.rstrip("/"),
            api_key=env.get("FEEDBUCKET_API_KEY") or None,
            timeout=timeout,
            log_level=log_level,
        )
