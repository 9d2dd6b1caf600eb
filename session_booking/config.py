"""
Configuration loaded from the environment (and an optional ``.env`` file).

Examples:
    >>> config = Config()
    >>> config.validate()
    >>> config.app_id
    'booking-app-123'
"""

import os
import logging
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


DEFAULT_APP_ID = "booking-app-123"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    """
    Runtime settings of the booking console.

    Attributes:
        app_id: Tenant namespace the two collections live under
        gcp_project: Google Cloud project (falls back to ADC when unset)
        initial_auth_token: Provisioned identity token, if handed over directly
        auth_token_secret: Secret Manager secret holding the provisioned token
        log_level: Logging level name
        log_file: Optional path for a rotating log file
    """

    def __init__(self, load_env_file: bool = True):
        if load_env_file:
            load_dotenv()

        self._app_id = os.getenv("APP_ID", DEFAULT_APP_ID)
        self._gcp_project = os.getenv("GCP_PROJECT") or None
        self._initial_auth_token = os.getenv("INITIAL_AUTH_TOKEN") or None
        self._auth_token_secret = os.getenv("AUTH_TOKEN_SECRET") or None
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def gcp_project(self) -> Optional[str]:
        return self._gcp_project

    @property
    def initial_auth_token(self) -> Optional[str]:
        return self._initial_auth_token

    @property
    def auth_token_secret(self) -> Optional[str]:
        return self._auth_token_secret

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def log_level_value(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self._log_level, logging.INFO)

    @property
    def log_file(self) -> Optional[str]:
        return self._log_file

    def validate(self) -> None:
        """
        Validate loaded settings.

        Raises:
            ConfigurationError: If a setting is unusable
        """
        if not self._app_id.strip():
            raise ConfigurationError("APP_ID", "APP_ID must not be empty")
        if "/" in self._app_id:
            raise ConfigurationError("APP_ID", "APP_ID must not contain '/'")
        if self._log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                "LOG_LEVEL",
                f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, "
                f"got: {self._log_level}",
            )

    def __repr__(self) -> str:
        token = "********" if self._initial_auth_token else None
        return (
            f"Config(app_id={self._app_id!r}, gcp_project={self._gcp_project!r}, "
            f"initial_auth_token={token!r}, log_level={self._log_level!r})"
        )
