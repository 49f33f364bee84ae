from __future__ import annotations

"""
Configuration plumbing for the torrent client.

Every section is optional: with no file at all the client talks to the public
YTS API and drops downloads into the working directory.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

DEFAULT_API_BASE = "https://yts.mx/api/v2/"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; TorrentClient/1.0)"
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_CONFIG_PATH = "torrent_client.json"
API_BASE_ENV = "TORRENT_CLIENT_API_BASE"


class ConfigError(Exception):
    """Raised when configuration loading goes sideways."""


@dataclass
class ApiConfig:
    """Where the search API lives and how politely we knock."""

    base_url: str = DEFAULT_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    download_dir: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ApiConfig":
        """
        Build an instance from raw configuration data.

        Parameters
        ----------
        data : dict[str, Any] | None
            The ``api`` section of the config JSON, if there is one.

        Returns
        -------
        ApiConfig
            Settings the API client needs for its single round trip.

        Raises
        ------
        ConfigError
            If the section isn't an object or the timeout isn't a number.
        """

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("The 'api' section must be a JSON object")

        try:
            timeout = float(data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid api.request_timeout: {data.get('request_timeout')!r}") from exc

        return cls(
            base_url=str(data.get("base_url", DEFAULT_API_BASE)),
            user_agent=str(data.get("user_agent", DEFAULT_USER_AGENT)),
            request_timeout=timeout,
            download_dir=data.get("download_dir"),
        )


@dataclass
class LoggingConfig:
    """Logging verbosity. WARNING keeps the table output free of chatter."""

    level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "LoggingConfig":
        if data is None:
            return cls()
        return cls(level=str(data.get("level", "WARNING")).upper())


@dataclass
class AppConfig:
    """Aggregate configuration: the API section and logging in one bundle."""

    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """
        Stitch together the full configuration set from JSON.

        Parameters
        ----------
        data : dict[str, Any]
            Entire configuration payload.

        Returns
        -------
        AppConfig
            Everything the client needs to know.

        Raises
        ------
        ConfigError
            If the payload isn't a JSON object.
        """

        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a JSON object")

        return cls(
            api=ApiConfig.from_dict(data.get("api")),
            logging=LoggingConfig.from_dict(data.get("logging")),
        )


class ConfigLoader:
    """Loads application configuration from JSON files."""

    def __init__(self, path: str | Path | None = None):
        """
        Parameters
        ----------
        path : str | Path | None
            Explicit config file. ``None`` means "use ``torrent_client.json``
            if it happens to exist, defaults otherwise".
        """

        self.explicit = path is not None
        self.path = Path(path) if path is not None else Path(DEFAULT_CONFIG_PATH)

    def load(self) -> AppConfig:
        """
        Read and validate the configuration file.

        Returns
        -------
        AppConfig
            The parsed configuration bundle, with the environment override applied.

        Raises
        ------
        ConfigError
            When an explicitly requested file is missing, or any file is invalid.
        """

        if not self.path.exists() and not self.explicit:
            config = AppConfig()
        else:
            try:
                payload = json.loads(self.path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise ConfigError(f"Configuration file not found: {self.path}") from exc
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Invalid JSON configuration: {exc.msg}") from exc
            config = AppConfig.from_dict(payload)

        env_base = os.environ.get(API_BASE_ENV)
        if env_base:
            config.api.base_url = env_base
        return config

    @staticmethod
    def apply_overrides(config: AppConfig, overrides: dict[str, Any]) -> AppConfig:
        """
        Update the in-memory configuration with CLI overrides.

        Parameters
        ----------
        config : AppConfig
            The baseline configuration.
        overrides : dict[str, Any]
            CLI overrides; ``None`` values leave the config untouched.

        Returns
        -------
        AppConfig
            The same object, adjusted in place.
        """

        if overrides.get("download_dir"):
            config.api.download_dir = overrides["download_dir"]
        if overrides.get("base_url"):
            config.api.base_url = overrides["base_url"]

        return config
