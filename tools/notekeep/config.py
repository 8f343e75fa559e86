"""Settings loaded once at startup and passed explicitly to components."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import jsonschema

from .auth.passwords import DEFAULT_ROUNDS
from .auth.tokens import DEFAULT_EXPIRY_HOURS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".notekeep/config.json"
DEFAULT_DATA_DIR = ".notekeep/data"

USERS_FILE = "users.json"
NOTES_FILE = "notes.json"

# Overrides auth.jwt_secret when set
SECRET_ENV_VAR = "JWT_SECRET"

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "data_dir": {"type": "string", "minLength": 1},
        "event_log": {"type": ["string", "null"]},
        "auth": {
            "type": "object",
            "properties": {
                "jwt_secret": {"type": "string"},
                "token_expiry_hours": {"type": "number", "exclusiveMinimum": 0},
                "bcrypt_rounds": {"type": "integer", "minimum": 4, "maximum": 31},
            },
        },
        "web": {
            "type": "object",
            "properties": {
                "host": {"type": "string"},
                "port": {"type": "integer", "minimum": 0, "maximum": 65535},
            },
        },
    },
}


class ConfigError(Exception):
    """The config file could not be parsed or has the wrong shape."""


@dataclass
class Settings:
    data_dir: Path = Path(DEFAULT_DATA_DIR)
    event_log: Optional[Path] = None
    jwt_secret: str = ""
    token_expiry_hours: float = DEFAULT_EXPIRY_HOURS
    bcrypt_rounds: int = DEFAULT_ROUNDS
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def users_path(self) -> Path:
        return self.data_dir / USERS_FILE

    @property
    def notes_path(self) -> Path:
        return self.data_dir / NOTES_FILE

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Settings:
        """Build settings from the parsed config file.

        Layout::

            {
              "data_dir": ".notekeep/data",
              "event_log": ".notekeep/events.jsonl",
              "auth": {"jwt_secret": "...", "token_expiry_hours": 24, "bcrypt_rounds": 10},
              "web": {"host": "0.0.0.0", "port": 3000}
            }
        """
        try:
            jsonschema.validate(config, CONFIG_SCHEMA)
        except jsonschema.ValidationError as exc:
            where = ".".join(str(p) for p in exc.absolute_path) or "top level"
            raise ConfigError(f"Invalid config at {where}: {exc.message}") from exc

        auth_config = config.get("auth", {})
        web_config = config.get("web", {})
        event_log = config.get("event_log")

        jwt_secret = os.environ.get(SECRET_ENV_VAR) or auth_config.get("jwt_secret", "")
        if not jwt_secret:
            logger.warning(
                "auth.jwt_secret not configured; falling back to the insecure default secret"
            )

        return cls(
            data_dir=Path(config.get("data_dir", DEFAULT_DATA_DIR)),
            event_log=Path(event_log) if event_log else None,
            jwt_secret=jwt_secret,
            token_expiry_hours=auth_config.get("token_expiry_hours", DEFAULT_EXPIRY_HOURS),
            bcrypt_rounds=auth_config.get("bcrypt_rounds", DEFAULT_ROUNDS),
            host=web_config.get("host", "0.0.0.0"),
            port=web_config.get("port", 3000),
        )


def load_config(config_path: str | Path) -> Settings:
    """Load settings from a JSON file; a missing file means all defaults.

    Raises:
        ConfigError: the file is unreadable, not JSON, or fails CONFIG_SCHEMA.
    """
    path = Path(config_path)
    if not path.exists():
        logger.warning(f"Config not found at {path}; using defaults")
        return Settings.from_dict({})

    try:
        with open(path) as f:
            config = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Config at {path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config at {path}: {exc}") from exc

    try:
        return Settings.from_dict(config)
    except ConfigError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
