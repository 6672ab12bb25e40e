"""
neuronest/config.py

Explicit runtime configuration for the bot service.

Settings are read once (from the process environment, optionally primed from a
.env file) and then passed by hand into the completion client, orchestrator,
route handler and server. Nothing in the package reads the environment on its
own.

Environment Variables (in .env file):
  - OPENAI_API_KEY:      API key for the completion service.
  - OPENAI_MODEL:        Model identifier (default: gpt-4-turbo).
  - COMPLETION_TIMEOUT:  Seconds to wait on the completion call (default: SDK default).
  - JWT_SECRET:          HS256 secret used to sign and verify bearer tokens (required).
  - TOKEN_TTL_HOURS:     Lifetime of issued tokens (default: 24).
  - BOT_ROLES:           Comma-separated roles allowed to call bots (default: all).
  - NEURONEST_STORE:     Path of the JSON record store (default: neuronest_data.json).
  - PERSIST_RESULTS:     "true"/"false", store generated case studies and descriptions.
  - LOG_LEVEL:           Logging level name (default: INFO).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from dotenv import find_dotenv, load_dotenv

ROLES = ("STAFF", "DIRECTOR", "TEAM_LEAD", "AGENT", "PM")

DEFAULT_MODEL = "gpt-4-turbo"


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    completion_timeout: Optional[float] = None
    token_ttl_hours: int = 24
    bot_roles: Tuple[str, ...] = ROLES
    store_path: Path = Path("neuronest_data.json")
    persist_results: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "Settings":
        """
        Build Settings from the environment.

        Args:
            env_file: Optional .env path; when omitted python-dotenv searches
                      upwards from the working directory.

        Raises:
            ValueError: If JWT_SECRET is unset or a numeric value does not parse.
        """
        load_dotenv(env_file or find_dotenv(usecwd=True))

        secret = os.getenv("JWT_SECRET")
        if not secret:
            raise ValueError("JWT_SECRET must be set in the environment or .env file.")

        timeout = os.getenv("COMPLETION_TIMEOUT")
        roles = os.getenv("BOT_ROLES")

        try:
            return cls(
                jwt_secret=secret,
                openai_api_key=os.getenv("OPENAI_API_KEY") or None,
                openai_model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
                completion_timeout=float(timeout) if timeout else None,
                token_ttl_hours=int(os.getenv("TOKEN_TTL_HOURS", "24")),
                bot_roles=(
                    tuple(r.strip().upper() for r in roles.split(",") if r.strip())
                    if roles else ROLES
                ),
                store_path=Path(os.getenv("NEURONEST_STORE", "neuronest_data.json")),
                persist_results=_as_bool(os.getenv("PERSIST_RESULTS", "true")),
                log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            )
        except ValueError as e:
            raise ValueError(f"Invalid configuration value: {e}") from e
