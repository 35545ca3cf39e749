"""Configuration management for the Dibbla CLI."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from .core.exceptions import MissingAPITokenError

log = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.dibbla.app"

API_URL_ENV = "DIBBLA_API_URL"
API_TOKEN_ENV = "DIBBLA_API_TOKEN"


class Settings(BaseModel):
    """Resolved CLI settings for one invocation."""

    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_API_URL
    api_token: Optional[str] = None

    @property
    def has_token(self) -> bool:
        return bool(self.api_token)

    def require_token(self) -> str:
        """Return the API token or raise with setup instructions."""
        if not self.api_token:
            raise MissingAPITokenError()
        return self.api_token


def load_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from the environment and an optional .env file.

    Variables already present in the process environment take precedence
    over values from the .env file.

    Args:
        env_file: Path to a .env file. Defaults to searching from the
            current working directory.

    Returns:
        Settings with api_url and api_token resolved.
    """
    if env_file is not None:
        loaded = load_dotenv(dotenv_path=env_file, override=False)
    else:
        loaded = load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    if loaded:
        log.debug("Loaded .env file")

    api_url = os.environ.get(API_URL_ENV, "").strip() or DEFAULT_API_URL
    api_token = os.environ.get(API_TOKEN_ENV, "").strip() or None

    return Settings(api_url=api_url, api_token=api_token)
