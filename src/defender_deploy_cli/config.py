"""Environment configuration for defender-deploy-cli."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .constants import API_KEY_ENV, API_SECRET_ENV, API_URL_ENV, DEFAULT_API_URL
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """API key and secret for the deployment service."""

    api_key: str
    api_secret: str


def load_credentials(load_env_file: bool = True) -> Credentials:
    """
    Read API credentials from the environment.

    Args:
        load_env_file: Also read a .env file from the working directory.
                       Variables already set in the environment take precedence.

    Returns:
        Credentials

    Raises:
        ConfigurationError: If either credential is missing
    """
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True))

    api_key = os.environ.get(API_KEY_ENV)
    api_secret = os.environ.get(API_SECRET_ENV)

    if not api_key or not api_secret:
        raise ConfigurationError(
            f"{API_KEY_ENV} and {API_SECRET_ENV} must be set in environment variables."
        )

    return Credentials(api_key=api_key, api_secret=api_secret)


def get_api_url(api_url: Optional[str] = None) -> str:
    """Return the API base URL: explicit argument, then $DEFENDER_API_URL, then the default."""
    if api_url is None:
        api_url = os.environ.get(API_URL_ENV) or DEFAULT_API_URL
    return api_url.rstrip("/")
