"""
Environment configuration for the test suite.

Values come from the process environment, with a local ``.env`` file loaded
first (see ``.env.example``). Optional settings fall back to defaults and log a
warning so a misconfigured run is visible in the output.
"""

import logging
import os
from typing import Iterable, Optional, Tuple

from dotenv import load_dotenv

from utils.errors import MissingEnvironmentError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://localhost:3000'
DEFAULT_API_BASE_URL = 'https://httpbin.org'
DEFAULT_AUTH_STATE_PATH = '.auth/state.json'


def load_environment(dotenv_path: Optional[str] = None) -> bool:
    """Load ``.env`` into the process environment without overriding real variables."""
    return load_dotenv(dotenv_path=dotenv_path, override=False)


def _warn_if_missing(name: str, default: str):
    if not os.environ.get(name):
        logger.warning(
            f"[env] {name} is not set. Using default: \"{default}\". "
            f"Copy .env.example to .env and set your values."
        )


def get_base_url() -> str:
    _warn_if_missing('BASE_URL', DEFAULT_BASE_URL)
    return os.environ.get('BASE_URL') or DEFAULT_BASE_URL


def get_api_base_url() -> str:
    _warn_if_missing('API_BASE_URL', DEFAULT_API_BASE_URL)
    return os.environ.get('API_BASE_URL') or DEFAULT_API_BASE_URL


def get_auth_state_path() -> str:
    """Storage-state file used by the auth bootstrap; override per run for sharded CI."""
    return os.environ.get('AUTH_STATE_PATH') or DEFAULT_AUTH_STATE_PATH


def get_env_var(name: str, default: str = '') -> str:
    value = os.environ.get(name)
    if value is None or value == '':
        if default == '':
            logger.warning(f"[env] {name} is not set and no default provided.")
        return default
    return value


def is_ci() -> bool:
    return os.environ.get('CI') in ('true', '1')


def validate_required_env_vars(required_vars: Iterable[str]):
    """
    Fail fast when any of ``required_vars`` is unset or blank.

    Raises:
        MissingEnvironmentError: lists every missing variable
    """
    missing = [
        name for name in required_vars
        if not os.environ.get(name) or not os.environ[name].strip()
    ]
    if missing:
        raise MissingEnvironmentError(missing)


def get_test_credentials() -> Optional[Tuple[str, str]]:
    """(username, password) for the login flow, or None when not configured."""
    username = os.environ.get('TEST_USERNAME', '').strip()
    password = os.environ.get('TEST_PASSWORD', '')
    if not username or not password:
        return None
    return username, password
