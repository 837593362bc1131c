"""
Environment-backed settings.

Values come from the process environment, with a local .env file loaded
through python-dotenv. Header templates use ${name} placeholders where
name is a key of constants.ENV.
"""

import os
import re
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

from ..errors import ConfigurationError
from .constants import (
    BASE_URL_ENV_VAR,
    DEFAULT_TIMEOUT_SECONDS,
    ENV,
    HEADERS,
    MISTRAL_BASE_URL,
    TIMEOUT_ENV_VAR,
)

# Load environment variables
load_dotenv()

_PLACEHOLDER = re.compile(r"\$\{(\w+)\}")


def get_env_values(overrides: Optional[Mapping[str, Optional[str]]] = None) -> Dict[str, str]:
    """Resolve placeholder values from the environment.

    Args:
        overrides: Explicit values (e.g. an api_key passed to the provider)
            that take precedence over environment variables

    Returns:
        Dict of placeholder name to value, only for values that are set
    """
    values: Dict[str, str] = {}
    for name, env_var in ENV.items():
        value = os.getenv(env_var)
        if value:
            values[name] = value
    for name, value in (overrides or {}).items():
        if value:
            values[name] = value
    return values


def render_headers(
    values: Mapping[str, str],
    headers: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Substitute ${name} placeholders in header templates.

    Raises:
        ConfigurationError: If a placeholder has no value
    """
    missing: Dict[str, str] = {}

    def substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in values:
            env_var = ENV.get(name, name)
            missing[name] = f"{env_var} is not set"
            return match.group(0)
        return values[name]

    rendered = {
        key: _PLACEHOLDER.sub(substitute, template)
        for key, template in (headers if headers is not None else HEADERS).items()
    }
    if missing:
        raise ConfigurationError(
            f"Unresolved header placeholders: {', '.join(sorted(missing))}",
            errors=missing,
        )
    return rendered


def get_timeout() -> float:
    """Request timeout in seconds, overridable via MISTRAL_TIMEOUT."""
    try:
        return float(os.getenv(TIMEOUT_ENV_VAR, str(DEFAULT_TIMEOUT_SECONDS)))
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


def get_base_url() -> str:
    return os.getenv(BASE_URL_ENV_VAR) or MISTRAL_BASE_URL
