"""
Session configuration.

A plain dict merged in three layers: ``DEFAULT_CONFIG``, then ``DREAMSCHOOL_*``
environment variables, then the dict passed by the caller.
"""

import os
from typing import Any, Dict, Mapping, Optional

from .core.exceptions import ConfigurationError

DEFAULT_CONFIG: Dict[str, Any] = {
    'school_name': "Dream School",
    'upcoming_days': 7,
    'default_total_marks': 25,
}

_ENV_KEYS = {
    'school_name': "DREAMSCHOOL_SCHOOL_NAME",
    'upcoming_days': "DREAMSCHOOL_UPCOMING_DAYS",
    'default_total_marks': "DREAMSCHOOL_DEFAULT_TOTAL_MARKS",
}


def _as_int(key: str, value: Any, minimum: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"{key} must be an integer, got {value!r}", details={"key": key, "value": value}
        ) from None
    if isinstance(value, bool) or number < minimum:
        raise ConfigurationError(
            f"{key} must be an integer >= {minimum}, got {value!r}",
            details={"key": key, "value": value},
        )
    return number


def load_config(overrides: Optional[Mapping[str, Any]] = None,
                environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Build the effective configuration for a session."""
    environ = os.environ if environ is None else environ
    config = dict(DEFAULT_CONFIG)

    for key, env_name in _ENV_KEYS.items():
        if env_name in environ:
            config[key] = environ[env_name]

    for key, value in (overrides or {}).items():
        if key not in DEFAULT_CONFIG:
            raise ConfigurationError(f"Unknown configuration key: {key}", details={"key": key})
        config[key] = value

    school_name = str(config['school_name']).strip()
    if not school_name:
        raise ConfigurationError("school_name must not be empty", details={"key": "school_name"})
    config['school_name'] = school_name
    config['upcoming_days'] = _as_int('upcoming_days', config['upcoming_days'], 0)
    config['default_total_marks'] = _as_int('default_total_marks', config['default_total_marks'], 1)
    return config
