import os
from typing import Any

__all__ = ['OsGetEnvBool', 'TranslateNone']

# ==================================================================================================
_TRUE_VALUES = ('1', 'true', 'yes', 'y', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'n', 'off')


def TranslateNone(cfg: dict[str, Any] | list[Any]) -> None:
    """ Replace in place every "None" string of a parsed TOML document (TOML has no null) with None """
    for key, value in (cfg.items() if isinstance(cfg, dict) else enumerate(cfg)):
        if isinstance(value, (dict, list)):
            TranslateNone(value)
        elif value == 'None':
            cfg[key] = None


def OsGetEnvBool(env_key: str, default_if_not_found: bool = False) -> bool:
    """
    Read a boolean environment variable. The default is returned when the variable is not set, and any value
    outside the accepted true/false spellings raises a :class:`ValueError`.
    """
    v: str | None = os.getenv(env_key)
    if v is None:
        return default_if_not_found
    if v.lower() in _TRUE_VALUES:
        return True
    if v.lower() in _FALSE_VALUES:
        return False
    raise ValueError(f'Invalid boolean value of {env_key}: {v}')
