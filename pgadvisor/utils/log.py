"""
This module provides the logging setup for the project. The logger is described by a TOML document
(``conf/log.toml`` by default) whose ``[LOGGER]`` table names the logger, its level, and a set of
handler sub-tables. Every sub-table whose name ends with ``_STREAM_HANDLER`` or ``_FILE_HANDLER`` and
carries ``ENABLED = true`` is turned into a handler.

Usage:
-----
    >>> BuildLogger('conf/log.toml')
    >>> BuildLogger({'NAME': 'PGADVISOR', 'LEVEL': 'INFO', 'PGADVISOR': {...}})

"""
import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Any

import toml

from pgadvisor.static.c_timezone import GetTimezone
from pgadvisor.static.vars import APP_NAME_UPPER, Mi
from pgadvisor.utils.base import TranslateNone

__all__ = ['BuildLogger']
_TIMEZONE = GetTimezone()[0]
_STREAMS = {'ext://sys.stdout': 'stdout', 'ext://sys.stderr': 'stderr'}


# ==================================================================================================
def _BuildFormatter(log_format: str) -> logging.Formatter:
    formatter = logging.Formatter(log_format)
    formatter.converter = lambda *args: datetime.now(tz=_TIMEZONE).timetuple()
    return formatter


def _BuildFileHandler(profile: dict[str, Any]) -> logging.Handler | None:
    handler_type: str | None = profile.get('HANDLER_TYPE')
    log_format: str | None = profile.get('LOG_FORMAT')
    log_filemode: str = profile.get('LOG_FILEMODE', 'a')
    if log_format is None:
        raise ValueError('LOG_FORMAT must be provided.')
    if log_filemode not in ('a', 'w', 'x'):
        raise ValueError(f'Invalid LOG_FILEMODE value: {log_filemode}.')

    assert profile.get('LOG_FILE_PATH'), 'LOG_FILE_PATH must be provided.'
    log_file_path = f"{profile['LOG_FILE_PATH']}.{profile.get('LOG_FILE_EXTENSION', 'log')}"
    if os.path.dirname(log_file_path):
        os.makedirs(os.path.dirname(log_file_path), exist_ok=True)

    kwargs = {'encoding': profile.get('ENCODING', 'utf-8'), 'delay': profile.get('DELAY', False) is True}
    backup_count: int = profile.get('BACKUP_COUNT', 5)
    match handler_type:
        case 'FileHandler':
            h = logging.FileHandler(log_file_path, mode=log_filemode, **kwargs)
        case 'RotatingFileHandler':
            h = RotatingFileHandler(log_file_path, mode=log_filemode, maxBytes=profile.get('MAX_BYTES', 16 * Mi),
                                    backupCount=backup_count, **kwargs)
        case 'TimedRotatingFileHandler':
            h = TimedRotatingFileHandler(log_file_path, when=profile.get('WHEN', 'D').lower(),
                                         interval=profile.get('INTERVAL', 1), backupCount=backup_count, **kwargs)
        case _:
            return None
    h.setFormatter(_BuildFormatter(log_format))
    h.setLevel(profile.get('LEVEL', logging.INFO))
    return h


def _BuildStreamHandler(profile: dict[str, Any]) -> logging.StreamHandler:
    log_stream: str | None = profile.get('STREAM')
    if log_stream not in _STREAMS:
        raise ValueError(f'Invalid STREAM value: {log_stream}.')
    h = logging.StreamHandler(stream=getattr(sys, _STREAMS[log_stream]))
    h.setFormatter(_BuildFormatter(profile.get('LOG_FORMAT')))
    h.setLevel(profile.get('LEVEL', logging.INFO))
    return h


def BuildLogger(cfg: dict[str, Any] | str) -> logging.Logger:
    if isinstance(cfg, str):  # A filepath
        with open(cfg, 'r') as f:
            cfg = toml.load(f)['LOGGER']
    assert isinstance(cfg, dict), 'Config must be a dictionary.'
    TranslateNone(cfg)
    logger_name: str = cfg.get('NAME', APP_NAME_UPPER).upper()

    # [01] Setup logger and drop the handlers from previous builds
    c_logger: logging.Logger = logging.getLogger(logger_name)
    c_logger.setLevel(cfg.get('LEVEL', logging.DEBUG))
    for c_handler in list(c_logger.handlers):
        c_logger.removeHandler(c_handler)
        c_handler.close()

    # [02] Attach the enabled handlers
    for key, profile in cfg.get(logger_name, {}).items():
        if not (isinstance(profile, dict) and profile.get('ENABLED', False) is True):
            continue
        h: logging.Handler | None = None
        if key.endswith('_FILE_HANDLER'):
            h = _BuildFileHandler(profile)
        elif key.endswith('_STREAM_HANDLER'):
            h = _BuildStreamHandler(profile)
        if h is None:
            c_logger.warning(f'The handler {key} is enabled but its type is not supported; it is ignored.')
            continue
        c_logger.addHandler(h)

    c_logger.info(f'Logger {logger_name} is created and initialized.')
    return c_logger
