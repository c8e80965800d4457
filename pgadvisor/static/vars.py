"""
This module contains the application-wide constants: the application name used by the logger and the
environment variables, the supported engine version bounds, the byte-size and timing units, and the
selection of the logging configuration file.

"""
import os

# ==================================================================================================
# Application Information
__version__ = '0.2.0'
__VERSION__ = __version__

APP_NAME = 'PGADVISOR'  # This name is used on log.toml,
APP_NAME_LOWER: str = APP_NAME.lower()
APP_NAME_UPPER: str = APP_NAME.upper()

DEBUG_MODE: bool = os.getenv(f'{APP_NAME_UPPER}_DEBUG') is not None  # If this flag available regardless of the value
WEB_MODE: bool = os.getenv(f'{APP_NAME_UPPER}_WEB') is not None  # If this flag available regardless of the value

LOG_FILE_PATH = 'conf/log.toml'
if DEBUG_MODE and os.path.exists('conf/log_debug.toml'):
    LOG_FILE_PATH = 'conf/log_debug.toml'
elif WEB_MODE and os.path.exists('conf/log_web.toml'):
    LOG_FILE_PATH = 'conf/log_web.toml'

# ==================================================================================================
# Supported PostgreSQL versions
MIN_SUPPORTED_VERSION: int = 10
MAX_SUPPORTED_VERSION: int = 18
DEFAULT_VERSION: int = 17

# ==================================================================================================
# Define bytes size
Ki: int = 1024
Mi: int = Ki ** 2
Gi: int = Ki ** 3
Ti: int = Ki ** 4
K10: int = 1000

# ==================================================================================================
# Timing Constants
SECOND: int = 1
MINUTE: int = 60 * SECOND
HOUR: int = 60 * MINUTE
DAY: int = 24 * HOUR
YEAR: int = int(365.25 * DAY)
