"""
This module contains the TIMEZONE for the project. We use the :mod:`zoneinfo` module (Python 3.9+)
rather than pytz; it reads the system time zone data and falls back to the first-party tzdata
package when the system has none.

"""

from zoneinfo import ZoneInfo

__all__ = ['GetTimezone']
# ==================================================================================================
__ZONE: str = "UTC"  # 'UTC' or 'Europe/Paris' or 'Asia/Saigon'
__TIMEZONE: ZoneInfo = ZoneInfo(__ZONE)


def GetTimezone() -> tuple[ZoneInfo, str]:
    return __TIMEZONE, __ZONE
