"""
This module converts between the PostgreSQL size strings (``'16MB'``, ``'2GB'``, ``'512kB'``) and the
integer amount of KiB used by every memory and WAL calculator. All arithmetic is done on KiB with
integer flooring; the display unit is the largest binary unit (TB, GB, MB) that fits.

"""
import logging
import re
from math import floor

from pgadvisor.static.vars import APP_NAME_UPPER, Ki, Mi, Gi, Ti

__all__ = ['MalformedSizeError', 'SIZE_UNIT_MAP', 'parse_size', 'format_size', 'gib_to_kib']
_logger = logging.getLogger(APP_NAME_UPPER)

# ==================================================================================================
SIZE_UNIT_MAP: dict[str, int] = {
    'KB': Ki,
    'kB': Ki,  # PostgreSQL spelling of the kilobyte unit
    'MB': Mi,
    'GB': Gi,
    'TB': Ti,
}
_SIZE_PATTERN = re.compile(r'(\d+)(KB|kB|MB|GB|TB)')


class MalformedSizeError(ValueError):
    """ Raised when a text cannot be interpreted as a PostgreSQL size string """
    pass


def parse_size(text: str) -> int:
    """
    Convert a size string into its amount of KiB.

    Arguments:
    ---------
    text: str
        The size string: a non-negative integer immediately followed by one of the unit in
        :var:`SIZE_UNIT_MAP` (e.g. '512kB', '16MB', '2GB', '1TB'). No whitespace or decimals.

    Returns:
    -------
    int
        The amount of KiB.

    """
    match = _SIZE_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        _msg: str = f'Invalid size string: {text!r}. Expected <integer><KB|kB|MB|GB|TB>.'
        _logger.error(_msg)
        raise MalformedSizeError(_msg)
    value, unit = match.groups()
    return int(value) * SIZE_UNIT_MAP[unit] // Ki


def format_size(kbytes: int | float) -> str:
    """ Render an amount of KiB in the largest binary unit it reaches; the quotient is floored """
    kbytes = floor(kbytes)
    if kbytes >= Ti // Ki:
        return f'{kbytes // (Ti // Ki)}TB'
    if kbytes >= Gi // Ki:
        return f'{kbytes // (Gi // Ki)}GB'
    if kbytes >= Mi // Ki:
        return f'{kbytes // (Mi // Ki)}MB'
    return f'{kbytes}kB'


def gib_to_kib(gib: int | float) -> int:
    """ Convert an amount of GiB into KiB, rounded half-up to the nearest integer """
    return floor(gib * Gi / Ki + 0.5)
