"""
This contains some common functions during the general tuning

"""
import logging
from typing import Any, Callable

from pgadvisor.static.vars import APP_NAME_UPPER

__all__ = ['type_validation']
_logger = logging.getLogger(APP_NAME_UPPER)


def type_validation(profile: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    """ Type validation for the profile data. """
    for key, tune_entry in profile.items():
        # Narrow check
        assert isinstance(key, str) and key and ' ' not in key, \
            f'The key representation {key} is empty or contain whitespace.'
        assert isinstance(tune_entry, dict), f'The tuning key body of {key} is not a dictionary.'

        # Body check
        assert 'tune_op' in tune_entry and isinstance(tune_entry['tune_op'], Callable), \
            f'{key}: The tuning operation must be a function.'
        assert not (tune_entry.get('stage', False) and tune_entry.get('merge', False)), \
            f'{key}: A tuning entry cannot be staged and merged at the same time.'
    _logger.debug(f'The tuning profile of {len(profile)} entries is validated.')
    return profile
