import logging

from pgadvisor.static.vars import APP_NAME_UPPER
from pgadvisor.tuner.base import GeneralOptimize
from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS
from pgadvisor.tuner.pg_dataclass import PG_TUNE_REQUEST, PG_TUNE_RESPONSE
from pgadvisor.tuner.profile.gtune import DB_CONFIG_PROFILE, DB_DEFAULT_SETTINGS
from pgadvisor.tuner.profile.planner import warning_messages
from pgadvisor.utils.timing import time_decorator

__all__ = ['optimize', 'derive_settings']
_logger = logging.getLogger(APP_NAME_UPPER)


# ==================================================================================================
@time_decorator
def optimize(request: PG_TUNE_REQUEST | PG_TUNE_USR_OPTIONS) -> PG_TUNE_RESPONSE:
    """
    Derive the recommended PostgreSQL settings from the user options. The result is a fresh response on every
    call; identical options always produce identical settings and warnings.
    """
    options: PG_TUNE_USR_OPTIONS = request.options if isinstance(request, PG_TUNE_REQUEST) else request
    _logger.info(f'Start tuning the database configuration for PostgreSQL {options.version} on {options.os} '
                 f'with the {options.workload} workload.')

    # [01]: Start from the baseline settings
    response = PG_TUNE_RESPONSE(settings=dict(DB_DEFAULT_SETTINGS))

    # [02]: Perform the general tuning on the PostgreSQL configuration
    GeneralOptimize(options, response, tuning_items=DB_CONFIG_PROFILE)

    # [03]: Attach the advisory warnings
    for message in warning_messages(options.memory_gb):
        response.add_warning(message)
    if response.warnings:
        _logger.warning('\n'.join(response.warnings))
    return response


def derive_settings(options: PG_TUNE_USR_OPTIONS) -> dict:
    """ Return the tuning result as a {settings, warnings} document """
    return optimize(options).generate_content(output_format='json')
