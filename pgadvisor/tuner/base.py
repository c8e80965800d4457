import logging
from typing import Any, Callable, Mapping

from pgadvisor.static.vars import APP_NAME_UPPER
from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS
from pgadvisor.tuner.pg_dataclass import PG_TUNE_RESPONSE

__all__ = ['GeneralOptimize']
_logger = logging.getLogger(APP_NAME_UPPER)
_TUNE_OP = Callable[[dict[str, Any], dict[str, Any], PG_TUNE_USR_OPTIONS], Any]


# ================================================================================
def GeneralOptimize(options: PG_TUNE_USR_OPTIONS, response: PG_TUNE_RESPONSE,
                    tuning_items: dict[str, dict[str, Any]]) -> None:
    """
    Run the ordered tuning profile over the response. Each entry calls its ``tune_op`` with the group cache
    (the staged, not yet published results), the global cache (the settings published so far) and the user
    options. Then, depending on the entry:

    - ``stage``: the result is kept in the group cache under the entry key and not published.
    - ``merge``: the result is a mapping whose items are published in their order (later wins).
    - otherwise: the result is published under the entry key. A None result skips the key entirely.

    """
    global_cache: dict[str, Any] = response.settings
    group_cache: dict[str, Any] = {}

    # Batched Logging
    _info_log = ['\n====== Start the tuning process on the database configuration ======']
    _warn_log = []
    for key, tune_entry in tuning_items.items():
        tune_op: _TUNE_OP = tune_entry['tune_op']
        result = tune_op(group_cache, global_cache, options)

        if tune_entry.get('stage', False):
            group_cache[key] = result
            _info_log.append(f"Group '{key}' has been staged as {result}.")
            continue

        if tune_entry.get('merge', False):
            assert isinstance(result, Mapping), f'The merging result of {key} must be a mapping.'
            if not result:
                _info_log.append(f"Group '{key}' is empty -> Nothing to merge.")
            for sub_key, value in result.items():
                before = global_cache.get(sub_key, None)
                global_cache[sub_key] = value
                _info_log.append(f"Variable '{sub_key}' has been tuned from {before} to {value} by the group '{key}'.")
            continue

        if result is None:
            _warn_log.append(f"WARNING: The variable '{key}' is not applicable on this system -> Skipping and not "
                             f"adding to the final result.")
            continue
        before = global_cache.get(key, None)
        global_cache[key] = result
        _info_log.append(f"Variable '{key}' has been tuned from {before} to {result}.")

    # Batched Logging Display
    if _info_log:
        _logger.info('\n'.join(_info_log))
    if _warn_log:
        _logger.warning('\n'.join(_warn_log))
    return None
