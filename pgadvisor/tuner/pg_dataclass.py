import logging
import string
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from pgadvisor.static.c_timezone import GetTimezone
from pgadvisor.static.vars import APP_NAME_UPPER, __VERSION__
from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS

__all__ = ['PG_TUNE_REQUEST', 'PG_TUNE_RESPONSE', 'SETTING_VALUE']
_logger = logging.getLogger(APP_NAME_UPPER)
SETTING_VALUE = int | float | str


# =============================================================================
class PG_TUNE_REQUEST(BaseModel):
    """ The PostgreSQL tuning request, initiated by the user's request for tuning up """
    options: PG_TUNE_USR_OPTIONS
    output_format: Literal['json', 'conf'] = Field(
        default='json',
        description="The rendering of the result: 'json' for the {settings, warnings} document, 'conf' for the "
                    "postgresql.conf content."
    )


# This section is managed by the application
class PG_TUNE_RESPONSE(BaseModel):
    """
    This class is to store the tuning result of the PostgreSQL system per each request: the ordered mapping
    of setting name to its recommended value, and the advisory warnings.
    """
    settings: dict[str, SETTING_VALUE] = Field(
        default_factory=dict,
        description='The recommended settings, in the order they are tuned. Later tuning overrides earlier ones.'
    )
    warnings: list[str] = Field(
        default_factory=list,
        description='The advisory warnings. A warning is never repeated.'
    )

    def add_warning(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)
        return None

    @staticmethod
    def out_display(value: SETTING_VALUE) -> str:
        """ Render a setting value as it is written in the postgresql.conf """
        output = str(value)
        if isinstance(value, float) and '.' in output:
            # Remove the trailing zeros but keep one digit after the dot
            output = output.rstrip('0')
            if output.endswith('.'):
                output = f'{output}0'
        if (isinstance(value, str) and not output.startswith("'") and
                (' ' in output or any(char in string.punctuation for char in output))):
            output = f"'{output}'"
        return output

    def disclaimer(self) -> str:
        dt = datetime.now(GetTimezone()[0])
        return f"""# Read this disclaimer before applying the tuning result
# ============================================================
# {APP_NAME_UPPER}-v{__VERSION__}: The tuning is generated at {dt}
# DISCLAIMER: This database tuning is a starting point computed from the machine and the
# workload profile only. It does not observe the running server. Please review it with
# your database administrator before applying it, and ensure that the server is capable
# of rolling back the changes if it is not working as expected.
# ============================================================
"""

    def _generate_content_as_conf(self) -> str:
        content: list[str] = [self.disclaimer(), '\n']
        for key, value in self.settings.items():
            content.append(f'{key} = {self.out_display(value)}\n')
        if self.warnings:
            content.append('\n')
            content.extend(f'# {message}\n' for message in self.warnings)
        return ''.join(content)

    def generate_content(self, output_format: Literal['json', 'conf'] = 'json') -> str | dict[str, Any]:
        match output_format:
            case 'json':
                return self.model_dump(mode='json')
            case 'conf':
                return self._generate_content_as_conf()
            case _:
                _msg = f'Unsupported output format: {output_format}'
                _logger.error(_msg)
                raise ValueError(_msg)
