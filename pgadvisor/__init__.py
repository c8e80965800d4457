import os

from pgadvisor.static.vars import LOG_FILE_PATH
from pgadvisor.utils.log import BuildLogger

# ==================================================================================================
# The logger is only built when the configuration is reachable from the working directory
if os.path.exists(LOG_FILE_PATH):
    BuildLogger(LOG_FILE_PATH)
