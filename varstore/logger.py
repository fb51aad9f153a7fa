import logging
import sys

# fetch log level from values.json or env
from varstore import config
from pythonjsonlogger.jsonlogger import JsonFormatter

# shared by every varstore module
log = logging.getLogger("varstore")

log_level = config.get("LOG_LEVEL", "INFO").upper()
log.setLevel(log_level)

# stderr, so varctl output on stdout stays clean for scripts
logHandler = logging.StreamHandler(sys.stderr)

# standard log attributes plus whatever is passed through `extra`,
# e.g. {"variable": ..., "path": ..., "error": ...}
formatter = JsonFormatter(
    '%(asctime)s %(name)s %(levelname)s %(message)s'
)
logHandler.setFormatter(formatter)

if not log.handlers:
    log.addHandler(logHandler)
