import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from farmops.core.config import settings

SERVICE_NAME = "farmops-backend"

# attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def json_formatter(record: logging.LogRecord) -> str:
    log = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "level": record.levelname,
        "service": SERVICE_NAME,
        "logger": record.name,
        "message": record.getMessage(),
    }

    for key, value in record.__dict__.items():
        if key in _RESERVED or key.startswith("_"):
            continue
        log[key] = value

    if record.exc_info:
        log["exception"] = logging.Formatter().formatException(record.exc_info)

    return json.dumps(log, default=str)


class JSONFormatter(logging.Formatter):
    def format(self, record):
        return json_formatter(record)


logger = logging.getLogger("farmops")
logger.setLevel(settings.LOG_LEVEL)
logger.propagate = False

json_f = JSONFormatter()

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(json_f)
    logger.addHandler(console_handler)

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, "farmops.json.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
        )
        file_handler.setFormatter(json_f)
        logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Child logger of ``farmops`` so it shares the JSON handlers."""
    return logger.getChild(name)
