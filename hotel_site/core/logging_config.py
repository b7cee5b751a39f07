import os
import sys

from loguru import logger

from hotel_site.core.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = "{time} | {level} | {message}"

os.makedirs(LOG_DIR, exist_ok=True)

# Remove default handler
logger.remove()

# Console, for uvicorn runs
logger.add(sys.stderr, level=LOG_LEVEL, format=LOG_FORMAT)

# General application log
logger.add(
    f"{LOG_DIR}/app.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    format=LOG_FORMAT
)


def _category_sink(filename: str, log_type: str, retention: str):
    """File that only receives records bound with log_type=<log_type>."""
    logger.add(
        f"{LOG_DIR}/{filename}",
        rotation="1 week",
        retention=retention,
        level="INFO",
        enqueue=True,
        filter=lambda record: record["extra"].get("log_type") == log_type,
        format=LOG_FORMAT
    )


# Admin activity: content edits, settings saves, password changes
_category_sink("admin.log", "admin", "4 weeks")
# Change notifications and subscriptions
_category_sink("realtime.log", "realtime", "2 weeks")
# Image uploads and deletes
_category_sink("uploads.log", "upload", "4 weeks")

# Error logs
logger.add(
    f"{LOG_DIR}/errors.log",
    rotation="1 week",
    retention="8 weeks",
    level="ERROR",
    enqueue=True,
)


def get_logger():
    return logger
