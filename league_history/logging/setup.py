import re
import sys
import logging
from typing import Any, Optional

from loguru import logger

from league_history.config.settings import get_settings

# Provider member ids look like "{961895BA-00CF-4DC9-8A38-61A2924B6643}"
MEMBER_ID_PATTERN = re.compile(r"\{([0-9A-Fa-f]{4})[0-9A-Fa-f-]{28}([0-9A-Fa-f]{4})\}")


def mask_member_id(value: str) -> str:
    """Shortens provider member ids to their first and last four characters."""
    return MEMBER_ID_PATTERN.sub(r"{\1****\2}", value)


def member_id_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask member ids in log records."""
    record["message"] = mask_member_id(record["message"])

    if "extra" in record and isinstance(record["extra"], dict):
        for key, value in record["extra"].items():
            if isinstance(value, str):
                record["extra"][key] = mask_member_id(value)

    return True  # Keep the record after masking


def setup_logging(level: Optional[str] = None) -> None:
    """Configures Loguru logger based on engine settings."""
    level = (level or get_settings().log_level).upper()
    logger.remove()  # Remove default handler

    # Basic console logging
    logger.add(
        sys.stderr,  # Output to standard error
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,  # Better tracebacks
        diagnose=True,  # More detailed error info
        filter=member_id_filter,
    )

    logger.info(f"Logging initialized with level: {level}")

    # Intercept standard logging messages
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            # Get corresponding Loguru level if it exists
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.info("Standard logging intercepted.")
