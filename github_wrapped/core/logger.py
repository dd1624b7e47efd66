import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from github_wrapped.core.config import Settings, settings as default_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or default_settings
    logger.remove()

    # Formatting of the logger
    if settings.LOG_FORMAT == "json":
        log_format = (
            "{{"
            '"timestamp": "{time:YYYY-MM-DD HH:mm:ss.SSS}",'
            '"level": "{level: <8}",'
            '"message": "{message}",'
            '"module": "{name}",'
            '"line": "{line}",'
            '"function": "{function}",'
            '"extra": "{extra}"'
            "}}"
        )
    else:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level> | {extra}"
        )

    # console handler
    logger.add(
        sys.stdout,
        format=log_format,
        level=settings.LOG_LEVEL,
        colorize=(settings.LOG_FORMAT == "pretty"),
        backtrace=True,
        diagnose=False,
    )

    # file handler, only when a log directory is configured
    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "wrapped_{time:YYYY-MM-DD}.log",
            format=log_format,
            level=settings.LOG_LEVEL,
            rotation="00:00",  # Rotate at midnight
            retention="7 days",
            compression="zip",
            backtrace=True,
            diagnose=False,
        )

    logger.info(
        "Logging initialized",
        extra={
            "log_level": settings.LOG_LEVEL,
            "log_format": settings.LOG_FORMAT,
        },
    )


# We can use it to get a logger with the given name
def get_logger(name: str):
    """Get a logger with the given name."""
    return logger.bind(name=name)
