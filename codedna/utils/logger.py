from loguru import logger
from pathlib import Path
from typing import Optional
import sys


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = "logs/app.log"):
    """Setup logging configuration.

    Logs go to stderr so that JSON written to stdout by the CLI stays clean.
    Pass ``log_file=None`` to skip the rotating file sink.
    """
    # Remove default logger
    logger.remove()

    # Console logger
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True,
    )

    # File logger
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]}:{function}:{line} - {message}",
            level=log_level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )

    return logger


# Every record carries a component name, even when logged without bind()
logger.configure(extra={"component": "codedna"})

app_logger = logger
