from loguru import logger
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

def setup_logging():
    """
    Configure loguru logger with rotating file sinks.

    The log directory and the level of the main sink are read from
    SMC_SIGNAL_LOG_DIR and SMC_SIGNAL_LOG_LEVEL.
    """
    log_dir = Path(os.getenv("SMC_SIGNAL_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_level = os.getenv("SMC_SIGNAL_LOG_LEVEL", "DEBUG")

    # Remove default stderr handler, the console belongs to rich
    logger.remove()

    # All logs
    logger.add(
        log_dir / "app.log",
        rotation="10 MB",
        retention="1 month",
        compression="zip",
        format=LOG_FORMAT,
        level=log_level,
        backtrace=True,
        diagnose=True,
    )

    # Errors only
    logger.add(
        log_dir / "error.log",
        rotation="10 MB",
        retention="1 month",
        compression="zip",
        format=LOG_FORMAT,
        level="ERROR",
        backtrace=True,
        diagnose=True,
    )

    return logger

# Initialize logger
logger = setup_logging()
