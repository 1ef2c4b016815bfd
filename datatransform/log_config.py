import logging
import sys
import os
from datetime import datetime
from typing import Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> Optional[str]:
    """
    Global logging setup:
    1. Always log to stdout
    2. If log_dir is given, create it and add one file per run (named by start time)

    Returns:
        Path of the log file, or None when logging to the console only
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    log_filepath = None
    folder_created = False

    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)
            folder_created = True
        run_time = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_filepath = os.path.join(log_dir, f"datatransform_{run_time}.log")
        handlers.append(logging.FileHandler(log_filepath, encoding="utf-8", mode="w"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True
    )

    logger = logging.getLogger(__name__)
    if folder_created:
        logger.info("Created log directory %s", log_dir)
    if log_filepath:
        logger.info("Logging to %s", log_filepath)
    return log_filepath
