# logger_config.py

import logging
import os
import sys
from datetime import datetime

import config


def setup_logger(log_type: str, log_dir: str = config.LOG_DIR, level=logging.DEBUG):
    """
    Configures the root logger to write to both the console and a file.
    Each call creates a new timestamped log file, e.g. 'server_20250101_120000.log',
    inside `log_dir`.  Call it once, at the entry point.

    Args:
        log_type (str): Prefix for the log file, e.g. 'server'.
    """
    # 1. create a unique log file name
    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filepath = os.path.join(log_dir, f"{log_type}_{timestamp}.log")

    # 2. configure the root logger
    logger = logging.getLogger()
    logger.setLevel(level)

    # 3. prevent duplicate handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    # 4. file handler: everything
    file_handler = logging.FileHandler(log_filepath, mode="w")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
    ))

    # 5. console handler: INFO and above
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.info(f"Logger initialized. Logs will be saved to: {log_filepath}")
    return log_filepath
