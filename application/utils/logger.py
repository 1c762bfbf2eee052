import logging
from logging.handlers import RotatingFileHandler
from config import constants

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)-8s - [%(module)s.%(funcName)s:%(lineno)d] - %(message)s"


class ColoredFormatter(logging.Formatter):
    """
    A custom formatter to add colors to log messages based on log level.
    """
    GREY = "\x1b[90m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"

    FORMATS = {
        logging.DEBUG: GREY + LOG_FORMAT + RESET,
        logging.INFO: GREEN + LOG_FORMAT + RESET,
        logging.WARNING: YELLOW + LOG_FORMAT + RESET,
        logging.ERROR: RED + LOG_FORMAT + RESET,
        logging.CRITICAL: BOLD_RED + LOG_FORMAT + RESET
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, LOG_FORMAT)
        formatter = logging.Formatter(log_fmt, datefmt='%Y-%m-%d %H:%M:%S')
        return formatter.format(record)


class AppLogger:
    """
    A wrapper class to simplify the creation and configuration of a logger.
    """

    def __init__(self, level=logging.INFO, log_file=None):
        """
        Initializes and configures the root logger for the entire application.

        Args:
            level (int, optional): The master logging level. Defaults to logging.INFO.
            log_file (str, optional): Path to a file to save logs.
        """
        self.logger = logging.getLogger()
        self.logger.setLevel(level)

        # Clear any existing handlers to prevent duplicates from previous runs or basicConfig.
        if self.logger.hasHandlers():
            self.logger.handlers.clear()

        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(ColoredFormatter())
        self.logger.addHandler(ch)

        if log_file:
            fh = RotatingFileHandler(
                log_file,
                mode='a',
                maxBytes=constants.LOG_MAX_BYTES,
                backupCount=constants.LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            self.logger.addHandler(fh)
