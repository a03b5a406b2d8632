import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from constants import LOG_BACKUP_COUNT, LOG_MAX_BYTES


class ConsoleErrorFilter(logging.Filter):
    """Only let warnings and errors through to the console in service mode."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.WARNING


class LoggerSetup:
    def __init__(
        self,
        log_format: str,
        interactive: bool = True,
        log_file: Optional[Union[str, Path]] = None,
    ):
        self.log_format = log_format
        self.interactive = interactive
        self.log_file = log_file
        self.setup_logging()

    def setup_logging(self) -> None:
        """Setup logging configuration on the root logger.

        Interactive runs print progress to stdout. Unattended runs keep the
        full record in a rotating log file and only surface errors on stderr.
        """
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.INFO)
        if root_logger.handlers:
            return

        formatter = logging.Formatter(self.log_format)
        if self.interactive:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)
            return

        if self.log_file:
            file_handler = RotatingFileHandler(
                self.log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(ConsoleErrorFilter())
        root_logger.addHandler(console_handler)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name) if name else logging.getLogger()
