import os
import sys
from pathlib import Path

from loguru import logger as loguru_logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[server]}</magenta> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[server]} | {name}:{function}:{line} - {message}"

# (file name, minimum level)
FILE_SINKS = (
    ("app.log", "DEBUG"),
    ("error.log", "ERROR"),
)


class Logger:
    """Process-wide loguru setup shared by the MCP servers, drivers and scripts.

    stdout is reserved for stdio JSON-RPC traffic, so the console sink is
    stderr. Records carry a ``server`` extra; the dispatcher binds it to the
    server name and everything else logs as "-".
    """

    def __init__(self):
        self.project_root = Path(__file__).parent.parent
        self.logs_dir = Path(os.getenv("LOG_DIR") or self.project_root / "logs")
        self.level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.file_enabled = os.getenv(
            "LOG_FILE_ENABLED", "true").lower() == "true"

        loguru_logger.remove()
        loguru_logger.configure(extra={"server": "-"})

        loguru_logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=self.level,
            colorize=True
        )

        if self.file_enabled:
            self.add_file_sinks()

    def add_file_sinks(self):
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        for file_name, level in FILE_SINKS:
            loguru_logger.add(
                self.logs_dir / file_name,
                format=FILE_FORMAT,
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
                encoding="utf-8"
            )


logger_instance = Logger()
logger = loguru_logger
