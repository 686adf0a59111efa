# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import Settings, settings

# Optional: capture warnings.* into logging
logging.captureWarnings(True)

_INIT_FLAG = "_handle_claim_inited"


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so file handlers sharing the record keep plain levelnames.
        colored = logging.makeLogRecord(record.__dict__)
        lvl = record.levelname
        colored.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        return super().format(colored)


def init_logger(s: Settings = settings) -> logging.Logger:
    """
    Idempotent logger init:
    - Always logs to stdout, level names colored.
    - Writes to LOG_DIR/LOG_FILE_NAME only when LOG_TO_FILE is True,
      rotating by size (LOG_MAX_BYTES / LOG_BACKUP_COUNT).
    - Respects LOG_LEVEL.
    """
    root = logging.getLogger()
    if getattr(root, _INIT_FLAG, False):
        return logging.getLogger(s.LOGGER_NAME)

    level = getattr(logging, (s.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    text_fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    date_fmt = "%Y-%m-%dT%H:%M:%S%z"

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(ColoredFormatter(text_fmt, datefmt=date_fmt))
    root.addHandler(ch)

    if s.LOG_TO_FILE:
        os.makedirs(s.LOG_DIR, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(s.LOG_DIR, s.LOG_FILE_NAME),
            maxBytes=s.LOG_MAX_BYTES,
            backupCount=s.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(text_fmt, datefmt=date_fmt))
        root.addHandler(fh)

    # redis-py logs every reconnect attempt at INFO while the server is down
    logging.getLogger("redis").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    setattr(root, _INIT_FLAG, True)
    logger = logging.getLogger(s.LOGGER_NAME)
    logger.debug("logger.init level=%s file=%s", logging.getLevelName(level), s.LOG_TO_FILE)
    return logger


def reset_logger() -> None:
    """Drop handlers installed by init_logger so the next call starts fresh."""
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    if hasattr(root, _INIT_FLAG):
        delattr(root, _INIT_FLAG)
