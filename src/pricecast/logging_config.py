import copy
import logging
import logging.config
import os


DEFAULT_LOG_DIR = "logs"

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": "WARNING",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": os.path.join(DEFAULT_LOG_DIR, "pricecast.log"),
            "maxBytes": 5_242_880,
            "backupCount": 3,
            "formatter": "standard",
            "level": "DEBUG",
        },
    },
    "loggers": {
        "httpx": {"level": "WARNING"},
        "httpcore": {"level": "WARNING"},
    },
    "root": {
        "level": "INFO",
        "handlers": ["console", "file"],
    },
}


def setup_logging(log_dir: str = DEFAULT_LOG_DIR, console_level: str | None = None):
    """Apply the dictConfig, writing the rotating log file under ``log_dir``."""
    config = copy.deepcopy(LOGGING_CONFIG)
    config["handlers"]["file"]["filename"] = os.path.join(log_dir, "pricecast.log")
    if console_level:
        config["handlers"]["console"]["level"] = console_level
    os.makedirs(log_dir, exist_ok=True)
    logging.config.dictConfig(config)
