import logging.config

from .consts import LOG_FILE
from .utils import canonicalify, ensure_path

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] [%(name)s] - %(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": logging.INFO,
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": logging.DEBUG,
            "formatter": "default",
            "filename": LOG_FILE,
            "maxBytes": 1024 * 1024,  # 1MB
            "backupCount": 5,
        },
    },
    "loggers": {
        "settingsform": {
            "handlers": ["console", "file"],
            "level": logging.DEBUG,
            "propagate": True,
        }
    },
}


def setup(logfile=None):
    config = {**LOGGING_CONFIG, "handlers": dict(LOGGING_CONFIG["handlers"])}
    if logfile:
        config["handlers"]["file"] = {
            **LOGGING_CONFIG["handlers"]["file"],
            "filename": str(logfile),
        }

    p = canonicalify(config["handlers"]["file"]["filename"])
    ensure_path(p.parent)

    logging.config.dictConfig(config)


logger = logging.getLogger("settingsform")
