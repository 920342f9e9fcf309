import sys
from logging.config import dictConfig

from daily_digest.core.config import settings

LOG_FORMAT = "%(levelprefix)s %(asctime)s [%(name)s] %(message)s"
ACCESS_FORMAT = '%(levelprefix)s %(asctime)s [%(name)s] "%(request_line)s" %(status_code)s'
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are noisy below these levels
QUIET_LOGGERS = {
    "googleapiclient.discovery_cache": "ERROR",
    "google_genai": "WARNING",
    "httpx": "WARNING",
}


def build_logging_config(level: str = "DEBUG") -> dict:
    """Uvicorn-compatible dictConfig with ``level`` applied to the daily_digest logger."""
    loggers = {
        "root": {"handlers": ["server"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"handlers": ["server"], "level": "INFO", "propagate": False},
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        "daily_digest": {"handlers": ["digest"], "level": level.upper(), "propagate": False},
    }
    for name, quiet_level in QUIET_LOGGERS.items():
        loggers[name] = {"handlers": ["server"], "level": quiet_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"()": "uvicorn.logging.DefaultFormatter", "fmt": LOG_FORMAT, "datefmt": DATE_FORMAT},
            "access": {"()": "uvicorn.logging.AccessFormatter", "fmt": ACCESS_FORMAT},
        },
        "handlers": {
            "server": {"class": "logging.StreamHandler", "formatter": "default", "stream": sys.stderr},
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": sys.stdout},
            "digest": {"class": "logging.StreamHandler", "formatter": "default", "stream": sys.stdout},
        },
        "loggers": loggers,
    }


def setup_logging(level: str | None = None) -> None:
    """Configures application-wide logging using dictConfig."""
    dictConfig(build_logging_config(level or settings.log_level))
