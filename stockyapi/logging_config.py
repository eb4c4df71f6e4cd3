import logging.config
import sys

# 가격 갱신은 executor 스레드에서 돌기 때문에 스레드 이름을 함께 남김
SERVICE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)-18s | %(name)s | %(message)s"


def setup_logging(log_level: str = "INFO", sql_echo: bool = False):
    log_level = log_level.upper()

    LOGGING_CONFIG = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "service": {"format": SERVICE_FORMAT},
            "traceback": {
                "format": SERVICE_FORMAT + "\n  at %(pathname)s:%(lineno)d",
            },
        },
        "handlers": {
            "console": {
                "formatter": "service",
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
            },
            "error_console": {
                "formatter": "traceback",
                "class": "logging.StreamHandler",
                "stream": sys.stderr,
                "level": "WARNING",
            },
        },
        "root": {"handlers": ["console"], "level": log_level},
        "loggers": {
            "stockyapi": {
                "handlers": ["console", "error_console"],
                "level": log_level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console", "error_console"],
                "level": log_level,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": False,
            },
            # DEBUG일 때만 SQL 출력
            "sqlalchemy.engine": {
                "level": "INFO" if sql_echo else "WARNING",
            },
        },
    }
    logging.config.dictConfig(LOGGING_CONFIG)
