import logging
import logging.config
import os

LOG_FORMATS = ("default", "json")

# Loggers that get their own handlers instead of propagating to root
DEDICATED_LOGGERS = ("catalog_service", "uvicorn", "uvicorn.error", "uvicorn.access")


def build_logging_config(log_level=logging.INFO, log_dir="logs", log_format="default") -> dict:
    """
    dictConfig payload: console (plain or JSON) plus a rotating app.log.

    uvicorn loggers stay at INFO whatever the application level is.
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {log_format!r}, expected one of {LOG_FORMATS}")
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())

    handlers = ["console", "file"]
    loggers = {
        name: {
            "handlers": handlers,
            "level": log_level if name == "catalog_service" else "INFO",
            "propagate": False,
        }
        for name in DEDICATED_LOGGERS
    }
    loggers["root"] = {"handlers": handlers, "level": log_level, "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": log_format,
                "level": log_level,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "default",
                "level": log_level,
                "filename": os.path.join(log_dir, "app.log"),
                "maxBytes": 10 * 1024 * 1024, # 10MB
                "backupCount": 5,
                "encoding": "utf8",
            },
        },
        "loggers": loggers,
    }


def setup_logging(log_level=logging.INFO, log_dir="logs", log_format="default"):
    """
    Configures logging for the application.
    """
    config = build_logging_config(log_level, log_dir, log_format)
    os.makedirs(log_dir, exist_ok=True)

    logging.config.dictConfig(config)
    logging.getLogger(__name__).info(
        f"Logging configured: level={logging.getLevelName(config['loggers']['root']['level'])}, "
        f"format={log_format}, file={config['handlers']['file']['filename']}"
    )
