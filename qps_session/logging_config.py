"""
Logging configuration for the QPS session client
"""

import logging
import logging.config
import re
from typing import Any, Dict

XRFKEY_PATTERN = re.compile(r"(xrfkey=)[^&\s]+", re.IGNORECASE)


class XrfkeyFilter(logging.Filter):
    """Mask anti-forgery tokens in request paths."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "xrfkey=" in message.lower():
            record.msg = XRFKEY_PATTERN.sub(r"\1****", message)
            record.args = None
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with xrfkey masking."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "xrfkey_filter": {
                "()": XrfkeyFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["xrfkey_filter"]
            }
        },
        "loggers": {
            "qps_session": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "httpx": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            }
        }
    }


def setup_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
