"""
Logging configuration that keeps health check and scrape traffic out of the access log.
"""

import logging
import logging.config
from typing import Any, Dict

QUIET_PATHS = ("/health", "/metrics")


class QuietPathAccessFilter(logging.Filter):
    """Filter to suppress health check and metrics scrape access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out health check and scrape requests from uvicorn access logs."""
        if record.name != "uvicorn.access":
            return True
        # uvicorn passes (client, method, path, http_version, status)
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3:
            path = str(args[2]).split("?", 1)[0]
            return path not in QUIET_PATHS
        message = record.getMessage()
        return not any(f"GET {path} " in message for path in QUIET_PATHS)


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with quiet path access log suppression."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "quiet_path_filter": {
                "()": QuietPathAccessFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["quiet_path_filter"]
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": level,
                "propagate": False
            },
            "kube_pod_mcp": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
