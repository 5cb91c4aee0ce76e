import logging
import sys
from typing import Any, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger("mrr")


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging on stderr; stdout carries the report."""
    logging.basicConfig(
        level=(level or "INFO").upper(),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def log_action(
    action_type: str,
    message: str,
    level: str = "info",
    **kwargs: Any
) -> None:
    """Standardized action logging."""
    log_data = {
        "action": action_type,
        "message": message,
        **kwargs
    }

    if level == "error":
        logger.error(log_data)
    elif level == "warning":
        logger.warning(log_data)
    else:
        logger.info(log_data)
