"""Logging configuration for the skill exchange engine."""
import logging
import logging.handlers
from pathlib import Path

# Engine loggers; their level can be tuned apart from the root level
ENGINE_LOGGER = "src.matching"

# SQL echo at INFO drowns out per-query match logging
QUIET_LOGGERS = ("sqlalchemy", "sqlalchemy.engine")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _to_level(name: str | None, fallback: int) -> int:
    if not name:
        return fallback
    return getattr(logging, name.upper(), fallback)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    matching_level: str | None = None,
) -> None:
    """Configure application-wide logging.

    Call once at startup from the CLI.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path for rotating file handler
        matching_level: Level for the matching engine loggers. Defaults to
            ``level``; set DEBUG to see per-query candidate counts without
            turning on debug output everywhere else.
    """
    root = logging.getLogger()

    # Avoid duplicate handlers on repeated calls
    if root.handlers:
        return

    root_level = _to_level(level, logging.INFO)
    root.setLevel(root_level)
    logging.getLogger(ENGINE_LOGGER).setLevel(_to_level(matching_level, root_level))

    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=5 * 1024 * 1024,  # 5 MB
                backupCount=3,
            )
        )

    for handler in handlers:
        handler.setFormatter(fmt)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
