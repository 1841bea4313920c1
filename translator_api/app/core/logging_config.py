"""
Logging setup for the Translator API.

Records from the ``translator_api`` package go to stderr and,
when ``LOG_FILE`` is set, to that file as well.  Other libraries
keep their own configuration; uvicorn in particular installs its
handlers when the server starts.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Attach handlers to the ``translator_api`` logger and return it.

    ``level`` is a level name such as ``"DEBUG"`` in any case; unknown
    names fall back to ``INFO``.  The directory of ``logfile`` is
    created if needed.  Calling the function again only updates the
    level.
    """
    package_logger = logging.getLogger("translator_api")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if package_logger.handlers:
        return package_logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    return package_logger
