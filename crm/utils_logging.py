from __future__ import annotations

"""Logging utilities.

Set up a consistent logging configuration to both console and a file
in the `logs/` directory. Only the root logger is configured, once per
process; Streamlit reruns call this repeatedly and must not stack handlers.
"""

import logging
from pathlib import Path


def configure_logging(log_dir: Path, debug: bool = False) -> None:
    """Configure root logging for the application.

    - Creates the log directory if missing
    - Streams logs to both stdout and `logs/crm.log`
    - Uses DEBUG level if `debug=True`, otherwise INFO
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "crm.log"

    level = logging.DEBUG if debug else logging.INFO
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file, mode="a", encoding="utf-8"),
        ],
    )
    # basicConfig is a no-op once handlers exist; keep the level in sync
    logging.getLogger().setLevel(level)
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
