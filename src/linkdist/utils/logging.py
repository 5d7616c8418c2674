# src/linkdist/utils/logging.py
import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Optional[str] = None, level: Union[int, str] = logging.INFO) -> None:
    """Set up logging configuration

    Progress and diagnostics go to stdout; a copy is written to ``log_file``
    when one is given.

    Args:
        log_file: Path to log file (optional)
        level: Logging level, as a number or a name such as "DEBUG"
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not isinstance(level, int) or isinstance(level, bool):
        level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers
    )

    # Rendering backends are noisy at INFO
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured")
