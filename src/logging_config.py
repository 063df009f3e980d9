import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "adoption_engine.log"
DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """Configure root logging for the accelerator ROI engine.

    Writes everything from DEBUG up to a rotating file in *log_dir*
    (``logs/`` by default) and *log_level* and above to the console.
    Calling it again once handlers exist does nothing.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    log_dir = log_dir or DEFAULT_LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    # File handler keeps per-sprint DEBUG detail (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILENAME, maxBytes=5 * 1024 * 1024, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Root passes everything to the handlers, which filter by their own level.
    root_logger.setLevel(logging.DEBUG)

    logging.getLogger(__name__).info(
        "Logging initialized (level=%s, file=%s)", log_level, log_dir / LOG_FILENAME
    )
