import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(logging.WARNING)  # keep third-party libraries quiet
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(getattr(h, "_asset_tracker", False) for h in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        stream_handler._asset_tracker = True
        root.addHandler(stream_handler)

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=10 * 1024 * 1024, backupCount=5
            )
            file_handler.setFormatter(formatter)
            file_handler._asset_tracker = True
            root.addHandler(file_handler)

    logging.getLogger("asset_tracker").setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger(__name__).info("Logging is set up.")
    return root
