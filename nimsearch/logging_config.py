import logging
import sys
from pathlib import Path

from nimsearch.config import LOG_DIR


def setup_logging(debug=False, log_dir=LOG_DIR):
    # Create logs directory if it doesn't exist
    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Set the root logger to WARNING to suppress verbose logs from dependencies
    logging.getLogger().setLevel(logging.WARNING)

    # Set up our application logger
    app_logger = logging.getLogger("nimsearch")
    app_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Drop handlers from an earlier call so reconfiguring doesn't duplicate output
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    console_formatter = logging.Formatter('%(message)s')
    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Console handler - less verbose
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(logging.INFO)

    # File handler - more detailed
    file_handler = logging.FileHandler(logs_dir / "nimsearch.log")
    file_handler.setFormatter(file_formatter)
    file_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    app_logger.addHandler(console_handler)
    app_logger.addHandler(file_handler)
