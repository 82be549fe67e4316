# mediahub_backend/app/logging_config.py

import logging
import sys

def setup_logging(level: str = "INFO"):
    """
    Configures the root logger for the application.
    Call once at process start, before the server boots.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # Silence noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
