import logging
from typing import Optional

from time_on_task.config.settings import settings

def setup_logging(level: Optional[str] = None):
    """Configure logging for the application"""
    settings.validate_paths()

    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(settings.log_file),
            logging.StreamHandler()  # Also log to console
        ]
    )

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized")
