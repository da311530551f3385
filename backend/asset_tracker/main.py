import logging

from sqlalchemy.engine import Engine

from .core.database import create_db_and_tables
from .core.init_db import init_db
from .core.logging_config import setup_logging
from .core.settings import settings

logger = logging.getLogger(__name__)

def bootstrap(bind: Engine | None = None):
    """Prepare logging, the schema and the reference data before the first service call."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    create_db_and_tables(bind)
    init_db(bind)
    logger.info("%s ready", settings.PROJECT_NAME)
