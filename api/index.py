import logging

from app.core.logging_config import configure_logging
from app.main import app

# Serverless platforms import this module directly, before the app lifespan runs
configure_logging()
logger = logging.getLogger(__name__)

logger.info("Serverless api/index.py initialized")

# This is the entry point for Vercel Serverless Functions
# It exports the FastAPI app instance
__all__ = ["app"]
