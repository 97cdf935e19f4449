import logging

from .config import settings
from .entrypoints.fastapi_app import create_app

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(levelname)s:%(name)s:%(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)

# uvicorn domainrank.main:app
app = create_app()
