import logging

from fastapi import FastAPI

from taskpad.core.config import settings
from taskpad.core.database import engine, Base
from taskpad.core.errors import register_exception_handlers
from taskpad.core.logging_setup import setup_logging
from taskpad.models import task, user  # noqa: F401  (tables enregistrées sur Base)
from taskpad.routers import health, auth, tasks

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Taskpad API",
    version="1.0.0"
)

register_exception_handlers(app)

# Routes
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(tasks.router)

logger.info("Taskpad API ready (env=%s)", settings.APP_ENV)
