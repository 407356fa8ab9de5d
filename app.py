# app.py
import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from config import Settings, configure_logging, load_settings
from db import init_db
from routes import contact, pages, projects, upload
from storage.blobs import UPLOAD_ROUTE

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Midwave Studio")

    # ---------------------------
    # App Config
    # ---------------------------
    app.state.config = settings
    init_db(settings.db_path)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)

    # ---------------------------
    # Routes
    # ---------------------------
    app.mount(UPLOAD_ROUTE, StaticFiles(directory=str(settings.upload_dir)), name="uploads")
    app.include_router(projects.router)
    app.include_router(upload.router)
    app.include_router(contact.router)
    app.include_router(pages.router)

    logger.info("app.started db=%s uploads=%s", settings.db_path, settings.upload_dir)
    return app


app = create_app()
