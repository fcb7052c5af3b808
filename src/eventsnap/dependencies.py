"""Dependency wiring helpers."""

from fastapi import FastAPI

from .config import AppConfig
from .events.events_api import router as events_router
from .events.events_repository import EventRepository
from .events.events_service import EventService
from .uploads.upload_log import UploadLog
from .uploads.upload_reader import UploadReader
from .uploads.upload_service import UploadService
from .uploads.uploads_api import router as uploads_router


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    event_repo = EventRepository()
    upload_log = UploadLog()

    app.state.config = config
    app.state.event_repo = event_repo
    app.state.upload_log = upload_log
    app.state.event_service = EventService(repo=event_repo)
    app.state.upload_service = UploadService(
        event_repo=event_repo,
        upload_log=upload_log,
        config=config.validation,
    )
    app.state.upload_reader = UploadReader(config.upload_limits)

    app.include_router(events_router)
    app.include_router(uploads_router)
