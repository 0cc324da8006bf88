import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from apps.blobs.routers import router as blobs_router
from apps.blobs.services import ObjectTable
from config.logging import configure_logging
from config.middleware import RequestLogMiddleware
from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title='Blob Store', version='0.1.0')
    app.state.settings = settings
    # each app owns its table; nothing survives a restart
    app.state.object_table = ObjectTable()
    app.add_middleware(RequestLogMiddleware)
    app.include_router(blobs_router)
    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info('Starting blob store on %s:%d (oid strategy: %s)', settings.host, settings.port, settings.oid_strategy)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == '__main__':
    run()
