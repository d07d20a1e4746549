"""FastAPI application factory"""

import logging

from fastapi import FastAPI

from betapad.api.routes_testpad import router as testpad_router
from betapad.config import Settings, load_config
from betapad.crud.database import init_db, make_engine


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, engine=None) -> FastAPI:
    """Build the app with an engine on app.state; tables are created if missing."""
    settings = settings or load_config()
    engine = engine or make_engine(settings.db_url)
    init_db(engine)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.engine = engine
    app.include_router(testpad_router)

    @app.get("/health", summary="Service health check")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok", "service": settings.app_name}

    logger.debug("API created for %s", settings.db_url)
    return app
