import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from gitnotify.api.routers.config import router as config_router
from gitnotify.api.routers.github_webhook import router as github_router
from gitnotify.api.routers.health import router as health_router
from gitnotify.core.app_config import ConfigError
from gitnotify.core.config import Settings, settings as default_settings
from gitnotify.services.config_store import ConfigStore

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[ConfigStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build one gitnotify server.

    Without a ``store`` the configuration is loaded from
    ``settings.config_path`` at startup, and a bad file aborts startup.
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "config_store", None) is None:
            try:
                app.state.config_store = ConfigStore.from_file(settings.config_path)
            except ConfigError as e:
                raise RuntimeError(f"Invalid configuration in {settings.config_path}: {e}") from e
            logger.info(
                "Configuration loaded from %s (%s notification rules)",
                settings.config_path,
                len(app.state.config_store.rules),
            )
        yield

    app = FastAPI(title="GitNotify", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.config_store = store

    app.include_router(github_router)
    app.include_router(health_router)
    app.include_router(config_router)
    return app


app = create_app()
