import hmac
import logging

from fastapi import Depends, Header, HTTPException, Request

from gitnotify.core.config import Settings
from gitnotify.services.config_store import ConfigStore

logger = logging.getLogger(__name__)


def config_store(request: Request) -> ConfigStore:
    """FastAPI dependency: active configuration of this app instance"""
    return request.app.state.config_store


def app_settings(request: Request) -> Settings:
    """FastAPI dependency: process settings of this app instance"""
    return request.app.state.settings


def require_config_token(
    settings: Settings = Depends(app_settings),  # noqa: B008
    authorization: str | None = Header(default=None),
) -> None:
    """FastAPI dependency: ``Authorization: Bearer <GITNOTIFY_CONFIG_TOKEN>``"""
    token = settings.config_token_value
    if not token:
        logger.error("Config API called but GITNOTIFY_CONFIG_TOKEN is not set")
        raise HTTPException(status_code=500, detail="Config API token not set")

    expected = f"Bearer {token}"
    if not authorization or not hmac.compare_digest(
        authorization.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning("Config API request rejected: bad or missing bearer token")
        raise HTTPException(status_code=401, detail="unauthorized")
