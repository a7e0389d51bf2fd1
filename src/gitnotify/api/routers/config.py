from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from gitnotify.api.deps import config_store, require_config_token
from gitnotify.core.app_config import AppConfig, ConfigError, ConfigPersistError
from gitnotify.services.config_store import ConfigStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/config",
    tags=["config"],
    dependencies=[Depends(require_config_token)],
)


@router.get("", response_model=AppConfig)
def get_config(store: ConfigStore = Depends(config_store)):  # noqa: B008
    return store.config


@router.put("")
async def replace_config(
    request: Request,
    store: ConfigStore = Depends(config_store),  # noqa: B008
):
    body = await request.body()
    try:
        new_config = AppConfig.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Config update rejected: invalid JSON (%s)", e.error_count())
        raise HTTPException(status_code=400, detail="invalid JSON")

    # validate → persist → activate; the file write runs off the event loop
    try:
        await run_in_threadpool(store.replace, new_config)
    except ConfigPersistError as e:
        logger.error("Failed to save config to %s: %s", store.path, e)
        raise HTTPException(status_code=500, detail=f"failed to save config: {e}")
    except ConfigError as e:
        logger.warning("Config update rejected: %s", e)
        raise HTTPException(status_code=400, detail=f"invalid config: {e}")

    return {"status": "ok"}
