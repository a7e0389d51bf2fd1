import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect

from gitnotify.api.deps import config_store
from gitnotify.core.github_events import EVENT_HEADER
from gitnotify.integrations.github.webhook import (
    SignatureVerificationError,
    extract_payload,
    verify_signature,
)
from gitnotify.services.config_store import ConfigStore
from gitnotify.services.events_ingest import EventDecodeError, process_event

logger = logging.getLogger(__name__)

router = APIRouter(tags=["github"])


@router.post("/webhook", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    store: ConfigStore = Depends(config_store),  # noqa: B008
    x_github_event: str | None = Header(default=None, alias=EVENT_HEADER),
):
    # 응답은 처리 결과와 무관하게 200: GitHub 재시도는 transport / auth 실패에만 걸리게 한다.
    try:
        body = await request.body()
    except ClientDisconnect:
        logger.warning("Error reading request body: client disconnected")
        raise HTTPException(status_code=400, detail="Bad request")

    # one snapshot per delivery: secret and rules always come from the same config
    snapshot = store.snapshot

    # 1) Verify before touching the payload
    try:
        verify_signature(body, request.headers, snapshot.config.webhook_secret)
    except SignatureVerificationError as e:
        logger.warning("Invalid webhook signature: %s", e)
        raise HTTPException(status_code=401, detail="Unauthorized")

    if not x_github_event:
        logger.warning("Missing X-GitHub-Event header")
        raise HTTPException(status_code=400, detail="Bad request")

    # 2) Decode + match + notify
    payload = extract_payload(body, request.headers.get("content-type"))
    try:
        process_event(x_github_event, payload, snapshot.rules)
    except EventDecodeError as e:
        logger.error("Error processing event: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")

    return "OK"
