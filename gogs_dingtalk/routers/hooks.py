"""Gogs hook endpoints: DingTalk preview, relay and task history."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from gogs_dingtalk.config import settings
from gogs_dingtalk.db import get_db
from gogs_dingtalk.errors import (
    InvalidPayloadError,
    PayloadEncodingError,
    UnsupportedEventError,
)
from gogs_dingtalk.models import mark_delivered, recent_tasks, record_task
from gogs_dingtalk.services.delivery import deliver
from gogs_dingtalk.services.dingtalk import build_payload, parse_event
from gogs_dingtalk.utils import gogs_verify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hooks", tags=["hooks"])


async def _read_json(request: Request) -> dict:
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(422, "Body is not valid JSON")
    if not isinstance(payload, dict):
        raise HTTPException(422, "Body must be a JSON object")
    return payload


def _render(event: str | None, raw: dict) -> tuple[str, str, bytes]:
    """Return (event, repository full name, encoded payload)."""
    if not event:
        raise HTTPException(400, "Missing X-Gogs-Event header")
    try:
        data = parse_event(event, raw)
        body = build_payload(event, data).json_payload()
    except UnsupportedEventError as exc:
        raise HTTPException(400, str(exc))
    except InvalidPayloadError as exc:
        raise HTTPException(422, str(exc))
    except PayloadEncodingError as exc:
        raise HTTPException(500, f"Encoding failed: {exc}")
    repository = data.repository.full_name or data.repository.name
    return event, repository, body


@router.post("/dingtalk/preview")
async def preview(
    request: Request,
    x_gogs_event: str | None = Header(None),
):
    """Return the DingTalk action card for a hook event without sending it."""
    raw = await _read_json(request)
    _, _, body = _render(x_gogs_event, raw)
    return Response(content=body, media_type="application/json")


@router.post("/dingtalk")
async def relay(
    request: Request,
    x_gogs_event: str | None = Header(None),
    x_gogs_signature: str | None = Header(None),
    db: Session = Depends(get_db),
):
    """
    Gogs webhook endpoint.

    The body signature is checked against ``settings.webhook_secret`` when one
    is configured. The rendered card is stored as a hook task and, when a
    DingTalk robot URL is configured, posted there once.
    """
    body = await request.body()
    if settings.webhook_secret and not gogs_verify(
        settings.webhook_secret, body, x_gogs_signature
    ):
        raise HTTPException(401, "Invalid signature")

    raw = await _read_json(request)
    event, repository, content = _render(x_gogs_event, raw)

    task = record_task(db, event, repository, content)
    logger.info("stored %s hook task %s for %s", event, task.uuid, repository or "-")

    if settings.dingtalk_url:
        result = await deliver(settings.dingtalk_url, content)
        mark_delivered(db, task, result)

    return task.to_dict()


@router.get("/tasks")
def list_tasks(
    limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """Most recent hook tasks, newest first."""
    tasks = recent_tasks(db, limit)
    out = []
    for task in tasks:
        item = task.to_dict()
        item["payload"] = json.loads(task.payload_content) if task.payload_content else None
        out.append(item)
    return out
