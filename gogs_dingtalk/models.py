"""models for DBs"""

from __future__ import annotations

import datetime as dt
import uuid
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import Session

from .config import settings
from .db import Base

if TYPE_CHECKING:
    from .services.delivery import DeliveryResult

DEFAULT_TIMEZONE = "UTC"


def _load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        return ZoneInfo(DEFAULT_TIMEZONE)


TZ = _load_timezone(settings.timezone or DEFAULT_TIMEZONE)


def now_local() -> dt.datetime:
    """Current timezone-aware datetime in the configured timezone."""
    return dt.datetime.now(TZ)


class HookTask(Base):
    """One built DingTalk notification and its delivery outcome."""

    __tablename__ = "hook_tasks"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, index=True, default=lambda: str(uuid.uuid4()))
    created_at = Column(DateTime, default=now_local, index=True)
    event_type = Column(String, index=True)
    repository = Column(String, default="")
    payload_content = Column(Text, default="")
    is_delivered = Column(Boolean, default=False, index=True)
    is_succeed = Column(Boolean, default=False)
    response_status = Column(Integer, nullable=True)
    response_content = Column(Text, nullable=True)
    error_message = Column(Text, nullable=True)
    delivered_at = Column(DateTime, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "uuid": self.uuid,
            "event_type": self.event_type,
            "repository": self.repository,
            "is_delivered": bool(self.is_delivered),
            "is_succeed": bool(self.is_succeed),
            "response_status": self.response_status,
            "error_message": self.error_message,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "delivered_at": self.delivered_at.isoformat() if self.delivered_at else None,
        }


def record_task(db: Session, event: str, repository: str, content: bytes) -> HookTask:
    """Insert an undelivered task holding the serialized payload."""
    task = HookTask(
        event_type=event,
        repository=repository,
        payload_content=content.decode("utf-8"),
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def mark_delivered(db: Session, task: HookTask, result: DeliveryResult) -> HookTask:
    """Store a :class:`~gogs_dingtalk.services.delivery.DeliveryResult` on ``task``."""
    task.is_delivered = True
    task.is_succeed = result.is_succeed
    task.response_status = result.status_code
    task.response_content = result.content
    task.error_message = result.error
    task.delivered_at = now_local()
    db.commit()
    return task


def recent_tasks(db: Session, limit: int = 20) -> list[HookTask]:
    return (
        db.query(HookTask)
        .order_by(HookTask.id.desc())
        .limit(limit)
        .all()
    )
