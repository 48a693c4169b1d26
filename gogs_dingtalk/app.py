"""Gogs → DingTalk notifier.

Run with::

    uvicorn gogs_dingtalk.app:app --host 127.0.0.1 --port 8000
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from gogs_dingtalk.config import settings
from gogs_dingtalk.db import Base, engine
from gogs_dingtalk.routers import hooks


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()

Base.metadata.create_all(engine)

app = FastAPI(title="Gogs → DingTalk")

app.include_router(hooks.router)


@app.get("/healthz")
def healthz():
    return {"ok": True}
