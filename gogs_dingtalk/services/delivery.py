"""Single-shot delivery of serialized payloads to a DingTalk robot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from gogs_dingtalk.config import settings

logger = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class DeliveryResult:
    is_succeed: bool
    status_code: Optional[int] = None
    content: Optional[str] = None
    error: Optional[str] = None


def _robot_error(resp: httpx.Response) -> Optional[str]:
    """DingTalk answers 200 with a non-zero ``errcode`` on rejected messages."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict) and data.get("errcode", 0) != 0:
        return f"DingTalk error {data.get('errcode')}: {data.get('errmsg', '')}"
    return None


async def deliver(
    url: str,
    body: bytes,
    *,
    timeout: Optional[float] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> DeliveryResult:
    """
    POST ``body`` to ``url`` once.

    Failures are reported in the result, never raised.
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=timeout or settings.http_timeout_seconds)
    try:
        resp = await client.post(url, content=body, headers=HEADERS)
    except httpx.HTTPError as exc:
        logger.warning("DingTalk delivery to %s failed: %s", url, exc)
        return DeliveryResult(is_succeed=False, error=str(exc))
    finally:
        if owns_client:
            await client.aclose()

    error = None
    if resp.status_code >= 300:
        error = f"DingTalk error: {resp.status_code}"
    else:
        error = _robot_error(resp)
    if error:
        logger.warning("DingTalk rejected delivery: %s", error)
    return DeliveryResult(
        is_succeed=error is None,
        status_code=resp.status_code,
        content=resp.text,
        error=error,
    )
