"""Service settings, read once from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """App Settings"""

    db_url: str = os.getenv("DB_URL", "sqlite:///./gogs_dingtalk.sqlite3")
    notification_title: str = os.getenv("NOTIFICATION_TITLE", "Gogs Notification")
    dingtalk_url: str = os.getenv("DINGTALK_URL", "")
    webhook_secret: str = os.getenv("WEBHOOK_SECRET", "")
    timezone: str = os.getenv("TIMEZONE", "Asia/Shanghai")
    http_timeout_seconds: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
