"""Append-only activity log for account events."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from revcart.repositories.sql_repository import SQLRepository

logger = logging.getLogger("revcart.activity")


class ActivityLogService:
    def __init__(self, repository: Optional[SQLRepository] = None):
        self.repository = repository or SQLRepository()

    def log(self, user_id: int | None, action: str, metadata: Mapping[str, Any] | None = None) -> None:
        self.repository.add_activity(user_id, action, dict(metadata or {}))
        logger.info("activity user=%s action=%s", user_id, action)
