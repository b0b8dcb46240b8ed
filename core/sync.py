"""Push the local task list to a remote HTTP endpoint.

Sync is one-way: the whole task list is POSTed as JSON to ``SYNC_URL``.
Without a configured URL every sync request fails with a ``SyncError`` the
controller shows to the user.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from core.exceptions import SyncError

logger = logging.getLogger(__name__)

MESSAGE_NOT_CONFIGURED = "Sync is not configured. Set SYNC_URL to enable it."


def build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    retry = Retry(total=3, backoff_factor=0.2, status_forcelist=[429, 500, 502, 503, 504], allowed_methods=None)
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.mount("http://", HTTPAdapter(max_retries=retry))
    return session


class SyncController:
    """Send task snapshots to the configured sync endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        timeout: float = 8.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._session = session

    @property
    def configured(self) -> bool:
        return bool(self._url)

    def sync(self, tasks: List[Dict[str, Any]]) -> int:
        """POST ``tasks`` and return how many were sent."""

        if not self._url:
            raise SyncError(MESSAGE_NOT_CONFIGURED)
        if self._session is None:
            self._session = build_session()
        payload = {
            "tasks": tasks,
            "synced_at": datetime.now(tz=timezone.utc).isoformat(),
        }
        try:
            response = self._session.post(self._url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Sync to %s failed: %s", self._url, exc)
            raise SyncError(f"Sync failed: {exc}") from exc
        logger.info("Synced %d tasks to %s", len(tasks), self._url)
        return len(tasks)


__all__ = ["SyncController", "build_session", "MESSAGE_NOT_CONFIGURED"]
