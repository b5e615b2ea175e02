"""Third-party status page polling (Atlassian Statuspage ``/api/v2/status.json``)."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass
class ServiceStatus:
    operational: bool = True
    message: str | None = None


class StatusChecker:
    """Caches a vendor status page, refreshing at most once per interval.

    A failed fetch leaves the service marked operational and does not count
    as a check, so the next call retries.
    """

    def __init__(
        self,
        url: str,
        interval: float = 300.0,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = url
        self.interval = interval
        self._timeout = timeout
        self._transport = transport
        self._clock = clock
        self._last_check: float | None = None
        self.status = ServiceStatus()

    def is_due(self) -> bool:
        if self._last_check is None:
            return True
        return self._clock() - self._last_check >= self.interval

    async def check(self) -> ServiceStatus:
        if not self.is_due():
            return self.status

        now = self._clock()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(self.url)
                resp.raise_for_status()
                data = resp.json()
            page = data["status"]
            self.status = ServiceStatus(
                operational=page.get("indicator") == "none",
                message=page.get("description"),
            )
            self._last_check = now
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError):
            logger.exception("Failed to check status page %s", self.url)
            self.status = ServiceStatus()
        return self.status

    def to_dict(self) -> dict:
        return {"operational": self.status.operational, "message": self.status.message}
