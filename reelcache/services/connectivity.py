"""Network reachability monitoring.

``ConnectivityMonitor`` holds the current state and notifies subscribers on
change. ``HTTPConnectivityMonitor`` drives that state by probing a URL on an
interval in a background task.
"""

import asyncio
import logging
from collections.abc import Callable

import httpx

from reelcache.config import get_settings
from reelcache.utils.events import EventEmitter
from reelcache.utils.http_client import get_probe_client

logger = logging.getLogger(__name__)


class ConnectivityMonitor:
    """Current reachability plus a change notification."""

    def __init__(self, connected: bool = True) -> None:
        self._connected = connected
        self.changes: EventEmitter[bool] = EventEmitter("connectivity")

    @property
    def is_connected(self) -> bool:
        return self._connected

    def subscribe(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        """Call ``callback(connected)`` on every change; returns an unsubscribe callable."""
        return self.changes.subscribe(callback)

    def set_connected(self, connected: bool) -> None:
        """Update the state, notifying subscribers only when it changes."""
        if connected == self._connected:
            return
        self._connected = connected
        logger.info(f"Connectivity changed: {'online' if connected else 'offline'}")
        self.changes.emit(connected)


class HTTPConnectivityMonitor(ConnectivityMonitor):
    """Connectivity monitor that polls a probe URL.

    Any HTTP response (whatever the status) counts as reachable; transport
    errors count as offline.
    """

    def __init__(
        self,
        probe_url: str | None = None,
        interval: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        connected: bool = True,
    ) -> None:
        super().__init__(connected)
        settings = get_settings()
        self.probe_url = probe_url or settings.connectivity_probe_url
        self.interval = interval or settings.connectivity_check_interval
        self._http_client = http_client
        self._shutdown_event: asyncio.Event | None = None
        self._task: asyncio.Task | None = None

    async def check(self) -> bool:
        """Probe once and update the state."""
        client = self._http_client or get_probe_client()
        try:
            await client.head(self.probe_url)
            connected = True
        except httpx.TransportError as e:
            logger.debug(f"Connectivity probe failed: {e}")
            connected = False
        self.set_connected(connected)
        return connected

    async def _run(self, shutdown_event: asyncio.Event) -> None:
        while not shutdown_event.is_set():
            await self.check()
            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=self.interval)
            except TimeoutError:
                continue

    def start(self) -> None:
        """Start polling in the background (idempotent)."""
        if self._task is not None and not self._task.done():
            return
        self._shutdown_event = asyncio.Event()
        self._task = asyncio.create_task(
            self._run(self._shutdown_event),
            name="connectivity_monitor",
        )
        logger.info(f"Started connectivity monitor ({self.probe_url}, every {self.interval}s)")

    async def stop(self) -> None:
        """Stop polling and wait for the background task to finish."""
        if self._task is None:
            return
        if self._shutdown_event is not None:
            self._shutdown_event.set()
        try:
            await asyncio.wait_for(self._task, timeout=self.interval + 1)
        except TimeoutError:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info("Stopped connectivity monitor")
