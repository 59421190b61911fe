"""
Link Reader

Asyncio read loop that pulls bytes from a link and feeds them to the video
manager. All dispatching happens on the event loop thread, so manager state
is only ever touched from one logical thread.
"""

import asyncio
from typing import Optional

from .link import BaseLink
from .manager import MAVLinkVideoManager
from mavcam.core.logging_utils import get_module_logger

logger = get_module_logger(__name__)


def _task_exception_handler(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Unhandled exception in link reader task: %s", exc)


class LinkReader:
    """
    Feeds one link into a video manager.

    Consecutive read errors back off exponentially; after
    ``max_consecutive_errors`` the loop gives up and stops.
    """

    def __init__(self, link: BaseLink, manager: MAVLinkVideoManager, idle_delay: float = 0.01):
        self.link = link
        self.manager = manager
        self.idle_delay = idle_delay

        config = manager.config
        self.error_backoff = config.read_error_backoff
        self.max_error_backoff = config.max_error_backoff
        self.max_consecutive_errors = config.max_consecutive_errors

        self._running = False
        self._read_task: Optional[asyncio.Task] = None
        self._consecutive_errors = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def consecutive_errors(self) -> int:
        return self._consecutive_errors

    async def start(self) -> None:
        if self._running:
            logger.warning("Reader for %s already running", self.link.name)
            return

        self._running = True
        self._read_task = asyncio.create_task(self._read_loop())
        self._read_task.add_done_callback(_task_exception_handler)
        logger.info("Link reader started for %s", self.link.name)

    async def stop(self) -> None:
        self._running = False

        if self._read_task:
            self._read_task.cancel()
            try:
                await self._read_task
            except asyncio.CancelledError:
                pass
            self._read_task = None

        logger.info("Link reader stopped for %s", self.link.name)

    async def wait_closed(self) -> None:
        """Wait until the read loop exits on its own."""
        if self._read_task:
            try:
                await self._read_task
            except asyncio.CancelledError:
                pass

    async def _read_loop(self) -> None:
        logger.debug("Read loop started for %s", self.link.name)
        self._consecutive_errors = 0

        while self._running:
            try:
                data = await self.link.read()
                if data:
                    self.manager.handle_bytes(self.link, data)
                    self._consecutive_errors = 0
                else:
                    await asyncio.sleep(self.idle_delay)

            except asyncio.CancelledError:
                break
            except Exception as e:
                self._consecutive_errors += 1
                logger.error(
                    "Error reading from %s (%d/%d): %s",
                    self.link.name,
                    self._consecutive_errors,
                    self.max_consecutive_errors,
                    e
                )
                if self._consecutive_errors >= self.max_consecutive_errors:
                    logger.error("Too many consecutive errors on %s, stopping reader", self.link.name)
                    self._running = False
                    break

                backoff = min(
                    self.error_backoff * (2 ** (self._consecutive_errors - 1)),
                    self.max_error_backoff
                )
                await asyncio.sleep(backoff)

        logger.debug(
            "Read loop ended for %s (running=%s, errors=%d)",
            self.link.name,
            self._running,
            self._consecutive_errors,
        )


__all__ = ["LinkReader"]
