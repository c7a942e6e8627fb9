# =============================================================================
# Inbox Poller
# =============================================================================
# Turns periodic inbox checks into an async stream of new messages.
#
# Key responsibilities:
#   - Check the inbox every `interval` seconds
#   - Fetch each new message and yield it, oldest first
#   - Retry transient failures, and end the stream when they persist
#
# Design notes:
#   - The client is blocking (requests), so calls run in a worker thread
#   - Ids increase with arrival, so a single integer cursor is all the state
#     kept between checks
#   - A message is yielded only after it was fetched in full, and the cursor
#     only moves past it once it has been yielded
# =============================================================================

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from guerrilla_tui.mail.client import MailError

if TYPE_CHECKING:
    from guerrilla_tui.core import Message
    from guerrilla_tui.mail.client import GuerrillaClient

logger = logging.getLogger(__name__)


class Poller:
    """
    Async iterator over newly received messages.

    Usage:
        >>> poller = Poller(client, interval=3)
        >>> async for message in poller:
        ...     printer.render_message(message)

    The iteration ends when the inbox could not be checked
    `max_failures` times in a row.
    """

    def __init__(
        self,
        client: "GuerrillaClient",
        interval: float = 3.0,
        max_failures: int = 5,
    ) -> None:
        """
        Initialize the poller.

        Args:
            client: Connected mail client.
            interval: Seconds to wait between inbox checks.
            max_failures: Consecutive failed checks before giving up.
        """
        self.client = client
        self.interval = interval
        self.max_failures = max_failures
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Id of the newest message delivered so far."""
        return self._cursor

    def __aiter__(self) -> AsyncIterator["Message"]:
        return self.poll()

    async def _check(self) -> list[tuple[int, "Message"]]:
        """Fetch every message newer than the cursor, with its sequence number."""
        summaries = await asyncio.to_thread(self.client.check_email, self._cursor)

        messages = []
        for summary in summaries:
            if summary.sequence <= self._cursor:
                continue
            message = await asyncio.to_thread(self.client.fetch_email, summary.id)
            messages.append((summary.sequence, message))
        return messages

    async def poll(self) -> AsyncIterator["Message"]:
        """Yield new messages as they arrive."""
        failures = 0

        while True:
            try:
                messages = await self._check()
            except MailError as e:
                failures += 1
                logger.warning(f"Inbox check failed ({failures}/{self.max_failures}): {e}")
                if failures >= self.max_failures:
                    logger.error("Giving up on the inbox after repeated failures")
                    return
            else:
                failures = 0
                for sequence, message in messages:
                    logger.debug(f"New message {message.id} from {message.sender}")
                    yield message
                    self._cursor = max(self._cursor, sequence)

            await asyncio.sleep(self.interval)
