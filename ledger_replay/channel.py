"""Bounded single-producer/single-consumer channel carrying ledger events."""

import logging
import queue
from typing import Iterator

from ledger_replay.exceptions import ChannelClosedError, ConfigurationError
from ledger_replay.models import END_OF_STREAM, EndOfStream, Event

logger = logging.getLogger(__name__)


class IngestionChannel:
    """FIFO conduit between the event reader and the transaction processor.

    ``send`` blocks while the channel is full and ``receive`` blocks while
    it is empty. The stream ends only when the producer calls ``close``,
    which enqueues the terminal ``END_OF_STREAM`` signal; an empty channel
    alone never ends it.

    Parameters
    ----------
    capacity : int
        Maximum number of items buffered at once. Any positive value is
        correct; it only affects throughput.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ConfigurationError(f"Channel capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._queue: queue.Queue[Event | EndOfStream] = queue.Queue(maxsize=capacity)
        self._closed = False
        self.sent = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, event: Event) -> None:
        """Enqueue an event, waiting for space if the channel is full."""
        if self._closed:
            raise ChannelClosedError("Cannot send on a closed channel")
        self._queue.put(event)
        self.sent += 1

    def close(self) -> None:
        """Send the terminal signal. Calling it again has no effect."""
        if self._closed:
            return
        self._closed = True
        self._queue.put(END_OF_STREAM)
        logger.debug("Channel closed after %d events", self.sent)

    def receive(self) -> Event | EndOfStream:
        """Dequeue the next item, waiting while the channel is empty."""
        return self._queue.get()

    def __iter__(self) -> Iterator[Event]:
        while True:
            item = self.receive()
            if item is END_OF_STREAM:
                return
            yield item
