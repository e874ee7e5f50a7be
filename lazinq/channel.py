from __future__ import annotations
import logging
import threading
import weakref
from collections import deque
from typing import Deque, Generic, Iterator, Optional, Tuple

from .types import T
from . import config

logger = logging.getLogger(__name__)


class _Pipe(Generic[T]):
    """shared state between the sending and receiving side of a channel."""

    def __init__(self, capacity: int):
        self.capacity = max(capacity, 1)
        self.buffer: Deque[T] = deque()
        self.cond = threading.Condition()
        self.closed = False
        self.cancelled = False
        self.error: Optional[BaseException] = None

    def send(self, item: T) -> bool:
        with self.cond:
            self.cond.wait_for(lambda: self.closed or self.cancelled or len(self.buffer) < self.capacity)
            if self.closed or self.cancelled:
                return False
            self.buffer.append(item)
            self.cond.notify_all()
            return True

    def receive(self) -> Tuple[Optional[T], bool]:
        with self.cond:
            self.cond.wait_for(lambda: self.buffer or self.closed or self.cancelled)
            if self.buffer:
                item = self.buffer.popleft()
                self.cond.notify_all()
                return item, True
            if self.error is not None and not self.cancelled:
                raise self.error
            return None, False

    def close(self, error: Optional[BaseException] = None) -> None:
        with self.cond:
            if self.closed:
                return
            self.closed = True
            self.error = error
            self.cond.notify_all()

    def cancel(self) -> None:
        with self.cond:
            if self.cancelled:
                return
            self.cancelled = True
            self.buffer.clear()
            self.cond.notify_all()


class Channel(Generic[T]):
    """
    a bounded, closable handoff between a producer and a consumer thread.

    the producer calls `send` and finally `close`; the consumer calls
    `receive` or iterates. `cancel` is the consumer saying it will read no
    more: pending and future `send` calls return False so the producer can
    stop. dropping the last reference to a channel cancels it as well.
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is None:
            capacity = config.get_settings().channel_capacity
        self._pipe: _Pipe[T] = _Pipe(capacity)
        self._finalizer = weakref.finalize(self, self._pipe.cancel)

    @property
    def capacity(self) -> int:
        return self._pipe.capacity

    @property
    def closed(self) -> bool:
        return self._pipe.closed

    @property
    def cancelled(self) -> bool:
        return self._pipe.cancelled

    def send(self, item: T) -> bool:
        """blocks while the buffer is full. returns False once closed or cancelled."""
        return self._pipe.send(item)

    def receive(self) -> Tuple[Optional[T], bool]:
        """
        blocks until an item is available. returns (item, True), or
        (None, False) once the channel is closed and drained. if the producer
        closed the channel with an error, that error is raised here after the
        buffered items have been delivered.
        """
        return self._pipe.receive()

    def close(self, error: Optional[BaseException] = None) -> None:
        """producer side: no more items will be sent."""
        self._pipe.close(error)

    def cancel(self) -> None:
        """consumer side: stop the producer and discard buffered items."""
        self._pipe.cancel()

    def __iter__(self) -> Iterator[T]:
        while True:
            item, ok = self._pipe.receive()
            if not ok:
                return
            yield item

    def __enter__(self) -> 'Channel[T]':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "closed" if self.closed else "open"
        return f"Channel(capacity={self.capacity}, buffered={len(self._pipe.buffer)}, {state})"


def pump(source, capacity: Optional[int] = None, name: Optional[str] = None) -> Channel:
    """
    start a daemon thread that drains `source` into a new channel.
    the thread only holds the channel's pipe, so it stops once the returned
    channel is cancelled or garbage collected.
    """
    channel: Channel = Channel(capacity)
    pipe = channel._pipe
    thread_name = name or f"{config.get_settings().thread_name_prefix}-producer"

    def produce():
        error = None
        try:
            for item in source:
                if not pipe.send(item):
                    logger.debug("%s: consumer went away, stopping", thread_name)
                    return
        except Exception as e:
            logger.debug("%s: source raised %r", thread_name, e)
            error = e
        finally:
            pipe.close(error)

    threading.Thread(target=produce, name=thread_name, daemon=True).start()
    return channel
