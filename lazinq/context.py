from __future__ import annotations
import logging
import threading
from typing import List, Optional

from .errors import CancelledError, DeadlineExceededError

logger = logging.getLogger(__name__)


class Context:
    """
    cooperative cancellation token shared between a caller and its workers.
    cancelling a context cancels every child derived from it; workers poll
    `cancelled` (or call `raise_if_cancelled`) before each unit of work.
    """

    def __init__(self, parent: Optional['Context'] = None):
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._cause: Optional[CancelledError] = None
        self._children: List['Context'] = []
        self._parent = parent
        self._timer: Optional[threading.Timer] = None
        if parent is not None:
            parent._attach(self)

    @classmethod
    def background(cls) -> 'Context':
        """a root context that is only cancelled explicitly."""
        return cls()

    def _attach(self, child: 'Context') -> None:
        with self._lock:
            if self._cause is None:
                self._children.append(child)
                return
            cause = self._cause
        child.cancel(cause)

    def _detach(self, child: 'Context') -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def with_cancel(self) -> 'Context':
        """derive a child that can be cancelled without touching this context."""
        return Context(self)

    def with_timeout(self, seconds: float) -> 'Context':
        """derive a child that cancels itself with DeadlineExceededError after `seconds`."""
        child = Context(self)
        timer = threading.Timer(seconds, lambda: child.cancel(DeadlineExceededError()))
        timer.daemon = True
        child._timer = timer
        timer.start()
        if child.cancelled:
            # born cancelled under an already cancelled parent
            timer.cancel()
        return child

    def cancel(self, cause: Optional[CancelledError] = None) -> None:
        """cancel this context and its children. only the first cause is kept."""
        with self._lock:
            if self._cause is not None:
                return
            self._cause = cause if cause is not None else CancelledError()
            children, self._children = self._children, []
            self._event.set()
            timer = self._timer
        if timer is not None:
            timer.cancel()
        logger.debug("context cancelled: %s", self._cause)
        for child in children:
            child.cancel(self._cause)
        if self._parent is not None:
            self._parent._detach(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def error(self) -> Optional[CancelledError]:
        """the cancellation cause, or None while the context is live."""
        return self._cause

    def raise_if_cancelled(self) -> None:
        if self._cause is not None:
            raise self._cause

    def wait(self, timeout: Optional[float] = None) -> bool:
        """block until cancelled or `timeout` elapses. returns True if cancelled."""
        return self._event.wait(timeout)
