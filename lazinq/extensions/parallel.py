from __future__ import annotations
import typing
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from ..types import *
from .. import config
from ..context import Context

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

logger = logging.getLogger(__name__)


class ParallelAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def for_each(self, action: Callable[[Context, T], Any], concurrency: int = 0,
                 context: Optional[Context] = None) -> None:
        """
        run `action(ctx, item)` for every element with at most `concurrency`
        invocations in flight (<= 0 means the configured default, then the
        cpu count). the sequence is materialized before anything is dispatched.

        the first exception raised by an action stops new invocations, lets
        running ones finish, and is re-raised as is. if `context` is cancelled,
        invocations that have not started are skipped, running ones can watch
        `ctx.cancelled`, and the cancellation error is raised. a cancellation
        that arrives after every invocation has started is not an error.
        """
        items = self._enumerable._get_data()
        settings = config.get_settings()
        workers = settings.resolve_concurrency(concurrency)
        parent = context if context is not None else Context.background()
        ctx = parent.with_cancel()
        lock = threading.Lock()
        errors: List[BaseException] = []

        def record(error: BaseException) -> None:
            with lock:
                if not errors:
                    errors.append(error)
            ctx.cancel()

        def run(item: T) -> None:
            if ctx.cancelled:
                # errgroup semantics: a skipped invocation reports the cancellation
                if parent.cancelled:
                    record(parent.error())
                return
            try:
                action(ctx, item)
            except Exception as e:
                logger.debug("action failed for %r: %r", item, e)
                record(e)

        logger.debug("dispatching %d items over %d workers", len(items), workers)
        try:
            with ThreadPoolExecutor(max_workers=workers,
                                    thread_name_prefix=f"{settings.thread_name_prefix}-worker") as executor:
                for item in items:
                    executor.submit(run, item)
        finally:
            ctx.cancel()

        # a cancellation only counts once it made some invocation skip
        if errors:
            raise errors[0]
