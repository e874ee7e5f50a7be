from __future__ import annotations
import typing
from itertools import zip_longest
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class ZipAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def zip_with(self, other: Iterable[U], result_selector: Callable[[T, U], V]) -> 'Enumerable[V]':
        """
        pair elements positionally and stop when either side runs out. each
        side is drained by its own producer thread over a one-slot channel,
        so the two sources may run slightly ahead of the combiner and of each
        other. both producers are cancelled when the result stops early.
        """
        from ..enumerable import Enumerable
        from ..channel import pump
        def zip_data():
            left = pump(self._enumerable, capacity=1)
            right = pump(other, capacity=1)
            try:
                while True:
                    t, ok = left.receive()
                    if not ok:
                        return
                    u, ok = right.receive()
                    if not ok:
                        return
                    yield result_selector(t, u)
            finally:
                left.cancel()
                right.cancel()
        return Enumerable(zip_data)

    def zip_longest_with(self, other: Iterable[U],
                         result_selector: Callable[[Optional[T], Optional[U]], V],
                         default_self: Optional[T] = None, default_other: Optional[U] = None) -> 'Enumerable[V]':
        """zip sequences padding shorter with defaults"""
        from ..enumerable import Enumerable
        def zip_longest_data():
            # use a sentinel object to distinguish from a fill value of none
            sentinel = object()
            for t, u in zip_longest(self._enumerable, other, fillvalue=sentinel):
                yield result_selector(default_self if t is sentinel else t,
                                      default_other if u is sentinel else u)
        return Enumerable(zip_longest_data)
