from __future__ import annotations
import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class UtilityAccessor(Generic[T]):
    """side effects and escape hatches that do not fit an operator family."""

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def for_each(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        call `action` on every element, in order, right now. the return value
        of `action` is ignored. gives back the same enumerable so a chain can
        keep going, e.g. to drain it again.
        """
        for item in self._enumerable:
            action(item)
        return self._enumerable

    def side_effect(self, action: Callable[[T], Any]) -> 'Enumerable[T]':
        """
        lazy tap: `action` sees each element as it is pulled and the element
        passes through unchanged. only pulled elements are observed, so this
        shows what an early-stopping chain actually touched.
        example: .where(...).util.side_effect(print).take(3)
        """
        from ..enumerable import Enumerable
        def tap_data():
            for item in self._enumerable:
                action(item)
                yield item
        return Enumerable(tap_data)

    def pipe(self, func: Callable[..., U], *args, **kwargs) -> U:
        """hand the whole enumerable to `func(seq, *args, **kwargs)` and return its result"""
        return func(self._enumerable, *args, **kwargs)
