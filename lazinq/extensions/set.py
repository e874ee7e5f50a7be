from __future__ import annotations
import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class _Seen(Generic[T]):
    """
    membership buffer behind the set operators. elements are compared with
    `equals` when given (linear scan), by hashed `key_selector(item)` when
    given, and otherwise hashed directly, falling back to an `==` scan for
    unhashable elements.
    """
    def __init__(self, equals: Optional[Equality[T]] = None,
                 key_selector: Optional[KeySelector[T, K]] = None):
        if equals is not None and key_selector is not None:
            raise ValueError("pass either equals or key_selector, not both")
        self._equals = equals
        self._key_selector = key_selector
        self._hashed = set()
        self._scanned = []

    def __contains__(self, item: T) -> bool:
        if self._equals is not None:
            return any(self._equals(item, seen) for seen in self._scanned)
        key = self._key_selector(item) if self._key_selector else item
        try:
            return key in self._hashed
        except TypeError:
            return any(key == seen for seen in self._scanned)

    def add(self, item: T) -> None:
        if self._equals is not None:
            self._scanned.append(item)
            return
        key = self._key_selector(item) if self._key_selector else item
        try:
            self._hashed.add(key)
        except TypeError:
            self._scanned.append(key)

    @classmethod
    def of(cls, items: Iterable[T], equals: Optional[Equality[T]] = None,
           key_selector: Optional[KeySelector[T, K]] = None) -> '_Seen[T]':
        seen = cls(equals, key_selector)
        for item in items:
            seen.add(item)
        return seen


class SetAccessor(Generic[T]):
    """
    set-theoretic operations. each accepts an optional `equals(a, b)`
    function (o(n*m), works for any type) or a hashable `key_selector`
    (o(n+m)); with neither, elements are compared by hash and `==`.
    order always follows first appearance in the left sequence.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def distinct(self, equals: Optional[Equality[T]] = None,
                 key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """forward only elements not equal to an earlier forwarded element"""
        from ..enumerable import Enumerable
        def distinct_data():
            seen = _Seen(equals, key_selector)
            for item in self._enumerable:
                if item not in seen:
                    seen.add(item)
                    yield item
        return Enumerable(distinct_data)

    def union(self, other: Iterable[T], equals: Optional[Equality[T]] = None,
              key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """concat then distinct"""
        return self._enumerable.concat(other).set.distinct(equals, key_selector)

    def intersect(self, other: Iterable[T], equals: Optional[Equality[T]] = None,
                  key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of this sequence that are present in `other`"""
        from ..enumerable import Enumerable
        def intersect_data():
            # `other` is drained once, on the first pull
            other_seen = _Seen.of(other, equals, key_selector)
            for item in self._enumerable:
                if item in other_seen:
                    yield item
        return Enumerable(intersect_data)

    def except_(self, other: Iterable[T], equals: Optional[Equality[T]] = None,
                key_selector: Optional[KeySelector[T, K]] = None) -> 'Enumerable[T]':
        """elements of this sequence that are absent from `other`"""
        from ..enumerable import Enumerable
        def except_data():
            other_seen = _Seen.of(other, equals, key_selector)
            for item in self._enumerable:
                if item not in other_seen:
                    yield item
        return Enumerable(except_data)
