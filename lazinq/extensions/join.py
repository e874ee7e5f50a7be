from __future__ import annotations
import typing
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class _InnerLookup(Generic[U, K]):
    """
    inner side of a join, drained once. keys are indexed in a dict when they
    are all hashable; otherwise matches are found by scanning with ==.
    either way matches come back in inner-sequence order.
    """
    def __init__(self, inner: Iterable[U], key_selector: KeySelector[U, K]):
        self._pairs = [(key_selector(item), item) for item in inner]
        self._index: Optional[Dict[K, List[U]]] = {}
        try:
            for key, item in self._pairs:
                self._index.setdefault(key, []).append(item)
        except TypeError:
            self._index = None

    def matches(self, key: K) -> List[U]:
        if self._index is not None:
            try:
                return self._index.get(key, [])
            except TypeError:
                pass
        return [item for inner_key, item in self._pairs if inner_key == key]


class JoinAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
             inner_key_selector: KeySelector[U, K],
             result_selector: Callable[[T, U], V]) -> 'Enumerable[V]':
        """
        inner equi-join. `inner` is drained once when iteration starts; the
        outer sequence streams, and each match is emitted in outer-then-inner order.
        """
        from ..enumerable import Enumerable
        def join_data():
            lookup = _InnerLookup(inner, inner_key_selector)
            for outer_item in self._enumerable:
                for inner_item in lookup.matches(outer_key_selector(outer_item)):
                    yield result_selector(outer_item, inner_item)
        return Enumerable(join_data)

    def left_join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
                  inner_key_selector: KeySelector[U, K],
                  result_selector: Callable[[T, Optional[U]], V],
                  default_inner: Optional[U] = None) -> 'Enumerable[V]':
        """like join, but an outer element with no match is emitted once, paired with `default_inner`"""
        from ..enumerable import Enumerable
        def left_join_data():
            lookup = _InnerLookup(inner, inner_key_selector)
            for outer_item in self._enumerable:
                matched = lookup.matches(outer_key_selector(outer_item))
                if not matched:
                    yield result_selector(outer_item, default_inner)
                for inner_item in matched:
                    yield result_selector(outer_item, inner_item)
        return Enumerable(left_join_data)

    def group_join(self, inner: Iterable[U], outer_key_selector: KeySelector[T, K],
                   inner_key_selector: KeySelector[U, K],
                   result_selector: Callable[[T, List[U]], V]) -> 'Enumerable[V]':
        """group join - pairs each outer element with the list of its inner matches"""
        from ..enumerable import Enumerable
        def group_join_data():
            lookup = _InnerLookup(inner, inner_key_selector)
            for outer_item in self._enumerable:
                yield result_selector(outer_item, list(lookup.matches(outer_key_selector(outer_item))))
        return Enumerable(group_join_data)
