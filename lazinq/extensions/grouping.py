from __future__ import annotations
import typing
from collections import deque
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K]) -> Dict[K, 'Enumerable[T]']:
        """
        group elements by a hashable key. keys keep first-seen order and each
        group keeps source order.
        """
        from ..factories import from_iterable
        groups: Dict[K, List[T]] = {}
        for item in self._enumerable:
            groups.setdefault(key_selector(item), []).append(item)
        return {key: from_iterable(items) for key, items in groups.items()}

    def partition(self, predicate: Predicate[T]) -> Tuple['Enumerable[T]', 'Enumerable[T]']:
        """single pass split into (matches, non-matches), both in source order"""
        from ..factories import from_iterable
        true_items, false_items = [], []
        for item in self._enumerable:
            (true_items if predicate(item) else false_items).append(item)
        return from_iterable(true_items), from_iterable(false_items)

    def chunk(self, size: int) -> 'Enumerable[List[T]]':
        """split into successive lists of `size`; the last one may be shorter"""
        from ..enumerable import Enumerable
        if size <= 0:
            raise ValueError("chunk size must be positive")
        def chunk_data():
            data = self._enumerable._get_data()
            return [data[i:i + size] for i in range(0, len(data), size)]
        return Enumerable(chunk_data)

    def window(self, size: int) -> 'Enumerable[List[T]]':
        """overlapping windows of `size` consecutive elements, streamed one step at a time"""
        from ..enumerable import Enumerable
        if size <= 0:
            raise ValueError("window size must be positive")
        def window_data():
            buffer = deque(maxlen=size)
            for item in self._enumerable:
                buffer.append(item)
                if len(buffer) == size:
                    yield list(buffer)
        return Enumerable(window_data)

    def pairwise(self) -> 'Enumerable[Tuple[T, T]]':
        """(previous, current) for every adjacent pair"""
        return self.window(2).select(tuple)
