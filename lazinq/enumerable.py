from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cmp_to_key
from operator import itemgetter
from .types import *
from .errors import UnsupportedTypeError

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.join import JoinAccessor
from .extensions.grouping import GroupingAccessor
from .extensions.stats import StatsAccessor
from .extensions.utility import UtilityAccessor
from .extensions.terminal import TerminalAccessor
from .extensions.zip import ZipAccessor
from .extensions.parallel import ParallelAccessor

# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        """start a fresh pull over the underlying producer"""
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, data_func: Callable[[], Iterable[T]]):
        """init with a function that returns a fresh iterable each time it is called"""
        self._data_func = data_func

    def __iter__(self) -> Iterator[T]:
        return iter(self._data_func())

    def _get_data(self) -> List[T]:
        """drain into a new list owned by the caller"""
        return list(self)

    def drain(self, consumer: Consumer[T]) -> None:
        """
        push every element into `consumer` in order, stopping as soon as it
        returns a falsy value. nothing beyond the element that triggered the
        stop is pulled from the producer.
        """
        iterator = iter(self)
        try:
            for item in iterator:
                if not consumer(item):
                    return
        finally:
            close = getattr(iterator, 'close', None)
            if close is not None:
                close()

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """
    a lazy, linq-inspired sequence. nothing runs until the sequence is
    iterated or a terminal operation is called, and every operator returns
    a new enumerable that leaves this one untouched.

    an enumerable backed by a collection can be drained any number of times.
    one backed by an iterator, channel or one-shot producer yields its
    elements only once; drain such sequences at most once.
    """
    def __init__(self, data_func: Callable[[], Iterable[T]]):
        super().__init__(data_func)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.join = JoinAccessor(self)
        self.zip = ZipAccessor(self)
        self.group = GroupingAccessor(self)
        self.stats = StatsAccessor(self)
        self.util = UtilityAccessor(self)
        self.to = TerminalAccessor(self)
        self.par = ParallelAccessor(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data_func!r})"

# --- ordered enumerable class ---

def _sort_level(pairs: List[Tuple[Any, T]], descending: bool, comparer: Optional[Comparer]) -> None:
    if comparer is not None:
        to_key = cmp_to_key(comparer)
        pairs.sort(key=lambda pair: to_key(pair[0]), reverse=descending)
        return
    try:
        pairs.sort(key=itemgetter(0), reverse=descending)
    except TypeError as e:
        raise UnsupportedTypeError(f"sort keys are not comparable: {e}") from e


class OrderedEnumerable(Enumerable[T]):
    """represents a sorted sequence, allowing for subsequent orderings."""

    def __init__(self, source: 'Enumerable[T]',
                 sort_keys: List[Tuple[Callable, bool, Optional[Comparer]]]):
        self._source = source
        self._sort_keys = sort_keys
        super().__init__(self._sorted_data)

    def _sorted_data(self) -> List[T]:
        """apply all sorts at once. python's sort is stable, so sort from the last key to the first."""
        data = self._source._get_data()
        for key_selector, is_descending, comparer in reversed(self._sort_keys):
            # keys are extracted up front so selector errors surface unwrapped
            pairs = [(key_selector(item), item) for item in data]
            _sort_level(pairs, is_descending, comparer)
            data = [item for _, item in pairs]
        return data

    def then_by(self, key_selector: KeySelector[T, K],
                comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        return OrderedEnumerable(self._source, self._sort_keys + [(key_selector, False, comparer)])

    def then_by_descending(self, key_selector: KeySelector[T, K],
                           comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        return OrderedEnumerable(self._source, self._sort_keys + [(key_selector, True, comparer)])
