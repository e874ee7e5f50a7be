from __future__ import annotations
import typing
import random as _random
from ..types import *

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable

class _CoreOperations(Generic[T]):
    # --- projection and filtering ---

    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import Enumerable
        def filter_data():
            for item in self:
                if predicate(item):
                    yield item
        return Enumerable(filter_data)

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        def map_data():
            for item in self:
                yield selector(item)
        return Enumerable(map_data)

    def select_with_index(self: 'Enumerable[T]', selector: Callable[[T, int], U]) -> 'Enumerable[U]':
        """project each element to a new form, using the element's index"""
        from ..enumerable import Enumerable
        def map_with_index_data():
            for index, item in enumerate(self):
                yield selector(item, index)
        return Enumerable(map_with_index_data)

    def select_many(self: 'Enumerable[T]', selector: Selector[T, Iterable[U]]) -> 'Enumerable[U]':
        """project each element to a sub-sequence and flatten, draining each sub-sequence in turn"""
        from ..enumerable import Enumerable
        def flat_map_data():
            for item in self:
                yield from selector(item)
        return Enumerable(flat_map_data)

    def flatten(self: 'Enumerable[Iterable[U]]') -> 'Enumerable[U]':
        """flatten a sequence of sequences by one level"""
        return self.select_many(lambda inner: inner)

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        return self.where(lambda item: isinstance(item, type_filter))

    # --- concatenation ---

    def concat(self: 'Enumerable[T]', other: Iterable[T]) -> 'Enumerable[T]':
        """drain this sequence, then `other`"""
        from ..enumerable import Enumerable
        def concat_data():
            yield from self
            yield from other
        return Enumerable(concat_data)

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        return self.concat((element,))

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        from ..enumerable import Enumerable
        def prepend_data():
            yield element
            yield from self
        return Enumerable(prepend_data)

    def default_if_empty(self: 'Enumerable[T]', default_value: T) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton collection if the sequence is empty"""
        from ..enumerable import Enumerable
        def default_data():
            empty = True
            for item in self:
                empty = False
                yield item
            if empty:
                yield default_value
        return Enumerable(default_data)

    # --- take / skip ---

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements. the source is not pulled past the last one"""
        from ..enumerable import Enumerable
        def take_data():
            if count <= 0:
                return
            taken = 0
            for item in self:
                yield item
                taken += 1
                if taken >= count:
                    return
        return Enumerable(take_data)

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true. the first failing element is excluded"""
        from ..enumerable import Enumerable
        def take_while_data():
            for item in self:
                if not predicate(item):
                    return
                yield item
        return Enumerable(take_while_data)

    def take_until(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements until predicate holds. the triggering element is excluded"""
        return self.take_while(lambda item: not predicate(item))

    def take_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the last 'count' elements. drains the source first"""
        from ..enumerable import Enumerable
        if count < 0:
            raise ValueError("count must not be negative")
        def take_last_data():
            data = self._get_data()
            return data[max(len(data) - count, 0):]
        return Enumerable(take_last_data)

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable
        def skip_data():
            skipped = 0
            for item in self:
                if skipped < count:
                    skipped += 1
                    continue
                yield item
        return Enumerable(skip_data)

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true. once it fails, everything after is forwarded"""
        from ..enumerable import Enumerable
        def skip_while_data():
            skipping = True
            for item in self:
                if skipping and predicate(item):
                    continue
                skipping = False
                yield item
        return Enumerable(skip_while_data)

    def skip_until(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements until predicate holds, forwarding the triggering element and everything after"""
        return self.skip_while(lambda item: not predicate(item))

    def skip_last(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the last 'count' elements. drains the source first"""
        from ..enumerable import Enumerable
        if count < 0:
            raise ValueError("count must not be negative")
        def skip_last_data():
            data = self._get_data()
            return data[:max(len(data) - count, 0)]
        return Enumerable(skip_last_data)

    # --- ordering ---

    def order_by(self: 'Enumerable[T]', key_selector: KeySelector[T, K], ascending: bool = True,
                 comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """
        stable sort by an extracted key. keys are compared with their natural
        ordering unless a `comparer(a, b) -> int` is supplied. keys that cannot
        be compared raise UnsupportedTypeError when the sequence is drained.
        """
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, [(key_selector, not ascending, comparer)])

    def order_by_descending(self: 'Enumerable[T]', key_selector: KeySelector[T, K],
                            comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """sort elements by a key in descending order"""
        return self.order_by(key_selector, ascending=False, comparer=comparer)

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements in a sequence"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: reversed(self._get_data()))

    def shuffle(self: 'Enumerable[T]', rng: Optional[_random.Random] = None) -> 'Enumerable[T]':
        """
        uniform random permutation (fisher-yates via random.shuffle). pass a
        seeded random.Random for repeatable output; a fresh one is used otherwise.
        """
        from ..enumerable import Enumerable
        def shuffle_data():
            data = self._get_data()
            (rng or _random.Random()).shuffle(data)
            return data
        return Enumerable(shuffle_data)
