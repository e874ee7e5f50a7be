from __future__ import annotations
import typing
import json
import random as _random
import numpy as np
import pandas as pd
from itertools import zip_longest
from ..types import *
from ..errors import (
    NoElementError, IndexOutOfRangeError, NotExactlyOneError, EmptyCollectionError
)

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable
    from ..channel import Channel

_MISSING = object()


class TerminalAccessor(Generic[T]):
    """operations that drain the sequence into a value, a collection or a side effect."""

    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    # --- conversions ---

    def list(self) -> List[T]:
        """convert to a new list"""
        return self._enumerable._get_data()

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self._enumerable)

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary. on key collisions the last element wins"""
        val_sel = value_selector if value_selector else lambda item: item
        return {key_selector(item): val_sel(item) for item in self._enumerable}

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self._enumerable._get_data())

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self._enumerable._get_data())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self._enumerable._get_data())

    def json(self, encoding: Optional[str] = None, **dumps_kwargs) -> Union[str, bytes]:
        """
        encode as a json array. returns str, or bytes when an `encoding`
        such as 'utf-8' is given. other keyword arguments go to json.dumps
        """
        text = json.dumps(self._enumerable._get_data(), **dumps_kwargs)
        return text.encode(encoding) if encoding is not None else text

    def channel(self, capacity: Optional[int] = None) -> 'Channel[T]':
        """
        start a background producer that pushes every element into a bounded
        channel and closes it when done. cancel the channel (or leave the
        `with` block, or drop it) to stop the producer early.
        """
        from ..channel import pump
        return pump(self._enumerable, capacity)

    # --- counting and quantifiers ---

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        if predicate is None:
            return sum(1 for _ in self._enumerable)
        return sum(1 for x in self._enumerable if predicate(x))

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition, stopping at the first match"""
        for item in self._enumerable:
            if predicate is None or predicate(item):
                return True
        return False

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition, stopping at the first failure"""
        return all(predicate(x) for x in self._enumerable)

    def none(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check that no element satisfies condition"""
        return not self.any(predicate)

    def contains(self, value: T, equals: Optional[Equality[T]] = None) -> bool:
        """check if the sequence holds `value`, compared with `equals` or =="""
        if equals is None:
            return self.any(lambda item: item == value)
        return self.any(lambda item: equals(item, value))

    # --- element access ---

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first (matching) element, raising NoElementError if there is none"""
        for item in self._enumerable:
            if predicate is None or predicate(item):
                return item
        if predicate is None:
            raise NoElementError()
        raise NoElementError("no element satisfies the condition")

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        try: return self.first(predicate)
        except NoElementError: return default

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get last (matching) element. always drains the whole sequence"""
        found, last = False, None
        for item in self._enumerable:
            if predicate is None or predicate(item):
                found, last = True, item
        if not found:
            raise NoElementError() if predicate is None else NoElementError("no element satisfies the condition")
        return last

    def last_or_default(self, predicate: Optional[Predicate[T]] = None,
                        default: Optional[T] = None) -> Optional[T]:
        """get last element or default"""
        try: return self.last(predicate)
        except NoElementError: return default

    def single(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get the only (matching) element. stops pulling at the second match"""
        found = 0
        result = None
        for item in self._enumerable:
            if predicate is None or predicate(item):
                found += 1
                if found > 1:
                    raise NotExactlyOneError(found)
                result = item
        if found == 0:
            raise NotExactlyOneError(found)
        return result

    def single_or_default(self, predicate: Optional[Predicate[T]] = None,
                          default: Optional[T] = None) -> Optional[T]:
        """get the only element, or default when there are zero or several"""
        try: return self.single(predicate)
        except NotExactlyOneError: return default

    def element_at(self, index: int) -> T:
        """get the element at `index`, stopping as soon as it is reached"""
        if index < 0:
            raise IndexOutOfRangeError(index)
        for position, item in enumerate(self._enumerable):
            if position == index:
                return item
        raise IndexOutOfRangeError(index)

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        """get the element at `index` or default"""
        try: return self.element_at(index)
        except IndexOutOfRangeError: return default

    def random(self, rng: Optional[_random.Random] = None) -> T:
        """
        pick one element uniformly. defaults to random.SystemRandom, which is
        not predictable; pass a seeded random.Random for repeatable tests.
        """
        data = self._enumerable._get_data()
        if not data:
            raise NoElementError()
        return (rng or _random.SystemRandom()).choice(data)

    def random_n(self, n: int, rng: Optional[_random.Random] = None) -> List[T]:
        """pick up to `n` distinct positions uniformly, without replacement"""
        if n < 0:
            raise ValueError("n must not be negative")
        data = self._enumerable._get_data()
        return (rng or _random.SystemRandom()).sample(data, min(n, len(data)))

    # --- folding ---

    def aggregate(self, accumulator: Accumulator[U, T], seed: U = _MISSING) -> U:
        """
        strict left fold. with a seed, an empty sequence returns the seed and
        `accumulator` is never called. without one, the first element seeds
        the fold and an empty sequence raises EmptyCollectionError.
        """
        iterator = iter(self._enumerable)
        if seed is _MISSING:
            try:
                result = next(iterator)
            except StopIteration:
                raise EmptyCollectionError("aggregate") from None
        else:
            result = seed
        for item in iterator:
            result = accumulator(result, item)
        return result

    def aggregate_with_selector(self, seed: U, accumulator: Accumulator[U, T],
                                result_selector: Selector[U, V]) -> V:
        """aggregate with seed and final transformation"""
        return result_selector(self.aggregate(accumulator, seed))

    def sequence_equal(self, other: Iterable[T], equals: Optional[Equality[T]] = None) -> bool:
        """pairwise comparison with `other`; sequences of different length are never equal"""
        eq = equals if equals else lambda a, b: a == b
        for left, right in zip_longest(self._enumerable, other, fillvalue=_MISSING):
            if left is _MISSING or right is _MISSING or not eq(left, right):
                return False
        return True
