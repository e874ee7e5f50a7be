from __future__ import annotations
import typing
import math
import numpy as np
from ..types import *
from ..errors import EmptyCollectionError, UnsupportedTypeError

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

Number = Union[int, float]


def _to_number(value: Any) -> Number:
    """accept python and numpy integers/floats; reject bools and everything else."""
    if isinstance(value, (bool, np.bool_)):
        raise UnsupportedTypeError(f"boolean {value!r} is not a numeric value")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    raise UnsupportedTypeError(f"sequence contains non-numeric value {value!r} of type {type(value).__name__}")


class StatsAccessor(Generic[T]):
    """
    numeric reductions. elements (or the values picked by `selector`) must be
    ints or floats, python or numpy; anything else raises UnsupportedTypeError.
    integer sums are exact, float sums use math.fsum so long sequences do not
    drift. reductions without a natural empty value raise EmptyCollectionError.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def _get_values(self, selector: Optional[Selector[T, Number]] = None) -> List[Number]:
        """helper to extract numeric values for statistical operations."""
        source = self._enumerable.select(selector) if selector else self._enumerable
        return [_to_number(x) for x in source]

    @staticmethod
    def _total(values: List[Number]) -> Number:
        if all(isinstance(x, int) for x in values):
            return sum(values)
        return math.fsum(values)

    def sum(self, selector: Optional[Selector[T, Number]] = None) -> Number:
        """sum of the values; 0 for an empty sequence"""
        return self._total(self._get_values(selector))

    def average(self, selector: Optional[Selector[T, Number]] = None) -> float:
        """arithmetic mean"""
        values = self._get_values(selector)
        if not values: raise EmptyCollectionError("average")
        return self._total(values) / len(values)

    def min(self, selector: Optional[Selector[T, Number]] = None) -> Number:
        """smallest value"""
        values = self._get_values(selector)
        if not values: raise EmptyCollectionError("minimum")
        return min(values)

    def max(self, selector: Optional[Selector[T, Number]] = None) -> Number:
        """largest value"""
        values = self._get_values(selector)
        if not values: raise EmptyCollectionError("maximum")
        return max(values)

    def median(self, selector: Optional[Selector[T, Number]] = None) -> Number:
        """middle value; the mean of the two middle values for even lengths"""
        sorted_values = sorted(self._get_values(selector))
        n = len(sorted_values)
        if n == 0: raise EmptyCollectionError("median")
        mid = n // 2
        return (sorted_values[mid - 1] + sorted_values[mid]) / 2 if n % 2 == 0 else sorted_values[mid]

    def mode(self, selector: Optional[Selector[T, Number]] = None) -> Number:
        """most frequent value; ties go to the value encountered first"""
        counts: Dict[Number, int] = {}
        for value in self._get_values(selector):
            counts[value] = counts.get(value, 0) + 1
        if not counts: raise EmptyCollectionError("mode")
        highest = max(counts.values())
        # dicts keep insertion order, so this is the first value seen with the top count
        return next(value for value, count in counts.items() if count == highest)

    def std_dev(self, selector: Optional[Selector[T, Number]] = None) -> float:
        """population standard deviation (ddof=0)"""
        values = self._get_values(selector)
        if not values: raise EmptyCollectionError("standard deviation")
        return float(np.std(np.asarray(values, dtype=float)))

    def percentile(self, q: float, selector: Optional[Selector[T, Number]] = None) -> float:
        """linear-interpolated percentile (0 <= q <= 100)"""
        if not 0 <= q <= 100: raise ValueError("percentile must be between 0 and 100")
        values = self._get_values(selector)
        if not values: raise EmptyCollectionError("percentile")
        return float(np.percentile(np.asarray(values, dtype=float), q))
