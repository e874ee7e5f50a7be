import typing
import json
import logging
from .types import *
from .errors import DecodeError

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable
    from .channel import Channel

logger = logging.getLogger(__name__)


def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """
    wrap an iterable without copying it. collections can be drained any
    number of times; a bare iterator or generator object only once.
    """
    from .enumerable import Enumerable
    return Enumerable(lambda: data)

def from_producer(producer: Producer[T]) -> 'Enumerable[T]':
    """
    wrap a zero-argument callable that returns a fresh iterable per drain,
    typically a generator function. whether a second drain repeats the
    elements is up to the producer.
    """
    from .enumerable import Enumerable
    return Enumerable(producer)

def from_items(*items: T) -> 'Enumerable[T]':
    """create enumerable from the given arguments"""
    return from_iterable(items)

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable of `count` consecutive ints; empty when count <= 0"""
    return from_iterable(range(start, start + max(count, 0)))

def from_mapping(mapping: Mapping[Any, T]) -> 'Enumerable[T]':
    """create enumerable over the values of a mapping, in the mapping's order"""
    from .enumerable import Enumerable
    return Enumerable(lambda: mapping.values())

def from_channel(channel: 'Channel[T]') -> 'Enumerable[T]':
    """
    drain a channel until its producer closes it. the producer owns the
    channel's lifetime, and the sequence can only be drained once.
    """
    return from_iterable(channel)

def from_json(payload: Union[str, bytes, bytearray],
              factory: Optional[Callable[[Any], T]] = None) -> 'Enumerable[T]':
    """
    decode a json array. `factory` converts each decoded element, e.g. a
    dataclass constructor taking a dict. raises DecodeError when the payload
    is not valid json, not an array, or an element makes `factory` raise
    TypeError or ValueError.
    """
    try:
        decoded = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug("rejecting undecodable payload: %s", e)
        raise DecodeError(f"payload is not valid json: {e}") from e
    if not isinstance(decoded, list):
        raise DecodeError(f"expected a json array, got {type(decoded).__name__}")
    if factory is not None:
        try:
            decoded = [factory(item) for item in decoded]
        except (TypeError, ValueError) as e:
            logger.debug("payload element does not fit the factory: %s", e)
            raise DecodeError(f"payload element could not be converted: {e}") from e
    return from_iterable(decoded)

def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    return from_iterable([item] * max(count, 0))

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    return from_iterable(())

def generate(generator_func: Callable[[], T], count: int) -> 'Enumerable[T]':
    """call `generator_func` `count` times, lazily, on every drain"""
    from .enumerable import Enumerable
    return Enumerable(lambda: (generator_func() for _ in range(count)))

# --- aliases ---
lazinq = from_iterable
L = from_iterable
