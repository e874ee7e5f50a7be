r"""
'   __     ___  ___________ _   _  ____
'   | |   / _ \|__  /_ _| \ | |/ __ \
'   | |  / /_\ \ / / | ||  \| | |  | |
'   | |__|  _  |/ /_ | || |\  | |__| |
'   |____|_| |_/____|___|_| \_|\___\_\
'
lazy, pull-based linq for python.
"""
import logging

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable

# expose the factory functions
from .factories import (
    from_iterable,
    from_producer,
    from_items,
    from_range,
    from_mapping,
    from_channel,
    from_json,
    repeat,
    empty,
    generate,
    lazinq,
    L,
)

# expose concurrency primitives
from .context import Context
from .channel import Channel

# expose configuration
from .config import Settings, configure, get_settings

# expose the error taxonomy
from .errors import (
    LazinqError,
    NoElementError,
    IndexOutOfRangeError,
    NotExactlyOneError,
    EmptyCollectionError,
    DecodeError,
    UnsupportedTypeError,
    CancelledError,
    DeadlineExceededError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "from_iterable",
    "from_producer",
    "from_items",
    "from_range",
    "from_mapping",
    "from_channel",
    "from_json",
    "repeat",
    "empty",
    "generate",
    "lazinq",
    "L",
    "Context",
    "Channel",
    "Settings",
    "configure",
    "get_settings",
    "LazinqError",
    "NoElementError",
    "IndexOutOfRangeError",
    "NotExactlyOneError",
    "EmptyCollectionError",
    "DecodeError",
    "UnsupportedTypeError",
    "CancelledError",
    "DeadlineExceededError",
]
