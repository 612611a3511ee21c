"""
Decode — wire value tree to typed Python values.

    from wireform import decode as D

    pair = D.from_wire_value(tuple[U8, str], Array([Integer(5), data("hello")]))
    user = D.from_wire_values(User, hash_reply_items)

    match D.try_from_wire_value(User, reply):   # kungfu Result
        case Ok(user): ...
        case Error(e): ...
"""

from wireform.decode._cursor import DecodeCursor
from wireform.decode._engine import decode, decode_one
from wireform.decode._run import (
    from_wire_value,
    from_wire_values,
    try_from_wire_value,
    try_from_wire_values,
)

__all__ = (
    "DecodeCursor",
    "decode",
    "decode_one",
    "from_wire_value",
    "from_wire_values",
    "try_from_wire_value",
    "try_from_wire_values",
)
