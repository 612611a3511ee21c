"""
Encode — typed Python values to the wire value tree.

    from wireform import encode as E

    E.to_wire_value(User(name="ann", age=31))
    # Array([b"name", b"ann", b"age", b"31"])

    E.to_wire_values(user)          # [b"name", b"ann", b"age", b"31"]
    E.to_wire_map(user)             # {"name": b"ann", "age": b"31"}
    E.try_to_wire_value(user)       # Ok(Array([...])) or Error(EncodeError)

Architecture — one pass, children before parents:

    value ──► Shape ──► encode() ──► EncodeAccumulator ──► Array
                           │
                           └─► scalars as ByteString / Null
"""

from wireform.encode._accumulator import EncodeAccumulator
from wireform.encode._engine import encode
from wireform.encode._run import (
    to_wire_value,
    to_wire_values,
    to_wire_map,
    try_to_wire_value,
    try_to_wire_values,
    try_to_wire_map,
)

__all__ = (
    "EncodeAccumulator",
    "encode",
    "to_wire_value",
    "to_wire_values",
    "to_wire_map",
    "try_to_wire_value",
    "try_to_wire_values",
    "try_to_wire_map",
)
