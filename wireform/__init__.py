"""
wireform — typed values over the store's reply protocol.

    from wireform import decode as D   # Wire tree -> Python values
    from wireform import encode as E   # Python values -> wire tree
    from wireform import shape as S    # Annotations -> expected shapes

    @dataclass
    class User:
        name: str
        age: S.U8

    user = D.from_wire_value(User, Array([data("name"), data("ann"), data("age"), data("31")]))
    E.to_wire_value(user)   # the same Array
"""

from wireform import shape
from wireform import decode
from wireform import encode
from wireform._types import (
    ByteString,
    Integer,
    Array,
    Null,
    NULL,
    WireValue,
    data,
)
from wireform._cow import (
    Borrowed,
    Owned,
    Cow,
    CowIter,
)
from wireform._errors import (
    WireformError,
    DecodeError,
    DecodeErrorKind,
    EncodeError,
    EncodeErrorKind,
)
from wireform._policy import (
    Overflow,
    OnDuplicate,
    OnUnknown,
    Policy,
    DEFAULT_POLICY,
)
from wireform.decode import (
    from_wire_value,
    from_wire_values,
    try_from_wire_value,
    try_from_wire_values,
)
from wireform.encode import (
    to_wire_value,
    to_wire_values,
    to_wire_map,
    try_to_wire_value,
    try_to_wire_values,
    try_to_wire_map,
)

__version__ = "0.1.0"

__all__ = (
    "shape",
    "decode",
    "encode",
    # Wire values
    "ByteString",
    "Integer",
    "Array",
    "Null",
    "NULL",
    "WireValue",
    "data",
    # Input modes
    "Borrowed",
    "Owned",
    "Cow",
    "CowIter",
    # Errors
    "WireformError",
    "DecodeError",
    "DecodeErrorKind",
    "EncodeError",
    "EncodeErrorKind",
    # Policy
    "Overflow",
    "OnDuplicate",
    "OnUnknown",
    "Policy",
    "DEFAULT_POLICY",
    # Entry points
    "from_wire_value",
    "from_wire_values",
    "to_wire_value",
    "to_wire_values",
    "to_wire_map",
    "try_from_wire_value",
    "try_from_wire_values",
    "try_to_wire_value",
    "try_to_wire_values",
    "try_to_wire_map",
)
