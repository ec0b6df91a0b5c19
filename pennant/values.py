"""
Pennant flag values: a closed set of typed payload slots.

Variants
- Boolean: presence-only payload, defaults to False.
- String: free text payload, defaults to None.
- Integer: 32-bit signed payload, defaults to None.
- Float: 32-bit floating point payload, defaults to None.

The variant of a flag is fixed by the constructor used to declare it; parsing
only ever replaces the payload. Read values with structural pattern matching:

    match flag.value:
        case Boolean(enabled): ...
        case Integer(count): ...
"""
import math
import re
import struct

from .utils import *

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)
_INFINITY = re.compile(r"[+-]?inf(inity)?", re.IGNORECASE)


def _narrow(number):
    # round-trip through an IEEE-754 single to keep 32-bit precision
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        raise ValueError("%r is out of the 32-bit floating point range" % number) from None


class FlagValue:
    """
    Base of the flag value variants (not instantiable on its own).

    Contract for subclasses
    - __kind__: short human label used in help and fault messages.
    - __default__: payload used when none is given at construction.
    - parametric: whether parsing consumes the next token as the payload.
    - _accept(payload): validate/normalize a payload or raise TypeError/ValueError.
    - parse(token): coerce a raw command-line token or raise ValueError.
    """
    __slots__ = ("_payload",)
    __match_args__ = ("payload",)
    __kind__ = "value"
    __default__ = None

    parametric = True

    def __init__(self, payload=Unset, /):
        if type(self) is FlagValue:
            raise TypeError("FlagValue cannot be instantiated directly, use one of its variants")
        self._payload = self._accept(coalesce(payload, self.__default__))

    @property
    def payload(self):
        return self._payload

    @payload.setter
    def payload(self, payload):
        self._payload = self._accept(payload)

    @property
    def kind(self):
        return type(self).__kind__

    def _accept(self, payload):
        raise NotImplementedError

    @classmethod
    def parse(cls, token, /):
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, FlagValue):
            return NotImplemented
        return type(self) is type(other) and self._payload == other._payload

    def __repr__(self):
        return f"{type(self).__kind__}({self._payload!r})"

    def __rich_repr__(self):
        yield self._payload


class Boolean(FlagValue):
    __slots__ = ()
    __kind__ = "boolean"
    __default__ = False

    parametric = False

    def _accept(self, payload):
        if not isinstance(payload, bool):
            raise TypeError("boolean flag value must be a bool")
        return payload

    @classmethod
    def parse(cls, token, /):
        raise TypeError("boolean flags are presence-only and never take an argument")


class String(FlagValue):
    __slots__ = ()
    __kind__ = "string"

    def _accept(self, payload):
        if not isinstance(payload, str | None):
            raise TypeError("string flag value must be a string")
        return payload

    @classmethod
    def parse(cls, token, /):
        if not isinstance(token, str):
            raise TypeError("parse() argument must be a string")
        return token


class Integer(FlagValue):
    __slots__ = ()
    __kind__ = "integer"

    def _accept(self, payload):
        if payload is None:
            return payload
        if not isinstance(payload, int) or isinstance(payload, bool):
            raise TypeError("integer flag value must be an int")
        if not INT32_MIN <= payload <= INT32_MAX:
            raise ValueError("%d is out of the 32-bit integer range" % payload)
        return payload

    @classmethod
    def parse(cls, token, /):
        if not isinstance(token, str):
            raise TypeError("parse() argument must be a string")
        if not _INTEGER.fullmatch(token):
            raise ValueError("%r is not a base-10 integer" % token)
        number = int(token, 10)
        if not INT32_MIN <= number <= INT32_MAX:
            raise ValueError("%d is out of the 32-bit integer range" % number)
        return number


class Float(FlagValue):
    __slots__ = ()
    __kind__ = "float"

    def _accept(self, payload):
        if payload is None:
            return payload
        if not isinstance(payload, int | float) or isinstance(payload, bool):
            raise TypeError("float flag value must be a number")
        return _narrow(float(payload))

    @classmethod
    def parse(cls, token, /):
        if not isinstance(token, str):
            raise TypeError("parse() argument must be a string")
        number = float(token)
        # float() saturates huge literals to inf, only a spelled-out infinity may stay one
        if math.isinf(number) and not _INFINITY.fullmatch(token.strip()):
            raise ValueError("%r is out of the 32-bit floating point range" % token)
        return _narrow(number)


__all__ = (
    "FlagValue",
    "Boolean",
    "String",
    "Integer",
    "Float",
)
