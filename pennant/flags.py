r"""
Pennant flag declarations and token matching.

Overview
- Flag: a typed flag declaration made of a short id, a long id, a description
  and a FlagValue slot (see pennant.values).
  • Flag.boolean / Flag.string / Flag.integer / Flag.float build the usual shapes.
  • The variant of the value slot is fixed at declaration; only its payload changes.
- matches(flag, token): exact, case-sensitive match against "-{short}" or "--{long}".
- is_flag_token(token): whether a raw token looks like a flag at all.

Identifiers
- Written without their leading dashes: Flag.boolean("f", "ferris", ...) answers to
  "-f" and "--ferris".
- Must match r"[^\W\d_](-?[^\W_]+)*": start with a letter, segments split by single
  hyphens, no underscores (unicode letters are allowed).
"""
import re

from .utils import *
from .values import *

SHORT_PREFIX = "-"
LONG_PREFIX = "--"


def _sanitize_identifier(identifier, kind, /):
    if not isinstance(identifier, str):
        raise TypeError(f"flag {kind} identifier must be a string")
    elif not (identifier := identifier.strip()):
        raise ValueError(f"flag {kind} identifier cannot be empty")
    elif identifier.startswith(SHORT_PREFIX):
        raise ValueError(f"flag {kind} identifier {identifier!r} must be given without its leading dashes")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", identifier):
        raise ValueError(f"flag {kind} identifier {identifier!r} must be a valid shell-style name")
    return identifier


class Flag:
    """
    A named, typed command-line flag.

    Lifecycle
    - Declared before execution (at command construction or through Command.add_flag).
    - Updated in place by the partitioner when a matching token is seen.
    - reset() restores the payload given at declaration, so a command can run twice.
    """
    __slots__ = ("_short", "_long", "_descr", "_value", "_default")

    def __init__(self, short, long, descr, value, /):
        if not isinstance(value, FlagValue):
            raise TypeError("flag value must be a FlagValue variant")
        if not isinstance(descr, str):
            raise TypeError("flag description must be a string")
        self._short = _sanitize_identifier(short, "short")
        self._long = _sanitize_identifier(long, "long")
        self._descr = descr.strip()
        self._value = value
        self._default = value.payload

    @classmethod
    def boolean(cls, short, long, descr, /):
        """Presence-only flag, False until seen."""
        return cls(short, long, descr, Boolean(False))

    @classmethod
    def string(cls, short, long, descr, /, default=None):
        """Flag taking the following token as text."""
        return cls(short, long, descr, String(default))

    @classmethod
    def integer(cls, short, long, descr, /, default=None):
        """Flag taking the following token as a 32-bit signed integer."""
        return cls(short, long, descr, Integer(default))

    @classmethod
    def float(cls, short, long, descr, /, default=None):
        """Flag taking the following token as a 32-bit float."""
        return cls(short, long, descr, Float(default))

    @property
    def short(self):
        return self._short

    @property
    def long(self):
        return self._long

    @property
    def descr(self):
        return self._descr

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        # the variant is fixed at declaration, only same-kind values are accepted
        if type(value) is not type(self._value):
            raise TypeError(f"flag --{self._long} holds a {self._value.kind} value, not {value!r}")
        self._value = value

    @property
    def payload(self):
        return self._value.payload

    @property
    def names(self):
        return SHORT_PREFIX + self._short, LONG_PREFIX + self._long

    def matches(self, token, /):
        return matches(self, token)

    def reset(self):
        self._value.payload = self._default

    def __str__(self):
        return f"  {SHORT_PREFIX}{self._short}, {LONG_PREFIX}{self._long}\t{self._descr}"

    def __repr__(self):
        return f"flag(short={self._short!r}, long={self._long!r}, descr={self._descr!r}, value={self._value!r})"

    def __rich_repr__(self):
        yield "short", self._short
        yield "long", self._long
        yield "descr", self._descr
        yield "value", self._value


def matches(flag, token, /):
    """
    Return whether token names the given flag.

    True iff token is exactly "-" + flag.short or "--" + flag.long. There is no
    prefix matching and no "=value" splitting.
    """
    if not isinstance(flag, Flag):
        raise TypeError("matches() first argument must be a flag")
    if not isinstance(token, str):
        return False
    return token == SHORT_PREFIX + flag.short or token == LONG_PREFIX + flag.long


def is_flag_token(token, /):
    """
    Return whether token starts with a flag prefix ("-" or "--").
    """
    return isinstance(token, str) and (token.startswith(SHORT_PREFIX) or token.startswith(LONG_PREFIX))


__all__ = (
    "SHORT_PREFIX",
    "LONG_PREFIX",
    "Flag",
    "matches",
    "is_flag_token",
)
