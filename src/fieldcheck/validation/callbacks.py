"""Ad-hoc rules for ``Validator.callback()``.

A callback rule is given as one of three things, classified once when the
rule is registered:

1. anything callable: ``fn(value)`` decides, by truthiness;
2. a string that compiles as a delimited pattern (``"/^[a-z]+$/i"``):
   the value passes when the pattern is found in it;
3. any other string: the value passes when it equals the string.

Mode 2 is tried before mode 3, so a literal that happens to look like a
delimited pattern (``"/home/"``) is matched as a pattern. Wrap such a
value with ``literal()`` to force an equality check, or use ``pattern()``
to force pattern matching without delimiters.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fieldcheck.errors import ConfigurationError

logger = logging.getLogger("fieldcheck.validation")

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,  # str patterns are Unicode already
}

_BRACKETS = {"(": ")", "{": "}", "[": "]", "<": ">"}


@dataclass(frozen=True, slots=True)
class InvocablePredicate:
    """Mode 1: a user function."""

    fn: Callable[[str], Any]

    def __call__(self, value: str) -> bool:
        return bool(self.fn(value))


@dataclass(frozen=True, slots=True)
class PatternPredicate:
    """Mode 2: the pattern must be found in the value."""

    pattern: re.Pattern[str]

    def __call__(self, value: str) -> bool:
        return self.pattern.search(value) is not None


@dataclass(frozen=True, slots=True)
class EqualityPredicate:
    """Mode 3: the value must equal the literal."""

    literal: str

    def __call__(self, value: str) -> bool:
        return value == self.literal


type CallbackPredicate = InvocablePredicate | PatternPredicate | EqualityPredicate


def literal(text: str) -> EqualityPredicate:
    """Force an equality check, even for text that looks like a pattern."""
    return EqualityPredicate(str(text))


def pattern(text: str | re.Pattern[str], flags: int = 0) -> PatternPredicate:
    """Force a pattern check. *text* is a bare regex, no delimiters."""
    if isinstance(text, re.Pattern):
        return PatternPredicate(text)
    try:
        return PatternPredicate(re.compile(text, flags))
    except re.error as exc:
        msg = f"Invalid pattern {text!r}: {exc}"
        raise ConfigurationError(msg) from exc


def compile_delimited(text: str) -> re.Pattern[str] | None:
    """Compile a delimited pattern such as ``/^\\d+$/i``.

    The delimiter is the first character; it must not be alphanumeric, a
    backslash or whitespace. Bracket pairs (``(...)``, ``{...}``) are
    accepted as delimiters too. Returns ``None`` when *text* is not a
    delimited pattern or its body does not compile.
    """
    if len(text) < 2:
        return None
    opener = text[0]
    if opener.isalnum() or opener == "\\" or opener.isspace():
        return None

    closer = _BRACKETS.get(opener, opener)
    end = text.rfind(closer)
    if end <= 0:
        return None

    body, modifiers = text[1:end], text[end + 1 :]
    flags = 0
    for modifier in modifiers:
        if modifier not in _FLAGS:
            return None
        flags |= _FLAGS[modifier]

    try:
        return re.compile(body, flags)
    except re.error:
        return None


def classify_callback(fn: Any) -> CallbackPredicate:
    """Resolve a ``callback()`` argument to one of the three predicate kinds.

    Anything that is neither callable nor a pattern compares by its string
    form; ``None`` compares as ``""``.
    """
    if isinstance(fn, (InvocablePredicate, PatternPredicate, EqualityPredicate)):
        return fn

    if isinstance(fn, re.Pattern):
        return PatternPredicate(fn)

    if callable(fn):
        return InvocablePredicate(fn)

    if isinstance(fn, str):
        compiled = compile_delimited(fn)
        if compiled is not None:
            logger.debug("Callback %r treated as pattern", fn)
            return PatternPredicate(compiled)
        return EqualityPredicate(fn)

    return EqualityPredicate("" if fn is None else str(fn))
