"""Built-in rule predicates.

Each predicate has the signature::

    def rule(value: str, *args) -> bool:
        '''True if the value passes.'''

``args`` are the rule's bound arguments, fixed when the rule is staged.

Every predicate except ``required`` is wrapped with ``optional``: a blank
value passes, so a field can be optional yet still checked when present.
Presence is ``required``'s job alone.
"""

import ipaddress
import re
from collections.abc import Callable
from datetime import date
from functools import wraps
from urllib.parse import urlsplit

from fieldcheck.validation.dates import DateFormat, parse_date

type Predicate = Callable[..., bool]


def optional(predicate: Predicate) -> Predicate:
    """Let blank values through without calling *predicate*."""

    @wraps(predicate)
    def check(value: str, *args: object) -> bool:
        if not value.strip():
            return True
        return predicate(value, *args)

    return check


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: str) -> bool:
    """Field must be present and non-blank."""
    return bool(value.strip())


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Checks structure, not deliverability
_EMAIL_RE = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@([A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
)


@optional
def email(value: str) -> bool:
    """Value must be a syntactically valid email address."""
    local, _, _ = value.partition("@")
    return len(local) <= 64 and len(value) <= 254 and _EMAIL_RE.match(value) is not None


@optional
def ip(value: str) -> bool:
    """Value must be an IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")

# Schemes whose URLs have no host part
_HOSTLESS_SCHEMES = frozenset({"mailto", "news", "file", "urn", "tel", "data"})


@optional
def url(value: str) -> bool:
    """Value must be an absolute URL: a scheme and, for most schemes, a host."""
    if any(c.isspace() for c in value):
        return False
    try:
        parts = urlsplit(value)
        parts.port  # noqa: B018  raises ValueError on a malformed port
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    if parts.scheme.lower() in _HOSTLESS_SCHEMES:
        return bool(parts.netloc or parts.path)
    return bool(parts.hostname)


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

_INT_RE = re.compile(r"^[+-]?(0|[1-9][0-9]*)$")
_FLOAT_RE = re.compile(r"^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$")

_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


@optional
def integer(value: str) -> bool:
    """Value must be a whole number in the signed 64-bit range."""
    text = value.strip()
    if not _INT_RE.match(text):
        return False
    return _INT_MIN <= int(text) <= _INT_MAX


@optional
def float_(value: str) -> bool:
    """Value must be a decimal number (``3``, ``-2.5``, ``1e3``)."""
    return _FLOAT_RE.match(value.strip()) is not None


@optional
def digits(value: str) -> bool:
    """Every character is an ASCII digit. No range limit, unlike ``integer``."""
    return value.isascii() and value.isdigit()


def to_number(value: str) -> float | None:
    """Parse *value* for numeric comparison, or ``None``."""
    text = value.strip()
    if not _FLOAT_RE.match(text):
        return None
    return float(text)


@optional
def min_(value: str, bound: float, inclusive: bool) -> bool:
    """Value is a number >= *bound* (> when not *inclusive*)."""
    number = to_number(value)
    if number is None:
        return False
    return number >= bound if inclusive else number > bound


@optional
def max_(value: str, bound: float, inclusive: bool) -> bool:
    """Value is a number <= *bound* (< when not *inclusive*)."""
    number = to_number(value)
    if number is None:
        return False
    return number <= bound if inclusive else number < bound


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


@optional
def minlength(value: str, length: int) -> bool:
    return len(value.strip()) >= length


@optional
def maxlength(value: str, length: int) -> bool:
    return len(value.strip()) <= length


@optional
def length(value: str, length: int) -> bool:
    return len(value.strip()) == length


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


@optional
def matches(value: str, other: str) -> bool:
    """Value equals the snapshot of another field."""
    return value == other


@optional
def notmatches(value: str, other: str) -> bool:
    """Value differs from the snapshot of another field."""
    return value != other


@optional
def oneof(value: str, allowed: frozenset[str]) -> bool:
    return value in allowed


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


@optional
def valid_date(value: str, fmt: DateFormat, separator: str | None, separators: str) -> bool:
    """Value is a real calendar date in *fmt*."""
    return parse_date(value, fmt, separator, separators) is not None


@optional
def mindate(value: str, bound: date | None, fmt: DateFormat) -> bool:
    """Value is a date on or after *bound*. Passes when there is no bound."""
    if bound is None:
        return True
    parsed = parse_date(value, fmt)
    return parsed is not None and parsed >= bound


@optional
def maxdate(value: str, bound: date | None, fmt: DateFormat) -> bool:
    """Value is a date on or before *bound*. Passes when there is no bound."""
    if bound is None:
        return True
    parsed = parse_date(value, fmt)
    return parsed is not None and parsed <= bound


# ---------------------------------------------------------------------------
# Payment
# ---------------------------------------------------------------------------


def luhn(number: str) -> bool:
    """Luhn mod-10 checksum over a string of digits."""
    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


@optional
def ccnum(value: str) -> bool:
    """Value is a 13-19 digit card number (spaces allowed) with a valid check digit."""
    number = value.replace(" ", "")
    if not 13 <= len(number) <= 19:
        return False
    if not (number.isascii() and number.isdigit()):
        return False
    return luhn(number)
