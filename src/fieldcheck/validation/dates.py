"""Calendar date parsing for the ``date``, ``mindate`` and ``maxdate`` rules.

Formats are written the way form users expect them, ``d/m/Y`` style:

- ``d`` / ``j`` — day of month
- ``m`` / ``n`` — month
- ``Y`` — four-digit year

Any non-letter character in a format is a separator. A value is split on
an explicit separator, or else on any of ``-./`` and space, and must yield
three numeric parts that form a real calendar date.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache

from fieldcheck.errors import ConfigurationError

_PARTS = {"d": "day", "j": "day", "m": "month", "n": "month", "Y": "year"}

DEFAULT_SEPARATORS = "-./ "


@dataclass(frozen=True, slots=True)
class DateFormat:
    """A parsed date format: the order of day/month/year and how to join them."""

    source: str
    order: tuple[str, str, str]
    separator: str

    def render(self, value: date) -> str:
        """Format *value* in this format's part order."""
        parts = {
            "day": f"{value.day:02d}",
            "month": f"{value.month:02d}",
            "year": f"{value.year:04d}",
        }
        return self.separator.join(parts[p] for p in self.order)


@lru_cache(maxsize=64)
def date_format(source: str) -> DateFormat:
    """Parse a ``d/m/Y``-style format string.

    Raises:
        ConfigurationError: On an unknown letter or when day, month and
            year do not each appear exactly once.
    """
    letters = re.findall(r"[A-Za-z]", source)
    unknown = [c for c in letters if c not in _PARTS]
    if unknown:
        msg = f"Unsupported date format token {unknown[0]!r} in {source!r}"
        raise ConfigurationError(msg)

    order = tuple(_PARTS[c] for c in letters)
    if sorted(order) != ["day", "month", "year"]:
        msg = f"Date format {source!r} must contain day, month and year exactly once"
        raise ConfigurationError(msg)

    separators = re.findall(r"[^A-Za-z]+", source)
    separator = separators[0] if separators else "/"
    return DateFormat(source=source, order=order, separator=separator)  # type: ignore[arg-type]


def split_date(value: str, separator: str | None = None, separators: str = DEFAULT_SEPARATORS) -> list[str]:
    """Split a date string on *separator*, or on any of *separators*."""
    if separator:
        return value.split(separator)
    return re.split("[" + re.escape(separators) + "]", value)


def parse_date(
    value: str,
    fmt: str | DateFormat,
    separator: str | None = None,
    separators: str = DEFAULT_SEPARATORS,
) -> date | None:
    """Parse *value* as a calendar date, or return ``None``.

    ``None`` covers both malformed input (wrong number of parts,
    non-numeric parts) and impossible dates such as ``31/04/2020``.
    """
    if isinstance(fmt, str):
        fmt = date_format(fmt)

    tokens = split_date(value.strip(), separator, separators)
    if len(tokens) != 3:
        return None

    stripped = [t.strip() for t in tokens]
    if not all(t.isascii() and t.isdigit() for t in stripped):
        return None

    parts = dict(zip(fmt.order, (int(t) for t in stripped), strict=True))
    try:
        return date(parts["year"], parts["month"], parts["day"])
    except ValueError:
        return None


def resolve_bound(
    bound: int | str,
    fmt: DateFormat,
    lookup: Callable[[str], str | None],
    today: date,
) -> date | None:
    """Resolve a ``mindate``/``maxdate`` bound to a concrete date.

    - an ``int`` (or an integer string) is an offset in days from *today*;
    - a string naming a field uses that field's value (*lookup* returns
      ``None`` for names that are not fields);
    - any other string is a date literal in *fmt*.

    Returns ``None`` when the referenced field is blank or not a date, so
    the comparison is skipped and the field's own rules report it.

    Raises:
        ConfigurationError: When a literal bound does not parse.
    """
    if isinstance(bound, bool):
        msg = f"Invalid date bound: {bound!r}"
        raise ConfigurationError(msg)

    if isinstance(bound, int):
        return today + timedelta(days=bound)

    text = str(bound).strip()
    if re.fullmatch(r"[+-]?\d+", text):
        return today + timedelta(days=int(text))

    referenced = lookup(text)
    if referenced is not None:
        if not referenced.strip():
            return None
        return parse_date(referenced, fmt)

    parsed = parse_date(text, fmt)
    if parsed is None:
        msg = f"Date bound {bound!r} does not match format {fmt.source!r}"
        raise ConfigurationError(msg)
    return parsed
