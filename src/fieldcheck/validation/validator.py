"""The Validator — fluent rule chains evaluated one field at a time.

Usage::

    v = Validator(form)
    v.required().email().validate("email", "Email")
    v.required().minlength(8).validate("password", "Password")
    v.matches("password", "Password").validate("password2", "Confirmation")

    if v.has_errors():
        errors = v.get_all_errors()

Each builder stages a rule into the pending chain and returns the
Validator. ``validate()`` runs the chain against one field, stops at the
first failing rule, stores that rule's message, and empties the chain for
the next field.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Literal, overload

from fieldcheck.config import ValidatorConfig
from fieldcheck.context import get_form
from fieldcheck.validation import predicates
from fieldcheck.validation.callbacks import classify_callback
from fieldcheck.validation.dates import date_format, resolve_bound
from fieldcheck.validation.messages import (
    default_message,
    format_message,
    normalize_message,
    render_value,
)
from fieldcheck.validation.result import ValidationResult
from fieldcheck.validation.rules import RuleRegistry

logger = logging.getLogger("fieldcheck.validation")

type Number = int | float


class Validator:
    """Field validator over one input mapping.

    Args:
        data: Field name → raw value. ``FormData``, a plain ``dict``, any
            ``Mapping``. When omitted, the ambient form bound with
            ``form_scope()`` is used, or an empty mapping outside a scope.
        config: Defaults for dates, labels and messages.
        today: Reference date for day-offset bounds in ``mindate``/``maxdate``.
            Defaults to the current date at chain-build time.

    Not safe for concurrent use: the pending chain is shared state between
    the builder calls and ``validate()``. Use one Validator per task.
    """

    __slots__ = ("_errors", "_inputs", "_labels", "_registry", "_today", "config")

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        config: ValidatorConfig | None = None,
        today: datetime.date | None = None,
    ) -> None:
        if data is None:
            try:
                data = get_form()
            except LookupError:
                data = {}
        self._inputs: Mapping[str, Any] = data
        self.config = config or ValidatorConfig()
        self._today = today
        self._registry = RuleRegistry()
        self._labels: dict[str, str] = {}
        self._errors: dict[str, str] = {}

    def __repr__(self) -> str:
        return f"<Validator pending={list(self._registry.chain)!r} errors={len(self._errors)}>"

    # -- Input store --

    def value(self, field: str) -> str:
        """Return the raw value of *field* as a string.

        An absent field, or one set to ``None``/``False``, reads as ``""``.
        For multi-valued fields the first value is used.
        """
        raw = self._inputs.get(field)
        if isinstance(raw, (list, tuple)):
            raw = raw[0] if raw else None
        if raw is None or raw is False:
            return ""
        return raw if isinstance(raw, str) else str(raw)

    def field_value(self, field: str) -> str | None:
        """Like ``value()``, but None when *field* is not in the input store."""
        if field not in self._inputs:
            return None
        return self.value(field)

    def today(self) -> datetime.date:
        return self._today or datetime.date.today()

    # -- Registration --

    def _rule(
        self,
        name: str,
        predicate: Any,
        args: tuple[Any, ...] = (),
        message: str | None = None,
        *,
        key: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Validator:
        if message:
            template = normalize_message(message)
        else:
            template = default_message(
                key or name,
                params,
                self.config.messages,
                self.config.fallback_message,
            )
        self._registry.register(name, predicate, args, template)
        return self

    @property
    def pending(self) -> tuple[str, ...]:
        """Rule names staged for the next ``validate()`` call."""
        return tuple(self._registry.chain)

    # -- Presence and format --

    def required(self, message: str | None = None) -> Validator:
        """Field must be filled in."""
        return self._rule("required", predicates.required, message=message)

    def email(self, message: str | None = None) -> Validator:
        """Field has to be a valid email address."""
        return self._rule("email", predicates.email, message=message)

    def ip(self, message: str | None = None) -> Validator:
        """Field has to be a valid IPv4 or IPv6 address."""
        return self._rule("ip", predicates.ip, message=message)

    def url(self, message: str | None = None) -> Validator:
        """Field has to be a valid absolute URL."""
        return self._rule("url", predicates.url, message=message)

    # -- Numbers --

    def float(self, message: str | None = None) -> Validator:
        """Field must contain a valid decimal number."""
        return self._rule("float", predicates.float_, message=message)

    def integer(self, message: str | None = None) -> Validator:
        """Field must contain a valid integer."""
        return self._rule("integer", predicates.integer, message=message)

    def digits(self, message: str | None = None) -> Validator:
        """Every character is a digit. Like ``integer()`` without the range limit."""
        return self._rule("digits", predicates.digits, message=message)

    def min(self, value: Number, inclusive: bool = True, message: str | None = None) -> Validator:
        """Field must be a number greater than (or equal to) *value*."""
        return self._rule(
            "min",
            predicates.min_,
            (value, inclusive),
            message,
            key="min" if inclusive else "min_exclusive",
            params={"value": value},
        )

    def max(self, value: Number, inclusive: bool = True, message: str | None = None) -> Validator:
        """Field must be a number less than (or equal to) *value*."""
        return self._rule(
            "max",
            predicates.max_,
            (value, inclusive),
            message,
            key="max" if inclusive else "max_exclusive",
            params={"value": value},
        )

    def between(
        self,
        minimum: Number,
        maximum: Number,
        inclusive: bool = True,
        message: str | None = None,
    ) -> Validator:
        """Field must be a number between *minimum* and *maximum*.

        Stages ``min`` and ``max`` with one shared message, so a value out
        of range on either side reports the same text.
        """
        shared = message or default_message(
            "between",
            {"min": minimum, "max": maximum},
            self.config.messages,
            self.config.fallback_message,
        )
        return self.min(minimum, inclusive, shared).max(maximum, inclusive, shared)

    # -- Length --

    def minlength(self, length: int, message: str | None = None) -> Validator:
        """Field has to be at least *length* characters long."""
        return self._rule(
            "minlength", predicates.minlength, (length,), message, params={"length": length}
        )

    def maxlength(self, length: int, message: str | None = None) -> Validator:
        """Field has to be at most *length* characters long."""
        return self._rule(
            "maxlength", predicates.maxlength, (length,), message, params={"length": length}
        )

    def length(self, length: int, message: str | None = None) -> Validator:
        """Field has to be exactly *length* characters long."""
        return self._rule("length", predicates.length, (length,), message, params={"length": length})

    # -- Comparison --

    def matches(self, field: str, label: str, message: str | None = None) -> Validator:
        """Field is the same as *field* (password confirmation).

        *field*'s value is read now, when the chain is built.
        """
        return self._rule(
            "matches", predicates.matches, (self.value(field),), message, params={"other": label}
        )

    def notmatches(self, field: str, label: str, message: str | None = None) -> Validator:
        """Field is different from *field*. *field*'s value is read now."""
        return self._rule(
            "notmatches",
            predicates.notmatches,
            (self.value(field),),
            message,
            params={"other": label},
        )

    def oneof(self, allowed: str | Iterable[Any], message: str | None = None) -> Validator:
        """Field is one of *allowed*: an iterable, or a comma-separated string.

        Membership is checked on the raw value; items are not trimmed.
        """
        items = allowed.split(",") if isinstance(allowed, str) else [str(a) for a in allowed]
        choices = tuple(dict.fromkeys(items))
        return self._rule(
            "oneof",
            predicates.oneof,
            (frozenset(choices),),
            message,
            params={"choices": choices},
        )

    # -- Dates --

    def date(
        self,
        fmt: str | None = None,
        separator: str | None = None,
        message: str | None = None,
    ) -> Validator:
        """Field has to be a valid calendar date in *fmt* (default ``d/m/Y``).

        Without a *separator*, the value may use any of ``-``, ``.``, ``/``
        or space between parts.
        """
        parsed = date_format(fmt or self.config.date_format)
        return self._rule(
            "date",
            predicates.valid_date,
            (parsed, separator, self.config.date_separators),
            message,
        )

    def mindate(
        self,
        bound: int | str = 0,
        fmt: str | None = None,
        message: str | None = None,
    ) -> Validator:
        """Field has to be a date on or after *bound*.

        *bound* is a day offset from today, the name of another field, or
        a date literal in *fmt*. It is resolved now, when the chain is built.
        """
        return self._date_bound("mindate", predicates.mindate, bound, fmt, message)

    def maxdate(
        self,
        bound: int | str = 0,
        fmt: str | None = None,
        message: str | None = None,
    ) -> Validator:
        """Field has to be a date on or before *bound*. See ``mindate()``."""
        return self._date_bound("maxdate", predicates.maxdate, bound, fmt, message)

    def _date_bound(
        self,
        name: str,
        predicate: Any,
        bound: int | str,
        fmt: str | None,
        message: str | None,
    ) -> Validator:
        parsed = date_format(fmt or self.config.date_format)
        limit = resolve_bound(bound, parsed, self.field_value, self.today())
        shown = parsed.render(limit) if limit is not None else render_value(bound)
        return self._rule(name, predicate, (limit, parsed), message, params={"date": shown})

    # -- Payment --

    def ccnum(self, message: str | None = None) -> Validator:
        """Field has to be a valid credit card number."""
        return self._rule("ccnum", predicates.ccnum, message=message)

    # -- Extension --

    def callback(self, name: str, fn: Any, message: str | None = None) -> Validator:
        """Stage an ad-hoc rule named *name*.

        *fn* is a callable ``(value) -> bool``, a delimited pattern string
        such as ``"/^[a-z]+$/i"``, or a literal the value must equal. See
        ``fieldcheck.validation.callbacks``.
        """
        return self._rule(name, classify_callback(fn), message=message)

    # -- Evaluation --

    def validate(self, field: str, label: str | None = None) -> bool:
        """Run the pending chain against *field*.

        Stops at the first failing rule and stores its message under
        *field*, replacing any earlier message. The chain is emptied in
        every case, including when a callback raises.

        Returns:
            True if every staged rule passed.
        """
        display = label or self.config.label_for(field)
        self._labels[field] = display
        value = self.value(field)

        try:
            for rule in self._registry.pending():
                if not rule.check(value):
                    self._errors[field] = format_message(rule.template, display)
                    logger.debug("Field %r failed rule %r", field, rule.name)
                    return False
            logger.debug("Field %r passed %d rule(s)", field, len(self._registry.chain))
            return True
        finally:
            self._registry.chain.clear()

    # -- Error store --

    @property
    def errors(self) -> Mapping[str, str]:
        """Read-only view of field → message, in validation order."""
        return MappingProxyType(self._errors)

    @property
    def labels(self) -> Mapping[str, str]:
        """Read-only view of field → display label used by ``validate()``."""
        return MappingProxyType(self._labels)

    def has_errors(self) -> bool:
        """Whether any field has failed."""
        return bool(self._errors)

    def get_error(self, field: str) -> str | None:
        """The message stored for *field*, or None if it never failed."""
        return self._errors.get(field)

    @overload
    def get_all_errors(self, by_key: Literal[True] = ...) -> dict[str, str]: ...
    @overload
    def get_all_errors(self, by_key: Literal[False]) -> list[str]: ...
    def get_all_errors(self, by_key: bool = True) -> dict[str, str] | list[str]:
        """All messages, keyed by field, or as a list when *by_key* is False."""
        if by_key:
            return dict(self._errors)
        return list(self._errors.values())

    def result(self) -> ValidationResult:
        """Snapshot as a ``ValidationResult``: passing values and errors."""
        data = {f: self.value(f) for f in self._labels if f not in self._errors}
        return ValidationResult(data=data, errors=dict(self._errors))
