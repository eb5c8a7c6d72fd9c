"""Default error messages and template formatting.

A template carries one ``{label}`` placeholder for the field's display
label. Parameterized templates also name their bound arguments
(``{value}``, ``{length}``, ...); those are filled once, when the rule is
staged, so the stored template only waits for the label::

    template = default_message("minlength", {"length": 3})
    # "{label} must be at least 3 characters or longer."
    format_message(template, "Username")
    # "Username must be at least 3 characters or longer."

``%s`` is accepted in caller-supplied messages as an alias for ``{label}``;
``normalize_message`` rewrites it before any parameters are bound.
"""

from collections.abc import Mapping
from datetime import date
from types import MappingProxyType
from typing import Any

LABEL = "{label}"

FALLBACK_MESSAGE = "{label} has an error."

# Keyed by message key, which is the rule name except for the exclusive
# variants of min/max.
DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType({
    "required": "{label} is required.",
    "email": "{label} is an invalid email address.",
    "ip": "{label} is an invalid IP address.",
    "url": "{label} is an invalid url.",
    "float": "{label} must consist of numbers only.",
    "integer": "{label} must consist of integer value.",
    "digits": "{label} must consist only of digits.",
    "min": "{label} must be greater than or equal to {value}.",
    "min_exclusive": "{label} must be greater than {value}.",
    "max": "{label} must be less than or equal to {value}.",
    "max_exclusive": "{label} must be less than {value}.",
    "between": "{label} must be between {min} and {max}.",
    "minlength": "{label} must be at least {length} characters or longer.",
    "maxlength": "{label} must be no longer than {length} characters.",
    "length": "{label} must be exactly {length} characters in length.",
    "matches": "{label} must match {other}.",
    "notmatches": "{label} must not match {other}.",
    "date": "{label} is not a valid date.",
    "mindate": "{label} must be later than {date}.",
    "maxdate": "{label} must be earlier than {date}.",
    "oneof": "{label} must be one of {choices}.",
    "ccnum": "{label} must be a valid credit card number.",
})


def render_value(value: Any) -> str:
    """Render a bound argument for message text.

    Integral floats drop their ``.0``; collections are comma-joined.
    """
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(render_value(v) for v in value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def default_message(
    key: str,
    params: Mapping[str, Any] | None = None,
    overrides: Mapping[str, str] | None = None,
    fallback: str = FALLBACK_MESSAGE,
) -> str:
    """Return the template for *key* with bound *params* filled in.

    *overrides* (usually ``ValidatorConfig.messages``) win over the
    built-in table. Unknown keys get *fallback*.
    """
    template = None
    if overrides:
        template = overrides.get(key)
    if template is None:
        template = DEFAULT_MESSAGES.get(key, fallback)
    else:
        template = normalize_message(template)
    return bind_params(template, params)


def normalize_message(text: str) -> str:
    """Rewrite the ``%s`` label alias in caller text to ``{label}``."""
    return text.replace("%s", LABEL)


def bind_params(template: str, params: Mapping[str, Any] | None) -> str:
    """Fill named parameter placeholders, leaving ``{label}`` alone."""
    if not params:
        return template
    for name, value in params.items():
        template = template.replace("{" + name + "}", render_value(value))
    return template


def format_message(template: str, label: str) -> str:
    """Substitute the display label into *template*.

    Plain replacement, not ``str.format``: bound values may contain braces.
    """
    return template.replace(LABEL, label)
