"""Field validation — fluent rule chains, one message per field.

Usage::

    from fieldcheck.validation import Validator

    def create_account(form):
        v = Validator(form)
        v.required().email().validate("email", "Email")
        v.required().minlength(8).validate("password", "Password")
        v.matches("password", "Password").validate("confirm", "Confirmation")
        if v.has_errors():
            return render("signup.html", form=form, errors=v.get_all_errors())

Or declare every chain up front with ``validate()``::

    result = validate(form, {
        "email": lambda v: v.required().email(),
        "age": lambda v: v.integer().between(18, 120),
    })
    if not result:
        ...
"""

from collections.abc import Callable, Mapping
from typing import Any

from fieldcheck.config import ValidatorConfig
from fieldcheck.validation.callbacks import (
    EqualityPredicate,
    InvocablePredicate,
    PatternPredicate,
    classify_callback,
    literal,
    pattern,
)
from fieldcheck.validation.result import ValidationResult
from fieldcheck.validation.rules import RegisteredRule, RuleChain, RuleRegistry
from fieldcheck.validation.validator import Validator

__all__ = [
    "EqualityPredicate",
    "InvocablePredicate",
    "PatternPredicate",
    "RegisteredRule",
    "RuleChain",
    "RuleRegistry",
    "ValidationResult",
    "Validator",
    "classify_callback",
    "literal",
    "pattern",
    "validate",
]

type ChainBuilder = Callable[[Validator], Any]


def validate(
    data: Mapping[str, Any],
    rules: Mapping[str, ChainBuilder],
    labels: Mapping[str, str] | None = None,
    *,
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """Validate several fields in one call.

    Args:
        data: Any mapping of field names to values, such as ``FormData``
            or a plain ``dict``.
        rules: Field name → a function that stages the field's chain on
            the ``Validator`` it is given.
        labels: Optional display labels by field name.
        config: Optional ``ValidatorConfig`` for the shared Validator.

    Returns:
        A ``ValidationResult``: ``.data`` holds the raw values of passing
        fields, ``.errors`` one message per failing field.

    Example::

        result = validate(form, {
            "title": lambda v: v.required().maxlength(200),
            "body": lambda v: v.required().minlength(10),
        }, labels={"title": "Title"})
        if not result:
            # result.errors == {"body": 'Field with the name of "body" is required.'}
            ...
    """
    labels = labels or {}
    validator = Validator(data, config=config)
    for field_name, build in rules.items():
        build(validator)
        validator.validate(field_name, labels.get(field_name))
    return validator.result()
