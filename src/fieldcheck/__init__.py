"""Fieldcheck — server-side form field validation.

Attach an ordered chain of named rules to a field, evaluate it against the
submitted value, and collect one human-readable message per failing field.

Basic usage::

    from fieldcheck import Validator

    v = Validator({"email": "someone@example", "age": "17"})
    v.required().email().validate("email", "Email")
    v.integer().min(18).validate("age", "Age")

    v.get_all_errors()
    # {"email": "Email is an invalid email address.",
    #  "age": "Age must be greater than or equal to 18."}

Ambient form data::

    from fieldcheck import FormData, form_scope

    with form_scope(FormData.from_pairs(request_pairs)):
        v = Validator()  # reads the ambient form
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FieldcheckError",
    "FormData",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "configure_logging",
    "form_scope",
    "get_form",
    "validate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fieldcheck`` fast while providing a clean top-level API.
    """
    if name in ("Validator", "ValidationResult", "validate"):
        from fieldcheck import validation as _validation

        return getattr(_validation, name)

    if name in ("ValidatorConfig", "configure_logging"):
        from fieldcheck import config as _config

        return getattr(_config, name)

    if name in ("FieldcheckError", "ConfigurationError"):
        from fieldcheck import errors as _errors

        return getattr(_errors, name)

    if name == "FormData":
        from fieldcheck import forms as _forms

        return getattr(_forms, name)

    if name in ("form_scope", "get_form"):
        from fieldcheck import context as _context

        return getattr(_context, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
