"""Fieldcheck exception hierarchy.

Shared across the registry, the validator, and the form helpers so every
module raises and catches the same types.

A rule that rejects a value is *not* an exception: the message is stored
on the ``Validator`` and ``validate()`` returns ``False``. Only a malformed
chain (a rule that can never be evaluated) is raised.
"""


class FieldcheckError(Exception):
    """Base for all fieldcheck-specific errors."""


class ConfigurationError(FieldcheckError):
    """Raised when a validation chain is malformed.

    Typically raised while the chain is being built: a predicate that is
    not callable, a date bound that cannot be parsed, an unknown date
    format token.
    """
