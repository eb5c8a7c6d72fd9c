"""Validation result — immutable container for validated data or errors."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a set of fields.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validate(form, rules)
        if not result:
            return render("form.html", form=form, errors=result.errors)

    ``data`` holds the raw values of the fields that passed.

    ``errors`` maps each failing field to its one message::

        {"title": "Title is required.",
         "email": "Email is an invalid email address."}
    """

    data: dict[str, str]
    errors: dict[str, str]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
