"""Validator configuration.

One frozen dataclass holds every default a Validator falls back on: date
format, display label, message templates, log level.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Validator configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ValidatorConfig(date_format="Y-m-d", messages={"required": "{label}?"})
    """

    # Dates
    date_format: str = "d/m/Y"
    date_separators: str = "-./ "  # Used when a date rule gets no explicit separator

    # Messages
    default_label: str = 'Field with the name of "{field}"'
    fallback_message: str = "{label} has an error."
    messages: Mapping[str, str] = field(default_factory=dict)  # Per-rule template overrides

    # Logging
    log_level: str | int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    def label_for(self, field_name: str) -> str:
        """Display label used when ``validate()`` is called without one."""
        return self.default_label.replace("{field}", field_name)


def configure_logging(config: ValidatorConfig) -> None:
    """Apply ``config.log_level`` to the ``fieldcheck`` logger.

    No handlers are installed; the application owns log output.
    """
    if config.log_level is None:
        return
    level = config.log_level
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger("fieldcheck").setLevel(level)
