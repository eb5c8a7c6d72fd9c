"""Rule registry and the pending chain.

A rule is stored by value as a ``RegisteredRule``: predicate, bound
arguments, and message template. The ``RuleChain`` holds the names staged
for the next ``validate()`` call, in staging order, and nothing else.

Registration follows three rules:

- a name already pending in the chain is left untouched, so calling the
  same builder twice in one chain stages it once;
- the predicate stored the first time a name is registered is kept for
  the registry's lifetime;
- arguments and template are re-bound each time the name is staged into a
  fresh chain (``min(10)`` for one field, ``min(0)`` for the next).
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from typing import Any

from fieldcheck.errors import ConfigurationError

logger = logging.getLogger("fieldcheck.validation")


@dataclass(frozen=True, slots=True)
class RegisteredRule:
    """A named predicate with its bound arguments and message template."""

    name: str
    predicate: Callable[..., Any]
    args: tuple[Any, ...] = ()
    template: str = ""

    def check(self, value: str) -> bool:
        """Run the predicate against *value* with the bound arguments."""
        return bool(self.predicate(value, *self.args))


class RuleChain:
    """Ordered set of rule names staged for the next ``validate()`` call.

    Cleared after every evaluation, pass or fail.
    """

    __slots__ = ("_names",)

    def __init__(self) -> None:
        self._names: dict[str, None] = {}

    def stage(self, name: str) -> bool:
        """Add *name* to the chain. Returns False if it was already pending."""
        if name in self._names:
            return False
        self._names[name] = None
        return True

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)

    def __repr__(self) -> str:
        return f"RuleChain({list(self._names)!r})"


class RuleRegistry:
    """Rule name → ``RegisteredRule``, plus the chain being built."""

    __slots__ = ("_rules", "chain")

    def __init__(self) -> None:
        self._rules: dict[str, RegisteredRule] = {}
        self.chain = RuleChain()

    def register(
        self,
        name: str,
        predicate: Callable[..., Any],
        args: tuple[Any, ...] = (),
        template: str = "",
    ) -> bool:
        """Stage *name* with its predicate, arguments and template.

        Returns True if the rule was staged, False if it was already
        pending in the current chain.

        Raises:
            ConfigurationError: If *predicate* is not callable.
        """
        if name in self.chain:
            return False

        existing = self._rules.get(name)
        if existing is None:
            if not callable(predicate):
                msg = f"Invalid function for rule: {name}"
                raise ConfigurationError(msg)
            rule = RegisteredRule(name, predicate, tuple(args), template)
        else:
            if predicate is not existing.predicate and predicate != existing.predicate:
                logger.warning("Rule %r already registered; keeping its first predicate", name)
            rule = replace(existing, args=tuple(args), template=template)

        self._rules[name] = rule
        self.chain.stage(name)
        logger.debug("Staged rule %r args=%r", name, rule.args)
        return True

    def get(self, name: str) -> RegisteredRule | None:
        return self._rules.get(name)

    def __getitem__(self, name: str) -> RegisteredRule:
        return self._rules[name]

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def pending(self) -> Iterator[RegisteredRule]:
        """Registered rules for the names in the chain, in staging order."""
        for name in self.chain:
            yield self._rules[name]
