"""Multi-valued input store for a ``Validator``.

Shaped like ``urllib.parse.parse_qs`` output: each field name maps to a
list of submitted values. Rules see the first one::

    form = FormData.from_pairs([("tag", "a"), ("tag", "b"), ("name", "")])
    form["tag"]            # "a"
    form.get_list("tag")   # ["a", "b"]

Decoding a request body is left to the caller's framework.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class FormData(Mapping[str, str]):
    """Read-only field name → values store; ``form[name]`` is the first value."""

    lists: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: tuple(items) for name, items in self.lists.items() if items}
        object.__setattr__(self, "lists", MappingProxyType(frozen))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> FormData:
        """Collect ``(name, value)`` pairs, keeping repeats in order."""
        grouped: dict[str, list[str]] = {}
        for name, value in pairs:
            grouped.setdefault(name, []).append(value)
        return cls(grouped)

    def __getitem__(self, key: str) -> str:
        return self.lists[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self.lists)

    def __len__(self) -> int:
        return len(self.lists)

    def get_list(self, key: str) -> list[str]:
        """All values submitted under *key*; empty when absent."""
        return list(self.lists.get(key, ()))
