"""Ambient form data via ContextVar.

Provides:
- ``form_var``: the submitted form for the current task/thread.
- ``form_scope()``: sets ``form_var`` for the duration of a block.

A request handler (or middleware) binds the parsed form once; any
``Validator()`` built without explicit data inside that scope reads it.
Outside a scope, ``get_form()`` raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    threads. No locks needed.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

form_var: ContextVar[Mapping[str, Any]] = ContextVar("fieldcheck_form")
"""The current submitted form. Set by ``form_scope()``."""


def get_form() -> Mapping[str, Any]:
    """Return the current submitted form.

    Raises ``LookupError`` if called outside a form scope.
    """
    return form_var.get()


@contextmanager
def form_scope(form: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    """Bind *form* as the ambient form for the enclosed block.

    Usage::

        with form_scope(FormData.from_pairs(request_pairs)):
            v = Validator()
            v.required().email().validate("email", "Email")
    """
    token = form_var.set(form)
    try:
        yield form
    finally:
        form_var.reset(token)
