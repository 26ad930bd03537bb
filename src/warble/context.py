"""Ambient current locale via ContextVar.

Provides:
- ``locale_var``: The current ``Locale`` for this task/thread.
- ``get_locale`` / ``put_locale``: read and set it.
- ``with_locale``: scoped override that always restores the previous value.

The current locale is normally set by a middleware once the request's
locale is known. Helpers read it at call time to pick the concrete route.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading. Concurrent requests serving different locales never
    observe each other's value. No locks needed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

from warble.locales import Locale

if TYPE_CHECKING:
    from warble.locales import LocaleRegistry

locale_var: ContextVar[Locale | None] = ContextVar("warble_locale", default=None)
"""The current locale. ``None`` until a middleware or test sets it."""


def _coerce(locale: Locale | str, registry: LocaleRegistry | None) -> Locale:
    if isinstance(locale, Locale):
        return locale
    if registry is not None:
        return registry.validate(locale)
    # Without a registry the id doubles as the translation id
    return Locale.parse(locale, translation=locale.replace("_", "-"))


def get_locale(registry: LocaleRegistry | None = None) -> Locale | None:
    """Return the current locale.

    Falls back to the registry's default locale when nothing is set in
    this context and a registry is given; otherwise returns ``None``.
    """
    current = locale_var.get()
    if current is None and registry is not None:
        return registry.default
    return current


def put_locale(
    locale: Locale | str,
    registry: LocaleRegistry | None = None,
) -> Token[Locale | None]:
    """Set the current locale for this context.

    Returns the ``Token`` so callers can ``locale_var.reset(token)``.
    String ids are validated against *registry* when one is given.
    """
    return locale_var.set(_coerce(locale, registry))


@contextmanager
def with_locale(
    locale: Locale | str,
    registry: LocaleRegistry | None = None,
) -> Iterator[Locale]:
    """Temporarily switch the current locale.

    Usage::

        with with_locale("fr", registry):
            helpers.page_path(ctx, "show", 1)   # "/pages_fr/1"

    The previous locale is restored on exit, including when the body raises.
    """
    resolved = _coerce(locale, registry)
    token = locale_var.set(resolved)
    try:
        yield resolved
    finally:
        locale_var.reset(token)
