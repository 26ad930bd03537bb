"""Translation catalogs for path segments.

A catalog answers ``lookup(domain, locale, key)`` with the translated
text, or ``key`` itself when it has no entry. Lookups happen only while
routes are multiplied, never per request.

Two implementations ship with warble:

- ``DictCatalog`` — in-memory mapping, handy for tests and small apps.
- ``GettextCatalog`` — gettext ``.po`` / ``.mo`` files laid out as
  ``<directory>/<locale>/LC_MESSAGES/<domain>.po``, read with Babel.
"""

import logging
import threading
from collections.abc import Collection, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from babel.messages.pofile import read_po
from babel.support import Translations

logger = logging.getLogger("warble.catalog")


@runtime_checkable
class TranslationCatalog(Protocol):
    """Read-only, memory-resident translation lookup."""

    def lookup(self, domain: str, locale: str, key: str) -> str: ...
    def contains(self, domain: str, locale: str, key: str) -> bool: ...


def available_locales(catalog: object) -> Collection[str] | None:
    """Return the locale ids a catalog has entries for, if it can tell."""
    method = getattr(catalog, "available_locales", None)
    if method is None:
        return None
    return method()


class DictCatalog:
    """In-memory catalog keyed ``{locale: {domain: {key: text}}}``.

    Usage::

        catalog = DictCatalog({"fr": {"routes": {"pages": "pages_fr"}}})
        catalog.lookup("routes", "fr", "pages")   # "pages_fr"
        catalog.lookup("routes", "fr", "users")   # "users"
    """

    __slots__ = ("_entries",)

    def __init__(
        self, entries: Mapping[str, Mapping[str, Mapping[str, str]]] | None = None
    ) -> None:
        self._entries: dict[str, dict[str, dict[str, str]]] = {
            locale: {domain: dict(messages) for domain, messages in domains.items()}
            for locale, domains in (entries or {}).items()
        }

    def lookup(self, domain: str, locale: str, key: str) -> str:
        return self._entries.get(locale, {}).get(domain, {}).get(key, key)

    def contains(self, domain: str, locale: str, key: str) -> bool:
        return key in self._entries.get(locale, {}).get(domain, {})

    def available_locales(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __repr__(self) -> str:
        return f"DictCatalog(locales={list(self._entries)!r})"


class GettextCatalog:
    """Catalog backed by gettext message files.

    Looks for ``<directory>/<locale>/LC_MESSAGES/<domain>.po`` first and
    falls back to the compiled ``.mo`` file. Each (domain, locale) pair is
    loaded once and cached; a missing file behaves like an empty catalog.

    Thread safety:
        Loading is guarded by a lock. Routes are normally multiplied on a
        single thread, but a shared catalog may also back ``warble check``.
    """

    __slots__ = ("_cache", "_directory", "_lock")

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._cache: dict[tuple[str, str], dict[str, str]] = {}
        self._lock = threading.Lock()

    @property
    def directory(self) -> Path:
        return self._directory

    def lookup(self, domain: str, locale: str, key: str) -> str:
        text = self._messages(domain, locale).get(key)
        return text or key

    def contains(self, domain: str, locale: str, key: str) -> bool:
        return bool(self._messages(domain, locale).get(key))

    def available_locales(self) -> tuple[str, ...]:
        if not self._directory.is_dir():
            return ()
        return tuple(
            sorted(
                entry.name
                for entry in self._directory.iterdir()
                if (entry / "LC_MESSAGES").is_dir()
            )
        )

    def _messages(self, domain: str, locale: str) -> dict[str, str]:
        cache_key = (domain, locale)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._cache.get(cache_key)
            if cached is None:
                cached = self._load(domain, locale)
                self._cache[cache_key] = cached
        return cached

    def _load(self, domain: str, locale: str) -> dict[str, str]:
        messages_dir = self._directory / locale / "LC_MESSAGES"
        po_file = messages_dir / f"{domain}.po"
        if po_file.is_file():
            with po_file.open("rb") as fh:
                catalog = read_po(fh, domain=domain)
            logger.debug("Loaded %d messages from %s", len(catalog), po_file)
            return {
                message.id: message.string
                for message in catalog
                if isinstance(message.id, str)
                and message.id
                and isinstance(message.string, str)
                and message.string
            }

        translations = Translations.load(str(self._directory), [locale], domain)
        if not isinstance(translations, Translations):
            logger.debug("No %s catalog for locale %r under %s", domain, locale, self._directory)
            return {}
        return {
            key: value
            for key, value in translations._catalog.items()  # noqa: SLF001
            if isinstance(key, str) and key and value
        }

    def __repr__(self) -> str:
        return f"GettextCatalog({str(self._directory)!r})"
