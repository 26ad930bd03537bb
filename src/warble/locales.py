"""Locales and the locale registry.

A ``Locale`` is the unit routes are multiplied over. Its ``translation``
id names the catalog locale its path segments are looked up under; a
locale without one cannot be localized and is skipped with a warning.

``LocaleRegistry`` is the enumerable set of locales plus a default and
the catalog attached to them. It is built once at setup.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator, Sequence
from dataclasses import dataclass

from babel import Locale as BabelLocale
from babel.core import UnknownLocaleError, get_global, parse_locale

from warble.catalog import TranslationCatalog, available_locales
from warble.errors import ConfigurationError


def _normalize(locale_id: str) -> str:
    return locale_id.strip().replace("_", "-")


def _likely_territory(language: str) -> str | None:
    likely = get_global("likely_subtags").get(language)
    if not likely:
        return None
    return parse_locale(likely)[1]


@dataclass(frozen=True, slots=True)
class Locale:
    """A routable locale.

    ``id`` is the public identifier (``"en-GB"``), used as the ``hreflang``
    value and as the ``{locale}`` interpolation. ``translation`` is the
    catalog locale (``"en"``) and is also appended to helper names.
    """

    id: str
    language: str
    territory: str | None = None
    translation: str | None = None

    @classmethod
    def parse(cls, locale_id: str, *, translation: str | None = None) -> Locale:
        """Build a Locale from an identifier such as ``"fr"`` or ``"en-GB"``.

        Uses Babel to split the identifier into subtags. When the id
        names no territory, the likely territory for the language is
        used (``"de"`` -> ``"DE"``).
        """
        normalized = _normalize(locale_id)
        if not normalized:
            msg = "Locale id must not be empty"
            raise ConfigurationError(msg)
        try:
            parsed = BabelLocale.parse(normalized, sep="-")
            language, territory = parsed.language, parsed.territory
        except (UnknownLocaleError, ValueError):
            try:
                parts = parse_locale(normalized, sep="-")
            except ValueError as exc:
                msg = f"Invalid locale id {locale_id!r}: {exc}"
                raise ConfigurationError(msg) from exc
            language, territory = parts[0], parts[1]
        if territory is None:
            territory = _likely_territory(language)
        return cls(id=normalized, language=language, territory=territory, translation=translation)

    @property
    def localizable(self) -> bool:
        return self.translation is not None

    def __str__(self) -> str:
        return self.id


class LocaleRegistry:
    """The configured locales, the default locale, and the catalog.

    Usage::

        registry = LocaleRegistry(
            ["en", "fr", "de"],
            default="en",
            catalog=GettextCatalog("priv/gettext"),
        )

    Locales given as strings get their translation id from the catalog:
    the exact id, then the POSIX form (``en_GB``), then the bare language.
    When the catalog cannot enumerate its locales, the id itself is used.
    """

    __slots__ = ("_by_id", "_catalog", "_default", "_locales")

    def __init__(
        self,
        locales: Sequence[Locale | str],
        *,
        default: str | None = None,
        catalog: TranslationCatalog | None = None,
    ) -> None:
        if not locales:
            msg = "A locale registry needs at least one locale"
            raise ConfigurationError(msg)
        self._catalog = catalog
        known = available_locales(catalog) if catalog is not None else None
        resolved: list[Locale] = []
        for entry in locales:
            if isinstance(entry, Locale):
                resolved.append(entry)
            else:
                resolved.append(Locale.parse(entry, translation=_match_translation(entry, known)))
        self._locales: tuple[Locale, ...] = tuple(resolved)
        self._by_id: dict[str, Locale] = {}
        for locale in self._locales:
            if locale.id in self._by_id:
                msg = f"Locale {locale.id!r} is registered twice"
                raise ConfigurationError(msg)
            self._by_id[locale.id] = locale
        default_id = _normalize(default) if default else self._locales[0].id
        if default_id not in self._by_id:
            msg = f"Default locale {default_id!r} is not one of the registered locales"
            raise ConfigurationError(msg)
        self._default = self._by_id[default_id]

    @property
    def locales(self) -> tuple[Locale, ...]:
        return self._locales

    @property
    def default(self) -> Locale:
        return self._default

    @property
    def catalog(self) -> TranslationCatalog | None:
        return self._catalog

    def known_locale_ids(self) -> tuple[str, ...]:
        return tuple(locale.id for locale in self._locales)

    def validate(self, locale: Locale | str) -> Locale:
        """Return the registered Locale for *locale*.

        Raises ``ConfigurationError`` for ids that are not registered.
        Locale instances are returned as they are.
        """
        if isinstance(locale, Locale):
            return locale
        found = self._by_id.get(_normalize(locale))
        if found is None:
            known = ", ".join(self.known_locale_ids())
            msg = f"Unknown locale {locale!r}. Known locales: {known}"
            raise ConfigurationError(msg)
        return found

    def ensure_catalog(self) -> TranslationCatalog:
        """Return the attached catalog or fail setup."""
        if self._catalog is None:
            msg = (
                "The locale registry does not have a translation catalog attached. "
                "A catalog is required to define localized routes; path segments "
                'are looked up in it under the "routes" domain.'
            )
            raise ConfigurationError(msg)
        return self._catalog

    def unique_translation_locales(self) -> tuple[Locale, ...]:
        """One localizable locale per distinct translation id, first wins."""
        seen: set[str] = set()
        unique: list[Locale] = []
        for locale in self._locales:
            if locale.translation is None or locale.translation in seen:
                continue
            seen.add(locale.translation)
            unique.append(locale)
        return tuple(unique)

    def __iter__(self) -> Iterator[Locale]:
        return iter(self._locales)

    def __len__(self) -> int:
        return len(self._locales)

    def __contains__(self, locale: object) -> bool:
        if isinstance(locale, Locale):
            return self._by_id.get(locale.id) == locale
        if isinstance(locale, str):
            return _normalize(locale) in self._by_id
        return False

    def __repr__(self) -> str:
        return f"LocaleRegistry({list(self.known_locale_ids())!r}, default={self._default.id!r})"


def _match_translation(locale_id: str, known: Collection[str] | None) -> str | None:
    normalized = _normalize(locale_id)
    if known is None:
        return normalized
    candidates = [normalized, normalized.replace("-", "_"), normalized.split("-", 1)[0]]
    for candidate in candidates:
        if candidate in known:
            return candidate
    return None
