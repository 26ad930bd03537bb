"""LocalizedRouter — declares, multiplies and freezes the route table.

Mutable during setup: ``localize`` and ``add`` append to the table.
``localize_paths`` translates literal paths for every locale up front.
The first call that needs the compiled state (``helpers``) freezes the
router; after that the table never changes.
"""

import logging
import threading
from collections.abc import Iterable, Sequence
from typing import Any

from warble.config import LocalizeConfig
from warble.context import get_locale
from warble.errors import ConfigurationError
from warble.helpers.dispatch import LocalizedHelpers
from warble.locales import Locale, LocaleRegistry
from warble.routing.multiplier import Multiplier, RouteSet, SkippedLocale
from warble.routing.route import AbstractRoute, ConcreteRoute, handler_name
from warble.routing.template import interpolate, parse_template, translate

logger = logging.getLogger("warble.routes")


class LocalizedRouter:
    """The localized route table of an application.

    Usage::

        registry = LocaleRegistry(["en", "fr", "de"], catalog=GettextCatalog("locale"))
        router = LocalizedRouter(registry)
        router.localize(
            get("/pages/:page", PageController, "show"),
            resources("/users", UserController),
        )
        router.add(get("/health", HealthController))
        router.localize_paths("/about")

        with with_locale("de", registry):
            router.helpers.page_path(None, "show", 1)     # "/pages_de/1"
            router.localized_path("/about")               # "/ueber-uns"

    Thread safety:
        Setup happens on one thread. The freeze uses a lock with a
        double check, so concurrent first requests compile exactly once.
    """

    __slots__ = (
        "_config",
        "_freeze_lock",
        "_frozen",
        "_helpers",
        "_multiplier",
        "_paths",
        "_registry",
        "_table",
    )

    def __init__(self, registry: LocaleRegistry, config: LocalizeConfig | None = None) -> None:
        self._registry = registry
        self._config = config or LocalizeConfig()
        self._table = RouteSet()
        self._multiplier = Multiplier(registry.catalog, self._config)
        self._frozen = False
        self._freeze_lock = threading.Lock()
        self._paths: dict[str, dict[str, str]] = {}
        self._helpers: LocalizedHelpers | None = None

    @property
    def config(self) -> LocalizeConfig:
        return self._config

    @property
    def registry(self) -> LocaleRegistry:
        return self._registry

    # -- Declaration --

    def localize(
        self,
        *routes: AbstractRoute,
        locales: Iterable[Locale | str] | None = None,
    ) -> list[ConcreteRoute]:
        """Multiply *routes* over the registry locales, or over *locales*.

        Returns the routes this call added to the table. Routes that
        collapsed into an existing entry only extend its locale list.
        Raises ``ConfigurationError`` when the registry has no catalog or
        a locale id is unknown, and ``UnsupportedVerbError`` for verbs
        that cannot be localized.
        """
        self._check_not_frozen()
        self._registry.ensure_catalog()
        selected = self._select(locales)

        before = len(self._table)
        for declared in routes:
            self._multiplier.expand_into(declared, selected, self._table)
        logger.debug(
            "Localized %d declaration(s) over %s: %d new route(s)",
            len(routes),
            ", ".join(locale.id for locale in selected),
            len(self._table) - before,
        )
        return self._table.routes[before:]

    def add(self, *routes: AbstractRoute) -> list[ConcreteRoute]:
        """Register routes without localizing them."""
        self._check_not_frozen()
        before = len(self._table)
        for declared in routes:
            self._multiplier.unlocalized(declared, self._table)
        return self._table.routes[before:]

    def localize_paths(self, *paths: str) -> None:
        """Translate literal paths for every locale ahead of time.

        ``localized_path`` only selects among the results, so a path has
        to be declared here before it can be served localized.
        """
        self._check_not_frozen()
        catalog = self._registry.ensure_catalog()
        for path in paths:
            if path in self._paths:
                continue
            template = parse_template(path, self._config)
            translated: dict[tuple[str, str], str] = {}
            variants: dict[str, str] = {}
            for locale in self._registry.locales:
                if locale.translation is None:
                    continue
                interpolated = interpolate(template, locale)
                key = (interpolated.path, locale.translation)
                if key not in translated:
                    translated[key] = translate(
                        interpolated, catalog, locale.translation, self._config
                    )
                variants[locale.id] = translated[key]
            self._paths[path] = variants
        logger.debug("Localized %d literal path(s)", len(paths))

    def _select(self, locales: Iterable[Locale | str] | None) -> Sequence[Locale]:
        if locales is None:
            return self._registry.locales
        return [self._registry.validate(locale) for locale in locales]

    # -- Introspection --

    @property
    def routes(self) -> tuple[ConcreteRoute, ...]:
        """The concrete route table, in declaration order."""
        return tuple(self._table.routes)

    @property
    def skipped(self) -> tuple[SkippedLocale, ...]:
        """Locales skipped for lack of a translation, per declaration."""
        return tuple(self._table.skipped)

    def route_info(self) -> list[dict[str, Any]]:
        return [route.info() for route in self._table.routes]

    def canonical_routes(self) -> list[dict[str, Any]]:
        """The table as declared: one entry per route before localization.

        Helper names lose their locale suffix, paths are the untranslated
        templates and locales are merged across the localized variants.
        """
        merged: dict[tuple[object, ...], dict[str, Any]] = {}
        for route in self._table.routes:
            key = (route.methods, route.original_path, route.handler, route.action)
            entry = merged.get(key)
            if entry is None:
                merged[key] = entry = {
                    "verb": route.verb,
                    "methods": sorted(route.methods),
                    "path": route.original_path or route.path,
                    "handler": handler_name(route.handler),
                    "action": route.action,
                    "helper_name": route.canonical,
                    "locales": [],
                }
            for locale in route.locales:
                if locale.id not in entry["locales"]:
                    entry["locales"].append(locale.id)
        return list(merged.values())

    # -- Compiled state --

    @property
    def helpers(self) -> LocalizedHelpers:
        self._ensure_frozen()
        assert self._helpers is not None
        return self._helpers

    def localized_path(self, path: str, locale: Locale | str | None = None) -> str:
        """The variant of a declared literal path for *locale* or the current locale.

        Returns *path* unchanged when no usable locale is in effect.
        Raises ``ConfigurationError`` if *path* was never passed to
        ``localize_paths``.
        """
        variants = self._paths.get(path)
        if variants is None:
            msg = (
                f"Path {path!r} was not declared. "
                "Call router.localize_paths() with it during setup."
            )
            raise ConfigurationError(msg)
        if locale is None:
            current = get_locale(self._registry)
        else:
            current = self._registry.validate(locale)
        if current is None:
            return path
        return variants.get(current.id, path)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the helper table.

        MUST only be called while holding _freeze_lock.
        """
        self._helpers = LocalizedHelpers(self._table.routes, self._registry, self._config)
        self._frozen = True
        logger.debug("Froze route table with %d routes", len(self._table))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has been frozen. "
                "Declare every route and path before using helpers."
            )
            raise ConfigurationError(msg)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<LocalizedRouter {len(self._table)} routes, {state}>"
