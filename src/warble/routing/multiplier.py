"""Route multiplier — one declared route into one concrete route per locale.

For every declared route and every usable locale::

    interpolate -> translate -> name helper -> attach locale -> deduplicate

Declared routes are processed in declaration order and locales in the
order they were supplied. The first concrete route for a given
(methods, path, handler, action) key owns the table entry; later
duplicates only add their locale to ``metadata["locales"]``. This is
what collapses the identical routes produced when several locales fall
back to the untranslated text.

A locale without a translation id is skipped with an
``UnlocalizableLocaleWarning``; it never fails the build.
"""

import logging
import warnings
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from warble.catalog import TranslationCatalog
from warble.config import LocalizeConfig
from warble.errors import ConfigurationError, UnlocalizableLocaleWarning
from warble.locales import Locale
from warble.routing.naming import localized_helper, resource_name
from warble.routing.resources import check_verb, expand_resources, template_of
from warble.routing.route import AbstractRoute, ConcreteRoute
from warble.routing.template import ensure_static, interpolate, translate

logger = logging.getLogger("warble.routes")


@dataclass(frozen=True, slots=True)
class SkippedLocale:
    """A locale that produced no routes for a declaration."""

    locale: Locale
    verb: str
    path: str


@dataclass(slots=True)
class RouteSet:
    """Ordered, deduplicating collection of concrete routes.

    Mutable during a build only; the router freezes its contents into a
    tuple once every declaration has been multiplied.
    """

    routes: list[ConcreteRoute] = field(default_factory=list)
    skipped: list[SkippedLocale] = field(default_factory=list)
    _index: dict[tuple[object, ...], int] = field(default_factory=dict)

    def add(self, route: ConcreteRoute) -> ConcreteRoute:
        """Insert *route* or merge its locale into the entry that owns its key."""
        key = route.key
        position = self._index.get(key)
        if position is None:
            self._index[key] = len(self.routes)
            self.routes.append(route)
            return route

        existing = self.routes[position]
        if route.locale is not None:
            merged = existing.with_locale(route.locale)
            if merged is not existing:
                logger.debug(
                    "Merged %s %s (%s) into the %s route",
                    route.verb.upper(),
                    route.path,
                    route.locale.id,
                    existing.locale.id if existing.locale else "unlocalized",
                )
            self.routes[position] = merged
        return self.routes[position]

    def __len__(self) -> int:
        return len(self.routes)


class Multiplier:
    """Expands abstract routes into locale-specific concrete routes.

    Usage::

        multiplier = Multiplier(catalog)
        routes = multiplier.expand(get("/pages/:page", PageController, "show"), locales)
    """

    __slots__ = ("_catalog", "_config")

    def __init__(
        self,
        catalog: TranslationCatalog | None,
        config: LocalizeConfig | None = None,
    ) -> None:
        self._catalog = catalog
        self._config = config or LocalizeConfig()

    @property
    def config(self) -> LocalizeConfig:
        return self._config

    def expand(self, route: AbstractRoute, locales: Sequence[Locale]) -> list[ConcreteRoute]:
        """Multiply one declared route over *locales*."""
        table = RouteSet()
        self.expand_into(route, locales, table)
        return table.routes

    def expand_all(
        self,
        routes: Iterable[AbstractRoute],
        locales: Sequence[Locale],
    ) -> list[ConcreteRoute]:
        """Multiply a declaration list, deduplicating across all of it."""
        table = RouteSet()
        for route in routes:
            self.expand_into(route, locales, table)
        return table.routes

    def expand_into(
        self,
        route: AbstractRoute,
        locales: Sequence[Locale],
        table: RouteSet,
    ) -> None:
        """Multiply *route* into an existing table.

        Resource trees are flattened first, then each locale produces the
        whole flattened tree so routes for one locale stay together.
        """
        check_verb(route)
        nodes = expand_resources(route, self._config)
        for locale in locales:
            if not locale.localizable:
                table.skipped.append(SkippedLocale(locale, route.verb, route.path))
                _warn_unlocalizable(locale, route)
                continue
            for node in nodes:
                table.add(self.localize(node, locale))

    def localize(self, node: AbstractRoute, locale: Locale) -> ConcreteRoute:
        """Produce the concrete route for one expanded node and one locale."""
        if locale.translation is None:
            msg = f"Locale {locale.id!r} has no translation id"
            raise ValueError(msg)
        if self._catalog is None:
            msg = "No translation catalog configured for localized routes"
            raise ConfigurationError(msg)
        template = template_of(node, self._config)
        path = translate(
            interpolate(template, locale),
            self._catalog,
            locale.translation,
            self._config,
        )
        base = node.options.name or resource_name(node.handler, self._config.handler_suffixes)
        return ConcreteRoute(
            verb=node.verb,
            methods=node.http_methods,
            path=path,
            handler=node.handler,
            action=node.action or "index",
            helper=localized_helper(base, locale),
            canonical=base,
            locale=locale,
            bindings=template.parameter_names(),
            metadata=MappingProxyType({**node.options.metadata, "locales": (locale,)}),
            original_path=template.path,
            source=node,
        )

    def unlocalized(self, route: AbstractRoute, table: RouteSet) -> None:
        """Add *route* to *table* without localizing it."""
        for node in expand_resources(route, self._config):
            template = ensure_static(template_of(node, self._config))
            base = node.options.name or resource_name(node.handler, self._config.handler_suffixes)
            table.add(
                ConcreteRoute(
                    verb=node.verb,
                    methods=node.http_methods,
                    path=template.path,
                    handler=node.handler,
                    action=node.action or "index",
                    helper=base,
                    canonical=base,
                    locale=None,
                    bindings=template.parameter_names(),
                    metadata=MappingProxyType(dict(node.options.metadata)),
                    original_path=template.path,
                    source=node,
                )
            )


def _warn_unlocalizable(locale: Locale, route: AbstractRoute) -> None:
    msg = (
        f"No known translation locale for {locale.id!r}. "
        f"No {locale.id!r} localized routes will be generated for {route.verb} {route.path!r}"
    )
    logger.warning(msg)
    warnings.warn(msg, UnlocalizableLocaleWarning, stacklevel=4)
