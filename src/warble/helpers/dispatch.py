"""Locale-dispatching helper functions.

For every canonical helper name the table exposes one entry point per
configured suffix (``page_path``, ``page_url``) plus ``page_links``. An
entry point picks the concrete route at call time from:

- the ambient current locale (its translation id),
- the action,
- the number of positional bindings.

The index is built once, when the router freezes, and never mutated.
Failures are diagnosed lazily, only when a call misses.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from warble.config import LocalizeConfig
from warble.context import get_locale
from warble.errors import DispatchFailure, HelperDispatchError
from warble.helpers.group import HelperGroup
from warble.helpers.urls import PathBuilder, base_url, encode_query, is_param_bag, script_name
from warble.links import LinkDescriptor, hreflang_links, links
from warble.locales import Locale, LocaleRegistry
from warble.routing.route import ConcreteRoute

logger = logging.getLogger("warble.helpers")

# (canonical, locale translation id or None, action, arity)
type DispatchKey = tuple[str, str | None, str, int]


@dataclass(frozen=True, slots=True)
class _Target:
    route: ConcreteRoute
    builder: PathBuilder


class LocalizedHelpers:
    """The frozen helper namespace of a localized router.

    Usage::

        helpers = router.helpers
        with with_locale("fr", registry):
            helpers.page_path(None, "show", 1)           # "/pages_fr/1"
            helpers.page_url(None, "show", 1, {"q": 2})  # "http://localhost/pages_fr/1?q=2"
            helpers["page_links"](None, "show", 1)      # {"en": ..., "fr": ...}
    """

    __slots__ = ("_config", "_entries", "_groups", "_registry", "_table")

    def __init__(
        self,
        routes: Iterable[ConcreteRoute],
        registry: LocaleRegistry | None = None,
        config: LocalizeConfig | None = None,
    ) -> None:
        self._config = config or LocalizeConfig()
        self._registry = registry
        self._table: dict[DispatchKey, _Target] = {}
        self._groups: dict[str, dict[int, HelperGroup]] = {}
        self._entries: dict[str, Callable[..., Any]] = {}

        for route in routes:
            if route.canonical is None:
                continue
            target = _Target(route, PathBuilder.compile(route.path, self._config))
            arity = route.arity
            keys = [t.translation for t in route.locales if t.translation] or [None]
            for key in keys:
                self._table.setdefault((route.canonical, key, route.action, arity), target)
            family = self._groups.setdefault(route.canonical, {})
            family.setdefault(arity, HelperGroup(route.canonical, arity)).add(route)

        for canonical in self._groups:
            for suffix in self._config.suffixes:
                self._entries[f"{canonical}_{suffix}"] = self._entry(canonical, suffix)
            self._entries[f"{canonical}_links"] = self._links_entry(canonical)

        logger.debug(
            "Built %d helper entry points over %d dispatch keys",
            len(self._entries),
            len(self._table),
        )

    # -- Namespace ---------------------------------------------------------

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._entries[name]
        except KeyError:
            msg = f"No helper named {name!r}"
            raise AttributeError(msg) from None

    def __getitem__(self, name: str) -> Callable[..., Any]:
        try:
            return self._entries[name]
        except KeyError:
            msg = f"No helper named {name!r}"
            raise KeyError(msg) from None

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __dir__(self) -> list[str]:
        return sorted({*object.__dir__(self), *self._entries})

    def __repr__(self) -> str:
        return f"<LocalizedHelpers {len(self._groups)} helpers>"

    @property
    def config(self) -> LocalizeConfig:
        return self._config

    @property
    def registry(self) -> LocaleRegistry | None:
        return self._registry

    def groups(self, canonical: str) -> list[HelperGroup]:
        """Helper groups of *canonical*, ordered by arity."""
        family = self._groups.get(canonical, {})
        return [family[arity] for arity in sorted(family)]

    def canonical_names(self) -> list[str]:
        return list(self._groups)

    # -- Dispatch ----------------------------------------------------------

    def current_locale(self) -> Locale | None:
        return get_locale(self._registry)

    def dispatch(
        self,
        canonical: str,
        suffix: str,
        context: object,
        action: str,
        args: tuple[object, ...],
        params: object = None,
    ) -> str:
        """Resolve and render one helper call.

        When *params* is not passed explicitly, a trailing positional
        argument is taken as the parameter bag if the remaining arguments
        match a known arity for the action.
        """
        locale = self.current_locale()
        bindings = args
        if params is None and args:
            arities = self._arities(canonical, action)
            if len(args) not in arities and len(args) - 1 in arities:
                bindings, params = args[:-1], args[-1]

        target = self._resolve(canonical, locale, action, len(bindings))
        if target is None or (params is not None and not is_param_bag(params)):
            raise self._diagnose(canonical, suffix, locale, action, len(bindings), params)
        return self._render(target, suffix, context, bindings, params)

    def resolve(self, canonical: str, action: str, arity: int) -> ConcreteRoute | None:
        """The concrete route a call would use under the current locale."""
        target = self._resolve(canonical, self.current_locale(), action, arity)
        return target.route if target else None

    def render(
        self,
        route: ConcreteRoute,
        suffix: str,
        context: object,
        bindings: tuple[object, ...] = (),
        params: object = None,
    ) -> str:
        """Render *route* directly, bypassing locale selection."""
        target = _Target(route, PathBuilder.compile(route.path, self._config))
        return self._render(target, suffix, context, bindings, params)

    def _arities(self, canonical: str, action: str) -> set[int]:
        return {
            group.arity
            for group in self._groups.get(canonical, {}).values()
            if action in group.actions
        }

    def _resolve(
        self,
        canonical: str,
        locale: Locale | None,
        action: str,
        arity: int,
    ) -> _Target | None:
        if locale is not None and locale.translation is not None:
            target = self._table.get((canonical, locale.translation, action, arity))
            if target is not None:
                return target
        # Unlocalized routes serve every locale
        return self._table.get((canonical, None, action, arity))

    def _render(
        self,
        target: _Target,
        suffix: str,
        context: object,
        bindings: tuple[object, ...],
        params: object,
    ) -> str:
        path = script_name(context) + target.builder.build(bindings)
        query = encode_query(params)  # type: ignore[arg-type]
        if query:
            path = f"{path}?{query}"
        if suffix in self._config.url_suffixes:
            return base_url(context, self._config) + path
        return path

    def _diagnose(
        self,
        canonical: str,
        suffix: str,
        locale: Locale | None,
        action: str,
        arity: int,
        params: object,
    ) -> HelperDispatchError:
        helper = f"{canonical}_{suffix}"
        locale_id = locale.id if locale is not None else None
        current = locale.translation if locale is not None else None
        groups = self.groups(canonical)
        valid = tuple(pair for group in groups for pair in group.combinations)

        other_locales = [
            key[1]
            for key in self._table
            if key[0] == canonical
            and key[2] == action
            and key[3] == arity
            and key[1] not in (None, current)
        ]
        if other_locales and self._resolve(canonical, locale, action, arity) is None:
            kind = DispatchFailure.LOCALE_MISMATCH
        elif not any(action in group.actions for group in groups):
            kind = DispatchFailure.UNKNOWN_ACTION
        elif params is not None and not is_param_bag(params):
            kind = DispatchFailure.MALFORMED_PARAMS
        else:
            kind = DispatchFailure.SIGNATURE_MISMATCH

        error = HelperDispatchError(
            kind=kind,
            helper=helper,
            locale=locale_id,
            action=action,
            arity=arity,
            valid=valid,
        )
        logger.debug("Helper dispatch failed: %s", error)
        return error

    # -- Entry points ------------------------------------------------------

    def _entry(self, canonical: str, suffix: str) -> Callable[..., str]:
        def helper(context: object, action: str, *args: object, params: object = None) -> str:
            return self.dispatch(canonical, suffix, context, action, args, params)

        helper.__name__ = helper.__qualname__ = f"{canonical}_{suffix}"
        helper.__doc__ = f"Localized {suffix} for the {canonical!r} routes."
        return helper

    def _links_entry(self, canonical: str) -> Callable[..., dict[str, str]]:
        def helper(context: object, action: str, *bindings: object) -> dict[str, str]:
            return links(self, canonical, context, action, *bindings)

        helper.__name__ = helper.__qualname__ = f"{canonical}_links"
        helper.__doc__ = f"Alternate-locale URLs for the {canonical!r} routes."
        return helper

    # -- Proxies -----------------------------------------------------------

    def path(self, context: object, path: str) -> str:
        """Prefix a literal path with the context's mount point."""
        return script_name(context) + path

    def url(self, context: object) -> str:
        """The base URL of *context*, including its mount point."""
        return base_url(context, self._config) + script_name(context)

    def static_path(self, context: object, path: str) -> str:
        prefix = self._config.static_prefix.rstrip("/")
        return script_name(context) + prefix + "/" + path.lstrip("/")

    def static_url(self, context: object, path: str) -> str:
        return base_url(context, self._config) + self.static_path(context, path)

    @staticmethod
    def hreflang_links(url_map: Mapping[str, str]) -> list[LinkDescriptor]:
        return hreflang_links(url_map)


def build(
    routes: Iterable[ConcreteRoute],
    registry: LocaleRegistry | None = None,
    config: LocalizeConfig | None = None,
) -> LocalizedHelpers:
    """Build the helper namespace for a concrete route table."""
    return LocalizedHelpers(routes, registry, config)
