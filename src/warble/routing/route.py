"""AbstractRoute and ConcreteRoute frozen dataclasses.

An ``AbstractRoute`` is what the developer declares. The multiplier turns
each one into ``ConcreteRoute`` objects, one per usable locale, which
live in the route table for the rest of the program.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from warble._internal.types import Handler

if TYPE_CHECKING:
    from warble.locales import Locale
    from warble.routing.template import PathTemplate

# Verb -> HTTP methods for single routes
VERB_METHODS: dict[str, frozenset[str]] = {
    "get": frozenset({"GET"}),
    "put": frozenset({"PUT"}),
    "patch": frozenset({"PATCH"}),
    "post": frozenset({"POST"}),
    "delete": frozenset({"DELETE"}),
    "options": frozenset({"OPTIONS"}),
    "head": frozenset({"HEAD"}),
    "connect": frozenset({"CONNECT"}),
    "live": frozenset({"GET"}),
}

LOCALIZABLE_VERBS: tuple[str, ...] = (
    "resources",
    "get",
    "put",
    "patch",
    "post",
    "delete",
    "options",
    "head",
    "connect",
    "live",
)

RESOURCE_ACTIONS: tuple[str, ...] = ("index", "edit", "new", "show", "create", "update", "delete")

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def handler_name(handler: Handler) -> str:
    """Human-readable name for a handler (class, function, or dotted string)."""
    if isinstance(handler, str):
        return handler
    return getattr(handler, "__qualname__", None) or getattr(
        handler, "__name__", type(handler).__name__
    )


@dataclass(frozen=True, slots=True)
class RouteOptions:
    """The option bag of a declared route.

    ``name`` is the explicit helper alias. ``children`` only apply to
    ``resources``, as do ``only``, ``except_`` and ``param``.
    """

    name: str | None = None
    metadata: Mapping[str, Any] = _EMPTY
    children: tuple[AbstractRoute, ...] = ()
    only: tuple[str, ...] | None = None
    except_: tuple[str, ...] = ()
    param: str | None = None


@dataclass(frozen=True, slots=True)
class AbstractRoute:
    """A declared route before locale multiplication. Immutable.

    ``expanded`` marks nodes produced by resource expansion. They are
    never fed back into resource expansion, which keeps nested resource
    trees from being rewritten twice.
    """

    verb: str
    path: str
    handler: Handler
    action: str | None = None
    options: RouteOptions = field(default_factory=RouteOptions)
    expanded: bool = False
    methods: frozenset[str] | None = None
    template: PathTemplate | None = field(default=None, compare=False, repr=False)

    @property
    def http_methods(self) -> frozenset[str]:
        if self.methods is not None:
            return self.methods
        return VERB_METHODS.get(self.verb, frozenset({self.verb.upper()}))

    @property
    def name(self) -> str | None:
        return self.options.name

    @property
    def handler_name(self) -> str:
        return handler_name(self.handler)


@dataclass(frozen=True, slots=True)
class ConcreteRoute:
    """One fully resolved route, produced once by the multiplier.

    ``locale`` is the locale that first produced this route, or ``None``
    for routes that are not localized. ``metadata["locales"]`` lists every
    sibling locale that resolved to the same path, handler and action.
    """

    verb: str
    methods: frozenset[str]
    path: str
    handler: Handler
    action: str
    helper: str | None
    canonical: str | None
    locale: Locale | None
    bindings: tuple[str, ...]
    metadata: Mapping[str, Any] = _EMPTY
    original_path: str = ""
    source: AbstractRoute | None = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> tuple[frozenset[str], str, Handler, str]:
        """Identity used for deduplication."""
        return (self.methods, self.path, self.handler, self.action)

    @property
    def locales(self) -> tuple[Locale, ...]:
        return self.metadata.get("locales", ())

    @property
    def localized(self) -> bool:
        return self.locale is not None

    @property
    def arity(self) -> int:
        return len(self.bindings)

    def with_locale(self, locale: Locale) -> ConcreteRoute:
        """Return a copy with *locale* added to the sibling locale list."""
        if locale in self.locales:
            return self
        metadata = MappingProxyType({**self.metadata, "locales": (*self.locales, locale)})
        return replace(self, metadata=metadata)

    def info(self) -> dict[str, Any]:
        """Introspection view used by listing tools."""
        return {
            "verb": self.verb,
            "methods": sorted(self.methods),
            "path": self.path,
            "handler": handler_name(self.handler),
            "action": self.action,
            "helper_name": self.helper,
            "locales": [locale.id for locale in self.locales],
        }

