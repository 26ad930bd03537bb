"""Warble — localized routes and locale-aware URL helpers.

Declare a route once, get one route per locale with translated path
segments, and generate URLs that follow the request's locale.

Basic usage::

    from warble import DictCatalog, LocaleRegistry, LocalizedRouter, get, with_locale

    catalog = DictCatalog({"fr": {"routes": {"pages": "pages_fr"}}})
    registry = LocaleRegistry(["en", "fr"], catalog=catalog)
    router = LocalizedRouter(registry)
    router.localize(get("/pages/:page", PageController, "show"))

    with with_locale("fr", registry):
        router.helpers.page_path(None, "show", 1)   # "/pages_fr/1"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "DictCatalog",
    "GettextCatalog",
    "HelperDispatchError",
    "LinkDescriptor",
    "Locale",
    "LocaleRegistry",
    "LocalizeConfig",
    "LocalizedHelpers",
    "LocalizedRouter",
    "UrlContext",
    "WarbleError",
    "connect",
    "delete",
    "get",
    "get_locale",
    "head",
    "hreflang_links",
    "link_header",
    "link_tags",
    "live",
    "options",
    "patch",
    "post",
    "put",
    "put_locale",
    "resources",
    "route",
    "translate",
    "with_locale",
]

_DECLARATIONS = (
    "connect",
    "delete",
    "get",
    "head",
    "live",
    "options",
    "patch",
    "post",
    "put",
    "resources",
    "route",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    if name == "LocalizedRouter":
        from warble.router import LocalizedRouter

        return LocalizedRouter

    if name == "LocalizeConfig":
        from warble.config import LocalizeConfig

        return LocalizeConfig

    if name in ("Locale", "LocaleRegistry"):
        from warble import locales as _locales

        return getattr(_locales, name)

    if name in ("DictCatalog", "GettextCatalog"):
        from warble import catalog as _catalog

        return getattr(_catalog, name)

    if name in ("get_locale", "put_locale", "with_locale"):
        from warble import context as _context

        return getattr(_context, name)

    if name in _DECLARATIONS:
        from warble.routing import declare as _declare

        return getattr(_declare, name)

    if name in ("LocalizedHelpers", "UrlContext"):
        from warble import helpers as _helpers

        return getattr(_helpers, name)

    if name in ("LinkDescriptor", "hreflang_links", "link_header", "link_tags"):
        from warble import links as _links

        return getattr(_links, name)

    if name == "translate":
        from warble.routing.template import translate

        return translate

    if name in ("WarbleError", "ConfigurationError", "HelperDispatchError"):
        from warble import errors as _errors

        return getattr(_errors, name)

    msg = f"module 'warble' has no attribute {name!r}"
    raise AttributeError(msg)
