"""Helper naming — base names from handlers, locale suffixes and stripping."""

import re
from functools import lru_cache

from warble._internal.types import Handler
from warble.locales import Locale

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """``UserProfile`` -> ``user_profile``."""
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def resource_name(handler: Handler, suffixes: tuple[str, ...] = ("Controller",)) -> str:
    """Derive a helper base name from a handler.

    Examples::

        resource_name(UserController)            -> "user"
        resource_name("MyApp.PageController")    -> "page"
        resource_name(show_page)                 -> "show_page"
    """
    if isinstance(handler, str):
        name = handler
    else:
        name = getattr(handler, "__name__", type(handler).__name__)
    name = name.rsplit(".", 1)[-1]
    for suffix in suffixes:
        if name.endswith(suffix) and name != suffix:
            name = name[: -len(suffix)]
            break
    return underscore(name)


def locale_suffix(locale: Locale | str) -> str:
    """The helper-name suffix for a locale: its translation id as an identifier."""
    translation = locale if isinstance(locale, str) else locale.translation
    if translation is None:
        msg = f"Locale {locale} has no translation id"
        raise ValueError(msg)
    return translation.replace("-", "_")


def localized_helper(base: str, locale: Locale) -> str:
    """``page`` + ``fr`` -> ``page_fr``."""
    return f"{base}_{locale_suffix(locale)}"


@lru_cache(maxsize=256)
def _locale_pattern(suffix: str) -> re.Pattern[str]:
    escaped = re.escape(suffix)
    return re.compile(rf"_{escaped}(?=_|$)")


def strip_locale(helper: str, locale: Locale | str) -> str:
    """Remove a locale suffix from a helper name, wherever it appears.

    Examples::

        strip_locale("page_fr", "fr")             -> "page"
        strip_locale("user_fr_face_fr", "fr")     -> "user_face"
    """
    pattern = _locale_pattern(locale_suffix(locale))
    return pattern.sub("", helper)
