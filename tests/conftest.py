"""Shared fixtures: a locale registry over a small in-memory catalog."""

import pytest

from warble.catalog import DictCatalog
from warble.config import LocalizeConfig
from warble.errors import UnlocalizableLocaleWarning
from warble.locales import LocaleRegistry
from warble.router import LocalizedRouter
from warble.routing.declare import get, resources

SEGMENTS = ("pages", "users", "faces", "posts", "about", "chat")


class PageController:
    pass


class UserController:
    pass


class FaceController:
    pass


def _entries(locale: str) -> dict[str, str]:
    return {segment: f"{segment}_{locale}" for segment in SEGMENTS}


@pytest.fixture
def catalog() -> DictCatalog:
    """``fr`` and ``de`` translate every segment to ``<segment>_<locale>``; ``en`` is identity."""
    return DictCatalog(
        {
            "en": {"routes": {}},
            "fr": {"routes": _entries("fr")},
            "de": {"routes": _entries("de")},
        }
    )


@pytest.fixture
def registry(catalog: DictCatalog) -> LocaleRegistry:
    """en, fr, de, en-GB and en-AU (both translated as ``en``), and es with no translation."""
    return LocaleRegistry(["en", "fr", "de", "en-GB", "en-AU", "es"], catalog=catalog)


@pytest.fixture
def config() -> LocalizeConfig:
    return LocalizeConfig()


@pytest.fixture
def router(registry: LocaleRegistry) -> LocalizedRouter:
    """A router with a page route, a nested user/face resource and a health check."""
    r = LocalizedRouter(registry)
    with pytest.warns(UnlocalizableLocaleWarning):
        r.localize(
            get("/pages/:page", PageController, "show"),
            resources("/users", UserController, children=[resources("/faces", FaceController)]),
        )
    r.add(get("/health", PageController, "health", name="health"))
    return r
