"""Tests for warble.helpers — locale-dispatching path and URL helpers."""

from dataclasses import dataclass

import pytest

from warble.config import LocalizeConfig
from warble.context import with_locale
from warble.errors import DispatchFailure, HelperDispatchError
from warble.helpers import LocalizedHelpers, UrlContext, build, to_param
from warble.helpers.urls import PathBuilder, encode_query, is_param_bag
from warble.locales import LocaleRegistry
from warble.router import LocalizedRouter
from warble.routing.declare import get


class PageController:
    pass


@dataclass
class Article:
    slug: str

    def to_param(self) -> str:
        return self.slug


@pytest.fixture
def helpers(router: LocalizedRouter) -> LocalizedHelpers:
    return router.helpers


class TestDispatch:
    def test_follows_current_locale(self, helpers: LocalizedHelpers, registry: LocaleRegistry) -> None:
        with with_locale("fr", registry):
            assert helpers.page_path(None, "show", 1) == "/pages_fr/1"
        with with_locale("de", registry):
            assert helpers.page_path(None, "show", 1) == "/pages_de/1"

    def test_shared_translation_locale(self, helpers: LocalizedHelpers, registry: LocaleRegistry) -> None:
        with with_locale("en-AU", registry):
            assert helpers.page_path(None, "show", 1) == "/pages/1"

    def test_registry_default(self, helpers: LocalizedHelpers) -> None:
        assert helpers.page_path(None, "show", 1) == "/pages/1"

    def test_resources(self, helpers: LocalizedHelpers, registry: LocaleRegistry) -> None:
        with with_locale("fr", registry):
            assert helpers.user_path(None, "index") == "/users_fr"
            assert helpers.user_path(None, "new") == "/users_fr/new"
            assert helpers.user_path(None, "edit", 5) == "/users_fr/5/edit"
            assert helpers.user_face_path(None, "show", 5, 6) == "/users_fr/5/faces_fr/6"

    def test_unlocalized_serves_every_locale(
        self, helpers: LocalizedHelpers, registry: LocaleRegistry
    ) -> None:
        with with_locale("es", registry):
            assert helpers.health_path(None, "health") == "/health"
        with with_locale("fr", registry):
            assert helpers.health_path(None, "health") == "/health"

    def test_item_access(self, helpers: LocalizedHelpers) -> None:
        assert helpers["page_path"](None, "show", 1) == "/pages/1"
        assert "page_links" in helpers
        assert "page_url" in dir(helpers)

    def test_unknown_helper(self, helpers: LocalizedHelpers) -> None:
        with pytest.raises(AttributeError, match="nope_path"):
            helpers.nope_path  # noqa: B018
        with pytest.raises(KeyError):
            helpers["nope_path"]

    def test_entry_point_name(self, helpers: LocalizedHelpers) -> None:
        assert helpers.page_url.__name__ == "page_url"

    def test_resolve(self, helpers: LocalizedHelpers, registry: LocaleRegistry) -> None:
        with with_locale("de", registry):
            resolved = helpers.resolve("page", "show", 1)
        assert resolved is not None
        assert resolved.helper == "page_de"
        assert helpers.resolve("page", "show", 3) is None

    def test_same_name_distinct_actions(self, registry: LocaleRegistry) -> None:
        r = LocalizedRouter(registry)
        r.localize(
            get("/pages/:page", PageController, "show"),
            get("/pages/:page/print", PageController, "print"),
            locales=["en", "fr"],
        )
        with with_locale("fr", registry):
            assert r.helpers.page_path(None, "show", 1) == "/pages_fr/1"
            assert r.helpers.page_path(None, "print", 1) == "/pages_fr/1/print"

    def test_custom_suffixes(self, registry: LocaleRegistry) -> None:
        config = LocalizeConfig(suffixes=("path", "href"), url_suffixes=("href",))
        r = LocalizedRouter(registry, config)
        r.localize(get("/pages/:page", PageController, "show"), locales=["en", "fr"])
        with with_locale("fr", registry):
            assert r.helpers.page_path(None, "show", 1) == "/pages_fr/1"
            assert r.helpers.page_href(None, "show", 1) == "http://localhost/pages_fr/1"
        assert "page_url" not in r.helpers
        assert r.helpers.page_links(None, "show", 1)["fr"] == "http://localhost/pages_fr/1"


class TestParameters:
    def test_trailing_mapping(self, helpers: LocalizedHelpers, registry: LocaleRegistry) -> None:
        with with_locale("fr", registry):
            assert helpers.page_path(None, "show", 1, {"q": "a b"}) == "/pages_fr/1?q=a%20b"

    def test_trailing_pairs(self, helpers: LocalizedHelpers) -> None:
        assert helpers.page_path(None, "show", 1, [("a", 1), ("a", 2)]) == "/pages/1?a=1&a=2"

    def test_keyword(self, helpers: LocalizedHelpers) -> None:
        assert helpers.user_path(None, "index", params={"page": 2}) == "/users?page=2"

    def test_zero_arity_with_params(self, helpers: LocalizedHelpers) -> None:
        assert helpers.user_path(None, "index", {"sort": "name"}) == "/users?sort=name"

    def test_list_values(self) -> None:
        assert encode_query({"tag": ["x", "y"], "skip": None}) == "tag=x&tag=y"

    def test_to_param(self, helpers: LocalizedHelpers) -> None:
        assert to_param(Article("hello")) == "hello"
        assert to_param(True) == "true"
        assert helpers.page_path(None, "show", Article("hello-world")) == "/pages/hello-world"

    def test_bindings_are_encoded(self, helpers: LocalizedHelpers) -> None:
        assert helpers.page_path(None, "show", "a b/c") == "/pages/a%20b%2Fc"

    def test_param_bag_shapes(self) -> None:
        assert is_param_bag({"a": 1})
        assert is_param_bag([("a", 1)])
        assert is_param_bag([])
        assert not is_param_bag(5)
        assert not is_param_bag(["a"])


class TestUrls:
    def test_default_base(self, helpers: LocalizedHelpers, registry: LocaleRegistry) -> None:
        with with_locale("fr", registry):
            assert helpers.page_url(None, "show", 1) == "http://localhost/pages_fr/1"

    def test_url_context(self, helpers: LocalizedHelpers) -> None:
        ctx = UrlContext.from_url("https://example.com:8443/app")
        assert helpers.page_url(ctx, "show", 1) == "https://example.com:8443/app/pages/1"
        assert helpers.page_path(ctx, "show", 1) == "/app/pages/1"

    def test_default_port_omitted(self) -> None:
        assert UrlContext.from_url("https://example.com:443").base_url == "https://example.com"

    def test_string_context(self, helpers: LocalizedHelpers) -> None:
        assert helpers.page_url("https://example.com", "show", 1) == "https://example.com/pages/1"

    def test_object_with_base_url(self, helpers: LocalizedHelpers) -> None:
        @dataclass
        class Endpoint:
            base_url: str

        assert helpers.page_url(Endpoint("http://h/"), "show", 1) == "http://h/pages/1"

    def test_proxies(self, helpers: LocalizedHelpers) -> None:
        ctx = UrlContext.from_url("https://example.com/app")
        assert helpers.path(ctx, "/about") == "/app/about"
        assert helpers.url(ctx) == "https://example.com/app"
        assert helpers.static_path(None, "css/app.css") == "/static/css/app.css"
        assert helpers.static_url(ctx, "/app.js") == "https://example.com/app/static/app.js"

    def test_path_builder(self) -> None:
        builder = PathBuilder(("", "pages", None, "edit"))
        assert builder.arity == 1
        assert builder.build([7]) == "/pages/7/edit"
        assert PathBuilder(("", "")).build([]) == "/"


class TestDispatchErrors:
    def test_locale_mismatch(self, helpers: LocalizedHelpers, registry: LocaleRegistry) -> None:
        with pytest.raises(HelperDispatchError) as exc_info:
            with with_locale("es", registry):
                helpers.page_path(None, "show", 1)
        assert exc_info.value.kind is DispatchFailure.LOCALE_MISMATCH
        assert exc_info.value.locale == "es"

    def test_unknown_action(self, helpers: LocalizedHelpers) -> None:
        with pytest.raises(HelperDispatchError) as exc_info:
            helpers.page_path(None, "destroy", 1)
        assert exc_info.value.kind is DispatchFailure.UNKNOWN_ACTION

    def test_malformed_trailing(self, helpers: LocalizedHelpers) -> None:
        with pytest.raises(HelperDispatchError) as exc_info:
            helpers.page_path(None, "show", 1, 5)
        assert exc_info.value.kind is DispatchFailure.MALFORMED_PARAMS

    def test_malformed_keyword(self, helpers: LocalizedHelpers) -> None:
        with pytest.raises(HelperDispatchError) as exc_info:
            helpers.page_path(None, "show", 1, params="q=1")
        assert exc_info.value.kind is DispatchFailure.MALFORMED_PARAMS

    def test_signature_mismatch(self, helpers: LocalizedHelpers) -> None:
        with pytest.raises(HelperDispatchError) as exc_info:
            helpers.user_face_path(None, "show", 1)
        error = exc_info.value
        assert error.kind is DispatchFailure.SIGNATURE_MISMATCH
        assert ("show", ("user_id", "id")) in error.valid
        assert ("index", ("user_id",)) in error.valid
        assert "combinations are valid" in str(error)

    def test_is_lookup_error(self, helpers: LocalizedHelpers) -> None:
        with pytest.raises(LookupError):
            helpers.page_path(None, "show")


class TestBuild:
    def test_groups(self, router: LocalizedRouter) -> None:
        helpers = build(router.routes, router.registry)
        (group,) = helpers.groups("page")
        assert group.arity == 1
        assert group.combinations == (("show", ("page",)),)
        assert [r.helper for r in group.variants("show")] == ["page_en", "page_fr", "page_de"]

    def test_entry_points(self, router: LocalizedRouter) -> None:
        helpers = build(router.routes, router.registry)
        assert {"page_path", "page_url", "page_links", "user_face_path", "health_url"} <= set(helpers)
        assert helpers.canonical_names() == ["page", "user", "user_face", "health"]
