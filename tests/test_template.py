"""Tests for warble.routing.template — parsing, interpolation and translation."""

import logging

import pytest

from warble.catalog import DictCatalog
from warble.config import LocalizeConfig
from warble.errors import MissingTranslationError, PathTemplateError
from warble.locales import Locale
from warble.routing.template import (
    count_parameters,
    ensure_static,
    interpolate,
    parse_template,
    translate,
)


class TestParseTemplate:
    def test_keeps_empty_segments(self) -> None:
        template = parse_template("/pages/:page/")
        assert [s.value for s in template.segments] == ["", "pages", ":page", ""]
        assert template.path == "/pages/:page/"

    def test_param(self) -> None:
        segment = parse_template("/pages/:page").segments[2]
        assert segment.is_param
        assert segment.param_name == "page"

    def test_bare_marker_is_literal(self) -> None:
        segment = parse_template("/a/:").segments[2]
        assert not segment.is_param

    def test_placeholder_parts(self) -> None:
        segment = parse_template("/page-{locale}").segments[1]
        assert [str(part) for part in segment.parts] == ["page-", "{locale}"]
        assert not segment.is_static

    def test_unbalanced_open(self) -> None:
        with pytest.raises(PathTemplateError, match="Unbalanced"):
            parse_template("/{locale/pages")

    def test_unbalanced_close(self) -> None:
        with pytest.raises(PathTemplateError, match="Unbalanced"):
            parse_template("/locale}/pages")

    def test_parameter_names(self) -> None:
        template = parse_template("/users/:user_id/faces/:id")
        assert template.parameter_names() == ("user_id", "id")
        assert count_parameters("/users/:user_id/faces/:id") == 2

    def test_custom_marker(self) -> None:
        config = LocalizeConfig(param_marker="$")
        assert parse_template("/pages/$page", config).parameter_names() == ("page",)


class TestInterpolate:
    def test_locale(self) -> None:
        template = interpolate(parse_template("/{locale}/pages"), Locale.parse("en-GB", translation="en"))
        assert template.path == "/en-gb/pages"
        assert template.segments[1].interpolated
        assert not template.segments[1].translatable

    def test_language_and_territory(self) -> None:
        locale = Locale.parse("en-AU", translation="en")
        template = interpolate(parse_template("/{language}/{territory}/x-{locale}"), locale)
        assert template.path == "/en/au/x-en-au"

    def test_unknown_placeholder(self) -> None:
        with pytest.raises(PathTemplateError) as exc_info:
            interpolate(parse_template("/{user}/pages"), Locale.parse("fr", translation="fr"))
        assert exc_info.value.expression == "{user}"

    def test_missing_territory(self) -> None:
        locale = Locale(id="xx", language="xx", territory=None, translation="xx")
        with pytest.raises(PathTemplateError, match="no territory"):
            interpolate(parse_template("/{territory}"), locale)

    def test_static_untouched(self) -> None:
        template = parse_template("/pages/:page")
        assert interpolate(template, Locale.parse("fr", translation="fr")) == template

    def test_ensure_static(self) -> None:
        with pytest.raises(PathTemplateError):
            ensure_static(parse_template("/{locale}/pages"))


class TestTranslate:
    def test_literal_segments(self, catalog: DictCatalog) -> None:
        assert translate("/pages/:page", catalog, "fr") == "/pages_fr/:page"

    def test_identity_locale(self, catalog: DictCatalog) -> None:
        assert translate("/pages/:page", catalog, "en") == "/pages/:page"

    def test_params_never_looked_up(self) -> None:
        catalog = DictCatalog({"fr": {"routes": {":page": "nope", "page": "nope"}}})
        assert translate("/x/:page", catalog, "fr") == "/x/:page"

    def test_preserves_empty_segments(self, catalog: DictCatalog) -> None:
        assert translate("/pages//users/", catalog, "de") == "/pages_de//users_de/"

    def test_other_domain_ignored(self) -> None:
        catalog = DictCatalog({"fr": {"messages": {"pages": "pages_fr"}}})
        assert translate("/pages", catalog, "fr") == "/pages"

    def test_custom_domain(self) -> None:
        catalog = DictCatalog({"fr": {"urls": {"pages": "pages_fr"}}})
        config = LocalizeConfig(domain="urls")
        assert translate("/pages", catalog, "fr", config) == "/pages_fr"

    def test_interpolated_segment_not_translated(self) -> None:
        catalog = DictCatalog(
            {"de": {"routes": {"de": "WRONG", "pages": "pages_de", "locale": "locale"}}}
        )
        template = interpolate(
            parse_template("/{locale}/locale/pages/:page"), Locale.parse("de", translation="de")
        )
        assert translate(template, catalog, "de") == "/de/locale/pages_de/:page"

    def test_requires_interpolation(self, catalog: DictCatalog) -> None:
        with pytest.raises(PathTemplateError):
            translate("/{locale}/pages", catalog, "fr")

    def test_suffix_not_translated(self) -> None:
        catalog = DictCatalog({"fr": {"routes": {"users": "utilisateurs", "new": "nouveau"}}})
        template = parse_template("/users").with_suffix("new")
        assert translate(template, catalog, "fr") == "/utilisateurs/new"

    def test_round_trip_with_identity_catalog(self) -> None:
        for path in ("/", "/pages", "/pages/:page/", "//double//slash"):
            assert translate(path, DictCatalog(), "en") == path


class TestMissingTranslationPolicy:
    def test_fallback_is_silent(self, catalog: DictCatalog, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="warble.routes"):
            assert translate("/missing", catalog, "fr") == "/missing"
        assert caplog.records == []

    def test_warn(self, catalog: DictCatalog, caplog: pytest.LogCaptureFixture) -> None:
        config = LocalizeConfig(missing_translation="warn")
        with caplog.at_level(logging.WARNING, logger="warble.routes"):
            assert translate("/missing", catalog, "fr", config) == "/missing"
        assert "missing" in caplog.text

    def test_error(self, catalog: DictCatalog) -> None:
        config = LocalizeConfig(missing_translation="error")
        with pytest.raises(MissingTranslationError) as exc_info:
            translate("/pages/missing", catalog, "fr", config)
        assert exc_info.value.segment == "missing"
