"""Path templates — parsing, locale interpolation and segment translation.

A template is the declared route path split on the separator::

    "/{locale}/pages/:page"
        -> ["", "{locale}", "pages", ":page"]

Segments are literal text, ``:param`` parameters, or text containing
``{locale}``, ``{language}`` or ``{territory}`` placeholders. Placeholders
are interpolated first; only the remaining literal segments are looked
up in the catalog. Parameters, empty segments, interpolated segments and
synthesized action suffixes (``new``, ``edit``) are never translated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from warble.catalog import TranslationCatalog
from warble.config import LocalizeConfig
from warble.errors import MissingTranslationError, PathTemplateError
from warble.locales import Locale

logger = logging.getLogger("warble.routes")

INTERPOLATIONS = ("locale", "language", "territory")

_DEFAULT_CONFIG = LocalizeConfig()


@dataclass(frozen=True, slots=True)
class Placeholder:
    """An ``{name}`` slot inside a path segment."""

    name: str

    def __str__(self) -> str:
        return "{" + self.name + "}"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One ``/``-delimited piece of a path template.

    Literal:      ``users``        (parts=("users",))
    Param:        ``:id``          (is_param=True, param_name="id")
    Placeholder:  ``{locale}-x``   (parts=(Placeholder("locale"), "-x"))
    """

    parts: tuple[str | Placeholder, ...]
    is_param: bool = False
    param_name: str | None = None
    translatable: bool = True
    interpolated: bool = False

    @property
    def value(self) -> str:
        return "".join(str(part) for part in self.parts)

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        return tuple(part for part in self.parts if isinstance(part, Placeholder))

    @property
    def is_static(self) -> bool:
        return not self.placeholders

    @property
    def is_empty(self) -> bool:
        return self.value == ""


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """An ordered sequence of path segments. Immutable."""

    segments: tuple[PathSegment, ...]
    separator: str = "/"

    @property
    def path(self) -> str:
        return self.separator.join(segment.value for segment in self.segments)

    @property
    def is_static(self) -> bool:
        return all(segment.is_static for segment in self.segments)

    def parameter_names(self) -> tuple[str, ...]:
        """Parameter names in template order — the binding signature."""
        return tuple(
            segment.param_name
            for segment in self.segments
            if segment.is_param and segment.param_name is not None
        )

    def extend(self, other: PathTemplate) -> PathTemplate:
        """Append *other* below this template, collapsing the joining separator."""
        head = list(self.segments)
        while len(head) > 1 and head[-1].is_empty:
            head.pop()
        tail = list(other.segments)
        while tail and tail[0].is_empty:
            tail.pop(0)
        return PathTemplate(tuple(head + tail), self.separator)

    def with_param(self, name: str, marker: str = ":") -> PathTemplate:
        return self.extend(PathTemplate((_param_segment(marker + name, marker),), self.separator))

    def with_suffix(self, *names: str) -> PathTemplate:
        """Append literal segments that are never translated (``new``, ``edit``)."""
        extra = tuple(PathSegment((name,), translatable=False) for name in names)
        return self.extend(PathTemplate(extra, self.separator))

    def __str__(self) -> str:
        return self.path


def _param_segment(raw: str, marker: str) -> PathSegment:
    return PathSegment((raw,), is_param=True, param_name=raw[len(marker) :])


def _split_placeholders(raw: str, source: str) -> tuple[str | Placeholder, ...]:
    parts: list[str | Placeholder] = []
    buffer: list[str] = []
    index = 0
    while index < len(raw):
        char = raw[index]
        if char == "{":
            end = raw.find("}", index + 1)
            if end == -1:
                raise PathTemplateError(source, raw, "Unbalanced '{' in path segment.")
            name = raw[index + 1 : end].strip()
            if not name or "{" in name:
                raise PathTemplateError(source, raw, "Empty or nested placeholder.")
            if buffer:
                parts.append("".join(buffer))
                buffer = []
            parts.append(Placeholder(name))
            index = end + 1
            continue
        if char == "}":
            raise PathTemplateError(source, raw, "Unbalanced '}' in path segment.")
        buffer.append(char)
        index += 1
    if buffer or not parts:
        parts.append("".join(buffer))
    return tuple(parts)


def parse_template(path: str, config: LocalizeConfig | None = None) -> PathTemplate:
    """Parse a declared route path into a ``PathTemplate``.

    Empty segments are kept so leading and trailing separators survive a
    parse/render round trip. Raises ``PathTemplateError`` for unbalanced
    braces.

    Examples::

        "/pages/:page"        -> ["", "pages", ":page"]
        "/{locale}/pages"     -> ["", {locale}, "pages"]
    """
    config = config or _DEFAULT_CONFIG
    if not isinstance(path, str):
        raise PathTemplateError(repr(path), repr(path), "Route paths must be strings.")
    segments: list[PathSegment] = []
    for raw in path.split(config.path_separator):
        if raw.startswith(config.param_marker) and len(raw) > len(config.param_marker):
            segments.append(_param_segment(raw, config.param_marker))
        else:
            segments.append(PathSegment(_split_placeholders(raw, path)))
    return PathTemplate(tuple(segments), config.path_separator)


def _locale_value(name: str, locale: Locale) -> str | None:
    if name not in INTERPOLATIONS:
        return None
    if name == "locale":
        return locale.id.lower()
    if name == "language":
        return locale.language.lower()
    if name == "territory":
        return locale.territory.lower() if locale.territory else None
    return None


def interpolate(template: PathTemplate, locale: Locale) -> PathTemplate:
    """Replace ``{locale}``, ``{language}`` and ``{territory}`` with literal values.

    Values come from *locale* and are lowercased. A segment that held a
    placeholder becomes an interpolated literal that translation skips.
    Raises ``PathTemplateError`` when any other placeholder remains,
    since translation requires a fully static path.
    """
    segments: list[PathSegment] = []
    for segment in template.segments:
        if segment.is_static:
            segments.append(segment)
            continue
        resolved: list[str] = []
        for part in segment.parts:
            if isinstance(part, str):
                resolved.append(part)
                continue
            value = _locale_value(part.name, locale)
            if value is None:
                detail = (
                    f"Locale {locale.id!r} has no territory."
                    if part.name == "territory"
                    else "Only {locale}, {language} and {territory} can be interpolated."
                )
                raise PathTemplateError(template.path, str(part), detail)
            resolved.append(value)
        segments.append(
            replace(segment, parts=("".join(resolved),), translatable=False, interpolated=True)
        )
    return PathTemplate(tuple(segments), template.separator)


def ensure_static(template: PathTemplate) -> PathTemplate:
    """Raise ``PathTemplateError`` if *template* still has placeholders."""
    for segment in template.segments:
        if not segment.is_static:
            raise PathTemplateError(
                template.path,
                str(segment.placeholders[0]),
                "Placeholders can only be resolved on localized routes.",
            )
    return template


def _lookup(
    catalog: TranslationCatalog,
    locale: str,
    key: str,
    config: LocalizeConfig,
) -> str:
    if config.missing_translation != "fallback":
        contains = getattr(catalog, "contains", None)
        if contains is not None and not contains(config.domain, locale, key):
            if config.missing_translation == "error":
                raise MissingTranslationError(key, locale, config.domain)
            logger.warning(
                "No %r translation for path segment %r in locale %r; using original text",
                config.domain,
                key,
                locale,
            )
    return catalog.lookup(config.domain, locale, key)


def translate_segments(
    segments: Iterable[PathSegment],
    catalog: TranslationCatalog,
    locale: str,
    config: LocalizeConfig | None = None,
) -> list[str]:
    config = config or _DEFAULT_CONFIG
    translated: list[str] = []
    for segment in segments:
        if not segment.is_static:
            raise PathTemplateError(
                segment.value, str(segment.placeholders[0]), "Interpolate before translating."
            )
        if segment.is_empty or segment.is_param or not segment.translatable:
            translated.append(segment.value)
        else:
            translated.append(_lookup(catalog, locale, segment.value, config))
    return translated


def translate(
    path: str | PathTemplate,
    catalog: TranslationCatalog,
    locale: str,
    config: LocalizeConfig | None = None,
) -> str:
    """Translate every literal segment of *path* into *locale*.

    *locale* is a translation-locale id. Empty segments, ``:param``
    segments, interpolated and non-translatable segments pass through.
    A segment without a catalog entry keeps its original text unless
    ``config.missing_translation`` says otherwise.

    Usage::

        translate("/pages/:page", catalog, "fr")   # "/pages_fr/:page"
    """
    config = config or _DEFAULT_CONFIG
    template = parse_template(path, config) if isinstance(path, str) else path
    return config.path_separator.join(
        translate_segments(template.segments, catalog, locale, config)
    )


def count_parameters(template: PathTemplate | str, config: LocalizeConfig | None = None) -> int:
    if isinstance(template, str):
        template = parse_template(template, config)
    return len(template.parameter_names())

