"""Cross-locale links for ``hreflang`` alternates.

``links`` evaluates a helper once per sibling locale of the matching
localized routes and returns ``{locale id: absolute URL}``.
``hreflang_links`` turns that map into link descriptors, which
``link_tags`` renders as HTML and ``link_header`` as an HTTP ``Link``
header value.
"""

from __future__ import annotations

import html
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kida.template import Markup

from warble.context import with_locale

if TYPE_CHECKING:
    from warble.helpers.dispatch import LocalizedHelpers


@dataclass(frozen=True, slots=True)
class LinkDescriptor:
    """One alternate link: ``<link href=.. hreflang=.. rel="alternate">``."""

    href: str
    hreflang: str
    rel: str = "alternate"


def links(
    helpers: LocalizedHelpers,
    canonical: str,
    context: object,
    action: str,
    *bindings: object,
) -> dict[str, str]:
    """Absolute URL of every locale variant of a route.

    Variants are the localized routes sharing *canonical*, *action* and
    the binding count. Each URL is rendered under that locale with the
    first of ``config.url_suffixes``; the ambient locale is restored
    afterwards, even when a helper raises. Routes that are not localized
    have no alternates.
    """
    suffix = helpers.config.url_suffixes[0]
    result: dict[str, str] = {}
    for group in helpers.groups(canonical):
        if group.arity != len(bindings):
            continue
        for route in group.variants(action):
            for locale in route.locales:
                if locale.id in result:
                    continue
                with with_locale(locale):
                    result[locale.id] = helpers.dispatch(
                        canonical, suffix, context, action, bindings
                    )
    return result


def hreflang_links(url_map: Mapping[str, str]) -> list[LinkDescriptor]:
    """Descriptors for a ``links`` map, in the map's order."""
    return [LinkDescriptor(href=url, hreflang=locale) for locale, url in url_map.items()]


def link_tags(descriptors: Iterable[LinkDescriptor] | Mapping[str, str]) -> Markup:
    """Render descriptors as ``<link>`` tags, one per line.

    Accepts the ``links`` map directly as well.
    """
    if isinstance(descriptors, Mapping):
        descriptors = hreflang_links(descriptors)
    tags = []
    for d in descriptors:
        href, hreflang, rel = html.escape(d.href), html.escape(d.hreflang), html.escape(d.rel)
        tags.append(f'<link href="{href}" hreflang="{hreflang}" rel="{rel}">')
    return Markup("\n".join(tags))


def link_header(descriptors: Iterable[LinkDescriptor] | Mapping[str, str]) -> str:
    """Render descriptors as an HTTP ``Link`` header value."""
    if isinstance(descriptors, Mapping):
        descriptors = hreflang_links(descriptors)
    return ", ".join(
        f'<{d.href}>; rel="{d.rel}"; hreflang="{d.hreflang}"' for d in descriptors
    )
