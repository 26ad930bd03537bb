"""Kida environment binding for localized helpers.

Registers the helper namespace and the hreflang renderers as template
globals, so a layout can emit its alternates with::

    {{ link_tags(helpers.page_links(request, "show", page.id)) }}
"""

from typing import Any

from kida import Environment

from warble.helpers.dispatch import LocalizedHelpers
from warble.links import hreflang_links, link_header, link_tags


def template_globals(helpers: LocalizedHelpers, name: str = "helpers") -> dict[str, Any]:
    return {
        name: helpers,
        "hreflang_links": hreflang_links,
        "link_tags": link_tags,
        "link_header": link_header,
    }


def register_template_helpers(
    env: Environment,
    helpers: LocalizedHelpers,
    *,
    name: str = "helpers",
) -> Environment:
    """Add the helpers and link renderers to *env*'s globals. Returns *env*."""
    for key, value in template_globals(helpers, name).items():
        env.add_global(key, value)
    return env
