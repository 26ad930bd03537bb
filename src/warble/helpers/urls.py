"""Path and URL building for helper entry points.

Positional bindings fill the ``:param`` segments of a concrete path in
order. Anything passed as the trailing parameter bag is serialized into
the query string.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode, urlsplit

from warble.config import LocalizeConfig
from warble.routing.template import parse_template


@dataclass(frozen=True, slots=True)
class UrlContext:
    """Where generated URLs point. Pass one as the helper ``context``.

    Usage::

        ctx = UrlContext.from_url("https://example.com/app")
        helpers.page_url(ctx, "show", 1)   # "https://example.com/app/pages/1"
    """

    scheme: str = "http"
    host: str = "localhost"
    port: int | None = None
    script_name: str = ""

    @classmethod
    def from_url(cls, url: str) -> UrlContext:
        parts = urlsplit(url)
        return cls(
            scheme=parts.scheme or "http",
            host=parts.hostname or "localhost",
            port=parts.port,
            script_name=parts.path.rstrip("/"),
        )

    @property
    def base_url(self) -> str:
        default_port = {"http": 80, "https": 443}.get(self.scheme)
        port = f":{self.port}" if self.port and self.port != default_port else ""
        return f"{self.scheme}://{self.host}{port}"


def base_url(context: object, config: LocalizeConfig) -> str:
    """The scheme://host[:port] part for ``*_url`` helpers.

    Accepts a ``UrlContext``, a URL string, any object with a ``base_url``
    attribute (a request or an endpoint), or ``None`` for the configured
    default.
    """
    if context is None:
        return config.base_url.rstrip("/")
    if isinstance(context, str):
        parts = urlsplit(context)
        return f"{parts.scheme}://{parts.netloc}" if parts.netloc else context.rstrip("/")
    value = getattr(context, "base_url", None)
    if value is not None:
        return str(value).rstrip("/")
    return config.base_url.rstrip("/")


def script_name(context: object) -> str:
    """The mount prefix for generated paths, if the context has one."""
    if isinstance(context, str):
        return urlsplit(context).path.rstrip("/")
    value = getattr(context, "script_name", None)
    return str(value).rstrip("/") if value else ""


def to_param(value: object) -> str:
    """Convert a binding to its URL text.

    Objects may define ``to_param()`` to control their representation
    (a model returning its slug, for instance).
    """
    converter = getattr(value, "to_param", None)
    if callable(converter):
        return str(converter())
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_param_bag(value: object) -> bool:
    """True for a mapping or a list of ``(key, value)`` pairs."""
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(item, (list, tuple)) and len(item) == 2 for item in value)
    return False


def encode_query(params: Mapping[str, Any] | Sequence[tuple[str, Any]] | None) -> str:
    """Serialize a parameter bag. ``None`` values are dropped."""
    if not params:
        return ""
    items = params.items() if isinstance(params, Mapping) else params
    pairs: list[tuple[str, str]] = []
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, (list, tuple, set, frozenset)):
            pairs.extend((str(key), to_param(item)) for item in value)
        else:
            pairs.append((str(key), to_param(value)))
    return urlencode(pairs, quote_via=quote)


@dataclass(frozen=True, slots=True)
class PathBuilder:
    """A concrete path split into literal text and binding slots.

    Built once per concrete route so calls only join strings.
    """

    parts: tuple[str | None, ...]
    separator: str = "/"

    @classmethod
    def compile(cls, path: str, config: LocalizeConfig) -> PathBuilder:
        template = parse_template(path, config)
        return cls(
            tuple(None if segment.is_param else segment.value for segment in template.segments),
            config.path_separator,
        )

    @property
    def arity(self) -> int:
        return sum(1 for part in self.parts if part is None)

    def build(self, bindings: Sequence[object]) -> str:
        values = iter(bindings)
        rendered = [
            quote(to_param(next(values)), safe="") if part is None else part
            for part in self.parts
        ]
        path = self.separator.join(rendered)
        return path or self.separator
