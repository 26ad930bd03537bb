"""Localization configuration.

LocalizeConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from warble.errors import ConfigurationError

MISSING_TRANSLATION_POLICIES = ("fallback", "warn", "error")


@dataclass(frozen=True, slots=True)
class LocalizeConfig:
    """Route localization configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LocalizeConfig(missing_translation="warn", base_url="https://example.com")
    """

    # Catalog
    domain: str = "routes"
    missing_translation: str = "fallback"  # "fallback", "warn" or "error"

    # Path syntax
    path_separator: str = "/"
    param_marker: str = ":"

    # Helpers
    suffixes: tuple[str, ...] = ("path", "url")
    url_suffixes: tuple[str, ...] = ("url",)  # rendered absolute, with base_url
    base_url: str = "http://localhost"
    static_prefix: str = "/static"

    # Resources
    resource_param: str = "id"
    handler_suffixes: tuple[str, ...] = ("Controller", "Handler", "View", "Live")

    def __post_init__(self) -> None:
        if self.missing_translation not in MISSING_TRANSLATION_POLICIES:
            allowed = ", ".join(MISSING_TRANSLATION_POLICIES)
            msg = f"missing_translation must be one of {allowed}, got {self.missing_translation!r}"
            raise ConfigurationError(msg)
        if not self.path_separator:
            msg = "path_separator must not be empty"
            raise ConfigurationError(msg)
        if not self.param_marker:
            msg = "param_marker must not be empty"
            raise ConfigurationError(msg)
        if not self.suffixes:
            msg = "At least one helper suffix is required"
            raise ConfigurationError(msg)
        if not self.url_suffixes:
            msg = "At least one absolute URL suffix is required"
            raise ConfigurationError(msg)
