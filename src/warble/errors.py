"""Warble exception hierarchy.

Shared across the multiplier, the router, the helper dispatch layer and
the CLI so every module raises and catches the same types.

Build-time errors derive from ``ConfigurationError`` and abort the build.
Dispatch errors are raised at call time and are recoverable by the caller.
"""

from enum import Enum


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when routes, locales or catalogs are configured incorrectly.

    Typically raised while localized routes are declared or when the
    router freezes.
    """


class UnsupportedVerbError(ConfigurationError):
    """A localize wrapper was applied to a verb it cannot localize."""

    def __init__(self, verb: str, path: str, supported: tuple[str, ...]) -> None:
        self.verb = verb
        self.path = path
        self.supported = supported
        allowed = ", ".join(supported)
        super().__init__(
            f"Invalid route for localization: {verb} {path!r}. "
            f"Allowed localizable verbs are: {allowed}"
        )


class PathTemplateError(ConfigurationError):
    """A path template cannot be resolved to a static string.

    Translation happens once at build time, so every part of a localized
    path must be literal text, a ``:param`` segment, or one of the
    ``{locale}``, ``{language}``, ``{territory}`` placeholders.
    """

    def __init__(self, path: str, expression: str, detail: str = "") -> None:
        self.path = path
        self.expression = expression
        msg = (
            "The path of a localized route must resolve to a static string "
            f"at build time. Found {expression!r} in {path!r}."
        )
        if detail:
            msg = f"{msg} {detail}"
        super().__init__(msg)


class MissingTranslationError(ConfigurationError):
    """A path segment has no catalog entry and the strict policy is active."""

    def __init__(self, segment: str, locale: str, domain: str) -> None:
        self.segment = segment
        self.locale = locale
        self.domain = domain
        super().__init__(
            f"No translation for path segment {segment!r} in domain "
            f"{domain!r} for locale {locale!r}."
        )


class UnlocalizableLocaleWarning(UserWarning):
    """A locale has no translation-locale id; its routes are skipped."""


class DispatchFailure(Enum):
    """Why a localized helper call could not be dispatched."""

    LOCALE_MISMATCH = "locale_mismatch"
    UNKNOWN_ACTION = "unknown_action"
    MALFORMED_PARAMS = "malformed_params"
    SIGNATURE_MISMATCH = "signature_mismatch"


class HelperDispatchError(WarbleError, LookupError):
    """No concrete route matches a helper call for the current locale.

    ``valid`` lists every ``(action, bindings)`` combination known for
    the helper so the message can show the caller what would work.
    """

    def __init__(
        self,
        kind: DispatchFailure,
        helper: str,
        locale: str | None,
        action: str,
        arity: int,
        valid: tuple[tuple[str, tuple[str, ...]], ...] = (),
    ) -> None:
        self.kind = kind
        self.helper = helper
        self.locale = locale
        self.action = action
        self.arity = arity
        self.valid = valid
        super().__init__(self._describe())

    def _describe(self) -> str:
        locale = self.locale if self.locale is not None else "<none>"
        if self.kind is DispatchFailure.LOCALE_MISMATCH:
            return (
                f"No function {self.helper}/{self.arity} with action {self.action!r} "
                f"for locale {locale!r}. The route is not localized to this locale."
            )
        if self.kind is DispatchFailure.UNKNOWN_ACTION:
            actions = ", ".join(sorted({action for action, _ in self.valid}))
            return (
                f"Unknown action {self.action!r} for {self.helper}. "
                f"Known actions: {actions}"
            )
        if self.kind is DispatchFailure.MALFORMED_PARAMS:
            return (
                f"Malformed parameters for {self.helper} with action {self.action!r}: "
                "the trailing argument must be a mapping or a list of pairs."
            )
        combos = "\n".join(
            f"    {self.helper}(context, {', '.join([repr(action), *bindings])})"
            for action, bindings in self.valid
        )
        return (
            f"No function clause for {self.helper} with action {self.action!r} "
            f"and {self.arity} binding(s) for locale {locale!r}. "
            f"The following combinations are valid:\n{combos}"
        )
