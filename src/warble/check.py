"""Translation coverage check for a localized route table.

Walks every localized route and reports path segments that have no
entry in the catalog for one of the route's locales, plus locales that
were skipped because they have no translation locale at all.

Run from the command line with ``warble check myapp:router``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from warble.router import LocalizedRouter


class Severity(Enum):
    """Severity of a coverage issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class CoverageIssue:
    """A single issue found while checking translations."""

    severity: Severity
    category: str
    message: str
    locale: str | None = None
    route: str | None = None
    details: str | None = None


@dataclass(slots=True)
class CheckResult:
    """Result of a translation coverage check."""

    issues: list[CoverageIssue] = field(default_factory=list)
    routes_checked: int = 0
    segments_checked: int = 0

    @property
    def errors(self) -> list[CoverageIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[CoverageIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Checked {self.routes_checked} localized routes, "
            f"{self.segments_checked} translatable segments.",
        ]
        if self.ok and not self.warnings:
            lines.append("No issues found.")
        elif self.ok:
            lines.append(f"No errors. {len(self.warnings)} warning(s).")
        else:
            lines.append(f"{len(self.errors)} error(s), {len(self.warnings)} warning(s).")
        for issue in self.issues:
            prefix = issue.severity.value.upper()
            where = f" in {issue.route}" if issue.route else ""
            lines.append(f"  [{prefix}] {issue.message}{where}")
            if issue.details:
                lines.append(f"           {issue.details}")
        return "\n".join(lines)


def check_translations(router: LocalizedRouter) -> CheckResult:
    """Report missing route translations for every locale of *router*."""
    result = CheckResult()
    config = router.config
    catalog = router.registry.catalog
    if catalog is None:
        result.issues.append(
            CoverageIssue(
                severity=Severity.ERROR,
                category="catalog",
                message="The locale registry has no translation catalog attached.",
            )
        )
        return result

    contains = getattr(catalog, "contains", None)
    if contains is None:
        result.issues.append(
            CoverageIssue(
                severity=Severity.INFO,
                category="catalog",
                message=f"{type(catalog).__name__} cannot report missing entries; "
                "coverage was not checked.",
            )
        )

    seen: set[tuple[str, str]] = set()
    for route in router.routes:
        if not route.localized or route.source is None or route.source.template is None:
            continue
        result.routes_checked += 1
        label = f"{route.verb.upper()} {route.original_path}"
        for segment in route.source.template.segments:
            if segment.is_empty or segment.is_param or not segment.translatable:
                continue
            # Interpolated segments are never translated
            if not segment.is_static:
                continue
            for locale in route.locales:
                if locale.translation is None:
                    continue
                key = (segment.value, locale.translation)
                if key in seen:
                    continue
                seen.add(key)
                result.segments_checked += 1
                if contains is None or contains(config.domain, locale.translation, segment.value):
                    continue
                result.issues.append(
                    CoverageIssue(
                        severity=Severity.ERROR,
                        category="missing_translation",
                        message=f"No {locale.translation!r} translation for {segment.value!r}",
                        locale=locale.translation,
                        route=label,
                        details=f'Add msgid "{segment.value}" to the {config.domain!r} domain.',
                    )
                )

    reported: set[str] = set()
    for skipped in router.skipped:
        if skipped.locale.id in reported:
            continue
        reported.add(skipped.locale.id)
        result.issues.append(
            CoverageIssue(
                severity=Severity.WARNING,
                category="unlocalizable_locale",
                message=f"Locale {skipped.locale.id!r} has no translation locale; "
                "no routes were generated for it.",
                locale=skipped.locale.id,
            )
        )
    return result
