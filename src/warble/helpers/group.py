"""Helper groups — concrete routes sharing a canonical name and an arity."""

from dataclasses import dataclass, field

from warble.routing.route import ConcreteRoute


@dataclass(slots=True)
class HelperGroup:
    """All concrete routes reachable through one ``<canonical>_<suffix>``
    entry point with the same number of bindings.

    Filled while the dispatch table is built, read-only afterwards.
    """

    canonical: str
    arity: int
    routes: list[ConcreteRoute] = field(default_factory=list)

    def add(self, route: ConcreteRoute) -> None:
        self.routes.append(route)

    @property
    def actions(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(route.action for route in self.routes))

    @property
    def combinations(self) -> tuple[tuple[str, tuple[str, ...]], ...]:
        """Distinct ``(action, bindings)`` pairs, in table order."""
        return tuple(dict.fromkeys((route.action, route.bindings) for route in self.routes))

    def variants(self, action: str) -> list[ConcreteRoute]:
        """Every localized route for *action*, in table order."""
        return [route for route in self.routes if route.action == action and route.localized]
