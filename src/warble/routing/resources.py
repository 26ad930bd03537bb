"""Resource expansion — one ``resources`` declaration into its action routes.

``resources("/users", UserController)`` expands to::

    index   GET          /users
    edit    GET          /users/:id/edit
    new     GET          /users/new
    show    GET          /users/:id
    create  POST         /users
    update  PATCH, PUT   /users/:id
    delete  DELETE       /users/:id

Children are nested under the member path (``/users/:user_id``) and
expanded recursively. Every produced node is tagged ``expanded=True``;
expansion never descends into a node that carries the tag.
"""

from collections.abc import Iterator
from dataclasses import replace

from warble.config import LocalizeConfig
from warble.errors import ConfigurationError, UnsupportedVerbError
from warble.routing.naming import resource_name
from warble.routing.route import (
    LOCALIZABLE_VERBS,
    RESOURCE_ACTIONS,
    AbstractRoute,
    RouteOptions,
)
from warble.routing.template import PathTemplate, parse_template

_ACTION_METHODS: dict[str, frozenset[str]] = {
    "index": frozenset({"GET"}),
    "edit": frozenset({"GET"}),
    "new": frozenset({"GET"}),
    "show": frozenset({"GET"}),
    "create": frozenset({"POST"}),
    "update": frozenset({"PATCH", "PUT"}),
    "delete": frozenset({"DELETE"}),
}

_ACTION_VERBS: dict[str, str] = {
    "index": "get",
    "edit": "get",
    "new": "get",
    "show": "get",
    "create": "post",
    "update": "patch",
    "delete": "delete",
}


def template_of(route: AbstractRoute, config: LocalizeConfig) -> PathTemplate:
    """The parsed template of *route*, parsing its path if needed."""
    if route.template is not None:
        return route.template
    return parse_template(route.path, config)


def check_verb(route: AbstractRoute) -> None:
    if route.verb not in LOCALIZABLE_VERBS:
        raise UnsupportedVerbError(route.verb, route.path, LOCALIZABLE_VERBS)


def resource_actions(route: AbstractRoute) -> tuple[str, ...]:
    """The actions a ``resources`` declaration generates, in emission order."""
    options = route.options
    unknown = set(options.only or ()) | set(options.except_)
    unknown -= set(RESOURCE_ACTIONS)
    if unknown:
        names = ", ".join(sorted(unknown))
        msg = f"Unknown resource action(s) {names} for {route.path!r}"
        raise ConfigurationError(msg)
    actions = options.only if options.only is not None else RESOURCE_ACTIONS
    return tuple(
        action
        for action in RESOURCE_ACTIONS
        if action in actions and action not in options.except_
    )


def expand_resources(
    route: AbstractRoute,
    config: LocalizeConfig,
    *,
    prefix: PathTemplate | None = None,
    name_prefix: str | None = None,
) -> tuple[AbstractRoute, ...]:
    """Flatten a (possibly nested) ``resources`` declaration into action routes.

    Non-resource routes are returned as a single already-expanded node,
    prefixed when they are nested inside a resource.
    """
    return tuple(_expand(route, config, prefix, name_prefix))


def _expand(
    route: AbstractRoute,
    config: LocalizeConfig,
    prefix: PathTemplate | None,
    name_prefix: str | None,
) -> Iterator[AbstractRoute]:
    check_verb(route)
    template = template_of(route, config)
    if prefix is not None:
        template = prefix.extend(template)

    if route.expanded or route.verb != "resources":
        name = route.options.name
        if name_prefix:
            name = f"{name_prefix}_{name or resource_name(route.handler, config.handler_suffixes)}"
        yield replace(
            route,
            path=template.path,
            template=template,
            options=replace(route.options, name=name),
            expanded=True,
        )
        return

    resource = resource_name(route.handler, config.handler_suffixes)
    helper_base = route.options.name or resource
    if name_prefix:
        helper_base = f"{name_prefix}_{helper_base}"
    param = route.options.param or config.resource_param
    member = template.with_param(param, config.param_marker)
    options = RouteOptions(name=helper_base, metadata=route.options.metadata)

    for action in resource_actions(route):
        if action in ("index", "create"):
            action_template = template
        elif action == "new":
            action_template = template.with_suffix("new")
        elif action == "edit":
            action_template = member.with_suffix("edit")
        else:
            action_template = member
        yield AbstractRoute(
            verb=_ACTION_VERBS[action],
            path=action_template.path,
            handler=route.handler,
            action=action,
            options=options,
            expanded=True,
            methods=_ACTION_METHODS[action],
            template=action_template,
        )

    nested_prefix = template.with_param(f"{resource}_{param}", config.param_marker)
    for child in route.options.children:
        yield from _expand(child, config, nested_prefix, helper_base)
