"""Route declaration functions.

Each function builds an ``AbstractRoute``; nothing is registered until
the routes are handed to ``LocalizedRouter.localize`` or ``add``::

    router.localize(
        get("/pages/:page", PageController, "show"),
        resources("/users", UserController, children=[
            resources("/faces", FaceController),
        ]),
        live("/chat", ChatLive, name="chat"),
    )
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from warble._internal.types import Handler
from warble.routing.route import AbstractRoute, RouteOptions


def route(
    verb: str,
    path: str,
    handler: Handler,
    action: str | None = None,
    *,
    name: str | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> AbstractRoute:
    """Declare a route for an arbitrary verb.

    Only the localizable verbs survive ``localize``; anything else is
    rejected there with ``UnsupportedVerbError``.
    """
    return AbstractRoute(
        verb=verb.lower(),
        path=path,
        handler=handler,
        action=action,
        options=RouteOptions(name=name, metadata=MappingProxyType(dict(metadata or {}))),
    )


def get(path: str, handler: Handler, action: str | None = None, **options: Any) -> AbstractRoute:
    return route("get", path, handler, action, **options)


def put(path: str, handler: Handler, action: str | None = None, **options: Any) -> AbstractRoute:
    return route("put", path, handler, action, **options)


def patch(path: str, handler: Handler, action: str | None = None, **options: Any) -> AbstractRoute:
    return route("patch", path, handler, action, **options)


def post(path: str, handler: Handler, action: str | None = None, **options: Any) -> AbstractRoute:
    return route("post", path, handler, action, **options)


def delete(path: str, handler: Handler, action: str | None = None, **options: Any) -> AbstractRoute:
    return route("delete", path, handler, action, **options)


def options(path: str, handler: Handler, action: str | None = None, **opts: Any) -> AbstractRoute:
    return route("options", path, handler, action, **opts)


def head(path: str, handler: Handler, action: str | None = None, **options: Any) -> AbstractRoute:
    return route("head", path, handler, action, **options)


def connect(
    path: str, handler: Handler, action: str | None = None, **options: Any
) -> AbstractRoute:
    return route("connect", path, handler, action, **options)


def live(path: str, handler: Handler, action: str | None = None, **options: Any) -> AbstractRoute:
    """Declare a live (server-rendered, stateful) view route. Served over GET."""
    return route("live", path, handler, action, **options)


def resources(
    path: str,
    handler: Handler,
    *,
    name: str | None = None,
    only: Iterable[str] | None = None,
    except_: Iterable[str] = (),
    param: str | None = None,
    children: Iterable[AbstractRoute] = (),
    metadata: Mapping[str, Any] | None = None,
) -> AbstractRoute:
    """Declare a RESTful resource.

    Args:
        path: Collection path, e.g. ``"/users"``.
        handler: Controller serving every action.
        name: Helper base name. Defaults to one derived from *handler*.
        only: Restrict the generated actions.
        except_: Actions to leave out.
        param: Member parameter name. Defaults to ``LocalizeConfig.resource_param``.
        children: Routes nested under the member path.
        metadata: Copied onto every generated route.
    """
    return AbstractRoute(
        verb="resources",
        path=path,
        handler=handler,
        options=RouteOptions(
            name=name,
            metadata=MappingProxyType(dict(metadata or {})),
            children=tuple(children),
            only=tuple(only) if only is not None else None,
            except_=tuple(except_),
            param=param,
        ),
    )
