"""Locate the ``LocalizedRouter`` a CLI command operates on.

Targets are ``module`` or ``module:attr.path``; the attribute path may
walk through objects, e.g. ``myapp:app.router``. Defaults to ``router``.
"""

import importlib
import sys
from typing import NoReturn

from warble.errors import WarbleError
from warble.router import LocalizedRouter


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)


def load_router(target: str) -> LocalizedRouter:
    """Import *target* and return its router, or exit with status 1."""
    module_path, _, attr_path = target.partition(":")
    try:
        obj: object = importlib.import_module(module_path)
        for attr in (attr_path or "router").split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError, WarbleError) as exc:
        _fail(f"cannot load {target!r}: {exc}")
    if not isinstance(obj, LocalizedRouter):
        _fail(f"{target!r} is a {type(obj).__name__}, not a LocalizedRouter")
    return obj
