"""Shared type aliases used across warble modules."""

from collections.abc import Callable
from typing import Any

# Route handler: a controller class, a view function, or a dotted name
type Handler = type | Callable[..., Any] | str
