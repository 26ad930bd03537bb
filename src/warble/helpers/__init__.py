"""Locale-dispatching URL helpers.

Public API::

    from warble.helpers import LocalizedHelpers, UrlContext, build
"""

from warble.helpers.dispatch import LocalizedHelpers, build
from warble.helpers.group import HelperGroup
from warble.helpers.urls import UrlContext, to_param

__all__ = ["HelperGroup", "LocalizedHelpers", "UrlContext", "build", "to_param"]
