"""Request-scoped route match via ContextVar.

Provides:
- ``route_match_var``: The ``RouteMatch`` for the page being rendered.
- ``RequestRouteMatch``: a ``CurrentRoute`` that reads it on every access.

The request pipeline sets the variable after routing and resets it after
the response. Resolvers built once at startup with a ``RequestRouteMatch``
see each request's own match.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading (3.14t). No locks needed.
"""

from collections.abc import Mapping
from contextvars import ContextVar
from typing import Any

from menutrail.routing.route import RouteMatch

route_match_var: ContextVar[RouteMatch | None] = ContextVar("menutrail_route_match", default=None)
"""The current route match. ``None`` outside of a routed request."""


def get_route_match() -> RouteMatch:
    """Return the current route match.

    Raises ``LookupError`` if called outside a routed request.
    """
    match = route_match_var.get()
    if match is None:
        msg = "No route match is set for the current request"
        raise LookupError(msg)
    return match


class RequestRouteMatch:
    """``CurrentRoute`` backed by ``route_match_var``.

    Outside of a routed request it reports no route name and empty
    parameters, which the resolvers treat as "nothing to resolve".
    """

    __slots__ = ()

    @property
    def route_name(self) -> str | None:
        match = route_match_var.get()
        return match.route_name if match is not None else None

    @property
    def raw_parameters(self) -> Mapping[str, str]:
        match = route_match_var.get()
        return match.raw_parameters if match is not None else {}

    @property
    def parameters(self) -> Mapping[str, Any]:
        match = route_match_var.get()
        return match.parameters if match is not None else {}

    @property
    def path_variables(self) -> tuple[str, ...]:
        match = route_match_var.get()
        return match.path_variables if match is not None else ()

    def __repr__(self) -> str:
        return f"<RequestRouteMatch {self.route_name!r}>"
