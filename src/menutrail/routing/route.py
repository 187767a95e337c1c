"""Route and RouteMatch frozen dataclasses."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from menutrail.errors import ConfigurationError
from menutrail.routing.params import CONVERTERS, upcast_params

_PLACEHOLDER = re.compile(r"\{([^{}:]+)(?::([^{}]+))?\}")
_FLASK_PARAM = re.compile(r"<[^>]+>")


def path_param_types(path: str) -> dict[str, str]:
    """Return the placeholders of a route path as name -> converter, in path order.

    Examples::

        "/users"                -> {}
        "/users/{id:int}"       -> {"id": "int"}
        "/files/{path:path}"    -> {"path": "path"}
        "/u/{user}/p/{post:int}" -> {"user": "str", "post": "int"}

    Raises ``ConfigurationError`` for ``<param>`` placeholders, unknown
    converter types, and a name used twice.
    """
    if _FLASK_PARAM.search(path):
        msg = f"Route path {path!r} uses <param> placeholders; write them as {{param}}."
        raise ConfigurationError(msg)

    types: dict[str, str] = {}
    for found in _PLACEHOLDER.finditer(path):
        name, param_type = found.group(1), found.group(2) or "str"
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in route path {path!r}."
            raise ConfigurationError(msg)
        if name in types:
            msg = f"Placeholder {name!r} appears twice in route path {path!r}."
            raise ConfigurationError(msg)
        types[name] = param_type
    return types


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    ``defaults`` are values the route supplies without reading them from the
    URL (a view display, a default page). They only show up in the converted
    parameters of a match. ``upcasters`` turn a path value into a domain
    object, keyed by parameter name.
    """

    path: str
    name: str
    defaults: Mapping[str, Any] = field(default_factory=dict)
    upcasters: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        path_param_types(self.path)

    @property
    def param_types(self) -> dict[str, str]:
        return path_param_types(self.path)

    @property
    def path_variables(self) -> tuple[str, ...]:
        """Placeholder names declared by the path, in path order."""
        return tuple(path_param_types(self.path))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """The route being rendered, with its parameters.

    Satisfies the ``CurrentRoute`` protocol, so a match can be handed to the
    trail resolvers directly.
    """

    route: Route
    raw_parameters: dict[str, str]
    parameters: dict[str, Any]
    path_variables: tuple[str, ...] = ()

    @property
    def route_name(self) -> str | None:
        return self.route.name


def bind_route(
    route: Route,
    path_params: Mapping[str, str],
    query: bytes | str = b"",
) -> RouteMatch:
    """Build the ``RouteMatch`` for *route* from the values the host router captured.

    *path_params* must name exactly the placeholders of the route path.
    Raw parameters are the query-string parameters (first value) overlaid
    with the path parameters. Converted parameters are the route defaults,
    then the query parameters, then the path parameters run through their
    converters and upcasters.

    Raises ``ConfigurationError`` when *path_params* does not fit the path.
    """
    param_types = route.param_types
    missing = [name for name in param_types if name not in path_params]
    extra = [name for name in path_params if name not in param_types]
    if missing or extra:
        msg = (
            f"Path parameters for route {route.name!r} ({route.path!r}) do not fit: "
            f"missing {missing}, unexpected {extra}."
        )
        raise ConfigurationError(msg)

    if isinstance(query, bytes):
        query = query.decode("latin-1")
    query_params = {
        key: values[0] for key, values in parse_qs(query, keep_blank_values=True).items()
    }

    raw = {name: path_params[name] for name in param_types}
    converted = upcast_params(raw, param_types, route.upcasters)
    return RouteMatch(
        route=route,
        raw_parameters={**query_params, **raw},
        parameters={**route.defaults, **query_params, **converted},
        path_variables=tuple(param_types),
    )
