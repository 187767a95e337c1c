"""Menutrail — tolerant menu active trail resolution.

Finds the menu link for the page being rendered, even when the route's
parameters do not line up exactly with the ones a link was registered
with (default-valued parameters, upcast values, stray query parameters).

Basic usage::

    from menutrail import ActiveLinkResolver, MenuActiveTrail, MenuLinkTree, RequestRouteMatch

    tree = MenuLinkTree(links)
    route = RequestRouteMatch()
    trail = ActiveLinkResolver(MenuActiveTrail(route, tree), route, tree)

    trail.active_trail_ids("main")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ActiveLinkResolver",
    "ActiveTrail",
    "ConfigurationError",
    "CurrentRoute",
    "MenuActiveTrail",
    "MenuLink",
    "MenuLinkIndex",
    "MenuLinkTree",
    "MenuTrailError",
    "RequestRouteMatch",
    "Route",
    "RouteMatch",
    "TrailConfig",
    "UnknownLink",
    "bind_route",
    "get_route_match",
    "route_match_var",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ActiveLinkResolver": "menutrail.menu.resolver",
    "ActiveTrail": "menutrail.menu.trail",
    "ConfigurationError": "menutrail.errors",
    "CurrentRoute": "menutrail.menu.trail",
    "MenuActiveTrail": "menutrail.menu.trail",
    "MenuLink": "menutrail.menu.link",
    "MenuLinkIndex": "menutrail.menu.index",
    "MenuLinkTree": "menutrail.menu.index",
    "MenuTrailError": "menutrail.errors",
    "RequestRouteMatch": "menutrail.context",
    "Route": "menutrail.routing.route",
    "RouteMatch": "menutrail.routing.route",
    "TrailConfig": "menutrail.config",
    "UnknownLink": "menutrail.errors",
    "bind_route": "menutrail.routing.route",
    "get_route_match": "menutrail.context",
    "route_match_var": "menutrail.context",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import menutrail`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
