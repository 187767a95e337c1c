"""Active trail protocol and the baseline exact-match resolver.

An active trail is the chain of menu link ids from a root link down to
the link for the page being rendered. Resolvers answer three questions
for a menu: which link is active, which ids form the trail, and which
link definitions form the trail.

``MenuActiveTrail`` answers them strictly: the current route's raw
parameters must equal a link's parameters exactly. ``ActiveLinkResolver``
(in ``menutrail.menu.resolver``) wraps any ``ActiveTrail`` to add the
tolerant fallbacks.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from menutrail.menu.index import MenuLinkIndex
from menutrail.menu.link import MenuLink

# Root entry the baseline resolver puts at the head of every trail
ROOT_ID = ""

# Ordered {id: id} mapping, root first, active link last
type TrailIds = dict[str, str]

# Ordered {id: MenuLink} mapping, root first, active link last
type Trail = dict[str, MenuLink]


class CurrentRoute(Protocol):
    """What the resolvers need to know about the route being rendered.

    ``route_name`` is ``None`` outside of a routed request.
    """

    @property
    def route_name(self) -> str | None: ...

    @property
    def raw_parameters(self) -> Mapping[str, str]: ...

    @property
    def parameters(self) -> Mapping[str, Any]: ...

    @property
    def path_variables(self) -> tuple[str, ...]: ...


class ActiveTrail(Protocol):
    """Protocol for active trail resolvers.

    Implementations are interchangeable: a decorator takes an ``ActiveTrail``
    and is one.
    """

    def active_link(self, menu_name: str | None = None) -> MenuLink | None: ...

    def active_trail_ids(self, menu_name: str | None) -> TrailIds: ...

    def active_trail(self, menu_name: str | None) -> Trail: ...

    def reset_cache(self) -> None: ...


def pick_link(links: Mapping[str, MenuLink], menu_name: str | None) -> MenuLink | None:
    """Choose one link among lookup candidates.

    The first candidate in *menu_name* wins; without a menu (or without a
    candidate in it) the first candidate in lookup order.
    """
    if not links:
        return None
    if menu_name is not None:
        for link in links.values():
            if link.menu_name == menu_name:
                return link
    return next(iter(links.values()))


class MenuActiveTrail:
    """Baseline resolver: exact raw-parameter lookup, memoised per request.

    A miss still yields the root entry, so ``active_trail_ids`` returns
    ``{"": ""}`` rather than an empty mapping when nothing matched.
    """

    __slots__ = ("_cache", "_index", "_route")

    def __init__(self, route: CurrentRoute, index: MenuLinkIndex) -> None:
        self._route = route
        self._index = index
        self._cache: dict[tuple[Any, ...], Any] = {}

    def _key(self, kind: str, menu_name: str | None) -> tuple[Any, ...]:
        raw = tuple(sorted(self._route.raw_parameters.items()))
        return (kind, menu_name, self._route.route_name, raw)

    def active_link(self, menu_name: str | None = None) -> MenuLink | None:
        key = self._key("link", menu_name)
        if key not in self._cache:
            self._cache[key] = self._lookup(menu_name)
        return self._cache[key]

    def _lookup(self, menu_name: str | None) -> MenuLink | None:
        route_name = self._route.route_name
        if not route_name:
            return None
        links = self._index.load_links_by_route(route_name, self._route.raw_parameters)
        return pick_link(links, menu_name)

    def active_trail_ids(self, menu_name: str | None) -> TrailIds:
        key = self._key("ids", menu_name)
        if key not in self._cache:
            ids: TrailIds = {ROOT_ID: ROOT_ID}
            link = self.active_link(menu_name)
            if link is not None and (menu_name is None or link.menu_name == menu_name):
                for link_id in (*self._index.parent_ids(link.id), link.id):
                    ids[link_id] = link_id
            self._cache[key] = ids
        return dict(self._cache[key])

    def active_trail(self, menu_name: str | None) -> Trail:
        ids = self.active_trail_ids(menu_name)
        return self._index.load_links(ids)

    def reset_cache(self) -> None:
        self._cache.clear()
