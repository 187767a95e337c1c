"""Tolerant active trail resolution.

``ActiveLinkResolver`` decorates another ``ActiveTrail`` (usually the
exact-match ``MenuActiveTrail``). The wrapped resolver answers first; its
answer is kept unless it is empty or only holds the root entry. Then the
resolver looks the current route up again, each attempt looser than the
last:

1. Raw parameters, as parsed from the URL.
2. Converted parameters. These include route defaults, so a link
   registered with a default-valued parameter is found here.
3. Only the variables declared in the route path, raw value first,
   converted value otherwise. Drops query parameters that would spoil an
   exact match.
4. With a menu name: any enabled link in that menu on the same route,
   whatever its parameters.

Every operation is total. A miss on all attempts gives back whatever the
wrapped resolver said.
"""

import logging
from typing import Any

from menutrail.config import TrailConfig
from menutrail.menu.index import MenuLinkIndex
from menutrail.menu.link import MenuLink
from menutrail.menu.trail import ActiveTrail, CurrentRoute, Trail, TrailIds, pick_link

logger = logging.getLogger("menutrail.resolver")


class ActiveLinkResolver:
    """An ``ActiveTrail`` that falls back to looser route lookups.

    Usage::

        primary = MenuActiveTrail(route, tree)
        trail = ActiveLinkResolver(primary, route, tree)
        trail.active_trail_ids("main")  # {"main.news": "main.news", "main.news.item": ...}

    Holds no cache of its own; ``reset_cache`` only forwards.
    """

    __slots__ = ("_config", "_index", "_inner", "_route")

    def __init__(
        self,
        inner: ActiveTrail,
        route: CurrentRoute,
        index: MenuLinkIndex,
        config: TrailConfig | None = None,
    ) -> None:
        self._inner = inner
        self._route = route
        self._index = index
        self._config = config or TrailConfig()

    @property
    def inner(self) -> ActiveTrail:
        """The wrapped resolver."""
        return self._inner

    def active_link(self, menu_name: str | None = None) -> MenuLink | None:
        """Return the active link, from the wrapped resolver if it has one."""
        link = self._inner.active_link(menu_name)
        if link is not None:
            return link
        return self._resolve(menu_name)

    def _resolve(self, menu_name: str | None) -> MenuLink | None:
        route_name = self._route.route_name
        if not route_name:
            return None

        raw = dict(self._route.raw_parameters)
        link = self._match(route_name, raw, menu_name)
        if link is not None:
            logger.debug("Active link %r for %r from raw parameters", link.id, route_name)
            return link

        if self._config.match_converted:
            converted = dict(self._route.parameters)
            link = self._match(route_name, converted, menu_name)
            if link is not None:
                logger.debug(
                    "Active link %r for %r from converted parameters", link.id, route_name
                )
                return link

        if self._config.match_path_variables:
            filtered = self._path_parameters()
            if filtered:
                link = self._match(route_name, filtered, menu_name)
                if link is not None:
                    logger.debug(
                        "Active link %r for %r from path variables %s",
                        link.id,
                        route_name,
                        sorted(filtered),
                    )
                    return link

        if self._config.match_any_in_menu and menu_name:
            for candidate in self._index.links_for_route(route_name):
                if candidate.menu_name == menu_name and candidate.enabled:
                    logger.debug(
                        "Active link %r for %r from any link in menu %r",
                        candidate.id,
                        route_name,
                        menu_name,
                    )
                    return candidate

        logger.debug("No active link for %r in menu %r", route_name, menu_name)
        return None

    def _match(
        self,
        route_name: str,
        parameters: dict[str, Any],
        menu_name: str | None,
    ) -> MenuLink | None:
        links = self._index.load_links_by_route(route_name, parameters, menu_name)
        return pick_link(links, menu_name)

    def _path_parameters(self) -> dict[str, Any]:
        """Restrict parameters to the route's path variables.

        The raw value wins; the converted value fills in when raw has none.
        """
        raw = self._route.raw_parameters
        converted = self._route.parameters
        filtered: dict[str, Any] = {}
        for name in self._route.path_variables:
            if name in raw:
                filtered[name] = raw[name]
            elif name in converted:
                filtered[name] = converted[name]
        return filtered

    def active_trail_ids(self, menu_name: str | None) -> TrailIds:
        """Return the trail ids, root first.

        A wrapped answer with fewer than ``min_primary_trail`` entries is
        taken for "root only" and rebuilt from the resolved link. This is a
        heuristic: a genuine one-entry trail is looked up again too.
        """
        ids = self._inner.active_trail_ids(menu_name)
        if ids and len(ids) >= self._config.min_primary_trail:
            return ids

        link = self.active_link(menu_name)
        if link is not None and menu_name and link.menu_name != menu_name:
            # A trail never mixes menus
            link = self._resolve(menu_name)
        if link is None:
            return ids

        trail = (*self._index.parent_ids(link.id), link.id)
        return {link_id: link_id for link_id in trail}

    def active_trail(self, menu_name: str | None) -> Trail:
        """Return the trail's link definitions keyed by id, active link last."""
        trail = self._inner.active_trail(menu_name)
        if trail:
            return trail

        ids = self.active_trail_ids(menu_name)
        if not ids:
            return {}
        return self._index.load_links(ids)

    def reset_cache(self) -> None:
        self._inner.reset_cache()
