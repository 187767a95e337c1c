"""Menu link index — lookups by route and ancestor chains.

``MenuLinkIndex`` is the structural protocol the resolvers depend on.
``MenuLinkTree`` is the in-memory implementation: links are registered
once at startup and read on every request.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from menutrail.errors import ConfigurationError, UnknownLink
from menutrail.menu.link import MenuLink

logger = logging.getLogger("menutrail.index")


class MenuLinkIndex(Protocol):
    """Protocol for menu link storage as seen by the trail resolvers."""

    def load_links_by_route(
        self,
        route_name: str,
        parameters: Mapping[str, Any] | None = None,
        menu_name: str | None = None,
    ) -> dict[str, MenuLink]: ...

    def links_for_route(self, route_name: str) -> list[MenuLink]: ...

    def parent_ids(self, link_id: str) -> tuple[str, ...]: ...

    def load_links(self, link_ids: Iterable[str]) -> dict[str, MenuLink]: ...


def normalize_parameters(parameters: Mapping[str, Any]) -> dict[str, str]:
    """Render parameter values as strings for comparison.

    Upcast values compare through ``str()``: an ``int`` 42 matches ``"42"``
    and a domain object matches the identifier its ``__str__`` returns.
    """
    return {name: str(value) for name, value in parameters.items()}


class MenuLinkTree:
    """In-memory menu link index.

    Usage::

        tree = MenuLinkTree()
        tree.add(MenuLink("main.news", "main", "news.list"))
        tree.add(MenuLink("main.news.item", "main", "news.view", {"id": "7"}, parent="main.news"))
        tree.load_links_by_route("news.view", {"id": 7})  # {"main.news.item": ...}
        tree.parent_ids("main.news.item")                   # ("main.news",)

    Lookups return links in natural order: by ``weight``, then by
    registration order.
    """

    __slots__ = ("_by_route", "_links", "_order")

    def __init__(self, links: Iterable[MenuLink] = ()) -> None:
        self._links: dict[str, MenuLink] = {}
        self._order: dict[str, int] = {}
        self._by_route: dict[str, list[MenuLink]] = {}
        self.extend(links)

    def add(self, link: MenuLink) -> None:
        """Register a link. Raises ``ConfigurationError`` for a duplicate id."""
        if link.id in self._links:
            msg = f"Duplicate menu link id {link.id!r}."
            raise ConfigurationError(msg)
        self._order[link.id] = len(self._order)
        self._links[link.id] = link
        bucket = self._by_route.setdefault(link.route_name, [])
        bucket.append(link)
        bucket.sort(key=self._sort_key)

    def extend(self, links: Iterable[MenuLink]) -> None:
        for link in links:
            self.add(link)

    def _sort_key(self, link: MenuLink) -> tuple[int, int]:
        return (link.weight, self._order[link.id])

    def __contains__(self, link_id: object) -> bool:
        return link_id in self._links

    def __len__(self) -> int:
        return len(self._links)

    def get(self, link_id: str) -> MenuLink:
        """Return the link registered as *link_id*.

        Raises ``UnknownLink`` if there is none.
        """
        try:
            return self._links[link_id]
        except KeyError:
            raise UnknownLink(link_id) from None

    def load_links_by_route(
        self,
        route_name: str,
        parameters: Mapping[str, Any] | None = None,
        menu_name: str | None = None,
    ) -> dict[str, MenuLink]:
        """Return links pointing at *route_name*, keyed by id.

        With *parameters*, only links whose route parameters equal them
        (compared as strings) are returned; ``None`` ignores parameters.
        With *menu_name*, only links in that menu are returned.
        """
        wanted = None if parameters is None else normalize_parameters(parameters)
        found: dict[str, MenuLink] = {}
        for link in self._by_route.get(route_name, ()):
            if menu_name is not None and link.menu_name != menu_name:
                continue
            if wanted is not None and normalize_parameters(link.route_parameters) != wanted:
                continue
            found[link.id] = link
        return found

    def links_for_route(self, route_name: str) -> list[MenuLink]:
        """Return every link pointing at *route_name*, ignoring parameters."""
        return list(self._by_route.get(route_name, ()))

    def parent_ids(self, link_id: str) -> tuple[str, ...]:
        """Return the ancestor ids of *link_id*, root first, excluding the link.

        An unknown link has no ancestors. The walk stops at a parent that is
        not registered, that was already visited, or that sits in another
        menu, so a chain never mixes menus.
        """
        link = self._links.get(link_id)
        if link is None:
            return ()

        chain: list[str] = []
        seen = {link_id}
        parent = link.parent
        while parent is not None:
            if parent in seen:
                logger.warning("Cycle in menu link parents at %r (from %r)", parent, link_id)
                break
            parent_link = self._links.get(parent)
            if parent_link is None:
                logger.warning("Menu link %r has unknown ancestor %r", link_id, parent)
                break
            if parent_link.menu_name != link.menu_name:
                logger.warning(
                    "Menu link %r has ancestor %r in another menu (%r)",
                    link_id,
                    parent,
                    parent_link.menu_name,
                )
                break
            seen.add(parent)
            chain.append(parent)
            parent = parent_link.parent

        chain.reverse()
        return tuple(chain)

    def load_links(self, link_ids: Iterable[str]) -> dict[str, MenuLink]:
        """Return the links for *link_ids*, keyed by id, in the given order.

        Unknown ids (the root entry ``""`` included) are skipped.
        """
        return {link_id: self._links[link_id] for link_id in link_ids if link_id in self._links}
