"""Menutrail exception hierarchy.

Shared across the route definitions, the menu-link index, and the resolvers
so every module raises and catches the same types. Trail resolution itself
never raises for a miss; these cover setup mistakes and explicit lookups.
"""


class MenuTrailError(Exception):
    """Base for all menutrail-specific errors."""


class ConfigurationError(MenuTrailError):
    """Raised when routes or menu links are defined inconsistently.

    Typically surfaces while declaring routes or building the link tree at startup.
    """


class UnknownLink(MenuTrailError, KeyError):  # noqa: N818
    """A menu link id is not registered in the index.

    Subclasses ``KeyError`` so mapping-style callers can keep catching that.
    """

    def __init__(self, link_id: str) -> None:
        super().__init__(link_id)
        self.link_id = link_id

    def __str__(self) -> str:
        return f"Unknown menu link {self.link_id!r}"
