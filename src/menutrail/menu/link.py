"""MenuLink frozen dataclass."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class MenuLink:
    """A menu link definition.

    Links with ``parent=None`` are roots of their menu. ``route_parameters``
    are stored as given and compared as strings when looking links up by
    route, so ``{"id": 42}`` and ``{"id": "42"}`` register the same target.
    """

    id: str
    menu_name: str
    route_name: str
    route_parameters: Mapping[str, object] = field(default_factory=dict)
    parent: str | None = None
    enabled: bool = True
    title: str = ""
    weight: int = 0
