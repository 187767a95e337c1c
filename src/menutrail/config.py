"""Resolver configuration.

TrailConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TrailConfig:
    """Fallback behaviour of ``ActiveLinkResolver``. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = TrailConfig(match_any_in_menu=False)
    """

    # Primary trail ids shorter than this are treated as "root only" and
    # trigger the fallback lookup.
    min_primary_trail: int = 2

    # Fallback attempts, tried in this order after the raw-parameter lookup
    match_converted: bool = True  # Converted (upcast) parameters
    match_path_variables: bool = True  # Only the variables declared in the path
    match_any_in_menu: bool = True  # Any enabled link on the route in the requested menu
