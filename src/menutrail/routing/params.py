"""Path parameter parsing and type conversion.

Built-in converters for route path segments like ``{id:int}``.
"""

from collections.abc import Callable, Mapping
from typing import Any

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


def upcast_params(
    raw: Mapping[str, str],
    param_types: Mapping[str, str],
    upcasters: Mapping[str, Callable[[Any], Any]],
) -> dict[str, Any]:
    """Convert captured path parameters into their domain values.

    Each value goes through its segment converter first, then through the
    route's upcaster for that name, if any (e.g. loading an entity from an
    id). A value that fails segment conversion stays a string.
    """
    converted: dict[str, Any] = {}
    for name, value in raw.items():
        result: Any = value
        param_type = param_types.get(name, "str")
        try:
            result = convert_param(value, param_type)
        except ValueError:
            result = value
        upcaster = upcasters.get(name)
        if upcaster is not None:
            result = upcaster(result)
        converted[name] = result
    return converted
