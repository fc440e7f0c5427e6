"""Rendering and argument helpers shared by the GoCardless tools."""

from typing import Any, Dict, Final, Iterable, Mapping, Optional, Tuple, Type, Union

MISSING: Final[str] = "N/A"
DEFAULT_LIMIT: Final[int] = 50

Number = Union[int, float]


def is_number(value: Any) -> bool:
    """True for int/float values, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(value: Number) -> str:
    """Render a number for a query string, dropping a trailing .0."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def format_amount(amount: Any, currency: Any) -> str:
    """Render a minor-unit amount, e.g. (2999, "GBP") -> "GBP 29.99"."""
    if not is_number(amount):
        return f"{currency if currency else MISSING} {MISSING}"
    return f"{currency if currency else MISSING} {amount / 100:.2f}"


def dig(data: Any, *keys: str, default: str = MISSING) -> Any:
    """Read a nested key, returning ``default`` if any level is absent.

    >>> dig({"links": {"customer": "CU1"}}, "links", "customer")
    'CU1'
    >>> dig({}, "links", "customer")
    'N/A'
    """
    current = data
    for key in keys:
        if not isinstance(current, Mapping) or current.get(key) is None:
            return default
        current = current[key]
    return current


def copy_typed(
    source: Mapping[str, Any],
    target: Dict[str, Any],
    keys: Iterable[str],
    expected: Union[Type, Tuple[Type, ...]] = str,
) -> Dict[str, Any]:
    """Copy keys whose value is present, truthy and of the expected type.

    Absent or mistyped values are left out rather than sent as null.
    """
    for key in keys:
        value = source.get(key)
        if value and isinstance(value, expected) and not isinstance(value, bool):
            target[key] = value
    return target


def build_query(
    params: Mapping[str, Any],
    string_keys: Iterable[str] = (),
    limit_default: Optional[int] = DEFAULT_LIMIT,
) -> Dict[str, str]:
    """Build query parameters from an allow-list of filter keys.

    ``limit`` is taken when numeric, otherwise the default applies. Only
    listed string keys holding non-empty strings are copied; everything else
    is dropped.
    """
    query: Dict[str, str] = {}
    limit = params.get("limit")
    if is_number(limit) and limit:
        query["limit"] = format_number(limit)
    elif limit_default is not None:
        query["limit"] = str(limit_default)
    for key in string_keys:
        value = params.get(key)
        if value and isinstance(value, str):
            query[key] = value
    return query


def join_entries(header: str, entries: Iterable[str]) -> str:
    """Render a list header followed by blank-line separated entries."""
    return f"{header}\n\n" + "\n\n".join(entries)
