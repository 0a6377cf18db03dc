"""Query string encoding for dispatcher requests."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote


def encode_query(params: Mapping[str, Any] | None) -> str:
    """Encode a parameter mapping as a URL query string.

    Scalars become ``name=value``. Lists and tuples become one ``name[]=item``
    pair per element, in order. None values are skipped.

    Args:
        params: Mapping of parameter name to a scalar or a list of scalars.

    Returns:
        The query string with a leading ``?``, or ``""`` when there is
        nothing to encode.
    """
    if not params:
        return ""

    pairs: list[str] = []
    for name, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            key = quote(f"{name}[]", safe="[]")
            pairs.extend(f"{key}={_encode_value(item)}" for item in value)
        else:
            pairs.append(f"{quote(str(name), safe='')}={_encode_value(value)}")

    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def _encode_value(value: Any) -> str:
    """Render a scalar the way the API expects it on the wire."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")
