"""
Typed access to persisted record fields.

Stored records come back from JSON with whatever types were written. A
field of the wrong type raises TypeError so the loader skips the entry
instead of handing a half-valid record to the rest of the session.
"""

_REQUIRED = object()


def read_field(data: dict, key: str, kind, default=_REQUIRED):
    """
    Return data[key] if it is an instance of `kind` (a type or tuple of types).

    Missing keys (and explicit nulls) fall back to `default`; without a
    default they raise KeyError.
    """
    value = data.get(key)
    if value is None:
        if default is _REQUIRED:
            raise KeyError(key)
        return default
    if not isinstance(value, kind):
        expected = kind if isinstance(kind, tuple) else (kind,)
        names = " or ".join(k.__name__ for k in expected)
        raise TypeError(f"'{key}' must be {names}, got {type(value).__name__}")
    return value


def read_str_list(data: dict, key: str) -> list[str]:
    """A list of strings; a missing list is empty."""
    values = read_field(data, key, list, default=[])
    if not all(isinstance(v, str) for v in values):
        raise TypeError(f"'{key}' must only contain strings")
    return values
