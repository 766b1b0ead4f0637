"""Ready-made callables for the transform engine.

Collaborators may pass any Python callable to a transform. These factories
cover the common cases without anyone having to write a lambda, and stand in
for the string expressions older callers used to ship.
"""

from typing import Any, Callable, Dict, Mapping

_MISSING = object()


def _get(record: Any, name: str, default: Any = _MISSING) -> Any:
    if isinstance(record, Mapping) and name in record:
        return record[name]
    return default


def field_equals(name: str, value: Any) -> Callable[[Any], bool]:
    """Predicate: record[name] == value."""
    def predicate(record: Any) -> bool:
        return _get(record, name) == value
    return predicate


def has_field(name: str) -> Callable[[Any], bool]:
    """Predicate: the record carries field `name`."""
    def predicate(record: Any) -> bool:
        return _get(record, name) is not _MISSING
    return predicate


def pick_fields(*names: str) -> Callable[[Any], Dict[str, Any]]:
    """Map: keep only the named fields, skipping absent ones."""
    def mapper(record: Any) -> Dict[str, Any]:
        picked = {}
        for name in names:
            value = _get(record, name)
            if value is not _MISSING:
                picked[name] = value
        return picked
    return mapper


def by_field(name: str, default: Any = None) -> Callable[[Any], Any]:
    """Aggregate key: the value of field `name`."""
    def key(record: Any) -> Any:
        value = _get(record, name)
        return default if value is _MISSING else value
    return key


def count_by_field(name: str) -> Callable[[Dict[str, Any], Any], Dict[str, Any]]:
    """Reduce: count records per value of field `name` into the accumulator."""
    def reducer(acc: Dict[str, Any], record: Any) -> Dict[str, Any]:
        value = _get(record, name)
        bucket = "null" if value is _MISSING or value is None else str(value)
        acc[bucket] = acc.get(bucket, 0) + 1
        return acc
    return reducer
