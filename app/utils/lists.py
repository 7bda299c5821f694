"""Sequence helpers."""

from collections.abc import Mapping
from typing import Any, Hashable, Iterable, List

# Key value of items that do not have the key at all; distinct from None
_MISSING = object()


def _key_of(item: Any, key: str) -> Hashable:
    if isinstance(item, Mapping):
        return item.get(key, _MISSING)
    return getattr(item, key, _MISSING)


def get_unique_list_by(items: Iterable[Any], key: str) -> List[Any]:
    """
    Remove duplicates from a list based on the value of a key.

    Each distinct key value keeps its first position but ends up holding
    the last item seen with that value. Items without the key form one
    group of their own, separate from items whose key is None.

    Example:
        >>> get_unique_list_by([{"id": 1, "v": "a"}, {"id": 2}, {"id": 1, "v": "b"}], "id")
        [{'id': 1, 'v': 'b'}, {'id': 2}]
    """
    unique = {}
    for item in items:
        unique[_key_of(item, key)] = item
    return list(unique.values())
