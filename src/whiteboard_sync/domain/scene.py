"""
Scene helpers.

Default implementations of the scene collaborators used by the sync service:
version derivation and element restoration. Both can be replaced by passing
other callables to ``SceneSyncService``.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from whiteboard_sync.domain.value_objects import Element


SceneVersionFn = Callable[[Sequence[Element]], int]
RestoreElementsFn = Callable[[Iterable[Any]], List[Element]]


def get_scene_version(elements: Optional[Sequence[Element]]) -> int:
    """
    Derive the scene version from an element list.

    The version is the sum of every element's ``version``, deleted elements
    included.
    """
    total = 0
    for element in elements or ():
        version = element.get("version", 0) if isinstance(element, Mapping) else 0
        # bool is an int subclass
        if isinstance(version, int) and not isinstance(version, bool):
            total += version
    return total


def restore_elements(elements: Optional[Iterable[Any]]) -> List[Element]:
    """
    Normalize element records loaded from the backend.

    Drops records that are not objects or have no string ``id``/``type`` and
    fills in the bookkeeping fields. Input records are not mutated.

    Args:
        elements: Raw element records

    Returns:
        Repaired element list
    """
    restored: List[Element] = []
    for element in elements or ():
        if not isinstance(element, Mapping):
            continue
        if not isinstance(element.get("id"), str) or not isinstance(element.get("type"), str):
            continue

        record = dict(element)
        version = record.get("version")
        if not isinstance(version, int) or isinstance(version, bool) or version < 1:
            record["version"] = 1
        if not isinstance(record.get("versionNonce"), int):
            record["versionNonce"] = 0
        record["isDeleted"] = bool(record.get("isDeleted", False))
        restored.append(record)

    return restored
