"""
Document-level behavior shared by serializers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

__all__ = [
    "JsonSerializableType",
    "RootAssociationsType",
    "BaseSerializable",
    "merge_root_associations",
]

type JsonSerializableType = str | int | float | bool | None | list[
    JsonSerializableType
] | dict[str, JsonSerializableType]
"""
Native types which can be represented in JSON format.
"""

type RootAssociationsType = dict[str, list[JsonSerializableType]]
"""
Objects flattened to the document root, keyed by root key.
"""


class BaseSerializable(ABC):
    """
    Base class for serializers, composing the document from the primary structure,
    objects flattened to the root and meta.
    """

    scope: Any
    """
    Opaque caller context passed through to nested serializers.
    """

    meta_key: str
    """
    Document key for `meta`.
    """

    meta: Any
    """
    Value added to the document, if any.
    """

    @property
    @abstractmethod
    def json_key(self) -> str | bool | None:
        """
        Document root key, or a falsy value to skip wrapping.
        """

    @abstractmethod
    def serializable_object(self) -> JsonSerializableType:
        """
        Serialize bound object(s) without document-level wrapping.
        """

    def embedded_in_root_associations(self) -> RootAssociationsType:
        """
        Collect objects flattened to the document root.
        """
        return {}

    def serializable_data(self) -> dict[str, Any]:
        """
        Get document-level data: root associations and meta.
        """
        data: dict[str, Any] = dict(self.embedded_in_root_associations())
        if self.meta:
            data[self.meta_key] = self.meta
        return data

    def as_json(self) -> JsonSerializableType:
        """
        Serialize to document, wrapped under `json_key` if it's set.
        """
        if json_key := self.json_key:
            assert isinstance(json_key, str)
            return {json_key: self.serializable_object(), **self.serializable_data()}
        return self.serializable_object()


def merge_root_associations(
    target: RootAssociationsType, key: str, objs: Iterable[JsonSerializableType]
):
    """
    Merge objects into the list at `key`, dropping structurally equal duplicates
    while keeping first-seen order.
    """
    merged = target.get(key, [])
    for obj in objs:
        if obj not in merged:
            merged.append(obj)
    target[key] = merged
