"""
Serializer for collections of objects.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, Sequence

from ..exceptions import SerializationError
from ..filtering import normalize_names
from ..registry import get_registry
from .base import Serializer
from .serializable import (
    BaseSerializable,
    JsonSerializableType,
    RootAssociationsType,
    merge_root_associations,
)

__all__ = [
    "ArraySerializer",
]


class ArraySerializer(BaseSerializable):
    """
    Serializes each object in a collection with its own serializer, folding the
    objects they flatten to the root into one shared mapping. Absent members
    serialize to `None`.
    """

    default_root: ClassVar[str | bool | None] = None
    """
    Document root key declared via class keyword `root`.
    """

    object: Sequence[Any] | None
    root: str | bool | None
    resource_name: str | None

    each_serializer: type[BaseSerializable] | None
    """
    Serializer used for every object, otherwise looked up per object.
    """

    only: tuple[str, ...] | None
    exclude: tuple[str, ...] | None

    def __init_subclass__(cls, *, root: str | bool | None = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if root is not None:
            cls.default_root = root

    def __init__(
        self,
        obj: Sequence[Any] | None,
        /,
        *,
        scope: Any = None,
        root: str | bool | None = None,
        meta_key: str = "meta",
        meta: Any = None,
        each_serializer: type[BaseSerializable] | None = None,
        resource_name: str | None = None,
        only: Iterable[str] | str | None = None,
        exclude: Iterable[str] | str | None = None,
    ):
        self.object = obj
        self.scope = scope
        self.root = self.default_root if root is None else root
        self.meta_key = meta_key
        self.meta = meta
        self.each_serializer = each_serializer
        self.resource_name = resource_name
        self.only = normalize_names(only)
        self.exclude = normalize_names(exclude)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(object={self.object!r})"

    @property
    def json_key(self) -> str | bool | None:
        if self.root is None or self.root is True:
            return self.resource_name
        return self.root

    def serializer_for(self, item: Any) -> BaseSerializable:
        """
        Create serializer for one object in the collection.
        """
        serializer_cls = self.each_serializer or get_registry().serializer_for(item)
        if issubclass(serializer_cls, Serializer):
            return serializer_cls(
                item, scope=self.scope, only=self.only, exclude=self.exclude
            )
        return serializer_cls(item, scope=self.scope)

    def serializable_object(self) -> JsonSerializableType:
        if self.object is None:
            return None

        objs: list[JsonSerializableType] = []
        for i, item in enumerate(self.object):
            if item is None:
                objs.append(None)
                continue
            try:
                objs.append(self.serializer_for(item).serializable_object())
            except SerializationError as e:
                e._bubble(i)
                raise
        return objs

    def embedded_in_root_associations(self) -> RootAssociationsType:
        root_associations: RootAssociationsType = {}
        if self.object is None:
            return root_associations

        for i, item in enumerate(self.object):
            if item is None:
                continue
            try:
                item_associations = self.serializer_for(
                    item
                ).embedded_in_root_associations()
            except SerializationError as e:
                e._bubble(i)
                raise

            for key, objs in item_associations.items():
                merge_root_associations(root_associations, key, objs)

        return root_associations
