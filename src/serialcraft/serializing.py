"""
Serialization entry points.
"""

from __future__ import annotations

from typing import Any, Iterable

from .exceptions import SchemaNotFoundError
from .inspecting import is_sequence
from .registry import get_registry
from .schema import has_many, has_one, resolver
from .serializer import (
    ArraySerializer,
    BaseSerializable,
    JsonSerializableType,
    Serializer,
)

__all__ = [
    "JsonSerializableType",
    "BaseSerializable",
    "Serializer",
    "ArraySerializer",
    "SchemaNotFoundError",
    "has_one",
    "has_many",
    "resolver",
    "get_serializer",
    "serialize",
    "as_json",
]


def get_serializer(
    obj: Any,
    /,
    *,
    serializer: type[BaseSerializable] | None = None,
    scope: Any = None,
    root: str | bool | None = None,
    meta_key: str = "meta",
    meta: Any = None,
    wrap_in_array: bool = False,
    only: Iterable[str] | str | None = None,
    exclude: Iterable[str] | str | None = None,
) -> BaseSerializable:
    """
    Create serializer bound to object, using the serializer registered for its type
    unless `serializer` is passed. Collections get an `ArraySerializer`.

    :param obj: Object or collection of objects to serialize
    :param serializer: Serializer to use for `obj`, or for each object if `obj` is \
    a collection
    :param scope: User-defined context passed to nested serializers
    :param root: Document root key; `False` to skip wrapping
    :param meta_key: Document key for `meta`
    :param meta: Value added to the document
    :param wrap_in_array: Whether to wrap a single object in a list
    :param only: Names of attributes/associations to include
    :param exclude: Names of attributes/associations to skip
    :raises SchemaNotFoundError: If no serializer is registered for the type
    """
    if is_sequence(obj):
        return ArraySerializer(
            obj,
            scope=scope,
            root=root,
            meta_key=meta_key,
            meta=meta,
            each_serializer=serializer,
            only=only,
            exclude=exclude,
        )

    if serializer is None:
        serializer = Serializer if obj is None else get_registry().serializer_for(obj)

    assert issubclass(serializer, Serializer)
    return serializer(
        obj,
        scope=scope,
        root=root,
        meta_key=meta_key,
        meta=meta,
        wrap_in_array=wrap_in_array,
        only=only,
        exclude=exclude,
    )


def serialize(obj: Any, /, **options: Any) -> JsonSerializableType:
    """
    Serialize object or collection of objects without document-level wrapping.

    Objects flattened to the root and `meta` are only included by `as_json()`.

    :param obj: Object or collection of objects to serialize
    :param options: Options passed to `get_serializer()`
    :raises SchemaNotFoundError: If a serializer is not found for any object
    """
    return get_serializer(obj, **options).serializable_object()


def as_json(obj: Any, /, **options: Any) -> JsonSerializableType:
    """
    Serialize object or collection of objects to a document, wrapped under its root
    key along with objects flattened to the root and `meta`.

    :param obj: Object or collection of objects to serialize
    :param options: Options passed to `get_serializer()`
    :raises SchemaNotFoundError: If a serializer is not found for any object
    """
    return get_serializer(obj, **options).as_json()
