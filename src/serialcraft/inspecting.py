"""
Utilities to inspect domain objects and serializer classes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import (
    Any,
    Protocol,
    TypeVar,
    cast,
    get_args,
    get_origin,
    runtime_checkable,
)

__all__ = [
    "SerializableProtocol",
    "read_attribute",
    "follow",
    "is_sequence",
    "extract_arg",
]


@runtime_checkable
class SerializableProtocol(Protocol):
    """
    Domain objects can implement this to control how fields are read for
    serialization.
    """

    def read_attribute_for_serialization(self, name: str) -> Any: ...


def read_attribute(obj: Any, name: str) -> Any:
    """
    Read field for serialization, preferring the object's
    `read_attribute_for_serialization()` hook.
    """
    if isinstance(obj, SerializableProtocol):
        return obj.read_attribute_for_serialization(name)
    return follow(obj, name)


def follow(obj: Any, name: str) -> Any:
    """
    Get related object by name, via key lookup for mappings.
    """
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name)


def is_sequence(obj: Any) -> bool:
    """
    Check whether object should be serialized as a collection.
    """
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


def extract_arg(cls: type, base_cls: type, name: str, /) -> Any | None:
    """
    Extract from `cls` the type parameter with the given name that was passed to
    `base_cls`, following substitutions through intermediate generic classes.

    :param cls: The class to extract the type parameter from
    :param base_cls: The generic base class
    :param name: Name of type parameter of `base_cls`
    :return: The resolved parameter, or `None` if `base_cls` was not parameterized \
    or the parameter is unresolved
    """
    arg = _find_arg(cls, base_cls, name, {})
    return None if isinstance(arg, TypeVar) else arg


def _find_arg(
    cls: Any, base_cls: type, name: str, tv_map: dict[TypeVar, Any]
) -> Any | None:
    origin, args = get_origin(cls), get_args(cls)

    # map type parameters of this level to their concrete values
    if isinstance(origin, type) and args:
        type_params = cast(tuple[Any, ...], getattr(origin, "__parameters__", ()))
        tv_map = tv_map.copy()
        for type_param, arg in zip(type_params, args):
            tv_map[type_param] = tv_map.get(arg, arg)

    if origin is base_cls:
        for type_param in cast(tuple[Any, ...], base_cls.__parameters__):
            if type_param.__name__ == name:
                return tv_map.get(type_param, type_param)
        return None

    # recurse into bases, using origin's bases if we have a generic alias
    base_check = origin if isinstance(origin, type) else cls
    bases = list(getattr(base_check, "__orig_bases__", ())) + list(
        getattr(base_check, "__bases__", ())
    )

    for base in bases:
        if (arg := _find_arg(base, base_cls, name, tv_map)) is not None:
            return arg

    return None
