"""
Registry mapping domain types to their serializers.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import SchemaNotFoundError
from .inspecting import is_sequence

if TYPE_CHECKING:
    from .serializer.array import ArraySerializer
    from .serializer.base import Serializer

__all__ = [
    "SerializerRegistry",
    "get_registry",
]

_logger = logging.getLogger(__name__)


class SerializerRegistry:
    """
    Registry for managing serializers by domain type.

    Lookup walks the MRO of the object's type, so a serializer registered for a
    base class also applies to its subclasses unless they have their own.
    """

    __serializers: dict[type, type[Serializer]]

    def __init__(self, *pairs: tuple[type, type[Serializer]]):
        self.__serializers = {}
        for model_type, serializer_cls in pairs:
            self.register(model_type, serializer_cls)

    def __repr__(self) -> str:
        return f"SerializerRegistry(serializers={dict(self.__serializers)})"

    def __contains__(self, model_type: type) -> bool:
        return model_type in self.__serializers

    @property
    def serializers(self) -> MappingProxyType[type, type[Serializer]]:
        """
        Get serializers currently registered.
        """
        return MappingProxyType(self.__serializers)

    def register(self, model_type: type, serializer_cls: type[Serializer], /):
        """
        Register a serializer for a domain type, replacing any existing one.
        """
        if previous := self.__serializers.get(model_type):
            _logger.debug(
                "Replacing serializer for %s: %s -> %s",
                model_type.__qualname__,
                previous.__qualname__,
                serializer_cls.__qualname__,
            )
        self.__serializers[model_type] = serializer_cls
        _logger.debug(
            "Registered %s for %s",
            serializer_cls.__qualname__,
            model_type.__qualname__,
        )

    def find(self, obj: Any) -> type[Serializer] | None:
        """
        Find serializer for object's type, or `None` if there is none.
        """
        for base in type(obj).__mro__:
            if serializer_cls := self.__serializers.get(base):
                return serializer_cls
        return None

    def serializer_for(self, obj: Any) -> type[Serializer] | type[ArraySerializer]:
        """
        Get serializer for object: `ArraySerializer` for sequences, otherwise the
        serializer registered for its type.

        :raises SchemaNotFoundError: If no serializer is registered for the type
        """
        from .serializer.array import ArraySerializer

        if is_sequence(obj):
            return ArraySerializer
        if serializer_cls := self.find(obj):
            return serializer_cls

        _logger.debug("No serializer found for %s", type(obj).__qualname__)
        raise SchemaNotFoundError(obj)


_REGISTRY = SerializerRegistry()


def get_registry() -> SerializerRegistry:
    """
    Get global registry populated by parameterized serializer classes.
    """
    return _REGISTRY
