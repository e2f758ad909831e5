"""
Schema-driven serializers for objects and collections.
"""

from .array import ArraySerializer
from .base import Serializer
from .serializable import BaseSerializable, JsonSerializableType

__all__ = [
    "BaseSerializable",
    "JsonSerializableType",
    "Serializer",
    "ArraySerializer",
]
