"""
Declarative serializer schemas.
"""

from .association import (
    Association,
    AssociationDeclaration,
    HasMany,
    HasOne,
    has_many,
    has_one,
)
from .base import RootType, Schema
from .resolvers import ResolverType, resolver

__all__ = [
    "Schema",
    "RootType",
    "Association",
    "AssociationDeclaration",
    "HasOne",
    "HasMany",
    "has_one",
    "has_many",
    "ResolverType",
    "resolver",
]
