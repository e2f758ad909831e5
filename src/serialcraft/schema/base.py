"""
Per-serializer schema: declared attributes, flattened attributes, associations and
the resolver table.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Self

from ..exceptions import SchemaDeclarationError
from ..naming import root_name
from .association import Association, CardinalityType, create_association
from .resolvers import (
    ResolverType,
    association_resolver,
    attribute_resolver,
    flattened_resolver,
)

__all__ = [
    "RootType",
    "Schema",
]

type RootType = str | bool | None
"""
Document root key:

- `str`: Use as-is
- `True` or `None`: Use default derived from the serializer name
- `False`: Don't wrap document
"""


class Schema:
    """
    Declarations for one serializer class.

    A schema is built once when its serializer class is created and frozen
    afterwards. A subclass builds its schema with `derive()`, which copies the
    parent's containers so that the subclass's declarations never affect the
    parent.
    """

    name: str | None
    """
    Qualified name of the serializer class, used to derive the default root name.
    """

    root: RootType
    """
    Declared document root key.
    """

    __attributes: list[str]
    __flattened_attributes: dict[str, tuple[str, ...]]
    __associations: dict[str, Association]
    __resolvers: dict[str, ResolverType]
    __frozen: bool

    def __init__(self, *, name: str | None = None, root: RootType = None):
        self.name = name
        self.root = root
        self.__attributes = []
        self.__flattened_attributes = {}
        self.__associations = {}
        self.__resolvers = {}
        self.__frozen = False

    def __repr__(self) -> str:
        return (
            f"Schema(name={self.name!r}, attributes={self.attributes}, "
            f"associations={tuple(self.__associations)})"
        )

    @property
    def attributes(self) -> tuple[str, ...]:
        return tuple(self.__attributes)

    @property
    def flattened_attributes(self) -> MappingProxyType[str, tuple[str, ...]]:
        return MappingProxyType(self.__flattened_attributes)

    @property
    def associations(self) -> MappingProxyType[str, Association]:
        return MappingProxyType(self.__associations)

    @property
    def resolvers(self) -> MappingProxyType[str, ResolverType]:
        return MappingProxyType(self.__resolvers)

    @property
    def frozen(self) -> bool:
        return self.__frozen

    def derive(self, *, name: str | None = None, root: RootType = None) -> Schema:
        """
        Create a new unfrozen schema starting from a copy of this one's declarations.
        """
        schema = Schema(name=name, root=self.root if root is None else root)
        schema.__attributes = self.__attributes.copy()
        schema.__flattened_attributes = self.__flattened_attributes.copy()
        schema.__associations = self.__associations.copy()
        schema.__resolvers = self.__resolvers.copy()
        return schema

    def freeze(self) -> Self:
        """
        Prevent further declarations.
        """
        self.__frozen = True
        return self

    def install_resolvers(self, resolvers: Mapping[str, ResolverType]):
        """
        Install custom resolvers, replacing any inherited ones.
        """
        self.__check_frozen()
        self.__resolvers.update(resolvers)

    def declare_attributes(self, *names: str):
        """
        Declare attributes read off the bound object unless a resolver is already
        installed for them.
        """
        self.__check_frozen()
        for name in names:
            if name not in self.__attributes:
                self.__attributes.append(name)
            if name not in self.__resolvers:
                self.__resolvers[name] = attribute_resolver(name)

    def declare_flattened_attributes(self, attrs: Mapping[str, Iterable[str]]):
        """
        Declare attributes resolved by walking a chain of related objects, e.g.
        `{"profile_name": ("profile", "name")}` reads `obj.profile.name`.

        :raises SchemaDeclarationError: If a chain is empty
        """
        self.__check_frozen()
        for name, chain in attrs.items():
            chain_ = (chain,) if isinstance(chain, str) else tuple(chain)
            if not chain_:
                raise SchemaDeclarationError(
                    f"Flattened attribute '{name}' has an empty chain"
                )
            self.__flattened_attributes[name] = chain_
            if name not in self.__resolvers:
                self.__resolvers[name] = flattened_resolver(chain_)
        self.declare_attributes(*attrs)

    def declare_association(
        self, cardinality: CardinalityType, *names: str, **options: Any
    ):
        """
        Declare relations with the given cardinality and options.

        :raises SchemaDeclarationError: If cardinality or options are invalid
        """
        self.__check_frozen()
        for name in names:
            try:
                association = create_association(cardinality, name, **options)
            except (TypeError, ValueError) as e:
                raise SchemaDeclarationError(
                    f"Invalid association '{name}': {e}"
                ) from e
            if name not in self.__resolvers:
                self.__resolvers[name] = association_resolver(name)
            self.__associations[name] = association

    def resolve_root_name(self) -> str | None:
        """
        Get default root name derived from serializer name.
        """
        return root_name(self.name)

    def attribute_method_mapping(self) -> dict[str, tuple[str, ...]]:
        """
        Get mapping of attribute names to the chain of fields read to get their
        values. Attributes computed by custom resolvers map to their own name.
        """
        return {
            name: self.__flattened_attributes.get(name, (name,))
            for name in self.__attributes
        }

    def __check_frozen(self):
        if self.__frozen:
            raise SchemaDeclarationError(
                f"Schema {self.name!r} is frozen; declare in the class body instead"
            )
