"""
Association descriptors: how a relation is embedded in the output.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from ..config import EmbedType, get_config, normalize_embed
from ..naming import id_key, ids_key, plural_key

if TYPE_CHECKING:
    from ..serializer.serializable import BaseSerializable

__all__ = [
    "CardinalityType",
    "Association",
    "HasOne",
    "HasMany",
    "AssociationDeclaration",
    "create_association",
    "has_one",
    "has_many",
]

type CardinalityType = Literal["one", "many"]
"""
Whether a relation references a single object or a collection.
"""


class Association(ABC):
    """
    Describes one relation and its embedding options.

    Embedding options not passed explicitly fall back to the global configuration
    at the time of serialization.
    """

    cardinality: ClassVar[CardinalityType]

    name: str
    """
    Relation name; also the name of the resolver returning the related value.
    """

    embed_key: str
    """
    Field read from each related object when embedding ids.
    """

    key: str
    """
    Output key when embedding ids.
    """

    embedded_key: str
    """
    Output key when embedding objects inline.
    """

    root_key: str
    """
    Output key when flattening objects to the document root.
    """

    serializer: type[BaseSerializable] | None
    """
    Explicit serializer for related object(s), otherwise looked up by type.
    """

    __embed: EmbedType | None
    __embed_in_root: bool | None

    def __init__(
        self,
        name: str,
        *,
        embed: str | None = None,
        embed_in_root: bool | None = None,
        embed_key: str = "id",
        key: str | None = None,
        embedded_key: str | None = None,
        root_key: str | None = None,
        serializer: type[BaseSerializable] | None = None,
    ):
        self.name = name
        self.__embed = normalize_embed(embed) if embed is not None else None
        self.__embed_in_root = embed_in_root
        self.embed_key = embed_key
        self.embedded_key = embedded_key or name
        self.key = key or self._default_key()
        self.root_key = root_key or self._default_root_key()
        self.serializer = serializer

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, embed={self.embed!r}, "
            f"embed_in_root={self.embed_in_root})"
        )

    @property
    def embed(self) -> EmbedType:
        """
        Effective embedding strategy.
        """
        return self.__embed or normalize_embed(get_config().embed)

    @property
    def embed_ids(self) -> bool:
        return self.embed == "ids"

    @property
    def embed_objects(self) -> bool:
        return self.embed == "objects"

    @property
    def embed_in_root(self) -> bool:
        """
        Whether objects are flattened to the document root rather than embedded
        inline; only applicable when embedding objects.
        """
        if not self.embed_objects:
            return False
        if self.__embed_in_root is None:
            return get_config().embed_in_root
        return self.__embed_in_root

    @abstractmethod
    def build_serializer(self, obj: Any, *, scope: Any = None) -> BaseSerializable:
        """
        Create serializer for the related value.
        """

    @abstractmethod
    def _default_key(self) -> str: ...

    @abstractmethod
    def _default_root_key(self) -> str: ...


class HasOne(Association):
    """
    Relation referencing a single object.
    """

    cardinality = "one"

    def build_serializer(self, obj: Any, *, scope: Any = None) -> BaseSerializable:
        from ..registry import get_registry
        from ..serializer.array import ArraySerializer
        from ..serializer.base import Serializer

        if self.serializer:
            serializer_cls = self.serializer
        elif obj is None:
            serializer_cls = Serializer
        else:
            serializer_cls = get_registry().serializer_for(obj)

        if issubclass(serializer_cls, ArraySerializer):
            return serializer_cls(obj, scope=scope)

        # flattened objects are collected in lists keyed by root key
        assert issubclass(serializer_cls, Serializer)
        return serializer_cls(obj, scope=scope, wrap_in_array=self.embed_in_root)

    def _default_key(self) -> str:
        return id_key(self.name)

    def _default_root_key(self) -> str:
        return plural_key(self.embedded_key)


class HasMany(Association):
    """
    Relation referencing a collection of objects.
    """

    cardinality = "many"

    def build_serializer(self, obj: Any, *, scope: Any = None) -> BaseSerializable:
        from ..serializer.array import ArraySerializer

        return ArraySerializer(obj, scope=scope, each_serializer=self.serializer)

    def _default_key(self) -> str:
        return ids_key(self.name)

    def _default_root_key(self) -> str:
        return self.embedded_key


ASSOCIATION_CLASSES: dict[CardinalityType, type[Association]] = {
    "one": HasOne,
    "many": HasMany,
}


def create_association(
    cardinality: CardinalityType, name: str, **options: Any
) -> Association:
    """
    Create association descriptor of the given cardinality.

    :raises ValueError: If cardinality is not recognized
    """
    if cardinality not in ASSOCIATION_CLASSES:
        raise ValueError(
            f"Invalid cardinality: {cardinality!r}, must be one of "
            f"{list(ASSOCIATION_CLASSES)}"
        )
    return ASSOCIATION_CLASSES[cardinality](name, **options)


@dataclass(frozen=True)
class AssociationDeclaration:
    """
    Placeholder in a serializer class body, replaced by an association descriptor
    named after the class attribute when the class is built.
    """

    cardinality: CardinalityType
    options: dict[str, Any] = field(default_factory=dict)


def has_one(
    *,
    embed: str | None = None,
    embed_in_root: bool | None = None,
    embed_key: str = "id",
    key: str | None = None,
    embedded_key: str | None = None,
    root_key: str | None = None,
    serializer: type[BaseSerializable] | None = None,
) -> Any:
    """
    Declare a relation to a single object.
    """
    return AssociationDeclaration(
        "one",
        _options(
            embed=embed,
            embed_in_root=embed_in_root,
            embed_key=embed_key,
            key=key,
            embedded_key=embedded_key,
            root_key=root_key,
            serializer=serializer,
        ),
    )


def has_many(
    *,
    embed: str | None = None,
    embed_in_root: bool | None = None,
    embed_key: str = "id",
    key: str | None = None,
    embedded_key: str | None = None,
    root_key: str | None = None,
    serializer: type[BaseSerializable] | None = None,
) -> Any:
    """
    Declare a relation to a collection of objects; `serializer` is used for each
    object in the collection.
    """
    return AssociationDeclaration(
        "many",
        _options(
            embed=embed,
            embed_in_root=embed_in_root,
            embed_key=embed_key,
            key=key,
            embedded_key=embedded_key,
            root_key=root_key,
            serializer=serializer,
        ),
    )


def _options(**options: Any) -> dict[str, Any]:
    return {k: v for k, v in options.items() if v is not None}
