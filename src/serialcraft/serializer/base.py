"""
Schema-driven serializer for a single object.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, cast

from ..exceptions import SerializationError
from ..filtering import filter_keys, normalize_names
from ..inspecting import extract_arg, is_sequence, read_attribute
from ..registry import get_registry
from ..schema.association import Association, AssociationDeclaration
from ..schema.base import RootType, Schema
from ..schema.resolvers import collect_resolvers
from .serializable import (
    BaseSerializable,
    JsonSerializableType,
    RootAssociationsType,
    merge_root_associations,
)

__all__ = [
    "Serializer",
]

_logger = logging.getLogger(__name__)

# class body names consumed when building the schema
ATTRIBUTES_NAME = "attributes"
FLATTENED_ATTRIBUTES_NAME = "flattened_attributes"


class Serializer[ModelT](BaseSerializable):
    """
    Base class for serializers. Subclass with the domain type as parameter to
    register the serializer for it, and declare the schema in the class body:

    ```python
    class PostSerializer(Serializer[Post], root="post"):
        attributes = ("id", "title")
        flattened_attributes = {"author_name": ("author", "name")}

        author = has_one(embed="ids")
        comments = has_many(embed_in_root=True)
    ```

    Declarations are appended to those inherited from the parent serializer.
    """

    schema: ClassVar[Schema] = Schema(name="Serializer").freeze()
    """
    Schema built from this class's declarations and those of its bases.
    """

    object: ModelT | None
    """
    Bound object.
    """

    root: RootType
    """
    Document root key, overriding the schema's.
    """

    wrap_in_array: bool
    """
    Whether to wrap the serialized object in a list.
    """

    only: tuple[str, ...] | None
    """
    If set, only these attributes and associations are serialized.
    """

    exclude: tuple[str, ...] | None
    """
    If set (and `only` is not), these attributes and associations are skipped.
    """

    def __init_subclass__(cls, *, root: RootType = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)

        parent = next(b for b in cls.__mro__[1:] if issubclass(b, Serializer))
        schema = parent.schema.derive(name=cls.__qualname__, root=root)

        namespace = dict(vars(cls))

        # install custom resolvers first so declarations don't replace them
        schema.install_resolvers(collect_resolvers(namespace))

        # apply declarations in the order they appear in the class body
        for name, value in namespace.items():
            if name == ATTRIBUTES_NAME:
                schema.declare_attributes(*normalize_names(value) or ())
            elif name == FLATTENED_ATTRIBUTES_NAME:
                schema.declare_flattened_attributes(value)
            elif isinstance(value, AssociationDeclaration):
                schema.declare_association(value.cardinality, name, **value.options)
            else:
                continue
            delattr(cls, name)

        cls.schema = schema.freeze()
        _logger.debug("Built %s", schema)

        # register for domain type if parameterized directly
        if "__orig_bases__" in vars(cls):
            model_type = extract_arg(cls, Serializer, "ModelT")
            if isinstance(model_type, type) and model_type is not Any:
                get_registry().register(model_type, cls)

    def __init__(
        self,
        obj: ModelT | None,
        /,
        *,
        scope: Any = None,
        root: RootType = None,
        meta_key: str = "meta",
        meta: Any = None,
        wrap_in_array: bool = False,
        only: Iterable[str] | str | None = None,
        exclude: Iterable[str] | str | None = None,
    ):
        self.object = obj
        self.scope = scope
        self.root = self.schema.root if root is None else root
        self.meta_key = meta_key
        self.meta = meta
        self.wrap_in_array = wrap_in_array
        self.only = normalize_names(only)
        self.exclude = normalize_names(exclude)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(object={self.object!r})"

    @classmethod
    def attribute_method_mapping(cls) -> dict[str, tuple[str, ...]]:
        """
        Get mapping of attribute names to the chain of fields read on the object,
        useful when output names differ from field names.
        """
        return cls.schema.attribute_method_mapping()

    @property
    def json_key(self) -> str | bool | None:
        if self.root is True or self.root is None:
            return self.schema.resolve_root_name()
        return self.root

    def filter(self, keys: Iterable[str]) -> list[str]:
        """
        Get keys effective for this call.
        """
        return filter_keys(keys, self.only, self.exclude)

    def serialize_attributes(self) -> dict[str, Any]:
        """
        Resolve attributes in declaration order.
        """
        resolvers = self.schema.resolvers
        return {
            name: resolvers[name](self) for name in self.filter(self.schema.attributes)
        }

    def serialize_associations(self) -> dict[str, Any]:
        """
        Serialize associations embedded as ids or inline objects.
        """
        values: dict[str, Any] = {}

        for association in self.__included_associations():
            try:
                if association.embed_ids:
                    ids = self.serialize_ids(association)
                    if ids is not None:
                        values[association.key] = ids
                elif association.embed_objects and not association.embed_in_root:
                    values[association.embedded_key] = self.serialize(association)
            except SerializationError as e:
                e._bubble(association.name)
                raise

        return values

    def embedded_in_root_associations(self) -> RootAssociationsType:
        """
        Recursively collect associations flattened to the document root, with
        nested serializers' contributions ahead of this serializer's own.
        """
        root_associations: RootAssociationsType = {}
        if self.object is None:
            return root_associations

        for association in self.__included_associations():
            if not association.embed_in_root:
                continue

            try:
                serializer = self.build_serializer(association)
                for key, objs in serializer.embedded_in_root_associations().items():
                    merge_root_associations(root_associations, key, objs)

                serialized_data = serializer.serializable_object()
            except SerializationError as e:
                e._bubble(association.name)
                raise

            if serialized_data is not None:
                serialized_objs = cast(list[JsonSerializableType], serialized_data)
                merge_root_associations(
                    root_associations,
                    association.root_key,
                    [obj for obj in serialized_objs if obj is not None],
                )

        return root_associations

    def read_association(self, association: Association) -> Any:
        """
        Get related value via the association's resolver.
        """
        return self.schema.resolvers[association.name](self)

    def build_serializer(self, association: Association) -> BaseSerializable:
        return association.build_serializer(
            self.read_association(association), scope=self.scope
        )

    def serialize(self, association: Association) -> JsonSerializableType:
        return self.build_serializer(association).serializable_object()

    def serialize_ids(self, association: Association) -> Any:
        """
        Get id(s) of related object(s), or `None` if there is no related object.
        """
        value = self.read_association(association)
        if value is None:
            return None
        if association.cardinality == "many" or is_sequence(value):
            return [self.__read_id(v, association) for v in value]
        return self.__read_id(value, association)

    def serializable_object(self) -> JsonSerializableType:
        if self.object is None:
            return [] if self.wrap_in_array else None

        values = self.serialize_attributes()
        values.update(self.serialize_associations())
        return [values] if self.wrap_in_array else values

    serializable_hash = serializable_object

    def __included_associations(self) -> list[Association]:
        associations = self.schema.associations
        return [associations[name] for name in self.filter(associations)]

    @staticmethod
    def __read_id(obj: Any, association: Association) -> Any:
        return read_attribute(obj, association.embed_key)
