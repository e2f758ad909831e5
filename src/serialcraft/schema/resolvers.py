"""
Resolvers compute the value of an attribute or association for a serializer
instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from ..inspecting import follow, read_attribute

if TYPE_CHECKING:
    from ..serializer.base import Serializer

__all__ = [
    "ResolverType",
    "resolver",
    "attribute_resolver",
    "flattened_resolver",
    "association_resolver",
    "collect_resolvers",
]

# marker attribute name for storing decorator info on function
RESOLVER_ATTR = "__serialcraft_resolver__"

type ResolverType = Callable[[Serializer], Any]
"""
Function which takes a serializer instance and returns the value for one key.
"""


def resolver[FuncT: Callable[..., Any]](*names: str) -> Callable[[FuncT], FuncT]:
    """
    Decorate a serializer method to compute the named attributes or associations
    in place of reading them off the bound object:

    ```python
    class PostSerializer(Serializer[Post]):
        attributes = ("title",)

        @resolver("title")
        def resolve_title(self) -> str:
            return self.object.title.upper()
    ```
    """
    if not names:
        raise TypeError("resolver() requires at least one name")

    def decorator(func: FuncT) -> FuncT:
        setattr(func, RESOLVER_ATTR, names)
        return func

    return decorator


def attribute_resolver(name: str) -> ResolverType:
    """
    Create resolver which reads a field directly off the bound object.
    """

    def resolve(serializer: Serializer) -> Any:
        return read_attribute(serializer.object, name)

    return resolve


def flattened_resolver(chain: tuple[str, ...]) -> ResolverType:
    """
    Create resolver which walks the hops of `chain` and reads the field named by its
    last segment, resolving to `None` if any hop is absent.
    """
    *hops, field_name = chain

    def resolve(serializer: Serializer) -> Any:
        obj = serializer.object
        for hop in hops:
            obj = follow(obj, hop)
            if obj is None:
                return None
        return read_attribute(obj, field_name)

    return resolve


def association_resolver(name: str) -> ResolverType:
    """
    Create resolver which returns the related object(s) as-is.
    """

    def resolve(serializer: Serializer) -> Any:
        return follow(serializer.object, name)

    return resolve


def collect_resolvers(namespace: dict[str, Any]) -> dict[str, ResolverType]:
    """
    Collect resolvers decorated with `resolver()` from a class namespace.
    """
    resolvers: dict[str, ResolverType] = {}
    for func in namespace.values():
        for name in getattr(func, RESOLVER_ATTR, ()):
            resolvers[name] = func
    return resolvers
