"""
Exception classes.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "SerializationError",
    "SchemaNotFoundError",
    "SchemaDeclarationError",
]


class SerializationError(Exception):
    """
    Error encountered while serializing an object graph.

    Keeps track of the association path at which the error occurred; the path is
    extended as the error propagates up through nested serializers.
    """

    path: tuple[str | int, ...]
    """
    Association names and collection indices from the top-level serializer to the
    failing object.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.path = ()

    def __str__(self) -> str:
        return f"{self.path_str}: {self.message}"

    @property
    def path_str(self) -> str:
        """
        Path tuple formatted as dot notation.

        Examples:

        - `('comments', 1, 'author') -> "comments[1].author"`
        - `('author',) -> "author"`
        - `(0, 'author') -> "[0].author"`
        - `() -> "<root>"`
        """
        if not self.path:
            return "<root>"
        parts: list[str] = []
        for i, segment in enumerate(self.path):
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            else:
                prefix = "." if i != 0 else ""
                parts.append(f"{prefix}{segment}")
        return "".join(parts)

    def _bubble(self, segment: str | int):
        """
        Prepend path segment upon propagating to the parent serializer.
        """
        self.path = (segment, *self.path)


class SchemaNotFoundError(SerializationError):
    """
    No serializer is registered for the type of a related object.
    """

    obj: Any
    """
    The object which could not be serialized.
    """

    def __init__(self, obj: Any):
        super().__init__(
            f"No serializer registered for type {type(obj).__qualname__}"
        )
        self.obj = obj


class SchemaDeclarationError(Exception):
    """
    Invalid declaration on a serializer schema.
    """
