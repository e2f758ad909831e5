"""
Naming conventions for output keys, via `inflection`.
"""

from __future__ import annotations

import inflection

__all__ = [
    "root_name",
    "id_key",
    "ids_key",
    "plural_key",
]

SERIALIZER_SUFFIX = "_serializer"


def root_name(class_name: str | None) -> str | None:
    """
    Derive default document root key from serializer class name, e.g.
    `"api.ProfileSerializer" -> "profile"`.
    """
    if not class_name:
        return None
    name = inflection.underscore(class_name.rpartition(".")[2])
    return name.removesuffix(SERIALIZER_SUFFIX) or None


def id_key(name: str) -> str:
    """
    Output key for the id of a single related object, e.g. `"author" -> "author_id"`.
    """
    return f"{name}_id"


def ids_key(name: str) -> str:
    """
    Output key for ids of multiple related objects, e.g.
    `"comments" -> "comment_ids"`.
    """
    return f"{inflection.singularize(name)}_ids"


def plural_key(name: str) -> str:
    return inflection.pluralize(name)
