"""
Per-call filtering of declared attribute and association names.
"""

from __future__ import annotations

from typing import Iterable

__all__ = [
    "normalize_names",
    "filter_keys",
]


def normalize_names(names: Iterable[str] | str | None) -> tuple[str, ...] | None:
    """
    Normalize user-passed names to a tuple, treating a single string as one name.
    """
    if names is None:
        return None
    if isinstance(names, str):
        return (names,)
    return tuple(names)


def filter_keys(
    keys: Iterable[str],
    only: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
) -> list[str]:
    """
    Get effective keys, preserving the order of `keys`:

    - If `only` is passed, keep keys also in `only`
    - Else if `exclude` is passed, drop keys in `exclude`
    - Else keep all keys

    Names in `only` or `exclude` which aren't in `keys` have no effect.
    """
    if only is not None:
        only_ = set(only)
        return [k for k in keys if k in only_]
    if exclude is not None:
        exclude_ = set(exclude)
        return [k for k in keys if k not in exclude_]
    return list(keys)
