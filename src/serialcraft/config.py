"""
Process-wide serializer configuration.

The configuration is mutated only during setup, under an exclusive lock, and is
treated as read-only once serialization begins.
"""

from __future__ import annotations

import logging
import threading
import warnings
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Generator, Literal, Mapping, cast

import tomlkit

__all__ = [
    "EmbedType",
    "SerializerConfig",
    "get_config",
    "setup",
    "load_config",
    "normalize_embed",
    "embed",
]

_logger = logging.getLogger(__name__)

type EmbedType = Literal["ids", "objects", "none"]
"""
Strategies with which to embed associations:

- `"ids"`: Embed id(s) of related objects
- `"objects"`: Embed serialized related objects
- `"none"`: Skip association
"""

EMBED_ALIASES: dict[str, EmbedType] = {
    "id": "ids",
    "ids": "ids",
    "object": "objects",
    "objects": "objects",
    "none": "none",
}


@dataclass(kw_only=True)
class SerializerConfig:
    """
    Defaults applied to associations which don't specify their own options.
    """

    embed: EmbedType = "objects"
    """
    Default embedding strategy.
    """

    embed_in_root: bool = False
    """
    Whether embedded objects are flattened to the document root by default.
    """


_CONFIG = SerializerConfig()
_LOCK = threading.Lock()


def get_config() -> SerializerConfig:
    """
    Get the global configuration; callers must not mutate it outside of `setup()`.
    """
    return _CONFIG


@contextmanager
def setup() -> Generator[SerializerConfig, None, None]:
    """
    Yield the global configuration for updating under an exclusive lock:

    ```python
    with setup() as config:
        config.embed = "ids"
        config.embed_in_root = True
    ```

    If the update raises, the previous configuration is restored.
    """
    with _LOCK:
        snapshot = replace(_CONFIG)
        try:
            yield _CONFIG
            _CONFIG.embed = normalize_embed(_CONFIG.embed)
        except Exception:
            for f in fields(SerializerConfig):
                setattr(_CONFIG, f.name, getattr(snapshot, f.name))
            raise
    _logger.debug("Serializer configuration updated: %s", _CONFIG)


def load_config(path: Path | str, *, table: str | None = None) -> SerializerConfig:
    """
    Load configuration from a TOML file and apply it to the global configuration.

    :param path: Path to TOML file
    :param table: Optional dotted path to the table holding the options, e.g. \
    `"tool.serialcraft"` for `pyproject.toml`
    :raises KeyError: If the table or an option is not found
    :raises ValueError: If an option has an invalid value
    """
    document = tomlkit.parse(Path(path).read_text())
    values: Mapping[str, Any] = document.unwrap()

    if table:
        for part in table.split("."):
            values = cast(Mapping[str, Any], values[part])

    names = {f.name for f in fields(SerializerConfig)}
    if unknown := [k for k in values if k not in names]:
        raise KeyError(f"Unknown configuration options: {unknown}")

    with setup() as config:
        if "embed" in values:
            config.embed = normalize_embed(values["embed"])
        if "embed_in_root" in values:
            config.embed_in_root = bool(values["embed_in_root"])

    _logger.debug("Loaded serializer configuration from %s", path)
    return config


def normalize_embed(value: str) -> EmbedType:
    """
    Normalize embedding strategy, accepting singular aliases.

    :raises ValueError: If the strategy is not recognized
    """
    if value not in EMBED_ALIASES:
        raise ValueError(
            f"Invalid embed strategy: {value!r}, must be one of {list(EMBED_ALIASES)}"
        )
    return EMBED_ALIASES[value]


def embed(type_: str, *, embed_in_root: bool = False):
    """
    Set the default embedding strategy.

    Deprecated: use `setup()` instead.
    """
    warnings.warn(
        "embed() is deprecated, use setup() to configure defaults globally",
        DeprecationWarning,
        stacklevel=2,
    )
    with setup() as config:
        config.embed = normalize_embed(type_)
        if embed_in_root:
            config.embed_in_root = True
