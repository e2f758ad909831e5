"""
Test global configuration.
"""

from pathlib import Path

from pytest import raises, warns

from serialcraft.config import (
    SerializerConfig,
    embed,
    get_config,
    load_config,
    normalize_embed,
    setup,
)


def test_defaults():
    config = SerializerConfig()
    assert config.embed == "objects"
    assert config.embed_in_root is False


def test_setup():
    with setup() as config:
        config.embed = "ids"
        config.embed_in_root = True

    assert get_config().embed == "ids"
    assert get_config().embed_in_root is True


def test_setup_alias():
    """
    Test that singular aliases are normalized on exiting setup.
    """
    with setup() as config:
        config.embed = "object"  # type: ignore

    assert get_config().embed == "objects"


def test_normalize_embed():
    assert normalize_embed("id") == "ids"
    assert normalize_embed("objects") == "objects"
    assert normalize_embed("none") == "none"

    with raises(ValueError, match="Invalid embed strategy"):
        normalize_embed("everything")


def test_load_config(tmp_path: Path):
    path = tmp_path / "serialcraft.toml"
    path.write_text('embed = "ids"\nembed_in_root = true\n')

    config = load_config(path)

    assert config is get_config()
    assert config.embed == "ids"
    assert config.embed_in_root is True


def test_load_config_table(tmp_path: Path):
    path = tmp_path / "pyproject.toml"
    path.write_text(
        '[project]\nname = "app"\n\n[tool.serialcraft]\nembed = "id"\n'
    )

    load_config(path, table="tool.serialcraft")

    assert get_config().embed == "ids"
    assert get_config().embed_in_root is False


def test_load_config_invalid(tmp_path: Path):
    path = tmp_path / "serialcraft.toml"

    path.write_text('embed = "everything"\n')
    with raises(ValueError):
        load_config(path)

    path.write_text("include = true\n")
    with raises(KeyError):
        load_config(path)

    with raises(KeyError):
        load_config(path, table="tool.serialcraft")

    assert get_config().embed == "objects"


def test_embed_deprecated():
    with warns(DeprecationWarning):
        embed("ids", embed_in_root=True)

    assert get_config().embed == "ids"
    assert get_config().embed_in_root is True


def test_setup_failed():
    """
    Test that the configuration is unchanged if setup fails.
    """
    with setup() as config:
        config.embed = "ids"

    with raises(ValueError, match="Invalid embed strategy"):
        with setup() as config:
            config.embed = "everything"  # type: ignore
            config.embed_in_root = True

    assert get_config().embed == "ids"
    assert get_config().embed_in_root is False

    with raises(RuntimeError):
        with setup() as config:
            config.embed = "none"
            raise RuntimeError

    assert get_config().embed == "ids"
