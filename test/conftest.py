from dataclasses import replace

from pytest import fixture

from serialcraft.config import get_config, setup


@fixture(autouse=True)
def restore_config():
    """
    Restore global configuration after each test.
    """
    saved = replace(get_config())
    yield
    with setup() as config:
        config.embed = saved.embed
        config.embed_in_root = saved.embed_in_root
