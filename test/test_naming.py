"""
Test naming conventions.
"""

from serialcraft.naming import id_key, ids_key, plural_key, root_name


def test_root_name():
    assert root_name("ProfileSerializer") == "profile"
    assert root_name("AdminUserSerializer") == "admin_user"
    assert root_name("test_func.<locals>.PostSerializer") == "post"
    assert root_name("Profile") == "profile"
    assert root_name(None) is None


def test_association_keys():
    assert id_key("author") == "author_id"
    assert ids_key("comments") == "comment_ids"
    assert ids_key("categories") == "category_ids"
    assert plural_key("author") == "authors"
    assert plural_key("person") == "people"
