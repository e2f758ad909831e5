"""
Test end-to-end serialization via APIs.
"""

from dataclasses import dataclass, field

from pytest import raises

from serialcraft.serializing import (
    ArraySerializer,
    SchemaNotFoundError,
    Serializer,
    as_json,
    get_serializer,
    has_many,
    serialize,
)


@dataclass
class Member:
    id: int
    name: str


@dataclass
class Team:
    id: int
    name: str
    members: list[Member] = field(default_factory=list)
    lead: Member | None = None


class MemberSerializer(Serializer[Member]):
    attributes = ("id", "name")


class TeamSerializer(Serializer[Team]):
    attributes = ("id", "name")

    members = has_many(embed_in_root=True)


ALICE = Member(id=1, name="Alice")
BOB = Member(id=2, name="Bob")


def test_get_serializer():
    team = Team(id=1, name="Team 1")

    assert isinstance(get_serializer(team), TeamSerializer)
    assert isinstance(get_serializer([team]), ArraySerializer)
    assert type(get_serializer(None)) is Serializer
    assert isinstance(get_serializer(None, serializer=TeamSerializer), TeamSerializer)


def test_serialize():
    team = Team(id=1, name="Team 1", members=[ALICE, BOB])

    assert serialize(team) == {"id": 1, "name": "Team 1"}
    assert serialize(team, only=["name"]) == {"name": "Team 1"}
    assert serialize(team, wrap_in_array=True) == [{"id": 1, "name": "Team 1"}]
    assert serialize([ALICE, BOB]) == [
        {"id": 1, "name": "Alice"},
        {"id": 2, "name": "Bob"},
    ]


def test_serialize_absent():
    assert serialize(None) is None
    assert serialize(None, wrap_in_array=True) == []


def test_as_json():
    team = Team(id=1, name="Team 1", members=[ALICE, BOB])

    assert as_json(team, meta={"version": 2}) == {
        "team": {"id": 1, "name": "Team 1"},
        "members": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
        "meta": {"version": 2},
    }
    assert as_json(team, root=False) == {"id": 1, "name": "Team 1"}


def test_as_json_collection():
    """
    Test that members' root contributions are folded into one mapping.
    """
    teams = [
        Team(id=1, name="Team 1", members=[ALICE, BOB]),
        Team(id=2, name="Team 2", members=[BOB]),
    ]

    assert as_json(teams, root="teams") == {
        "teams": [{"id": 1, "name": "Team 1"}, {"id": 2, "name": "Team 2"}],
        "members": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}],
    }


def test_explicit_serializer():
    class TeamNameSerializer(Serializer):
        attributes = ("name",)

    teams = [Team(id=1, name="Team 1"), Team(id=2, name="Team 2")]

    assert serialize(teams[0], serializer=TeamNameSerializer) == {"name": "Team 1"}
    assert serialize(teams, serializer=TeamNameSerializer) == [
        {"name": "Team 1"},
        {"name": "Team 2"},
    ]


def test_schema_not_found():
    with raises(SchemaNotFoundError) as exc_info:
        serialize(object())

    assert exc_info.value.path == ()
    assert str(exc_info.value) == "<root>: No serializer registered for type object"


def test_as_json_absent():
    assert as_json(None, serializer=TeamSerializer) == {"team": None}
