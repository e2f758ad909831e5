"""
Test lookup of serializers by domain type.
"""

from dataclasses import dataclass

from pytest import raises

from serialcraft.exceptions import SchemaNotFoundError
from serialcraft.registry import SerializerRegistry, get_registry
from serialcraft.serializer import ArraySerializer, Serializer


@dataclass
class Vehicle:
    wheels: int


@dataclass
class Truck(Vehicle):
    payload: int


@dataclass
class Bicycle(Vehicle):
    pass


class VehicleSerializer(Serializer[Vehicle]):
    attributes = ("wheels",)


class TruckSerializer(Serializer[Truck]):
    attributes = ("wheels", "payload")


class DetailedVehicleSerializer(VehicleSerializer):
    """
    Not parameterized directly, so not registered.
    """

    attributes = ("kind",)


def test_registered():
    registry = get_registry()

    assert Vehicle in registry
    assert registry.serializers[Vehicle] is VehicleSerializer
    assert registry.serializers[Truck] is TruckSerializer


def test_find_mro():
    """
    Test that subclasses use the serializer registered for their base unless they
    have their own.
    """
    registry = get_registry()

    assert registry.find(Truck(wheels=6, payload=10)) is TruckSerializer
    assert registry.find(Bicycle(wheels=2)) is VehicleSerializer
    assert registry.find("vehicle") is None


def test_serializer_for():
    registry = get_registry()

    assert registry.serializer_for(Vehicle(wheels=4)) is VehicleSerializer
    assert registry.serializer_for([Vehicle(wheels=4)]) is ArraySerializer
    assert registry.serializer_for(()) is ArraySerializer

    with raises(SchemaNotFoundError, match="No serializer registered for type str"):
        registry.serializer_for("vehicle")


def test_register():
    class BicycleSerializer(Serializer):
        attributes = ("wheels",)

    registry = SerializerRegistry((Vehicle, VehicleSerializer))
    registry.register(Bicycle, BicycleSerializer)

    assert registry.find(Bicycle(wheels=2)) is BicycleSerializer
    assert registry.find(Truck(wheels=6, payload=10)) is VehicleSerializer
    assert Bicycle not in get_registry()

    registry.register(Bicycle, VehicleSerializer)
    assert registry.find(Bicycle(wheels=2)) is VehicleSerializer


def test_generic_intermediate():
    """
    Test registration through an intermediate generic serializer.
    """

    @dataclass
    class Boat:
        name: str

    class NamedSerializer[T](Serializer[T]):
        attributes = ("name",)

    class BoatSerializer(NamedSerializer[Boat]):
        pass

    assert get_registry().find(Boat(name="Boat 1")) is BoatSerializer
    assert BoatSerializer(Boat(name="Boat 1")).serializable_object() == {
        "name": "Boat 1"
    }
