import pytest

from mousefx.core import Component
from mousefx.editor.inspect_field import InspectField


class Holder:
    def __init__(self):
        self.inner = type("Inner", (), {})()
        self.inner.value = 1.0


class Tweakable(Component):
    inspect_fields = {
        "speed": InspectField(path="speed", label="Speed", kind="float", min=0.0),
        "title": InspectField(path="title", label="Title", kind="string"),
        "debug_id": InspectField(path="debug_id", kind="int", non_serializable=True),
    }

    def __init__(self):
        super().__init__(enabled=True)
        self.speed = 2.0
        self.title = "fx"
        self.debug_id = 7


def test_path_get_set():
    holder = Holder()
    field = InspectField(path="inner.value")
    assert field.get_value(holder) == 1.0
    field.set_value(holder, 3.0)
    assert holder.inner.value == 3.0


def test_read_only_field():
    holder = Holder()
    with pytest.raises(AttributeError):
        InspectField(path="inner.value", read_only=True).set_value(holder, 5.0)
    assert holder.inner.value == 1.0


def test_field_without_path_or_accessor():
    with pytest.raises(ValueError):
        InspectField().get_value(Holder())


def test_component_fields_include_inherited():
    fields = Tweakable.all_inspect_fields()
    assert set(fields) == {"enabled", "speed", "title", "debug_id"}
    assert fields["speed"].label == "Speed"


def test_component_data_round_trip():
    comp = Tweakable()
    comp.deserialize_data({"speed": 4.0, "title": "sparks"})
    assert comp.serialize_data() == {"enabled": True, "speed": 4.0, "title": "sparks"}

    with pytest.raises(ValueError):
        comp.deserialize_data({"unknown": 1})
