"""
Action construction and codec.

Covers:
  - constructors build the expected dataclasses
  - at_path wraps outermost first
  - wire format keys (type / id / childAction)
  - decoding recurses and rejects unknown types
  - ActionRecord round trip through dicts
"""

import pytest

from elmish.kernel.events import (
    action_from_dict,
    action_to_dict,
    at_path,
    child,
    insert,
    make_record,
    record_from_dict,
    remove,
)
from elmish.kernel.types import ChildAction, Decrement, Increment, Insert, Remove, UnknownActionError


class TestConstructors:
    def test_basic(self):
        assert insert() == Insert()
        assert remove(3) == Remove(id=3)
        assert child(2, Increment()) == ChildAction(id=2, inner=Increment())

    def test_at_path_outermost_first(self):
        assert at_path([2, 0], Increment()) == ChildAction(id=2, inner=ChildAction(id=0, inner=Increment()))

    def test_at_empty_path_is_identity(self):
        assert at_path([], Insert()) == Insert()

    def test_actions_with_same_fields_differ_by_type(self):
        assert Increment() != Decrement()


class TestWireFormat:
    def test_encode(self):
        assert action_to_dict(Insert()) == {"type": "insert"}
        assert action_to_dict(Remove(id=4)) == {"type": "remove", "id": 4}
        assert action_to_dict(ChildAction(id=1, inner=Decrement())) == {
            "type": "childAction",
            "id": 1,
            "childAction": {"type": "decrement"},
        }

    def test_decode_nested(self):
        d = {
            "type": "childAction",
            "id": 3,
            "childAction": {"type": "childAction", "id": 0, "childAction": {"type": "increment"}},
        }
        assert action_from_dict(d) == at_path([3, 0], Increment())

    def test_decode_unknown_type_raises(self):
        with pytest.raises(UnknownActionError):
            action_from_dict({"type": "reset"})

    def test_decode_missing_type_raises(self):
        with pytest.raises(UnknownActionError):
            action_from_dict({"id": 1})

    def test_decode_unknown_inner_raises(self):
        with pytest.raises(UnknownActionError):
            action_from_dict({"type": "childAction", "id": 0, "childAction": {"type": "nope"}})


class TestRecords:
    def test_record_dict_round_trip(self):
        r = make_record(7, ChildAction(id=1, inner=Increment()), timestamp="2026-01-01T00:00:00Z")
        assert r.to_dict() == {
            "sequence": 7,
            "timestamp": "2026-01-01T00:00:00Z",
            "action": {"type": "childAction", "id": 1, "childAction": {"type": "increment"}},
        }
        assert record_from_dict(r.to_dict()) == r

    def test_default_timestamp_is_iso_utc(self):
        r = make_record(1, Insert())
        assert r.timestamp.endswith("Z")
        assert len(r.timestamp) == len("2026-01-01T00:00:00Z")
