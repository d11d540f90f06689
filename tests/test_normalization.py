from decimal import Decimal

from hostel_ledger.services.report.normalization import (
    first_present,
    normalize_bed,
    normalize_floor,
    normalize_hostel,
    normalize_rooms,
)


class TestFloorShapes:
    def test_floor_id_priority(self):
        assert normalize_floor({"floorId": "a", "_id": "b", "id": "c"}).floor_id == "a"
        assert normalize_floor({"_id": "b", "id": "c"}).floor_id == "b"
        assert normalize_floor({"id": 7}).floor_id == "7"

    def test_floor_name_priority_and_fallback(self):
        assert normalize_floor({"floorId": "x", "floorName": "First", "name": "Other"}).floor_name == "First"
        assert normalize_floor({"floorId": "x", "name": "Other"}).floor_name == "Other"
        assert normalize_floor({"floorId": "abcdef123"}).floor_name == "Floor abcdef"

    def test_floor_without_id(self):
        floor = normalize_floor({"floorName": "Roof"})
        assert floor.floor_id is None
        assert floor.floor_name == "Roof"


class TestHostelShapes:
    def test_data_envelope(self):
        hostel = normalize_hostel({"success": True, "data": {"id": "h1", "name": "Sunrise", "floors": [{"floorId": "f1"}]}})
        assert hostel.hostel_id == "h1"
        assert hostel.name == "Sunrise"
        assert [f.floor_id for f in hostel.floors] == ["f1"]

    def test_bare_document(self):
        hostel = normalize_hostel({"_id": "h2", "hostelName": "Moon", "floors": []})
        assert hostel.hostel_id == "h2"
        assert hostel.name == "Moon"
        assert hostel.floors == []

    def test_legacy_floor_names(self):
        hostel = normalize_hostel({"data": {"floorNames": ["Ground", {"floorName": "First", "floorId": "F-1"}, {}]}})
        assert [(f.floor_id, f.floor_name) for f in hostel.floors] == [
            ("floor_1", "Ground"),
            ("F-1", "First"),
            ("floor_3", "Floor 3"),
        ]

    def test_floors_take_priority_over_legacy_names(self):
        hostel = normalize_hostel({"floors": [{"floorId": "real"}], "floorNames": ["Ground"]})
        assert [f.floor_id for f in hostel.floors] == ["real"]

    def test_non_mapping_body(self):
        assert normalize_hostel(None) is None
        assert normalize_hostel(["not", "a", "hostel"]) is None
        assert normalize_hostel({}) is None


class TestRoomsAndBeds:
    def test_rooms_from_envelope_or_list(self):
        assert [r.room_id for r in normalize_rooms({"rooms": [{"roomId": "r1"}]})] == ["r1"]
        assert [r.room_id for r in normalize_rooms([{"_id": "r2"}])] == ["r2"]
        assert normalize_rooms({"unexpected": True}) == []
        assert normalize_rooms(None) == []

    def test_room_and_bed_legacy_keys(self):
        rooms = normalize_rooms([{"id": "r3", "name": "Suite", "beds": [{"_id": "b9", "name": "Upper"}]}])
        room = rooms[0]
        assert (room.room_id, room.room_name) == ("r3", "Suite")
        assert (room.beds[0].bed_id, room.beds[0].bed_name) == ("b9", "Upper")

    def test_malformed_bed_values_are_coerced(self):
        bed = normalize_bed({
            "bedId": "b1",
            "occupantName": None,
            "actualAmount": "abc",
            "amountPaid": "1,500",
            "history": "not-a-list",
        })
        assert bed.occupant_name == ""
        assert bed.actual_amount == Decimal("0")
        assert bed.amount_paid == Decimal("1500")
        assert bed.history == []

    def test_negative_and_non_finite_amounts_read_as_zero(self):
        bed = normalize_bed({"bedId": "b1", "actualAmount": -200, "amountPaid": float("nan")})
        assert bed.actual_amount == Decimal("0")
        assert bed.amount_paid == Decimal("0")

    def test_bad_beds_are_skipped_not_fatal(self):
        rooms = normalize_rooms({"rooms": [{"roomId": "r1", "beds": ["junk", None, {"bedId": "ok"}]}]})
        assert [b.bed_id for b in rooms[0].beds] == ["ok"]

    def test_missing_beds_array(self):
        rooms = normalize_rooms({"rooms": [{"roomId": "r1", "beds": None}]})
        assert rooms[0].beds == []


def test_first_present_skips_empty_values():
    assert first_present({"a": "", "b": None, "c": 0, "d": "value"}, ("a", "b", "c", "d")) == "value"
    assert first_present({}, ("a",)) is None
