from bson import ObjectId
from models.common import coerce_int, parse_bool_filter
from repository import build_search_filter, parse_mongo_data, to_object_id, with_tiebreaker


def test_search_filter_escapes_regex():
    query = build_search_filter("a.b*", ("title", "excerpt"))
    assert query == {"$or": [
        {"title": {"$regex": r"a\.b\*", "$options": "i"}},
        {"excerpt": {"$regex": r"a\.b\*", "$options": "i"}},
    ]}
    assert build_search_filter("", ("title",)) == {}


def test_tiebreaker_appended_once():
    assert with_tiebreaker([("createdAt", -1)]) == [("createdAt", -1), ("_id", -1)]
    assert with_tiebreaker([("displayOrder", 1), ("_id", 1)]) == [("displayOrder", 1), ("_id", 1)]


def test_object_id_parsing():
    oid = ObjectId()
    assert to_object_id(str(oid)) == oid
    assert to_object_id("nope") is None
    assert to_object_id(None) is None


def test_parse_mongo_data_nested():
    oid = ObjectId()
    assert parse_mongo_data({"_id": oid, "refs": [oid], "inner": {"id": oid}}) == {
        "_id": str(oid), "refs": [str(oid)], "inner": {"id": str(oid)},
    }


def test_coerce_int():
    assert coerce_int("4", 5) == 4
    assert coerce_int(3.0, 5) == 3
    assert coerce_int("", 5) == 5
    assert coerce_int("abc", 5) == 5
    assert coerce_int(0, 5) == 5


def test_parse_bool_filter():
    assert parse_bool_filter("true") is True
    assert parse_bool_filter("False") is False
    assert parse_bool_filter("all") is None
    assert parse_bool_filter(None) is None
