"""Tests for the Document model and its query/mutation API."""

import math

import pytest

from coml import dumps, parse
from coml.document import EntryStore
from coml.errors import NotFoundError, TypeMismatchError
from coml.values import VBool, VNumber, VNumberList, VString, VStringList

SAMPLE = (
    'title = "demo"\n'
    "debug = false\n"
    "[server]\n"
    "port = 8080\n"
    'host = "local"\n'
    "ratio = 0.5\n"
    "weights = [ 1, 2, 3 ]\n"
    'tags = [ "a", "b" ]\n'
    "[client]\n"
    "port = 9000\n"
    "retries = 3\n"
)


@pytest.fixture
def doc():
    return parse(SAMPLE)


# ---------------------------------------------------------------------------
# EntryStore
# ---------------------------------------------------------------------------

class TestEntryStore:
    def test_iterates_newest_first(self):
        store = EntryStore()
        store.insert("a", VNumber(1))
        store.insert("b", VNumber(2))
        assert store.keys() == ["b", "a"]
        assert [e.key for e in store.declared()] == ["a", "b"]

    def test_redeclared_key_replaces(self):
        store = EntryStore()
        store.insert("a", VNumber(1))
        store.insert("b", VNumber(2))
        store.insert("a", VNumber(3))
        assert len(store) == 2
        assert store.lookup("a").value == VNumber(3)
        assert store.keys() == ["a", "b"]

    def test_contains(self):
        store = EntryStore()
        store.insert("a", VBool(False))
        assert "a" in store
        assert "b" not in store


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def test_table_order_newest_first(doc):
    assert doc.table_names() == ["client", "server"]
    assert [t.name for t in doc.declared_tables()] == ["server", "client"]

def test_table_lookup(doc):
    assert doc.table("server").entries.lookup("port").value == VNumber(8080)
    assert doc.table("nope") is None

def test_source_is_kept(doc):
    assert doc.source == SAMPLE


# ---------------------------------------------------------------------------
# get / find
# ---------------------------------------------------------------------------

def test_get_scoped(doc):
    assert doc.get("server", "port") == VNumber(8080)
    assert doc.get("client", "port") == VNumber(9000)

def test_get_does_not_fall_back_to_root(doc):
    assert doc.get("server", "title") is None

def test_get_unknown_table(doc):
    assert doc.get("nope", "port") is None

def test_find_prefers_root(doc):
    assert doc.find("title") == VString("demo")

def test_find_uses_table_order(doc):
    # client was declared last, so it is searched first.
    assert doc.find("port") == VNumber(9000)

def test_find_missing(doc):
    assert doc.find("nothing") is None

def test_get_kv_unscoped_and_scoped(doc):
    assert doc.get_kv("port").value == VNumber(9000)
    assert doc.get_kv("port", table="server").value == VNumber(8080)
    assert doc.get_kv("title", table="server") is None

def test_duplicate_table_names():
    d = parse("[t]\nx = 1\ny = 9\n[t]\nx = 2\n")
    assert d.table_names() == ["t", "t"]
    assert d.get("t", "x") == VNumber(2)
    assert d.get("t", "y") == VNumber(9)


# ---------------------------------------------------------------------------
# Typed accessors
# ---------------------------------------------------------------------------

def test_typed_getters(doc):
    assert doc.get_int("server", "port") == 8080
    assert doc.get_float("server", "ratio") == 0.5
    assert doc.get_string("server", "host") == "local"
    assert doc.get_list_number("server", "weights") == [1.0, 2.0, 3.0]
    assert doc.get_list_string("server", "tags") == ["a", "b"]

def test_typed_finders(doc):
    assert doc.find_string("title") == "demo"
    assert doc.find_bool("debug") is False
    assert doc.find_int("retries") == 3
    assert doc.find_float("ratio") == 0.5
    assert doc.find_list_number("weights") == [1.0, 2.0, 3.0]
    assert doc.find_list_string("tags") == ["a", "b"]

def test_present_false_differs_from_missing(doc):
    assert doc.find_bool("debug") is False
    assert doc.find_bool("missing") is None

def test_wrong_variant_is_a_miss(doc):
    assert doc.get_bool("server", "port") is None
    assert doc.get_string("server", "port") is None
    assert doc.get_int("server", "host") is None
    assert doc.find_list_string("weights") is None

def test_get_int_truncates():
    d = parse("a = 2.7\nb = -2.7\n")
    assert d.find_int("a") == 2
    assert d.find_int("b") == -2

def test_list_getter_returns_copy(doc):
    weights = doc.get_list_number("server", "weights")
    weights.append(99.0)
    assert doc.get_list_number("server", "weights") == [1.0, 2.0, 3.0]


# ---------------------------------------------------------------------------
# Mutation
# ---------------------------------------------------------------------------

def test_set_matching_type(doc):
    assert doc.set_int("port", 8081, table="server") is True
    assert doc.get("server", "port") == VNumber(8081)

def test_set_float(doc):
    assert doc.set_float("ratio", 0.25, table="server") is True
    assert doc.get_float("server", "ratio") == 0.25

def test_set_string_and_bool(doc):
    assert doc.set_string("title", "other") is True
    assert doc.set_bool("debug", True) is True
    assert doc.find("title") == VString("other")
    assert doc.find("debug") == VBool(True)

def test_set_lists(doc):
    assert doc.set_list_number("weights", [4, 5], table="server") is True
    assert doc.set_list_string("tags", ["z"], table="server") is True
    assert doc.get("server", "weights") == VNumberList([4.0, 5.0])
    assert doc.get("server", "tags") == VStringList(["z"])

def test_set_refuses_type_change():
    d = parse("flag = true\n")
    assert d.set_float("flag", 1.0) is False
    assert d.set_int("flag", 1) is False
    assert d.find("flag") == VBool(True)

def test_set_refuses_list_type_change(doc):
    assert doc.set_list_string("weights", ["x"], table="server") is False
    assert doc.get("server", "weights") == VNumberList([1.0, 2.0, 3.0])

def test_set_missing_key(doc):
    assert doc.set_int("nothing", 1) is False
    assert doc.set_int("port", 1, table="nope") is False

def test_set_scoped_only_touches_that_table(doc):
    assert doc.set_int("port", 1, table="server") is True
    assert doc.get_int("client", "port") == 9000

def test_set_unscoped_hits_first_match(doc):
    assert doc.set_int("port", 1) is True
    assert doc.get_int("client", "port") == 1
    assert doc.get_int("server", "port") == 8080

def test_replace_raises(doc):
    with pytest.raises(NotFoundError):
        doc.replace("nothing", VNumber(1))
    with pytest.raises(TypeMismatchError):
        doc.replace("title", VNumber(1))
    assert doc.find("title") == VString("demo")

def test_earlier_reference_is_not_changed_by_set(doc):
    before = doc.get("server", "weights")
    doc.set_list_number("weights", [7], table="server")
    assert before == VNumberList([1.0, 2.0, 3.0])

@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_set_refuses_non_finite_numbers(doc, bad):
    assert doc.set_float("ratio", bad, table="server") is False
    assert doc.set_list_number("weights", [1.0, bad], table="server") is False
    assert doc.get_float("server", "ratio") == 0.5
    assert doc.get_list_number("server", "weights") == [1.0, 2.0, 3.0]
    assert parse(dumps(doc)).get_float("server", "ratio") == 0.5

def test_replace_rejects_non_finite(doc):
    with pytest.raises(ValueError):
        doc.replace("ratio", VNumber(math.inf), table="server")
