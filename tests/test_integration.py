"""End-to-end scenarios."""

from coml import dumps, load, parse, save
from coml.values import VBool, VNumber, VStringList

SAMPLE = (
    "# this is a comment\n"
    'some-string = "some string"\n'
    "\n"
    "# also a comment\n"
    "[stuff]\n"
    'str1 = "qweqwe"\n'
    'str2 = "asdasd"\n'
    "\n"
    "[qwerty]\n"
    "boolean = true\n"
    "number = 213\n"
    "floot = 42.69\n"
    'stringwithspace = "this string has spaces"\n'
    'list = [ "this", "is", "a", "list" ]\n'
    "nums = [ 123, 321 ]\n"
)


def test_sample_parses():
    doc = parse(SAMPLE)
    assert doc.find_string("some-string") == "some string"
    assert doc.table_names() == ["qwerty", "stuff"]
    assert doc.get("qwerty", "boolean") == VBool(True)
    assert doc.get("qwerty", "number") == VNumber(213)
    assert doc.get_string("qwerty", "stringwithspace") == "this string has spaces"
    assert doc.get("qwerty", "list") == VStringList(["this", "is", "a", "list"])
    assert doc.get_list_number("qwerty", "nums") == [123.0, 321.0]
    assert doc.get_string("stuff", "str2") == "asdasd"

def test_edit_and_write(tmp_path):
    doc = parse(SAMPLE)
    assert doc.get_float("qwerty", "floot") == 42.69
    assert doc.set_float("floot", 69.42, table="qwerty")

    path = tmp_path / "write_test.toml"
    assert save(doc, path)
    reloaded = load(path)
    assert reloaded.get_float("qwerty", "floot") == 69.42
    assert "floot = 69.42000\n" in path.read_text(encoding="utf-8")

def test_find_across_tables_uses_latest_table():
    doc = parse('[first]\nname = "one"\n[second]\nname = "two"\n')
    assert doc.find_string("name") == "two"

def test_type_is_fixed_after_parse():
    doc = parse("flag = true\n")
    assert not doc.set_int("flag", 3)
    assert doc.find("flag") == VBool(True)

def test_idempotent_on_sample():
    once = dumps(parse(SAMPLE))
    assert dumps(parse(once)) == once
