"""Tests for the value tree."""

import pytest

from tabselect.values import (
    Primitive,
    Record,
    RecordBuilder,
    Span,
    Table,
    Tag,
    from_python,
    nothing,
    to_python,
)


class TestConversion:
    """Tests for converting to and from plain Python data."""

    def test_from_python_record(self):
        """dicts become records with their key order."""
        value = from_python({"b": 1, "a": "x"})

        assert isinstance(value, Record)
        assert value.keys() == ["b", "a"]
        assert value.fields["a"] == Primitive("x")

    def test_from_python_table(self):
        """lists and tuples become tables."""
        assert isinstance(from_python([1, 2]), Table)
        assert isinstance(from_python((1, 2)), Table)

    def test_from_python_tags_every_node(self):
        """The given tag is shared by all nodes."""
        tag = Tag("in.json", Span(3, 9))
        value = from_python({"a": [1]}, tag)

        assert value.tag == tag
        assert value.fields["a"].tag == tag
        assert value.fields["a"].rows[0].tag == tag

    def test_from_python_unsupported(self):
        """Objects with no value equivalent are rejected."""
        with pytest.raises(TypeError):
            from_python(object())

    def test_round_trip_nested(self):
        """Nested data survives conversion."""
        data = {"a": [1, {"b": None}], "c": {"d": True, "e": 1.5}}
        assert to_python(from_python(data)) == data


class TestRecords:
    """Tests for records and the record builder."""

    def test_get_data_missing_is_nothing(self):
        """Reading an absent field gives the null marker."""
        assert Record().get_data("x").is_nothing()

    def test_builder_preserves_order(self):
        """Fields come out in insertion order."""
        builder = RecordBuilder()
        builder.insert("z", Primitive(1))
        builder.insert("a", Primitive(2))
        assert builder.into_value().keys() == ["z", "a"]

    def test_builder_repeated_key(self):
        """Re-inserting a key replaces its value but keeps its position."""
        builder = RecordBuilder()
        builder.insert("a", Primitive(1))
        builder.insert("b", Primitive(2))
        builder.insert("a", Primitive(3))

        record = builder.into_value()
        assert record.keys() == ["a", "b"]
        assert record.fields["a"] == Primitive(3)

    def test_builder_tag(self):
        """Built records carry the builder's tag."""
        tag = Tag("cmd")
        assert RecordBuilder(tag).into_value().tag == tag


class TestTables:
    def test_iterates_rows(self):
        """Iterating a table yields its rows in order."""
        table = from_python([1, {"a": 2}])

        rows = list(table)

        assert rows == [Primitive(1), from_python({"a": 2})]
        assert len(table) == 2


class TestPrimitives:
    """Tests for scalars and the null marker."""

    def test_nothing(self):
        """nothing() is a primitive holding None."""
        assert nothing().is_nothing()
        assert not Primitive(0).is_nothing()

    def test_equality_ignores_tags(self):
        """Values compare by content, not provenance."""
        assert Primitive(1, Tag("a")) == Primitive(1, Tag("b"))

    def test_tag_str(self):
        """Tags render as anchor and span."""
        assert str(Tag("f.json", Span(1, 4))) == "f.json:1..4"
        assert str(Tag()) == "0..0"
