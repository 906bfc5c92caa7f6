"""Tests for sfspine.core.coerce module."""

import uuid
from datetime import date

import pytest

from sfspine.core.coerce import VALUE_COLUMN, InputShape, classify, coerce
from sfspine.core.errors import CoercionError
from sfspine.core.table import RecordTable


class _Opaque:
    """An object with no accessible elements."""


class TestClassify:
    """Test shape classification at the API boundary."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (RecordTable({"a": [1]}), InputShape.TABLE),
            ({"a": 1}, InputShape.MAPPING),
            (["a", "b"], InputShape.SEQUENCE),
            (("a",), InputShape.SEQUENCE),
            ("001A", InputShape.SCALAR),
            (42, InputShape.SCALAR),
            (None, InputShape.SCALAR),
            (date(2024, 1, 31), InputShape.SCALAR),
        ],
    )
    def test_shapes(self, value, expected):
        """Each supported input lands in exactly one shape."""
        assert classify(value) is expected

    def test_opaque_object_rejected(self):
        """Non-enumerable objects raise CoercionError naming the type."""
        with pytest.raises(CoercionError) as exc_info:
            classify(_Opaque())
        assert exc_info.value.input_type == "_Opaque"
        assert exc_info.value.context.metadata["input_type"] == "_Opaque"


class TestCoerce:
    """Test conversion of each shape into a RecordTable."""

    def test_table_is_identity(self):
        """An existing RecordTable is returned unchanged."""
        t = RecordTable({"Id": ["001A"], "Name": ["Acme"]})
        assert coerce(t) is t

    def test_scalar_is_one_cell(self):
        """A bare scalar becomes a one-row, one-column table."""
        t = coerce("001A")
        assert t.column_names == [VALUE_COLUMN]
        assert t.column(VALUE_COLUMN) == ["001A"]

    def test_flat_sequence_one_row_per_element(self):
        """An unnamed sequence becomes one column with one row per element."""
        t = coerce(["001A", "001B", "001C"])
        assert t.n_cols == 1
        assert t.column(VALUE_COLUMN) == ["001A", "001B", "001C"]

    def test_generator_is_sequence(self):
        """Any non-string iterable is accepted as a sequence."""
        t = coerce(x for x in ["a", "b"])
        assert t.column(VALUE_COLUMN) == ["a", "b"]

    def test_mapping_is_one_record(self):
        """Each mapping key becomes a one-row column."""
        t = coerce({"Name": "Acme", "Industry": "Retail"})
        assert t.to_dict() == {"Name": ["Acme"], "Industry": ["Retail"]}

    def test_mapping_of_lists(self):
        """Sequence values of equal length become multi-row columns."""
        t = coerce({"Id": ["001A", "001B"], "Name": ["Acme", "Globex"]})
        assert t.n_rows == 2
        assert t.column("Name") == ["Acme", "Globex"]

    def test_mapping_scalar_recycled(self):
        """A scalar beside a sequence is repeated on every row."""
        t = coerce({"Id": ["001A", "001B"], "Type": "Account"})
        assert t.to_dict() == {"Id": ["001A", "001B"], "Type": ["Account", "Account"]}

    def test_mapping_divisor_length_recycled(self):
        """A sequence whose length divides the longest one is repeated in order."""
        t = coerce({"Id": ["1", "2", "3", "4"], "Flag": [True, False]})
        assert t.column("Flag") == [True, False, True, False]

    def test_mapping_lengths_not_recyclable(self):
        """Lengths that do not divide the longest column cannot form a table."""
        with pytest.raises(CoercionError) as exc_info:
            coerce({"Id": ["1", "2", "3"], "Name": ["a", "b"]})
        assert exc_info.value.context.columns == ["Id", "Name"]

    def test_mapping_with_opaque_value_is_one_cell(self):
        """A non-iterable value of any type is kept as a one-row cell."""
        key = uuid.UUID(int=1)
        opaque = _Opaque()
        t = coerce({"Id": key, "Ref": opaque})
        assert t.column("Id") == [key]
        assert t.column("Ref") == [opaque]

    def test_nested_sequence_keeps_one_row_per_element(self):
        """Nested elements stay whole as compound cells."""
        t = coerce([["a", "b"], ["c"], "d"])
        assert t.n_rows == 3
        assert t.column(VALUE_COLUMN) == [["a", "b"], ["c"], "d"]

    def test_sequence_of_record_mappings(self):
        """Each record mapping becomes one compound cell; keys are not lost."""
        records = [{"Id": "001A", "Name": "Acme"}, {"Id": "001B", "Name": "Globex"}]
        t = coerce(records)
        assert t.column_names == [VALUE_COLUMN]
        assert t.column(VALUE_COLUMN) == records

    def test_empty_sequence(self):
        """An empty sequence yields a zero-row value column."""
        t = coerce([])
        assert t.column_names == [VALUE_COLUMN]
        assert t.n_rows == 0

    def test_opaque_object(self):
        """coerce surfaces CoercionError for opaque input."""
        with pytest.raises(CoercionError):
            coerce(_Opaque())
