r"""
Table converter tests

Tests conversion of '&' / '$' separated text into table markup, including
the optional trailing separators and the table escapes \& and \$.
"""

from vvsml.lib.tables import table_convert, rows_split


class TestTableConvert:
    """Test table_convert() output"""

    def test_two_rows(self):
        assert table_convert("a&b$c&d") == "table{row{text{a}text{b}}row{text{c}text{d}}}"

    def test_trailing_separators_optional(self):
        assert table_convert("a&b&$c&d&$") == "table{row{text{a}text{b}}row{text{c}text{d}}}"

    def test_escaped_separator(self):
        assert table_convert(r"x \& y & z") == "table{row{text{x & y }text{ z}}}"

    def test_escaped_row_separator(self):
        assert table_convert(r"price \$5 & ok") == "table{row{text{price $5 }text{ ok}}}"

    def test_surrounding_whitespace_kept(self):
        assert table_convert("a & b $\n") == "table{row{text{a }text{ b }}}"

    def test_newlines_collapsed(self):
        assert table_convert("name\n&\n\nage$") == "table{row{text{name }text{ age}}}"

    def test_document_escapes_left_alone(self):
        assert table_convert(r"\{x\}") == r"table{row{text{\{x\}}}}"

    def test_empty_input(self):
        assert table_convert("") == "table{}"


class TestRowsSplit:
    """Test row/item splitting"""

    def test_whitespace_only_tail_dropped(self):
        assert rows_split("a&b$\n\n") == [["a", "b"]]

    def test_empty_item_between_separators(self):
        assert rows_split("a&&b$") == [["a", "", "b"]]
