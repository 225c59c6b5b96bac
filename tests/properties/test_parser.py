import pytest

from core import BlankLine, CommentLine, LineKind, PropertyLine
from properties.parser import is_comment, is_empty, is_writable_key, parse, parse_line


# ===========================================================
# parse_line — classification
# ===========================================================

class TestParseLineKinds:

    def test_empty(self):
        assert parse_line("") == BlankLine()

    @pytest.mark.parametrize("text", [" ", "\t", "   \t  "])
    def test_whitespace_only_is_blank(self, text):
        line = parse_line(text)
        assert line.kind is LineKind.BLANK
        assert line.raw_text == ""

    @pytest.mark.parametrize("text", ["# c", "!c", "   # indented", "#", "\t! tab"])
    def test_comment_kept_verbatim(self, text):
        line = parse_line(text)
        assert line == CommentLine(text)

    def test_comment_leader_and_text(self):
        line = parse_line("  ! hello")
        assert line.leader == "!"
        assert line.text == " hello"

    def test_comment_leader_only_counts_first(self):
        line = parse_line("key=#notacomment")
        assert line.kind is LineKind.PROPERTY
        assert line.value == "#notacomment"


# ===========================================================
# parse_line — properties
# ===========================================================

class TestParseLineProperties:

    def test_equals(self):
        assert parse_line("a=aa") == PropertyLine("a", "aa", "=")

    def test_colon(self):
        assert parse_line("ee: r-rt rr") == PropertyLine("ee", "r-rt rr", ":")

    def test_key_with_spaces(self):
        assert parse_line("c ccc = cccc") == PropertyLine("c ccc", "cccc", "=")

    def test_leading_whitespace_trimmed(self):
        assert parse_line("    b=bbb   ") == PropertyLine("b", "bbb", "=")

    def test_key_only(self):
        assert parse_line("dd") == PropertyLine("dd", "", "=")
        assert parse_line("  dd  ") == PropertyLine("dd", "", "=")

    def test_key_only_reads_like_empty_value(self):
        assert parse_line("dd").value == parse_line("dd=").value

    def test_first_separator_wins(self):
        assert parse_line("url=http://x:8080/a=b") == \
            PropertyLine("url", "http://x:8080/a=b", "=")
        assert parse_line("k:v=w") == PropertyLine("k", "v=w", ":")

    def test_separator_at_start_belongs_to_key(self):
        assert parse_line("=x=y") == PropertyLine("=x", "y", "=")
        assert parse_line(":only") == PropertyLine(":only", "", "=")

    def test_separator_right_after_key_start(self):
        assert parse_line("a:") == PropertyLine("a", "", ":")
        assert parse_line("  a:b") == PropertyLine("a", "b", ":")

    def test_empty_value(self):
        assert parse_line("k = ") == PropertyLine("k", "", "=")


# ===========================================================
# is_comment / is_empty
# ===========================================================

class TestPredicates:

    def test_is_comment(self):
        assert is_comment("  # x")
        assert is_comment("!")
        assert not is_comment("a=#")

    def test_is_empty(self):
        assert is_empty("")
        assert is_empty("  \t")
        assert not is_empty(" a")

    @pytest.mark.parametrize("key", ["a", "db.host", "c ccc", "paths/root", "=lead"])
    def test_writable_keys(self, key):
        assert is_writable_key(key)

    @pytest.mark.parametrize("key", ["", " a", "a ", "x=y", "x:y", "#k", "!k", "a\nb", "a\r"])
    def test_unwritable_keys(self, key):
        assert not is_writable_key(key)


# ===========================================================
# parse — whole documents
# ===========================================================

class TestParseDocument:

    def test_example_document(self):
        doc = parse("a=aa\nb=bbb\nc ccc = cccc\ndd\n# commment1\n!comment2\n\nee: r-rt rr\n")
        assert doc.get("a") == "aa"
        assert doc.get("c ccc") == "cccc"
        assert doc.get("dd") == ""
        assert doc.get("ee") == "r-rt rr"
        assert doc.get("Z") is None

    def test_indented_document(self):
        doc = parse("\n    a=aa\n    b=bbb\n    # commment1\n    \n    ee: r-rt rr\n    ")
        assert doc.get("a") == "aa"
        assert doc.get("ee") == "r-rt rr"
        assert [line.kind for line in doc] == [
            LineKind.BLANK, LineKind.PROPERTY, LineKind.PROPERTY,
            LineKind.COMMENT, LineKind.BLANK, LineKind.PROPERTY, LineKind.BLANK,
        ]

    def test_empty_text(self):
        doc = parse("")
        assert len(doc) == 0

    def test_single_newline_is_one_blank_line(self):
        doc = parse("\n")
        assert list(doc) == [BlankLine()]

    def test_missing_final_newline(self):
        assert len(parse("a=1\nb=2")) == 2
        assert len(parse("a=1\nb=2\n")) == 2

    def test_crlf(self):
        doc = parse("a=1\r\n# c\r\n")
        assert doc.get("a") == "1"
        assert doc.lines[1].raw_text == "# c"

    def test_file_path_recorded(self):
        assert parse("", file_path="x.properties").file_path == "x.properties"
