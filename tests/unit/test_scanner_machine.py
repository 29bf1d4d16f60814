"""Unit tests for the config scanner state machine."""

from __future__ import annotations

import io

import pytest

from confscan.models.datatypes import Entry, QuoteStyle, ScanLimits
from confscan.scanner.machine import ConfigScanner, iter_chars, iter_entries, scan
from confscan.scanner.states import ScanState


LEGACY_EXAMPLE = (
    "# this is config file example\n"
    'host="mysql.example.com" # this is SQL host\n'
    "user      =       'dba_admin'\n"
    "password = helloworld # test comment\n"
    "database=testdb123\n"
)


def test_scan_reads_mixed_quoting_example() -> None:
    """Scanner should accept unquoted, single-, and double-quoted values with comments."""

    assert scan(LEGACY_EXAMPLE) == {
        "host": "mysql.example.com",
        "user": "dba_admin",
        "password": "helloworld",
        "database": "testdb123",
    }


def test_scan_keeps_hash_inside_quotes_literal() -> None:
    """A `#` inside quotes should be value text, not a comment start."""

    assert scan('name = "a#b"\n') == {"name": "a#b"}
    assert scan("name='single quoted value with spaces and even # hash'\n") == {
        "name": "single quoted value with spaces and even # hash"
    }


def test_scan_drops_trailing_comment_from_unquoted_value() -> None:
    """Comment text after an unquoted value should never enter the value."""

    assert scan("name=value # trailing comment\n") == {"name": "value"}
    assert scan("name=value#glued comment\n") == {"name": "value"}


@pytest.mark.parametrize(
    "text",
    [
        "name=#comment\n",
        "name= # value omitted\n",
        "name =\t# value omitted\n",
    ],
)
def test_scan_treats_comment_after_equals_as_empty_value(text: str) -> None:
    """`name=` followed by a comment should produce an empty value."""

    assert scan(text) == {"name": ""}


def test_scan_preserves_quoted_whitespace_and_newlines_verbatim() -> None:
    """Quoted values should keep spaces, tabs, and newlines; only delimiters are stripped."""

    text = "motd=\"  first line\n\tsecond line  \"\nsql='select 1'\n"

    assert scan(text) == {
        "motd": "  first line\n\tsecond line  ",
        "sql": "select 1",
    }


def test_scan_allows_other_quote_kind_inside_value() -> None:
    """A quote of the other kind should not terminate a quoted value."""

    assert scan("a=\"it's\"\nb='say \"hi\"'\n") == {"a": "it's", "b": 'say "hi"'}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("name='abc", {"name": "abc"}),
        ('name="abc\ndef', {"name": "abc\ndef"}),
        ("first=1\nname='", {"first": "1", "name": ""}),
    ],
)
def test_scan_emits_unterminated_quoted_value_at_end_of_stream(
    text: str, expected: dict[str, str]
) -> None:
    """An unterminated quote at end-of-stream should still yield the accumulated value."""

    assert scan(text) == expected


def test_scan_flushes_unquoted_value_at_end_of_stream() -> None:
    """An unquoted value without any trailing delimiter should still be emitted."""

    assert scan("a=1\nb=2") == {"a": "1", "b": "2"}


@pytest.mark.parametrize("text", ["abc", "abc  ", "abc =", "abc=  "])
def test_scan_ignores_name_without_value_at_end_of_stream(text: str) -> None:
    """A name whose value never started should not produce an entry."""

    assert scan(text) == {}


def test_scan_keeps_last_value_for_duplicate_names() -> None:
    """Repeated names should resolve to the value of the last occurrence."""

    assert scan("a=1\nb=x\na='2'\n") == {"a": "2", "b": "x"}


@pytest.mark.parametrize("text", ["", "\n\n", "   \t\n", "# only a comment", "# c\n\n# d\n"])
def test_scan_returns_empty_mapping_for_blank_or_comment_only_input(text: str) -> None:
    """Blank and comment-only sources should scan to an empty mapping."""

    assert scan(text) == {}


def test_scan_accepts_names_with_digits_and_underscores() -> None:
    """Names may continue with letters, digits, and underscores after a leading letter."""

    assert scan("db_host2=local\nX_=1\n") == {"db_host2": "local", "X_": "1"}


def test_scan_accepts_name_and_equals_on_separate_lines() -> None:
    """Whitespace between name and `=` may include newlines."""

    assert scan("name\n  = value\n") == {"name": "value"}


def test_scan_skips_newlines_between_equals_and_value() -> None:
    """Whitespace after `=` may include newlines before the value starts."""

    assert scan("name=\n\nvalue\n") == {"name": "value"}


def test_scan_keeps_equals_signs_inside_unquoted_value() -> None:
    """Only the first `=` separates name and value."""

    assert scan("expr==x=y\n") == {"expr": "=x=y"}


def test_scan_treats_carriage_returns_as_whitespace() -> None:
    """CRLF line endings should scan like LF line endings."""

    assert scan("a=1\r\nb = '2'\r\n") == {"a": "1", "b": "2"}


def test_scan_starts_next_entry_right_after_closing_quote() -> None:
    """A closing quote returns to between-entries mode on the same line."""

    assert scan("a='x'b=2\n") == {"a": "x", "b": "2"}


def test_scan_keeps_non_ascii_characters_in_values() -> None:
    """Value characters are not classified beyond delimiters and whitespace."""

    assert scan("city=Plzeň\ngreeting='Ahoj světe'\n") == {
        "city": "Plzeň",
        "greeting": "Ahoj světe",
    }


def test_scan_accepts_values_up_to_configured_limits() -> None:
    """Names and values exactly at their limits should be accepted."""

    limits = ScanLimits(max_name_length=4, max_value_length=3)

    assert scan("abcd=xyz\n", limits=limits) == {"abcd": "xyz"}
    assert scan("abcd='x z'\n", limits=limits) == {"abcd": "x z"}


def test_scan_consumes_file_objects_and_chunk_lists() -> None:
    """Any iterable of text chunks should scan the same as one joined string."""

    chunks = ["a=", "1\nb", " = '2", "'\n"]

    assert scan(chunks) == {"a": "1", "b": "2"}
    assert scan(io.StringIO("".join(chunks))) == {"a": "1", "b": "2"}
    assert list(iter_chars(["ab", "", "c"])) == ["a", "b", "c"]


def test_iter_entries_reports_line_and_quote_style() -> None:
    """Entries should carry the line where they completed and their delimiter style."""

    text = "# header\nplain=1\nsingle='a'\ndouble=\"b\nc\"\nempty=#\n"

    assert list(iter_entries(text)) == [
        Entry(name="plain", value="1", line=2, quote=QuoteStyle.NONE),
        Entry(name="single", value="a", line=3, quote=QuoteStyle.SINGLE),
        Entry(name="double", value="b\nc", line=5, quote=QuoteStyle.DOUBLE),
        Entry(name="empty", value="", line=6, quote=QuoteStyle.NONE),
    ]


def test_config_scanner_emits_entry_on_terminating_character() -> None:
    """`feed()` should return an entry exactly when its value terminator arrives."""

    scanner = ConfigScanner()
    results = [scanner.feed(char) for char in "k=v"]

    assert results == [None, None, None]
    assert scanner.state is ScanState.VALUE
    assert scanner.feed(" ") == Entry(name="k", value="v", line=1)
    assert scanner.state is ScanState.LINE_END
    assert scanner.feed("\n") is None
    assert scanner.state is ScanState.SKIP_SPACE
    assert scanner.line == 2
    assert scanner.finish() is None


def test_config_scanner_walks_states_for_quoted_entry() -> None:
    """Scanner modes should follow the documented transitions for a quoted entry."""

    scanner = ConfigScanner()
    states = []
    for char in "# c\nkey = 'v'":
        scanner.feed(char)
        states.append(scanner.state)

    assert states == [
        ScanState.SKIP_COMMENT,
        ScanState.SKIP_COMMENT,
        ScanState.SKIP_COMMENT,
        ScanState.SKIP_SPACE,
        ScanState.PARAM_NAME,
        ScanState.PARAM_NAME,
        ScanState.PARAM_NAME,
        ScanState.SKIP_BEFORE_EQUAL,
        ScanState.SKIP_AFTER_EQUAL,
        ScanState.SKIP_AFTER_EQUAL,
        ScanState.VALUE_SINGLE_QUOTED,
        ScanState.VALUE_SINGLE_QUOTED,
        ScanState.SKIP_SPACE,
    ]


def test_config_scanner_is_single_use() -> None:
    """A finished scanner should refuse further input."""

    scanner = ConfigScanner()
    scanner.finish()

    with pytest.raises(RuntimeError, match="already finished"):
        scanner.feed("a")
    with pytest.raises(RuntimeError, match="already finished"):
        scanner.finish()


def test_scan_calls_do_not_share_state() -> None:
    """Each scan should start fresh regardless of where a previous scan stopped."""

    assert scan("a='unterminated") == {"a": "unterminated"}
    assert scan("b=2\n") == {"b": "2"}
