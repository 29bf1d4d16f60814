"""Character-level state machine that turns `key=value` text into entries.

Responsibilities:
- Consume a character stream exactly once, left to right, without lookahead.
- Emit each `Entry` the moment its value is complete.
- Abort on the first malformed character with a located `ConfigScanError`.

Key public API:
- `ConfigScanner`: single-use machine fed one character at a time.
- `iter_entries`: lazily yield entries from an iterable of text chunks.
- `scan`: build a name-to-value mapping, all-or-nothing.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator

from ..errors import ConfigScanError, ScanErrorKind
from ..models.datatypes import Entry, QuoteStyle, ScanLimits
from .classify import CharClass, classify, is_name_char, is_whitespace
from .states import FLUSH_AT_END_STATES, ScanState


_QUOTE_STYLES = {
    ScanState.VALUE: QuoteStyle.NONE,
    ScanState.VALUE_SINGLE_QUOTED: QuoteStyle.SINGLE,
    ScanState.VALUE_DOUBLE_QUOTED: QuoteStyle.DOUBLE,
}

_Handler = Callable[[str, CharClass], "Entry | None"]


class ConfigScanner:
    """Deterministic scanner for the `name = value` per-line config format.

    One instance scans one source. Call `feed()` for every character and
    `finish()` once the stream is exhausted; both return the entry completed
    by that step, if any.
    """

    def __init__(
        self,
        limits: ScanLimits | None = None,
        source_name: str = "<string>",
    ) -> None:
        """Initialize a fresh scanner positioned at the start of line 1."""

        self._limits = limits if limits is not None else ScanLimits()
        self._source_name = source_name
        self._state = ScanState.SKIP_SPACE
        self._line = 1
        self._name: list[str] = []
        self._value: list[str] = []
        self._finished = False
        self._handlers: dict[ScanState, _Handler] = {
            ScanState.SKIP_SPACE: self._on_skip_space,
            ScanState.SKIP_COMMENT: self._on_skip_comment,
            ScanState.PARAM_NAME: self._on_param_name,
            ScanState.SKIP_BEFORE_EQUAL: self._on_skip_before_equal,
            ScanState.SKIP_AFTER_EQUAL: self._on_skip_after_equal,
            ScanState.VALUE: self._on_value,
            ScanState.LINE_END: self._on_line_end,
            ScanState.VALUE_SINGLE_QUOTED: self._on_single_quoted,
            ScanState.VALUE_DOUBLE_QUOTED: self._on_double_quoted,
        }

    @property
    def state(self) -> ScanState:
        """Current scanner mode."""

        return self._state

    @property
    def line(self) -> int:
        """1-based number of the line currently being scanned."""

        return self._line

    def feed(self, char: str) -> Entry | None:
        """Consume one character and return the entry it completes, if any.

        Raises:
            ConfigScanError: If the character is not allowed in the current mode.
            RuntimeError: If called after `finish()`.
        """

        if self._finished:
            raise RuntimeError("Scanner already finished; create a new one per source.")
        return self._handlers[self._state](char, classify(char))

    def finish(self) -> Entry | None:
        """Signal end-of-stream and flush a value still being accumulated."""

        if self._finished:
            raise RuntimeError("Scanner already finished; create a new one per source.")
        self._finished = True
        if self._state in FLUSH_AT_END_STATES:
            return self._emit(_QUOTE_STYLES[self._state])
        return None

    def _on_skip_space(self, char: str, char_class: CharClass) -> Entry | None:
        if char_class is CharClass.HASH:
            self._state = ScanState.SKIP_COMMENT
        elif char_class is CharClass.NEWLINE:
            self._line += 1
        elif char_class is CharClass.LETTER:
            self._name = [char]
            self._state = ScanState.PARAM_NAME
        elif char_class is not CharClass.SPACE:
            raise self._error(
                ScanErrorKind.INVALID_PARAM_START,
                "param name can't start with non-alpha char",
                char,
            )
        return None

    def _on_skip_comment(self, char: str, char_class: CharClass) -> Entry | None:
        if char_class is CharClass.NEWLINE:
            self._line += 1
            self._state = ScanState.SKIP_SPACE
        return None

    def _on_param_name(self, char: str, char_class: CharClass) -> Entry | None:
        if is_whitespace(char_class):
            if char_class is CharClass.NEWLINE:
                self._line += 1
            self._state = ScanState.SKIP_BEFORE_EQUAL
        elif char_class is CharClass.EQUALS:
            self._state = ScanState.SKIP_AFTER_EQUAL
        elif is_name_char(char_class):
            self._append(
                self._name,
                char,
                self._limits.max_name_length,
                ScanErrorKind.NAME_TOO_LONG,
                "param name",
            )
        else:
            raise self._error(
                ScanErrorKind.INVALID_NAME_CHAR,
                "wrong char in param name",
                char,
            )
        return None

    def _on_skip_before_equal(self, char: str, char_class: CharClass) -> Entry | None:
        if char_class is CharClass.NEWLINE:
            self._line += 1
        elif char_class is CharClass.EQUALS:
            self._state = ScanState.SKIP_AFTER_EQUAL
        elif char_class is not CharClass.SPACE:
            raise self._error(
                ScanErrorKind.MISSING_ASSIGNMENT,
                f"expected '=' after param name `{''.join(self._name)}`, got",
                char,
            )
        return None

    def _on_skip_after_equal(self, char: str, char_class: CharClass) -> Entry | None:
        if char_class is CharClass.NEWLINE:
            self._line += 1
            return None
        if char_class is CharClass.SPACE:
            return None

        self._value = []
        if char_class is CharClass.SINGLE_QUOTE:
            self._state = ScanState.VALUE_SINGLE_QUOTED
        elif char_class is CharClass.DOUBLE_QUOTE:
            self._state = ScanState.VALUE_DOUBLE_QUOTED
        elif char_class is CharClass.HASH:
            # `name=` followed by a comment is an empty value.
            self._state = ScanState.SKIP_COMMENT
            return self._emit(QuoteStyle.NONE)
        else:
            self._append_value(char)
            self._state = ScanState.VALUE
        return None

    def _on_value(self, char: str, char_class: CharClass) -> Entry | None:
        if not is_whitespace(char_class) and char_class is not CharClass.HASH:
            self._append_value(char)
            return None

        entry = self._emit(QuoteStyle.NONE)
        if char_class is CharClass.HASH:
            self._state = ScanState.SKIP_COMMENT
        elif char_class is CharClass.NEWLINE:
            self._line += 1
            self._state = ScanState.SKIP_SPACE
        else:
            self._state = ScanState.LINE_END
        return entry

    def _on_line_end(self, char: str, char_class: CharClass) -> Entry | None:
        if char_class is CharClass.NEWLINE:
            self._line += 1
            self._state = ScanState.SKIP_SPACE
        elif char_class is CharClass.HASH:
            self._state = ScanState.SKIP_COMMENT
        elif char_class is not CharClass.SPACE:
            raise self._error(
                ScanErrorKind.TRAILING_GARBAGE,
                "wrong char after param value",
                char,
            )
        return None

    def _on_single_quoted(self, char: str, char_class: CharClass) -> Entry | None:
        return self._on_quoted(char, char_class, CharClass.SINGLE_QUOTE, QuoteStyle.SINGLE)

    def _on_double_quoted(self, char: str, char_class: CharClass) -> Entry | None:
        return self._on_quoted(char, char_class, CharClass.DOUBLE_QUOTE, QuoteStyle.DOUBLE)

    def _on_quoted(
        self,
        char: str,
        char_class: CharClass,
        delimiter: CharClass,
        quote: QuoteStyle,
    ) -> Entry | None:
        """Accumulate a quoted value until its matching delimiter."""

        if char_class is delimiter:
            self._state = ScanState.SKIP_SPACE
            return self._emit(quote)
        if char_class is CharClass.NEWLINE:
            self._line += 1
        self._append_value(char)
        return None

    def _append_value(self, char: str) -> None:
        self._append(
            self._value,
            char,
            self._limits.max_value_length,
            ScanErrorKind.VALUE_TOO_LONG,
            "param value",
        )

    def _append(
        self,
        buffer: list[str],
        char: str,
        limit: int,
        kind: ScanErrorKind,
        label: str,
    ) -> None:
        """Append to a bounded buffer, failing before the limit is exceeded."""

        if len(buffer) + 1 > limit:
            raise self._error(kind, f"{label} is longer than {limit} characters")
        buffer.append(char)

    def _emit(self, quote: QuoteStyle) -> Entry:
        entry = Entry(
            name="".join(self._name),
            value="".join(self._value),
            line=self._line,
            quote=quote,
        )
        self._value = []
        return entry

    def _error(
        self,
        kind: ScanErrorKind,
        detail: str,
        char: str | None = None,
    ) -> ConfigScanError:
        return ConfigScanError(
            kind=kind,
            detail=detail,
            line=self._line,
            character=char,
            source=self._source_name,
        )


def iter_chars(source: Iterable[str]) -> Iterator[str]:
    """Flatten an iterable of text chunks (a string, file, or lines) into characters."""

    for chunk in source:
        yield from chunk


def iter_entries(
    source: Iterable[str],
    limits: ScanLimits | None = None,
    source_name: str = "<string>",
) -> Iterator[Entry]:
    """Yield entries from a character stream in the order they complete.

    Entries already yielded stay with the consumer when a later character
    raises `ConfigScanError`; use `scan()` for all-or-nothing results.
    """

    scanner = ConfigScanner(limits=limits, source_name=source_name)
    for char in iter_chars(source):
        entry = scanner.feed(char)
        if entry is not None:
            yield entry
    entry = scanner.finish()
    if entry is not None:
        yield entry


def scan(
    source: Iterable[str],
    limits: ScanLimits | None = None,
    source_name: str = "<string>",
) -> dict[str, str]:
    """Scan a whole config source into a name-to-value mapping.

    The last occurrence of a repeated name wins. Nothing is returned on
    failure: the first fatal error propagates and the partial mapping is
    discarded.

    Args:
        source: Text chunks to scan, e.g. a string or an open text file.
        limits: Name/value length bounds; defaults to `ScanLimits()`.
        source_name: Identifier used in diagnostics.

    Raises:
        ConfigScanError: On the first malformed character.
    """

    result: dict[str, str] = {}
    try:
        for entry in iter_entries(source, limits=limits, source_name=source_name):
            result[entry.name] = entry.value
    except ConfigScanError:
        result.clear()
        raise
    return result
