"""Scanner modes for the config state machine."""

from __future__ import annotations

from enum import Enum


class ScanState(Enum):
    """Current mode of the config scanner. Exactly one is active at a time."""

    SKIP_SPACE = "skip_space"
    SKIP_COMMENT = "skip_comment"
    PARAM_NAME = "param_name"
    SKIP_BEFORE_EQUAL = "skip_before_equal"
    SKIP_AFTER_EQUAL = "skip_after_equal"
    VALUE = "value"
    LINE_END = "line_end"
    VALUE_SINGLE_QUOTED = "value_single_quoted"
    VALUE_DOUBLE_QUOTED = "value_double_quoted"


# States whose partially accumulated value is emitted when the stream ends.
FLUSH_AT_END_STATES = frozenset(
    {
        ScanState.VALUE,
        ScanState.VALUE_SINGLE_QUOTED,
        ScanState.VALUE_DOUBLE_QUOTED,
    }
)
