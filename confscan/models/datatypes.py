"""Core datatypes shared across confscan modules.

Responsibilities:
- Represent immutable records produced by the scanner.
- Carry the bounded-length settings the scanner enforces.

Key types:
- `ScanLimits`, `QuoteStyle`, and `Entry`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


DEFAULT_MAX_NAME_LENGTH = 30
DEFAULT_MAX_VALUE_LENGTH = 255


@dataclass(frozen=True, slots=True)
class ScanLimits:
    """Maximum accepted lengths for parameter names and values.

    Attributes:
        max_name_length: Longest accepted parameter name, in characters.
        max_value_length: Longest accepted parameter value, in characters.
    """

    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH

    def __post_init__(self) -> None:
        """Reject limits that would make every entry unrepresentable."""

        for field_name in ("max_name_length", "max_value_length"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"`{field_name}` must be a positive integer.")


class QuoteStyle(str, Enum):
    """How a value was delimited in the source."""

    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True, slots=True)
class Entry:
    """One accepted parameter assignment.

    Attributes:
        name: Parameter name.
        value: Parameter value with delimiting quotes stripped.
        line: 1-based line on which the value finished.
        quote: Delimiter style of the value.
    """

    name: str
    value: str
    line: int
    quote: QuoteStyle = QuoteStyle.NONE
