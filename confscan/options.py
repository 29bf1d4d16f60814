"""Option binding for scanned config entries.

Responsibilities:
- Declare the option names an application understands, with defaults.
- Overlay scanned values onto those defaults after a successful scan.
- Reject names nobody declared, unless explicitly tolerated.

Key types:
- `OptionSpec`: one declared option.
- `OptionSchema`: ordered collection of declared options.
- `bind_options`: resolve a scanned mapping against a schema.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

import yaml

from .errors import UnknownOptionError
from .scanner.classify import CharClass, classify, is_name_char


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """One option an application accepts.

    Attributes:
        name: Option name as written in config files.
        default: Value used when the config file omits the option.
        help: Optional human-readable description.
    """

    name: str
    default: str = ""
    help: str = ""

    def __post_init__(self) -> None:
        """Reject names the scanner could never produce."""

        if not _is_valid_option_name(self.name):
            raise ValueError(
                f"Option name `{self.name}` must start with an ASCII letter and contain "
                "only letters, digits, and underscores."
            )


class OptionSchema:
    """Ordered set of declared options keyed by name."""

    def __init__(self, specs: Iterable[OptionSpec] = ()) -> None:
        """Initialize the schema, rejecting duplicate option names."""

        self._specs: dict[str, OptionSpec] = {}
        for spec in specs:
            if spec.name in self._specs:
                raise ValueError(f"Option `{spec.name}` is declared more than once.")
            self._specs[spec.name] = spec

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def defaults(self) -> dict[str, str]:
        """Return declared defaults in declaration order."""

        return {spec.name: spec.default for spec in self._specs.values()}

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], source_label: str = "options") -> OptionSchema:
        """Build a schema from `{name: default}` or `{name: {default, help}}` entries."""

        specs: list[OptionSpec] = []
        for raw_name, raw_spec in payload.items():
            name = str(raw_name)
            if isinstance(raw_spec, Mapping):
                unknown = sorted(str(key) for key in set(raw_spec).difference({"default", "help"}))
                if unknown:
                    raise ValueError(
                        f"{source_label} option `{name}` includes unsupported key(s): "
                        f"{', '.join(unknown)}."
                    )
                default = _scalar_text(raw_spec.get("default"), name, source_label)
                help_text = _scalar_text(raw_spec.get("help"), name, source_label)
            else:
                default = _scalar_text(raw_spec, name, source_label)
                help_text = ""
            specs.append(OptionSpec(name=name, default=default, help=help_text))
        return cls(specs)

    @classmethod
    def from_yaml(cls, path: Path) -> OptionSchema:
        """Load an option schema from a YAML mapping file."""

        source_label = f"YAML `{path}`"
        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"{source_label} is not valid YAML: {exc}") from exc
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"{source_label} must contain a top-level mapping/object.")
        return cls.from_mapping(payload, source_label=source_label)


def bind_options(
    values: Mapping[str, str],
    schema: OptionSchema,
    allow_unknown: bool = False,
) -> dict[str, str]:
    """Resolve scanned values against declared options.

    Args:
        values: Mapping returned by a successful scan.
        schema: Declared options with defaults.
        allow_unknown: Ignore undeclared names instead of failing.

    Returns:
        One value per declared option, in declaration order.

    Raises:
        UnknownOptionError: If `values` names undeclared options and
            `allow_unknown` is false.
    """

    unknown = unknown_option_names(values, schema)
    if unknown and not allow_unknown:
        raise UnknownOptionError(unknown)

    bound = schema.defaults()
    for name in bound:
        if name in values:
            bound[name] = values[name]
    return bound


def unknown_option_names(values: Mapping[str, str], schema: OptionSchema) -> list[str]:
    """Return scanned names missing from the schema, sorted."""

    return sorted(name for name in values if name not in schema)


def _is_valid_option_name(name: str) -> bool:
    if not name or classify(name[0]) is not CharClass.LETTER:
        return False
    return all(is_name_char(classify(char)) for char in name)


def _scalar_text(value: object, name: str, source_label: str) -> str:
    """Convert a YAML scalar to option text; mappings and lists are rejected."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{source_label} option `{name}` must use a scalar value.")
