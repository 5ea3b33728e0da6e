"""Locate and load configuration files (JSON or a flat YAML subset)."""

from __future__ import annotations

import json
import math
import os
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Callable

from repaddu.core import (
    CliOptions,
    GroupingMode,
    InvalidUsage,
    IoFailure,
    MarkerMode,
    OutputFormat,
    to_lower,
)

__all__ = ["resolve_config_path", "parse_yaml_config", "load_config_file"]

_DEFAULT_CANDIDATES = (".repaddu.json", ".repaddu.yaml", ".repaddu.yml")
_WHITESPACE = " \t\n\v\f\r"
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_UINT64_LIMIT = 2**64
_LEADING_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")

_GROUPING_MODES = {mode.value: mode for mode in GroupingMode}
_OUTPUT_FORMATS = {fmt.value: fmt for fmt in OutputFormat}
_MARKER_MODES = {mode.value: mode for mode in MarkerMode}

_BOOL_KEYS = (
    ("include_headers", "include_headers"),
    ("include_sources", "include_sources"),
    ("include_hidden", "include_hidden"),
    ("include_binaries", "include_binaries"),
    ("follow_symlinks", "follow_symlinks"),
    ("headers_first", "headers_first"),
    ("emit_tree", "emit_tree"),
    ("emit_cmake", "emit_cmake"),
    ("emit_build_files", "emit_build_files"),
    ("emit_links", "emit_links"),
    ("frontmatter", "emit_frontmatter"),
    ("force_large", "force_large_files"),
    ("redact_pii", "redact_pii"),
    ("analyze_only", "analyze_only"),
    ("analysis_enabled", "analysis_enabled"),
    ("analysis_deep", "analysis_deep"),
    ("extract_tags", "extract_tags"),
    ("isolate_docs", "isolate_docs"),
    ("dry_run", "dry_run"),
    ("parallel_traversal", "parallel_traversal"),
)
_INT_KEYS = (("max_files", "max_files"), ("number_width", "number_width"))
_UINT_KEYS = (("max_bytes", "max_bytes"), ("max_file_size", "max_file_size"))
_LIST_KEYS = (
    ("analysis_views", "analysis_views"),
    ("extensions", "extensions"),
    ("exclude_extensions", "exclude_extensions"),
)


def resolve_config_path(args: Sequence[str]) -> Path:
    """Return the config path named by ``--config`` or the first existing default.

    ``args`` includes the program name at position 0, which is never inspected.
    Falls back to ``.repaddu.json`` when no candidate exists.
    """
    for flag, value in zip(args[1:], args[2:]):
        if flag == "--config":
            return Path(value)
    for candidate in _DEFAULT_CANDIDATES:
        if os.path.exists(candidate):
            return Path(candidate)
    return Path(_DEFAULT_CANDIDATES[0])


def _trim(value: str) -> str:
    return value.strip(_WHITESPACE)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _strip_inline_comment(line: str) -> str:
    kept: list[str] = []
    in_single = in_double = escaped = False
    for ch in line:
        if ch == "\\" and in_double and not escaped:
            escaped = True
            kept.append(ch)
            continue
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single and not escaped:
            in_double = not in_double
        elif ch == "#" and not in_single and not in_double:
            break
        kept.append(ch)
        escaped = False
    return "".join(kept)


def parse_yaml_config(text: str) -> dict[str, str | list[str]]:
    """Parse flat ``key: value`` lines; ``[a, b]`` values become lists of strings.

    Comments, blank lines and lines without a colon are ignored; quotes around
    scalars and list items are removed. A later line for a key replaces an earlier one.
    """
    values: dict[str, str | list[str]] = {}
    for line in text.split("\n"):
        stripped = _trim(_strip_inline_comment(line))
        if not stripped or stripped.startswith("#"):
            continue
        key, colon, raw_value = stripped.partition(":")
        if not colon:
            continue
        key = _trim(key)
        value = _trim(raw_value)
        if value.startswith("[") and value.endswith("]") and len(value) >= 2:
            inner = _trim(value[1:-1])
            values[key] = [_unquote(item) for item in map(_trim, inner.split(",")) if item]
        else:
            values[key] = _unquote(value)
    return values


def _leading_integer(text: str) -> int | None:
    match = _LEADING_INTEGER.match(text)
    return int(match.group(1)) if match else None


class _YamlReader:
    def __init__(self, values: Mapping[str, str | list[str]]) -> None:
        self._scalars = {k: v for k, v in values.items() if isinstance(v, str)}
        self._lists = {k: v for k, v in values.items() if isinstance(v, list)}

    def get_bool(self, key: str) -> bool | None:
        text = self._scalars.get(key)
        if text is None:
            return None
        lowered = to_lower(text)
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        return None

    def get_str(self, key: str) -> str | None:
        return self._scalars.get(key)

    def get_int(self, key: str) -> int | None:
        text = self._scalars.get(key)
        number = None if text is None else _leading_integer(text)
        if number is None or not _INT32_MIN <= number <= _INT32_MAX:
            return None
        return number

    def get_uint(self, key: str) -> int | None:
        text = self._scalars.get(key)
        number = None if text is None else _leading_integer(text)
        if number is None or abs(number) >= _UINT64_LIMIT:
            return None
        return number % _UINT64_LIMIT

    def get_list(self, key: str) -> list[str] | None:
        items = self._lists.get(key)
        return None if items is None else list(items)


class _JsonReader:
    def __init__(self, obj: Mapping[str, Any]) -> None:
        self._obj = obj

    def _number(self, key: str) -> int | None:
        value = self._obj.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return int(value)

    def get_bool(self, key: str) -> bool | None:
        value = self._obj.get(key)
        return value if isinstance(value, bool) else None

    def get_str(self, key: str) -> str | None:
        value = self._obj.get(key)
        return value if isinstance(value, str) else None

    def get_int(self, key: str) -> int | None:
        return self._number(key)

    def get_uint(self, key: str) -> int | None:
        return self._number(key)

    def get_list(self, key: str) -> list[str] | None:
        value = self._obj.get(key)
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, str)]


def _path_or_none(text: str) -> Path | None:
    return Path(text) if text else None


def _apply(reader: _YamlReader | _JsonReader, options: CliOptions) -> None:
    def assign(key: str, attribute: str, getter: Callable[[str], Any]) -> None:
        value = getter(key)
        if value is not None:
            setattr(options, attribute, value)

    for key, attribute in (("input", "input_path"), ("output", "output_path")):
        text = reader.get_str(key)
        if text is not None:
            setattr(options, attribute, Path(text))
    for key, attribute in _INT_KEYS:
        assign(key, attribute, reader.get_int)
    for key, attribute in _UINT_KEYS:
        assign(key, attribute, reader.get_uint)
    for key, attribute in _BOOL_KEYS:
        assign(key, attribute, reader.get_bool)
    for key, attribute in _LIST_KEYS:
        assign(key, attribute, reader.get_list)
    assign("analysis_collapse", "analysis_collapse", reader.get_str)

    tag_patterns = reader.get_str("tag_patterns")
    if tag_patterns is not None:
        options.tag_patterns_path = _path_or_none(tag_patterns)

    for key, attribute, choices in (
        ("group_by", "group_by", _GROUPING_MODES),
        ("format", "format", _OUTPUT_FORMATS),
        ("markers", "markers", _MARKER_MODES),
    ):
        chosen = choices.get(reader.get_str(key) or "")
        if chosen is not None:
            setattr(options, attribute, chosen)


def _reject_constant(name: str) -> float:
    raise ValueError(f"Unsupported JSON constant: {name}")


def load_config_file(path: str | os.PathLike[str], options: CliOptions) -> CliOptions:
    """Apply the settings in a config file to ``options`` and return it.

    Files ending in .yaml or .yml are read as flat YAML, all others as JSON.
    Raises IoFailure if the file cannot be read and InvalidUsage if JSON is
    malformed or not an object. Unknown keys and mistyped values are ignored.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8", errors="replace")
    except OSError as error:
        raise IoFailure(f"Failed to open config file: {config_path}") from error

    if to_lower(config_path.suffix) in (".yaml", ".yml"):
        _apply(_YamlReader(parse_yaml_config(text)), options)
        return options

    try:
        root = json.loads(text, parse_constant=_reject_constant)
    except ValueError as error:
        raise InvalidUsage(f"Failed to parse config file {config_path}: {error}") from error
    if not isinstance(root, dict):
        raise InvalidUsage("Config file must be a JSON object.")
    for value in root.values():
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidUsage(f"Failed to parse config file {config_path}")
    _apply(_JsonReader(root), options)
    return options