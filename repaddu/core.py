"""Shared types, options and small helpers used across repaddu."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

__all__ = [
    "FileClass",
    "GroupingMode",
    "OutputFormat",
    "MarkerMode",
    "CliOptions",
    "FileEntry",
    "OutputChunk",
    "RepadduError",
    "IoFailure",
    "InvalidUsage",
    "OutputConstraints",
    "to_lower",
    "sanitize_name",
    "file_class_label",
    "classify_extension",
]


class FileClass(Enum):
    """Coarse classification of a file by its extension."""

    HEADER = "header"
    SOURCE = "source"
    OTHER = "other"


class GroupingMode(Enum):
    """Strategy used to group files into output chunks."""

    DIRECTORY = "directory"
    COMPONENT = "component"
    TYPE = "type"
    SIZE = "size"


class OutputFormat(Enum):
    """Output file format."""

    MARKDOWN = "markdown"
    JSONL = "jsonl"
    HTML = "html"


class MarkerMode(Enum):
    """How file boundaries are marked in markdown output."""

    FENCED = "fenced"
    SENTINEL = "sentinel"


class RepadduError(Exception):
    """Base class for errors reported by repaddu."""


class IoFailure(RepadduError):
    """A file or directory could not be read or written."""


class InvalidUsage(RepadduError):
    """Options or configuration are invalid."""


class OutputConstraints(RepadduError):
    """The output cannot satisfy the configured size or count limits."""


@dataclass
class CliOptions:
    """All settings that control a repaddu run."""

    input_path: Path = Path()
    output_path: Path = Path()
    max_files: int = 0
    max_bytes: int = 0
    number_width: int = 3
    include_headers: bool = False
    include_sources: bool = True
    include_hidden: bool = False
    include_binaries: bool = False
    follow_symlinks: bool = False
    headers_first: bool = False
    emit_tree: bool = True
    emit_cmake: bool = True
    emit_build_files: bool = False
    emit_links: bool = True
    emit_frontmatter: bool = False
    max_file_size: int = 1048576
    force_large_files: bool = False
    redact_pii: bool = False
    analyze_only: bool = False
    analysis_enabled: bool = False
    analysis_collapse: str = "none"
    analysis_deep: bool = False
    analysis_views: list[str] = field(default_factory=list)
    extract_tags: bool = False
    tag_patterns_path: Path | None = None
    isolate_docs: bool = False
    dry_run: bool = False
    parallel_traversal: bool = True
    extensions: list[str] = field(default_factory=list)
    exclude_extensions: list[str] = field(default_factory=list)
    group_by: GroupingMode = GroupingMode.DIRECTORY
    group_depth: int = 1
    component_map_path: Path | None = None
    format: OutputFormat = OutputFormat.MARKDOWN
    markers: MarkerMode = MarkerMode.FENCED
    scan_languages: bool = False
    language: str = "auto"
    build_system: str = "auto"


@dataclass
class FileEntry:
    """A file discovered in the input repository."""

    absolute_path: Path = Path()
    relative_path: Path = Path()
    extension_lower: str = ""
    size_bytes: int = 0
    file_class: FileClass = FileClass.OTHER
    is_binary: bool = False
    token_count: int = 0


@dataclass
class OutputChunk:
    """A titled group of files destined for one output file (or its parts)."""

    category: str = ""
    title: str = ""
    file_indices: list[int] = field(default_factory=list)


_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ASCII_ALNUM = frozenset((string.ascii_letters + string.digits).encode("ascii"))

_HEADER_EXTENSIONS = frozenset({".h", ".hpp", ".hh", ".hxx"})
_SOURCE_EXTENSIONS = frozenset({".c", ".cc", ".cpp", ".cxx"})


def to_lower(value: str) -> str:
    """Lower-case ASCII letters only, leaving every other character untouched."""
    return value.translate(_ASCII_LOWER)


def sanitize_name(value: str) -> str:
    """Turn arbitrary text into a lower-case identifier made of [a-z0-9_]."""
    result = "".join(
        chr(byte).lower() if byte in _ASCII_ALNUM else "_"
        for byte in value.encode("utf-8")
    ).strip("_")
    return result or "group"


def file_class_label(value: FileClass) -> str:
    """Return the textual label of a file class."""
    return value.value


def classify_extension(extension_lower: str) -> FileClass:
    """Classify a lower-cased extension (with leading dot) as header, source or other."""
    if extension_lower in _HEADER_EXTENSIONS:
        return FileClass.HEADER
    if extension_lower in _SOURCE_EXTENSIONS:
        return FileClass.SOURCE
    return FileClass.OTHER