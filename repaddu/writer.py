"""Write the numbered markdown outputs for a set of grouped files."""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from repaddu.blocks import (
    boilerplate_line,
    marker_block,
    overview_template,
    pad_number,
    tree_output,
)
from repaddu.core import (
    CliOptions,
    FileEntry,
    InvalidUsage,
    IoFailure,
    OutputChunk,
    OutputConstraints,
    OutputFormat,
    classify_extension,
    to_lower,
)

__all__ = [
    "ContentCache",
    "ChunkPart",
    "estimate_tokens",
    "read_file_content",
    "write_outputs",
]

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_DEFAULT_CACHE_BYTES = 4 * 1024 * 1024

TokenEstimator = Callable[[str], int]


def _byte_length(text: str) -> int:
    return len(text.encode(_ENCODING, _ERRORS))


def estimate_tokens(content: str) -> int:
    """Roughly estimate the token count of text at about four bytes per token."""
    return (_byte_length(content) + 3) // 4


def read_file_content(path: str | os.PathLike[str]) -> str:
    """Read a file as text, keeping undecodable bytes so they round-trip on write.

    Raises IoFailure if the file cannot be read.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as error:
        raise IoFailure("Failed to open file for reading.") from error
    return data.decode(_ENCODING, _ERRORS)


class ContentCache:
    """Bounded cache of file contents keyed by path."""

    def __init__(self, max_bytes: int = _DEFAULT_CACHE_BYTES) -> None:
        self.max_bytes = max_bytes
        self.total_bytes = 0
        self._entries: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: str | os.PathLike[str]) -> str | None:
        """Return cached content for the path, or None."""
        return self._entries.get(str(path))

    def store(self, path: str | os.PathLike[str], content: str) -> bool:
        """Cache content unless it would overflow the budget or is already cached.

        Returns True if the content was stored.
        """
        size = _byte_length(content)
        key = str(path)
        if size > self.max_bytes or self.total_bytes + size > self.max_bytes:
            return False
        if key in self._entries:
            return False
        self._entries[key] = content
        self.total_bytes += size
        return True


@dataclass
class ChunkPart:
    """One output file planned for (part of) a chunk."""

    filename: str
    category: str
    title: str
    file_indices: list[int] = field(default_factory=list)
    content_bytes: int = 0


def _read_cached(path: Path, cache: ContentCache) -> str:
    content = cache.get(path)
    if content is None:
        content = read_file_content(path)
        cache.store(path, content)
    return content


def _aggregated_output(
    overview_name: str,
    title: str,
    empty_message: str,
    paths: Sequence[str | os.PathLike[str]],
    options: CliOptions,
    cache: ContentCache,
    token_estimator: TokenEstimator,
) -> str:
    parts = [boilerplate_line(overview_name), title, "\n\n"]
    if not paths:
        parts.append(f"{empty_message}\n")
        return "".join(parts)

    for relative in paths:
        relative_path = Path(relative)
        content = _read_cached(options.input_path / relative_path, cache)
        entry = FileEntry(
            relative_path=relative_path,
            size_bytes=_byte_length(content),
            file_class=classify_extension(to_lower(relative_path.suffix)),
            token_count=token_estimator(content),
        )
        parts.append(marker_block(entry, content, options.markers, options.emit_frontmatter))
        parts.append("\n")
    return "".join(parts)


def _chunk_header(overview_name: str, title: str) -> str:
    return f"{boilerplate_line(overview_name)}# {title}\n\n"


def _plan_chunks(
    options: CliOptions,
    overview_name: str,
    chunks: Sequence[OutputChunk],
    files: Sequence[FileEntry],
    first_index: int,
    token_counts: list[int],
    cache: ContentCache,
    token_estimator: TokenEstimator,
) -> list[ChunkPart]:
    parts: list[ChunkPart] = []
    index = first_index
    limit = options.max_bytes

    def close_part(chunk: OutputChunk, part: int, indices: list[int], size: int) -> None:
        nonlocal index
        suffix = f"_part{part}" if part > 1 else ""
        filename = f"{pad_number(index, options.number_width)}_{chunk.category}{suffix}.md"
        parts.append(ChunkPart(filename, chunk.category, chunk.title, indices, size))
        index += 1

    for chunk in chunks:
        header_bytes = _byte_length(_chunk_header(overview_name, chunk.title))
        current_bytes = header_bytes
        part = 1
        current: list[int] = []

        for file_index in chunk.file_indices:
            content = _read_cached(files[file_index].absolute_path, cache)
            token_counts[file_index] = token_estimator(content)
            entry = dataclasses.replace(files[file_index], token_count=token_counts[file_index])
            block_bytes = _byte_length(
                marker_block(entry, content, options.markers, options.emit_frontmatter)
            ) + 1

            if limit > 0 and current_bytes + block_bytes > limit:
                close_part(chunk, part, current, current_bytes)
                part += 1
                current = []
                current_bytes = header_bytes

            current.append(file_index)
            current_bytes += block_bytes

            if limit > 0 and block_bytes > limit:
                raise OutputConstraints("A single file block exceeds --max-bytes.")

        close_part(chunk, part, current, current_bytes)

    return parts


def _write_text(path: Path, text: str) -> None:
    try:
        with path.open("w", encoding=_ENCODING, errors=_ERRORS, newline="") as stream:
            stream.write(text)
    except OSError as error:
        raise IoFailure("Failed to write output file.") from error


def write_outputs(
    options: CliOptions,
    files: Sequence[FileEntry],
    chunks: Sequence[OutputChunk],
    tree_listing: str = "",
    cmake_lists: Sequence[str | os.PathLike[str]] = (),
    build_files: Sequence[str | os.PathLike[str]] = (),
    token_estimator: TokenEstimator | None = None,
) -> list[str]:
    """Plan and write the markdown outputs; return the output file names in order.

    The overview comes first, then the optional tree, CMake and build-context
    pages, then one or more files per chunk, split when --max-bytes is set.
    In a dry run nothing is written and the plan is only logged.
    Raises IoFailure, OutputConstraints or InvalidUsage.
    """
    estimator = token_estimator or estimate_tokens
    try:
        options.output_path.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise IoFailure("Failed to create output directory.") from error

    if options.format is not OutputFormat.MARKDOWN:
        raise InvalidUsage(f"Output format '{options.format.value}' is not supported by this writer.")
    if options.redact_pii:
        raise InvalidUsage("PII redaction is not available in this writer.")

    width = options.number_width
    overview_name = f"{pad_number(0, width)}_overview.md"
    cache = ContentCache()
    token_counts = [0] * len(files)

    prelude: list[tuple[str, str]] = []
    if options.emit_tree:
        prelude.append(("tree", tree_output(overview_name, tree_listing)))
    if options.emit_cmake:
        prelude.append((
            "cmake",
            _aggregated_output(
                overview_name,
                "# Aggregated CMakeLists.txt files",
                "No CMakeLists.txt files were found.",
                cmake_lists,
                options,
                cache,
                estimator,
            ),
        ))
    if options.emit_build_files:
        prelude.append((
            "build_context",
            _aggregated_output(
                overview_name,
                "# Aggregated build-system files",
                "No build-system files were found.",
                build_files,
                options,
                cache,
                estimator,
            ),
        ))
    prelude_outputs = [
        (f"{pad_number(position, width)}_{suffix}.md", text)
        for position, (suffix, text) in enumerate(prelude, start=1)
    ]

    parts = _plan_chunks(
        options, overview_name, chunks, files, len(prelude_outputs) + 1,
        token_counts, cache, estimator,
    )

    planned = [(name, _byte_length(text)) for name, text in prelude_outputs]
    planned.extend((part.filename, part.content_bytes) for part in parts)

    if options.max_files > 0 and len(planned) + 1 > options.max_files:
        raise OutputConstraints("Output file count exceeds --max-files.")
    if options.max_bytes > 0 and any(size > options.max_bytes for _, size in planned):
        raise OutputConstraints("Output file exceeds --max-bytes.")

    names = [name for name, _ in planned]
    overview = overview_template(
        overview_name, options.markers, options.emit_build_files, options.emit_links, names
    )
    overview_bytes = _byte_length(overview)
    if options.max_bytes > 0 and overview_bytes > options.max_bytes:
        raise OutputConstraints("Output file exceeds --max-bytes.")

    if options.dry_run:
        logger.info("[Dry Run] Would write: %s (%d bytes)", overview_name, overview_bytes)
        for name, size in planned:
            logger.info("[Dry Run] Would write: %s (%d bytes)", name, size)
        logger.info("[Dry Run] Simulation complete. No files were written.")
        return [overview_name, *names]

    _write_text(options.output_path / overview_name, overview)
    for name, text in prelude_outputs:
        _write_text(options.output_path / name, text)

    for part in parts:
        pieces = [_chunk_header(overview_name, part.title)]
        for file_index in part.file_indices:
            content = _read_cached(files[file_index].absolute_path, cache)
            entry = dataclasses.replace(files[file_index], token_count=token_counts[file_index])
            pieces.append(marker_block(entry, content, options.markers, options.emit_frontmatter))
            pieces.append("\n")
        _write_text(options.output_path / part.filename, "".join(pieces))

    return [overview_name, *names]