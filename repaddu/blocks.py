"""Building blocks of the markdown output: file markers, overview and tree pages."""

from __future__ import annotations

from collections.abc import Iterable

from repaddu.core import FileEntry, MarkerMode, file_class_label

__all__ = [
    "pad_number",
    "escape_quotes",
    "boilerplate_line",
    "marker_block",
    "overview_template",
    "tree_output",
]


def pad_number(value: int, width: int) -> str:
    """Left-pad the decimal form of ``value`` with zeros to ``width`` characters."""
    return str(value).rjust(width, "0")


def escape_quotes(value: str) -> str:
    """Put a backslash before every double quote."""
    return value.replace('"', '\\"')


def boilerplate_line(overview_name: str) -> str:
    """Return the note that opens every output file except the overview."""
    return f'Read "{overview_name}" first for format and conventions.\n\n'


def _metadata_lines(relative: str, entry: FileEntry) -> list[str]:
    return [
        f"path: {relative}\n",
        f"bytes: {entry.size_bytes}\n",
        f"tokens: {entry.token_count}\n",
        f"class: {file_class_label(entry.file_class)}\n",
    ]


def marker_block(entry: FileEntry, content: str, mode: MarkerMode, emit_frontmatter: bool) -> str:
    """Wrap one file's content in fenced or sentinel markers."""
    relative = entry.relative_path.as_posix()
    parts: list[str] = []

    if mode is MarkerMode.FENCED:
        parts.append("```repaddu-file\n")
        parts.extend(_metadata_lines(relative, entry))
        parts.append("```\n")
    else:
        parts.append(
            f'@@@ REPADDU FILE BEGIN path="{escape_quotes(relative)}"'
            f" bytes={entry.size_bytes}"
            f" tokens={entry.token_count}"
            f" class={file_class_label(entry.file_class)} @@@\n"
        )

    if emit_frontmatter:
        parts.append("---\n")
        parts.extend(_metadata_lines(relative, entry))
        parts.append("---\n")

    parts.append(content)
    if content and not content.endswith("\n"):
        parts.append("\n")

    parts.append("```\n" if mode is MarkerMode.FENCED else "@@@ REPADDU FILE END @@@\n")
    return "".join(parts)


def overview_template(
    overview_name: str,
    mode: MarkerMode,
    emit_build_files: bool,
    emit_links: bool,
    generated_files: Iterable[str],
) -> str:
    """Render the overview page that documents the layout of all other outputs."""
    lines = [
        "# repaddu output specification\n\n",
        "This file explains the layout and markers used in every other output file.\n",
        f'All other files start with a short note: "Read "{overview_name}"'
        ' first for format and conventions."\n\n',
        "## Table of Contents\n",
    ]
    for filename in generated_files:
        if filename == overview_name:
            continue
        lines.append(f"- [{filename}]({filename})\n" if emit_links else f"- {filename}\n")
    lines.append("\n")

    lines.append("## Boundary markers\n")
    if mode is MarkerMode.FENCED:
        lines.extend(
            [
                "Files are wrapped in fenced blocks using the following pattern:\n\n",
                "```text\n",
                "```repaddu-file\n",
                "path: relative/path.ext\n",
                "bytes: 123\n",
                "class: header|source|other\n",
                "```\n",
                "<file content>\n",
                "```\n",
                "```\n\n",
            ]
        )
    else:
        lines.extend(
            [
                "Files are wrapped in sentinel lines using the following pattern:\n\n",
                "```text\n",
                '@@@ REPADDU FILE BEGIN path="relative/path.ext" bytes=123 class=header @@@\n',
                "<file content>\n",
                "@@@ REPADDU FILE END @@@\n",
                "```\n\n",
            ]
        )

    lines.extend(
        [
            "## Output ordering\n",
            "1) This overview file.\n",
            "2) Optional tree listing file if enabled.\n",
            "3) Optional aggregated CMakeLists file if enabled.\n",
        ]
    )
    if emit_build_files:
        lines.append("4) Optional aggregated build-context files if enabled.\n")
        lines.append("5) One or more grouped content files based on the chosen grouping strategy.\n\n")
    else:
        lines.append("4) One or more grouped content files based on the chosen grouping strategy.\n\n")

    lines.append("## Example encoded file\n")
    lines.append("```text\n")
    if mode is MarkerMode.FENCED:
        lines.extend(
            [
                "```repaddu-file\n",
                "path: src/main.cpp\n",
                "bytes: 42\n",
                "class: source\n",
                "```\n",
                "int main() { return 0; }\n",
                "```\n",
            ]
        )
    else:
        lines.extend(
            [
                '@@@ REPADDU FILE BEGIN path="src/main.cpp" bytes=42 class=source @@@\n',
                "int main() { return 0; }\n",
                "@@@ REPADDU FILE END @@@\n",
            ]
        )
    lines.append("```\n")
    return "".join(lines)


def tree_output(overview_name: str, tree_listing: str) -> str:
    """Render the tree listing page."""
    return (
        boilerplate_line(overview_name)
        + "# Repository tree listing\n\n"
        + "```text\n"
        + tree_listing
        + "```\n"
    )