"""Machine-readable JSON analysis report."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from repaddu.analysis_report import ViewResult, inclusion_stats
from repaddu.core import CliOptions, FileEntry
from repaddu.language_report import summarize_languages

__all__ = ["escape_json", "render_analysis_json"]

_SIMPLE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_json(value: str) -> str:
    """Escape text for use inside a JSON string literal."""
    return "".join(
        _SIMPLE_ESCAPES.get(ch) or (f"\\u{ord(ch):04x}" if ord(ch) < 0x20 else ch)
        for ch in value
    )


def _join_items(items: list[str], indent: str) -> list[str]:
    """Lay out items one per line, separated by commas."""
    return [
        f"{indent}{item}{',' if position + 1 < len(items) else ''}\n"
        for position, item in enumerate(items)
    ]


def _render_view(view: ViewResult) -> str:
    metadata = ", ".join(
        f'"{escape_json(key)}": "{escape_json(value)}"'
        for key, value in sorted(view.metadata.items())
    )
    nodes = [
        f'{{"id": "{escape_json(node.id)}", '
        f'"label": "{escape_json(node.label)}", '
        f'"group": "{escape_json(node.group)}"}}'
        for node in view.nodes
    ]
    edges = [
        f'{{"from": "{escape_json(edge.source)}", '
        f'"to": "{escape_json(edge.target)}", '
        f'"label": "{escape_json(edge.label)}"}}'
        for edge in view.edges
    ]
    parts = [
        "    {\n",
        f'      "name": "{escape_json(view.name)}",\n',
        f'      "metadata": {{{metadata}}},\n',
        '      "nodes": [\n',
        *_join_items(nodes, "        "),
        "      ],\n",
        '      "edges": [\n',
        *_join_items(edges, "        "),
        "      ]\n",
        "    }",
    ]
    return "".join(parts)


def render_analysis_json(
    options: CliOptions,
    all_files: Sequence[FileEntry],
    included_indices: Iterable[int],
    views: Iterable[ViewResult] | None = None,
) -> str:
    """Render the analysis report as JSON.

    Views are emitted only when analysis is enabled and views are given.
    """
    stats = inclusion_stats(all_files, included_indices)
    summary = summarize_languages(options, stats.included_files)

    languages = [
        f'{{"name": "{escape_json(name)}", "count": {count}, '
        f'"percent": {summary.percent(name):.1f}}}'
        for name, count in summary.language_counts.items()
    ]
    build_files = [
        f'{{"name": "{escape_json(name)}", "count": {count}}}'
        for name, count in summary.build_files.items()
    ]

    parts = [
        "{\n",
        '  "type": "analysis_report",\n',
        f'  "repository": "{escape_json(str(options.input_path))}",\n',
        '  "overall": {\n',
        f'    "total_files": {stats.total_files},\n',
        f'    "total_size_bytes": {stats.total_size}\n',
        "  },\n",
        '  "included": {\n',
        f'    "file_count": {stats.included_count},\n',
        f'    "size_bytes": {stats.included_size},\n',
        f'    "estimated_tokens": {stats.included_tokens}\n',
        "  },\n",
        '  "languages": [\n',
        *_join_items(languages, "    "),
        "  ],\n",
        '  "build_files": [\n',
        *_join_items(build_files, "    "),
        "  ]\n",
        ",\n",
        '  "views": [\n',
    ]

    if options.analysis_enabled and views is not None:
        rendered = [_render_view(view) for view in views]
        parts.extend(_join_items(rendered, ""))

    parts.append("  ]\n")
    parts.append("}\n")
    return "".join(parts)