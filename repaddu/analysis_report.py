"""Plain-text analysis report for analyze-only runs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from repaddu.core import CliOptions, FileEntry
from repaddu.language_report import render_language_report

__all__ = [
    "InclusionStats",
    "ViewNode",
    "ViewEdge",
    "ViewResult",
    "inclusion_stats",
    "render_analysis_report",
    "render_analysis_report_with_views",
]


@dataclass
class InclusionStats:
    """Totals over all scanned files and over the files kept after filtering."""

    total_files: int = 0
    total_size: int = 0
    included_count: int = 0
    included_size: int = 0
    included_tokens: int = 0
    included_files: list[FileEntry] = field(default_factory=list)


@dataclass
class ViewNode:
    """A node in a rendered analysis view."""

    id: str
    label: str = ""
    group: str = ""


@dataclass
class ViewEdge:
    """A directed edge in a rendered analysis view."""

    source: str
    target: str
    label: str = ""


@dataclass
class ViewResult:
    """A rendered analysis view: its name, metadata, nodes and edges."""

    name: str
    metadata: dict[str, str] = field(default_factory=dict)
    nodes: list[ViewNode] = field(default_factory=list)
    edges: list[ViewEdge] = field(default_factory=list)


def _estimated_tokens(entry: FileEntry) -> int:
    if entry.token_count == 0 and entry.size_bytes > 0 and not entry.is_binary:
        # Content is not read in analyze mode; roughly four bytes per token.
        return entry.size_bytes // 4
    return entry.token_count


def inclusion_stats(all_files: Sequence[FileEntry], included_indices: Iterable[int]) -> InclusionStats:
    """Compute totals for all files and for the included subset."""
    included = [all_files[index] for index in included_indices]
    return InclusionStats(
        total_files=len(all_files),
        total_size=sum(entry.size_bytes for entry in all_files),
        included_count=len(included),
        included_size=sum(entry.size_bytes for entry in included),
        included_tokens=sum(_estimated_tokens(entry) for entry in included),
        included_files=included,
    )


def render_analysis_report(
    options: CliOptions,
    all_files: Sequence[FileEntry],
    included_indices: Iterable[int],
) -> str:
    """Render the overall scan, inclusion and language breakdown report."""
    stats = inclusion_stats(all_files, included_indices)
    return "".join(
        [
            "==========================================\n",
            "        REPADDU ANALYSIS REPORT           \n",
            "==========================================\n\n",
            f"Repository: {options.input_path}\n\n",
            "OVERALL SCAN:\n",
            f"  Total files found:    {stats.total_files}\n",
            f"  Total size:           {stats.total_size} bytes\n\n",
            "INCLUSION (After filtering):\n",
            f"  Files included:       {stats.included_count}\n",
            f"  Included size:        {stats.included_size} bytes\n",
            f"  Estimated tokens:     ~{stats.included_tokens}\n\n",
            "LANGUAGE BREAKDOWN (Included files):\n",
            render_language_report(options, stats.included_files),
            "\n==========================================\n",
        ]
    )


def _render_view(view: ViewResult) -> list[str]:
    lines = [f"\nVIEW: {view.name}\n"]
    if "error" in view.metadata:
        lines.append(f"error: {view.metadata['error']}\n")
        return lines

    if view.nodes:
        lines.append("nodes:\n")
        for node in view.nodes:
            text = f"node: {node.id}"
            if node.group:
                text += f" group={node.group}"
            if node.label:
                text += f" label={node.label}"
            lines.append(text + "\n")
    else:
        lines.append("nodes: none\n")

    if view.edges:
        lines.append("edges:\n")
        for edge in view.edges:
            text = f"edge: {edge.source} -> {edge.target}"
            if edge.label:
                text += f" label={edge.label}"
            lines.append(text + "\n")
    else:
        lines.append("edges: none\n")
    return lines


def render_analysis_report_with_views(
    options: CliOptions,
    all_files: Sequence[FileEntry],
    included_indices: Iterable[int],
    views: Iterable[ViewResult],
) -> str:
    """Render the analysis report followed by the given views when analysis is enabled."""
    report = render_analysis_report(options, all_files, included_indices)
    if not options.analysis_enabled:
        return report

    parts = [report, "\nANALYSIS VIEWS\n", "====================\n"]
    for view in views:
        parts.extend(_render_view(view))
    return "".join(parts)