"""Help and version text for the command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["help_text", "version_text"]

_FLAG_COLUMN = 27


@dataclass(frozen=True)
class _Option:
    name: str
    summary: str
    metavar: Optional[str] = None
    short: Optional[str] = None
    default: Optional[str] = None

    @property
    def flag(self) -> str:
        text = f"--{self.name}"
        if self.metavar:
            text += f" <{self.metavar}>"
        if self.short:
            text = f"-{self.short}, {text}"
        return text

    @property
    def description(self) -> str:
        if self.default is None:
            return self.summary
        return f"{self.summary} Default: {self.default}."


_OPTIONS = (
    _Option("input", "Input repository/folder path.", metavar="path", short="i"),
    _Option("output", "Output directory.", metavar="path", short="o"),
    _Option("max-files", "Maximum number of output files.", metavar="count", default="0"),
    _Option("max-bytes", "Maximum bytes per output file.", metavar="bytes", default="0"),
    _Option("number-width", "Width of numeric prefix.", metavar="n", default="3"),
    _Option("include-headers", "Include only headers (.h/.hpp/.hh/.hxx)."),
    _Option("include-sources", "Include sources (.c/.cc/.cpp/.cxx)."),
    _Option("extensions", "Override include list with explicit extensions.", metavar="csv"),
    _Option("exclude-extensions", "Exclude these extensions after includes.", metavar="csv"),
    _Option("include-hidden", "Include hidden files/directories."),
    _Option("follow-symlinks", "Follow directory symlinks."),
    _Option("single-thread", "Force single-threaded traversal."),
    _Option("parallel-traversal", "Enable parallel traversal (default)."),
    _Option("include-binaries", "Include binary files."),
    _Option("max-file-size", "Skip files larger than this (default 1MB).", metavar="bytes"),
    _Option("force-large", "Include large files despite size check."),
    _Option("redact-pii", "Redact emails, IPs, and secrets from output."),
    _Option("analyze-only", "Scan and report statistics without generating files."),
    _Option("analysis", "Enable symbol analysis (AST/LSP) when available."),
    _Option("analysis-views", "Comma-separated analysis views to emit.", metavar="csv"),
    _Option("analysis-deep", "Enable deeper relationship analysis (optional edges)."),
    _Option("analysis-collapse", "none|folder|target.", metavar="mode", default="none"),
    _Option("extract-tags", "Extract TODO/FIXME-like tags in analyze output."),
    _Option("tag-patterns", "Load additional tag patterns from file (one per line).", metavar="path"),
    _Option("isolate-docs", "Group all documentation files (*.md, *.txt) into a separate chunk."),
    _Option("dry-run", "Simulate execution without writing files."),
    _Option("init", "Generate a default config file (JSON or YAML by --config extension)."),
    _Option(
        "config",
        "Config path to load and/or generate. Default: .repaddu.json "
        "(auto-load also checks .repaddu.yaml/.repaddu.yml).",
        metavar="path",
    ),
    _Option("format", "markdown|jsonl|html.", metavar="fmt", default="markdown"),
    _Option("group-by", "directory|component|type|size.", metavar="mode", default="directory"),
    _Option("group-depth", "Depth for directory grouping.", metavar="n", default="1"),
    _Option("component-map", "JSON component mapping file for component grouping.", metavar="path"),
    _Option("headers-first", "Order headers before sources in groups."),
    _Option("emit-tree", "Emit recursive tree listing."),
    _Option("emit-cmake", "Emit aggregated CMakeLists.txt output."),
    _Option("emit-build-files", "Emit aggregated build-system files."),
    _Option("no-links", "Disable markdown links in overview table of contents."),
    _Option("markers", "fenced|sentinel.", metavar="mode", default="fenced"),
    _Option("frontmatter", "Add YAML frontmatter metadata before each file content block."),
    _Option("scan-languages", "Scan repository and report language percentages only."),
    _Option("language", "auto|c|cpp|rust|python.", metavar="id", default="auto"),
    _Option(
        "build-system",
        "auto|cmake|make|meson|bazel|cargo|npm|python.",
        metavar="id",
        default="auto",
    ),
    _Option("help", "Show help.", short="h"),
    _Option("version", "Show version."),
)


def help_text() -> str:
    """Return the command-line usage text."""
    lines = [
        "repaddu - convert a repository/folder into numbered Markdown outputs\n\n",
        "Usage:\n",
        "  repaddu [options] --input <path> --output <path>\n\n",
        "Options:\n",
    ]
    lines.extend(
        f"  {option.flag:<{_FLAG_COLUMN}} {option.description}\n" for option in _OPTIONS
    )
    return "".join(lines)


def version_text() -> str:
    """Return the version line."""
    return "repaddu 0.1.0\n"