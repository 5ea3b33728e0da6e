"""Language and build-system breakdown of a set of files."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from repaddu.core import CliOptions, FileEntry, to_lower

__all__ = [
    "LanguageSummary",
    "language_for_extension",
    "build_file_label",
    "summarize_languages",
    "render_language_report",
]

_LANGUAGES = {
    ".c": "C",
    ".h": "C",
    ".cc": "C++",
    ".cpp": "C++",
    ".cxx": "C++",
    ".hpp": "C++",
    ".hh": "C++",
    ".hxx": "C++",
    ".rs": "Rust",
    ".py": "Python",
    ".pyi": "Python",
}

_BUILD_FILES = {
    "cmakelists.txt": "CMakeLists.txt",
    "meson.build": "meson.build",
    "makefile": "Makefile",
    "build": "Bazel BUILD",
    "build.bazel": "Bazel BUILD",
    "cargo.toml": "Cargo.toml",
    "cargo.lock": "Cargo.lock",
    "rust-toolchain": "rust-toolchain",
    "rust-toolchain.toml": "rust-toolchain",
    "pyproject.toml": "pyproject.toml",
    "setup.py": "setup.py",
    "setup.cfg": "setup.cfg",
    "requirements.txt": "requirements.txt",
}


def language_for_extension(extension_lower: str) -> str:
    """Map a lower-cased extension to a language name, or "Other"."""
    return _LANGUAGES.get(extension_lower, "Other")


def build_file_label(filename: str) -> str | None:
    """Return the build-system label for a file name, or None if it is not one."""
    return _BUILD_FILES.get(to_lower(filename))


@dataclass
class LanguageSummary:
    """Counts of files per language and of build-system files, sorted by name."""

    language_counts: dict[str, int] = field(default_factory=dict)
    build_files: dict[str, int] = field(default_factory=dict)
    total_files: int = 0

    def percent(self, language: str) -> float:
        """Share of all counted files that belong to the language, in percent."""
        if self.total_files == 0:
            return 0.0
        return self.language_counts.get(language, 0) * 100.0 / self.total_files


def summarize_languages(options: CliOptions, files: Iterable[FileEntry]) -> LanguageSummary:
    """Count languages and build-system files, skipping binaries unless included."""
    languages: Counter[str] = Counter()
    build_files: Counter[str] = Counter()
    for entry in files:
        if entry.is_binary and not options.include_binaries:
            continue
        languages[language_for_extension(entry.extension_lower)] += 1
        label = build_file_label(entry.relative_path.name)
        if label is not None:
            build_files[label] += 1
    return LanguageSummary(
        language_counts=dict(sorted(languages.items())),
        build_files=dict(sorted(build_files.items())),
        total_files=sum(languages.values()),
    )


def render_language_report(options: CliOptions, files: Iterable[FileEntry]) -> str:
    """Render the plain-text language scan report."""
    summary = summarize_languages(options, files)
    lines = [
        "Language scan report\n",
        "====================\n\n",
        f"Total files counted: {summary.total_files}\n\n",
    ]

    if summary.total_files == 0:
        lines.append("No files matched the scan criteria.\n")
        return "".join(lines)

    lines.append("By language (file count)\n")
    lines.append("------------------------\n")
    for language, count in summary.language_counts.items():
        lines.append(f"{language}: {count} ({summary.percent(language):.1f}%)\n")

    lines.append("\nBuild-system files detected\n")
    lines.append("----------------------------\n")
    if summary.build_files:
        lines.extend(f"{label}: {count}\n" for label, count in summary.build_files.items())
    else:
        lines.append("None\n")

    lines.append("\nNotes:\n")
    lines.append("- Hidden files are excluded unless --include-hidden is used.\n")
    lines.append("- Binary files are excluded unless --include-binaries is used.\n")
    return "".join(lines)