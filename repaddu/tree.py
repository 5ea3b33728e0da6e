"""Render a sorted ASCII tree listing of directories and files."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import PurePath

__all__ = ["render_tree"]


class _Node:
    __slots__ = ("is_file", "children")

    def __init__(self) -> None:
        self.is_file = False
        self.children: dict[str, _Node] = {}

    def insert(self, path: str | os.PathLike[str], is_file: bool) -> None:
        current = self
        for part in PurePath(path).parts:
            current = current.children.setdefault(part, _Node())
        current.is_file = is_file

    def render(self, prefix: str, lines: list[str]) -> None:
        names = sorted(self.children)
        for position, name in enumerate(names):
            child = self.children[name]
            is_last = position == len(names) - 1
            connector = "`-- " if is_last else "|-- "
            suffix = "" if child.is_file else "/"
            lines.append(f"{prefix}{connector}{name}{suffix}\n")
            child.render(prefix + ("    " if is_last else "|   "), lines)


def render_tree(
    directories: Iterable[str | os.PathLike[str]],
    files: Iterable[str | os.PathLike[str]],
) -> str:
    """Return a tree listing rooted at "." for the given relative paths."""
    root = _Node()
    for directory in directories:
        root.insert(directory, False)
    for file in files:
        root.insert(file, True)

    lines = [".\n"]
    root.render("", lines)
    return "".join(lines)