"""Generate a default configuration file in JSON or YAML."""

from __future__ import annotations

import os
from pathlib import Path

from repaddu.core import IoFailure, to_lower

__all__ = ["default_config_text", "generate_default_config"]

# Keys and their default values, as (yaml text, json text).
_DEFAULTS: list[tuple[str, str, str]] = [
    ("input", ".", '"."'),
    ("output", "repaddu_out", '"repaddu_out"'),
    ("max_files", "0", "0"),
    ("max_bytes", "0", "0"),
    ("number_width", "3", "3"),
    ("include_headers", "false", "false"),
    ("include_sources", "true", "true"),
    ("include_hidden", "false", "false"),
    ("include_binaries", "false", "false"),
    ("follow_symlinks", "false", "false"),
    ("headers_first", "false", "false"),
    ("emit_tree", "true", "true"),
    ("emit_cmake", "true", "true"),
    ("emit_build_files", "false", "false"),
    ("emit_links", "true", "true"),
    ("frontmatter", "false", "false"),
    ("max_file_size", "1048576", "1048576"),
    ("force_large", "false", "false"),
    ("redact_pii", "false", "false"),
    ("analyze_only", "false", "false"),
    ("analysis_enabled", "false", "false"),
    ("analysis_views", "[]", "[]"),
    ("analysis_deep", "false", "false"),
    ("analysis_collapse", "none", '"none"'),
    ("extract_tags", "false", "false"),
    ("tag_patterns", '""', '""'),
    ("isolate_docs", "false", "false"),
    ("dry_run", "false", "false"),
    ("parallel_traversal", "true", "true"),
    ("format", "markdown", '"markdown"'),
    ("group_by", "directory", '"directory"'),
    ("markers", "fenced", '"fenced"'),
    ("extensions", "[]", "[]"),
    ("exclude_extensions", "[]", "[]"),
]


def _is_yaml_path(path: Path) -> bool:
    return to_lower(path.suffix) in (".yaml", ".yml")


def default_config_text(path: str | os.PathLike[str]) -> str:
    """Return the default config text, YAML for .yaml/.yml paths and JSON otherwise."""
    if _is_yaml_path(Path(path)):
        return "".join(f"{key}: {yaml_value}\n" for key, yaml_value, _ in _DEFAULTS)

    entries = [f'    "{key}": {json_value}' for key, _, json_value in _DEFAULTS]
    return "{\n" + ",\n".join(entries) + "\n}\n"


def generate_default_config(path: str | os.PathLike[str]) -> str:
    """Write the default config to a new file and return a status message.

    Raises IoFailure if the file exists already or cannot be created.
    """
    target = Path(path)
    if target.exists():
        raise IoFailure(f"Config file already exists: {target}")
    try:
        with target.open("x", encoding="utf-8", newline="") as stream:
            stream.write(default_config_text(target))
    except FileExistsError as error:
        raise IoFailure(f"Config file already exists: {target}") from error
    except OSError as error:
        raise IoFailure(f"Failed to create config file: {target}") from error
    return f"Generated default config: {target}"