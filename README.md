# repaddu

repaddu turns a list of repository files into a small set of numbered
Markdown files that are easy to read, share or feed to other tools. Every
output file points back to a generated overview (`000_overview.md`) that
explains the layout and the markers used around each embedded file. It
also renders tree listings, language breakdowns and analysis reports as
text or JSON.

The package has no third-party dependencies and is used as a library.

## What the writer produces

`repaddu.writer.write_outputs(options, files, chunks, tree_listing,
cmake_lists, build_files, token_estimator)` writes into
`options.output_path`:

1. `000_overview.md` – the format specification and a table of contents
   (plain names instead of links when `emit_links` is off).
2. `001_tree.md` – the tree listing you pass in (when `emit_tree` is on).
3. `..._cmake.md` – the given `CMakeLists.txt` paths, read relative to
   `options.input_path`, aggregated into one file (when `emit_cmake` is on).
4. `..._build_context.md` – the given build-system files aggregated
   (when `emit_build_files` is on).
5. One file per `OutputChunk`, named `<number>_<category>.md`, split into
   `_part2`, `_part3`, ... when `max_bytes` is set.

Each embedded file is wrapped either in a fenced block

    ```repaddu-file
    path: src/main.cpp
    bytes: 42
    tokens: 11
    class: source
    ```
    int main() { return 0; }
    ```

or, with `MarkerMode.SENTINEL`, in `@@@ REPADDU FILE BEGIN ... @@@` /
`@@@ REPADDU FILE END @@@` lines. With `emit_frontmatter` a YAML
frontmatter block (`---` / `path:` / `bytes:` / `tokens:` / `class:` /
`---`) precedes each file's content.

Token counts come from `repaddu.writer.estimate_tokens` (about four bytes
per token) unless you pass your own `token_estimator`. The function returns
the output file names in order. With `dry_run` set it writes nothing and
logs the planned files and their sizes through the `repaddu.writer` logger.

Errors are raised as exceptions derived from `repaddu.core.RepadduError`:
`OutputConstraints` when `max_files` or `max_bytes` cannot be met,
`IoFailure` when a file cannot be read or written, and `InvalidUsage` for
options the writer does not handle.

```python
from pathlib import Path
from repaddu.core import CliOptions, FileClass, FileEntry, OutputChunk
from repaddu.writer import write_outputs

options = CliOptions(input_path=Path("repo"), output_path=Path("out"),
                     emit_tree=False, emit_cmake=False)
files = [FileEntry(absolute_path=Path("repo/src/main.cpp"),
                   relative_path=Path("src/main.cpp"),
                   extension_lower=".cpp", file_class=FileClass.SOURCE)]
chunks = [OutputChunk(category="source", title="source", file_indices=[0])]
print(write_outputs(options, files, chunks))
# ['000_overview.md', '001_source.md']
```

The lower-level pieces live in `repaddu.blocks`: `marker_block`,
`overview_template`, `tree_output`, `boilerplate_line`, `pad_number` and
`escape_quotes`.

## Tree listings

```python
from pathlib import Path
from repaddu.tree import render_tree

print(render_tree([Path("src")], [Path("src/main.cpp")]))
# .
# `-- src/
#     `-- main.cpp
```

## Language and analysis reports

- `repaddu.language_report.render_language_report(options, files)` counts
  files per language (C, C++, Rust, Python, Other) and lists recognised
  build-system files (CMake, Meson, Make, Bazel, Cargo, rust-toolchain,
  pyproject.toml, setup.py, setup.cfg, requirements.txt). Binary files are
  skipped unless `include_binaries` is set. `summarize_languages` returns
  the same figures as a `LanguageSummary`.
- `repaddu.analysis_report.render_analysis_report(options, all_files,
  included_indices)` wraps that in a report with overall and included file
  counts, sizes and an estimated token count (`inclusion_stats` gives the
  numbers). `render_analysis_report_with_views(...)` appends
  `ViewResult` objects (nodes and edges) when `analysis_enabled` is set.
- `repaddu.analysis_json.render_analysis_json(options, all_files,
  included_indices, views)` gives the same report as JSON.

## Configuration files

```python
from repaddu.config_generator import generate_default_config

generate_default_config(".repaddu.yaml")
```

writes a config file with every option at its default value, as YAML for
`.yaml`/`.yml` paths and JSON otherwise; it raises `IoFailure` rather than
overwrite an existing file. `default_config_text(path)` returns the text
without writing it.

`repaddu.config.load_config_file(path, options)` applies such a file to a
`CliOptions` and returns it; unknown keys and mistyped values are ignored,
malformed JSON raises `InvalidUsage`. `repaddu.config.resolve_config_path(args)`
picks the config: the value after `--config` in an argument list whose first
item is the program name, otherwise `.repaddu.json`, `.repaddu.yaml` or
`.repaddu.yml` in the current directory. `parse_yaml_config(text)` reads
the flat `key: value` YAML subset used by these files.

## Help text

`repaddu.help.help_text()` returns an option reference and
`repaddu.help.version_text()` the version line, for use by a command-line
front end.

## What the package does not do

- It has no command of its own; everything is called from Python.
- It does not walk a directory, detect binary files or group files into
  chunks: you supply the `FileEntry` list, the `OutputChunk` groups, the
  tree paths and the build-file paths.
- The writer produces Markdown only. `OutputFormat.JSONL`,
  `OutputFormat.HTML` and `redact_pii` are accepted as options but make
  `write_outputs` raise `InvalidUsage`.
- It does not build symbol graphs or views; analysis reports show the
  `ViewResult` objects you pass in.

## Running the tests

Install the `test` extra and run `pytest` from the project root.