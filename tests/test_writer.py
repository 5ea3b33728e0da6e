from pathlib import Path

import pytest

from repaddu.core import (
    CliOptions,
    FileClass,
    FileEntry,
    InvalidUsage,
    IoFailure,
    MarkerMode,
    OutputChunk,
    OutputConstraints,
    OutputFormat,
)
from repaddu.writer import (
    ChunkPart,
    ContentCache,
    estimate_tokens,
    read_file_content,
    write_outputs,
)


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "repo"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.cpp").write_text("int main() { return 0; }\n", encoding="utf-8")
    return root


def make_entry(root, relative):
    absolute = root / relative
    return FileEntry(
        absolute_path=absolute,
        relative_path=Path(relative),
        extension_lower=absolute.suffix.lower(),
        file_class=FileClass.SOURCE,
        size_bytes=absolute.stat().st_size,
    )


def make_options(repo, out, **overrides):
    options = CliOptions(input_path=repo, output_path=out, emit_tree=False, emit_cmake=False)
    for key, value in overrides.items():
        setattr(options, key, value)
    return options


def source_chunk(indices):
    return OutputChunk(category="source", title="source", file_indices=list(indices))


def test_frontmatter_enabled(repo, tmp_path):
    out = tmp_path / "out"
    options = make_options(repo, out, emit_frontmatter=True)
    write_outputs(options, [make_entry(repo, "src/main.cpp")], [source_chunk([0])])
    content = (out / "001_source.md").read_text(encoding="utf-8")
    assert "---\npath: src/main.cpp\n" in content


def test_frontmatter_disabled(repo, tmp_path):
    out = tmp_path / "out"
    options = make_options(repo, out, emit_frontmatter=False)
    write_outputs(options, [make_entry(repo, "src/main.cpp")], [source_chunk([0])])
    content = (out / "001_source.md").read_text(encoding="utf-8")
    assert "---\npath: src/main.cpp\n" not in content
    assert "path: src/main.cpp\n" in content


def test_overview_links_disabled(repo, tmp_path):
    out = tmp_path / "out"
    options = make_options(repo, out, emit_links=False)
    write_outputs(options, [make_entry(repo, "src/main.cpp")], [source_chunk([0])])
    overview = (out / "000_overview.md").read_text(encoding="utf-8")
    assert "[001_source.md](001_source.md)" not in overview
    assert "- 001_source.md" in overview


def test_overview_links_enabled(repo, tmp_path):
    out = tmp_path / "out"
    write_outputs(make_options(repo, out), [make_entry(repo, "src/main.cpp")], [source_chunk([0])])
    overview = (out / "000_overview.md").read_text(encoding="utf-8")
    assert "- [001_source.md](001_source.md)" in overview


def test_dry_run_writes_nothing(repo, tmp_path):
    out = tmp_path / "out"
    options = make_options(repo, out, dry_run=True)
    names = write_outputs(options, [make_entry(repo, "src/main.cpp")], [source_chunk([0])])
    assert names == ["000_overview.md", "001_source.md"]
    assert list(out.iterdir()) == []


def test_chunk_file_contents(repo, tmp_path):
    out = tmp_path / "out"
    write_outputs(
        make_options(repo, out),
        [make_entry(repo, "src/main.cpp")],
        [source_chunk([0])],
        token_estimator=lambda text: 7,
    )
    content = (out / "001_source.md").read_text(encoding="utf-8")
    assert content.startswith('Read "000_overview.md" first for format and conventions.\n\n# source\n\n')
    assert "```repaddu-file\npath: src/main.cpp\n" in content
    assert "tokens: 7\n" in content
    assert "class: source\n" in content
    assert "int main() { return 0; }\n```\n" in content


def test_sentinel_markers(repo, tmp_path):
    out = tmp_path / "out"
    options = make_options(repo, out, markers=MarkerMode.SENTINEL)
    write_outputs(options, [make_entry(repo, "src/main.cpp")], [source_chunk([0])])
    content = (out / "001_source.md").read_text(encoding="utf-8")
    assert '@@@ REPADDU FILE BEGIN path="src/main.cpp"' in content
    assert "@@@ REPADDU FILE END @@@\n" in content


def test_tree_and_cmake_outputs(repo, tmp_path):
    (repo / "CMakeLists.txt").write_text("project(x)\n", encoding="utf-8")
    out = tmp_path / "out"
    options = make_options(repo, out, emit_tree=True, emit_cmake=True)
    names = write_outputs(
        options,
        [make_entry(repo, "src/main.cpp")],
        [source_chunk([0])],
        tree_listing=".\n`-- src/\n",
        cmake_lists=[Path("CMakeLists.txt")],
    )
    assert names == ["000_overview.md", "001_tree.md", "002_cmake.md", "003_source.md"]
    tree = (out / "001_tree.md").read_text(encoding="utf-8")
    assert "# Repository tree listing\n\n```text\n.\n`-- src/\n```\n" in tree
    cmake = (out / "002_cmake.md").read_text(encoding="utf-8")
    assert "# Aggregated CMakeLists.txt files\n\n" in cmake
    assert "path: CMakeLists.txt\n" in cmake
    assert "bytes: 11\n" in cmake
    assert "project(x)\n" in cmake


def test_empty_cmake_and_build_files(repo, tmp_path):
    out = tmp_path / "out"
    options = make_options(repo, out, emit_cmake=True, emit_build_files=True)
    write_outputs(options, [], [])
    assert "No CMakeLists.txt files were found.\n" in (out / "001_cmake.md").read_text(encoding="utf-8")
    build = (out / "002_build_context.md").read_text(encoding="utf-8")
    assert "No build-system files were found.\n" in build
    overview = (out / "000_overview.md").read_text(encoding="utf-8")
    assert "4) Optional aggregated build-context files if enabled.\n" in overview


def test_max_bytes_splits_chunk_into_parts(tmp_path):
    root = tmp_path / "repo"
    root.mkdir()
    (root / "a.cpp").write_text("a" * 1500 + "\n", encoding="utf-8")
    (root / "b.cpp").write_text("b" * 1500 + "\n", encoding="utf-8")
    out = tmp_path / "out"
    options = make_options(root, out, max_bytes=2500)
    names = write_outputs(
        options, [make_entry(root, "a.cpp"), make_entry(root, "b.cpp")], [source_chunk([0, 1])]
    )
    assert names == ["000_overview.md", "001_source.md", "002_source_part2.md"]
    first = (out / "001_source.md").read_text(encoding="utf-8")
    second = (out / "002_source_part2.md").read_text(encoding="utf-8")
    assert "path: a.cpp" in first and "path: b.cpp" not in first
    assert "path: b.cpp" in second
    for name in names:
        assert (out / name).stat().st_size <= 2500


def test_single_block_exceeding_max_bytes(tmp_path):
    root = tmp_path / "repo"
    root.mkdir()
    (root / "big.cpp").write_text("x" * 3000, encoding="utf-8")
    options = make_options(root, tmp_path / "out", max_bytes=2500)
    with pytest.raises(OutputConstraints, match="single file block"):
        write_outputs(options, [make_entry(root, "big.cpp")], [source_chunk([0])])


def test_max_files_exceeded(repo, tmp_path):
    options = make_options(repo, tmp_path / "out", max_files=1)
    with pytest.raises(OutputConstraints, match="--max-files"):
        write_outputs(options, [make_entry(repo, "src/main.cpp")], [source_chunk([0])])


def test_missing_input_file(repo, tmp_path):
    entry = make_entry(repo, "src/main.cpp")
    entry.absolute_path = repo / "src" / "gone.cpp"
    with pytest.raises(IoFailure):
        write_outputs(make_options(repo, tmp_path / "out"), [entry], [source_chunk([0])])


def test_unsupported_format(repo, tmp_path):
    options = make_options(repo, tmp_path / "out", format=OutputFormat.JSONL)
    with pytest.raises(InvalidUsage):
        write_outputs(options, [make_entry(repo, "src/main.cpp")], [source_chunk([0])])


def test_content_cache_store_and_get():
    cache = ContentCache()
    assert cache.get("a") is None
    assert cache.store("a", "hello") is True
    assert cache.get("a") == "hello"
    assert cache.store("a", "other") is False
    assert cache.get("a") == "hello"
    assert cache.total_bytes == 5


def test_content_cache_budget():
    cache = ContentCache(max_bytes=8)
    assert cache.store("a", "x" * 9) is False
    assert cache.store("b", "x" * 6) is True
    assert cache.store("c", "x" * 3) is False
    assert len(cache) == 1


def test_read_file_content_round_trip(tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"caf\xc3\xa9\n\xff")
    content = read_file_content(path)
    assert content.startswith("café\n")
    assert content.encode("utf-8", "surrogateescape") == b"caf\xc3\xa9\n\xff"


def test_read_file_content_missing(tmp_path):
    with pytest.raises(IoFailure, match="Failed to open file"):
        read_file_content(tmp_path / "missing.txt")


def test_estimate_tokens_invariants():
    assert estimate_tokens("") == 0
    short = estimate_tokens("int x;")
    long = estimate_tokens("int x;" * 100)
    assert 0 < short <= long


def test_chunk_part_defaults():
    part = ChunkPart("001_a.md", "a", "A")
    assert part.file_indices == []
    assert part.content_bytes == 0