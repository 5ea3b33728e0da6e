from pathlib import Path

import pytest

from repaddu.config import load_config_file, parse_yaml_config, resolve_config_path
from repaddu.config_generator import generate_default_config
from repaddu.core import (
    CliOptions,
    GroupingMode,
    InvalidUsage,
    IoFailure,
    MarkerMode,
    OutputFormat,
)


def test_resolve_explicit_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_config_path(["repaddu", "--config", "custom.yml"]) == Path("custom.yml")


def test_resolve_ignores_flag_at_program_position_and_trailing_flag(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_config_path(["--config", "x.json"]) == Path(".repaddu.json")
    assert resolve_config_path(["repaddu", "--config"]) == Path(".repaddu.json")


@pytest.mark.parametrize(
    "existing, expected",
    [
        ([], ".repaddu.json"),
        ([".repaddu.yaml"], ".repaddu.yaml"),
        ([".repaddu.yml"], ".repaddu.yml"),
        ([".repaddu.yaml", ".repaddu.yml"], ".repaddu.yaml"),
        ([".repaddu.json", ".repaddu.yaml"], ".repaddu.json"),
    ],
)
def test_resolve_default_candidates(tmp_path, monkeypatch, existing, expected):
    monkeypatch.chdir(tmp_path)
    for name in existing:
        (tmp_path / name).write_text("", encoding="utf-8")
    assert resolve_config_path(["repaddu"]) == Path(expected)


def test_parse_yaml_comments_and_quotes():
    text = (
        "# full line comment\n"
        'title: "a # b"  # trailing\n'
        "single: 'it # x'\n"
        "plain: value # note\n"
        "no colon here\n"
        "\n"
        "empty:\n"
    )
    values = parse_yaml_config(text)
    assert values == {"title": "a # b", "single": "it # x", "plain": "value", "empty": ""}


def test_parse_yaml_escaped_quote_keeps_comment_marker_inside():
    values = parse_yaml_config('k: "say \\" # still"\n')
    assert values["k"] == 'say \\" # still'


def test_parse_yaml_arrays():
    values = parse_yaml_config("extensions: [cpp, 'h', \"rs\", , ]\nviews: []\r\n")
    assert values["extensions"] == ["cpp", "h", "rs"]
    assert values["views"] == []


def test_load_yaml_applies_values(tmp_path):
    config = tmp_path / "conf.YAML"
    config.write_text(
        "input: src_dir\n"
        "output: 'out dir'\n"
        "max_files: 7\n"
        "max_bytes: 2048\n"
        "include_headers: yes\n"
        "include_sources: 0\n"
        "frontmatter: TRUE\n"
        "force_large: true\n"
        "group_by: size\n"
        "format: jsonl\n"
        "markers: sentinel\n"
        "analysis_collapse: folder\n"
        "tag_patterns: tags.txt\n"
        "extensions: [cpp, hpp]\n",
        encoding="utf-8",
    )
    options = load_config_file(config, CliOptions())
    assert options.input_path == Path("src_dir")
    assert options.output_path == Path("out dir")
    assert options.max_files == 7
    assert options.max_bytes == 2048
    assert options.include_headers is True
    assert options.include_sources is False
    assert options.emit_frontmatter is True
    assert options.force_large_files is True
    assert options.group_by is GroupingMode.SIZE
    assert options.format is OutputFormat.JSONL
    assert options.markers is MarkerMode.SENTINEL
    assert options.analysis_collapse == "folder"
    assert options.tag_patterns_path == Path("tags.txt")
    assert options.extensions == ["cpp", "hpp"]


def test_load_yaml_ignores_invalid_values(tmp_path):
    config = tmp_path / "c.yml"
    config.write_text(
        "emit_tree: maybe\nnumber_width: abc\ngroup_by: nonsense\nmax_files: 12abc\n",
        encoding="utf-8",
    )
    options = load_config_file(config, CliOptions())
    defaults = CliOptions()
    assert options.emit_tree == defaults.emit_tree
    assert options.number_width == defaults.number_width
    assert options.group_by == defaults.group_by
    assert options.max_files == 12


def test_load_json_applies_values(tmp_path):
    config = tmp_path / "c.json"
    config.write_text(
        '{"input": "repo", "max_files": 4.9, "max_file_size": 100, '
        '"dry_run": true, "analysis_views": ["symbols", 3, "dependencies"], '
        '"format": "html", "markers": "fenced", "group_by": "component"}',
        encoding="utf-8",
    )
    options = load_config_file(config, CliOptions())
    assert options.input_path == Path("repo")
    assert options.max_files == 4
    assert options.max_file_size == 100
    assert options.dry_run is True
    assert options.analysis_views == ["symbols", "dependencies"]
    assert options.format is OutputFormat.HTML
    assert options.group_by is GroupingMode.COMPONENT


def test_load_json_ignores_mistyped_values(tmp_path):
    config = tmp_path / "c.json"
    config.write_text(
        '{"dry_run": "yes", "max_files": true, "input": 5, "extensions": "cpp"}',
        encoding="utf-8",
    )
    options = load_config_file(config, CliOptions())
    assert options == CliOptions()


def test_load_json_must_be_object(tmp_path):
    config = tmp_path / "c.json"
    config.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidUsage, match="must be a JSON object"):
        load_config_file(config, CliOptions())


def test_load_json_malformed(tmp_path):
    config = tmp_path / "c.json"
    config.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidUsage):
        load_config_file(config, CliOptions())


def test_load_missing_file(tmp_path):
    with pytest.raises(IoFailure, match="Failed to open config file"):
        load_config_file(tmp_path / "absent.json", CliOptions())


@pytest.mark.parametrize("name", ["gen.json", "gen.yaml", "gen.yml"])
def test_generated_default_config_round_trips_to_defaults(tmp_path, name):
    path = tmp_path / name
    generate_default_config(path)
    options = load_config_file(path, CliOptions(max_files=9, emit_tree=False))
    expected = CliOptions(input_path=Path("."), output_path=Path("repaddu_out"))
    assert options == expected