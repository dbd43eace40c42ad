"""End-to-end tests for the datafields command line."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from datafields.cli._dispatcher import build_parser, main


@pytest.fixture
def event_file(tmp_path: Path) -> Path:
    path = tmp_path / "event.yml"
    path.write_text(
        "objectid: 42\n"
        "relateduserid: 42\n"
        "other:\n"
        "  courseshortname: CS101\n"
        "  coursefullname: Intro to CS\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def step_file(tmp_path: Path) -> Path:
    path = tmp_path / "step.json"
    path.write_text('{"foo": "bar", "tagexists": "tag value"}', encoding="utf-8")
    return path


def test_parser_discovers_commands() -> None:
    parser = build_parser()
    choices = parser._subparsers._group_actions[0].choices
    assert {"fields", "render", "config"} <= set(choices)


def test_fields_json(event_file: Path, step_file: Path, capsys) -> None:
    rc = main(["fields", "--event", str(event_file), "--step-data", str(step_file), "--set", "n=7", "--json"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["objectid"] == 42
    assert out["other_courseshortname"] == "CS101"
    assert out["other_coursefullname"] == "Intro to CS"
    assert out["foo"] == "bar"
    assert out["n"] == 7


def test_fields_text(event_file: Path, capsys) -> None:
    assert main(["fields", "--event", str(event_file)]) == 0
    out = capsys.readouterr().out
    assert "objectid: 42" in out
    assert "other_courseshortname: CS101" in out


def test_render_template_file(tmp_path: Path, event_file: Path, step_file: Path, capsys) -> None:
    template = tmp_path / "message.txt"
    template.write_text(
        "Good tag: {tagexists}.\nBad tag: {nosuchtag}.\nCourse: {other_courseshortname}\n",
        encoding="utf-8",
    )
    rc = main(["render", str(template), "--event", str(event_file), "--step-data", str(step_file)])
    assert rc == 0
    assert capsys.readouterr().out == "Good tag: tag value.\nBad tag: {nosuchtag}.\nCourse: CS101\n"


def test_render_transform_and_delimiters(event_file: Path, step_file: Path, capsys) -> None:
    rc = main(
        [
            "render",
            "--template-text",
            "tag=<tagexists>&id=<objectid>&raw={foo}",
            "--event",
            str(event_file),
            "--step-data",
            str(step_file),
            "--open-delimiter",
            "<",
            "--close-delimiter",
            ">",
            "--transform",
            "urlencode",
        ]
    )
    assert rc == 0
    assert capsys.readouterr().out == "tag=tag+value&id=42&raw={foo}\n"


def test_render_json_reports_unresolved(capsys) -> None:
    rc = main(["render", "--template-text", "{a} {b} {b}", "--set", "a=1", "--json"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"rendered": "1 {b} {b}", "unresolved": ["b"]}


def test_render_strict_fails_on_unresolved(capsys) -> None:
    rc = main(["render", "--template-text", "{a} {b}", "--set", "a=1", "--strict"])
    assert rc == 1
    captured = capsys.readouterr()
    assert captured.out == "1 {b}\n"
    assert "Unresolved placeholders: b" in captured.err


def test_render_uses_project_config(tmp_path: Path, capsys) -> None:
    (tmp_path / ".datafields.yml").write_text(
        "templating:\n  open_delimiter: '[['\n  close_delimiter: ']]'\n  transform: upper\n",
        encoding="utf-8",
    )
    rc = main(["render", "--template-text", "[[name]] {name}", "--set", "name=ada"])
    assert rc == 0
    assert capsys.readouterr().out == "ADA {name}\n"


def test_render_missing_event_file(tmp_path: Path, capsys) -> None:
    rc = main(["render", "--template-text", "{a}", "--event", str(tmp_path / "none.yml"), "--json"])
    assert rc == 1
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "render_error"
    assert "not found" in err["message"]


def test_render_without_template(capsys) -> None:
    assert main(["render"]) == 1
    assert "No template given" in capsys.readouterr().err


def test_render_bad_assignment(capsys) -> None:
    assert main(["render", "--template-text", "{a}", "--set", "novalue"]) == 1
    assert "expected KEY=VALUE" in capsys.readouterr().err


def test_config_show_key(capsys) -> None:
    assert main(["config", "show", "templating.open_delimiter", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"templating.open_delimiter": "{"}


def test_config_show_all_yaml(capsys) -> None:
    assert main(["config", "show"]) == 0
    out = capsys.readouterr().out
    assert "templating:" in out
    assert "logging:" in out


def test_config_show_unknown_key(capsys) -> None:
    assert main(["config", "show", "nope.nothing"]) == 1
    assert "Error: Key not found: nope.nothing" in capsys.readouterr().err


def test_config_show_unknown_key_json(capsys) -> None:
    assert main(["config", "show", "nope.nothing", "--json"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    err = json.loads(captured.err)
    assert err["error"] == "config_show_error"
    assert err["context"] == {"key": "nope.nothing"}


def test_log_file_option(tmp_path: Path) -> None:
    log_path = tmp_path / "run.log"
    rc = main(["--log-file", str(log_path), "--log-level", "DEBUG", "fields", "--set", "a=1"])
    assert rc == 0
    assert log_path.exists()
    assert "Datafields updated" in log_path.read_text(encoding="utf-8")


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: datafields" in capsys.readouterr().out


def test_fields_event_directory(tmp_path: Path, capsys) -> None:
    event_dir = tmp_path / "events"
    event_dir.mkdir()
    assert main(["fields", "--event", str(event_dir)]) == 1
    assert "Error: Event could not be read" in capsys.readouterr().err


def test_fields_event_not_utf8(tmp_path: Path, capsys) -> None:
    event = tmp_path / "event.yml"
    event.write_bytes(b"objectid: \xff\xfe\n")
    assert main(["fields", "--event", str(event)]) == 1
    assert "Error: Event " in capsys.readouterr().err


def test_render_template_not_utf8(tmp_path: Path, capsys) -> None:
    template = tmp_path / "template.txt"
    template.write_bytes(b"\xff{a}")
    assert main(["render", str(template), "--set", "a=1"]) == 1
    assert "Error: Template could not be read" in capsys.readouterr().err
