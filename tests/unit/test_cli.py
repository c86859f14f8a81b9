"""Tests for the tally CLI."""

import io
import json

import pytest

from tally.cli import main, read_events


def _events_file(tmp_path, events):
    path = tmp_path / "events.jsonl"
    path.write_text("\n".join(json.dumps(event) for event in events) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep the repository's own pyproject.toml out of config lookup."""
    monkeypatch.chdir(tmp_path)


def _run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


FAILING_RUN = [
    {"kind": "begin-test", "var": "adds"},
    {"kind": "pass"},
    {"kind": "fail", "testable": {"id": "math::adds"}, "file": "math.py", "line": 4, "expected": 3, "actual": 4},
    {"kind": "begin-test", "var": "subtracts"},
    {"kind": "pass"},
]


def test_replay_prints_progress_and_summary(tmp_path, capsys):
    path = _events_file(tmp_path, FAILING_RUN)

    code = _run(["replay", str(path), "--no-color"])
    out = capsys.readouterr().out

    assert code == 1
    assert out.startswith(".F.")
    assert "FAIL in math::adds (math.py:4)" in out
    assert "2 tests, 3 assertions, 1 failures." in out


def test_replay_uses_summary_from_stream(tmp_path, capsys):
    path = _events_file(
        tmp_path,
        [{"kind": "pass"}, {"kind": "summary", "test": 7, "pass": 1}],
    )

    code = _run(["replay", str(path), "--no-color"])

    assert code == 0
    assert capsys.readouterr().out.count("tests,") == 1


def test_replay_fail_fast_stops_early(tmp_path, capsys):
    path = _events_file(tmp_path, FAILING_RUN)

    code = _run(["replay", str(path), "--no-color", "--fail-fast"])
    out = capsys.readouterr().out

    assert code == 1
    assert out.startswith(".F\n")
    assert "1 tests, 2 assertions, 1 failures." in out


def test_replay_with_several_reporters(tmp_path, capsys):
    path = _events_file(tmp_path, [{"kind": "pass"}])

    _run(["replay", str(path), "--no-color", "-r", "dots", "-r", "debug"])

    assert "{'kind': 'pass'}" in capsys.readouterr().out


def test_replay_reads_config(tmp_path, capsys):
    (tmp_path / "pyproject.toml").write_text(
        '[tool.tally]\nreporters = ["debug"]\ncolor = false\n', encoding="utf-8"
    )
    path = _events_file(tmp_path, [{"kind": "pass"}])

    _run(["replay", str(path)])

    assert capsys.readouterr().out.splitlines()[0] == "{'kind': 'pass'}"


def test_replay_unknown_reporter_exits_2(tmp_path, capsys):
    path = _events_file(tmp_path, [{"kind": "pass"}])

    assert _run(["replay", str(path), "-r", "nope"]) == 2
    assert "Unknown reporter" in capsys.readouterr().err


def test_replay_invalid_event_exits_2(tmp_path, capsys):
    path = tmp_path / "events.jsonl"
    path.write_text('{"no_kind": true}\n', encoding="utf-8")

    assert _run(["replay", str(path)]) == 2
    assert "line 1" in capsys.readouterr().err


def test_kinds_lists_hierarchy(capsys):
    assert _run(["kinds"]) == 0

    lines = capsys.readouterr().out.splitlines()
    fail_line = next(line for line in lines if line.startswith("fail "))
    assert "fail-type" in fail_line
    assert "known" in fail_line


def test_read_events_skips_blank_lines():
    events = list(read_events(io.StringIO('{"kind": "pass"}\n\n{"kind": "fail"}\n')))

    assert [event.kind for event in events] == ["pass", "fail"]


def test_replay_prints_contexts_from_wire_events(tmp_path, capsys):
    path = _events_file(
        tmp_path,
        [
            {
                "kind": "fail",
                "testing-contexts": ["with negatives", "addition"],
                "testing-vars": ["adds"],
                "file": "math.py",
                "line": 4,
            }
        ],
    )

    _run(["replay", str(path), "--no-color"])
    out = capsys.readouterr().out

    assert "FAIL in adds (math.py:4)" in out
    assert "addition with negatives" in out


def test_replay_malformed_config_exits_2(tmp_path, capsys):
    (tmp_path / "pyproject.toml").write_text('[tool.tally]\nfail_fast = "yes"\n', encoding="utf-8")
    path = _events_file(tmp_path, [{"kind": "pass"}])

    assert _run(["replay", str(path)]) == 2
    assert "fail_fast" in capsys.readouterr().err


def test_replay_broken_toml_exits_2(tmp_path, capsys):
    (tmp_path / "pyproject.toml").write_text("[tool.tally\n", encoding="utf-8")
    path = _events_file(tmp_path, [{"kind": "pass"}])

    assert _run(["replay", str(path)]) == 2
    assert capsys.readouterr().err.strip()
