"""Unit tests for CLI command handling."""

from __future__ import annotations

import io
import json

import pytest

from cli.main import main


def _save(tmp_path, document: object, capsys) -> str:
    source_path = tmp_path / "input.json"
    source_path.write_text(json.dumps(document), encoding="utf-8")
    main(["--data-root", str(tmp_path / "data"), "save", str(source_path)])
    return capsys.readouterr().out.strip()


def test_cli_save_prints_version_id(tmp_path, capsys) -> None:
    """CLI save should print the created version id."""
    output = _save(tmp_path, {"a": 1}, capsys)

    assert output.isdigit()


def test_cli_save_unchanged_reports_no_version(tmp_path, capsys) -> None:
    """Saving the same document twice should report no change."""
    _save(tmp_path, {"a": 1}, capsys)

    output = _save(tmp_path, {"a": 1}, capsys)

    assert output == "unchanged"


def test_cli_save_reads_stdin(tmp_path, capsys, monkeypatch: pytest.MonkeyPatch) -> None:
    """A dash should read the target document from stdin."""
    monkeypatch.setattr("sys.stdin", io.StringIO('{"from": "stdin"}'))

    exit_code = main(["--data-root", str(tmp_path), "save", "-"])

    assert exit_code == 0 and json.loads((tmp_path / "document.json").read_text()) == {
        "from": "stdin"
    }


def test_cli_save_rejects_invalid_json(tmp_path, capsys) -> None:
    """Unparsable input should exit with a usage error."""
    source_path = tmp_path / "input.json"
    source_path.write_text("{nope", encoding="utf-8")

    exit_code = main(["--data-root", str(tmp_path), "save", str(source_path)])

    assert exit_code == 2


def test_cli_versions_marks_head(tmp_path, capsys) -> None:
    """versions should list ids and mark the head."""
    first = _save(tmp_path, {"a": 1}, capsys)
    second = _save(tmp_path, {"a": 2}, capsys)

    main(["--data-root", str(tmp_path / "data"), "versions"])
    lines = capsys.readouterr().out.strip().splitlines()

    assert lines == [f"{first}\t-", f"{second}\thead"]


def test_cli_undo_then_show_current_document(tmp_path, capsys) -> None:
    """undo should move the head back and show should print that state."""
    first = _save(tmp_path, {"a": 1}, capsys)
    _save(tmp_path, {"a": 2}, capsys)
    data_root = str(tmp_path / "data")

    main(["--data-root", data_root, "undo"])
    main(["--data-root", data_root, "show", first])
    output = capsys.readouterr().out

    assert output.splitlines()[0] == first and json.loads(
        output.split("\n", 1)[1]
    ) == {"a": 1}


def test_cli_show_unknown_version_exits_nonzero(tmp_path, capsys) -> None:
    """show should fail for an id outside the chain."""
    _save(tmp_path, {"a": 1}, capsys)

    exit_code = main(["--data-root", str(tmp_path / "data"), "show", "42"])

    assert exit_code == 1


def test_cli_redo_at_latest_exits_nonzero(tmp_path, capsys) -> None:
    """redo should fail when the head is already the newest version."""
    _save(tmp_path, {"a": 1}, capsys)

    exit_code = main(["--data-root", str(tmp_path / "data"), "redo"])

    assert exit_code == 1


def test_cli_init_reports_clean_layout(tmp_path, capsys) -> None:
    """init should report a clean recovery state."""
    exit_code = main(["--data-root", str(tmp_path), "init"])

    assert exit_code == 0 and capsys.readouterr().out.strip() == "clean\t-"


def test_cli_layout_file_relocates_snapshot(tmp_path, capsys) -> None:
    """A layout file should change where the snapshot is written."""
    layout_path = tmp_path / "layout.yaml"
    layout_path.write_text("source_path: settings.json\n", encoding="utf-8")

    main(["--data-root", str(tmp_path), "--layout", str(layout_path), "init"])

    assert (tmp_path / "settings.json").exists()


def test_cli_save_rejects_undecodable_file(tmp_path, capsys) -> None:
    """A target file that is not UTF-8 should exit with a usage error."""
    source_path = tmp_path / "input.json"
    source_path.write_bytes(b"\xff\xfe garbage")

    exit_code = main(["--data-root", str(tmp_path), "save", str(source_path)])

    assert exit_code == 2
