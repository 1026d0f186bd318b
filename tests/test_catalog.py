"""Tests for the catalog CLI."""
import json

import pytest

import catalog


def run(capsys, *argv):
    catalog.main(list(argv))
    return capsys.readouterr().out


def test_init_add_filter_flow(tmp_path, capsys):
    """Test the CLI end to end on a file catalog."""
    storage = str(tmp_path / "books.json")

    assert "Created catalog" in run(capsys, "--storage", storage, "--backend", "file", "init")
    dune_id = run(capsys, "--storage", storage, "--backend", "file",
                  "add", "Dune", "--pages", "412", "--price", "9.99", "--genre", "scifi").strip()
    run(capsys, "--storage", storage, "--backend", "file",
        "add", "Hyperion", "--pages", "482", "--price", "12.5", "--genre", "scifi")

    listed = json.loads(run(capsys, "--storage", storage, "--backend", "file", "list", "--format", "json"))
    filtered = json.loads(run(capsys, "--storage", storage, "--backend", "file", "filter", ">10", "--format", "json"))

    assert [b["title"] for b in listed] == ["Dune", "Hyperion"]
    assert listed[0]["id"] == dune_id
    assert [b["title"] for b in filtered] == ["Hyperion"]


def test_update_and_remove(tmp_path, capsys):
    """Test partial update and removal through the CLI."""
    storage = str(tmp_path / "books.json")
    run(capsys, "--storage", storage, "--backend", "file", "init")
    book_id = run(capsys, "--storage", storage, "--backend", "file",
                  "add", "Dune", "--pages", "412", "--price", "9.99", "--genre", "scifi").strip()

    out = run(capsys, "--storage", storage, "--backend", "file", "update", book_id, "--price", "15", "--format", "compact")
    assert "Dune - 15.00 (scifi)" in out

    run(capsys, "--storage", storage, "--backend", "file", "remove", book_id)
    assert json.loads(run(capsys, "--storage", storage, "--backend", "file", "list", "--format", "json")) == []


def test_errors_exit_with_status_1(tmp_path, capsys):
    """Test library errors exit non-zero."""
    storage = str(tmp_path / "books.json")
    run(capsys, "--storage", storage, "--backend", "file", "init")

    with pytest.raises(SystemExit) as exc:
        catalog.main(["--storage", storage, "--backend", "file", "get", "missing"])
    assert exc.value.code == 1

    with pytest.raises(SystemExit) as exc:
        catalog.main(["--storage", storage, "--backend", "file", "add", "No genres", "--pages", "1", "--price", "1"])
    assert exc.value.code == 1


def test_no_command_prints_help(capsys):
    """Test running without a subcommand."""
    with pytest.raises(SystemExit) as exc:
        catalog.main([])
    assert exc.value.code == 1
