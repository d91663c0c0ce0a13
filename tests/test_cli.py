"""Tests for the tabselect command line."""

from __future__ import annotations

import io
import json
import shutil
import tempfile
from pathlib import Path

import pytest

from tabselect.cli import main


@pytest.fixture
def data_dir():
    """Create a temporary directory for input files."""
    tmp = tempfile.mkdtemp()
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def listing(data_dir):
    """A JSON file holding a small directory listing."""
    path = data_dir / "ls.json"
    path.write_text(json.dumps([
        {"name": "a.txt", "size": 10, "type": "File"},
        {"name": "b", "size": 4096, "type": "Dir"},
    ]))
    return path


class TestMain:
    def test_table_output(self, listing, capsys):
        """Selected columns print as a table."""
        assert main(["name", "size", "-f", str(listing)]) == 0

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split(" | ") == ["name   ", "size"]
        assert "'a.txt'" in out
        assert lines[-1] == "(2 rows)"

    def test_json_output(self, listing, capsys):
        """--format json prints the rows as a JSON array."""
        assert main(["name", "owner", "--format", "json", "-f", str(listing)]) == 0

        rows = json.loads(capsys.readouterr().out)
        assert rows == [
            {"name": "a.txt", "owner": None},
            {"name": "b", "owner": None},
        ]

    def test_stdin(self, monkeypatch, capsys):
        """Records are read from stdin when no file is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a": 1}\n{"a": 2}\n'))

        assert main(["a", "--format", "json"]) == 0
        assert json.loads(capsys.readouterr().out) == [{"a": 1}, {"a": 2}]

    def test_no_columns(self, listing, capsys):
        """Running without columns reports the invocation error."""
        assert main(["-f", str(listing)]) == 1

        err = capsys.readouterr().err
        assert "Select requires columns to select" in err
        assert "needs parameter" in err

    def test_no_columns_reads_nothing(self, monkeypatch, capsys):
        """Missing columns are reported before stdin is touched."""
        calls = []

        class WatchedStdin(io.StringIO):
            def read(self, *args):
                calls.append("read")
                return super().read(*args)

            def readline(self, *args):
                calls.append("readline")
                return super().readline(*args)

            def __iter__(self):
                calls.append("iter")
                return super().__iter__()

        monkeypatch.setattr("sys.stdin", WatchedStdin('{"a": 1}\n'))

        assert main([]) == 1
        assert "Select requires columns to select" in capsys.readouterr().err
        assert calls == []

    def test_stdin_array(self, monkeypatch, capsys):
        """A JSON array on stdin yields one record per element."""
        monkeypatch.setattr("sys.stdin", io.StringIO('[{"a": 1},\n {"a": 2, "b": 3}]\n'))

        assert main(["b", "--format", "json"]) == 0
        assert json.loads(capsys.readouterr().out) == [{"b": 3}]

    def test_strict_missing_column(self, listing, capsys):
        """--strict fails on the first missing column."""
        assert main(["name", "owner", "--strict", "-f", str(listing)]) == 1

        err = capsys.readouterr().err
        assert "No data to fetch." in err
        assert 'Couldn\'t select column "owner"' in err

    def test_missing_file(self, data_dir, capsys):
        assert main(["name", "-f", str(data_dir / "nope.json")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_bad_path(self, listing, capsys):
        """Malformed column paths are reported, not raised."""
        assert main(["a[", "-f", str(listing)]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_invalid_json(self, data_dir, capsys):
        path = data_dir / "bad.json"
        path.write_text("{not json")

        assert main(["a", "-f", str(path)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_no_results(self, data_dir, capsys):
        """Empty input prints the empty-result marker."""
        path = data_dir / "empty.json"
        path.write_text("[]")

        assert main(["a", "-f", str(path)]) == 0
        assert capsys.readouterr().out == "(no results)\n"
