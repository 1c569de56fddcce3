"""Tests for the command-line entry point."""

import logging

import pytest

from csvloader import cli


class TestParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.source == "gcs"
        assert args.delimiter == "comma"
        assert args.lazyquotes is True
        assert args.trimleadingspace is True
        assert args.db_url == ""

    @pytest.mark.parametrize("text, expected", [("false", False), ("0", False), ("T", True)])
    def test_bool_flags(self, text, expected):
        args = cli.build_parser().parse_args(["--lazyquotes", text, "--trimleadingspace", text])
        assert args.lazyquotes is expected
        assert args.trimleadingspace is expected

    def test_bare_bool_flag(self):
        assert cli.build_parser().parse_args(["--lazyquotes"]).lazyquotes is True

    def test_invalid_bool_flag(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--lazyquotes", "maybe"])


class TestMain:
    def test_missing_flag_exits_non_zero(self, caplog, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with caplog.at_level(logging.ERROR):
            assert cli.main(["--source", "data.csv"]) == 1
        assert "error: spanner-project-id is not set" in caplog.text
        assert "Traceback" not in caplog.text

    def test_debug_logs_traceback(self, caplog, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        with caplog.at_level(logging.ERROR):
            assert cli.main(["--source", ""]) == 1
        assert "error: source is not set" in caplog.text
        assert "Traceback" in caplog.text

    def test_loads_into_sqlite(self, write_csv, tmp_path, sqlite_destination):
        sqlite_destination.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)")
        csv_file = write_csv(["id\tname", "int64\tstring", "7\tseven"], name="in.tsv")

        code = cli.main(
            [
                "--source", str(csv_file),
                "--spanner-table", "t",
                "--delimiter", "tab",
                "--db-url", f"sqlite:///{tmp_path / 'test.db'}",
            ]
        )

        assert code == 0
        assert sqlite_destination.execute("SELECT * FROM t") == [{"id": 7, "name": "seven"}]
