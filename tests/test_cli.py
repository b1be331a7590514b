"""
Tests for the CLI — options, exit codes and verify mode.
"""

import logging
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from gbindgen.adapters.mock import MockGenerator
from gbindgen.main import cli, main


@pytest.fixture
def mock_generator(monkeypatch) -> MockGenerator:
    mock = MockGenerator()
    monkeypatch.setattr("gbindgen.adapters.cbindgen.CbindgenAdapter", lambda: mock)
    return mock


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "GObject C bindings" in result.output
        assert "--verify" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateCommand:
    def test_stdout(self, crate: Path, metadata_file: Path, mock_generator):
        result = CliRunner().invoke(cli, [str(crate), "--metadata", str(metadata_file)])
        assert result.exit_code == 0
        assert "#define MYLIB_MAJOR_VERSION 2" in result.output
        assert "#define MYLIB_MINOR_VERSION 0" in result.output
        assert "#define MYLIB_MICRO_VERSION 5" in result.output

    def test_defaults_to_cwd(self, crate: Path, metadata_file: Path, mock_generator, monkeypatch):
        monkeypatch.chdir(crate)
        result = CliRunner().invoke(cli, ["--metadata", str(metadata_file)])
        assert result.exit_code == 0
        assert mock_generator.call_count == 1

    def test_output_file(self, crate: Path, metadata_file: Path, mock_generator):
        out = crate / "mylib.h"
        result = CliRunner().invoke(
            cli, [str(crate), "-o", str(out), "--metadata", str(metadata_file)]
        )
        assert result.exit_code == 0
        assert out.read_text().startswith("/* GObject C binding from Rust mylib project")

    def test_verify_new_file_exits_2(self, crate: Path, metadata_file: Path, mock_generator):
        out = crate / "mylib.h"
        result = CliRunner().invoke(
            cli, [str(crate), "-o", str(out), "--verify", "--metadata", str(metadata_file)]
        )
        assert result.exit_code == 2
        assert out.exists()
        assert "Bindings changed" in result.output

    def test_verify_round_trip(self, crate: Path, metadata_file: Path, mock_generator):
        out = crate / "mylib.h"
        args = [str(crate), "-o", str(out), "--verify", "--metadata", str(metadata_file)]
        CliRunner().invoke(cli, args)
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 0

    def test_missing_namespace_exits_1(self, crate: Path, metadata_file: Path, mock_generator):
        (crate / "gbindgen.toml").write_text("sys_includes = []\n")
        out = crate / "mylib.h"
        result = CliRunner().invoke(
            cli, [str(crate), "-o", str(out), "--metadata", str(metadata_file)]
        )
        assert result.exit_code == 1
        assert not out.exists()
        assert mock_generator.call_count == 0
        assert "Couldn't generate bindings" in result.output

    def test_generation_failure_exits_1(self, crate: Path, metadata_file: Path, mock_generator):
        mock_generator.set_failure("cannot parse lib.rs")
        result = CliRunner().invoke(cli, [str(crate), "--metadata", str(metadata_file)])
        assert result.exit_code == 1
        assert "cannot parse lib.rs" in result.output

    def test_quiet_hides_warnings(self, crate: Path, tmp_path: Path, mock_generator):
        import json

        from conftest import make_metadata

        data = make_metadata(tmp_path / "elsewhere", [{"name": "mylib", "version": "2.0.5", "dir": "."}])
        meta = tmp_path / "moved.json"
        meta.write_text(json.dumps(data))
        args = [str(crate), "--crate", "mylib", "--metadata", str(meta)]

        noisy = CliRunner().invoke(cli, args)
        quiet = CliRunner().invoke(cli, ["-q", *args])
        assert noisy.exit_code == quiet.exit_code == 0
        assert "Couldn't find the directory" in noisy.output
        assert "Couldn't find the directory" not in quiet.output

    def test_crate_option(self, crate: Path, metadata_file: Path, mock_generator):
        result = CliRunner().invoke(
            cli, [str(crate), "--crate", "other", "--metadata", str(metadata_file)]
        )
        assert result.exit_code == 1
        assert "Crate 'other' not found" in result.output


class TestConsoleEntryPoint:
    def test_usage_error_exits_1(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["gbindgen", "--bogus"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1

    def test_drift_still_exits_2(self, crate: Path, metadata_file: Path, mock_generator, monkeypatch):
        out = crate / "mylib.h"
        monkeypatch.setattr(
            sys,
            "argv",
            ["gbindgen", str(crate), "-o", str(out), "--verify", "--metadata", str(metadata_file)],
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2
        assert out.exists()

    def test_success_returns_normally(self, crate: Path, metadata_file: Path, mock_generator, monkeypatch):
        out = crate / "mylib.h"
        monkeypatch.setattr(
            sys, "argv", ["gbindgen", str(crate), "-o", str(out), "--metadata", str(metadata_file)]
        )
        main()
        assert out.exists()
