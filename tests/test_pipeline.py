"""
Tests for the generate use case — stage ordering and exit codes.
"""

import io
from pathlib import Path
from unittest.mock import patch

from gbindgen.adapters.cbindgen import CbindgenAdapter
from gbindgen.adapters.mock import MockGenerator
from gbindgen.core.errors import (
    ConfigError,
    GenerationError,
    LocationError,
    NamespaceMissingError,
    WriteError,
)
from gbindgen.core.use_cases.generate import EXIT_DRIFT, EXIT_FAILED, EXIT_OK, run_generate


class TestRunGenerate:
    def test_stream_mode(self, crate: Path, metadata_file: Path):
        buf = io.StringIO()
        result = run_generate(
            crate, metadata_file=metadata_file, generator=MockGenerator(), stream=buf
        )
        assert result.ok
        assert result.stage == "written"
        assert result.exit_code == EXIT_OK
        assert "#define MYLIB_MICRO_VERSION 5" in buf.getvalue()

    def test_header_order(self, crate: Path, metadata_file: Path):
        (crate / "gbindgen.toml").write_text(
            'namespace = "MYLIB"\nsys_includes = ["glib-object.h"]\n'
        )
        out = crate / "mylib.h"
        run_generate(crate, output=out, metadata_file=metadata_file, generator=MockGenerator())
        text = out.read_text()
        assert text.startswith("/* GObject C binding from Rust mylib project")
        assert text.index("#include <glib-object.h>") < text.index("MYLIB_MAJOR_VERSION")

    def test_verify_round_trip(self, crate: Path, metadata_file: Path):
        out = crate / "include" / "mylib.h"
        first = run_generate(
            crate, output=out, verify=True, metadata_file=metadata_file, generator=MockGenerator()
        )
        assert first.exit_code == EXIT_DRIFT

        second = run_generate(
            crate, output=out, verify=True, metadata_file=metadata_file, generator=MockGenerator()
        )
        assert second.exit_code == EXIT_OK
        assert second.outcome.changed is False

    def test_missing_namespace_stops_before_generator(self, crate: Path, metadata_file: Path):
        (crate / "gbindgen.toml").unlink()
        mock = MockGenerator()
        out = crate / "mylib.h"
        result = run_generate(crate, output=out, metadata_file=metadata_file, generator=mock)
        assert isinstance(result.error, NamespaceMissingError)
        assert result.stage == "composing"
        assert result.exit_code == EXIT_FAILED
        assert mock.call_count == 0
        assert not out.exists()

    def test_location_error(self, tmp_path: Path):
        result = run_generate(tmp_path / "missing", generator=MockGenerator())
        assert isinstance(result.error, LocationError)
        assert result.stage == "locating"
        assert result.exit_code == EXIT_FAILED

    def test_config_error(self, crate: Path, metadata_file: Path):
        (crate / "gbindgen.toml").write_text('namespace = "A"\nunknown = true\n')
        result = run_generate(crate, metadata_file=metadata_file, generator=MockGenerator())
        assert isinstance(result.error, ConfigError)
        assert result.stage == "configuring"

    def test_generation_error(self, crate: Path, metadata_file: Path):
        mock = MockGenerator()
        mock.set_failure("boom")
        out = crate / "mylib.h"
        result = run_generate(crate, output=out, metadata_file=metadata_file, generator=mock)
        assert isinstance(result.error, GenerationError)
        assert result.exit_code == EXIT_FAILED
        assert not out.exists()

    def test_write_error(self, crate: Path, metadata_file: Path):
        (crate / "blocker").write_text("")
        result = run_generate(
            crate,
            output=crate / "blocker" / "mylib.h",
            metadata_file=metadata_file,
            generator=MockGenerator(),
        )
        assert isinstance(result.error, WriteError)
        assert result.stage == "writing"

    def test_to_dict(self, crate: Path, metadata_file: Path):
        result = run_generate(
            crate, metadata_file=metadata_file, generator=MockGenerator(), stream=io.StringIO()
        )
        d = result.to_dict()
        assert d["crate"] == "mylib"
        assert d["exit_code"] == 0
        assert d["error"] is None

    @patch(
        "subprocess.run",
        side_effect=UnicodeDecodeError("utf-8", b"int \xffbad;", 4, 5, "invalid start byte"),
    )
    @patch("gbindgen.adapters.cbindgen.shutil.which", return_value="/usr/bin/cbindgen")
    def test_undecodable_generator_output(self, mock_which, mock_run, crate, metadata_file):
        result = run_generate(
            crate, metadata_file=metadata_file, generator=CbindgenAdapter(), stream=io.StringIO()
        )
        assert isinstance(result.error, GenerationError)
        assert result.stage == "generating"
        assert result.exit_code == EXIT_FAILED
