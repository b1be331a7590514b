"""
gbindgen — CLI entrypoint.

Usage:
    gbindgen --help
    gbindgen path/to/crate -o include/mylib.h
    gbindgen path/to/crate -o include/mylib.h --verify

Exit codes: 0 success, 1 generation failed, 2 --verify found changed bindings.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from gbindgen import __version__
from gbindgen.core.observability.logging_config import setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="gbindgen")
@click.argument(
    "input_path",
    metavar="INPUT",
    required=False,
    type=click.Path(path_type=Path),
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="PATH",
    help="The file to output the bindings to (default: stdout).",
)
@click.option(
    "--verify",
    is_flag=True,
    help="Exit with status 2 if the bindings differ from the existing output file.",
)
@click.option("-v", "verbosity", count=True, help="Enable verbose logging (repeat for more).")
@click.option("--quiet", "-q", is_flag=True, help="Report errors only (overrides -v).")
@click.option(
    "--lockfile",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the Cargo.lock to use (default: the workspace one).",
)
@click.option("--crate", "crate", default=None, help="Name of the crate to generate bindings for.")
@click.option(
    "--clean",
    is_flag=True,
    help="Always re-resolve crate metadata with cargo, ignoring --metadata.",
)
@click.option(
    "--metadata",
    "metadata_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Precomputed output of 'cargo metadata --format-version 1'.",
)
def cli(
    input_path: Path | None,
    output: Path | None,
    verify: bool,
    verbosity: int,
    quiet: bool,
    lockfile: Path | None,
    crate: str | None,
    clean: bool,
    metadata_file: Path | None,
) -> None:
    """Generate GObject C bindings for a glib/gtk-rs library.

    INPUT is a crate directory or source file to generate bindings for,
    in general the folder holding the Cargo.toml of the Rust library
    (default: the current directory).
    """
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(verbosity, quiet, log_file=os.environ.get("GBINDGEN_LOG_FILE"))

    from gbindgen.core.use_cases.generate import run_generate

    if input_path is None:
        input_path = Path.cwd()

    result = run_generate(
        input_path,
        output=output,
        verify=verify,
        lockfile=lockfile,
        crate=crate,
        clean=clean,
        metadata_file=metadata_file,
    )

    if result.error is not None:
        logger.error("%s", result.error)
        logger.error("Couldn't generate bindings for %s.", input_path)
        sys.exit(result.exit_code)

    if result.drift:
        logger.error("Bindings changed: %s", output)
        sys.exit(result.exit_code)


def main() -> None:
    """Console-script entry point.

    Usage errors exit with 1 so that status 2 stays reserved for --verify.
    """
    try:
        cli.main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
