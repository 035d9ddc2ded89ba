"""
elfsize CLI -- ELF Size Oracle
===============================

Click-based command-line interface.  Prints the size of an ELF file in bytes
based on the information in its ELF header.

Usage::

    # Header-derived size (decimal, one line)
    elfsize /path/to/binary

    # Architecture name (x86_64, i686, armhf, aarch64, EM_*)
    elfsize /path/to/binary --arch

    # Offset and length of a section
    elfsize /path/to/binary --section .text

    # Raw section contents
    elfsize /path/to/binary --dump-section .comment > comment.bin

    # Full report
    elfsize /path/to/binary --json
    elfsize /path/to/binary --details

Exit status is 0 on success and 1 on usage errors, missing files and
undecodable headers.  ``--zero-on-error`` (or ``zero_on_error = true`` in the
``[elfsize]`` config section) restores the historical behaviour of printing
``0`` for undecodable input.

References:
    - Click documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from shared.config import ElfSizeConfig
from shared.console import ElfSizeConsole
from shared.logger import ElfSizeLogger

from elfsize.core.calculator import ElfSizeCalculator
from elfsize.core.errors import ElfError
from elfsize.output.console import SizeConsoleOutput
from elfsize.parsers.machine import read_architecture
from elfsize.parsers.sections import section_data, section_offset_and_length


def _usage(prog: str) -> None:
    click.echo(f"USAGE: {prog} <path to ELF file>", err=True)
    click.echo(
        "    Print the size of an ELF file in bytes based on the information in the ELF header",
        err=True,
    )


def _load_config(config_path: str | None, console: ElfSizeConsole) -> ElfSizeConfig:
    try:
        return ElfSizeConfig.load(config_path)
    except (OSError, ValueError) as exc:
        # TOMLDecodeError is a ValueError
        console.error(f"Cannot load configuration: {exc}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command("elfsize", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("path", required=False)
@click.option(
    "--arch", "-a",
    "show_arch",
    is_flag=True,
    default=False,
    help="Print the architecture name instead of the size.",
)
@click.option(
    "--section",
    "section_name",
    metavar="NAME",
    default=None,
    help="Print '<offset> <length>' of section NAME.",
)
@click.option(
    "--dump-section",
    "dump_name",
    metavar="NAME",
    default=None,
    help="Write the raw contents of section NAME to stdout.",
)
@click.option(
    "--json", "json_output",
    is_flag=True,
    default=False,
    help="Print the full size report as JSON.",
)
@click.option(
    "--details", "-d",
    is_flag=True,
    default=False,
    help="Render the size report as a table.",
)
@click.option(
    "--zero-on-error",
    is_flag=True,
    default=False,
    help="Print 0 and exit successfully when the header cannot be decoded.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging on stderr.",
)
@click.pass_context
def elfsize_cli(
    ctx: click.Context,
    path: str | None,
    show_arch: bool,
    section_name: str | None,
    dump_name: str | None,
    json_output: bool,
    details: bool,
    zero_on_error: bool,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Print the size of an ELF file in bytes based on its ELF header.

    PATH is the ELF file (or a file with an ELF payload at offset 0).
    """
    err_console = ElfSizeConsole(stderr=True)

    if path is None:
        _usage(ctx.info_name or "elfsize")
        sys.exit(1)

    modes = [show_arch, section_name is not None, dump_name is not None, json_output, details]
    if sum(bool(m) for m in modes) > 1:
        err_console.error(
            "--arch, --section, --dump-section, --json and --details "
            "are mutually exclusive."
        )
        sys.exit(1)

    if not Path(path).is_file():
        click.echo(f"{path} does not exist, exiting", err=True)
        sys.exit(1)

    config = _load_config(config_path, err_console)
    settings = config.global_settings
    try:
        logger = ElfSizeLogger(
            "cli",
            log_level="DEBUG" if verbose else settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.log_json,
        )
    except OSError as exc:
        err_console.error(f"Cannot open log file {settings.log_file}: {exc}")
        sys.exit(1)
    zero_on_error = zero_on_error or config.elfsize.zero_on_error

    calculator = ElfSizeCalculator(logger=logger)

    try:
        with logger.timed(f"elfsize {path}"):
            if show_arch:
                click.echo(read_architecture(path))
            elif section_name is not None:
                location = section_offset_and_length(path, section_name)
                if location is None:
                    click.echo(f"{section_name} not found", err=True)
                    sys.exit(1)
                click.echo(f"{location[0]} {location[1]}")
            elif dump_name is not None:
                data = section_data(path, dump_name)
                if data is None:
                    click.echo(f"{dump_name} not found", err=True)
                    sys.exit(1)
                stdout = click.get_binary_stream("stdout")
                stdout.write(data)
                stdout.flush()
            elif json_output:
                report = calculator.report(path)
                click.echo(report.model_dump_json(indent=config.elfsize.json_indent))
            elif details:
                SizeConsoleOutput(ElfSizeConsole()).display(calculator.report(path))
            else:
                click.echo(str(calculator.compute_size(path)))
    except ElfError as exc:
        logger.debug("decode failed: %s (%s)", exc, exc.kind.value, exc_info=verbose)
        click.echo(f"ERROR elfsize: {exc}", err=True)
        if zero_on_error and not any(modes):
            click.echo("0")
            return
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.warning("Interrupted by user.")
        sys.exit(130)


# ---------------------------------------------------------------------------
# Module entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Entry point for ``elfsize`` and ``python -m elfsize``."""
    elfsize_cli()


if __name__ == "__main__":
    main()
