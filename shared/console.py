"""
elfsize Console Interface
==========================

Rich-powered console abstraction used for the human-oriented views of the
command line (``--details``) and for styled status messages.

Plain machine-readable results (the decimal size, JSON) are written with
``click.echo`` instead, so they never pick up styling or line wrapping.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_ELFSIZE_THEME = Theme(
    {
        "elfsize.warning": "bold yellow",
        "elfsize.error": "bold red",
        "elfsize.label": "bold bright_white",
    }
)


class ElfSizeConsole:
    """Thin styling layer over :class:`rich.console.Console`.

    Usage::

        con = ElfSizeConsole()
        con.table("Header", ["Field", "Value"], [("size", 4416)])
        con.error("not an ELF file")
    """

    def __init__(self, *, stderr: bool = False, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            stderr: Write to the error stream instead of stdout.
            quiet:  Suppress all output.
            record: Enable Rich recording (used by tests to export text).
        """
        self._console = Console(
            theme=_ELFSIZE_THEME,
            stderr=stderr,
            quiet=quiet,
            record=record,
            highlight=False,
            soft_wrap=True,
        )

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def warning(self, message: str) -> None:
        self._console.print(f"[elfsize.warning]WARNING:[/elfsize.warning] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[elfsize.error]ERROR:[/elfsize.error] {message}")

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Iterable of row tuples; each element is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._console.print(tbl)

    def export_text(self) -> str:
        """Return everything printed so far (requires ``record=True``)."""
        return self._console.export_text()
