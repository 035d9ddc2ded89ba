"""
elfsize Console Output
=======================

Rich table view of a :class:`~elfsize.core.models.SizeReport`, shown by
``elfsize --details``.
"""

from __future__ import annotations

from shared.console import ElfSizeConsole

from elfsize.core.models import SizeReport


class SizeConsoleOutput:
    """Renders size reports through an :class:`ElfSizeConsole`."""

    def __init__(self, console: ElfSizeConsole | None = None) -> None:
        self._console = console or ElfSizeConsole()

    def display(self, report: SizeReport) -> None:
        rows: list[tuple[str, str]] = [
            ("Path", report.path),
            ("Class", f"{report.elf_class.value} ({report.elf_class.bits}-bit)"),
            ("Byte order", report.byte_order.value),
            ("Machine", f"{report.arch} (0x{report.machine:x})"),
        ]
        if report.header is not None:
            h = report.header
            rows.extend([
                ("Section header offset", f"0x{h.section_header_offset:x}"),
                ("Section header entry size", str(h.section_header_entry_size)),
                ("Section header count", str(h.section_header_entry_count)),
            ])
        rows.append(("ELF size", f"{report.size} (0x{report.size:x})"))

        self._console.table(
            "ELF Size",
            ["Field", "Value"],
            rows,
            styles=["elfsize.label", ""],
        )
