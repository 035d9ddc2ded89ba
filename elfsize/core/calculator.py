"""
ELF Size Calculator
====================

Derives the logical size of an ELF binary from its own header, independent
of the length the filesystem reports.  ELF payloads are often embedded in
other containers (appended to a script, padded with trailing data); the
meaningful content ends one byte past the section header table::

    size = e_shoff + e_shentsize * e_shnum

Pipeline (strictly linear, no loops over variable-length structures):
    1. Read the 16 identifier bytes at offset 0
    2. Validate the magic number
    3. Decode class (32/64-bit) and byte order
    4. Re-read the full class-specific header record from offset 0
    5. Widen offset, entry size and entry count to Python ints
    6. Combine them, rejecting results beyond the unsigned 64-bit range

The calculator holds no state between calls; the same instance can be used
from several threads on different sources.
"""

from __future__ import annotations

from pathlib import Path

from shared.logger import ElfSizeLogger

from elfsize.core.errors import ElfOverflowError
from elfsize.core.models import ElfHeader, SizeReport
from elfsize.parsers.elf_header import read_file_header
from elfsize.parsers.machine import architecture_name
from elfsize.parsers.source import SourceLike, open_source


U64_MAX: int = 0xFFFF_FFFF_FFFF_FFFF


class ElfSizeCalculator:
    """Computes the header-derived size of ELF binaries.

    Usage::

        calc = ElfSizeCalculator()
        size = calc.compute_size("/usr/bin/ls")
        size = calc.compute_size(open("/usr/bin/ls", "rb"))
        size = calc.compute_size(raw_bytes)
    """

    def __init__(self, logger: ElfSizeLogger | None = None) -> None:
        """Initialise the calculator.

        Args:
            logger: Logger instance.  A new one is created if not provided.
        """
        self._logger: ElfSizeLogger = logger or ElfSizeLogger("calculator")

    # ------------------------------------------------------------------ #
    #  Public interface
    # ------------------------------------------------------------------ #

    def geometry(self, source: SourceLike) -> ElfHeader:
        """Decode the section header table location of *source*.

        Args:
            source: Path, binary file object, buffer or
                :class:`~elfsize.parsers.source.ByteSource`.

        Returns:
            :class:`ThirtyTwoBitHeader` or :class:`SixtyFourBitHeader`,
            whichever the file's class byte selects.

        Raises:
            ElfError: Any decoding failure, see :mod:`elfsize.core.errors`.
        """
        with open_source(source) as src:
            header = read_file_header(src)

        self._logger.debug(
            "%s: %s %s e_shoff=0x%x e_shentsize=%d e_shnum=%d",
            src.name,
            header.elf_class.value,
            header.byte_order.value,
            header.e_shoff,
            header.e_shentsize,
            header.e_shnum,
        )
        return header.geometry()

    def compute_size(self, source: SourceLike) -> int:
        """Return ``e_shoff + e_shentsize * e_shnum`` for *source*.

        A file without section headers (``e_shnum == 0``) yields ``e_shoff``
        unchanged, typically 0; judging whether that is a sensible size is
        left to the caller.

        Raises:
            ElfIoError: The source could not be opened or read.
            ElfTruncatedError: The identifier or header record is incomplete.
            NotElfError: Magic mismatch.
            UnsupportedClassError: Class byte is neither 1 nor 2.
            UnsupportedByteOrderError: Data byte is neither 1 nor 2.
            ElfOverflowError: The result exceeds the unsigned 64-bit range.
        """
        with self._logger.operation("compute_size"):
            return self._checked_size(self.geometry(source))

    def report(self, path: str | Path) -> SizeReport:
        """Compute the size of the file at *path* along with header metadata."""
        with self._logger.operation("report"), open_source(path) as src:
            header = read_file_header(src)
            geometry = header.geometry()
            return SizeReport(
                path=str(path),
                size=self._checked_size(geometry),
                elf_class=header.elf_class,
                byte_order=header.byte_order,
                machine=header.e_machine,
                arch=architecture_name(header.e_machine),
                header=geometry,
            )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    def _checked_size(self, geometry: ElfHeader) -> int:
        size = geometry.section_table_end
        if size > U64_MAX:
            raise ElfOverflowError(size)
        self._logger.debug("computed size %d", size)
        return size


# ========================= Module-level convenience ========================

def compute_size(source: SourceLike) -> int:
    """Module-level convenience wrapper around :meth:`ElfSizeCalculator.compute_size`."""
    return ElfSizeCalculator().compute_size(source)
