"""
ELF Header Decoder
===================

Struct-based decoder for the ELF identification bytes and the fixed-size
ELF file header, in both the ELF32 and ELF64 variants.

All parsing is performed with :mod:`struct` directly against a
:class:`~elfsize.parsers.source.ByteSource`; only the 16 identifier bytes
and the 52/64-byte header record are ever read.

Header layouts (offsets after the 16-byte ``e_ident``)::

    ELF32: e_type H, e_machine H, e_version I, e_entry I, e_phoff I,
           e_shoff I, e_flags I, e_ehsize H, e_phentsize H, e_phnum H,
           e_shentsize H, e_shnum H, e_shstrndx H           -> 52 bytes
    ELF64: same order, with e_entry / e_phoff / e_shoff widened to Q
                                                             -> 64 bytes

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Linux man page: elf(5).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from elfsize.core.errors import NotElfError
from elfsize.core.models import (
    ByteOrder,
    ElfClass,
    ElfHeader,
    SixtyFourBitHeader,
    ThirtyTwoBitHeader,
)
from elfsize.parsers.source import ByteSource


# ---------------------------------------------------------------------------
# ELF Constants
# ---------------------------------------------------------------------------

ELF_MAGIC: bytes = b"\x7fELF"
EI_NIDENT: int = 16

# e_ident indices
EI_CLASS: int = 4
EI_DATA: int = 5
EI_VERSION: int = 6
EI_OSABI: int = 7

# Fixed header record sizes, including e_ident
ELF32_HEADER_SIZE: int = 52
ELF64_HEADER_SIZE: int = 64

_HEADER_FORMATS: dict[ElfClass, str] = {
    ElfClass.ELF32: "HHIIIIIHHHHHH",
    ElfClass.ELF64: "HHIQQQIHHHHHH",
}

_HEADER_SIZES: dict[ElfClass, int] = {
    ElfClass.ELF32: ELF32_HEADER_SIZE,
    ElfClass.ELF64: ELF64_HEADER_SIZE,
}


# ---------------------------------------------------------------------------
# Parsed structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Identifier:
    """Decoded ``e_ident`` bytes."""
    elf_class: ElfClass
    byte_order: ByteOrder
    version: int
    osabi: int


@dataclass(frozen=True, slots=True)
class FileHeader:
    """Every field of the ELF file header, widened to Python ints."""
    ident: Identifier
    e_type: int
    e_machine: int
    e_version: int
    e_entry: int
    e_phoff: int
    e_shoff: int
    e_flags: int
    e_ehsize: int
    e_phentsize: int
    e_phnum: int
    e_shentsize: int
    e_shnum: int
    e_shstrndx: int

    @property
    def elf_class(self) -> ElfClass:
        return self.ident.elf_class

    @property
    def byte_order(self) -> ByteOrder:
        return self.ident.byte_order

    def geometry(self) -> ElfHeader:
        """Project the section header table location onto the tagged variant."""
        variant = (
            SixtyFourBitHeader
            if self.elf_class is ElfClass.ELF64
            else ThirtyTwoBitHeader
        )
        return variant(
            byte_order=self.byte_order,
            section_header_offset=self.e_shoff,
            section_header_entry_size=self.e_shentsize,
            section_header_entry_count=self.e_shnum,
        )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def header_size(elf_class: ElfClass) -> int:
    """Size in bytes of the fixed header record for *elf_class*."""
    return _HEADER_SIZES[elf_class]


def parse_identifier(ident: bytes) -> Identifier:
    """Validate and decode the 16 identifier bytes.

    The magic is checked before the class, and the class before the byte
    order, so the first offending field decides the error.

    Raises:
        NotElfError: Magic mismatch.
        UnsupportedClassError: Class byte is neither 1 nor 2.
        UnsupportedByteOrderError: Data byte is neither 1 nor 2.
    """
    if ident[:4] != ELF_MAGIC:
        raise NotElfError(bytes(ident[:4]))

    return Identifier(
        elf_class=ElfClass.from_ident(ident[EI_CLASS]),
        byte_order=ByteOrder.from_ident(ident[EI_DATA]),
        version=ident[EI_VERSION],
        osabi=ident[EI_OSABI],
    )


def parse_file_header(ident: Identifier, raw: bytes) -> FileHeader:
    """Decode the fixed header record *raw* using the layout *ident* selects.

    Args:
        ident: The already validated identifier.
        raw:   The full header record, ``e_ident`` included.
    """
    fmt = ident.byte_order.struct_prefix + _HEADER_FORMATS[ident.elf_class]
    (
        e_type, e_machine, e_version, e_entry,
        e_phoff, e_shoff, e_flags, e_ehsize,
        e_phentsize, e_phnum, e_shentsize, e_shnum,
        e_shstrndx,
    ) = struct.unpack_from(fmt, raw, EI_NIDENT)

    return FileHeader(
        ident=ident,
        e_type=e_type,
        e_machine=e_machine,
        e_version=e_version,
        e_entry=e_entry,
        e_phoff=e_phoff,
        e_shoff=e_shoff,
        e_flags=e_flags,
        e_ehsize=e_ehsize,
        e_phentsize=e_phentsize,
        e_phnum=e_phnum,
        e_shentsize=e_shentsize,
        e_shnum=e_shnum,
        e_shstrndx=e_shstrndx,
    )


def read_file_header(source: ByteSource) -> FileHeader:
    """Read and decode the ELF header from *source*.

    Performs exactly two reads: the identifier bytes at offset 0, then the
    whole class-specific record again from offset 0.
    """
    ident = parse_identifier(source.read_at(0, EI_NIDENT, "elf identifier"))
    raw = source.read_at(0, header_size(ident.elf_class), "elf header")
    return parse_file_header(ident, raw)
