"""
elfsize Data Models
====================

Pydantic-based value objects produced by the ELF header decoder and the
size calculator.  All of them are derived fresh from the input bytes on every
call and never mutated afterwards.

The section header geometry is modelled as a tagged variant: the 32-bit and
64-bit ELF headers store the same logical fields with different widths and
byte positions, and the header's own class byte selects which layout is
authoritative.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from elfsize.core.errors import UnsupportedByteOrderError, UnsupportedClassError


_U16_MAX: int = 0xFFFF
_U32_MAX: int = 0xFFFF_FFFF
_U64_MAX: int = 0xFFFF_FFFF_FFFF_FFFF


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ElfClass(str, enum.Enum):
    """ELF bit-width variant, taken from ``e_ident[EI_CLASS]``."""
    ELF32 = "ELFCLASS32"
    ELF64 = "ELFCLASS64"

    @classmethod
    def from_ident(cls, value: int) -> ElfClass:
        """Decode the class byte.

        Raises:
            UnsupportedClassError: For anything other than 1 or 2.
        """
        if value == 1:
            return cls.ELF32
        if value == 2:
            return cls.ELF64
        raise UnsupportedClassError(value)

    @property
    def bits(self) -> int:
        return 64 if self is ElfClass.ELF64 else 32


class ByteOrder(str, enum.Enum):
    """Data encoding, taken from ``e_ident[EI_DATA]``."""
    LITTLE = "little"
    BIG = "big"

    @classmethod
    def from_ident(cls, value: int) -> ByteOrder:
        """Decode the byte-order byte.

        Raises:
            UnsupportedByteOrderError: For anything other than 1 or 2.
        """
        if value == 1:
            return cls.LITTLE
        if value == 2:
            return cls.BIG
        raise UnsupportedByteOrderError(value)

    @property
    def struct_prefix(self) -> str:
        """The :mod:`struct` byte-order character for this encoding."""
        return "<" if self is ByteOrder.LITTLE else ">"


# ---------------------------------------------------------------------------
# Section header geometry (tagged variant)
# ---------------------------------------------------------------------------

class _HeaderGeometry(BaseModel):
    """Fields of the ELF header that locate the section header table.

    Only the concrete variants are instantiated; each one declares
    ``section_header_offset`` at its class width and its ``elf_class``.
    """
    model_config = ConfigDict(frozen=True)

    byte_order: ByteOrder = ByteOrder.LITTLE
    section_header_entry_size: int = Field(default=0, ge=0, le=_U16_MAX)
    section_header_entry_count: int = Field(default=0, ge=0, le=_U16_MAX)

    @property
    def section_table_end(self) -> int:
        """Offset one-past-the-end of the section header table.

        Computed with unbounded integers; range checking is left to the
        calculator.
        """
        return (
            self.section_header_offset
            + self.section_header_entry_size * self.section_header_entry_count
        )


class ThirtyTwoBitHeader(_HeaderGeometry):
    """ELF32 geometry: ``e_shoff`` is a 32-bit word."""
    kind: Literal["elf32"] = "elf32"
    section_header_offset: int = Field(default=0, ge=0, le=_U32_MAX)

    @property
    def elf_class(self) -> ElfClass:
        return ElfClass.ELF32


class SixtyFourBitHeader(_HeaderGeometry):
    """ELF64 geometry: ``e_shoff`` is a 64-bit word."""
    kind: Literal["elf64"] = "elf64"
    section_header_offset: int = Field(default=0, ge=0, le=_U64_MAX)

    @property
    def elf_class(self) -> ElfClass:
        return ElfClass.ELF64


ElfHeader = Annotated[
    Union[ThirtyTwoBitHeader, SixtyFourBitHeader],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

class SizeReport(BaseModel):
    """Everything the command line can show about one ELF file.

    Attributes:
        path: Filesystem path the report was computed from.
        size: Logical ELF size (end of the section header table).
        elf_class: 32-bit or 64-bit.
        byte_order: Little- or big-endian.
        machine: Raw ``e_machine`` value.
        arch: Conventional architecture name for *machine*.
        header: The section header geometry the size was derived from.
    """
    path: str = ""
    size: int = 0
    elf_class: ElfClass = ElfClass.ELF64
    byte_order: ByteOrder = ByteOrder.LITTLE
    machine: int = 0
    arch: str = "unknown"
    header: Optional[ElfHeader] = None


class SectionLocation(BaseModel):
    """Where a named section lives inside the file.

    Attributes:
        name: Section name (e.g. ``.text``).
        index: Index in the section header table.
        type: Raw ``sh_type`` value.
        offset: File offset of the section contents.
        size: Length of the section contents in bytes.
    """
    name: str = ""
    index: int = 0
    type: int = 0
    offset: int = 0
    size: int = 0
