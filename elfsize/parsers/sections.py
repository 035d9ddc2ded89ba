"""
ELF Section Lookup
===================

Read-only accessors for named sections: where a section lives in the file
and what it contains.  Built on the same header decode the size calculator
uses; section header entries and the section-name string table are read
on demand through the byte source.

References:
    - TIS Committee. (1995). ELF Specification, Version 1.2, "Sections".
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

from elfsize.core.errors import ElfTruncatedError
from elfsize.core.models import ElfClass, SectionLocation
from elfsize.parsers.elf_header import FileHeader, read_file_header
from elfsize.parsers.source import ByteSource, SourceLike, open_source


SHN_UNDEF: int = 0
SHT_NOBITS: int = 8

# Elf32_Shdr: 40 bytes, Elf64_Shdr: 64 bytes
_SHDR_FORMATS: dict[ElfClass, str] = {
    ElfClass.ELF32: "IIIIIIIIII",
    ElfClass.ELF64: "IIQQQQIIQQ",
}


@dataclass(frozen=True, slots=True)
class _SectionHeader:
    sh_name: int
    sh_type: int
    sh_flags: int
    sh_addr: int
    sh_offset: int
    sh_size: int
    sh_link: int
    sh_info: int
    sh_addralign: int
    sh_entsize: int


class SectionTable:
    """Section header table of one ELF file.

    Entries are decoded on first use and the table is bound to the source
    it was created from; it does not outlive that source.

    Usage::

        with ByteSource(path) as src:
            table = SectionTable(src)
            loc = table.locate(".text")
    """

    def __init__(self, source: ByteSource, header: FileHeader | None = None) -> None:
        self._source = source
        self._header = header or read_file_header(source)
        self._entries: list[_SectionHeader] | None = None
        self._names: list[str] | None = None

    @property
    def header(self) -> FileHeader:
        return self._header

    # ------------------------------------------------------------------ #
    #  Public interface
    # ------------------------------------------------------------------ #

    def names(self) -> list[str]:
        """Names of all sections, in table order."""
        if self._names is None:
            self._names = self._resolve_names()
        return list(self._names)

    def locate(self, name: str) -> Optional[SectionLocation]:
        """Return the offset and length of section *name*, or ``None``."""
        names = self.names()
        if name not in names:
            return None

        index = names.index(name)
        sh = self._load_entries()[index]
        return SectionLocation(
            name=name,
            index=index,
            type=sh.sh_type,
            offset=sh.sh_offset,
            size=sh.sh_size,
        )

    def data(self, name: str) -> Optional[bytes]:
        """Return the raw contents of section *name*, or ``None``.

        ``SHT_NOBITS`` sections (e.g. ``.bss``) occupy no file space and
        yield ``b""``.
        """
        location = self.locate(name)
        if location is None:
            return None
        if location.type == SHT_NOBITS or location.size == 0:
            return b""
        return self._source.read_at(location.offset, location.size, f"section {name}")

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    def _load_entries(self) -> list[_SectionHeader]:
        if self._entries is not None:
            return self._entries

        h = self._header
        entries: list[_SectionHeader] = []
        if h.e_shoff == 0 or h.e_shnum == 0:
            self._entries = entries
            return entries

        fmt = h.byte_order.struct_prefix + _SHDR_FORMATS[h.elf_class]
        entry_size = struct.calcsize(fmt)
        if h.e_shentsize < entry_size:
            raise ElfTruncatedError("section header", h.e_shoff, entry_size, h.e_shentsize)

        raw = self._source.read_at(h.e_shoff, h.e_shentsize * h.e_shnum, "section header table")
        for i in range(h.e_shnum):
            fields = struct.unpack_from(fmt, raw, i * h.e_shentsize)
            entries.append(_SectionHeader(*fields))

        self._entries = entries
        return entries

    def _resolve_names(self) -> list[str]:
        entries = self._load_entries()
        index = self._header.e_shstrndx
        if index == SHN_UNDEF or index >= len(entries):
            return ["" for _ in entries]

        strtab_sh = entries[index]
        strtab = self._source.read_at(strtab_sh.sh_offset, strtab_sh.sh_size, "section name table")
        return [self._read_cstring(strtab, sh.sh_name) for sh in entries]

    @staticmethod
    def _read_cstring(data: bytes, offset: int) -> str:
        if offset >= len(data):
            return ""
        end = data.find(b"\x00", offset)
        if end == -1:
            end = len(data)
        return data[offset:end].decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Convenience wrappers
# ---------------------------------------------------------------------------

def section_offset_and_length(source: SourceLike, name: str) -> Optional[tuple[int, int]]:
    """Return ``(offset, length)`` of section *name* in *source*, or ``None``."""
    with open_source(source) as src:
        location = SectionTable(src).locate(name)
    if location is None:
        return None
    return location.offset, location.size


def section_data(source: SourceLike, name: str) -> Optional[bytes]:
    """Return the contents of section *name* in *source*, or ``None``."""
    with open_source(source) as src:
        return SectionTable(src).data(name)
