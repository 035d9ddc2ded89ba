"""
ELF Machine Names
==================

Maps the ``e_machine`` header field to the architecture names packaging
tools conventionally use (``x86_64``, ``i686``, ``armhf``, ``aarch64``).
Machines without a conventional name report their ``EM_*`` symbol.

References:
    - System V Application Binary Interface, Edition 4.1, "Machine".
    - Linux ``include/uapi/linux/elf-em.h``.
"""

from __future__ import annotations

from elfsize.parsers.elf_header import read_file_header
from elfsize.parsers.source import SourceLike, open_source


EM_NONE: int = 0
EM_SPARC: int = 2
EM_386: int = 3
EM_68K: int = 4
EM_MIPS: int = 8
EM_PARISC: int = 15
EM_SPARC32PLUS: int = 18
EM_PPC: int = 20
EM_PPC64: int = 21
EM_S390: int = 22
EM_ARM: int = 40
EM_SH: int = 42
EM_SPARCV9: int = 43
EM_IA_64: int = 50
EM_X86_64: int = 62
EM_AVR: int = 83
EM_XTENSA: int = 94
EM_AARCH64: int = 183
EM_RISCV: int = 243
EM_BPF: int = 247
EM_LOONGARCH: int = 258

_EM_SYMBOLS: dict[int, str] = {
    EM_NONE: "EM_NONE",
    EM_SPARC: "EM_SPARC",
    EM_386: "EM_386",
    EM_68K: "EM_68K",
    EM_MIPS: "EM_MIPS",
    EM_PARISC: "EM_PARISC",
    EM_SPARC32PLUS: "EM_SPARC32PLUS",
    EM_PPC: "EM_PPC",
    EM_PPC64: "EM_PPC64",
    EM_S390: "EM_S390",
    EM_ARM: "EM_ARM",
    EM_SH: "EM_SH",
    EM_SPARCV9: "EM_SPARCV9",
    EM_IA_64: "EM_IA_64",
    EM_X86_64: "EM_X86_64",
    EM_AVR: "EM_AVR",
    EM_XTENSA: "EM_XTENSA",
    EM_AARCH64: "EM_AARCH64",
    EM_RISCV: "EM_RISCV",
    EM_BPF: "EM_BPF",
    EM_LOONGARCH: "EM_LOONGARCH",
}

# Why does everyone name architectures differently?
_CONVENTIONAL_NAMES: dict[int, str] = {
    EM_X86_64: "x86_64",
    EM_386: "i686",
    EM_ARM: "armhf",
    EM_AARCH64: "aarch64",
}


def machine_symbol(machine: int) -> str:
    """Return the ``EM_*`` symbol for *machine*, or ``unknown(<n>)``."""
    return _EM_SYMBOLS.get(machine, f"unknown({machine})")


def architecture_name(machine: int) -> str:
    """Return the conventional architecture name for *machine*.

    >>> architecture_name(EM_X86_64)
    'x86_64'
    >>> architecture_name(EM_MIPS)
    'EM_MIPS'
    """
    return _CONVENTIONAL_NAMES.get(machine, machine_symbol(machine))


def read_architecture(source: SourceLike) -> str:
    """Decode the header of *source* and return its architecture name."""
    with open_source(source) as src:
        header = read_file_header(src)
    return architecture_name(header.e_machine)
