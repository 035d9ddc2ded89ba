import struct

import pytest


ELF_MAGIC = b"\x7fELF"

EM_X86_64 = 62
EM_ARM = 40

SHT_PROGBITS = 1
SHT_STRTAB = 3
SHT_NOBITS = 8

TEXT_CONTENTS = b"\x90" * 16
SHSTRTAB = b"\x00.text\x00.shstrtab\x00.bss\x00"


def build_ident(elf_class=2, byte_order=1, magic=ELF_MAGIC):
    return magic + bytes([elf_class, byte_order, 1, 0]) + b"\x00" * 8


def build_header(elf_class=2, byte_order=1, shoff=0, shentsize=0, shnum=0,
                 machine=EM_X86_64, shstrndx=0, phoff=0, entry=0):
    """Pack a complete ELF32/ELF64 file header record."""
    prefix = '<' if byte_order == 1 else '>'
    if elf_class == 2:
        fmt, ehsize = prefix + 'HHIQQQIHHHHHH', 64
    else:
        fmt, ehsize = prefix + 'HHIIIIIHHHHHH', 52

    body = struct.pack(
        fmt,
        2,          # e_type: ET_EXEC
        machine,
        1,          # e_version
        entry,
        phoff,
        shoff,
        0,          # e_flags
        ehsize,
        0, 0,       # e_phentsize, e_phnum
        shentsize,
        shnum,
        shstrndx,
    )
    return build_ident(elf_class, byte_order) + body


def build_image(elf_class=2, byte_order=1, trailing=b"", text_size=None):
    """Build a small but complete ELF image with .text, .shstrtab and .bss.

    Layout: header | .text (16 bytes) | .shstrtab | pad to 8 | section headers | trailing
    """
    prefix = '<' if byte_order == 1 else '>'
    if elf_class == 2:
        ehsize, shdr_fmt = 64, prefix + 'IIQQQQIIQQ'
    else:
        ehsize, shdr_fmt = 52, prefix + 'IIIIIIIIII'
    shentsize = struct.calcsize(shdr_fmt)

    text_off = ehsize
    strtab_off = text_off + len(TEXT_CONTENTS)
    shoff = strtab_off + len(SHSTRTAB)
    shoff += -shoff % 8

    sections = [
        # name, type, flags, addr, offset, size, link, info, align, entsize
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
        (SHSTRTAB.index(b".text"), SHT_PROGBITS, 6, 0x401000, text_off,
         len(TEXT_CONTENTS) if text_size is None else text_size, 0, 0, 16, 0),
        (SHSTRTAB.index(b".shstrtab"), SHT_STRTAB, 0, 0, strtab_off, len(SHSTRTAB), 0, 0, 1, 0),
        (SHSTRTAB.index(b".bss"), SHT_NOBITS, 3, 0x402000, shoff, 0x100, 0, 0, 32, 0),
    ]

    header = build_header(
        elf_class, byte_order,
        shoff=shoff, shentsize=shentsize, shnum=len(sections),
        shstrndx=2,
    )
    assert len(header) == ehsize

    image = header + TEXT_CONTENTS + SHSTRTAB
    image += b"\x00" * (shoff - len(image))
    image += b"".join(struct.pack(shdr_fmt, *sh) for sh in sections)
    return image + trailing


@pytest.fixture
def elf64_image():
    return build_image(2, 1)


@pytest.fixture
def elf32_be_image():
    return build_image(1, 2)


@pytest.fixture
def elf_file(tmp_path):
    """An ELF64 image padded with trailing garbage, written to disk."""
    path = tmp_path / "payload.bin"
    path.write_bytes(build_image(2, 1, trailing=b"\xff" * 100))
    return path
