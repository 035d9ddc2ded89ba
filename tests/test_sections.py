import pytest
from click.testing import CliRunner

from elfsize import compute_size
from elfsize.cli import elfsize_cli
from elfsize.core.errors import ElfTruncatedError
from elfsize.parsers.sections import SectionTable, section_data, section_offset_and_length
from elfsize.parsers.source import ByteSource

from conftest import SHSTRTAB, TEXT_CONTENTS, build_header, build_image


def test_section_names(elf64_image):
    table = SectionTable(ByteSource(elf64_image))

    assert table.names() == ['', '.text', '.shstrtab', '.bss']


def test_locate_section(elf64_image):
    location = SectionTable(ByteSource(elf64_image)).locate('.text')

    assert location.index == 1
    assert location.offset == 64
    assert location.size == len(TEXT_CONTENTS)


def test_section_data_both_classes(elf64_image, elf32_be_image):
    assert section_data(elf64_image, '.text') == TEXT_CONTENTS
    assert section_data(elf32_be_image, '.text') == TEXT_CONTENTS
    assert section_data(elf32_be_image, '.shstrtab') == SHSTRTAB


def test_nobits_section_has_no_data(elf64_image):
    assert section_data(elf64_image, '.bss') == b""
    assert section_offset_and_length(elf64_image, '.bss')[1] == 0x100


def test_missing_section(elf64_image):
    assert section_offset_and_length(elf64_image, '.debug_info') is None
    assert section_data(elf64_image, '.debug_info') is None


def test_sections_from_path(elf_file):
    assert section_offset_and_length(elf_file, '.text') == (64, 16)


def test_section_lookup_agrees_with_size(elf32_be_image):
    """The section header table ends exactly where the computed size says."""
    table = SectionTable(ByteSource(elf32_be_image))
    h = table.header

    assert compute_size(elf32_be_image) == 256 == h.e_shoff + h.e_shentsize * h.e_shnum


def test_no_section_table():
    table = SectionTable(ByteSource(build_header()))

    assert table.names() == []
    assert table.locate('.text') is None


def test_truncated_section_table():
    image = build_image(2, 1)

    with pytest.raises(ElfTruncatedError):
        SectionTable(ByteSource(image[:-10])).names()


def test_entry_size_too_small():
    raw = build_header(shoff=64, shentsize=16, shnum=1)

    with pytest.raises(ElfTruncatedError):
        SectionTable(ByteSource(raw + b"\x00" * 16)).names()


@pytest.fixture
def oversized_text(tmp_path):
    """.text claims 64 TiB in a file of a few hundred bytes."""
    path = tmp_path / "oversized.bin"
    path.write_bytes(build_image(2, 1, text_size=1 << 46))
    return path


def test_oversized_section_is_truncated(oversized_text):
    with pytest.raises(ElfTruncatedError) as excinfo:
        section_data(oversized_text, '.text')

    assert excinfo.value.expected == 1 << 46
    assert excinfo.value.got == 360 - 64


def test_oversized_section_from_stream(oversized_text):
    with open(oversized_text, 'rb') as fh:
        with pytest.raises(ElfTruncatedError):
            section_data(fh, '.text')


def test_dump_oversized_section(oversized_text):
    result = CliRunner().invoke(elfsize_cli, [str(oversized_text), '--dump-section', '.text'])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert 'ERROR elfsize: truncated section .text' in result.output
