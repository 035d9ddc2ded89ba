"""
elfsize Error Taxonomy
=======================

Typed exceptions raised by the header decoder, the size calculator and the
section accessors.  Every failure surfaces to the caller as an
:class:`ElfError` subclass; the core never prints, never exits the process
and never substitutes a sentinel value.

The command-line layer decides how a failure is rendered (diagnostic and
non-zero exit status, or the legacy ``0`` output when explicitly requested).
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Classification of a header decoding failure."""
    IO = "io"
    TRUNCATED = "truncated"
    NOT_ELF = "not_elf"
    UNSUPPORTED_CLASS = "unsupported_class"
    UNSUPPORTED_BYTE_ORDER = "unsupported_byte_order"
    OVERFLOW = "overflow"


class ElfError(Exception):
    """Base class for every error raised while decoding an ELF header.

    Attributes:
        kind: The :class:`ErrorKind` of the failure.
    """

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ElfIoError(ElfError):
    """The byte source could not be opened or read."""

    kind = ErrorKind.IO


class ElfTruncatedError(ElfError):
    """Fewer bytes were available than a fixed-size structure requires."""

    kind = ErrorKind.TRUNCATED

    def __init__(self, what: str, offset: int, expected: int, got: int) -> None:
        super().__init__(
            f"truncated {what}: expected {expected} bytes at offset "
            f"{offset}, got {got}"
        )
        self.offset = offset
        self.expected = expected
        self.got = got


class NotElfError(ElfError):
    """The first four bytes are not the ELF magic sequence."""

    kind = ErrorKind.NOT_ELF

    def __init__(self, magic: bytes) -> None:
        super().__init__(f"bad magic number {list(magic)}")
        self.magic = magic


class UnsupportedClassError(ElfError):
    kind = ErrorKind.UNSUPPORTED_CLASS

    def __init__(self, value: int) -> None:
        super().__init__(f"unsupported elf class {value}")
        self.value = value


class UnsupportedByteOrderError(ElfError):
    kind = ErrorKind.UNSUPPORTED_BYTE_ORDER

    def __init__(self, value: int) -> None:
        super().__init__(f"unsupported elf byte order {value}")
        self.value = value


class ElfOverflowError(ElfError):
    """The computed size does not fit in an unsigned 64-bit integer."""

    kind = ErrorKind.OVERFLOW

    def __init__(self, value: int) -> None:
        super().__init__(f"computed size 0x{value:x} exceeds the 64-bit range")
        self.value = value
