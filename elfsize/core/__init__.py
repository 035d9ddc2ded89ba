"""Size calculator, error taxonomy and data models."""

from elfsize.core.calculator import ElfSizeCalculator, compute_size
from elfsize.core.errors import (
    ElfError,
    ElfIoError,
    ElfOverflowError,
    ElfTruncatedError,
    ErrorKind,
    NotElfError,
    UnsupportedByteOrderError,
    UnsupportedClassError,
)
from elfsize.core.models import (
    ByteOrder,
    ElfClass,
    SectionLocation,
    SixtyFourBitHeader,
    SizeReport,
    ThirtyTwoBitHeader,
)

__all__ = [
    "ElfSizeCalculator",
    "compute_size",
    "ElfError",
    "ElfIoError",
    "ElfOverflowError",
    "ElfTruncatedError",
    "ErrorKind",
    "NotElfError",
    "UnsupportedByteOrderError",
    "UnsupportedClassError",
    "ByteOrder",
    "ElfClass",
    "SectionLocation",
    "SixtyFourBitHeader",
    "SizeReport",
    "ThirtyTwoBitHeader",
]
