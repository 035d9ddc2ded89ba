"""
elfsize -- ELF Size Oracle
===========================

Computes the size of an ELF binary from the information in its own header:
the offset one byte past the end of the section header table.  Useful when
an ELF payload is embedded in, or padded by, a larger file.

Capabilities:
    - ELF32 / ELF64, little- and big-endian header decoding
    - Typed errors for truncated, non-ELF and unsupported input
    - Conventional architecture names from ``e_machine``
    - Section offset/length and contents lookup by name
    - ``elfsize`` command line with plain, JSON and table output

References:
    - TIS Committee. (1995). ELF Specification, Version 1.2.
"""

from elfsize.core.calculator import ElfSizeCalculator, compute_size
from elfsize.core.errors import ElfError

__version__ = "1.0.0"
__all__ = [
    "ElfSizeCalculator",
    "compute_size",
    "ElfError",
]
