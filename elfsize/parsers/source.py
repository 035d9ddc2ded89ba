"""
Random-Access Byte Sources
===========================

The header decoder only needs "read ``length`` bytes at absolute ``offset``"
semantics.  :class:`ByteSource` normalises the inputs callers actually have
-- a filesystem path, an open binary file object, or an in-memory buffer --
behind a single :meth:`ByteSource.read_at` method, so the whole file never has
to be loaded into memory.

Failures are reported with the typed errors from :mod:`elfsize.core.errors`:
a short read raises :class:`ElfTruncatedError`, an operating-system failure
raises :class:`ElfIoError` with the original exception chained.
"""

from __future__ import annotations

import io
import os
import stat
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Generator, Union

from elfsize.core.errors import ElfIoError, ElfTruncatedError


SourceLike = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO, "ByteSource"]

_READ_CHUNK = 1 << 20


class ByteSource:
    """Uniform read-at wrapper over paths, file objects and buffers.

    Sources opened from a path are owned and closed by the wrapper; file
    objects passed in by the caller are left open.

    Usage::

        with ByteSource("/usr/bin/ls") as src:
            ident = src.read_at(0, 16, "identifier")
    """

    def __init__(self, obj: Any) -> None:
        self._buffer: memoryview | None = None
        self._file: BinaryIO | None = None
        self._owned: bool = False
        self.name: str = "<bytes>"

        if isinstance(obj, (str, os.PathLike)):
            self.name = str(obj)
            try:
                self._file = open(Path(obj), "rb")
            except OSError as exc:
                raise ElfIoError(f"cannot open {self.name}: {exc.strerror or exc}") from exc
            self._owned = True
        elif isinstance(obj, (bytes, bytearray, memoryview)):
            self._buffer = memoryview(obj).cast("B")
        elif hasattr(obj, "read") and hasattr(obj, "seek"):
            self._file = obj
            self.name = str(getattr(obj, "name", "<stream>"))
        else:
            raise TypeError(
                f"'{obj.__class__.__name__}' is not a path, buffer or "
                "seekable binary stream"
            )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.name})>"

    def __enter__(self) -> ByteSource:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying file if this wrapper opened it."""
        if self._owned and self._file is not None:
            self._file.close()
            self._file = None
            self._owned = False

    # ------------------------------------------------------------------ #
    #  Reading
    # ------------------------------------------------------------------ #

    def read_at(self, offset: int, length: int, what: str = "data") -> bytes:
        """Read exactly *length* bytes starting at absolute *offset*.

        Args:
            offset: Absolute byte offset.
            length: Number of bytes required.
            what:   Name of the structure being read, used in error messages.

        Returns:
            Exactly *length* bytes.

        Raises:
            ElfTruncatedError: Fewer than *length* bytes are available.
            ElfIoError: The underlying medium failed.
        """
        if offset < 0 or length < 0:
            raise ValueError(f"invalid range offset={offset} length={length}")

        if self._buffer is not None:
            data = bytes(self._buffer[offset:offset + length])
        else:
            data = self._read_file(offset, length, what)

        if len(data) != length:
            raise ElfTruncatedError(what, offset, length, len(data))
        return data

    def _file_size(self) -> int | None:
        """Size of a regular file behind the stream, or ``None`` if unknown."""
        try:
            st = os.fstat(self._file.fileno())
        except (AttributeError, io.UnsupportedOperation):
            return None
        return st.st_size if stat.S_ISREG(st.st_mode) else None

    def _read_file(self, offset: int, length: int, what: str) -> bytes:
        if self._file is None:
            raise ElfIoError(f"{self.name} is closed")

        try:
            size = self._file_size()
            # Lengths come from untrusted headers; never ask read() for more than exists
            if size is not None and offset + length > size:
                raise ElfTruncatedError(what, offset, length, max(size - offset, 0))

            self._file.seek(offset)
            chunks: list[bytes] = []
            remaining = length
            # Raw (unbuffered) streams may return short reads before EOF
            while remaining > 0:
                chunk = self._file.read(min(remaining, _READ_CHUNK))
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        except OSError as exc:
            raise ElfIoError(f"cannot read {self.name}: {exc}") from exc
        except (ValueError, OverflowError) as exc:
            # closed file object, or an offset beyond what seek() accepts
            raise ElfIoError(f"cannot read {self.name}: {exc}") from exc

        return b"".join(chunks)


@contextmanager
def open_source(obj: SourceLike) -> Generator[ByteSource, None, None]:
    """Yield a :class:`ByteSource` for *obj*, closing it afterwards if opened here.

    An existing :class:`ByteSource` is yielded unchanged and left open.
    """
    if isinstance(obj, ByteSource):
        yield obj
        return

    source = ByteSource(obj)
    try:
        yield source
    finally:
        source.close()
