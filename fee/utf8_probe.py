"""Streaming UTF-8 validity check used to pick an editor for a file.

The file is read in small fixed-size chunks and never held in memory as a
whole. A multi-byte character split across two chunks is carried over to
the next read instead of being treated as invalid.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from pathlib import Path

from .errors import FilesystemError

CHUNK_SIZE = 128


def read_chunks(path: Path, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield successive ``chunk_size`` reads of ``path`` until EOF."""
    try:
        with path.open("rb") as handle:
            while True:
                chunk = handle.read(chunk_size)
                if not chunk:
                    return
                yield chunk
    except OSError as exc:
        raise FilesystemError(path, exc.strerror or str(exc)) from exc


def is_valid_utf8_stream(chunks: Iterator[bytes]) -> bool:
    """Return whether the concatenation of ``chunks`` is valid UTF-8.

    The incremental decoder keeps an incomplete trailing sequence pending
    between chunks and only raises for bytes that can never become valid.
    Bytes still pending at the end mean the input was truncated.
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
    try:
        for chunk in chunks:
            decoder.decode(chunk, final=False)
        decoder.decode(b"", final=True)
    except UnicodeDecodeError:
        return False
    return True


def is_text(path: Path, chunk_size: int = CHUNK_SIZE) -> bool:
    """Return ``True`` when ``path`` holds valid UTF-8 (the empty file included).

    Read errors raise :class:`FilesystemError`; they are never downgraded to
    a text/binary guess.
    """
    return is_valid_utf8_stream(read_chunks(path, chunk_size))
