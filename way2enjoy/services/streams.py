"""Helpers for reading response bodies to exhaustion.

Payloads are buffered completely in memory before they are decoded or
written, so a file on disk is only ever created from a full body.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterable

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024


def drain_to_bytes(chunks: Iterable[bytes]) -> bytes:
    buffer = bytearray()
    for chunk in chunks:
        buffer.extend(chunk)
    return bytes(buffer)


def _iter_chunks(stream: BinaryIO, chunk_size: int) -> Iterable[bytes]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk


def drain_to_string(stream: BinaryIO | None, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str | None:
    """Read *stream* to the end and decode it as UTF-8.

    Invalid byte sequences become U+FFFD instead of raising.
    """

    if stream is None:
        return None
    return drain_to_bytes(_iter_chunks(stream, chunk_size)).decode("utf-8", errors="replace")


def drain_to_file(
    stream: BinaryIO | None,
    path: str | Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Read *stream* to the end and write the whole payload to *path*.

    The stream is left at EOF. Returns the number of bytes written.
    """

    if stream is None:
        return 0
    data = drain_to_bytes(_iter_chunks(stream, chunk_size))
    Path(path).write_bytes(data)
    logger.debug("Wrote %d bytes to %s", len(data), path)
    return len(data)
