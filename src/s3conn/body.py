"""Conversion of object bodies (streams, buffers, strings) to bytes and text."""

from __future__ import annotations

from typing import Any, Iterable

DEFAULT_CHUNK_SIZE = 64 * 1024


def _chunk_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    if isinstance(chunk, (bytes, bytearray, memoryview)):
        return bytes(chunk)
    raise TypeError(f"stream chunk must be bytes-like or str, not {type(chunk).__name__}")


def _iter_stream(stream: Any, chunk_size: int) -> Iterable[Any]:
    read = getattr(stream, "read", None)
    if callable(read):
        while True:
            chunk = read(chunk_size)
            if not chunk:
                return
            yield chunk
    else:
        yield from stream


def stream_to_bytes(stream: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Drain a readable (or an iterable of chunks) into a single buffer.

    Errors raised while reading propagate to the caller, as does TypeError for
    chunks that are neither bytes-like nor str.
    """
    return b"".join(_chunk_bytes(chunk) for chunk in _iter_stream(stream, chunk_size))


def stream_to_str(stream: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Drain a readable into a UTF-8 decoded string."""
    return stream_to_bytes(stream, chunk_size).decode("utf-8")


def _is_stream(body: Any) -> bool:
    if callable(getattr(body, "read", None)):
        return True
    return isinstance(body, Iterable) and not isinstance(body, (str, bytes, bytearray, dict))


def body_to_bytes(body: Any) -> bytes:
    """Convert a response body of any supported shape to bytes.

    Unsupported values (including None) convert to an empty buffer.
    """
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    if _is_stream(body):
        return stream_to_bytes(body)
    return b""


def body_to_str(body: Any) -> str:
    """Convert a response body of any supported shape to a UTF-8 string."""
    if isinstance(body, str):
        return body
    return body_to_bytes(body).decode("utf-8")
