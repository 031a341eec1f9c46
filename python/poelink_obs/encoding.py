# Byte buffer -> text helpers.

from __future__ import annotations
import base64
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def bytes_to_base64(buffer: BytesLike) -> str:
    """Standard (padded) base64 text for a byte buffer."""
    if not isinstance(buffer, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like buffer, got {type(buffer).__name__}")
    return base64.b64encode(bytes(buffer)).decode("ascii")
