"""Byte-order-mark aware text decoding for engine payloads."""

from __future__ import annotations

import codecs


def decode_text(data: bytes) -> str:
    """Decode `data` as UTF-16 when it starts with a UTF-16 BOM, else UTF-8.

    A UTF-8 BOM is dropped. Invalid bytes raise UnicodeDecodeError.
    """
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16")
    return data.decode("utf-8-sig")


__all__ = ["decode_text"]
