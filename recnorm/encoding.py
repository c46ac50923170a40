"""
Input decoding and field-level text validation.

Input bytes are decoded with ``surrogateescape`` so invalid sequences survive
decoding as lone surrogates instead of failing the read. The validator then
collapses each run of them into a single replacement character before a
Record is built. Header rows skip validation and are re-encoded byte for byte
on output.
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from charset_normalizer import from_bytes

from .rules import INPUT_ENCODING, REPLACEMENT_CHAR

logger = logging.getLogger(__name__)

_INVALID_RUN = re.compile("[\ud800-\udfff]+")
_UTF8_NAMES = ("utf_8", "utf8", "ascii")


def validate_text(value: str) -> str:
    """Return `value` unchanged if valid, else with invalid runs replaced."""
    if _INVALID_RUN.search(value) is None:
        return value
    return _INVALID_RUN.sub(REPLACEMENT_CHAR, value)


def validate_fields(fields: List[str]) -> List[str]:
    """Validate every field in place. Never fails."""
    for i, value in enumerate(fields):
        fields[i] = validate_text(value)
    return fields


def decode_input(raw: bytes, detect_encoding: bool = False) -> Tuple[str, str]:
    """
    Decode a whole input payload.

    Rules:
    - Without detection, decode as UTF-8 and leave invalid bytes for the validator.
    - With detection, take charset-normalizer's best guess; UTF-8/ASCII guesses
      are treated like no detection.
    - A guess that cannot decode the payload falls back to UTF-8.

    Returns the text and the codec name used.
    """
    decode_used = INPUT_ENCODING

    if detect_encoding and raw:
        match = from_bytes(raw).best()
        if match is not None and match.encoding.lower().replace("-", "_") not in _UTF8_NAMES:
            decode_used = match.encoding

    try:
        text = raw.decode(decode_used, errors="surrogateescape")
    except (LookupError, UnicodeDecodeError) as exc:
        logger.warning("decoding as %s failed (%s), falling back to %s", decode_used, exc, INPUT_ENCODING)
        decode_used = INPUT_ENCODING
        text = raw.decode(decode_used, errors="surrogateescape")

    return text, decode_used
