from __future__ import annotations

import logging

from charset_normalizer import from_bytes

logger = logging.getLogger(__name__)


def decode_bytes(raw: bytes) -> str:
    """Decode an export to text, preferring UTF-8 and stripping a BOM.

    Falls back to charset-normalizer's best guess; raises ``ValueError`` when
    no encoding fits.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass
    match = from_bytes(raw).best()
    if match is None:
        raise ValueError("Unable to detect the file encoding.")
    logger.info(f"[DECODE] decoded with detected encoding {match.encoding}")
    return str(match)
