"""
SrcExport Foundation: Text encoding helpers.

Text is decoded from the byte order mark when one is present, otherwise as
UTF-8 with Latin-1 as the lossless fallback. The returned encoding name is
byte-order explicit so that encoding the text back reproduces the source
BOM and byte order.
"""
import codecs
from typing import Tuple

# UTF-32 marks first: BOM_UTF32_LE starts with BOM_UTF16_LE
_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)

# Encodings whose codec does not write the mark itself
_BOM_PREFIXES = {encoding: bom for bom, encoding in _BOMS if encoding != "utf-8-sig"}


def decode_text(data: bytes) -> Tuple[str, str]:
    """Decode file content, remembering how to encode it back.

    Args:
        data: Raw file content

    Returns:
        Tuple of (text, encoding), the text without its byte order mark
    """
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            if encoding == "utf-8-sig":
                return data.decode(encoding), encoding
            return data[len(bom):].decode(encoding), encoding

    try:
        return data.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        return data.decode("latin-1"), "latin-1"


def encode_text(text: str, encoding: str) -> bytes:
    """Encode text with an encoding returned by decode_text.

    Raises:
        UnicodeEncodeError: If the encoding cannot represent the text
    """
    return _BOM_PREFIXES.get(encoding, b"") + text.encode(encoding)
