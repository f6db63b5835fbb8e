"""Tests for text decoding and encoding helpers."""

import codecs

import pytest

from srcexport.core.encoding import decode_text, encode_text


class TestDecodeText:
    """Test decode_text/encode_text."""

    def test_utf8(self):
        """Decodes plain UTF-8 content."""
        text, encoding = decode_text("héllo".encode("utf-8"))

        assert text == "héllo"
        assert encoding == "utf-8"

    def test_utf8_bom_kept(self):
        """Strips and restores the UTF-8 byte order mark."""
        data = codecs.BOM_UTF8 + b"<Project />"

        text, encoding = decode_text(data)

        assert text == "<Project />"
        assert encode_text(text, encoding) == data

    @pytest.mark.parametrize(
        "bom,codec,encoding",
        [
            (codecs.BOM_UTF16_LE, "utf-16-le", "utf-16-le"),
            (codecs.BOM_UTF16_BE, "utf-16-be", "utf-16-be"),
            (codecs.BOM_UTF32_LE, "utf-32-le", "utf-32-le"),
            (codecs.BOM_UTF32_BE, "utf-32-be", "utf-32-be"),
        ],
    )
    def test_byte_order_kept(self, bom, codec, encoding):
        """Keeps the byte order of marked UTF-16 and UTF-32 content."""
        data = bom + "Microsoft Visual Studio\r\n".encode(codec)

        text, detected = decode_text(data)

        assert text == "Microsoft Visual Studio\r\n"
        assert detected == encoding
        assert encode_text(text, detected) == data

    def test_latin1_fallback(self):
        """Falls back to Latin-1 for undecodable UTF-8."""
        data = "café".encode("latin-1")

        text, encoding = decode_text(data)

        assert encoding == "latin-1"
        assert encode_text(text, encoding) == data

    def test_unrepresentable_text(self):
        """Raises when the source encoding cannot hold the text."""
        with pytest.raises(UnicodeEncodeError):
            encode_text("Acme €", "latin-1")
