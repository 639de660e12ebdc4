import base64

import base58
import pytest

from signal_decoder.codecs.bank import (
    EXTENDED_CODECS, STANDARD_CODECS, attempt, render_preview, run_decoder_bank,
)
from signal_decoder.codecs.basex import BaseX, CodecError

STANDARD_LABELS = ['Base64', 'Base64 (URL-safe)', 'Hex', 'URL percent-encoding', 'UTF-8']


def by_label(attempts):
    return {a.label: a for a in attempts}


class TestBank:
    def test_fixed_order(self, settings):
        assert [a.label for a in run_decoder_bank("abc", settings)] == STANDARD_LABELS

    def test_extended_order(self, extended_settings):
        labels = [a.label for a in run_decoder_bank("abc", extended_settings)]
        assert labels == STANDARD_LABELS + ['Base32', 'Base58']

    def test_empty_input(self, settings):
        attempts = by_label(run_decoder_bank("", settings))
        for label in STANDARD_LABELS[:-1]:
            assert not attempts[label].success
            assert attempts[label].message == "nothing to decode"
        utf8 = attempts['UTF-8']
        assert utf8.success
        assert utf8.byte_length == 0
        assert utf8.hex == ""
        assert utf8.decoded_preview == ""

    def test_failure_carries_no_payload(self, settings):
        failed = by_label(run_decoder_bank("xyz!", settings))['Hex']
        assert not failed.success
        assert failed.byte_length is None
        assert failed.hex is None
        assert failed.decoded_preview is None
        assert failed.to_dict() == {'label': 'Hex', 'success': False, 'message': failed.message}

    def test_one_failure_does_not_block_others(self, settings):
        attempts = by_label(run_decoder_bank("aGVsbG8=", settings))
        assert attempts['Base64'].success
        assert not attempts['Hex'].success
        assert attempts['UTF-8'].success

    def test_unpaired_surrogate_never_crashes(self, settings):
        attempts = by_label(run_decoder_bank("\ud800", settings))
        assert all(not a.success for a in attempts.values())
        assert "unpaired surrogate at position 0" in attempts['UTF-8'].message

    def test_detected_format(self, settings):
        payload = b"\x89PNG\r\n\x1a\n" + bytes(8)
        result = attempt(STANDARD_CODECS[0], base64.b64encode(payload).decode(), settings)
        assert result.detected_format == "PNG image"
        assert result.to_dict()['detectedFormat'] == "PNG image"

    def test_passthrough_codecs_do_not_sniff(self, settings):
        # "BZh" is the bzip2 signature, but these rows only re-encode the text
        attempts = by_label(run_decoder_bank("BZh91AYtoken", settings))
        for label in ('URL percent-encoding', 'UTF-8'):
            assert attempts[label].success
            assert attempts[label].detected_format is None
            assert 'detectedFormat' not in attempts[label].to_dict()

    def test_hex_still_sniffs(self, settings):
        result = by_label(run_decoder_bank(b"BZh91AY".hex(), settings))['Hex']
        assert result.detected_format == "BZIP2 stream"


class TestBase64:
    def test_round_trip_every_byte_value(self, settings):
        payload = bytes(range(256))
        result = attempt(STANDARD_CODECS[0], base64.b64encode(payload).decode(), settings)
        assert result.success
        assert result.byte_length == 256
        assert bytes.fromhex(result.hex) == payload

    def test_preview(self):
        assert BaseX.decode_base64("aGVsbG8=") == b"hello"

    def test_padding_required(self):
        with pytest.raises(CodecError, match="length 7 is not a multiple of 4"):
            BaseX.decode_base64("aGVsbG8")

    def test_invalid_character_position(self):
        with pytest.raises(CodecError, match="invalid base64 alphabet character '!' at position 3"):
            BaseX.decode_base64("aGV!bG8=")

    def test_misplaced_padding(self):
        with pytest.raises(CodecError, match="misplaced base64 padding '=' at position 1"):
            BaseX.decode_base64("a=bc")

    def test_too_much_padding(self):
        with pytest.raises(CodecError, match="too much base64 padding"):
            BaseX.decode_base64("a===")

    def test_url_safe_alphabet_rejected(self):
        with pytest.raises(CodecError, match="'-' at position 0"):
            BaseX.decode_base64("-_-_")


class TestBase64Url:
    def test_padding_optional(self):
        assert BaseX.decode_base64_url("aGVsbG8") == b"hello"
        assert BaseX.decode_base64_url("aGVsbG8=") == b"hello"

    def test_url_alphabet(self):
        payload = b"\xfb\xff\xbf"
        encoded = base64.urlsafe_b64encode(payload).decode()
        assert encoded == "-_-_"
        assert BaseX.decode_base64_url(encoded) == payload

    def test_standard_alphabet_rejected(self):
        with pytest.raises(CodecError, match="invalid base64url alphabet character '\\+' at position 0"):
            BaseX.decode_base64_url("+/+/")

    def test_dangling_character(self):
        with pytest.raises(CodecError, match="cannot form whole bytes"):
            BaseX.decode_base64_url("abcde")


class TestHex:
    def test_round_trip(self, settings):
        payload = b"\x00\xffhello\x7f"
        result = attempt(STANDARD_CODECS[2], payload.hex().upper(), settings)
        assert result.success
        assert result.byte_length == len(payload)
        assert result.hex == payload.hex()

    def test_prefix(self):
        assert BaseX.decode_hex("0xDEADbeef") == b"\xde\xad\xbe\xef"

    def test_odd_length(self):
        with pytest.raises(CodecError, match=r"odd number of hex digits \(3\)"):
            BaseX.decode_hex("abc")

    def test_invalid_digit(self):
        with pytest.raises(CodecError, match="invalid hex digit 'z' at position 2"):
            BaseX.decode_hex("abzz")

    def test_prefix_only(self):
        with pytest.raises(CodecError, match="no hex digits"):
            BaseX.decode_hex("0x")


class TestPercent:
    def test_escapes_and_literals(self):
        assert BaseX.decode_percent("hello%20world") == b"hello world"
        assert BaseX.decode_percent("%E2%82%AC") == "€".encode()

    def test_plain_text_passes_through(self):
        assert BaseX.decode_percent("abc") == b"abc"

    def test_truncated_escape(self):
        with pytest.raises(CodecError, match="truncated percent escape at position 3"):
            BaseX.decode_percent("100%")
        with pytest.raises(CodecError, match="truncated percent escape at position 2"):
            BaseX.decode_percent("ab%4")

    def test_invalid_escape(self):
        with pytest.raises(CodecError, match="invalid percent escape '%zz' at position 0"):
            BaseX.decode_percent("%zz")
        with pytest.raises(CodecError, match="invalid percent escape '%4g' at position 1"):
            BaseX.decode_percent("a%4g")


class TestUtf8:
    def test_multibyte(self, settings):
        result = attempt(STANDARD_CODECS[4], "é", settings)
        assert result.success
        assert result.byte_length == 2
        assert result.hex == "c3a9"
        assert result.decoded_preview == "é"


class TestExtended:
    def test_base32(self):
        encoded = base64.b32encode(b"hello").decode()
        assert BaseX.decode_base32(encoded) == b"hello"
        assert BaseX.decode_base32(encoded.lower()) == b"hello"

    def test_base32_invalid(self):
        with pytest.raises(CodecError, match="invalid base32 alphabet character '1' at position 0"):
            BaseX.decode_base32("1BSWY3DP")

    def test_base58(self):
        encoded = base58.b58encode(b"hello").decode()
        assert BaseX.decode_base58(encoded) == b"hello"

    def test_base58_invalid(self):
        with pytest.raises(CodecError, match="invalid base58 alphabet character '0' at position 1"):
            BaseX.decode_base58("a0")

    def test_labels(self):
        assert [c.label for c in EXTENDED_CODECS] == ['Base32', 'Base58']


class TestPreview:
    def test_non_printable_placeholder(self):
        assert render_preview(b"\x00abc\n") == "·abc·"

    def test_invalid_utf8(self):
        assert render_preview(b"\xffok") == "·ok"

    def test_truncation(self):
        assert render_preview(b"a" * 300, 200) == "a" * 200 + "…"
        assert render_preview(b"a" * 200, 200) == "a" * 200
