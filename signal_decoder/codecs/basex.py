from typing import Iterable, Tuple
import base64
import binascii
import string
import urllib.parse

import base58


class CodecError(ValueError):
    """Raised when input does not fit a codec's grammar"""


HEX_DIGITS = frozenset(string.hexdigits)
BASE64_ALPHABET = frozenset(string.ascii_letters + string.digits + '+/')
BASE64_URL_ALPHABET = frozenset(string.ascii_letters + string.digits + '-_')
BASE32_ALPHABET = frozenset(string.ascii_uppercase + '234567')
BASE58_ALPHABET = frozenset(base58.BITCOIN_ALPHABET.decode('ascii'))


def _require_input(data: str) -> None:
    if not data:
        raise CodecError("nothing to decode")


def _check_alphabet(data: Iterable[str], alphabet: frozenset, name: str, offset: int = 0) -> None:
    for i, ch in enumerate(data):
        if ch not in alphabet:
            raise CodecError(f"invalid {name} alphabet character {ch!r} at position {i + offset}")


def _split_padding(data: str, name: str, block: int, max_padding: int) -> Tuple[str, int]:
    """Separate trailing '=' padding and reject '=' anywhere else"""
    body = data.rstrip('=')
    padding = len(data) - len(body)
    misplaced = body.find('=')
    if misplaced != -1:
        raise CodecError(f"misplaced {name} padding '=' at position {misplaced}")
    if padding > max_padding:
        raise CodecError(f"too much {name} padding ({padding} '=' characters)")
    if padding and len(data) % block:
        raise CodecError(f"padded {name} length {len(data)} is not a multiple of {block}")
    return body, padding


class BaseX:
    @staticmethod
    def decode_base64(data: str) -> bytes:
        """Decode standard base64; padding is mandatory"""
        _require_input(data)
        body, _ = _split_padding(data, 'base64', 4, 2)
        _check_alphabet(body, BASE64_ALPHABET, 'base64')
        if len(data) % 4:
            raise CodecError(f"length {len(data)} is not a multiple of 4")
        try:
            return base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise CodecError(f"invalid base64 data: {e}")

    @staticmethod
    def decode_base64_url(data: str) -> bytes:
        """Decode URL-safe base64 ('-' and '_'); padding is optional"""
        _require_input(data)
        body, padding = _split_padding(data, 'base64', 4, 2)
        _check_alphabet(body, BASE64_URL_ALPHABET, 'base64url')
        if not padding and len(body) % 4 == 1:
            raise CodecError(f"{len(body)} base64url characters cannot form whole bytes")
        try:
            return base64.urlsafe_b64decode(body + '=' * (-len(body) % 4))
        except binascii.Error as e:
            raise CodecError(f"invalid base64url data: {e}")

    @staticmethod
    def decode_hex(data: str) -> bytes:
        """Decode hex digit pairs, with or without a 0x prefix"""
        _require_input(data)
        digits = data[2:] if data[:2] in ('0x', '0X') else data
        if not digits:
            raise CodecError("no hex digits after the 0x prefix")
        offset = len(data) - len(digits)
        for i, ch in enumerate(digits):
            if ch not in HEX_DIGITS:
                raise CodecError(f"invalid hex digit {ch!r} at position {i + offset}")
        if len(digits) % 2:
            raise CodecError(f"odd number of hex digits ({len(digits)})")
        return bytes.fromhex(digits)

    @staticmethod
    def decode_percent(data: str) -> bytes:
        """Resolve %XX escapes; everything else passes through as UTF-8"""
        _require_input(data)
        pos = data.find('%')
        while pos != -1:
            pair = data[pos + 1:pos + 3]
            if len(pair) < 2:
                raise CodecError(f"truncated percent escape at position {pos}")
            if not all(c in HEX_DIGITS for c in pair):
                raise CodecError(f"invalid percent escape '%{pair}' at position {pos}")
            pos = data.find('%', pos + 3)
        try:
            return urllib.parse.unquote_to_bytes(data)
        except UnicodeEncodeError as e:
            raise CodecError(f"unpaired surrogate at position {e.start}")

    @staticmethod
    def encode_utf8(data: str) -> bytes:
        """UTF-8 bytes of the text itself"""
        try:
            return data.encode('utf-8')
        except UnicodeEncodeError as e:
            raise CodecError(f"unpaired surrogate at position {e.start}")

    @staticmethod
    def decode_base32(data: str) -> bytes:
        """Decode RFC 4648 base32 (case-insensitive)"""
        _require_input(data)
        body, _ = _split_padding(data, 'base32', 8, 6)
        _check_alphabet((c.upper() for c in body), BASE32_ALPHABET, 'base32')
        if len(data) % 8:
            raise CodecError(f"length {len(data)} is not a multiple of 8")
        try:
            return base64.b32decode(data, casefold=True)
        except binascii.Error as e:
            raise CodecError(f"invalid base32 data: {e}")

    @staticmethod
    def decode_base58(data: str) -> bytes:
        """Decode base58 with the Bitcoin alphabet"""
        _require_input(data)
        _check_alphabet(data, BASE58_ALPHABET, 'base58')
        try:
            return base58.b58decode(data)
        except ValueError as e:
            raise CodecError(f"invalid base58 data: {e}")
