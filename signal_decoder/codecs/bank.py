from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple
import logging

from ..config import AnalyzerSettings, DEFAULT_SETTINGS
from ..utils.magic_numbers import MagicNumbers
from .basex import BaseX

logger = logging.getLogger(__name__)

PLACEHOLDER = '·'
ELLIPSIS = '…'


@dataclass(frozen=True)
class EncodingAttempt:
    """Outcome of running one codec over the raw input.

    Failed attempts only carry label, success and message.
    """
    label: str
    success: bool
    message: str
    byte_length: Optional[int] = None
    hex: Optional[str] = None
    decoded_preview: Optional[str] = None
    detected_format: Optional[str] = None

    def to_dict(self) -> Dict:
        result = {
            'label': self.label,
            'success': self.success,
            'message': self.message,
        }
        if self.success:
            result['byteLength'] = self.byte_length
            result['hex'] = self.hex
            result['decodedPreview'] = self.decoded_preview
            if self.detected_format is not None:
                result['detectedFormat'] = self.detected_format
        return result


class Codec(NamedTuple):
    label: str
    decode: Callable[[str], bytes]
    success_message: str
    sniff: bool = True      # look for file signatures in the decoded bytes


STANDARD_CODECS: Tuple[Codec, ...] = (
    Codec('Base64', BaseX.decode_base64,
          "Valid standard Base64; decoded {n} bytes."),
    Codec('Base64 (URL-safe)', BaseX.decode_base64_url,
          "Valid URL-safe Base64; decoded {n} bytes."),
    Codec('Hex', BaseX.decode_hex,
          "Valid hexadecimal; decoded {n} bytes."),
    Codec('URL percent-encoding', BaseX.decode_percent,
          "Percent escapes resolved; {n} bytes.", sniff=False),
    Codec('UTF-8', BaseX.encode_utf8,
          "Well-formed text; {n} bytes as UTF-8.", sniff=False),
)

EXTENDED_CODECS: Tuple[Codec, ...] = (
    Codec('Base32', BaseX.decode_base32,
          "Valid Base32; decoded {n} bytes."),
    Codec('Base58', BaseX.decode_base58,
          "Valid Base58 (Bitcoin alphabet); decoded {n} bytes."),
)


def codecs_for(settings: AnalyzerSettings = DEFAULT_SETTINGS) -> Tuple[Codec, ...]:
    if settings.extended_codecs:
        return STANDARD_CODECS + EXTENDED_CODECS
    return STANDARD_CODECS


def render_preview(data: bytes, limit: int = 200) -> str:
    """Decoded bytes as text, non-printables replaced by PLACEHOLDER"""
    text = data[:limit].decode('utf-8', errors='replace')
    preview = ''.join(
        ch if ch.isprintable() and ch != '�' else PLACEHOLDER
        for ch in text
    )
    if len(data) > limit:
        preview += ELLIPSIS
    return preview


def attempt(codec: Codec, text: str, settings: AnalyzerSettings = DEFAULT_SETTINGS) -> EncodingAttempt:
    """Run a single codec; grammar or decode errors become a failed attempt"""
    try:
        data = codec.decode(text)
    except ValueError as e:
        logger.debug("%s rejected input: %s", codec.label, e)
        return EncodingAttempt(label=codec.label, success=False, message=str(e))

    return EncodingAttempt(
        label=codec.label,
        success=True,
        message=codec.success_message.format(n=len(data)),
        byte_length=len(data),
        hex=data.hex(),
        decoded_preview=render_preview(data, settings.preview_limit),
        detected_format=MagicNumbers.describe(data) if codec.sniff else None,
    )


def run_decoder_bank(text: str, settings: AnalyzerSettings = DEFAULT_SETTINGS) -> Tuple[EncodingAttempt, ...]:
    """Try every configured codec against the raw text, in fixed order"""
    attempts: List[EncodingAttempt] = [attempt(codec, text, settings) for codec in codecs_for(settings)]
    logger.debug("decoder bank: %d/%d codecs succeeded",
                 sum(1 for a in attempts if a.success), len(attempts))
    return tuple(attempts)
