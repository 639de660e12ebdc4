from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple
import string
import unicodedata


class CategoryTag(Enum):
    """Character classes; every code point lands in exactly one"""
    DIGIT = 'Digits'
    UPPERCASE = 'Uppercase'
    LOWERCASE = 'Lowercase'
    WHITESPACE = 'Whitespace'
    SYMBOL = 'Punctuation & Symbols'
    OTHER = 'Other / Unicode'


_ASCII_PUNCTUATION = frozenset(ord(c) for c in string.punctuation)


def is_whitespace(code_point: int) -> bool:
    # str.isspace() also accepts the C0 information separators U+001C..U+001F
    return chr(code_point).isspace() and not 0x1C <= code_point <= 0x1F


# Evaluated top to bottom, first match wins. OTHER is the fallback.
CLASSIFICATION_RULES: List[Tuple[Callable[[int], bool], CategoryTag]] = [
    (lambda cp: 0x30 <= cp <= 0x39, CategoryTag.DIGIT),
    (lambda cp: 0x41 <= cp <= 0x5A, CategoryTag.UPPERCASE),
    (lambda cp: 0x61 <= cp <= 0x7A, CategoryTag.LOWERCASE),
    (is_whitespace, CategoryTag.WHITESPACE),
    (lambda cp: cp in _ASCII_PUNCTUATION, CategoryTag.SYMBOL),
]

# Visible stand-ins for characters that would otherwise render as nothing
_DISPLAY_OVERRIDES: Dict[int, str] = {
    0x09: '⇥',
    0x0A: '↵',
    0x0D: '␍',
    0x20: '␠',
    0x7F: '␡',
    0xA0: '⍽',
}


@dataclass(frozen=True)
class CharacterDetail:
    index: int
    code_point: int
    display: str
    hex_code: str
    binary_code: str
    category: CategoryTag

    def to_dict(self) -> Dict:
        return {
            'index': self.index,
            'codePoint': self.code_point,
            'display': self.display,
            'hexCode': self.hex_code,
            'binaryCode': self.binary_code,
            'category': self.category.value,
        }


def decompose(text: str) -> Tuple[Tuple[int, int], ...]:
    """Split text into (index, code point) pairs in original order"""
    return tuple((i, ord(ch)) for i, ch in enumerate(text))


def classify(code_point: int) -> CategoryTag:
    """Map a code point to its category via CLASSIFICATION_RULES"""
    for predicate, tag in CLASSIFICATION_RULES:
        if predicate(code_point):
            return tag
    return CategoryTag.OTHER


def display_char(code_point: int) -> str:
    """Printable rendering of a single code point"""
    if code_point in _DISPLAY_OVERRIDES:
        return _DISPLAY_OVERRIDES[code_point]
    if code_point < 0x20:
        # Unicode Control Pictures block mirrors C0 controls
        return chr(0x2400 + code_point)
    ch = chr(code_point)
    if 0xD800 <= code_point <= 0xDFFF:
        return '�'
    if unicodedata.combining(ch):
        return '◌' + ch
    if ch.isspace():
        return '␣'
    return ch


def hex_code(code_point: int) -> str:
    return f"U+{code_point:04X}"


def binary_code(code_point: int) -> str:
    """Binary form zero-padded to whole bytes"""
    bits = max(8, code_point.bit_length())
    width = (bits + 7) // 8 * 8
    return format(code_point, f'0{width}b')


def describe(index: int, code_point: int) -> CharacterDetail:
    return CharacterDetail(
        index=index,
        code_point=code_point,
        display=display_char(code_point),
        hex_code=hex_code(code_point),
        binary_code=binary_code(code_point),
        category=classify(code_point),
    )


def character_details(text: str) -> Tuple[CharacterDetail, ...]:
    """Decompose and classify every code point of text"""
    return tuple(describe(i, cp) for i, cp in decompose(text))
