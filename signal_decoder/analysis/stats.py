from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Sequence
from collections import Counter
import math

from .characters import CategoryTag, CharacterDetail


@dataclass(frozen=True)
class TextStatistics:
    length: int
    unique_characters: int
    categories: Mapping[CategoryTag, int]
    min_code_point: Optional[int]
    max_code_point: Optional[int]
    ascii_only: bool
    printable_ratio: float
    entropy: float


def calculate_entropy(code_points: Sequence[int]) -> float:
    """Shannon entropy in bits per symbol"""
    length = len(code_points)
    if length <= 1:
        return 0.0

    entropy = 0.0
    for count in Counter(code_points).values():
        p = count / length
        entropy -= p * math.log2(p)
    # A single repeated symbol yields -0.0
    return max(entropy, 0.0)


def is_printable_ascii(code_point: int) -> bool:
    return 0x20 <= code_point <= 0x7E


def aggregate(characters: Sequence[CharacterDetail]) -> TextStatistics:
    """Summarize classified characters into counts, extrema and entropy"""
    code_points = [c.code_point for c in characters]
    length = len(code_points)

    tag_counts = Counter(c.category for c in characters)
    # Enum order keeps the mapping stable for identical input
    categories = {tag: tag_counts[tag] for tag in CategoryTag if tag_counts[tag]}

    printable = sum(1 for cp in code_points if is_printable_ascii(cp))

    return TextStatistics(
        length=length,
        unique_characters=len(set(code_points)),
        categories=MappingProxyType(categories),
        min_code_point=min(code_points) if code_points else None,
        max_code_point=max(code_points) if code_points else None,
        ascii_only=all(cp <= 127 for cp in code_points),
        printable_ratio=printable / length if length else 0.0,
        entropy=calculate_entropy(code_points),
    )
