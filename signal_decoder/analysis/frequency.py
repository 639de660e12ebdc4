from dataclasses import dataclass
from typing import Dict, Tuple
from collections import Counter

from .characters import display_char


@dataclass(frozen=True)
class FrequencyEntry:
    char: str
    count: int
    percentage: float
    display: str

    def to_dict(self) -> Dict:
        return {
            'char': self.char,
            'count': self.count,
            'percentage': self.percentage,
            'display': self.display,
        }


def rank_frequencies(text: str) -> Tuple[FrequencyEntry, ...]:
    """Distinct characters by descending count.

    Counter keeps first-occurrence order and sorted() is stable, so equal
    counts stay ordered by where the character first appeared.
    """
    if not text:
        return ()

    length = len(text)
    counts = Counter(text)
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return tuple(
        FrequencyEntry(
            char=ch,
            count=count,
            percentage=100.0 * count / length,
            display=display_char(ord(ch)),
        )
        for ch, count in ranked
    )
