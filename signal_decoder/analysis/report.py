from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple
import logging

from ..codecs.bank import EncodingAttempt, run_decoder_bank
from ..config import AnalyzerSettings, DEFAULT_SETTINGS
from .characters import CategoryTag, CharacterDetail, character_details
from .frequency import FrequencyEntry, rank_frequencies
from .insights import generate_insights
from .patterns import find_repeating_patterns
from .stats import aggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Immutable snapshot of everything learned about one input string"""
    text: str
    length: int
    unique_characters: int
    entropy: float
    printable_ratio: float
    categories: Mapping[CategoryTag, int]
    min_code_point: Optional[int]
    max_code_point: Optional[int]
    ascii_only: bool
    characters: Tuple[CharacterDetail, ...]
    frequencies: Tuple[FrequencyEntry, ...]
    repeating_patterns: Tuple[str, ...]
    insights: Tuple[str, ...]
    encodings: Tuple[EncodingAttempt, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Plain, JSON-ready view using the camelCase field names"""
        return {
            'text': self.text,
            'length': self.length,
            'uniqueCharacters': self.unique_characters,
            'entropy': self.entropy,
            'printableRatio': self.printable_ratio,
            'categories': {tag.value: count for tag, count in self.categories.items()},
            'minCodePoint': self.min_code_point,
            'maxCodePoint': self.max_code_point,
            'asciiOnly': self.ascii_only,
            'characters': [c.to_dict() for c in self.characters],
            'frequencies': [f.to_dict() for f in self.frequencies],
            'repeatingPatterns': list(self.repeating_patterns),
            'insights': list(self.insights),
            'encodings': [e.to_dict() for e in self.encodings],
        }


def analyze_string(text: str, settings: Optional[AnalyzerSettings] = None) -> AnalysisReport:
    """Build the full report for text.

    Pure and deterministic: identical input and settings always give an
    identical report, and nothing is shared between calls. Only a non-str
    argument is rejected; every string, including '', yields a report.
    """
    if not isinstance(text, str):
        raise TypeError(f"analyze_string expects str, got {type(text).__name__}")
    settings = settings or DEFAULT_SETTINGS

    characters = character_details(text)
    stats = aggregate(characters)
    frequencies = rank_frequencies(text)
    patterns = find_repeating_patterns(text, settings.min_pattern_length, settings.max_patterns)
    insights = generate_insights(text, stats, patterns, settings)
    encodings = run_decoder_bank(text, settings)

    logger.debug("analyzed %d code points: entropy=%.3f, %d patterns, %d insights",
                 stats.length, stats.entropy, len(patterns), len(insights))

    return AnalysisReport(
        text=text,
        length=stats.length,
        unique_characters=stats.unique_characters,
        entropy=stats.entropy,
        printable_ratio=stats.printable_ratio,
        categories=stats.categories,
        min_code_point=stats.min_code_point,
        max_code_point=stats.max_code_point,
        ascii_only=stats.ascii_only,
        characters=characters,
        frequencies=frequencies,
        repeating_patterns=patterns,
        insights=insights,
        encodings=encodings,
    )
