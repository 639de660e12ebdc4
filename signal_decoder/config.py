from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

# (hex length, digest name) pairs; stored as a tuple so settings stay hashable
DigestLengths = Tuple[Tuple[int, str], ...]

DEFAULT_DIGEST_LENGTHS: DigestLengths = ((32, 'MD5'), (40, 'SHA-1'), (64, 'SHA-256'), (128, 'SHA-512'))


@dataclass(frozen=True)
class AnalyzerSettings:
    """Tunable knobs for the analysis engine.

    The thresholds are heuristics, not contracts. They only change which
    insights fire and how much of the pattern/decoder output is kept.
    digest_lengths accepts a mapping or (length, name) pairs and is
    normalised to a sorted tuple of pairs.
    """
    min_pattern_length: int = 2         # shortest repeating fragment reported
    max_patterns: int = 6               # cap on repeating fragments
    preview_limit: int = 200            # bytes shown in a decoded preview
    high_entropy_threshold: float = 4.5
    low_entropy_threshold: float = 2.0
    low_entropy_min_length: int = 8
    digest_lengths: Union[DigestLengths, Mapping[int, str]] = DEFAULT_DIGEST_LENGTHS
    extended_codecs: bool = False       # append Base32/Base58 to the decoder bank

    def __post_init__(self):
        if self.min_pattern_length < 2:
            raise ValueError("min_pattern_length must be at least 2")
        if self.max_patterns < 0:
            raise ValueError("max_patterns must not be negative")
        if self.preview_limit < 1:
            raise ValueError("preview_limit must be positive")
        object.__setattr__(self, 'digest_lengths', tuple(sorted(dict(self.digest_lengths).items())))

    def digest_name(self, length: int) -> Optional[str]:
        for digest_length, name in self.digest_lengths:
            if digest_length == length:
                return name
        return None


DEFAULT_SETTINGS = AnalyzerSettings()
