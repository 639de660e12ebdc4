from typing import Dict, List, Tuple
import logging

from .characters import is_whitespace

logger = logging.getLogger(__name__)


def _repeats_at(text: str, k: int, first_only: bool = False) -> List[int]:
    """Start offsets of length-k fragments seen at least twice.

    Each repeated fragment is reported once, by its first occurrence, and
    the offsets come back sorted. Whitespace-only fragments are skipped.
    Fragments are keyed by hash and confirmed in place, so only O(len(text))
    offsets are held at a time.
    """
    seen: Dict[int, List[int]] = {}   # hash -> first offsets of distinct fragments
    repeated = set()
    for start in range(len(text) - k + 1):
        fragment = text[start:start + k]
        firsts = seen.setdefault(hash(fragment), [])
        for first in firsts:
            if text.startswith(fragment, first):
                if first not in repeated and not all(is_whitespace(ord(c)) for c in fragment):
                    repeated.add(first)
                    if first_only:
                        return [first]
                break
        else:
            firsts.append(start)
    return sorted(repeated)


def _longest_repeat(text: str, low: int, high: int) -> int:
    """Largest k in [low, high] with a repeated fragment, or 0.

    A repeated fragment of length k contains a repeated, non-whitespace
    fragment of length k - 1 (its prefix or suffix), so the search is monotone.
    """
    if high < low or not _repeats_at(text, low, first_only=True):
        return 0
    while low < high:
        mid = (low + high + 1) // 2
        if _repeats_at(text, mid, first_only=True):
            low = mid
        else:
            high = mid - 1
    return low


def find_repeating_patterns(text: str, min_length: int = 2, max_patterns: int = 6) -> Tuple[str, ...]:
    """Find substrings that occur at least twice.

    Lengths from min_length up to len(text) // 2 qualify and occurrences
    are counted with overlaps ("aaa" holds "aa" twice). Fragments made only
    of whitespace are skipped. Results are ordered longest first, then by
    first occurrence, and capped at max_patterns. Only the longest lengths
    needed to fill the cap are scanned in full.
    """
    if min_length < 2:
        raise ValueError("min_length must be at least 2")
    if max_patterns <= 0:
        return ()

    longest = _longest_repeat(text, min_length, len(text) // 2)
    if not longest:
        return ()

    patterns: List[str] = []
    scanned = 0
    for k in range(longest, min_length - 1, -1):
        scanned += 1
        for start in _repeats_at(text, k):
            patterns.append(text[start:start + k])
            if len(patterns) == max_patterns:
                break
        if len(patterns) == max_patterns:
            break

    logger.debug("longest repeat %d, scanned %d lengths, kept %d fragments",
                 longest, scanned, len(patterns))
    return tuple(patterns)
