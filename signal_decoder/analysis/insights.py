from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple
import string

from ..config import AnalyzerSettings, DEFAULT_SETTINGS
from .characters import CategoryTag, is_whitespace
from .stats import TextStatistics

HEX_DIGITS = frozenset(string.hexdigits)
SEPARATORS = frozenset('-_')


@dataclass(frozen=True)
class InsightContext:
    """Everything an insight rule may look at"""
    text: str
    stats: TextStatistics
    patterns: Sequence[str]
    settings: AnalyzerSettings


def _has(ctx: InsightContext, tag: CategoryTag) -> bool:
    return ctx.stats.categories.get(tag, 0) > 0


def _digest_name(ctx: InsightContext) -> Optional[str]:
    if not ctx.stats.ascii_only or not all(c in HEX_DIGITS for c in ctx.text):
        return None
    return ctx.settings.digest_name(ctx.stats.length)


def _is_high_entropy(ctx: InsightContext) -> bool:
    return ctx.stats.entropy >= ctx.settings.high_entropy_threshold


def _is_low_entropy(ctx: InsightContext) -> bool:
    return (ctx.stats.length >= ctx.settings.low_entropy_min_length
            and ctx.stats.entropy < ctx.settings.low_entropy_threshold)


def _is_numeric(ctx: InsightContext) -> bool:
    return ctx.stats.categories.get(CategoryTag.DIGIT, 0) == ctx.stats.length


def _looks_like_slug(ctx: InsightContext) -> bool:
    has_separator = any(c in SEPARATORS for c in ctx.text)
    has_alnum = any(_has(ctx, tag) for tag in (CategoryTag.DIGIT, CategoryTag.UPPERCASE, CategoryTag.LOWERCASE))
    return has_separator and has_alnum


def _is_mixed_case_token(ctx: InsightContext) -> bool:
    return all(_has(ctx, tag) for tag in (CategoryTag.DIGIT, CategoryTag.UPPERCASE, CategoryTag.LOWERCASE))


def _has_invisible(ctx: InsightContext) -> bool:
    return any(not c.isprintable() and not is_whitespace(ord(c)) for c in ctx.text)


# (predicate, message) pairs evaluated in order; every match contributes
# one message. Messages are built from the context so they can quote figures.
Message = Callable[[InsightContext], str]
INSIGHT_RULES: List[Tuple[Callable[[InsightContext], bool], Message]] = [
    (_is_high_entropy,
     lambda ctx: f"High entropy ({ctx.stats.entropy:.2f} bits/symbol): looks random, "
                 "like a generated secret, key or hash."),
    (_is_low_entropy,
     lambda ctx: f"Low entropy ({ctx.stats.entropy:.2f} bits/symbol): the character "
                 "distribution is heavily skewed towards a few symbols."),
    (lambda ctx: _digest_name(ctx) is not None,
     lambda ctx: f"Resembles a {_digest_name(ctx)} digest ({ctx.stats.length} hex characters)."),
    (_is_numeric,
     lambda ctx: "Only decimal digits: could be a numeric identifier, counter or timestamp."),
    (_looks_like_slug,
     lambda ctx: "Uses '-' or '_' separators between alphanumerics: resembles an identifier or slug."),
    (_is_mixed_case_token,
     lambda ctx: "Mixes upper-case, lower-case and digits, typical of generated tokens and Base64 text."),
    (lambda ctx: not ctx.stats.ascii_only,
     lambda ctx: "Contains characters outside the ASCII range."),
    (_has_invisible,
     lambda ctx: "Contains control or otherwise invisible characters."),
    (lambda ctx: len(ctx.patterns) > 0,
     lambda ctx: f"Contains repeating fragments ({len(ctx.patterns)} found), hinting at structure or padding."),
]


def generate_insights(text: str, stats: TextStatistics, patterns: Sequence[str],
                      settings: AnalyzerSettings = DEFAULT_SETTINGS) -> Tuple[str, ...]:
    """Run every insight rule in order and collect the messages that fire"""
    if stats.length == 0:
        return ()
    ctx = InsightContext(text=text, stats=stats, patterns=patterns, settings=settings)
    return tuple(message(ctx) for predicate, message in INSIGHT_RULES if predicate(ctx))
