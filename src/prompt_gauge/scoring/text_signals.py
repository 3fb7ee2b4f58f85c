"""
Lexical text signals

Implements the counting primitives used by the criterion analyzers, plus the
length and complexity analysis of a prompt pair.
"""

from __future__ import annotations

import re

from prompt_gauge.domain.value_objects import ComplexityAnalysis, LengthAnalysis

# Bullet or numbered list items (a line break must precede the marker)
LIST_ITEM_RE = re.compile(r"\n\s*[-•*]\s+|\n\s*[0-9]+\.\s+")

# Numbered steps only
NUMBERED_STEP_RE = re.compile(r"\n\s*[0-9]+\.\s+")

# Numeric tokens
NUMBER_RE = re.compile(r"[0-9]+")

# Section markers: headings, rule lines, **label**: and label: lines.
# The label alternative already covers leading whitespace.
SECTION_RE = re.compile(
    r"\n\s*#+\s+"
    r"|\n\s*==+\s*\n"
    r"|\n\s*--+\s*\n"
    r"|\n\s*\*\*[^*]+\*\*\s*:"
    r"|\n[가-힣A-Za-z0-9_\s]+:"
)

# Nested (indented) list items
HIERARCHY_RE = re.compile(r"\n\s{2,}[-•*]\s+|\n\s+[A-Za-z0-9_]\.\s+")

# Complexity inputs
SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
PUNCTUATION_RE = re.compile(r"[,;:()\[\]{}]")

# Characters removed by trim(): ASCII whitespace, Unicode space separators and the BOM
TRIM_CHARS = (
    " \t\n\v\f\r\xa0\u1680"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def trim(text: str) -> str:
    """Strip leading/trailing TRIM_CHARS (unlike str.strip(), keeps \\x1c-\\x1f and removes the BOM)"""
    return text.strip(TRIM_CHARS)


def count_keywords(text: str, keywords: list[str]) -> int:
    """
    Count how many of the keywords appear in the text (case-insensitive substring match)

    Args:
        text: Text to search
        keywords: Keyword list

    Returns:
        Number of distinct keywords present
    """
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword.lower() in lowered)


def count_new_keywords(original: str, improved: str, keywords: list[str]) -> int:
    """Count keywords absent from the original and present in the improved text"""
    original_lowered = original.lower()
    improved_lowered = improved.lower()
    return sum(
        1 for keyword in keywords
        if keyword.lower() not in original_lowered and keyword.lower() in improved_lowered
    )


def count_matches(pattern: re.Pattern, text: str) -> int:
    """Count non-overlapping matches of a pattern"""
    return len(pattern.findall(text))


def count_paragraphs(text: str) -> int:
    """Count non-blank paragraphs separated by an empty line"""
    return sum(1 for paragraph in text.split("\n\n") if trim(paragraph))


def has_pattern(pattern: re.Pattern, text: str) -> bool:
    """Whether the pattern occurs anywhere in the text"""
    return pattern.search(text) is not None


def introduces_pattern(pattern: re.Pattern, original: str, improved: str) -> bool:
    """Whether the pattern occurs in the improved text but not in the original"""
    return has_pattern(pattern, improved) and not has_pattern(pattern, original)


def length_ratio(original: str, improved: str) -> float:
    """Improved / original length, treating an empty original as length 1"""
    return len(improved) / max(len(original), 1)


def calculate_complexity(text: str) -> float:
    """
    Calculate a lexical complexity metric

    complexity = sentences * 1 + words * 0.1 + punctuation * 0.5 + list_items * 2

    Args:
        text: Prompt text

    Returns:
        Complexity value (0.0 for empty text)
    """
    sentences = sum(1 for s in SENTENCE_SPLIT_RE.split(text) if trim(s))
    words = len(text.split())
    punctuation = count_matches(PUNCTUATION_RE, text)
    list_items = count_matches(LIST_ITEM_RE, text)
    return sentences * 1 + words * 0.1 + punctuation * 0.5 + list_items * 2


def analyze_lengths(original: str, improved: str) -> LengthAnalysis:
    """
    Compare the character lengths of two prompts

    Args:
        original: Original prompt
        improved: Improved prompt

    Returns:
        LengthAnalysis (ratio is 1.0 when the original is empty)
    """
    original_length = len(original)
    improved_length = len(improved)
    ratio = improved_length / original_length if original_length > 0 else 1.0
    return LengthAnalysis(
        original_length=original_length,
        improved_length=improved_length,
        length_increase=improved_length - original_length,
        length_increase_ratio=ratio,
    )


def analyze_complexity(original: str, improved: str) -> ComplexityAnalysis:
    """Compare the lexical complexity of two prompts"""
    original_complexity = calculate_complexity(original)
    improved_complexity = calculate_complexity(improved)
    return ComplexityAnalysis(
        original_complexity=original_complexity,
        improved_complexity=improved_complexity,
        complexity_increase=improved_complexity - original_complexity,
    )
