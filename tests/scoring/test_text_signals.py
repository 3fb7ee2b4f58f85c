"""
Tests for lexical text signals

Tests for keyword counting, pattern counting, complexity and length analysis.
"""

import pytest

from prompt_gauge.domain.constants import STRUCTURE_KEYWORDS, TECH_KEYWORDS
from prompt_gauge.scoring.text_signals import (
    HIERARCHY_RE,
    LIST_ITEM_RE,
    NUMBERED_STEP_RE,
    SECTION_RE,
    analyze_complexity,
    analyze_lengths,
    calculate_complexity,
    count_keywords,
    count_matches,
    count_new_keywords,
    count_paragraphs,
    introduces_pattern,
    length_ratio,
    trim,
)


class TestCountKeywords:
    """Tests for count_keywords / count_new_keywords"""

    def test_case_insensitive(self):
        assert count_keywords("React와 TypeScript 사용", TECH_KEYWORDS) == 2

    def test_substring_match_counts_both(self):
        # "java" is contained in "javascript"
        assert count_keywords("JavaScript 함수", TECH_KEYWORDS) == 2

    def test_no_keywords(self):
        assert count_keywords("그냥 문장", TECH_KEYWORDS) == 0

    def test_each_keyword_counted_once(self):
        assert count_keywords("python python python", TECH_KEYWORDS) == 1

    def test_new_keywords_only(self):
        assert count_new_keywords("요구사항", "요구사항과 조건", STRUCTURE_KEYWORDS) == 1

    def test_removed_keywords_not_counted(self):
        assert count_new_keywords("요구사항과 조건", "없음", STRUCTURE_KEYWORDS) == 0


class TestPatterns:
    """Tests for the list / section / hierarchy patterns"""

    def test_list_items_need_preceding_newline(self):
        assert count_matches(LIST_ITEM_RE, "목록\n- a\n- b\n1. c") == 3
        assert count_matches(LIST_ITEM_RE, "- a\n- b") == 1

    def test_numbered_steps(self):
        assert count_matches(NUMBERED_STEP_RE, "단계\n1. 첫째\n2. 둘째\n- 기타") == 2

    def test_label_section(self):
        assert count_matches(SECTION_RE, "제목\n요구사항:\n- x") == 1

    def test_heading_section(self):
        assert count_matches(SECTION_RE, "intro\n## Heading\nbody") == 1

    def test_rule_line_section(self):
        assert count_matches(SECTION_RE, "intro\n---\nbody") == 1

    def test_no_section(self):
        assert count_matches(SECTION_RE, "한 줄짜리 프롬프트") == 0

    def test_hierarchy_introduced(self):
        assert introduces_pattern(HIERARCHY_RE, "a", "a\n- b\n  - c") is True

    def test_flat_list_is_not_hierarchy(self):
        assert introduces_pattern(HIERARCHY_RE, "a", "a\n- b\n- c") is False

    def test_hierarchy_already_in_original(self):
        text = "a\n- b\n  - c"
        assert introduces_pattern(HIERARCHY_RE, text, text + "\n  - d") is False


class TestTrim:
    """Tests for trim"""

    def test_ascii_and_unicode_spaces(self):
        assert trim(" \t\u3000a b \n") == "a b"

    def test_byte_order_mark_removed(self):
        assert trim("\ufeff프롬프트") == "프롬프트"
        assert trim("\ufeff") == ""

    def test_information_separators_kept(self):
        assert trim("\x1ca\x1f") == "\x1ca\x1f"


class TestParagraphs:
    """Tests for count_paragraphs"""

    def test_blank_paragraphs_ignored(self):
        assert count_paragraphs("a\n\nb\n\n\n\nc") == 3

    def test_single_paragraph(self):
        assert count_paragraphs("a\nb") == 1


class TestComplexity:
    """Tests for calculate_complexity"""

    def test_empty(self):
        assert calculate_complexity("") == 0

    def test_sentences_and_words(self):
        # 2 sentences + 3 words * 0.1
        assert calculate_complexity("Hello world. Bye!") == pytest.approx(2.3)

    def test_punctuation_and_lists(self):
        # 1 sentence + 7 words * 0.1 + 2 punctuation * 0.5 + 2 list items * 2
        assert calculate_complexity("a, b; c\n- x\n- y") == pytest.approx(6.7)

    def test_complexity_increase(self):
        result = analyze_complexity("간단", "상세한 요구사항:\n1. 첫 번째 단계\n2. 두 번째 단계\n\n조건:\n- 조건 1")
        assert result.improved_complexity > result.original_complexity
        assert result.complexity_increase == pytest.approx(
            result.improved_complexity - result.original_complexity
        )


class TestLengths:
    """Tests for analyze_lengths / length_ratio"""

    def test_basic(self):
        result = analyze_lengths("ab", "abcd")
        assert result.original_length == 2
        assert result.improved_length == 4
        assert result.length_increase == 2
        assert result.length_increase_ratio == 2.0

    def test_empty_original_ratio_is_one(self):
        assert analyze_lengths("", "abc").length_increase_ratio == 1.0

    def test_shrinking(self):
        result = analyze_lengths("abcd", "ab")
        assert result.length_increase == -2
        assert result.length_increase_ratio == 0.5

    def test_length_ratio_guards_empty_original(self):
        assert length_ratio("", "abc") == 3.0
