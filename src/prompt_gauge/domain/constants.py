"""
Domain Constants

Centrally manages the keyword lists, limits and defaults shared by the scoring engine.
The keyword lists target Korean prompts.
"""

# Input limits
MAX_PROMPT_LENGTH = 10_000

# Weight sum tolerance (weights must sum to 1.0 within this tolerance)
WEIGHT_SUM_TOLERANCE = 0.01

# History store cap (most recent entries kept)
HISTORY_LIMIT = 100

# Storage identifiers
HISTORY_STORAGE_KEY = "scoring_history"
CONFIG_STORAGE_KEY = "scoring_config"

# Analyzer scoring
BASE_SCORE = 0.3
UNCHANGED_SCORE = 0.05
UNCHANGED_CONFIDENCE = 0.95
SUGGESTION_SCORE_CEILING = 0.6

# Aggregation
STRONG_CRITERION_SCORE = 0.7
WEAK_CRITERION_SCORE = 0.5

# Default weights per criterion value
DEFAULT_WEIGHTS = {
    "clarity": 0.25,
    "specificity": 0.25,
    "structure": 0.20,
    "completeness": 0.15,
    "actionability": 0.15,
}

DEFAULT_MIN_CONFIDENCE_THRESHOLD = 0.7
DEFAULT_EXCELLENT_THRESHOLD = 0.85
DEFAULT_GOOD_THRESHOLD = 0.70
DEFAULT_MODERATE_THRESHOLD = 0.50

# -- Keyword lists --

# Clarity: vague filler expressions
VAGUE_WORDS = ["좀", "적당히", "대충", "잘", "좋게", "많이", "조금", "해줘", "해주세요"]

# Clarity: clarifying phrases
CLARIFYING_PHRASES = ["구체적으로", "예를 들어", "단계별로", "다음과 같이", "요구사항", "조건"]

# Specificity: technology / framework names
TECH_KEYWORDS = [
    "react",
    "typescript",
    "python",
    "javascript",
    "java",
    "css",
    "html",
    "node",
    "angular",
    "vue",
]

# Specificity: concrete element names (file, version, function, class, ...)
SPECIFIC_ELEMENTS = ["버전", "형식", "파일", "함수", "클래스", "컴포넌트", "모듈"]

# Structure: structural keywords
STRUCTURE_KEYWORDS = ["요구사항", "조건", "단계", "순서", "절차", "결과", "입력", "출력"]

# Completeness: important aspects (input/output/condition/constraint/example/format/result)
IMPORTANT_ASPECTS = ["입력", "출력", "조건", "제약", "예시", "형식", "결과"]

# Completeness: example / sample keywords
EXAMPLE_KEYWORDS = ["예시", "예제", "샘플", "예상", "다음과 같이"]

# Actionability: action verbs
ACTION_VERBS = ["작성", "구현", "생성", "만들", "개발", "설계", "분석", "처리"]
