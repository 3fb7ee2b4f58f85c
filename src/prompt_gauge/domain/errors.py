"""
Domain Errors

Defines the error taxonomy raised by the scoring engine.
"""

from enum import Enum


class ScoringErrorCode(str, Enum):
    """Scoring error codes"""
    INVALID_PROMPT = "INVALID_PROMPT"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"  # reserved
    CONFIG_ERROR = "CONFIG_ERROR"
    API_ERROR = "API_ERROR"  # reserved


class ScoringError(Exception):
    """
    Error raised by the scoring engine

    Attributes:
        code: ScoringErrorCode
        details: Optional structured details
    """

    def __init__(
        self,
        message: str,
        code: ScoringErrorCode | str,
        details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = ScoringErrorCode(code)
        self.details = details

    def to_dict(self) -> dict:
        data = {"error": self.message, "code": self.code.value}
        if self.details:
            data["details"] = self.details
        return data

    def __repr__(self) -> str:
        return f"ScoringError({self.message!r}, code={self.code.value!r})"
