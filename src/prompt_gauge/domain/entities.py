"""
Domain Entities

Defines the history records kept for past analyses.
"""

from dataclasses import dataclass

from prompt_gauge.domain.value_objects import PromptComparisonAnalysis


@dataclass
class UserFeedback:
    """User feedback on a scored analysis"""
    is_accurate: bool
    comments: str = ""
    suggested_score: float | None = None

    def to_dict(self) -> dict:
        data = {"isAccurate": self.is_accurate, "comments": self.comments}
        if self.suggested_score is not None:
            data["suggestedScore"] = self.suggested_score
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserFeedback":
        return cls(
            is_accurate=bool(data["isAccurate"]),
            comments=data.get("comments", ""),
            suggested_score=data.get("suggestedScore"),
        )


@dataclass
class ScoringHistoryEntry:
    """History entry for a saved analysis"""
    id: str
    session_id: str
    analysis: PromptComparisonAnalysis
    created_at: str
    user_feedback: UserFeedback | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "sessionId": self.session_id,
            "analysis": self.analysis.to_dict(),
            "createdAt": self.created_at,
        }
        if self.user_feedback is not None:
            data["userFeedback"] = self.user_feedback.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ScoringHistoryEntry":
        feedback = data.get("userFeedback")
        return cls(
            id=data["id"],
            session_id=data["sessionId"],
            analysis=PromptComparisonAnalysis.from_dict(data["analysis"]),
            created_at=data["createdAt"],
            user_feedback=UserFeedback.from_dict(feedback) if feedback else None,
        )
