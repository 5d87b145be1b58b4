"""
Recommendation Models
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class QuestionRecommendation:
    """Question whose cognitive level does not match its CO target"""
    question: str
    marks: float
    co: str
    extracted_verb: Optional[str]
    extracted_level: Optional[str]
    expected_level: Optional[str]
    q_score: int
    remark: str
    suggestion: str

    def to_dict(self) -> Dict:
        return {
            "QuestionData": self.question,
            "marks": self.marks,
            "co": self.co,
            "extractedVerb": self.extracted_verb,
            "highestVerb": self.expected_level,
            "qScore": self.q_score,
            "remark": self.remark,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class DistributionRecommendation:
    """CO or module whose actual share of marks drifts from the expected share"""
    key: str
    expected: float
    actual: float
    suggestion: str

    @property
    def variance(self) -> float:
        return self.actual - self.expected

    def to_dict(self, key_field: str) -> Dict:
        return {
            key_field: self.key,
            "expected": round(self.expected, 2),
            "actual": round(self.actual, 2),
            "suggestion": self.suggestion,
        }
