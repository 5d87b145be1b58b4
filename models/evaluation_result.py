"""
EvaluationResult Model - aggregated output of one evaluation run
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.question import Question
from models.recommendation import QuestionRecommendation, DistributionRecommendation


def _pct(value: float) -> float:
    return round(float(value), 2)


@dataclass(frozen=True)
class BloomLevelStats:
    """Expected (CO weight) vs actual (marks) share of one cognitive level"""
    ordinal: int
    level: str
    weights: float = 0.0
    marks: float = 0.0
    question_count: int = 0

    @property
    def variance(self) -> float:
        return self.marks - self.weights


@dataclass(frozen=True)
class ShareStats:
    """Expected vs actual percentage share of marks for one module or CO"""
    key: str
    expected: float = 0.0
    actual: float = 0.0

    @property
    def variance(self) -> float:
        return self.actual - self.expected


@dataclass(frozen=True)
class EvaluationResult:
    """
    Result of one evaluation run

    blooms_data is ordered by ordinal, module_data and co_data follow the
    declaration order of the course configuration, questions follow the
    row order of the paper.
    """
    questions: List[Question] = field(default_factory=list)
    blooms_data: List[BloomLevelStats] = field(default_factory=list)
    module_data: List[ShareStats] = field(default_factory=list)
    co_data: List[ShareStats] = field(default_factory=list)
    match_ratio: float = 0.0
    aggregate_variance: float = 0.0
    final_score: float = 0.0
    question_recommendations: List[QuestionRecommendation] = field(default_factory=list)
    co_recommendations: List[DistributionRecommendation] = field(default_factory=list)
    module_recommendations: List[DistributionRecommendation] = field(default_factory=list)

    @property
    def total_marks(self) -> float:
        return sum(q.marks for q in self.questions)

    def remark_counts(self) -> Dict[str, int]:
        """Number of questions per remark, unscored ones under None"""
        counts: Dict[Optional[str], int] = {}
        for q in self.questions:
            counts[q.remark] = counts.get(q.remark, 0) + 1
        return counts

    def to_dict(self) -> Dict:
        """Wire shape consumed by the report front end"""
        return {
            "QuestionData": [
                {
                    "Question": q.text,
                    "Marks": q.marks,
                    "CO": q.co,
                    "Module": q.module,
                    "QT": q.question_type,
                    "Bloom's Verbs": ", ".join(q.verbs),
                    "Bloom's Taxonomy Level": q.ordinal,
                    "Bloom's Highest Verb": q.highest_verb,
                    "Remark": q.remark,
                }
                for q in self.questions
            ],
            "BloomsData": {
                str(stats.ordinal): {
                    "name": stats.level.capitalize(),
                    "level": stats.ordinal,
                    "weights": _pct(stats.weights),
                    "marks": _pct(stats.marks),
                    "No_Of_Questions": stats.question_count,
                }
                for stats in self.blooms_data
            },
            "ModuleData": [
                {"expected": _pct(m.expected), "actual": _pct(m.actual)}
                for m in self.module_data
            ],
            "COData": {
                _co_number(co.key): _pct(co.actual) for co in self.co_data
            },
            "FinalScore": _pct(self.final_score),
            "QuestionRecommendations": [r.to_dict() for r in self.question_recommendations],
            "CORecommendations": [r.to_dict("co") for r in self.co_recommendations],
            "ModuleRecommendations": [r.to_dict("module") for r in self.module_recommendations],
        }


def _co_number(key: str) -> str:
    return key[2:] if key.upper().startswith("CO") else key
