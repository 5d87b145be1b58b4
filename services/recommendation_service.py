"""
Recommendation Service - turn variances into actionable suggestions
"""

from typing import List, Mapping

from models.evaluation_result import ShareStats
from models.question import Question
from models.course_config import CourseConfig
from models.recommendation import QuestionRecommendation, DistributionRecommendation
from models.verb_lexicon import VERB_LEXICON
from services.scoring_service import HIGHER, MATCHES

EXAMPLE_VERB_COUNT = 3


class RecommendationService:
    """
    Service to build question, CO and module recommendations

    Output order follows the input order (paper rows, declared COs,
    declared modules), so identical inputs give identical lists.
    """

    def __init__(self, variance_threshold: float = 5.0,
                 lexicon: Mapping[str, str] = None):
        """
        Args:
            variance_threshold: |actual - expected| in percentage points that
                                must be exceeded before a CO/module is reported
            lexicon: verb -> level, used for example verbs in suggestions
        """
        if variance_threshold < 0:
            raise ValueError("variance_threshold must be non-negative")
        self.variance_threshold = variance_threshold
        self.lexicon = lexicon if lexicon is not None else VERB_LEXICON

    def example_verbs(self, level: str) -> List[str]:
        return [verb for verb, lvl in self.lexicon.items() if lvl == level][:EXAMPLE_VERB_COUNT]

    def question_recommendations(self, questions: List[Question],
                                 config: CourseConfig) -> List[QuestionRecommendation]:
        """
        One entry per scored question that does not match its CO target
        """
        recommendations = []
        for q in questions:
            if q.q_score is None or q.q_score == MATCHES:
                continue
            co = config.get_course_outcome(q.co)
            target = co.target_level
            if q.q_score == HIGHER:
                suggestion = (
                    f"Lower the cognitive demand of this question to '{target}': "
                    f"'{q.highest_verb}' asks for '{q.level}'."
                )
            else:
                examples = ", ".join(self.example_verbs(target))
                suggestion = (
                    f"Raise the cognitive demand of this question to '{target}' "
                    f"(e.g. {examples}): '{q.highest_verb}' only asks for '{q.level}'."
                )
            recommendations.append(QuestionRecommendation(
                question=q.text,
                marks=q.marks,
                co=q.co,
                extracted_verb=q.highest_verb,
                extracted_level=q.level,
                expected_level=target,
                q_score=q.q_score,
                remark=q.remark,
                suggestion=suggestion,
            ))
        return recommendations

    def _distribution_recommendations(self, stats: List[ShareStats],
                                      label: str) -> List[DistributionRecommendation]:
        recommendations = []
        for item in stats:
            variance = item.variance
            if abs(variance) <= self.variance_threshold:
                continue
            name = f"{label} {item.key}" if label else item.key
            if variance < 0:
                directive = f"Increase representation of {name}"
            else:
                directive = f"Reduce emphasis on {name}"
            suggestion = (
                f"{directive}: expected {item.expected:.2f}%, "
                f"actual {item.actual:.2f}% (variance {variance:+.2f}%)."
            )
            recommendations.append(DistributionRecommendation(
                key=item.key,
                expected=item.expected,
                actual=item.actual,
                suggestion=suggestion,
            ))
        return recommendations

    def co_recommendations(self, co_data: List[ShareStats]) -> List[DistributionRecommendation]:
        """COs whose marks share drifts from their weight share"""
        return self._distribution_recommendations(co_data, "")

    def module_recommendations(self, module_data: List[ShareStats]) -> List[DistributionRecommendation]:
        """Modules whose marks share drifts from their teaching-hours share"""
        return self._distribution_recommendations(module_data, "module")
