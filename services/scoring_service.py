"""
Scoring Service - per-question alignment and distribution aggregates
"""

from dataclasses import replace
from typing import Dict, List, Optional

import numpy as np

from models.bloom_level_map import BloomLevelMap, is_more_complex
from models.course_config import CourseConfig
from models.evaluation_result import BloomLevelStats, ShareStats
from models.question import Question

MATCHES = 1
HIGHER = 2
LOWER = 3

REMARKS: Dict[int, str] = {
    MATCHES: "Matches Expected Blooms Level",
    HIGHER: "Higher than Expected Blooms Level",
    LOWER: "Lower than Expected Blooms Level",
}


def remark_for(q_score: Optional[int]) -> Optional[str]:
    return REMARKS.get(q_score) if q_score is not None else None


def _share(part: float, total: float) -> float:
    """part as a percentage of total, 0 when total is 0"""
    return float(part) / float(total) * 100.0 if total > 0 else 0.0


class ScoringService:
    """
    Service to score questions against CO targets and aggregate marks

    All percentages are 0-100 floats. Totals are taken from whatever the
    course declares, so weights that do not add up to 100 still produce
    well-formed shares.
    """

    @staticmethod
    def compare_levels(extracted: str, target: str) -> int:
        """
        qScore of an extracted level against a target level

        Returns:
            1 matches, 2 extracted is more complex, 3 extracted is less complex
        """
        if extracted == target:
            return MATCHES
        return HIGHER if is_more_complex(extracted, target) else LOWER

    @staticmethod
    def score_question(question: Question, config: CourseConfig) -> Question:
        """
        Copy of the question with qScore and remark set

        Unclassified questions, and questions whose CO is undeclared or has
        no canonical target, are left without a qScore.
        """
        co = config.get_course_outcome(question.co)
        target = co.target_level if co else None
        if not question.is_classified or target is None:
            return replace(question, q_score=None, remark=None)

        q_score = ScoringService.compare_levels(question.level, target)
        return replace(question, q_score=q_score, remark=remark_for(q_score))

    @staticmethod
    def score_questions(questions: List[Question], config: CourseConfig) -> List[Question]:
        return [ScoringService.score_question(q, config) for q in questions]

    @staticmethod
    def match_ratio(questions: List[Question]) -> float:
        """
        Fraction (0-1) of scored questions that match their CO target
        """
        scored = [q.q_score for q in questions if q.q_score is not None]
        if not scored:
            return 0.0
        return scored.count(MATCHES) / len(scored)

    @staticmethod
    def bloom_distribution(questions: List[Question], config: CourseConfig,
                           level_map: BloomLevelMap) -> List[BloomLevelStats]:
        """
        Expected vs actual share per cognitive level, ordered by ordinal

        weights: share of CO weight (over COs with a canonical target) whose
                 target is this level
        marks: share of the paper's total marks on questions extracted at
               this level; unclassified questions count in the total only
        """
        weight_by_level: Dict[str, float] = {level: 0.0 for level in level_map}
        for co in config.course_outcomes:
            if co.target_level is not None:
                weight_by_level[co.target_level] += co.weight
        total_weight = sum(weight_by_level.values())

        total_marks = float(np.sum([q.marks for q in questions])) if questions else 0.0
        marks_by_level: Dict[str, float] = {level: 0.0 for level in level_map}
        count_by_level: Dict[str, int] = {level: 0 for level in level_map}
        for q in questions:
            if q.is_classified:
                marks_by_level[q.level] += q.marks
                count_by_level[q.level] += 1

        return [
            BloomLevelStats(
                ordinal=ordinal,
                level=level,
                weights=_share(weight_by_level[level], total_weight),
                marks=_share(marks_by_level[level], total_marks),
                question_count=count_by_level[level],
            )
            for ordinal, level in level_map.by_ordinal()
        ]

    @staticmethod
    def module_distribution(questions: List[Question], config: CourseConfig) -> List[ShareStats]:
        """
        Hours share (expected) vs marks share (actual) per declared module
        """
        total_marks = sum(q.marks for q in questions)
        total_hours = config.total_hours
        return [
            ShareStats(
                key=module.key,
                expected=_share(module.hours, total_hours),
                actual=_share(sum(q.marks for q in questions if q.module == module.key), total_marks),
            )
            for module in config.modules
        ]

    @staticmethod
    def co_distribution(questions: List[Question], config: CourseConfig) -> List[ShareStats]:
        """
        Weight share (expected) vs marks share (actual) per declared CO

        Coverage ignores whether the questions hit the right level.
        """
        total_marks = sum(q.marks for q in questions)
        total_weight = config.total_weight
        return [
            ShareStats(
                key=co.key,
                expected=_share(co.weight, total_weight),
                actual=_share(sum(q.marks for q in questions if q.co == co.key), total_marks),
            )
            for co in config.course_outcomes
        ]

    @staticmethod
    def has_expected_distribution(blooms_data: List[BloomLevelStats],
                                  module_data: List[ShareStats]) -> bool:
        """True when Bloom weights or module hours give anything to measure against"""
        return any(b.weights > 0 for b in blooms_data) or any(m.expected > 0 for m in module_data)

    @staticmethod
    def aggregate_variance(blooms_data: List[BloomLevelStats],
                           module_data: List[ShareStats]) -> float:
        """
        Imbalance of the paper on a 0-100 scale

        Each dimension contributes half the sum of its absolute variances
        (the percentage of marks that would have to move to match the
        expected distribution). The result is the mean over the dimensions
        that have an expected distribution at all.
        """
        dimensions = []
        if any(b.weights > 0 for b in blooms_data):
            dimensions.append(np.sum(np.abs([b.variance for b in blooms_data])) / 2.0)
        if any(m.expected > 0 for m in module_data):
            dimensions.append(np.sum(np.abs([m.variance for m in module_data])) / 2.0)
        if not dimensions:
            return 0.0
        return float(np.mean(dimensions))
