"""
Models module - data classes of the evaluation engine
"""

from .bloom_level_map import BloomLevelMap, CANONICAL_LEVELS
from .question import Question
from .course_outcome import CourseOutcome
from .course_module import Module
from .course_config import CourseConfig
from .recommendation import QuestionRecommendation, DistributionRecommendation
from .evaluation_result import EvaluationResult, BloomLevelStats, ShareStats
from .verb_lexicon import VERB_LEXICON

__all__ = [
    'BloomLevelMap',
    'CANONICAL_LEVELS',
    'Question',
    'CourseOutcome',
    'Module',
    'CourseConfig',
    'QuestionRecommendation',
    'DistributionRecommendation',
    'EvaluationResult',
    'BloomLevelStats',
    'ShareStats',
    'VERB_LEXICON'
]
