"""
Services module - Business logic
"""

from .course_config_service import CourseConfigService
from .bloom_normalizer_service import BloomNormalizerService
from .verb_classifier_service import VerbClassifierService
from .question_loader_service import QuestionLoaderService
from .scoring_service import ScoringService
from .score_policy import ScorePolicy
from .recommendation_service import RecommendationService
from .evaluation_service import EvaluationService, EvaluationRun

__all__ = [
    'CourseConfigService',
    'BloomNormalizerService',
    'VerbClassifierService',
    'QuestionLoaderService',
    'ScoringService',
    'ScorePolicy',
    'RecommendationService',
    'EvaluationService',
    'EvaluationRun'
]
