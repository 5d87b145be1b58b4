"""
Shared dependencies for all API routes
"""

from typing import List

from config.settings import get_settings
from services.evaluation_service import EvaluationService
from services.verb_classifier_service import VerbClassifierService


def get_evaluation_service() -> EvaluationService:
    """Dependency that builds an EvaluationService from current settings"""
    return EvaluationService.from_settings(get_settings())


def get_verb_classifier() -> VerbClassifierService:
    """Dependency that builds a VerbClassifierService"""
    return VerbClassifierService()


def sequence_payload(entries) -> List[dict]:
    """Pydantic SequenceEntry list -> plain dicts as CourseConfigService expects"""
    return [entry.model_dump() for entry in entries]
