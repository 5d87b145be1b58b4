"""
Evaluation API endpoints
Evaluate exam papers against COs, modules and Bloom's taxonomy
"""

import io
import logging
import os

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.schemas import (
    ClassifyRequest,
    ClassifyResponse,
    LevelMapRequest,
    LevelMapResponse,
)
from api.shared import get_evaluation_service, get_verb_classifier, sequence_payload
from config.settings import get_settings
from errors.exceptions import EvaluationError
from services.bloom_normalizer_service import BloomNormalizerService
from services.course_config_service import CourseConfigService
from services.evaluation_service import EvaluationService
from services.verb_classifier_service import VerbClassifierService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/evaluation", tags=["Evaluation"])


@router.post("/evaluate", summary="Evaluate an uploaded question paper")
async def evaluate_paper(
    file: UploadFile = File(..., description="Question paper (.xlsx or .csv)"),
    FormData: str = Form(default="{}", description="Course metadata as JSON"),
    Sequence: str = Form(..., description="CO / module declarations as JSON"),
    service: EvaluationService = Depends(get_evaluation_service),
):
    """
    Evaluate a question paper against the course's declared learning design

    **The report contains:**
    - Course metadata (FormData) copied verbatim
    - Declared COs / module hours and the BloomLevelMap of this run
    - `Collected Data`: per-question classification, Bloom level, module and
      CO distributions, FinalScore and recommendations

    Returns:
        Report document
    """
    settings = get_settings()
    filename = file.filename or "upload"
    extension = os.path.splitext(filename)[1].lower()
    if extension not in settings.allowed_extensions:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file format '{extension or '?'}'. Supported: {', '.join(settings.allowed_extensions)}",
        )

    content = await file.read()
    if len(content) > settings.max_upload_mb * 1024 * 1024:
        raise HTTPException(status_code=400, detail=f"File exceeds {settings.max_upload_mb} MB")

    try:
        run = service.evaluate(io.BytesIO(content), FormData, Sequence, extension=extension)
        return run.to_report()
    except EvaluationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Evaluation of %s failed", filename)
        raise HTTPException(status_code=500, detail=f"Evaluation failed: {str(e)}")


@router.post("/level-map", response_model=LevelMapResponse,
             summary="Compute the BloomLevelMap of a course")
async def compute_level_map(request: LevelMapRequest):
    """
    Ordinals 1..6 for the six canonical levels, used levels first
    """
    course_outcomes, _ = CourseConfigService.parse_sequence(sequence_payload(request.sequence))
    level_map = BloomNormalizerService.from_course_outcomes(course_outcomes)
    used = BloomNormalizerService.used_levels(co.blooms[0] for co in course_outcomes if co.blooms)
    return LevelMapResponse(used_levels=used, level_map=level_map.to_dict())


@router.post("/classify", response_model=ClassifyResponse,
             summary="Classify the cognitive level of one question")
async def classify_question(
    request: ClassifyRequest,
    classifier: VerbClassifierService = Depends(get_verb_classifier),
):
    """
    Lexicon verbs found in the text and the most complex level among them
    """
    course_outcomes, _ = CourseConfigService.parse_sequence(sequence_payload(request.sequence))
    level_map = BloomNormalizerService.from_course_outcomes(course_outcomes)
    result = classifier.classify(request.text, level_map)
    return ClassifyResponse(
        verbs=result.verbs,
        highest_verb=result.highest_verb,
        level=result.level,
        ordinal=result.ordinal,
    )
