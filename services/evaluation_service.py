"""
Evaluation Service - run the whole scoring pipeline for one paper

classify -> normalize -> aggregate -> recommend. Every stage is a pure
function of its inputs; the service itself keeps only policy objects, so a
single instance can serve concurrent uploads.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from models.bloom_level_map import BloomLevelMap
from models.course_config import CourseConfig
from models.evaluation_result import BloomLevelStats, EvaluationResult, ShareStats
from models.question import Question
from services.bloom_normalizer_service import BloomNormalizerService
from services.course_config_service import CourseConfigService
from services.question_loader_service import QuestionLoaderService, Source
from services.recommendation_service import RecommendationService
from services.score_policy import ScorePolicy
from services.scoring_service import ScoringService
from services.verb_classifier_service import VerbClassifierService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationRun:
    """Inputs derived for one run together with its result"""
    config: CourseConfig
    level_map: BloomLevelMap
    result: EvaluationResult

    def to_report(self) -> Dict[str, Any]:
        return EvaluationService.build_report(self.config, self.level_map, self.result)


class EvaluationService:
    """
    Service to evaluate a question paper against a course's learning design
    """

    def __init__(self, classifier: VerbClassifierService = None,
                 score_policy: ScorePolicy = None,
                 recommender: RecommendationService = None):
        self.classifier = classifier or VerbClassifierService()
        self.score_policy = score_policy or ScorePolicy()
        self.recommender = recommender or RecommendationService()

    @classmethod
    def from_settings(cls, settings) -> "EvaluationService":
        return cls(
            score_policy=ScorePolicy.from_settings(settings),
            recommender=RecommendationService(
                variance_threshold=settings.recommendation_variance_threshold
            ),
        )

    def score(self, questions: List[Question], config: CourseConfig,
              level_map: BloomLevelMap) -> EvaluationResult:
        """
        Score classified questions and build the EvaluationResult

        Args:
            questions: output of the loader, in paper order
            config: declared COs and modules
            level_map: ordinals of this run

        Returns:
            EvaluationResult; FinalScore is 0 for degenerate input (no
            questions, no COs, no modules, or nothing expected at all)
        """
        scored = ScoringService.score_questions(questions, config)

        blooms_data = ScoringService.bloom_distribution(scored, config, level_map)
        module_data = ScoringService.module_distribution(scored, config)
        co_data = ScoringService.co_distribution(scored, config)

        match_ratio = ScoringService.match_ratio(scored)
        aggregate_variance = ScoringService.aggregate_variance(blooms_data, module_data)
        if EvaluationService.is_degenerate(scored, config, blooms_data, module_data):
            final_score = 0.0
        else:
            final_score = self.score_policy.final_score(match_ratio, aggregate_variance)

        return EvaluationResult(
            questions=scored,
            blooms_data=blooms_data,
            module_data=module_data,
            co_data=co_data,
            match_ratio=match_ratio,
            aggregate_variance=aggregate_variance,
            final_score=final_score,
            question_recommendations=self.recommender.question_recommendations(scored, config),
            co_recommendations=self.recommender.co_recommendations(co_data),
            module_recommendations=self.recommender.module_recommendations(module_data),
        )

    @staticmethod
    def is_degenerate(questions: List[Question], config: CourseConfig,
                      blooms_data: List[BloomLevelStats],
                      module_data: List[ShareStats]) -> bool:
        """
        Whether the paper cannot be scored against the course design

        Aggregates are still reported; only the FinalScore is withheld.
        """
        if not questions or not config.course_outcomes or not config.modules:
            return True
        return not ScoringService.has_expected_distribution(blooms_data, module_data)

    def evaluate_rows(self, rows: List[Dict[str, Any]],
                      form_data: Union[str, Dict, None],
                      sequence: Union[str, List, None]) -> EvaluationRun:
        """Evaluate rows already read from a sheet ({header: value} dicts)"""
        config = CourseConfigService.load_course_config(form_data, sequence)
        level_map = BloomNormalizerService.from_course_outcomes(config.course_outcomes)
        questions = QuestionLoaderService.questions_from_rows(
            rows, level_map, self.classifier, [m.key for m in config.modules]
        )
        return self._finish(config, level_map, questions)

    def evaluate(self, source: Source,
                 form_data: Union[str, Dict, None],
                 sequence: Union[str, List, None],
                 extension: Optional[str] = None) -> EvaluationRun:
        """
        Evaluate a question paper file

        The configuration is parsed before the file is touched, so a
        malformed Sequence/FormData fails the run without partial work.

        Args:
            source: .xlsx/.csv path or binary file object
            form_data: course metadata (JSON string or dict)
            sequence: CO/module declarations (JSON string or list)
            extension: file type when source is a file object

        Returns:
            EvaluationRun

        Raises:
            ConfigurationError: malformed FormData or Sequence
            SpreadsheetError: the paper cannot be read
        """
        config = CourseConfigService.load_course_config(form_data, sequence)
        level_map = BloomNormalizerService.from_course_outcomes(config.course_outcomes)
        questions = QuestionLoaderService.load_questions(
            source, level_map, extension, self.classifier, [m.key for m in config.modules]
        )
        return self._finish(config, level_map, questions)

    def _finish(self, config: CourseConfig, level_map: BloomLevelMap,
                questions: List[Question]) -> EvaluationRun:
        result = self.score(questions, config, level_map)
        logger.info(
            "Evaluated %d questions against %d COs / %d modules: FinalScore %.2f "
            "(match ratio %.3f, aggregate variance %.2f)",
            len(result.questions), len(config.course_outcomes), len(config.modules),
            result.final_score, result.match_ratio, result.aggregate_variance,
        )
        return EvaluationRun(config=config, level_map=level_map, result=result)

    @staticmethod
    def build_report(config: CourseConfig, level_map: BloomLevelMap,
                     result: EvaluationResult) -> Dict[str, Any]:
        """
        Report document handed to the persistence/presentation collaborators

        Course metadata is copied verbatim; the result sits under
        'Collected Data' as a one-element list.
        """
        report: Dict[str, Any] = dict(config.form_data)
        report["Sequence"] = {
            "COs": {
                co.key: {"weight": co.weight, "blooms": list(co.blooms)}
                for co in config.course_outcomes
            },
            "ModuleHours": {m.key: m.hours for m in config.modules},
        }
        report["bloomLevelMap"] = level_map.to_dict()
        report["Collected Data"] = [result.to_dict()]
        return report
