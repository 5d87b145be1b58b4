import argparse
import json
import logging
import os
import sys

from config.settings import get_settings
from errors.exceptions import EvaluationError
from services.evaluation_service import EvaluationService
from services.recommendation_service import RecommendationService
from services.score_policy import ScorePolicy
from services.scoring_service import REMARKS, MATCHES, HIGHER, LOWER

logger = logging.getLogger("evaluate_paper")


def load_json_file(path: str, default=None):
    """
    Read a JSON configuration file

    Args:
        path: file path (None = use default)
        default: value returned when no path is given

    Returns:
        Raw JSON text, passed to the engine unparsed so that malformed input
        is reported by the same error path as the API
    """
    if not path:
        return default
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main():
    parser = argparse.ArgumentParser(description='Evaluate a question paper against COs, module hours and Bloom levels')
    parser.add_argument('paper', type=str,
                        help='Question paper (.xlsx or .csv)')
    parser.add_argument('--sequence', type=str, required=True,
                        help='JSON file with the CO / module Sequence')
    parser.add_argument('--form-data', type=str, default=None,
                        help='JSON file with course metadata (optional)')
    parser.add_argument('--output', type=str, default=None,
                        help='Output file (default: <paper>_report.json)')
    parser.add_argument('--threshold', type=float, default=None,
                        help='Variance threshold for CO/module recommendations (default: from settings)')
    parser.add_argument('--verbose', action='store_true',
                        help='Debug logging')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = get_settings()
    threshold = args.threshold if args.threshold is not None else settings.recommendation_variance_threshold
    service = EvaluationService(
        score_policy=ScorePolicy.from_settings(settings),
        recommender=RecommendationService(variance_threshold=threshold),
    )

    try:
        run = service.evaluate(
            args.paper,
            load_json_file(args.form_data, default="{}"),
            load_json_file(args.sequence),
        )
    except (EvaluationError, OSError) as e:
        logger.error("%s", e)
        sys.exit(1)

    result = run.result
    if args.output:
        output_file = args.output
    else:
        output_file = f"{os.path.splitext(args.paper)[0]}_report.json"

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(run.to_report(), f, ensure_ascii=False, indent=2)

    counts = result.remark_counts()
    print(f"FinalScore: {result.final_score:.2f} ({ScorePolicy.band(result.final_score)})")
    print(f"Questions: {len(result.questions)} | "
          f"matches: {counts.get(REMARKS[MATCHES], 0)} | "
          f"higher: {counts.get(REMARKS[HIGHER], 0)} | "
          f"lower: {counts.get(REMARKS[LOWER], 0)} | "
          f"unscored: {counts.get(None, 0)}")
    print(f"Recommendations: {len(result.question_recommendations)} question, "
          f"{len(result.co_recommendations)} CO, {len(result.module_recommendations)} module")
    print(f"Report written to {output_file}")


if __name__ == "__main__":
    main()
