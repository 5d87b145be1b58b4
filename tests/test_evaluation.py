"""End-to-end tests of the evaluation pipeline."""

import json

import pytest

from errors.exceptions import ConfigurationError
from services.evaluation_service import EvaluationService
from services.recommendation_service import RecommendationService
from services.scoring_service import HIGHER, LOWER, REMARKS


@pytest.fixture
def service():
    return EvaluationService()


def test_scenario(service, scenario_rows, scenario_sequence, form_data):
    run = service.evaluate_rows(scenario_rows, form_data, scenario_sequence)

    # Used levels take ordinals in canonical order: analyze before apply
    assert run.level_map["analyze"] == 1
    assert run.level_map["apply"] == 2
    assert run.level_map["create"] == 3
    assert run.level_map["understand"] == 5

    q1, q2 = run.result.questions
    assert (q1.highest_verb, q1.level, q1.q_score) == ("explain", "understand", LOWER)
    assert (q2.highest_verb, q2.level, q2.q_score) == ("design", "create", HIGHER)

    data = run.result.to_dict()
    assert data["COData"] == {"1": 50.0, "2": 50.0}
    assert data["ModuleData"] == [{"expected": 100.0, "actual": 100.0}]
    assert data["QuestionData"][0]["Remark"] == REMARKS[LOWER]
    assert data["QuestionData"][1]["Bloom's Taxonomy Level"] == 3
    assert data["QuestionData"][0]["Bloom's Verbs"] == "explain"
    assert data["QuestionData"][0]["QT"] == "Theory"

    assert data["BloomsData"]["1"] == {
        "name": "Analyze", "level": 1, "weights": 40.0, "marks": 0.0, "No_Of_Questions": 0,
    }
    assert data["BloomsData"]["2"]["weights"] == 60.0
    assert data["BloomsData"]["3"]["marks"] == 50.0
    assert data["BloomsData"]["5"]["marks"] == 50.0

    assert run.result.match_ratio == 0.0
    assert run.result.aggregate_variance == pytest.approx(50.0)
    assert data["FinalScore"] == pytest.approx(20.0)

    assert [r["qScore"] for r in data["QuestionRecommendations"]] == [3, 2]
    assert [r["co"] for r in data["CORecommendations"]] == ["CO1", "CO2"]
    assert data["CORecommendations"][0]["suggestion"].startswith("Increase representation of CO1")
    assert data["ModuleRecommendations"] == []


def test_output_contract_keys(service, scenario_rows, scenario_sequence):
    data = service.evaluate_rows(scenario_rows, {}, scenario_sequence).result.to_dict()
    assert set(data) == {
        "QuestionData", "BloomsData", "ModuleData", "COData", "FinalScore",
        "QuestionRecommendations", "CORecommendations", "ModuleRecommendations",
    }
    assert set(data["QuestionData"][0]) == {
        "Question", "Marks", "CO", "Module", "QT", "Bloom's Verbs",
        "Bloom's Taxonomy Level", "Bloom's Highest Verb", "Remark",
    }


def test_report_document(service, scenario_rows, scenario_sequence, form_data):
    report = service.evaluate_rows(scenario_rows, json.dumps(form_data), scenario_sequence).to_report()
    for key, value in form_data.items():
        assert report[key] == value
    assert report["Sequence"]["COs"]["CO2"] == {"weight": 40.0, "blooms": ["analyze"]}
    assert report["Sequence"]["ModuleHours"] == {"M1": 10.0}
    assert report["bloomLevelMap"]["analyze"] == 1
    assert len(report["Collected Data"]) == 1
    assert report["Collected Data"][0]["FinalScore"] == pytest.approx(20.0)


def test_xlsx_file_matches_rows(service, write_xlsx, scenario_rows, scenario_sequence):
    path = write_xlsx([[r["Question"], r["Marks"], r["CO"], r["Module"], r["QT"]] for r in scenario_rows])
    from_file = service.evaluate(path, "{}", json.dumps(scenario_sequence)).to_report()
    from_rows = service.evaluate_rows(scenario_rows, "{}", scenario_sequence).to_report()
    assert from_file == from_rows


def test_idempotent(service, scenario_rows, scenario_sequence, form_data):
    first = service.evaluate_rows(scenario_rows, form_data, scenario_sequence).to_report()
    second = service.evaluate_rows(scenario_rows, form_data, scenario_sequence).to_report()
    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_perfect_alignment(service):
    sequence = [
        {"name": "CO1", "type": "CO", "weight": 50, "blooms": "remember"},
        {"name": "CO2", "type": "CO", "weight": 50, "blooms": "apply"},
        {"name": "M1", "type": "Module", "hours": 5},
        {"name": "M2", "type": "Module", "hours": 5},
    ]
    rows = [
        {"Question": "Define a mutex", "Marks": 5, "CO": "CO1", "Module": "M1"},
        {"Question": "Solve the dining philosophers problem", "Marks": 5, "CO": "CO2", "Module": "M2"},
    ]
    result = service.evaluate_rows(rows, {}, sequence).result
    assert result.match_ratio == 1.0
    assert result.aggregate_variance == 0.0
    assert result.final_score == 100.0
    assert result.question_recommendations == []
    assert result.co_recommendations == []
    assert result.module_recommendations == []


def test_all_unclassified(service, scenario_sequence):
    rows = [
        {"Question": "What is a page fault?", "Marks": 4, "CO": "CO1", "Module": "M1"},
        {"Question": "Why do we need paging?", "Marks": 6, "CO": "CO2", "Module": "M1"},
    ]
    result = service.evaluate_rows(rows, {}, scenario_sequence).result
    data = result.to_dict()
    assert all(level["marks"] == 0 for level in data["BloomsData"].values())
    assert result.match_ratio == 0.0
    # Bloom imbalance 50, module imbalance 0 -> aggregate 25, balance 0.75
    assert result.aggregate_variance == pytest.approx(25.0)
    assert data["FinalScore"] == pytest.approx(30.0)
    assert data["QuestionRecommendations"] == []
    assert data["COData"] == {"1": 40.0, "2": 60.0}


DEFINE_ROW = {"Question": "Define X", "Marks": 2, "CO": "CO1", "Module": "M1"}
REMEMBER_CO = {"name": "CO1", "type": "CO", "weight": 100, "blooms": "remember"}


@pytest.mark.parametrize("rows, sequence", [
    ([], [REMEMBER_CO, {"name": "M1", "type": "Module", "hours": 10}]),
    ([DEFINE_ROW], []),
    ([], []),
    ([DEFINE_ROW], [REMEMBER_CO]),
    ([DEFINE_ROW], [{"name": "M1", "type": "Module", "hours": 10}]),
    ([DEFINE_ROW], [
        {"name": "CO1", "type": "CO", "weight": 0, "blooms": "remember"},
        {"name": "M1", "type": "Module", "hours": 0},
    ]),
])
def test_empty_inputs_are_degenerate_not_errors(service, rows, sequence):
    data = service.evaluate_rows(rows, {}, sequence).result.to_dict()
    assert len(data["BloomsData"]) == 6
    assert data["FinalScore"] == 0.0
    assert len(data["QuestionData"]) == len(rows)


def test_named_module_receives_marks(service):
    sequence = [
        REMEMBER_CO,
        {"name": "Unit A", "type": "Module", "hours": 10},
    ]
    rows = [{"Question": "Define X", "Marks": 2, "CO": "CO1", "Module": " unit  a "}]
    result = service.evaluate_rows(rows, {}, sequence).result
    assert result.questions[0].module == "Unit A"
    assert result.to_dict()["ModuleData"] == [{"expected": 100.0, "actual": 100.0}]
    assert result.module_recommendations == []
    assert result.final_score == 100.0


def test_weights_over_100_do_not_crash(service, scenario_rows):
    sequence = [
        {"name": "CO1", "type": "CO", "weight": 70, "blooms": "apply"},
        {"name": "CO2", "type": "CO", "weight": 40, "blooms": "analyze"},
        {"name": "M1", "type": "Module", "hours": 10},
    ]
    data = service.evaluate_rows(scenario_rows, {}, sequence).result.to_dict()
    assert sum(level["weights"] for level in data["BloomsData"].values()) == pytest.approx(100.0, abs=0.05)
    assert 0.0 <= data["FinalScore"] <= 100.0


def test_malformed_sequence_fails_before_reading_file(service, tmp_path):
    with pytest.raises(ConfigurationError):
        service.evaluate(tmp_path / "missing.xlsx", "{}", "[not json")


def test_threshold_policy_flows_through():
    service = EvaluationService(recommender=RecommendationService(variance_threshold=50.0))
    rows = [{"Question": "Define X", "Marks": 10, "CO": "CO1", "Module": "M1"}]
    sequence = [
        {"name": "CO1", "type": "CO", "weight": 60, "blooms": "remember"},
        {"name": "CO2", "type": "CO", "weight": 40, "blooms": "apply"},
        {"name": "M1", "type": "Module", "hours": 10},
    ]
    result = service.evaluate_rows(rows, {}, sequence).result
    # CO1 +40, CO2 -40: both under the threshold
    assert result.co_recommendations == []
