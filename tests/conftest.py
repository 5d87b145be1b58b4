"""Shared pytest fixtures for the evaluation engine tests.

Provides:
- ``scenario_sequence``: two COs (apply / analyze) and one module
- ``scenario_rows``: the two matching question rows
- ``form_data``: course metadata passed through to the report
- ``write_xlsx`` / ``write_csv``: build question papers in ``tmp_path``
"""

import csv

import pytest
from openpyxl import Workbook

from services.bloom_normalizer_service import BloomNormalizerService
from services.course_config_service import CourseConfigService

HEADER = ["Question", "Marks", "CO", "Module", "QT"]


@pytest.fixture
def scenario_sequence():
    return [
        {"name": "CO1", "type": "CO", "weight": 60, "blooms": ["apply"]},
        {"name": "CO2", "type": "CO", "weight": 40, "blooms": "Analyze"},
        {"name": "M1", "type": "Module", "hours": 10},
    ]


@pytest.fixture
def scenario_rows():
    return [
        {"Question": "Explain the process", "Marks": 5, "CO": "CO1", "Module": "M1", "QT": "Theory"},
        {"Question": "Design a new system", "Marks": 5, "CO": "CO2", "Module": "M1", "QT": "Design"},
    ]


@pytest.fixture
def form_data():
    return {
        "College Name": "Test Institute of Technology",
        "Branch": "Computer Engineering",
        "Year Of Study": "TE",
        "Semester": "5",
        "Course Name": "Operating Systems",
        "Course Code": "CS501",
        "Course Teacher": "A. Teacher",
    }


@pytest.fixture
def scenario_config(scenario_sequence, form_data):
    return CourseConfigService.load_course_config(form_data, scenario_sequence)


@pytest.fixture
def scenario_level_map(scenario_config):
    return BloomNormalizerService.from_course_outcomes(scenario_config.course_outcomes)


@pytest.fixture
def write_xlsx(tmp_path):
    def _write(rows, header=HEADER, name="paper.xlsx"):
        wb = Workbook()
        ws = wb.active
        ws.append(header)
        for row in rows:
            ws.append(row)
        path = tmp_path / name
        wb.save(path)
        return path
    return _write


@pytest.fixture
def write_csv(tmp_path):
    def _write(rows, header=HEADER, name="paper.csv"):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return path
    return _write
