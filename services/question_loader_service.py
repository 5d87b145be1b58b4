"""
Question Loader Service - read the question paper spreadsheet
"""

import csv
import io
import logging
import os
import re
from typing import IO, Any, Dict, Iterable, List, Optional, Union

from openpyxl import load_workbook

from errors.exceptions import SpreadsheetError
from models.bloom_level_map import BloomLevelMap
from models.question import Question, UNASSIGNED
from services.course_config_service import parse_number
from services.verb_classifier_service import VerbClassifierService

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, IO[bytes]]

# field -> accepted header names (compared lowercase, spaces collapsed)
COLUMN_ALIASES: Dict[str, tuple] = {
    "text": ("question", "questions", "question text"),
    "marks": ("marks", "mark"),
    "co": ("co", "course outcome"),
    "module": ("module", "modules"),
    "question_type": ("qt", "type", "question type"),
}

_NUMBER_RE = re.compile(r"\d+")


def _header_key(header: Any) -> str:
    return " ".join(str(header).split()).lower() if header is not None else ""


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _is_number(value: Any) -> bool:
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def normalize_tag(value: Any, prefix: str, names: Iterable[str] = ()) -> str:
    """
    'CO2', 'co 2', 2 -> 'CO2' for prefix 'CO'

    A tag without a number is kept as the declared name it matches (case and
    spacing ignored), otherwise it is 'unassigned'.
    """
    text = _cell_text(value)
    match = _NUMBER_RE.search(text)
    if match:
        return f"{prefix}{int(match.group())}"
    key = _header_key(text)
    for name in names:
        if key and _header_key(name) == key:
            return name
    return UNASSIGNED


class QuestionLoaderService:
    """
    Service to turn spreadsheet rows into classified Question records

    A malformed row never aborts the batch: missing marks default to 0 and
    unreadable CO/module tags to 'unassigned'.
    """

    @staticmethod
    def read_rows(source: Source, extension: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Read the first sheet as a list of {header: value} dicts

        Args:
            source: file path or binary file object
            extension: '.xlsx' or '.csv'; taken from the path when omitted

        Returns:
            Rows in sheet order, header row excluded

        Raises:
            SpreadsheetError: unsupported format or unreadable file
        """
        name = str(source) if isinstance(source, (str, os.PathLike)) else getattr(source, "name", "upload")
        if extension is None:
            extension = os.path.splitext(name)[1]
        extension = extension.lower()

        if extension == ".xlsx":
            raw_rows = QuestionLoaderService._read_xlsx(source, name)
        elif extension == ".csv":
            raw_rows = QuestionLoaderService._read_csv(source, name)
        else:
            raise SpreadsheetError(name, f"unsupported file type '{extension or '?'}'")

        rows = [r for r in raw_rows if any(_cell_text(v) for v in r)]
        if not rows:
            return []

        headers = [_cell_text(h) for h in rows[0]]
        records = []
        for values in rows[1:]:
            record = {}
            for index, header in enumerate(headers):
                if not header:
                    continue
                record[header] = values[index] if index < len(values) else None
            records.append(record)
        return records

    @staticmethod
    def _read_xlsx(source: Source, name: str) -> List[tuple]:
        try:
            wb = load_workbook(source, read_only=True, data_only=True)
        except Exception as e:
            raise SpreadsheetError(name, f"not a readable .xlsx workbook ({e})") from e
        try:
            ws = wb.worksheets[0] if wb.worksheets else None
            if ws is None:
                return []
            return [tuple(row) for row in ws.iter_rows(values_only=True)]
        finally:
            wb.close()

    @staticmethod
    def _read_csv(source: Source, name: str) -> List[List[str]]:
        try:
            if isinstance(source, (str, os.PathLike)):
                with open(source, "r", encoding="utf-8-sig", newline="") as f:
                    return list(csv.reader(f))
            text = io.TextIOWrapper(source, encoding="utf-8-sig", newline="")
            try:
                return list(csv.reader(text))
            finally:
                text.detach()
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise SpreadsheetError(name, f"not a readable .csv file ({e})") from e

    @staticmethod
    def resolve_columns(headers: List[str]) -> Dict[str, str]:
        """
        Map engine fields to the sheet's own header names

        Returns:
            Dict field -> header for the fields present in the sheet
        """
        by_key = {_header_key(h): h for h in headers}
        columns = {}
        for field_name, aliases in COLUMN_ALIASES.items():
            for alias in aliases:
                if alias in by_key:
                    columns[field_name] = by_key[alias]
                    break
        return columns

    @staticmethod
    def build_question(row: Dict[str, Any], columns: Dict[str, str],
                       row_number: int = 0,
                       module_names: Iterable[str] = ()) -> Optional[Question]:
        """
        Build an unclassified Question from one row

        Args:
            row: {header: value}
            columns: output of resolve_columns
            row_number: position in the sheet, for log messages
            module_names: declared module keys that carry no number

        Returns:
            Question, or None when the row has no question text
        """
        text = _cell_text(row.get(columns["text"]))
        if not text:
            logger.warning("Row %d has no question text, skipped", row_number)
            return None

        raw_marks = row.get(columns["marks"]) if "marks" in columns else None
        marks = parse_number(raw_marks)
        if not _cell_text(raw_marks):
            logger.warning("Row %d: marks missing, defaulting to 0", row_number)
        elif marks < 0 or (marks == 0 and not _is_number(raw_marks)):
            logger.warning("Row %d: invalid marks %r, defaulting to 0", row_number, raw_marks)
            marks = 0.0

        co = normalize_tag(row.get(columns["co"]) if "co" in columns else None, "CO")
        module = normalize_tag(row.get(columns["module"]) if "module" in columns else None, "M",
                               module_names)
        if co == UNASSIGNED or module == UNASSIGNED:
            logger.warning("Row %d: CO/module tag missing or malformed (co=%s, module=%s)",
                           row_number, co, module)

        known = set(columns.values())
        extra = {k: v for k, v in row.items() if k not in known}

        return Question(
            text=text,
            marks=marks,
            co=co,
            module=module,
            question_type=_cell_text(row.get(columns["question_type"])) if "question_type" in columns else "",
            extra=extra,
        )

    @staticmethod
    def questions_from_rows(rows: List[Dict[str, Any]],
                            level_map: BloomLevelMap,
                            classifier: VerbClassifierService = None,
                            module_names: Iterable[str] = ()) -> List[Question]:
        """
        Build and classify Questions, preserving row order

        Raises:
            SpreadsheetError: rows exist but no question-text column is present
        """
        if not rows:
            return []

        headers = list(rows[0].keys())
        columns = QuestionLoaderService.resolve_columns(headers)
        if "text" not in columns:
            raise SpreadsheetError("question paper", f"no question column among {headers}")

        classifier = classifier or VerbClassifierService()
        module_names = list(module_names)
        questions = []
        # Row 1 is the header row
        for row_number, row in enumerate(rows, start=2):
            question = QuestionLoaderService.build_question(row, columns, row_number, module_names)
            if question is not None:
                questions.append(classifier.classify_question(question, level_map))
        return questions

    @staticmethod
    def load_questions(source: Source, level_map: BloomLevelMap,
                       extension: Optional[str] = None,
                       classifier: VerbClassifierService = None,
                       module_names: Iterable[str] = ()) -> List[Question]:
        """
        Read a question paper and classify every question

        Args:
            source: path or binary file object (.xlsx / .csv)
            level_map: ordinals of the current evaluation run
            extension: file type when source is a file object
            classifier: VerbClassifierService, default lexicon when None
            module_names: declared module keys, so named modules can be matched

        Returns:
            List of Question in sheet order
        """
        rows = QuestionLoaderService.read_rows(source, extension)
        questions = QuestionLoaderService.questions_from_rows(rows, level_map, classifier, module_names)
        logger.info("Loaded %d questions (%d rows)", len(questions), len(rows))
        return questions
