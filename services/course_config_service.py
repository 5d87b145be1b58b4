"""
Course Config Service - parse FormData / Sequence payloads
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Union

from errors.exceptions import ConfigurationError
from models.course_config import CourseConfig
from models.course_outcome import CourseOutcome
from models.course_module import Module

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"\d+")


def parse_number(value: Any) -> float:
    """Float from a number or numeric string, 0.0 when missing or unparseable"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def normalize_blooms(blooms: Any) -> List[str]:
    """Accept a single level name or a list of them, lowercase, drop non-strings"""
    if isinstance(blooms, str):
        return [blooms.strip().lower()] if blooms.strip() else []
    if isinstance(blooms, (list, tuple)):
        return [b.strip().lower() for b in blooms if isinstance(b, str) and b.strip()]
    return []


class CourseConfigService:
    """
    Service to build a CourseConfig from the upload form payloads
    """

    @staticmethod
    def _decode(payload: Union[str, bytes, Any], field_name: str) -> Any:
        if isinstance(payload, (str, bytes)):
            try:
                return json.loads(payload)
            except ValueError as e:
                raise ConfigurationError(field_name, f"not valid JSON ({e})")
        return payload

    @staticmethod
    def parse_form_data(payload: Union[str, Dict, None]) -> Dict[str, Any]:
        """
        Decode course metadata; the engine does not interpret it

        Raises:
            ConfigurationError: payload is not JSON or not an object
        """
        if payload is None or payload == "":
            return {}
        form_data = CourseConfigService._decode(payload, "FormData")
        if not isinstance(form_data, dict):
            raise ConfigurationError("FormData", "expected a JSON object")
        return form_data

    @staticmethod
    def parse_sequence(payload: Union[str, List, None]):
        """
        Split the Sequence list into course outcomes and modules

        Args:
            payload: JSON string or list of {name, type, weight, blooms}
                     / {name, type, hours} entries

        Returns:
            (course_outcomes, modules) in declaration order

        Raises:
            ConfigurationError: payload is not JSON or not a list
        """
        if payload is None or payload == "":
            return [], []
        sequence = CourseConfigService._decode(payload, "Sequence")
        if not isinstance(sequence, list):
            raise ConfigurationError("Sequence", "expected a JSON array")

        course_outcomes: Dict[str, CourseOutcome] = {}
        modules: Dict[str, Module] = {}

        for index, item in enumerate(sequence):
            if not isinstance(item, dict):
                logger.warning("Sequence entry %d is not an object, skipped", index)
                continue

            name = str(item.get("name") or "").strip()
            item_type = str(item.get("type") or "").strip().lower()
            number = _first_number(name)

            if item_type == "co":
                if number is None:
                    logger.warning("CO entry %r has no number, skipped", name)
                    continue
                key = f"CO{number}"
                course_outcomes[key] = CourseOutcome(
                    key=key,
                    weight=parse_number(item.get("weight")),
                    blooms=tuple(normalize_blooms(item.get("blooms"))),
                )
            elif item_type == "module":
                key = f"M{number}" if number is not None else name
                if not key:
                    logger.warning("Module entry %d has no name, skipped", index)
                    continue
                modules[key] = Module(key=key, hours=parse_number(item.get("hours")))

        return list(course_outcomes.values()), list(modules.values())

    @staticmethod
    def load_course_config(form_data: Union[str, Dict, None],
                           sequence: Union[str, List, None]) -> CourseConfig:
        """
        Build the CourseConfig used by every later stage

        Args:
            form_data: FormData payload (JSON string or dict)
            sequence: Sequence payload (JSON string or list)

        Returns:
            CourseConfig
        """
        course_outcomes, modules = CourseConfigService.parse_sequence(sequence)
        config = CourseConfig(
            form_data=CourseConfigService.parse_form_data(form_data),
            course_outcomes=course_outcomes,
            modules=modules,
        )
        logger.debug(
            "Loaded course config: %d COs (total weight %.2f), %d modules (total hours %.2f)",
            len(course_outcomes), config.total_weight, len(modules), config.total_hours,
        )
        return config


def _first_number(name: str) -> Optional[str]:
    match = _NUMBER_RE.search(name)
    return str(int(match.group())) if match else None
