"""
Verb Classifier Service - lexicon based cognitive level extraction
"""

import re
from dataclasses import dataclass, field, replace
from typing import List, Mapping, Optional

from models.bloom_level_map import BloomLevelMap, COMPLEXITY_RANK
from models.question import Question
from models.verb_lexicon import VERB_LEXICON


@dataclass(frozen=True)
class Classification:
    """Verbs found in one question text and the level they point to"""
    verbs: List[str] = field(default_factory=list)
    highest_verb: Optional[str] = None
    level: Optional[str] = None
    ordinal: Optional[int] = None


class VerbClassifierService:
    """
    Service to classify the cognitive level of a question by its verbs

    Verbs are matched case-insensitively on word boundaries. When several
    lexicon verbs appear, the most cognitively complex one decides the level;
    among equally complex verbs the first one in the text wins.
    """

    def __init__(self, lexicon: Mapping[str, str] = None):
        self.lexicon = lexicon if lexicon is not None else VERB_LEXICON
        # Longest first so multi-word entries win over their prefixes
        alternatives = sorted(self.lexicon, key=len, reverse=True)
        if alternatives:
            self._pattern = re.compile(
                r"\b(" + "|".join(re.escape(v) for v in alternatives) + r")\b",
                re.IGNORECASE,
            )
        else:
            self._pattern = None

    def find_verbs(self, text: str) -> List[str]:
        """
        Distinct lexicon verbs in order of first appearance (lowercase)
        """
        if not text or self._pattern is None:
            return []
        verbs: List[str] = []
        for match in self._pattern.finditer(text):
            verb = match.group(1).lower()
            if verb not in verbs:
                verbs.append(verb)
        return verbs

    def classify(self, text: str, level_map: BloomLevelMap) -> Classification:
        """
        Extract the cognitive level of a question text

        Args:
            text: question text
            level_map: ordinals of the current evaluation run

        Returns:
            Classification, with level/ordinal None when no verb matched
        """
        verbs = self.find_verbs(text)
        if not verbs:
            return Classification()

        highest_verb = min(verbs, key=lambda v: COMPLEXITY_RANK[self.lexicon[v]])
        level = self.lexicon[highest_verb]
        return Classification(
            verbs=verbs,
            highest_verb=highest_verb,
            level=level,
            ordinal=level_map[level],
        )

    def classify_question(self, question: Question, level_map: BloomLevelMap) -> Question:
        """Copy of the question with verbs, highest verb, level and ordinal filled in"""
        result = self.classify(question.text, level_map)
        return replace(
            question,
            verbs=list(result.verbs),
            highest_verb=result.highest_verb,
            level=result.level,
            ordinal=result.ordinal,
        )
