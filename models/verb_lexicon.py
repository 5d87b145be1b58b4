"""
Verb Lexicon - action verbs and the cognitive level they signal
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from models.bloom_level_map import CANONICAL_LEVELS

# Words read as nouns more often than verbs in exam questions (model, plan,
# state, name) are left out
_VERBS_BY_LEVEL: Dict[str, Tuple[str, ...]] = {
    "remember": (
        "define", "list", "recall", "identify", "label", "memorize",
        "recognize", "repeat", "reproduce", "enumerate", "tabulate",
        "locate", "find",
    ),
    "understand": (
        "explain", "describe", "summarize", "summarise", "classify", "discuss",
        "interpret", "paraphrase", "predict", "restate", "translate",
        "outline", "extend", "infer", "relate", "express", "indicate",
    ),
    "apply": (
        "apply", "use", "demonstrate", "solve", "implement", "execute",
        "calculate", "compute", "illustrate", "modify", "operate", "show",
        "determine", "employ", "sketch", "draw", "derive", "prove",
    ),
    "analyze": (
        "analyze", "analyse", "differentiate", "examine", "organize",
        "organise", "attribute", "deconstruct", "compare", "contrast",
        "distinguish", "inspect", "categorize", "investigate", "discriminate",
        "simplify", "infer",
    ),
    "evaluate": (
        "evaluate", "judge", "critique", "criticize", "criticise", "justify",
        "argue", "assess", "appraise", "defend", "prioritize", "prioritise",
        "rank", "recommend", "conclude", "validate", "verify", "select",
    ),
    "create": (
        "create", "design", "construct", "develop", "formulate", "produce",
        "assemble", "build", "compose", "devise", "generate",
        "invent", "propose", "synthesize", "synthesise", "integrate",
    ),
}


def _build_lexicon() -> Mapping[str, str]:
    lexicon: Dict[str, str] = {}
    # The first (least complex) listing wins for verbs filed under two levels
    for level in reversed(CANONICAL_LEVELS):
        for verb in _VERBS_BY_LEVEL[level]:
            lexicon.setdefault(verb, level)
    return MappingProxyType(lexicon)


# verb -> canonical level name, read-only for the life of the process
VERB_LEXICON: Mapping[str, str] = _build_lexicon()
