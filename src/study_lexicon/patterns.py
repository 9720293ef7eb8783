"""Static regular-expression tables used by extraction and matching.

Each table is an ordered tuple; earlier entries take priority where the
consumer stops at the first hit. Capture-group roles are stored beside the
compiled pattern so the extraction loop stays declarative.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

_IM = re.IGNORECASE | re.MULTILINE


@dataclass(frozen=True)
class DefinitionPattern:
    """A definition-shaped pattern with the roles of its capture groups.

    ``definition_group`` of ``0`` means the whole match is the definition.
    ``scope`` is ``"line"`` for patterns applied to each non-blank line and
    ``"document"`` for patterns that need to see line breaks.
    """

    name: str
    regex: re.Pattern[str]
    term_group: int
    definition_group: int
    scope: str = "line"


@dataclass(frozen=True)
class RelationshipPattern:
    type: str
    regex: re.Pattern[str]


# Concept extraction ------------------------------------------------------------

CONCEPT_PATTERNS: Tuple[DefinitionPattern, ...] = (
    DefinitionPattern(
        "is_definition",
        re.compile(r"^([A-Z][^.!?\n]{3,50}?)\s+(is|are|refers to|means|represents)\s+([^.!?\n]{10,200}?)[.!?]", _IM),
        1,
        3,
    ),
    DefinitionPattern(
        "colon_definition",
        re.compile(r"^([A-Z][^.!?\n]{3,50}?):\s+([^.!?\n]{10,200}?)[.!?]", _IM),
        1,
        2,
    ),
    DefinitionPattern(
        "the_is_definition",
        re.compile(r"^The\s+([A-Z][^.!?\n]{3,40}?)\s+(is|are|refers to|means|represents)\s+([^.!?\n]{10,200}?)[.!?]", _IM),
        1,
        3,
    ),
    DefinitionPattern(
        "section_header",
        re.compile(r"^([A-Z][A-Z ]{3,})\n([^.!?\n]{20,200})", re.MULTILINE),
        1,
        2,
        scope="document",
    ),
    DefinitionPattern(
        "science_term",
        re.compile(
            r"\b(cells?|cell theory|nucleus|membrane|mitochondria|ribosomes?|chloroplasts?|vacuoles?"
            r"|diffusion|osmosis|active transport|tissues?|organs?|mitosis|microscopy?"
            r"|specialized cells?|red blood cells?|nerve cells?|muscle cells?|root hair cells?"
            r"|sperm cells?|egg cells?|levels of organization|eukaryotic|prokaryotic"
            r"|chromosomes?|dna|rna|protein|enzyme|bacteria)\b[^.!?\n]{10,150}?[.!?]",
            re.IGNORECASE,
        ),
        1,
        0,
    ),
    DefinitionPattern(
        "process_verbs",
        re.compile(r"^(.{3,50}?)\s+(?:involves|requires|uses|works by|functions)\s+(.{10,100}?)(?:[.!?]|$)", _IM),
        1,
        2,
    ),
    DefinitionPattern(
        "function_verbs",
        re.compile(r"^(.{3,50}?)\s+(?:is used for|are used for|serves to|helps)\s+(.{10,100}?)(?:[.!?]|$)", _IM),
        1,
        2,
    ),
    DefinitionPattern(
        "dash_list_item",
        re.compile(r"^-\s*([A-Z][^:\n]{3,40}?):\s*([^.!?\n]{10,100}?)(?:[.!?]|$)", _IM),
        1,
        2,
    ),
    DefinitionPattern(
        "numbered_list_item",
        re.compile(r"^\d+\.\s*([A-Z][^:\n]{3,40}?):\s*([^.!?\n]{10,100}?)(?:[.!?]|$)", _IM),
        1,
        2,
    ),
)

CELL_THEORY_RE = re.compile(r"The cell theory[^.!?]*?(?=states that:)", re.IGNORECASE)
CELL_THEORY_PRINCIPLES_RE = re.compile(r"states that:.*?1\..*?2\..*?3\.[^\n]*", re.DOTALL)
CELLS_SENTENCE_RE = re.compile(r"Cells are[^.!?]*[.!?]", re.IGNORECASE)
TISSUES_SENTENCE_RE = re.compile(r"Tissues are[^.!?]*[.!?]", re.IGNORECASE)

INCOMPLETE_DEFINITION_RE = re.compile(r"^\s*(is|are|was|were)\s+[^.!?]{0,10}$", re.IGNORECASE)
VALID_TERM_RE = re.compile(r"^[A-Z][a-zA-Z0-9\s-]*$")
NUMBERED_ITEM_RE = re.compile(r"^\d+\.")
ACRONYM_RE = re.compile(r"\b[A-Z]{2,}\b")
FALLBACK_IS_RE = re.compile(r"^(.+?)\s+(is|are|refers to|means|represents)\s+(.+?)[.!?]", re.IGNORECASE)

MALFORMED_TERM_PATTERNS: Tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"meaning they$",
        r"also called$",
        r"also known$",
        r"\(also$",
        r"\(singular$",
        r"\(also called",
        r"\(singular:",
        r"^an?\s+",
        r"are atoms of the same element that$",
        r"elements in the same",
        r"electrons in the outermost",
        r"relative formula mass",
        r"^discovery of",
        r"^there$",
        r"^these reactions?$",
        r"^these values?$",
        r"^some isotopes?$",
        r"^\d+\.",
        r"atkins",
        r"zumdahl",
        r"chemical principles",
        r"an atoms first approach",
        r"relative atomic mass",
    )
)

THEME_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:cell|cells?|biology|organism|life|tissue|organ|system)\b", re.IGNORECASE),
    re.compile(r"\b(?:atom|atoms?|chemistry|molecule|reaction|compound|element)\b", re.IGNORECASE),
    re.compile(r"\b(?:force|physics|energy|motion|matter|wave|field)\b", re.IGNORECASE),
    re.compile(r"\b(?:equation|function|mathematics|calculus|algebra|geometry)\b", re.IGNORECASE),
)

RELATIONSHIP_PATTERNS: Tuple[RelationshipPattern, ...] = (
    RelationshipPattern("co-occurrence", re.compile(r"(\w+)\s+(?:and|with|along with)\s+(\w+)")),
    RelationshipPattern("containment", re.compile(r"(\w+)\s+(?:contains|includes|has|possesses)\s+(\w+)")),
    RelationshipPattern("causation", re.compile(r"(\w+)\s+(?:causes|leads to|results in|produces)\s+(\w+)")),
    RelationshipPattern("dependency", re.compile(r"(\w+)\s+(?:depends on|requires|needs)\s+(\w+)")),
    RelationshipPattern("composition", re.compile(r"(\w+)\s+(?:is part of|belongs to|is a component of)\s+(\w+)")),
    RelationshipPattern("control", re.compile(r"(\w+)\s+(?:controls|regulates|governs)\s+(\w+)")),
    RelationshipPattern("interaction", re.compile(r"(\w+)\s+(?:interacts with|works with|connects to)\s+(\w+)")),
)

# Sentence-level definitions ----------------------------------------------------

_TERM = r"([A-Z][a-zA-Z\s]{2,50})"
_BODY = r"([^.!?]+[.!?])"

SENTENCE_DEFINITION_PATTERNS: Tuple[DefinitionPattern, ...] = (
    DefinitionPattern(
        "is_means",
        re.compile(r"\b" + _TERM + r"\s+(?:is|are|means?|refers?\s+to|represents?|defines?|describes?)\s+" + _BODY, re.IGNORECASE),
        1,
        2,
    ),
    DefinitionPattern(
        "trailing_term",
        re.compile(r"\b" + _BODY + r"\s+(?:is|are|means?|refers?\s+to|represents?|defines?|describes?)\s+" + _TERM, re.IGNORECASE),
        2,
        1,
    ),
    DefinitionPattern("colon", re.compile(r"\b" + _TERM + r"\s*:\s*" + _BODY), 1, 2),
    DefinitionPattern("dash", re.compile(r"\b" + _TERM + r"\s+-\s+" + _BODY), 1, 2),
    DefinitionPattern(
        "is_a",
        re.compile(r"\b(The\s+)?([a-zA-Z\s]{3,50})\s+(?:is|are)\s+(?:a|an|the)\s+" + _BODY, re.IGNORECASE),
        2,
        3,
    ),
    DefinitionPattern(
        "consists_of",
        re.compile(r"\b" + _TERM + r"\s+(?:consists?\s+of|comprises?|contains?)\s+" + _BODY, re.IGNORECASE),
        1,
        2,
    ),
    DefinitionPattern(
        "equals",
        re.compile(r"\b" + _TERM + r"\s+(?:equals?|is\s+equal\s+to|=)\s+" + _BODY, re.IGNORECASE),
        1,
        2,
    ),
    DefinitionPattern(
        "defined_as",
        re.compile(r"\b" + _TERM + r"\s+(?:is\s+defined\s+as|is\s+given\s+by)\s+" + _BODY, re.IGNORECASE),
        1,
        2,
    ),
    DefinitionPattern(
        "occurs_when",
        re.compile(
            r"\b" + _TERM + r"\s+(?:occurs?|happens?|takes?\s+place)\s+(?:when|where|how)\s+" + _BODY,
            re.IGNORECASE,
        ),
        1,
        2,
    ),
    DefinitionPattern(
        "during",
        re.compile(r"\b(During|In)\s+([a-zA-Z\s]{3,50}),\s+" + _BODY, re.IGNORECASE),
        2,
        3,
    ),
    DefinitionPattern(
        "purpose",
        re.compile(
            r"\b(The\s+)?([a-zA-Z\s]{3,50})\s+(?:function|role|purpose)\s+(?:is|are)\s+(?:to)\s+" + _BODY,
            re.IGNORECASE,
        ),
        2,
        3,
    ),
    DefinitionPattern(
        "helps",
        re.compile(r"\b" + _TERM + r"\s+(?:helps?|allows?|enables?)\s+" + _BODY, re.IGNORECASE),
        1,
        2,
    ),
    DefinitionPattern(
        "type_of",
        re.compile(
            r"\b" + _TERM + r"\s+(?:belongs?\s+to|is\s+a\s+type\s+of|falls?\s+under)\s+(?:the\s+)?([a-zA-Z\s]{3,50})",
            re.IGNORECASE,
        ),
        1,
        2,
    ),
    DefinitionPattern(
        "classified_as",
        re.compile(r"\b" + _TERM + r"\s+(?:can\s+be\s+classified|is\s+classified)\s+(?:as)\s+" + _BODY, re.IGNORECASE),
        1,
        2,
    ),
    DefinitionPattern(
        "has_property",
        re.compile(
            r"\b" + _TERM + r"\s+(?:has|have|possesses?|exhibits?|shows?|displays?)\s+" + _BODY,
            re.IGNORECASE,
        ),
        1,
        2,
    ),
    DefinitionPattern(
        "property_of",
        re.compile(
            r"\b(The\s+)?([a-zA-Z\s]{3,50})\s+(?:of|in)\s+([a-zA-Z\s]{3,50})\s+(?:is|are)\s+" + _BODY,
            re.IGNORECASE,
        ),
        2,
        4,
    ),
)

QUALITY_INDICATORS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(is|are|means?|refers?|represents?|defines?)\b", re.IGNORECASE),
    re.compile(r"\b(process|function|structure|system|component)\b", re.IGNORECASE),
    re.compile(r"\b(used|helps?|allows?|enables?)\b", re.IGNORECASE),
    re.compile(r"\b(example|instance|type|kind|form)\b", re.IGNORECASE),
)

# Matching ----------------------------------------------------------------------

QUERY_PREFIX_RE = re.compile(r"what is|what are|define|explain", re.IGNORECASE)

# Safety ------------------------------------------------------------------------

META_AWARENESS_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"i am teaching myself", re.IGNORECASE),
    re.compile(r"i'm learning about myself", re.IGNORECASE),
    re.compile(r"ai is teaching ai", re.IGNORECASE),
    re.compile(r"machine learning about machine learning", re.IGNORECASE),
)

META_SANITIZE_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(i am|i'm|my|myself|self)\b.*?(teaching|learning|explaining|understanding)", re.IGNORECASE),
    re.compile(r"\b(ai|artificial intelligence|machine learning)\b.*?(teaching|learning)", re.IGNORECASE),
)

SELF_TEACHING_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(
        r"\b(i am|i'm|my|myself|self)\b.*?\b(teach|teaching|learn|learning|explain|explaining)\b"
        r".*?\b(myself|itself|ai|artificial intelligence)\b",
        re.IGNORECASE,
    ),
    re.compile(r"\bthe ai\b.*?\b(teach|teaching|learn|learning)\b.*?\b(itself|myself)\b", re.IGNORECASE),
    re.compile(r"\b(machine learning|ai)\b.*?\b(teach|teaching)\b.*?\b(itself|myself)\b", re.IGNORECASE),
)

META_CONFUSION_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(i|my|me)\b.*?\b(know|understand|learn|teach)\b.*?\b(what|how|why)\b", re.IGNORECASE),
    re.compile(r"\bthe (ai|system|model)\b.*?\b(knows|understands|learns)\b", re.IGNORECASE),
)
