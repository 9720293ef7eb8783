"""Domain rules table.

Content-specific tuning (which keywords vote for a domain, which forced terms
a topic may keep, the "Cells" anchor concept, the cell-type resolver rule) is
data in :data:`DOMAIN_RULES` so the extraction and resolution code stays
general. New domains are added by registering another :class:`DomainRules`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class AnchorConcept:
    """A concept guaranteed to be present when ``trigger`` occurs in the text."""

    trigger: str
    term: str
    definition: str
    difficulty: int = 2
    importance: float = 1000.0


@dataclass(frozen=True)
class ResolverRule:
    """Demote specific concepts and promote a general one for short queries."""

    query_marker: str
    max_query_length: int
    demoted: Tuple[str, ...]
    preferred: str
    penalty: float = 15.0
    bonus: float = 20.0

    def applies_to(self, query: str) -> bool:
        return self.query_marker in query and len(query) <= self.max_query_length


@dataclass(frozen=True)
class DomainRules:
    name: str
    keywords: Tuple[str, ...] = ()
    technical_terms: Tuple[str, ...] = ()
    anchor_substring: str = ""
    # Topic-name markers for keyword filtering and forced-term filtering.
    keyword_markers: Tuple[str, ...] = ()
    topic_markers: Tuple[str, ...] = ()
    keyword_mode: str = "all"
    allowed_keywords: FrozenSet[str] = frozenset()
    excluded_keywords: FrozenSet[str] = frozenset()
    forced_term_allowances: FrozenSet[str] = frozenset()
    anchors: Tuple[AnchorConcept, ...] = ()
    resolver_rules: Tuple[ResolverRule, ...] = ()

    def filter_keywords(self, keywords: Iterable[str]) -> List[str]:
        """Apply this domain's keyword policy to a keyword list."""
        items = list(keywords)
        if self.keyword_mode == "allow":
            return [word for word in items if word.lower() in self.allowed_keywords]
        if self.keyword_mode == "exclude":
            return [
                word
                for word in items
                if word.lower() in self.allowed_keywords or word.lower() not in self.excluded_keywords
            ]
        return items


FORCED_TERMS: Tuple[str, ...] = (
    "acid",
    "base",
    "molecule",
    "reaction",
    "ion",
    "electron",
    "control center",
    "oxygen",
    "carbon",
    "fusion",
)

# Terms whose definition is pulled from a wider window of the source text.
SPECIAL_TERMS: FrozenSet[str] = frozenset(
    {
        "cell theory", "cell membrane", "plasma membrane", "cell wall", "chromosomes",
        "mitochondria", "ribosomes", "chloroplasts", "vacuole", "diffusion", "osmosis",
        "active transport", "cells", "nucleus", "tissue", "tissues", "organ", "organs", "mitosis",
        "atom", "atoms", "ion", "ions", "isotope", "isotopes", "proton", "protons",
        "neutron", "neutrons", "electron", "electrons",
    }
)

_CELLS_DEFINITION = (
    "Cells are the basic building blocks of all living organisms. The cell theory, one of the "
    "fundamental principles of biology, states that: All living organisms are composed of one or "
    "more cells. The cell is the basic unit of structure and function in organisms. All cells come "
    "from pre-existing cells through cell division."
)

BIOLOGY = DomainRules(
    name="biology",
    keywords=(
        "cell", "organism", "tissue", "organ", "dna", "rna", "protein", "enzyme", "metabolism",
        "photosynthesis", "respiration", "evolution", "ecosystem", "biodiversity",
    ),
    technical_terms=(
        "mitochondria", "photosynthesis", "diffusion", "osmosis", "mitosis", "meiosis",
        "chromosome", "organelle", "cytoplasm", "membrane", "enzyme", "hormone",
    ),
    anchor_substring="cell",
    keyword_markers=("biology", "cell", "organization"),
    topic_markers=("biology", "cell", "organism"),
    keyword_mode="exclude",
    allowed_keywords=frozenset(
        {
            "cell", "cells", "nucleus", "mitochondria", "ribosomes", "chloroplasts", "vacuole",
            "membrane", "cytoplasm", "diffusion", "osmosis", "transport", "mitosis", "tissue",
            "tissues", "organ", "organs", "organism", "organisms", "microscope", "magnification",
            "resolution", "photosynthesis", "respiration", "dna", "rna", "protein", "enzyme",
            "bacteria", "eukaryotic", "prokaryotic", "chromosome", "organelle", "specialized",
            "blood", "nerve", "muscle", "root", "hair", "sperm", "egg", "ova", "epithelial",
            "connective", "heart", "stomach", "leaves", "epidermis", "mesophyll", "vascular",
            "light", "microscopes", "electron", "lens", "mirror", "interphase", "prophase",
            "metaphase", "anaphase", "telophase", "cytokinesis", "active", "concentration",
            "gradient", "alveoli", "capillaries", "intestine",
        }
    ),
    excluded_keywords=frozenset(
        {
            "force", "velocity", "current", "voltage", "resistance", "circuit", "matrix",
            "vector", "scalar", "theorem", "calculus", "algebra",
        }
    ),
    forced_term_allowances=frozenset({"oxygen", "carbon", "control center", "electron", "ion", "fusion"}),
    anchors=(AnchorConcept(trigger="cells are the basic building blocks", term="Cells", definition=_CELLS_DEFINITION),),
    resolver_rules=(
        ResolverRule(
            query_marker="cell",
            max_query_length=8,
            demoted=("animal cells", "plant cells", "bacterial cells"),
            preferred="cells",
        ),
    ),
)

CHEMISTRY = DomainRules(
    name="chemistry",
    keywords=(
        "atom", "molecule", "reaction", "bond", "acid", "base", "ion", "electron", "proton",
        "neutron", "element", "compound", "periodic", "catalyst", "equilibrium",
    ),
    technical_terms=(
        "covalent", "ionic", "polar", "nonpolar", "oxidation", "reduction", "catalyst",
        "equilibrium", "entropy", "enthalpy", "stoichiometry",
    ),
    anchor_substring="atom",
    keyword_markers=("chemistry",),
    topic_markers=("chemistry", "acid", "reaction"),
    keyword_mode="allow",
    allowed_keywords=frozenset(
        {
            "acid", "base", "atom", "molecule", "reaction", "ion", "electron", "element",
            "compound", "bond", "valence", "periodic", "table", "proton", "neutron", "nucleus",
            "isotope", "mass", "molar", "concentration", "solution", "solvent", "solute", "ph",
            "neutralization", "oxidation", "reduction", "electrolysis",
        }
    ),
    forced_term_allowances=frozenset({"acid", "base", "molecule", "reaction", "ion", "electron"}),
)

PHYSICS = DomainRules(
    name="physics",
    keywords=(
        "force", "energy", "mass", "velocity", "acceleration", "momentum", "gravity",
        "electricity", "magnetism", "wave", "quantum", "relativity", "thermodynamics",
    ),
    technical_terms=(
        "velocity", "acceleration", "momentum", "torque", "frequency", "wavelength",
        "amplitude", "interference", "diffraction", "polarization",
    ),
    anchor_substring="force",
    keyword_markers=("physics",),
    topic_markers=("physics", "force", "energy"),
    keyword_mode="allow",
    allowed_keywords=frozenset(
        {
            "force", "energy", "mass", "velocity", "acceleration", "momentum", "work", "power",
            "pressure", "density", "gravity", "electricity", "magnetism", "current", "voltage",
            "resistance", "circuit", "wave", "frequency", "wavelength", "reflection",
            "refraction", "lens", "mirror", "nuclear", "radiation", "quantum", "relativity",
        }
    ),
    forced_term_allowances=frozenset({"reaction", "electron", "ion", "fusion"}),
)

MATHEMATICS = DomainRules(
    name="mathematics",
    keywords=(
        "equation", "function", "theorem", "proof", "calculus", "algebra", "geometry",
        "probability", "statistics", "matrix", "vector",
    ),
    technical_terms=(
        "derivative", "integral", "limit", "convergence", "divergence", "matrix", "eigenvalue",
        "vector", "scalar", "tensor",
    ),
)

GENERAL = DomainRules(name="general")

# Insertion order is the tie-break order for domain voting and topic detection.
DOMAIN_RULES: Dict[str, DomainRules] = {
    rules.name: rules for rules in (BIOLOGY, CHEMISTRY, PHYSICS, MATHEMATICS)
}


def get_rules(domain: str) -> DomainRules:
    return DOMAIN_RULES.get(domain, GENERAL)


def _match_topic(topic_name: str, attribute: str) -> Optional[DomainRules]:
    lower = topic_name.lower()
    for rules in DOMAIN_RULES.values():
        markers = getattr(rules, attribute)
        if any(marker in lower for marker in markers):
            return rules
    return None


def keyword_rules_for_topic(topic_name: str) -> DomainRules:
    """Rules whose keyword policy applies to a topic called ``topic_name``."""
    return _match_topic(topic_name, "keyword_markers") or GENERAL


def topic_rules_for_name(topic_name: str) -> DomainRules:
    """Rules used for forced-term filtering of a topic called ``topic_name``."""
    return _match_topic(topic_name, "topic_markers") or GENERAL


def all_anchors() -> List[Tuple[str, AnchorConcept]]:
    """Every registered anchor concept paired with its domain name."""
    return [(rules.name, anchor) for rules in DOMAIN_RULES.values() for anchor in rules.anchors]


def all_resolver_rules() -> List[ResolverRule]:
    return [rule for rules in DOMAIN_RULES.values() for rule in rules.resolver_rules]


__all__ = [
    "AnchorConcept",
    "DOMAIN_RULES",
    "DomainRules",
    "FORCED_TERMS",
    "ResolverRule",
    "SPECIAL_TERMS",
    "all_anchors",
    "all_resolver_rules",
    "get_rules",
    "keyword_rules_for_topic",
    "topic_rules_for_name",
]
