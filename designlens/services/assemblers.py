# designlens/services/assemblers.py

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from designlens.errors import NoContentError
from designlens.schemas import (
    ABTest,
    ABTestSuggestions,
    ComparisonAnalysis,
    DesignAnalysis,
    DesignPair,
    DesignRecommendation,
    FlowAnalysis,
    FlowStep,
    ImplementationRecommendation,
    RecommendationBundle,
    StrategyRecommendation,
    StrengthsWeaknesses,
)
from designlens.services.fields import (
    DEFAULT_PHASE,
    DEFAULT_RATING,
    DEFAULT_TIMELINE,
    PHASES,
    RATINGS,
    TIMELINES,
    extract_enum,
    extract_list,
    extract_text,
    match_label,
    split_blocks,
)
from designlens.services.sections import Section, SectionVocabulary, sections_by_name, split_sections
from designlens.services.text import normalize_line, normalize_lines

T = TypeVar("T")

_STANDALONE_NUMBER = re.compile(r"^[\d.]+$")
_BULLET = re.compile(r"^\s*[-•●*]\s+")
_STEP_START = re.compile(r"^\s*(?:\*\*|__)?\s*(?:\d+[.)]\s+|step\s+\d+\b)", re.IGNORECASE)
_IMPROVEMENTS_LABEL = re.compile(r"^improvements?\s*:?$", re.IGNORECASE)


@dataclass(frozen=True)
class AnalysisSchema:
    """Header vocabulary and placeholder text for one analysis kind."""

    kind: str
    vocabulary: SectionVocabulary
    placeholders: Mapping[str, str]

    @classmethod
    def build(cls, kind: str, headers: Mapping[str, Sequence[str]], placeholders: Mapping[str, str]) -> "AnalysisSchema":
        return cls(kind, SectionVocabulary.from_mapping(headers), dict(placeholders))


class AnalysisParser:
    """Section-and-field parser shared by every analysis kind."""

    def __init__(self, schema: AnalysisSchema) -> None:
        self.schema = schema
        self._echo = {
            alias.strip().lower()
            for _, aliases in schema.vocabulary.entries
            for alias in aliases
        }

    def split(self, raw: Optional[str]) -> Dict[str, Section]:
        if raw is None:
            raise NoContentError()
        found = sections_by_name(split_sections(raw, self.schema.vocabulary))
        missing = [key for key in self.schema.vocabulary.keys if key not in found]
        if missing:
            logger.debug("{} response is missing sections {}", self.schema.kind, missing)
        return found

    def is_header_echo(self, line: str) -> bool:
        folded = line.rstrip(":").strip().lower()
        return folded in self._echo or bool(_STANDALONE_NUMBER.match(line))

    def items(self, sections: Mapping[str, Section], key: str) -> List[str]:
        section = sections.get(key)
        if section is None:
            return []
        return [line for line in normalize_lines(section.body) if not self.is_header_echo(line)]

    def placeholder(self, key: str) -> str:
        return self.schema.placeholders[key]

    def items_or_placeholder(self, sections: Mapping[str, Section], key: str) -> List[str]:
        return or_default(self.items(sections, key), lambda: self.placeholder(key), key)


def or_default(values: List[T], make_default: Callable[[], T], key: str) -> List[T]:
    if values:
        return values
    logger.debug("Falling back to placeholder for '{}'", key)
    return [make_default()]


# --------------------------------------------
# Design review
# --------------------------------------------
DESIGN_SCHEMA = AnalysisSchema.build(
    "design",
    {
        "accessibility": ["Accessibility", "Accessibility Analysis"],
        "color_contrast": ["Color Contrast", "Colour Contrast"],
        "design_principles": ["Design Principles"],
        "recommendations": ["Recommendations"],
    },
    {
        "accessibility": "Unable to analyze accessibility features in the provided design",
        "color_contrast": "Unable to analyze color contrast in the provided design",
        "design_principles": "Unable to analyze design principles in the provided design",
        "recommendations": "Unable to generate specific recommendations for the provided design",
    },
)

_design_parser = AnalysisParser(DESIGN_SCHEMA)


def parse_design_analysis(raw: Optional[str]) -> DesignAnalysis:
    """Turn a design-review answer into a :class:`DesignAnalysis`."""
    sections = _design_parser.split(raw)
    return DesignAnalysis(
        accessibility=_design_parser.items_or_placeholder(sections, "accessibility"),
        color_contrast=_design_parser.items_or_placeholder(sections, "color_contrast"),
        design_principles=_design_parser.items_or_placeholder(sections, "design_principles"),
        recommendations=_design_parser.items_or_placeholder(sections, "recommendations"),
    )


# --------------------------------------------
# Design comparison
# --------------------------------------------
COMPARISON_SCHEMA = AnalysisSchema.build(
    "comparison",
    {
        "design_comparison": ["Design Comparison", "Design Comparison and Analysis"],
        "your_strengths": ["Your Design Strengths", "Your Design's Strengths"],
        "your_weaknesses": ["Your Design Weaknesses", "Your Design's Weaknesses"],
        "competitor_strengths": ["Competitor Design Strengths", "Competitor's Design Strengths", "Competitor Strengths"],
        "competitor_weaknesses": ["Competitor Design Weaknesses", "Competitor's Design Weaknesses", "Competitor Weaknesses"],
        "designer_tests": ["Designer A/B Test Suggestions", "Designer A/B Tests", "Designer A/B Test"],
        "product_manager_tests": [
            "Product Manager A/B Test Suggestions",
            "Product Manager A/B Tests",
            "Product Manager A/B Test",
        ],
        "recommendations": ["Recommendations"],
    },
    {
        "design_comparison": "Design comparison not available",
        "your_strengths": "No strengths identified for your design",
        "your_weaknesses": "No weaknesses identified for your design",
        "competitor_strengths": "No strengths identified for the competitor design",
        "competitor_weaknesses": "No weaknesses identified for the competitor design",
        "designer_tests": "No designer A/B tests suggested",
        "product_manager_tests": "No product manager A/B tests suggested",
        "recommendations": "No recommendations available",
    },
)

RECOMMENDATION_GROUPS = SectionVocabulary.from_mapping(
    {
        "design": ["Design Recommendations", "Design"],
        "strategy": ["Strategy Recommendations", "Strategic Recommendations", "Strategy"],
        "implementation": ["Implementation Recommendations", "Implementation Plan", "Implementation"],
    }
)

AB_TEST_LABELS = ("Test Name", "Hypothesis", "Metrics", "Impact", "Complexity", "Priority")
DESIGN_REC_LABELS = ("Recommendation", "Details", "Priority", "Effort")
STRATEGY_REC_LABELS = ("Recommendation", "Details", "Impact", "Timeline")
IMPLEMENTATION_REC_LABELS = ("Recommendation", "Phase", "Complexity", "Steps", "Resources")

NOT_SPECIFIED = "Not specified"

_comparison_parser = AnalysisParser(COMPARISON_SCHEMA)


def parse_ab_test(block: str) -> ABTest:
    """Parse one ``Test Name:`` block into an :class:`ABTest`."""
    return ABTest(
        name=extract_text(block, "Test Name", AB_TEST_LABELS) or "Untitled test",
        hypothesis=extract_text(block, "Hypothesis", AB_TEST_LABELS) or NOT_SPECIFIED,
        metrics=extract_list(block, "Metrics", AB_TEST_LABELS) or [NOT_SPECIFIED],
        impact=extract_enum(block, "Impact", RATINGS, DEFAULT_RATING, AB_TEST_LABELS),
        complexity=extract_enum(block, "Complexity", RATINGS, DEFAULT_RATING, AB_TEST_LABELS),
        priority=extract_enum(block, "Priority", RATINGS, DEFAULT_RATING, AB_TEST_LABELS),
    )


def _ab_tests(sections: Mapping[str, Section], key: str) -> List[ABTest]:
    section = sections.get(key)
    body = section.body if section else ""
    loose, blocks = split_blocks(body, "Test Name")

    if blocks:
        tests = [parse_ab_test(block) for block in blocks]
    else:
        # Bare bullet list: every line names a test, the rest stays default.
        tests = [
            ABTest(name=line, hypothesis=NOT_SPECIFIED, metrics=[NOT_SPECIFIED])
            for line in loose
            if not _comparison_parser.is_header_echo(line)
        ]

    return or_default(
        tests,
        lambda: ABTest(
            name=_comparison_parser.placeholder(key),
            hypothesis=NOT_SPECIFIED,
            metrics=[NOT_SPECIFIED],
        ),
        key,
    )


def _design_recommendation(block: str) -> DesignRecommendation:
    return DesignRecommendation(
        title=extract_text(block, "Recommendation", DESIGN_REC_LABELS) or NOT_SPECIFIED,
        details=extract_text(block, "Details", DESIGN_REC_LABELS),
        priority=extract_enum(block, "Priority", RATINGS, DEFAULT_RATING, DESIGN_REC_LABELS),
        effort=extract_enum(block, "Effort", RATINGS, DEFAULT_RATING, DESIGN_REC_LABELS),
    )


def _strategy_recommendation(block: str) -> StrategyRecommendation:
    return StrategyRecommendation(
        title=extract_text(block, "Recommendation", STRATEGY_REC_LABELS) or NOT_SPECIFIED,
        details=extract_text(block, "Details", STRATEGY_REC_LABELS),
        impact=extract_enum(block, "Impact", RATINGS, DEFAULT_RATING, STRATEGY_REC_LABELS),
        timeline=extract_enum(block, "Timeline", TIMELINES, DEFAULT_TIMELINE, STRATEGY_REC_LABELS),
    )


def _implementation_recommendation(block: str) -> ImplementationRecommendation:
    return ImplementationRecommendation(
        title=extract_text(block, "Recommendation", IMPLEMENTATION_REC_LABELS) or NOT_SPECIFIED,
        phase=extract_enum(block, "Phase", PHASES, DEFAULT_PHASE, IMPLEMENTATION_REC_LABELS),
        complexity=extract_enum(block, "Complexity", RATINGS, DEFAULT_RATING, IMPLEMENTATION_REC_LABELS),
        steps=extract_list(block, "Steps", IMPLEMENTATION_REC_LABELS) or [NOT_SPECIFIED],
        resources=extract_list(block, "Resources", IMPLEMENTATION_REC_LABELS) or [NOT_SPECIFIED],
    )


def _recommendation_items(body: str, parse_block: Callable[[str], T], from_title: Callable[[str], T]) -> List[T]:
    loose, blocks = split_blocks(body, "Recommendation")
    if blocks:
        return [parse_block(block) for block in blocks]
    return [from_title(line) for line in loose if not _comparison_parser.is_header_echo(line)]


def _recommendations(sections: Mapping[str, Section]) -> RecommendationBundle:
    section = sections.get("recommendations")
    body = section.body if section else ""

    groups: Dict[Optional[str], str] = {}
    for part in split_sections(body, RECOMMENDATION_GROUPS):
        groups.setdefault(part.name, part.body)

    named = {key: text for key, text in groups.items() if key is not None}
    if not named:
        # No design/strategy/implementation split: treat the whole section
        # as design recommendations.
        named = {"design": groups.get(None, "")}

    design = _recommendation_items(
        named.get("design", ""),
        _design_recommendation,
        lambda title: DesignRecommendation(title=title),
    )
    strategy = _recommendation_items(
        named.get("strategy", ""),
        _strategy_recommendation,
        lambda title: StrategyRecommendation(title=title),
    )
    implementation = _recommendation_items(
        named.get("implementation", ""),
        _implementation_recommendation,
        lambda title: ImplementationRecommendation(title=title, steps=[NOT_SPECIFIED], resources=[NOT_SPECIFIED]),
    )

    return RecommendationBundle(
        design=or_default(
            design,
            lambda: DesignRecommendation(title="No design recommendations available"),
            "recommendations.design",
        ),
        strategy=or_default(
            strategy,
            lambda: StrategyRecommendation(title="No strategy recommendations available"),
            "recommendations.strategy",
        ),
        implementation=or_default(
            implementation,
            lambda: ImplementationRecommendation(
                title="No implementation recommendations available",
                steps=[NOT_SPECIFIED],
                resources=[NOT_SPECIFIED],
            ),
            "recommendations.implementation",
        ),
    )


def parse_comparison_analysis(raw: Optional[str]) -> ComparisonAnalysis:
    """Turn a two-design comparison answer into a :class:`ComparisonAnalysis`."""
    sections = _comparison_parser.split(raw)
    items = _comparison_parser.items_or_placeholder

    return ComparisonAnalysis(
        design_comparison=items(sections, "design_comparison"),
        strengths_weaknesses=DesignPair(
            your_design=StrengthsWeaknesses(
                strengths=items(sections, "your_strengths"),
                weaknesses=items(sections, "your_weaknesses"),
            ),
            competitor_design=StrengthsWeaknesses(
                strengths=items(sections, "competitor_strengths"),
                weaknesses=items(sections, "competitor_weaknesses"),
            ),
        ),
        ab_test_suggestions=ABTestSuggestions(
            designer=_ab_tests(sections, "designer_tests"),
            product_manager=_ab_tests(sections, "product_manager_tests"),
        ),
        recommendations=_recommendations(sections),
    )


# --------------------------------------------
# User flow
# --------------------------------------------
FLOW_SCHEMA = AnalysisSchema.build(
    "flow",
    {
        "current_flow": ["Current Flow Analysis", "Current Flow"],
        "improved_flow": ["Improved Flow Suggestions", "Improved Flow"],
        "general_suggestions": ["General Suggestions"],
        "potential_issues": ["Potential Issues"],
        "best_practices": ["Best Practices"],
        "competitor_insights": ["Competitor Insights"],
    },
    {
        "current_flow": "Flow analysis not available",
        "improved_flow": "Improvement suggestions not available",
        "general_suggestions": "No general suggestions available",
        "potential_issues": "No specific issues identified",
        "best_practices": "Best practices analysis not available",
        "competitor_insights": "No competitor insights available",
    },
)

_flow_parser = AnalysisParser(FLOW_SCHEMA)


def _is_step_start(line: str) -> bool:
    return bool(_STEP_START.match(_BULLET.sub("", line, count=1)))


def parse_flow_steps(body: str) -> List[FlowStep]:
    """
    Build ordered steps from a flow section.

    Numbered lines (or "Step N") open a step. Bullet lines that follow are
    collected as its improvements, plain lines as its rationale. Without any
    numbered line every line is a step of its own.
    """
    lines = [line for line in (body or "").split("\n") if normalize_line(line)]
    if not any(_is_step_start(line) for line in lines):
        return [FlowStep(step=normalize_line(line)) for line in lines]

    drafts: List[Tuple[str, List[str], List[str]]] = []
    for line in lines:
        text = normalize_line(line)
        if _is_step_start(line) or not drafts:
            drafts.append((text, [], []))
            continue

        _, improvements, rationale = drafts[-1]
        if _IMPROVEMENTS_LABEL.match(text):
            continue
        if _BULLET.match(line):
            improvements.append(text)
        else:
            labelled = match_label(text, "Rationale")
            if labelled is None:
                rationale.append(text)
            elif labelled.strip():
                rationale.append(labelled.strip())

    return [
        FlowStep(
            step=step,
            improvements=improvements or None,
            rationale=" ".join(rationale) or None,
        )
        for step, improvements, rationale in drafts
    ]


def _flow_steps(sections: Mapping[str, Section], key: str) -> List[FlowStep]:
    section = sections.get(key)
    steps = parse_flow_steps(section.body) if section else []
    steps = [step for step in steps if not _flow_parser.is_header_echo(step.step)]
    return or_default(steps, lambda: FlowStep(step=_flow_parser.placeholder(key)), key)


def parse_flow_analysis(raw: Optional[str], from_image: bool = False) -> FlowAnalysis:
    """
    Turn a user-flow answer into a :class:`FlowAnalysis`.

    Competitor insights are only read for screenshot-based analyses; for
    text input the field stays ``None``.
    """
    sections = _flow_parser.split(raw)
    items = _flow_parser.items_or_placeholder

    return FlowAnalysis(
        current_flow=_flow_steps(sections, "current_flow"),
        improved_flow=_flow_steps(sections, "improved_flow"),
        general_suggestions=items(sections, "general_suggestions"),
        potential_issues=items(sections, "potential_issues"),
        best_practices=items(sections, "best_practices"),
        competitor_insights=items(sections, "competitor_insights") if from_image else None,
    )
